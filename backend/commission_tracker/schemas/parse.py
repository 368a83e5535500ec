from pydantic import BaseModel, Field
from typing import Optional


class ParsedResult(BaseModel):
    """Extractor output, mirrored into a statements row. Serialized with camelCase keys."""

    carrier: str
    premium: int = Field(..., ge=0)
    commission: int = Field(..., ge=0)
    lives: int = Field(..., ge=0)
    month: str
    file_name: str = Field(..., alias="fileName")
    file_type: str = Field(..., alias="fileType")
    confidence: float = Field(..., ge=0, le=1)

    class Config:
        populate_by_name = True


class ParseRequest(BaseModel):
    # Optional so a missing field is a 400 from the route, not a 422
    file_content: Optional[str] = Field(None, alias="fileContent")
    file_name: Optional[str] = Field(None, alias="fileName")
    file_type: Optional[str] = Field(None, alias="fileType")

    class Config:
        populate_by_name = True


class ParseResponse(BaseModel):
    success: bool
    data: Optional[ParsedResult] = None
    error: Optional[str] = None
