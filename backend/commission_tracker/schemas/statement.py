from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class StatementOut(BaseModel):
    id: int
    file_name: str
    file_type: str
    carrier: str
    premium: float = Field(..., ge=0)
    commission: float = Field(..., ge=0)
    lives: int = Field(..., ge=0)
    month: str
    confidence: float = Field(..., ge=0, le=1)
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class StatementList(BaseModel):
    statements: list[StatementOut]
