from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class RepOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    commission_rate: float = Field(..., ge=0, le=1)
    total_earnings: float
    total_lives: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RepList(BaseModel):
    reps: list[RepOut]
