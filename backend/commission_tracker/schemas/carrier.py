from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CarrierOut(BaseModel):
    id: int
    name: str
    status: str
    setup_date: Optional[datetime] = None
    first_statement_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CarrierList(BaseModel):
    carriers: list[CarrierOut]
