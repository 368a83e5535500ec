from sqlalchemy import Column, Integer, String, DateTime, Text
from commission_tracker.core.database import Base
from commission_tracker.core.time import utc_now
import enum


class CarrierStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    FLAGGED = "flagged"


class Carrier(Base):
    """Insurance carrier partner, upserted by name whenever a statement names it."""
    __tablename__ = "carriers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    # Use String to avoid enum type migrations when statuses change
    status = Column(String, default=CarrierStatus.PENDING.value, nullable=False)

    setup_date = Column(DateTime(timezone=True), nullable=True)
    first_statement_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
