from sqlalchemy import Column, Integer, String, Numeric, DateTime
from commission_tracker.core.database import Base
from commission_tracker.core.time import utc_now


class Statement(Base):
    """One ingested commission statement and the figures extracted from it."""
    __tablename__ = "statements"

    id = Column(Integer, primary_key=True, index=True)

    # File info
    file_name = Column(String, nullable=False)
    file_type = Column(String, nullable=False)

    # Carrier name - plain string, matched to carriers.name without an FK
    carrier = Column(String, nullable=False, index=True)
    month = Column(String, nullable=False)  # "March 2024"

    # Financial
    premium = Column(Numeric(12, 2), nullable=False, default=0)
    commission = Column(Numeric(12, 2), nullable=False, default=0)
    lives = Column(Integer, nullable=False, default=0)
    confidence = Column(Numeric(5, 4), nullable=False, default=0)  # 0.9312 = 93.12%

    # Set client side so rows inserted in the same second still order correctly
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
