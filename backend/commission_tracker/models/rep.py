from sqlalchemy import Column, Integer, String, Numeric, DateTime
from commission_tracker.core.database import Base
from commission_tracker.core.time import utc_now


class Rep(Base):
    __tablename__ = "reps"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)

    commission_rate = Column(Numeric(5, 4), nullable=False, default=0)  # 0.1500 = 15%
    total_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    total_lives = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
