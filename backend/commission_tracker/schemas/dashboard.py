from pydantic import BaseModel
from commission_tracker.schemas.statement import StatementOut
from commission_tracker.schemas.rep import RepOut


class DashboardSummary(BaseModel):
    total_commission: float
    total_lives: int
    active_carriers: int
    statements_processed: int
    recent_activity: list[StatementOut]
    top_performers: list[RepOut]
