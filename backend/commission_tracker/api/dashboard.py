from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from commission_tracker.core.database import get_db
from commission_tracker.schemas.carrier import CarrierOut
from commission_tracker.schemas.dashboard import DashboardSummary
from commission_tracker.schemas.rep import RepOut
from commission_tracker.schemas.statement import StatementOut
from commission_tracker.services.dashboard import summarize
from commission_tracker.services.store import StatementStore, StoreError

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
def get_dashboard(db: Session = Depends(get_db)):
    """Summary metrics over everything stored so far."""
    store = StatementStore(db)
    try:
        statements = store.list_statements()
        carriers = store.list_carriers()
        reps = store.list_reps()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return summarize(
        [StatementOut.model_validate(s) for s in statements],
        [CarrierOut.model_validate(c) for c in carriers],
        [RepOut.model_validate(r) for r in reps],
    )
