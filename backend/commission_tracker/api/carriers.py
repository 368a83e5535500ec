from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from commission_tracker.core.database import get_db
from commission_tracker.schemas.carrier import CarrierList
from commission_tracker.services.store import StatementStore, StoreError

router = APIRouter(prefix="/api/carriers", tags=["carriers"])


@router.get("", response_model=CarrierList)
def list_carriers(db: Session = Depends(get_db)):
    """All carriers by name."""
    try:
        carriers = StatementStore(db).list_carriers()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"carriers": carriers}
