from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from commission_tracker.core.database import get_db
from commission_tracker.schemas.rep import RepList
from commission_tracker.services.store import StatementStore, StoreError

router = APIRouter(prefix="/api/reps", tags=["reps"])


@router.get("", response_model=RepList)
def list_reps(db: Session = Depends(get_db)):
    try:
        reps = StatementStore(db).list_reps()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"reps": reps}
