from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from commission_tracker.core.database import get_db
from commission_tracker.schemas.statement import StatementList
from commission_tracker.services.store import StatementStore, StoreError

router = APIRouter(prefix="/api/statements", tags=["statements"])


@router.get("", response_model=StatementList)
def list_statements(db: Session = Depends(get_db)):
    """All statements, newest first."""
    try:
        statements = StatementStore(db).list_statements()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"statements": statements}
