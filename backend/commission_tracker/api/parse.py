"""Statement parse endpoint.

Persistence failures are logged and swallowed: the client still gets
``success: true`` with the extracted figures even if nothing was stored.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from commission_tracker.core.config import settings
from commission_tracker.core.database import get_db
from commission_tracker.schemas.parse import ParseRequest, ParseResponse
from commission_tracker.services.extractor import ExtractionError, Extractor, MockExtractor
from commission_tracker.services.store import CarrierDatePolicy, StatementStore, StoreError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/parse", tags=["parse"])


def get_extractor() -> Extractor:
    return MockExtractor()


def get_carrier_date_policy() -> CarrierDatePolicy:
    return CarrierDatePolicy(settings.CARRIER_DATE_POLICY)


@router.post("", response_model=ParseResponse, response_model_exclude_none=True)
def parse_statement(
    request: ParseRequest,
    db: Session = Depends(get_db),
    extractor: Extractor = Depends(get_extractor),
    policy: CarrierDatePolicy = Depends(get_carrier_date_policy),
):
    """Extract figures from an uploaded statement and record them."""
    if not request.file_name or not request.file_type:
        raise HTTPException(status_code=400, detail="Missing required fields: fileName, fileType")

    try:
        parsed = extractor.extract(request.file_content, request.file_name, request.file_type)
    except ExtractionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        StatementStore(db).record_parse(parsed, policy=policy)
    except StoreError as e:
        # Continue with the extracted data even if the DB write failed
        logger.error(f"Database error saving {parsed.file_name}: {e.message}")

    return ParseResponse(success=True, data=parsed)
