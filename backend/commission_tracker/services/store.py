import enum
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from commission_tracker.core.time import utc_now
from commission_tracker.models.carrier import Carrier, CarrierStatus
from commission_tracker.models.rep import Rep
from commission_tracker.models.statement import Statement
from commission_tracker.schemas.parse import ParsedResult

logger = logging.getLogger(__name__)


class CarrierDatePolicy(str, enum.Enum):
    OVERWRITE_ALWAYS = "overwrite_always"  # every upload resets setup/first-statement dates
    SET_ONCE = "set_once"                  # dates written only while still empty


class StoreError(Exception):
    """Backend read/write failure. ``message`` is safe to return to API clients."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StatementStore:
    """
    Persistence façade over the statements, carriers and reps tables.
    Every backend error is rolled back and surfaced as StoreError; nothing is retried.
    """

    def __init__(self, db: Session):
        self.db = db

    # ── Reads ────────────────────────────────────────────────────────

    def list_statements(self) -> List[Statement]:
        """Newest first."""
        try:
            return (
                self.db.query(Statement)
                .order_by(Statement.created_at.desc(), Statement.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("listing statements", e) from e

    def list_carriers(self) -> List[Carrier]:
        try:
            return self.db.query(Carrier).order_by(Carrier.name.asc()).all()
        except SQLAlchemyError as e:
            raise self._fail("listing carriers", e) from e

    def list_reps(self) -> List[Rep]:
        try:
            return self.db.query(Rep).order_by(Rep.name.asc()).all()
        except SQLAlchemyError as e:
            raise self._fail("listing reps", e) from e

    # ── Writes ───────────────────────────────────────────────────────

    def insert_statement(self, result: ParsedResult) -> Statement:
        try:
            statement = self._add_statement(result)
            self.db.commit()
            self.db.refresh(statement)
            return statement
        except SQLAlchemyError as e:
            raise self._fail("saving statement", e) from e

    def upsert_carrier_by_name(
        self,
        name: str,
        now: Optional[datetime] = None,
        policy: CarrierDatePolicy = CarrierDatePolicy.OVERWRITE_ALWAYS,
    ) -> Carrier:
        try:
            self._apply_carrier_upsert(name, now or utc_now(), policy)
            self.db.commit()
            return self._get_carrier(name)
        except SQLAlchemyError as e:
            raise self._fail("upserting carrier", e) from e

    def record_parse(
        self,
        result: ParsedResult,
        policy: CarrierDatePolicy = CarrierDatePolicy.OVERWRITE_ALWAYS,
        now: Optional[datetime] = None,
    ) -> Statement:
        """Insert the statement and upsert its carrier in a single transaction."""
        try:
            statement = self._add_statement(result)
            self._apply_carrier_upsert(result.carrier, now or utc_now(), policy)
            self.db.commit()
            self.db.refresh(statement)
            return statement
        except SQLAlchemyError as e:
            raise self._fail("recording parse result", e) from e

    # ── Helpers ──────────────────────────────────────────────────────

    def _add_statement(self, result: ParsedResult) -> Statement:
        statement = Statement(
            file_name=result.file_name,
            file_type=result.file_type,
            carrier=result.carrier,
            premium=result.premium,
            commission=result.commission,
            lives=result.lives,
            month=result.month,
            confidence=result.confidence,
        )
        self.db.add(statement)
        return statement

    def _apply_carrier_upsert(self, name: str, now: datetime, policy: CarrierDatePolicy) -> None:
        """One INSERT ... ON CONFLICT (name) DO UPDATE; no read before the write."""
        dialect = self.db.get_bind().dialect.name
        insert = postgresql_insert if dialect == "postgresql" else sqlite_insert

        stmt = insert(Carrier).values(
            name=name,
            status=CarrierStatus.ACTIVE.value,
            setup_date=now,
            first_statement_date=now,
        )
        if policy == CarrierDatePolicy.OVERWRITE_ALWAYS:
            setup_date = stmt.excluded.setup_date
            first_statement_date = stmt.excluded.first_statement_date
        else:
            setup_date = func.coalesce(Carrier.setup_date, stmt.excluded.setup_date)
            first_statement_date = func.coalesce(Carrier.first_statement_date, stmt.excluded.first_statement_date)

        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                "status": CarrierStatus.ACTIVE.value,
                "setup_date": setup_date,
                "first_statement_date": first_statement_date,
            },
        )
        self.db.execute(stmt)

    def _get_carrier(self, name: str) -> Carrier:
        return self.db.query(Carrier).filter(Carrier.name == name).one()

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        logger.error(f"Store error while {action}: {exc}")
        return StoreError(f"Database error while {action}")
