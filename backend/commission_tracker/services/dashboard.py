"""Dashboard summary metrics, the client that fetches their inputs, and page state."""
import asyncio
import logging
from typing import List, Optional, Sequence, Set, Tuple

import httpx

from commission_tracker.core.config import settings
from commission_tracker.models.carrier import CarrierStatus
from commission_tracker.schemas.carrier import CarrierOut
from commission_tracker.schemas.dashboard import DashboardSummary
from commission_tracker.schemas.parse import ParsedResult
from commission_tracker.schemas.rep import RepOut
from commission_tracker.schemas.statement import StatementOut

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5
TOP_PERFORMER_LIMIT = 3


def summarize(
    statements: Sequence[StatementOut],
    carriers: Sequence[CarrierOut],
    reps: Sequence[RepOut],
) -> DashboardSummary:
    """Fold the three collections into dashboard metrics.

    ``statements`` is expected newest first and ``reps`` in name order, as the
    store returns them. Top performers are simply the first reps in that
    order, not a ranking by earnings.
    """
    return DashboardSummary(
        total_commission=sum(float(s.commission) for s in statements),
        total_lives=sum(int(s.lives) for s in statements),
        active_carriers=sum(1 for c in carriers if c.status == CarrierStatus.ACTIVE.value),
        statements_processed=len(statements),
        recent_activity=list(statements[:RECENT_ACTIVITY_LIMIT]),
        top_performers=list(reps[:TOP_PERFORMER_LIMIT]),
    )


class DashboardClient:
    """Fetches statements, carriers and reps from the API concurrently."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get(self, path: str, key: str) -> list:
        response = await self.client.get(path)
        response.raise_for_status()
        return response.json()[key]

    async def fetch(self) -> Tuple[List[StatementOut], List[CarrierOut], List[RepOut]]:
        statements, carriers, reps = await asyncio.gather(
            self._get("/api/statements", "statements"),
            self._get("/api/carriers", "carriers"),
            self._get("/api/reps", "reps"),
        )
        return (
            [StatementOut.model_validate(s) for s in statements],
            [CarrierOut.model_validate(c) for c in carriers],
            [RepOut.model_validate(r) for r in reps],
        )

    async def summary(self) -> DashboardSummary:
        return summarize(*await self.fetch())


class DashboardSession:
    """
    Page-level state: last fetched snapshot, the batch parsed in this session,
    and the files still being processed. Upload pipeline callbacks plug
    straight into ``handle_parsed_data`` and ``handle_file_processed``.
    """

    def __init__(self, client: DashboardClient, refresh_delay: Optional[float] = None):
        self.client = client
        self.refresh_delay = settings.DASHBOARD_REFRESH_DELAY if refresh_delay is None else refresh_delay
        self.statements: List[StatementOut] = []
        self.carriers: List[CarrierOut] = []
        self.reps: List[RepOut] = []
        self.summary: Optional[DashboardSummary] = None
        self.parsed_results: List[ParsedResult] = []
        self.processing_files: List[str] = []
        self._pending_refreshes: Set[asyncio.Task] = set()

    async def refresh(self) -> Optional[DashboardSummary]:
        """Refetch everything; on failure keep the previous snapshot."""
        try:
            statements, carriers, reps = await self.client.fetch()
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Error fetching data: {e}")
            return self.summary

        self.statements, self.carriers, self.reps = statements, carriers, reps
        self.summary = summarize(statements, carriers, reps)
        return self.summary

    def start_processing(self, names: Sequence[str]) -> None:
        for name in names:
            if name not in self.processing_files:
                self.processing_files.append(name)

    def handle_parsed_data(self, result: ParsedResult) -> None:
        self.parsed_results.append(result)
        task = asyncio.get_running_loop().create_task(self._delayed_refresh())
        self._pending_refreshes.add(task)
        task.add_done_callback(self._pending_refreshes.discard)

    def handle_file_processed(self, name: str) -> None:
        if name in self.processing_files:
            self.processing_files.remove(name)

    async def wait_for_refresh(self) -> None:
        """Block until every scheduled refresh has run."""
        while self._pending_refreshes:
            await asyncio.gather(*list(self._pending_refreshes))

    async def _delayed_refresh(self) -> None:
        # Give the carrier upsert a moment to land before refetching
        await asyncio.sleep(self.refresh_delay)
        await self.refresh()
