"""HTTP client shared by the upload pipeline and the dashboard."""
from typing import Optional
import httpx
from commission_tracker.core.config import settings


def build_client(
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url or settings.API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        transport=transport,
    )
