"""Keyword-matching assistant over the statements parsed in the current session."""
import asyncio
from typing import Optional, Sequence

from commission_tracker.core.config import settings
from commission_tracker.schemas.parse import ParsedResult

GREETING = "Need help? Ask me anything about a statement."
EMPTY_BATCH_REPLY = "No statements have been parsed yet. Upload a PDF or Excel statement and ask again."


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _unique(values: Sequence[str]) -> list:
    """Distinct values in first-seen order."""
    return list(dict.fromkeys(values))


def answer(message: str, results: Sequence[ParsedResult]) -> str:
    if not results:
        return EMPTY_BATCH_REPLY

    text = message.lower()
    premium = sum(r.premium for r in results)
    commission = sum(r.commission for r in results)
    lives = sum(r.lives for r in results)
    carriers = _unique([r.carrier for r in results])
    months = _unique([r.month for r in results])

    if "total" in text or "sum" in text:
        return (
            f"Across {_plural(len(results), 'statement')}, total premium is ${premium:,} "
            f"and total commission is ${commission:,}."
        )
    if "carrier" in text:
        return f"Carriers in this batch: {', '.join(carriers)}."
    if "month" in text or "period" in text:
        return f"Reporting periods covered: {', '.join(months)}."
    if "commission" in text or "rate" in text:
        rate = commission / premium * 100 if premium else 0.0
        return (
            f"Average commission rate is {rate:.2f}% "
            f"(${commission:,} commission on ${premium:,} premium)."
        )
    if "lives" in text or "subscribers" in text:
        return f"Total covered lives: {lives:,}."
    return (
        f"I have {_plural(len(results), 'parsed statement')} from "
        f"{_plural(len(carriers), 'carrier')} totalling ${commission:,} in commission. "
        "Ask me about totals, carriers, months, commission rates or lives."
    )


class AssistantStub:
    """Answers with a fixed simulated delay; no language understanding."""

    def __init__(self, delay: Optional[float] = None):
        self.delay = settings.ASSISTANT_RESPONSE_DELAY if delay is None else delay

    async def respond(self, message: str, results: Sequence[ParsedResult]) -> str:
        await asyncio.sleep(self.delay)
        return answer(message, results)
