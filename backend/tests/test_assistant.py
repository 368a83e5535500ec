"""Tests for the keyword assistant."""
import pytest

from commission_tracker.schemas.parse import ParsedResult
from commission_tracker.services.assistant import EMPTY_BATCH_REPLY, AssistantStub, answer


@pytest.fixture
def batch():
    return [
        ParsedResult(carrier="Aetna", premium=100000, commission=10000, lives=1000,
                     month="March 2024", file_name="aetna_mar.pdf", file_type="application/pdf",
                     confidence=0.9),
        ParsedResult(carrier="Cigna", premium=60000, commission=6000, lives=600,
                     month="April 2024", file_name="cigna_apr.pdf", file_type="application/pdf",
                     confidence=0.95),
        ParsedResult(carrier="Aetna", premium=40000, commission=4000, lives=400,
                     month="March 2024", file_name="aetna_mar_2.pdf", file_type="application/pdf",
                     confidence=0.88),
    ]


def test_totals(batch):
    assert answer("What's the total?", batch) == (
        "Across 3 statements, total premium is $200,000 and total commission is $20,000."
    )
    assert answer("sum it up", batch).startswith("Across 3 statements")


def test_carriers_listed_once_in_first_seen_order(batch):
    assert answer("Which CARRIERS are in here?", batch) == "Carriers in this batch: Aetna, Cigna."


def test_months(batch):
    assert answer("what period does this cover", batch) == "Reporting periods covered: March 2024, April 2024."


def test_commission_rate(batch):
    assert answer("average rate?", batch) == (
        "Average commission rate is 10.00% ($20,000 commission on $200,000 premium)."
    )


def test_lives(batch):
    assert answer("how many subscribers", batch) == "Total covered lives: 2,000."


def test_total_beats_later_keywords(batch):
    assert answer("total lives", batch).startswith("Across 3 statements")


def test_generic_summary(batch):
    reply = answer("hello", batch)
    assert reply.startswith("I have 3 parsed statements from 2 carriers totalling $20,000 in commission.")


def test_empty_batch():
    assert answer("total?", []) == EMPTY_BATCH_REPLY


@pytest.mark.asyncio
async def test_stub_responds_after_delay(batch):
    reply = await AssistantStub(delay=0).respond("lives", batch[:1])
    assert reply == "Total covered lives: 1,000."
