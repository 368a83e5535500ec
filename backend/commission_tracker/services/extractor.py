"""Statement extraction.

The pipeline only depends on the ``Extractor`` interface. ``MockExtractor``
fabricates figures from the filename until a real document parser
(OCR / table extraction) is plugged in.
"""
import logging
import math
import random
from typing import Optional, Protocol

from commission_tracker.schemas.parse import ParsedResult

logger = logging.getLogger(__name__)

# Ordered: first alias found in the lower-cased filename wins
CARRIER_ALIASES = [
    (("bcbs", "blue cross"), "Blue Cross Blue Shield"),
    (("aetna",), "Aetna"),
    (("unitedhealth", "united health"), "UnitedHealth Group"),
    (("cigna",), "Cigna"),
    (("humana",), "Humana"),
    (("kaiser",), "Kaiser Permanente"),
    (("anthem",), "Anthem"),
    (("metlife",), "MetLife"),
    (("prudential",), "Prudential"),
    (("guardian",), "Guardian"),
]
UNKNOWN_CARRIER = "Unknown Carrier"

# Calendar order: "jan" is checked before "mar" etc.
MONTH_ABBREVIATIONS = [
    ("jan", "January"),
    ("feb", "February"),
    ("mar", "March"),
    ("apr", "April"),
    ("may", "May"),
    ("jun", "June"),
    ("jul", "July"),
    ("aug", "August"),
    ("sep", "September"),
    ("oct", "October"),
    ("nov", "November"),
    ("dec", "December"),
]
STATEMENT_YEAR = 2024
DEFAULT_MONTH = f"January {STATEMENT_YEAR}"

MIN_PREMIUM = 50_000
MAX_PREMIUM = 250_000  # exclusive
MIN_COMMISSION_RATE = 0.05
MAX_COMMISSION_RATE = 0.20  # exclusive
MIN_CONFIDENCE = 0.85
PREMIUM_PER_LIFE = 100  # rough estimate: $100 per covered life


class ExtractionError(Exception):
    """Raised when a document cannot be turned into a ParsedResult."""


class Extractor(Protocol):
    def extract(self, content: Optional[str], file_name: str, file_type: str) -> ParsedResult:
        ...


def detect_carrier(file_name: str) -> str:
    """Carrier display name from the filename, or 'Unknown Carrier'."""
    name = file_name.lower()
    for aliases, carrier in CARRIER_ALIASES:
        if any(alias in name for alias in aliases):
            return carrier
    return UNKNOWN_CARRIER


def detect_month(file_name: str) -> str:
    """Reporting month label from the filename, e.g. 'March 2024'."""
    name = file_name.lower()
    for abbreviation, month in MONTH_ABBREVIATIONS:
        if abbreviation in name:
            return f"{month} {STATEMENT_YEAR}"
    return DEFAULT_MONTH


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class MockExtractor:
    """Filename-keyed stand-in for a real statement parser.

    Carrier and month come from substrings of the filename; premium,
    commission rate and confidence are random. Pass a seeded
    ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def extract(self, content: Optional[str], file_name: str, file_type: str) -> ParsedResult:
        if not file_name:
            raise ExtractionError("File name is required for extraction")

        premium = MIN_PREMIUM + math.floor(self.rng.random() * (MAX_PREMIUM - MIN_PREMIUM))
        rate = MIN_COMMISSION_RATE + self.rng.random() * (MAX_COMMISSION_RATE - MIN_COMMISSION_RATE)
        confidence = MIN_CONFIDENCE + self.rng.random() * (1.0 - MIN_CONFIDENCE)

        result = ParsedResult(
            carrier=detect_carrier(file_name),
            premium=premium,
            commission=round_half_up(premium * rate),
            lives=premium // PREMIUM_PER_LIFE,
            month=detect_month(file_name),
            file_name=file_name,
            file_type=file_type,
            confidence=confidence,
        )
        logger.info(
            f"Extracted {file_name}: carrier={result.carrier} month={result.month} "
            f"premium={result.premium} commission={result.commission}"
        )
        return result
