from __future__ import annotations

import re
from dataclasses import dataclass

# Tags
UPI_TAG = "UPI"

# Normalization
STRIPPED_CHARACTERS = re.compile(r"[,₹]")

# Driver codes
DRIVER_MIN_ORDER_NOT_MET = "MIN_ORDER_NOT_MET"
DRIVER_NO_DISCOUNT = "NO_DISCOUNT"
DRIVER_FLAT = "FLAT_DISCOUNT"
DRIVER_CASHBACK = "CASHBACK"
DRIVER_GENERIC = "GENERIC_DISCOUNT"
DRIVER_PERCENT = "PERCENT_DISCOUNT"


@dataclass(frozen=True)
class ExtractionRule:
    """One independent pattern that fills a single ParsedDiscountTerms field."""

    field_name: str
    pattern: re.Pattern[str]
    group: int = 1


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE | re.ASCII)


# Evaluated in order against the normalized summary. Rules may overlap.
EXTRACTION_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("percent", _compile(r"(\d+)\s*%")),
    ExtractionRule("max_cap", _compile(r"(?:up\s*to|upto)\s*(?:rs\.?)?\s*(\d{2,})")),
    ExtractionRule("flat_discount", _compile(r"flat\s*(\d+)\s*(?:off|discount)?")),
    ExtractionRule("cashback", _compile(r"(?:₹|rs\.?)?\s*(\d+)\s*cashback")),
    ExtractionRule(
        "generic_discount",
        _compile(r"(?:save|extra|instant|rs\.?|₹)?\s*(\d{2,})\s*(?:off|discount|instantly)?"),
    ),
    ExtractionRule(
        "min_order",
        _compile(
            r"min(?:imum|\.)?\s*(order|txn|transaction|purchase|amount|val(?:ue)?\.?)?"
            r"\s*(of|value|val\.|amount)?\s*[:=]?\s*₹?\s*(\d{2,})"
        ),
        group=3,
    ),
)
