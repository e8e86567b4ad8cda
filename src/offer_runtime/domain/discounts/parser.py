from __future__ import annotations

import logging

from offer_runtime.domain.discounts import rules
from offer_runtime.domain.discounts.models import ParsedDiscountTerms

logger = logging.getLogger(__name__)


def normalize_summary(summary: str | None) -> str:
    """Strip rupee symbols and thousands separators, then lower-case."""
    if not summary:
        return ""
    return rules.STRIPPED_CHARACTERS.sub("", summary).lower()


def _extract(rule: rules.ExtractionRule, text: str) -> int | None:
    match = rule.pattern.search(text)
    if match is None:
        return None
    captured = match.group(rule.group)
    try:
        value = int(captured, 10)
        # Calculator arithmetic runs in floats; captures past float range are dropped.
        float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Ignoring unparseable {rule.field_name} capture: {str(captured)[:40]!r}")
        return None
    return value


def parse_summary(summary: str | None) -> ParsedDiscountTerms:
    """
    Extract discount terms from a free-text offer summary.

    Every rule in ``rules.EXTRACTION_RULES`` runs independently against the
    normalized text, so one number can populate several fields (for example
    "flat 300 off" fills both flat_discount and generic_discount). Deciding
    which of the overlapping fields counts is left to the calculator.
    """
    text = normalize_summary(summary)
    fields: dict[str, int | None] = {rule.field_name: _extract(rule, text) for rule in rules.EXTRACTION_RULES}
    min_order = fields.pop("min_order", None)
    return ParsedDiscountTerms(**fields, min_order=min_order or 0)
