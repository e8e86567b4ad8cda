from __future__ import annotations

from offer_runtime.domain.discounts.calculator import calculate_discount, evaluate_discount
from offer_runtime.domain.discounts.config import DiscountPolicyConfig
from offer_runtime.domain.discounts.models import DiscountEvaluation, ParsedDiscountTerms
from offer_runtime.domain.discounts.parser import normalize_summary, parse_summary

__all__ = [
    "DiscountPolicyConfig",
    "DiscountEvaluation",
    "ParsedDiscountTerms",
    "calculate_discount",
    "evaluate_discount",
    "normalize_summary",
    "parse_summary",
]
