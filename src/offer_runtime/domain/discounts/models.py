from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedDiscountTerms:
    """Discount semantics extracted from one offer summary. Never persisted."""

    percent: int | None = None
    max_cap: int | None = None
    flat_discount: int | None = None
    cashback: int | None = None
    generic_discount: int | None = None
    min_order: int = 0

    def as_dict(self) -> dict[str, int | None]:
        return {
            "percent": self.percent,
            "max_cap": self.max_cap,
            "flat_discount": self.flat_discount,
            "cashback": self.cashback,
            "generic_discount": self.generic_discount,
            "min_order": self.min_order,
        }


@dataclass(frozen=True)
class DiscountEvaluation:
    """Calculator output: the applicable discount and the rule that produced it."""

    discount: float
    driver: str
    capped: bool = False
