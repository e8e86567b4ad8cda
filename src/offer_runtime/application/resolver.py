from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from offer_runtime.application.errors import InvalidQueryError
from offer_runtime.domain.discounts import DiscountPolicyConfig, evaluate_discount, parse_summary
from offer_runtime.ports.offer_store import OfferStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionQuery:
    amount_to_pay: float
    bank_name: str
    payment_instrument: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    highest_discount: int
    best_adjustment_id: Optional[str] = None
    candidates_evaluated: int = 0


def _parse_amount(value: Any) -> float:
    """
    Parse amountToPay as a finite, non-negative number.

    Stricter than a lenient prefix parse: trailing garbage ("100abc"),
    digit-group underscores ("1_000"), NaN, infinities and negative amounts
    are all rejected rather than coerced.
    """
    if value is None or isinstance(value, bool):
        raise InvalidQueryError("Missing or invalid amountToPay or bankName")
    if isinstance(value, str) and "_" in value:
        raise InvalidQueryError("Missing or invalid amountToPay or bankName")
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError) as e:
        raise InvalidQueryError("Missing or invalid amountToPay or bankName") from e
    if not math.isfinite(amount) or amount < 0:
        raise InvalidQueryError("Missing or invalid amountToPay or bankName")
    return amount


def parse_resolution_query(
    amount_to_pay: Any,
    bank_name: Optional[str],
    payment_instrument: Optional[str] = None,
) -> ResolutionQuery:
    """Validate raw request values. Tags are upper-cased so matching ignores input case."""
    amount = _parse_amount(amount_to_pay)
    bank = (bank_name or "").strip().upper()
    if not bank:
        raise InvalidQueryError("Missing or invalid amountToPay or bankName")
    instrument = (payment_instrument or "").strip().upper() or None
    return ResolutionQuery(amount_to_pay=amount, bank_name=bank, payment_instrument=instrument)


class DiscountResolver:
    def __init__(self, store: OfferStore, config: DiscountPolicyConfig | None = None) -> None:
        self.store = store
        self.config = config or DiscountPolicyConfig()

    def resolve(self, query: ResolutionQuery) -> ResolutionResult:
        """Highest discount across offers matching the bank (and instrument), floored to an integer."""
        offers = self.store.find_offers(query.bank_name, query.payment_instrument)
        logger.debug(
            f"Resolving discount for bank={query.bank_name} instrument={query.payment_instrument} "
            f"amount={query.amount_to_pay}: {len(offers)} candidate offers"
        )

        max_discount: float = 0
        best_adjustment_id: Optional[str] = None
        for offer in offers:
            # Terms are re-parsed on every call so rule changes apply without migrating stored offers.
            evaluation = evaluate_discount(parse_summary(offer.summary), query.amount_to_pay, self.config)
            if evaluation.discount > max_discount:
                max_discount = evaluation.discount
                best_adjustment_id = str(offer.adjustment_id)

        return ResolutionResult(
            highest_discount=math.floor(max_discount),
            best_adjustment_id=best_adjustment_id,
            candidates_evaluated=len(offers),
        )
