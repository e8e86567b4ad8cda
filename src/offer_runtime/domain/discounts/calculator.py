from __future__ import annotations

import math

from offer_runtime.domain.discounts import rules
from offer_runtime.domain.discounts.config import DiscountPolicyConfig
from offer_runtime.domain.discounts.models import DiscountEvaluation, ParsedDiscountTerms

DEFAULT_POLICY = DiscountPolicyConfig()


def _generic_applies(terms: ParsedDiscountTerms, config: DiscountPolicyConfig) -> bool:
    # The generic pattern re-captures numbers already claimed by the percent and flat rules.
    if terms.generic_discount is None:
        return False
    if terms.percent is not None or terms.flat_discount is not None:
        return False
    if config.suppress_generic_with_cashback and terms.cashback is not None:
        return False
    return True


def evaluate_discount(
    terms: ParsedDiscountTerms,
    amount_to_pay: float,
    config: DiscountPolicyConfig | None = None,
) -> DiscountEvaluation:
    """
    Combine parsed terms into the single applicable discount for amount_to_pay.

    Candidates are considered in a fixed order (flat, cashback, generic,
    percent) and the largest wins; ties keep the earlier candidate. The
    result is then limited by the payable cap and by amount_to_pay itself.
    The returned discount is not floored.
    """
    config = config or DEFAULT_POLICY

    if amount_to_pay < terms.min_order:
        return DiscountEvaluation(discount=0, driver=rules.DRIVER_MIN_ORDER_NOT_MET)

    discount: float = 0
    driver = rules.DRIVER_NO_DISCOUNT

    if terms.flat_discount is not None:
        discount = terms.flat_discount
        driver = rules.DRIVER_FLAT

    if terms.cashback is not None and terms.cashback > discount:
        discount = terms.cashback
        driver = rules.DRIVER_CASHBACK

    if _generic_applies(terms, config) and terms.generic_discount > discount:
        discount = terms.generic_discount
        driver = rules.DRIVER_GENERIC

    if terms.percent is not None:
        raw = (terms.percent / 100) * amount_to_pay
        capped_raw = min(raw, terms.max_cap) if terms.max_cap is not None else raw
        if capped_raw > discount:
            discount = capped_raw
            driver = rules.DRIVER_PERCENT

    payable_cap = math.floor(amount_to_pay * config.payable_cap_ratio)
    final = min(discount, payable_cap, amount_to_pay)
    return DiscountEvaluation(discount=final, driver=driver, capped=final < discount)


def calculate_discount(
    terms: ParsedDiscountTerms,
    amount_to_pay: float,
    config: DiscountPolicyConfig | None = None,
) -> float:
    return evaluate_discount(terms, amount_to_pay, config).discount
