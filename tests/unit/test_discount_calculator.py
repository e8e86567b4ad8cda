import pytest

from offer_runtime.domain.discounts import rules
from offer_runtime.domain.discounts.calculator import calculate_discount, evaluate_discount
from offer_runtime.domain.discounts.config import DiscountPolicyConfig
from offer_runtime.domain.discounts.models import ParsedDiscountTerms
from offer_runtime.domain.discounts.parser import parse_summary


def discount_for(summary: str, amount: float) -> float:
    return calculate_discount(parse_summary(summary), amount)


def test_min_order_gate_blocks_every_rule():
    terms = ParsedDiscountTerms(flat_discount=100, cashback=200, percent=50, min_order=500)
    result = evaluate_discount(terms, 499)
    assert result.discount == 0
    assert result.driver == rules.DRIVER_MIN_ORDER_NOT_MET


def test_amount_equal_to_min_order_passes_gate():
    terms = ParsedDiscountTerms(flat_discount=100, min_order=500)
    assert calculate_discount(terms, 500) == 100


def test_cashback_beats_smaller_flat():
    result = evaluate_discount(ParsedDiscountTerms(flat_discount=100, cashback=150), 1000)
    assert result.discount == 150
    assert result.driver == rules.DRIVER_CASHBACK


def test_generic_ignored_when_percent_present():
    result = evaluate_discount(ParsedDiscountTerms(percent=5, generic_discount=500), 1000)
    assert result.discount == 50
    assert result.driver == rules.DRIVER_PERCENT


def test_generic_ignored_when_flat_present():
    assert calculate_discount(ParsedDiscountTerms(flat_discount=100, generic_discount=900), 2000) == 100


def test_generic_not_suppressed_by_cashback_by_default():
    terms = ParsedDiscountTerms(cashback=50, generic_discount=200)
    result = evaluate_discount(terms, 1000)
    assert result.discount == 200
    assert result.driver == rules.DRIVER_GENERIC


def test_generic_suppressed_by_cashback_when_configured():
    terms = ParsedDiscountTerms(cashback=50, generic_discount=200)
    config = DiscountPolicyConfig(suppress_generic_with_cashback=True)
    result = evaluate_discount(terms, 1000, config)
    assert result.discount == 50
    assert result.driver == rules.DRIVER_CASHBACK


def test_half_of_payable_cap_applies_to_any_rule():
    result = evaluate_discount(ParsedDiscountTerms(flat_discount=800), 1000)
    assert result.discount == 500
    assert result.capped is True


def test_custom_payable_cap_ratio():
    config = DiscountPolicyConfig(payable_cap_ratio=0.25)
    assert calculate_discount(ParsedDiscountTerms(flat_discount=400), 1000, config) == 250


def test_percent_result_is_not_floored():
    result = calculate_discount(ParsedDiscountTerms(percent=15), 333)
    assert result == pytest.approx(49.95)


def test_zero_amount_gives_zero():
    assert calculate_discount(ParsedDiscountTerms(flat_discount=100), 0) == 0


def test_no_terms_gives_zero():
    result = evaluate_discount(ParsedDiscountTerms(), 1000)
    assert result.discount == 0
    assert result.driver == rules.DRIVER_NO_DISCOUNT


def test_flat_off():
    assert discount_for("Flat 100 off", 1000) == 100


def test_percent_capped_by_up_to():
    assert discount_for("10% off up to 50", 1000) == 50


def test_percent_uncapped():
    assert discount_for("10% off", 1000) == 100


def test_min_order_gate_from_summary():
    assert discount_for("Save 200 instantly, min order 500", 400) == 0
    assert discount_for("Save 200 instantly, min order 500", 600) == 200


def test_flat_and_generic_do_not_double_apply():
    assert discount_for("Flat 300 off, save 300", 1000) == 300


@pytest.mark.parametrize(
    "summary",
    [
        "Flat 100 off",
        "10% off",
        "80% off up to 5000",
        "Get 900 cashback",
        "Save 10000 instantly",
        "Flat 50 off on min order of 99",
        "No numbers here",
    ],
)
@pytest.mark.parametrize("amount", [0, 1, 99, 100, 333.5, 1000, 25000])
def test_result_stays_within_bounds(summary, amount):
    discount = discount_for(summary, amount)
    assert 0 <= discount <= min(amount, amount * 0.5 // 1)
