from offer_runtime.domain.discounts.models import ParsedDiscountTerms
from offer_runtime.domain.discounts.parser import normalize_summary, parse_summary


def test_normalize_strips_rupee_symbol_and_commas():
    assert normalize_summary("Flat ₹1,000 OFF") == "flat 1000 off"


def test_normalize_handles_missing_summary():
    assert normalize_summary(None) == ""
    assert normalize_summary("") == ""


def test_flat_discount_also_matches_generic_pattern():
    terms = parse_summary("Flat ₹100 off on HDFC cards")
    assert terms.flat_discount == 100
    # Overlap is kept; the calculator decides which field counts.
    assert terms.generic_discount == 100
    assert terms.percent is None
    assert terms.cashback is None
    assert terms.min_order == 0


def test_percent_with_cap_and_min_order():
    terms = parse_summary("10% off up to ₹1,500 on min. order of ₹5,000")
    assert terms.percent == 10
    assert terms.max_cap == 1500
    assert terms.min_order == 5000
    assert terms.flat_discount is None


def test_upto_with_rs_prefix():
    terms = parse_summary("Upto Rs. 200 off")
    assert terms.max_cap == 200
    assert terms.generic_discount == 200


def test_cashback():
    terms = parse_summary("Get ₹150 cashback using UPI")
    assert terms.cashback == 150
    assert terms.generic_discount == 150
    assert terms.percent is None


def test_min_order_with_value_and_colon():
    terms = parse_summary("Save 250. Minimum transaction value: 2,500")
    assert terms.min_order == 2500
    assert terms.generic_discount == 250


def test_min_order_requires_two_digits():
    assert parse_summary("min order 5").min_order == 0


def test_max_cap_requires_two_digits():
    assert parse_summary("5% off up to 9").max_cap is None


def test_unparseable_summary_yields_empty_terms():
    assert parse_summary("Exclusive offer for members") == ParsedDiscountTerms()
    assert parse_summary(None) == ParsedDiscountTerms()


def test_non_ascii_digits_are_ignored():
    # Devanagari digits are not treated as numbers.
    assert parse_summary("फ्लैट ५०० off").generic_discount is None


def test_numbers_beyond_float_range_are_ignored():
    terms = parse_summary("9" * 400 + "% off")
    assert terms.percent is None
    assert terms.generic_discount is None


def test_large_numbers_within_float_range_are_kept():
    assert parse_summary("1" + "0" * 300 + "% off").percent == 10**300
