from unittest.mock import Mock

import pytest

from offer_runtime.adapters.memory.in_memory_offer_store import InMemoryOfferStore
from offer_runtime.application.errors import InvalidQueryError
from offer_runtime.application.resolver import DiscountResolver, ResolutionQuery, parse_resolution_query
from offer_runtime.domain.discounts.config import DiscountPolicyConfig
from offer_runtime.domain.offers.models import Offer


def make_offer(adjustment_id: str, summary: str, banks=("HDFC",), payment_instrument=("VISA",)) -> Offer:
    return Offer.new(
        adjustment_id=adjustment_id,
        summary=summary,
        banks=list(banks),
        payment_instrument=list(payment_instrument),
    )


def test_parse_query_upper_cases_tags():
    query = parse_resolution_query("1000", " hdfc ", "visa")
    assert query == ResolutionQuery(amount_to_pay=1000.0, bank_name="HDFC", payment_instrument="VISA")


def test_parse_query_blank_instrument_is_none():
    assert parse_resolution_query("1000.50", "hdfc", "").payment_instrument is None


@pytest.mark.parametrize("amount", [None, "", "abc", "nan", "inf", "-5", True])
def test_parse_query_rejects_invalid_amount(amount):
    with pytest.raises(InvalidQueryError):
        parse_resolution_query(amount, "HDFC")


@pytest.mark.parametrize("bank", [None, "", "   "])
def test_parse_query_requires_bank(bank):
    with pytest.raises(InvalidQueryError):
        parse_resolution_query("1000", bank)


def test_no_matching_offers_returns_zero():
    result = DiscountResolver(InMemoryOfferStore()).resolve(ResolutionQuery(1000, "ICICI"))
    assert result.highest_discount == 0
    assert result.best_adjustment_id is None
    assert result.candidates_evaluated == 0


def test_returns_maximum_across_offers():
    store = InMemoryOfferStore(
        [
            make_offer("A", "Flat 100 off"),
            make_offer("B", "10% off up to 300"),
            make_offer("C", "Flat 900 off", banks=["SBI"]),
        ]
    )
    result = DiscountResolver(store).resolve(ResolutionQuery(2000, "HDFC"))
    assert result.highest_discount == 200
    assert result.best_adjustment_id == "B"
    assert result.candidates_evaluated == 2


def test_final_value_is_floored():
    store = InMemoryOfferStore([make_offer("A", "15% off")])
    result = DiscountResolver(store).resolve(ResolutionQuery(333, "HDFC"))
    assert result.highest_discount == 49


def test_bank_matching_ignores_input_case():
    store = InMemoryOfferStore([make_offer("A", "Flat 100 off")])
    query = parse_resolution_query("1000", "hdfc")
    assert DiscountResolver(store).resolve(query).highest_discount == 100


def test_instrument_filter_excludes_other_instruments():
    store = InMemoryOfferStore(
        [
            make_offer("A", "Flat 100 off", payment_instrument=["VISA"]),
            make_offer("B", "Flat 400 off", payment_instrument=["RUPAY"]),
        ]
    )
    result = DiscountResolver(store).resolve(parse_resolution_query("1000", "HDFC", "visa"))
    assert result.highest_discount == 100
    assert result.best_adjustment_id == "A"


def test_unparseable_summary_contributes_zero():
    store = InMemoryOfferStore([make_offer("A", "Exclusive member benefits")])
    assert DiscountResolver(store).resolve(ResolutionQuery(1000, "HDFC")).highest_discount == 0


def test_policy_is_passed_to_calculator():
    store = InMemoryOfferStore([make_offer("A", "Flat 400 off")])
    resolver = DiscountResolver(store, DiscountPolicyConfig(payable_cap_ratio=0.1))
    assert resolver.resolve(ResolutionQuery(1000, "HDFC")).highest_discount == 100


def test_summaries_are_reparsed_on_every_call():
    store = Mock()
    store.find_offers.return_value = [make_offer("A", "Flat 100 off")]
    resolver = DiscountResolver(store)

    assert resolver.resolve(ResolutionQuery(1000, "HDFC")).highest_discount == 100
    store.find_offers.return_value = [make_offer("A", "Flat 250 off")]
    assert resolver.resolve(ResolutionQuery(1000, "HDFC")).highest_discount == 250
    store.find_offers.assert_called_with("HDFC", None)


@pytest.mark.parametrize("amount", ["1_000", "100abc", "-0.01"])
def test_parse_query_rejects_lenient_and_negative_amounts(amount):
    # Negative amounts and underscore-grouped digits are rejected outright, not coerced to a number.
    with pytest.raises(InvalidQueryError):
        parse_resolution_query(amount, "HDFC")


def test_parse_query_accepts_zero_amount():
    assert parse_resolution_query("0", "HDFC").amount_to_pay == 0.0


def test_oversized_number_in_one_summary_does_not_break_resolution():
    store = InMemoryOfferStore([make_offer("A", "Flat 100 off"), make_offer("B", "9" * 400 + "% off")])
    result = DiscountResolver(store).resolve(ResolutionQuery(1000, "HDFC"))
    assert result.highest_discount == 100
    assert result.best_adjustment_id == "A"
    assert result.candidates_evaluated == 2
