"""Tests for matching offers against a selected card."""
import pytest

from cardoffers.data.normalize import make_card_entry
from cardoffers.data.offer_matcher import OfferRecord, is_wildcard, match_offers


def _offer(site="Myntra", **fields):
    return OfferRecord(record=dict(fields), site=site)


@pytest.fixture
def regalia():
    return make_card_entry("HDFC Regalia", "credit")


def test_no_selection_returns_empty():
    offers = [_offer(**{"Eligible Credit Cards": "ALL CC"})]
    assert match_offers(offers, "credit", None) == []


def test_wildcard_matches_every_credit_card(regalia):
    offers = [_offer(**{"Eligible Credit Cards": "ALL CC"})]
    other = make_card_entry("SBI Cashback", "credit")
    for selected in (regalia, other):
        matched = match_offers(offers, "credit", selected)
        assert len(matched) == 1
        assert matched[0].variant_text == ""


def test_wildcard_wins_over_other_entries(regalia):
    offers = [_offer(**{"Eligible Credit Cards": "HDFC Regalia (Infinite), All-CC"})]
    matched = match_offers(offers, "credit", regalia)
    assert len(matched) == 1
    assert matched[0].variant_text == ""


def test_credit_wildcard_does_not_apply_to_debit():
    offers = [_offer(**{"Eligible Credit Cards": "ALL CC"})]
    debit = make_card_entry("HDFC Millennia Debit", "debit")
    assert match_offers(offers, "debit", debit) == []


def test_debit_wildcard():
    offers = [_offer(**{"Applicable Debit Cards": "ALL DC"})]
    debit = make_card_entry("SBI Debit", "debit")
    assert len(match_offers(offers, "debit", debit)) == 1


def test_variant_extracted_from_matching_entry(regalia):
    offers = [_offer(**{"Eligible Credit Cards": "SBI Cashback, HDFC Regalia (Visa Signature)"})]
    matched = match_offers(offers, "credit", regalia)
    assert len(matched) == 1
    assert matched[0].variant_text == "Visa Signature"
    assert matched[0].site == "Myntra"


def test_first_matching_entry_decides_variant(regalia):
    offers = [_offer(**{"Eligible Credit Cards": "HDFC Regalia (Visa Signature); Hdfc regalia (Infinite)"})]
    matched = match_offers(offers, "credit", regalia)
    assert matched[0].variant_text == "Visa Signature"


def test_match_ignores_case_and_punctuation(regalia):
    offers = [_offer(**{"Eligible Credit Cards": "hdfc-REGALIA"})]
    assert len(match_offers(offers, "credit", regalia)) == 1


def test_contains_fallback_field(regalia):
    offers = [_offer(**{"Credit Card Eligibility": "HDFC Regalia"})]
    assert len(match_offers(offers, "credit", regalia)) == 1


def test_missing_eligibility_is_no_match(regalia):
    offers = [_offer(**{"Offer Title": "Flat 10% off"}), _offer()]
    assert match_offers(offers, "credit", regalia) == []


def test_non_matching_excluded_and_order_kept(regalia):
    offers = [
        _offer(site="Ajio", **{"Eligible Credit Cards": "HDFC Regalia", "Offer Title": "A"}),
        _offer(site="Ajio", **{"Eligible Credit Cards": "SBI Cashback", "Offer Title": "B"}),
        _offer(site="Ajio", **{"Eligible Cards": "ALL CC", "Offer Title": "C"}),
    ]
    matched = match_offers(offers, "credit", regalia)
    assert [m.offer.record["Offer Title"] for m in matched] == ["A", "C"]


def test_is_wildcard():
    assert is_wildcard(" all cc ", "credit")
    assert is_wildcard("ALL-DC", "debit")
    assert not is_wildcard("ALL CC", "debit")
    assert not is_wildcard("All Cards", "credit")
