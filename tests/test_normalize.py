from cardoffers.data.normalize import (
    canonicalize_brand,
    make_card_entry,
    normalize_key,
    normalize_url,
    split_base_and_variant,
)


def test_normalize_basic():
    assert normalize_key("HDFC Regalia") == "hdfc regalia"


def test_normalize_strips_whitespace():
    assert normalize_key("  hdfc   regalia  ") == "hdfc regalia"


def test_normalize_replaces_punctuation():
    assert normalize_key("ICICI Amazon-Pay (Visa)") == "icici amazon pay visa"


def test_normalize_folds_diacritics():
    assert normalize_key("Café  Rewards!") == "cafe rewards"


def test_normalize_empty_and_none():
    assert normalize_key("") == ""
    assert normalize_key(None) == ""


def test_normalize_is_idempotent():
    for text in ["HDFC Regalia (Visa Signature)", "  Axis--Ace!! ", "Crédit Élite"]:
        once = normalize_key(text)
        assert normalize_key(once) == once


def test_split_base_and_variant():
    assert split_base_and_variant("HDFC Regalia (Visa Signature)") == ("HDFC Regalia", "Visa Signature")


def test_split_without_variant():
    assert split_base_and_variant("  SBI Cashback ") == ("SBI Cashback", "")


def test_split_ignores_interior_parentheses():
    assert split_base_and_variant("Axis (Old) Ace") == ("Axis (Old) Ace", "")


def test_variant_differs_only_by_capture():
    base, variant = split_base_and_variant("HDFC Regalia (Visa Signature)")
    assert normalize_key(base) == normalize_key("hdfc   regalia")
    assert variant == "Visa Signature"


def test_canonicalize_brand():
    assert canonicalize_brand("Hdfc millennia") == "HDFC millennia"
    assert canonicalize_brand("icici amazon pay") == "ICICI amazon pay"
    assert canonicalize_brand("Makemytrip ICICI") == "MakeMyTrip ICICI"


def test_canonicalize_brand_whole_words_only():
    assert canonicalize_brand("Yesterday Card") == "Yesterday Card"
    assert canonicalize_brand("yes first") == "YES first"


def test_make_card_entry_same_card_same_key():
    a = make_card_entry("icici amazon pay", "credit")
    b = make_card_entry("ICICI Amazon Pay", "credit")
    assert a.norm_key == b.norm_key
    assert a.display == "ICICI amazon pay"


def test_make_card_entry_drops_variant():
    entry = make_card_entry("Hdfc Regalia (Visa Signature)", "credit")
    assert entry.display == "HDFC Regalia"
    assert entry.norm_key == "hdfc regalia"
    assert entry.instrument_type == "credit"


def test_normalize_url():
    assert normalize_url("https://www.Example.com/img.png/") == "example.com/img.png"
    assert normalize_url("http://x/img.png") == normalize_url("https://x/img.png")
    assert normalize_url(None) == ""
