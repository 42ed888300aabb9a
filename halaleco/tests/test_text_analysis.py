# tests/test_text_analysis.py
from halaleco.services.text_analysis import (
    analyze_text,
    grammar_score,
    language_quality,
    sentiment,
    suspicious_keywords,
    unverifiable_claims,
)


def test_short_shouty_text_loses_quality():
    assert language_quality("buy now") == 55
    assert language_quality("buy now!!!") == 45


def test_grammar():
    assert grammar_score("fresh dates. packed today.") == 80
    assert grammar_score("fresh  dates") == 55
    assert grammar_score("fresh  dates.") == 75


def test_keywords_in_table_order():
    assert suspicious_keywords("miracle cure, limited time only") == ["limited time", "miracle"]


def test_claims_are_unverifiable():
    claims = unverifiable_claims("100% halal, certified by jakim")
    assert [c.claim for c in claims] == ["100% guarantee claim", "Certification claim"]
    assert all(not c.is_verifiable and c.confidence == 30 for c in claims)


def test_sentiment():
    assert sentiment("excellent and amazing") == 0.2
    assert sentiment("fake and terrible") == -0.2
    assert sentiment("plain") == 0.0


def test_analyze_text_lowercases_name_and_description():
    t = analyze_text("URGENT SALE, cash only!!!", "Miracle Honey")
    assert t.suspicious_keywords == ["urgent sale", "cash only", "miracle"]
    assert t.language_quality < 50


def test_analyze_text_handles_missing_fields():
    t = analyze_text(None, None)
    assert t.suspicious_keywords == []
    assert 0 <= t.language_quality <= 100
