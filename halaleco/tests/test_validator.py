# tests/test_validator.py
from halaleco.schemas import ValidationRequest
from halaleco.services.validator import alternatives, validate


def test_gelatin_is_flagged(ledger):
    r = validate(ValidationRequest(product="Gummy Bears", ingredients=["sugar", "Gelatin"]), ledger)
    assert not r.is_halal_compliant
    assert r.haram_ingredients == ["Gelatin"]
    assert r.recommended_alternatives == ["Halal Gummy Bears", "Certified Gummy Bears", "Alternative to Gummy Bears"]


def test_product_alternative_table():
    assert alternatives("Premium Beef Sausages") == ["Halal beef sausages", "Chicken sausages", "Turkey sausages"]


def test_certified_product(ledger):
    r = validate(ValidationRequest(product="Dates", ingredients=["dates"], certification_id="JAKIM-1",
                                   supplier="Halal Foods Ltd"), ledger)
    assert r.is_halal_compliant
    assert r.certification_authority == "JAKIM Malaysia"
    assert r.blockchain_verification_link == "https://etherscan.io/tx/0x" + b"JAKIM-1".hex()
    assert r.confidence_score == 100
    assert r.risk_score == 1
    assert r.red_flags == []
    assert r.recommended_action == "allow"


def test_off_ledger_certificate_is_not_reported(ledger):
    r = validate(ValidationRequest(product="Dates", ingredients=["dates"], certification_id="MUIS-1"), ledger)
    assert r.certification_authority == "Not Certified"
    assert r.blockchain_verification_link == ""
    # the id still counts towards confidence
    assert r.confidence_score == 100


def test_risk_tally(ledger):
    r = validate(ValidationRequest(product="Dates", ingredients=["dates"], price="0.5", seller_rating=3.0), ledger)
    assert r.risk_score == 7
    assert r.red_flags == ["Suspiciously low price", "Low seller rating", "No certification provided"]
    assert r.recommended_action == "block"
    assert r.confidence_score == 85

    r = validate(ValidationRequest(product="Dates", ingredients=["dates"], seller_rating=3.0), ledger)
    assert r.risk_score == 4
    assert r.recommended_action == "flag"
