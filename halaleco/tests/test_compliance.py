# tests/test_compliance.py
from halaleco.schemas import HalalComplianceRequest
from halaleco.services.compliance import check_slaughter, product_alternatives, slaughter_certifier, validate_product


def beef_jerky(**overrides):
    data = dict(
        product="Beef Jerky",
        ingredients=["beef", "salt", "spices", "natural flavors"],
        certification_id="JAKIM-2023-BJ001",
        category="meat",
        slaughter_method="halal",
        origin="Malaysia",
    )
    data.update(overrides)
    return HalalComplianceRequest(**data)


def test_certified_beef_jerky_is_compliant(ledger):
    r = validate_product(beef_jerky(), ledger)
    assert r.is_halal_compliant
    assert r.haram_ingredients == []
    assert r.certification_authority == "JAKIM Malaysia"
    assert r.recommended_alternatives == []
    assert r.compliance_details.slaughter_compliance.certifying_body == "JAKIM Malaysia"
    assert r.compliance_details.certification_status.verification_method == "ledger"
    # 70 + 95*0.2 + 10 (no haram) - 2*2 (one doubtful ingredient)
    assert r.confidence_score == 95
    assert r.risk_assessment.recommendation == "approve"
    assert [f.factor for f in r.risk_assessment.factors] == ["Doubtful Ingredients"]


def test_pork_is_rejected_with_alternatives(ledger):
    r = validate_product(HalalComplianceRequest(product="Pork Sausage", ingredients=["pork", "salt"]), ledger)
    assert not r.is_halal_compliant
    assert r.haram_ingredients == ["pork"]
    assert r.risk_assessment.overall_risk == 9
    assert r.risk_assessment.recommendation == "reject"
    assert r.recommended_alternatives == [
        "Halal-certified Pork Sausage",
        "Organic Pork Sausage",
        "Plant-based Pork Sausage alternative",
        "Homemade Pork Sausage",
    ]
    assert r.confidence_score == 57
    pork = r.compliance_details.ingredient_analysis[0]
    assert pork.status == "haram" and pork.alternatives == ["Halal beef", "Halal chicken", "Halal lamb"]


def test_ledger_record_is_created(ledger):
    r = validate_product(beef_jerky(), ledger)
    assert r.blockchain_tx_hash.startswith("0x")
    assert len(r.blockchain_tx_hash) == 66
    assert r.blockchain_verification_link == f"https://etherscan.io/tx/{r.blockchain_tx_hash}"


def test_meat_without_slaughter_method(ledger):
    r = validate_product(beef_jerky(slaughter_method=None), ledger)
    assert not r.is_halal_compliant
    sc = r.compliance_details.slaughter_compliance
    assert sc.method == "Unknown" and not sc.is_compliant
    assert len(sc.requirements) == 5
    assert r.recommended_alternatives[0] == "Halal-certified Beef Jerky"


def test_slaughter_check_is_meat_only(ledger):
    r = validate_product(beef_jerky(category="processed", slaughter_method=None), ledger)
    assert r.compliance_details.slaughter_compliance is None
    assert r.is_halal_compliant


def test_pattern_certificate_is_enough(ledger):
    r = validate_product(HalalComplianceRequest(product="Dates", ingredients=["dates"],
                                                certification_id="MUIS-2024-7"), ledger)
    assert r.is_halal_compliant
    assert r.certification_authority == "MUIS Singapore"


def test_unknown_certificate_is_not_enough(ledger):
    r = validate_product(HalalComplianceRequest(product="Dates", ingredients=["dates"],
                                                certification_id="ACME-1"), ledger)
    assert not r.is_halal_compliant
    assert "No Valid Certification" in [f.factor for f in r.risk_assessment.factors]


def test_price_and_rating_factors(ledger):
    r = validate_product(beef_jerky(price="$0.50", seller_rating=2.0), ledger)
    factors = [f.factor for f in r.risk_assessment.factors]
    assert factors[:2] == ["Suspiciously Low Price", "Low Seller Rating"]

    # unparseable price and a zero rating are ignored
    r = validate_product(beef_jerky(price="free", seller_rating=0), ledger)
    assert [f.factor for f in r.risk_assessment.factors] == ["Doubtful Ingredients"]


def test_alternative_tables():
    assert product_alternatives("Milk", "dairy")[0] == "Halal-certified Milk"
    assert product_alternatives("Gummy Worms", None)[0] == "Halal gummy bears"


def test_slaughter_certifier_by_origin():
    assert slaughter_certifier("Perth, Australia") == "AHCFI Australia"
    assert slaughter_certifier("North America") == "IFANCA USA"
    assert slaughter_certifier("Brazil") == "Local Halal Authority"
    assert slaughter_certifier(None) == "Unknown Certifier"
    assert check_slaughter("Zabiha hand slaughter", "UK").certifying_body == "HFA UK"
    assert check_slaughter("stunned", "UK").certifying_body is None
