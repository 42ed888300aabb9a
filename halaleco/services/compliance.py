# halaleco/services/compliance.py
from __future__ import annotations
import time
from typing import List

from ..ledger.adapter import MockLedger
from ..rules.certification import CertificationRecord, verify
from ..rules.ingredients import IngredientFinding, classify, with_status
from ..rules.tables import (
    CATEGORY_ALTERNATIVES,
    PRODUCT_ALTERNATIVES,
    SLAUGHTER_CERTIFIERS,
    SLAUGHTER_KEYWORDS,
    SLAUGHTER_REQUIREMENTS,
)
from ..schemas import (
    CertificationStatus,
    ComplianceDetails,
    HalalComplianceRequest,
    HalalComplianceResponse,
    IngredientAnalysis,
    RiskAssessment,
    RiskFactor,
    SlaughterCompliance,
)
from ..utils.logging import logger
from .scoring import clamp, leading_number

# -----------------------------
# Tunables
# -----------------------------
LOW_PRICE = 1.0
LOW_RATING = 3.5
REJECT_AT = 7
REVIEW_AT = 3
MAX_RISK = 10
MIN_TRUST_WITHOUT_CERT = 50

CONFIDENCE_BASE = 70
CONFIDENCE_TRUST_WEIGHT = 0.2
CONFIDENCE_NO_HARAM = 10
CONFIDENCE_NO_MUSHBOOH = 5
CONFIDENCE_RISK_PENALTY = 2

LEDGER_AUTHORITY = "HalalEco AI Validator"


# -----------------------------
# Slaughter
# -----------------------------
def slaughter_certifier(origin: str | None) -> str:
    if not origin:
        return "Unknown Certifier"
    o = origin.lower()
    for keywords, certifier in SLAUGHTER_CERTIFIERS:
        if any(k in o for k in keywords):
            return certifier
    return "Local Halal Authority"


def check_slaughter(method: str | None, origin: str | None) -> SlaughterCompliance:
    requirements = list(SLAUGHTER_REQUIREMENTS)
    if not method:
        return SlaughterCompliance(method="Unknown", is_compliant=False, requirements=requirements)

    ok = any(k in method.lower() for k in SLAUGHTER_KEYWORDS)
    return SlaughterCompliance(
        method=method,
        is_compliant=ok,
        requirements=requirements,
        certifying_body=slaughter_certifier(origin) if ok else None,
    )


# -----------------------------
# Risk
# -----------------------------
def assess_risk(request: HalalComplianceRequest, findings: List[IngredientFinding],
                cert: CertificationRecord) -> RiskAssessment:
    factors: List[RiskFactor] = []

    def add(name: str, impact: int, description: str) -> None:
        factors.append(RiskFactor(factor=name, impact=impact, description=description))

    if request.price:
        amount = leading_number(request.price)
        if amount is not None and amount < LOW_PRICE:
            add("Suspiciously Low Price", 3, "Price may indicate counterfeit or low-quality product")

    # a rating of 0 counts as "not given"
    if request.seller_rating and request.seller_rating < LOW_RATING:
        add("Low Seller Rating", 2, "Seller has poor customer feedback history")

    if not cert.is_valid:
        add("No Valid Certification", 4, "Product lacks proper Halal certification")

    haram = len(with_status(findings, "haram"))
    doubtful = len(with_status(findings, "mushbooh"))
    if haram:
        add("Haram Ingredients Detected", 5, f"Contains {haram} prohibited ingredient(s)")
    if doubtful:
        add("Doubtful Ingredients", 2, f"Contains {doubtful} ingredient(s) requiring verification")

    total = sum(f.impact for f in factors)
    if total >= REJECT_AT:
        recommendation = "reject"
    elif total >= REVIEW_AT:
        recommendation = "review"
    else:
        recommendation = "approve"

    return RiskAssessment(overall_risk=min(total, MAX_RISK), factors=factors, recommendation=recommendation)


# -----------------------------
# Decision
# -----------------------------
def is_compliant(findings: List[IngredientFinding], cert: CertificationRecord,
                 slaughter: SlaughterCompliance | None) -> bool:
    if with_status(findings, "haram"):
        return False
    if slaughter is not None and not slaughter.is_compliant:
        return False
    return cert.is_valid or cert.trust_score >= MIN_TRUST_WITHOUT_CERT


def confidence_score(findings: List[IngredientFinding], cert: CertificationRecord, risk: RiskAssessment) -> int:
    score = CONFIDENCE_BASE + cert.trust_score * CONFIDENCE_TRUST_WEIGHT
    if not with_status(findings, "haram"):
        score += CONFIDENCE_NO_HARAM
    if not with_status(findings, "mushbooh"):
        score += CONFIDENCE_NO_MUSHBOOH
    score -= risk.overall_risk * CONFIDENCE_RISK_PENALTY
    return int(clamp(round(score), 0, 100))


def product_alternatives(product: str, category: str | None) -> List[str]:
    if category in CATEGORY_ALTERNATIVES:
        return [alt.format(product=product) for alt in CATEGORY_ALTERNATIVES[category]]

    p = product.lower()
    for key, alts in PRODUCT_ALTERNATIVES.items():
        if key in p:
            return list(alts)

    return [
        f"Halal-certified {product}",
        f"Organic {product}",
        f"Plant-based {product} alternative",
        f"Homemade {product}",
    ]


def _record_on_ledger(request: HalalComplianceRequest, ledger: MockLedger) -> str:
    receipt = ledger.create_record({
        "productId": request.product,
        "certificationId": request.certification_id or f"AUTO-{int(time.time() * 1000)}",
        "authority": LEDGER_AUTHORITY,
        "expiryDate": ledger.certification_expiry(),
    })
    return receipt.transaction_hash or ""


# -----------------------------
# Main entry
# -----------------------------
def validate_product(request: HalalComplianceRequest, ledger: MockLedger) -> HalalComplianceResponse:
    findings = classify(request.ingredients)
    cert = verify(request.certification_id, ledger, request.certification_image)
    slaughter = check_slaughter(request.slaughter_method, request.origin) if request.category == "meat" else None

    risk = assess_risk(request, findings, cert)
    compliant = is_compliant(findings, cert, slaughter)
    tx_hash = _record_on_ledger(request, ledger)

    logger.info(
        "Compliance check product=%r compliant=%s risk=%s authority=%s",
        request.product, compliant, risk.overall_risk, cert.authority,
    )

    return HalalComplianceResponse(
        is_halal_compliant=compliant,
        haram_ingredients=[f.ingredient for f in with_status(findings, "haram")],
        certification_authority=cert.authority,
        blockchain_tx_hash=tx_hash,
        blockchain_verification_link=ledger.explorer_link(tx_hash),
        confidence_score=confidence_score(findings, cert, risk),
        recommended_alternatives=[] if compliant else product_alternatives(request.product, request.category),
        compliance_details=ComplianceDetails(
            ingredient_analysis=[IngredientAnalysis(**f.to_dict()) for f in findings],
            certification_status=CertificationStatus(**cert.to_dict()),
            slaughter_compliance=slaughter,
        ),
        risk_assessment=risk,
    )
