# halaleco/services/validator.py
"""Lightweight /validate-halal check: one haram list, a ledger lookup and a small risk tally."""
from __future__ import annotations
from typing import List, Tuple

from ..ledger.adapter import MockLedger
from ..rules.tables import NOT_CERTIFIED, VALIDATOR_HARAM_INGREDIENTS, VALIDATOR_PRODUCT_ALTERNATIVES
from ..schemas import HalalValidationResponse, ValidationRequest
from .scoring import leading_number

BASE_CONFIDENCE = 70
BASE_RISK = 1
BLOCK_AT = 6
FLAG_AT = 3
MAX_RISK = 10


def detect_haram(ingredients: List[str]) -> List[str]:
    return [
        i for i in ingredients
        if any(h in i.lower() for h in VALIDATOR_HARAM_INGREDIENTS)
    ]


def confidence_score(request: ValidationRequest, compliant: bool) -> int:
    score = BASE_CONFIDENCE
    if request.certification_id:
        score += 20
    if compliant:
        score += 10
    if request.supplier and "halal" in request.supplier.lower():
        score += 5
    if request.ingredients:
        score += 5
    return min(score, 100)


def fraud_risk(request: ValidationRequest) -> Tuple[int, List[str], str]:
    flags: List[str] = []
    score = BASE_RISK

    if request.price:
        amount = leading_number(request.price)
        if amount is not None and amount < 1:
            flags.append("Suspiciously low price")
            score += 3

    if request.seller_rating and request.seller_rating < 3.5:
        flags.append("Low seller rating")
        score += 2

    if not request.certification_id:
        flags.append("No certification provided")
        score += 1

    if score >= BLOCK_AT:
        action = "block"
    elif score >= FLAG_AT:
        action = "flag"
    else:
        action = "allow"
    return min(score, MAX_RISK), flags, action


def alternatives(product: str) -> List[str]:
    p = product.lower()
    for key, alts in VALIDATOR_PRODUCT_ALTERNATIVES.items():
        if key in p:
            return list(alts)
    return [f"Halal {product}", f"Certified {product}", f"Alternative to {product}"]


def validate(request: ValidationRequest, ledger: MockLedger) -> HalalValidationResponse:
    haram = detect_haram(request.ingredients)
    compliant = not haram

    authority = NOT_CERTIFIED
    link = ""
    if request.certification_id:
        onchain = ledger.verify_certification(request.certification_id)
        if onchain.is_valid and onchain.certification_data:
            authority = onchain.authority or NOT_CERTIFIED
            link = ledger.explorer_link(onchain.verification_hash)

    risk, flags, action = fraud_risk(request)

    return HalalValidationResponse(
        is_halal_compliant=compliant,
        haram_ingredients=haram,
        certification_authority=authority,
        blockchain_verification_link=link,
        confidence_score=confidence_score(request, compliant),
        recommended_alternatives=[] if compliant else alternatives(request.product),
        risk_score=risk,
        red_flags=flags,
        recommended_action=action,
    )
