# halaleco/services/fraud.py
from __future__ import annotations
import random
from typing import List

from ..rules.red_flags import identify_red_flags
from ..schemas import DetailedAnalysis, FraudDetectionRequest, FraudDetectionResponse, RedFlag
from ..utils.logging import logger
from .imagery import analyze_certification, analyze_images
from .scoring import clamp, score as score_listing
from .text_analysis import analyze_text

# -----------------------------
# Tunables
# -----------------------------
MAX_RISK = 10
RISK_LEVELS = (  # first match wins
    (8, "critical"),
    (6, "high"),
    (3, "medium"),
)
MAX_FLAG_IMPACT = 25  # 5 flags * impact 5
FRAUD_PROB_SCORE_WEIGHT = 60
FRAUD_PROB_PER_FLAG = 5


# -----------------------------
# Aggregation
# -----------------------------
def calculate_risk_score(a: DetailedAnalysis) -> int:
    score = 0

    # price 0-3
    score += {"very_low": 3, "low": 2, "very_high": 1}.get(a.price_analysis.price_category, 0)

    # seller 0-3 (+1 on very low trust)
    score += {"fraudulent": 3, "suspicious": 2}.get(a.seller_analysis.behavior_pattern, 0)
    if a.seller_analysis.trust_score < 30:
        score += 1

    # image 0-2 (+1 duplicate)
    if not a.image_analysis.is_authentic:
        score += 2
    if a.image_analysis.duplicate_detected:
        score += 1

    # text 0-2 (+1 poor language)
    kw = len(a.text_analysis.suspicious_keywords)
    if kw > 2:
        score += 2
    elif kw > 0:
        score += 1
    if a.text_analysis.language_quality < 50:
        score += 1

    # certification 0-2
    if a.certification_analysis.suspicious_elements:
        score += 1
    if not a.certification_analysis.has_valid_certification:
        score += 1

    return int(clamp(score, 0, MAX_RISK))


def risk_level_for(score: int) -> str:
    for floor, level in RISK_LEVELS:
        if score >= floor:
            return level
    return "low"


def action_for(score: int, flags: List[RedFlag]) -> str:
    critical = sum(1 for f in flags if f.severity == "critical")
    high = sum(1 for f in flags if f.severity == "high")
    if critical > 0 or score >= 8:
        return "block"
    if high > 1 or score >= 6:
        return "manual_review"
    if score >= 3:
        return "flag"
    return "approve"


def confidence_for(flags: List[RedFlag]) -> float:
    total = sum(f.impact for f in flags)
    return round(clamp(total / MAX_FLAG_IMPACT * 100, 0, 100), 2)


def fraud_probability_for(score: int, flags: List[RedFlag]) -> float:
    prob = score / MAX_RISK * FRAUD_PROB_SCORE_WEIGHT + len(flags) * FRAUD_PROB_PER_FLAG
    return round(clamp(prob, 0, 100), 2)


def recommendations_for(flags: List[RedFlag], level: str) -> List[str]:
    recs: List[str] = []
    kinds = {f.type for f in flags}

    if level in ("critical", "high"):
        recs += ["Block listing immediately", "Investigate seller account",
                 "Review similar listings from same seller"]
    if "price" in kinds:
        recs += ["Verify pricing with market analysis", "Request price justification from seller"]
    if "certification" in kinds:
        recs += ["Request original certification documents", "Verify certification with issuing authority"]
    if "image" in kinds:
        recs += ["Request original product photos", "Verify image authenticity"]

    if not recs:
        recs = ["Monitor listing for unusual activity", "Regular compliance checks"]
    return recs


# -----------------------------
# Main entry
# -----------------------------
def analyze_for_fraud(request: FraudDetectionRequest, rng: random.Random) -> FraudDetectionResponse:
    """
    Runs price, seller, image, text and certification analyses and folds them
    into one 0..10 risk score, a level, an action and a list of red flags.
    Image and certification-image results come from `rng`; seed it for repeatable output.
    """
    price, seller = score_listing(request.price, request.seller_rating, request.seller_history,
                                  request.category, rng)
    analysis = DetailedAnalysis(
        price_analysis=price,
        seller_analysis=seller,
        image_analysis=analyze_images(request.certification_image, rng),
        text_analysis=analyze_text(request.description, request.product_name),
        certification_analysis=analyze_certification(
            request.product_name, request.description, request.certification_image, rng
        ),
    )

    score = calculate_risk_score(analysis)
    flags = identify_red_flags(analysis)
    level = risk_level_for(score)

    result = FraudDetectionResponse(
        risk_score=score,
        risk_level=level,
        red_flags=flags,
        recommended_action=action_for(score, flags),
        confidence=confidence_for(flags),
        fraud_probability=fraud_probability_for(score, flags),
        detailed_analysis=analysis,
        recommendations=recommendations_for(flags, level),
    )

    if level in ("high", "critical"):
        logger.warning(
            "High-risk fraud detection product=%s score=%s flags=%d action=%s",
            request.product_id, score, len(flags), result.recommended_action,
        )
    return result
