# halaleco/services/text_analysis.py
import re
from typing import List

from ..rules.tables import CLAIM_PATTERNS, NEGATIVE_WORDS, POSITIVE_WORDS, SUSPICIOUS_KEYWORDS
from ..schemas import ClaimVerification, TextAnalysis
from .scoring import clamp

UNVERIFIED_CLAIM_CONFIDENCE = 30
_CLAIMS = [(re.compile(p, re.IGNORECASE), label) for p, label in CLAIM_PATTERNS]


def language_quality(text: str) -> int:
    words = text.split(" ")
    avg_len = len(re.sub(r"\s", "", text)) / len(words)
    score = 70
    if avg_len < 3:
        score -= 20
    if len(words) < 10:
        score -= 15
    if "!!!" in text or "???" in text:
        score -= 10
    return int(clamp(score, 0, 100))


def grammar_score(text: str) -> int:
    score = 80
    if "  " in text:
        score -= 5
    if not re.search(r"[.!?]$", text.strip()):
        score -= 10
    if len(text.split(".")) < 2:
        score -= 10
    return int(clamp(score, 0, 100))


def suspicious_keywords(text: str) -> List[str]:
    return [k for k in SUSPICIOUS_KEYWORDS if k in text]


def unverifiable_claims(text: str) -> List[ClaimVerification]:
    return [
        ClaimVerification(claim=label, is_verifiable=False, confidence=UNVERIFIED_CLAIM_CONFIDENCE)
        for rx, label in _CLAIMS
        if rx.search(text)
    ]


def sentiment(text: str) -> float:
    score = 0.1 * sum(1 for w in POSITIVE_WORDS if w in text)
    score -= 0.1 * sum(1 for w in NEGATIVE_WORDS if w in text)
    return round(clamp(score, -1.0, 1.0), 2)


def analyze_text(description: str | None, product_name: str | None) -> TextAnalysis:
    text = f"{product_name or ''} {description or ''}".lower()
    return TextAnalysis(
        language_quality=language_quality(text),
        grammar_score=grammar_score(text),
        suspicious_keywords=suspicious_keywords(text),
        claims_verification=unverifiable_claims(text),
        sentiment_score=sentiment(text),
    )
