# halaleco/rules/red_flags.py
from __future__ import annotations
from typing import Callable, List, Tuple

from ..schemas import DetailedAnalysis, RedFlag

Rule = Callable[[DetailedAnalysis], Tuple[bool, RedFlag | None]]


def very_low_price(a: DetailedAnalysis):
    p = a.price_analysis
    if p.price_category != "very_low":
        return False, None
    return True, RedFlag(
        type="price", severity="high", impact=4,
        description="Price significantly below market average",
        evidence=f"Price is {abs(p.price_deviation):.1f}% below market",
    )


def fraudulent_seller(a: DetailedAnalysis):
    s = a.seller_analysis
    if s.behavior_pattern != "fraudulent":
        return False, None
    return True, RedFlag(
        type="seller", severity="critical", impact=5,
        description="Seller profile indicates fraudulent behavior",
        evidence=f"Trust score: {s.trust_score}",
    )


def duplicate_images(a: DetailedAnalysis):
    if not a.image_analysis.duplicate_detected:
        return False, None
    return True, RedFlag(
        type="image", severity="high", impact=4,
        description="Product images found in other listings",
        evidence="Duplicate image detection positive",
    )


def suspicious_language(a: DetailedAnalysis):
    kw = a.text_analysis.suspicious_keywords
    if not kw:
        return False, None
    return True, RedFlag(
        type="text", severity="medium", impact=3,
        description="Suspicious marketing language detected",
        evidence=f"Keywords: {', '.join(kw)}",
    )


def certification_issues(a: DetailedAnalysis):
    elems = a.certification_analysis.suspicious_elements
    if not elems:
        return False, None
    return True, RedFlag(
        type="certification", severity="high", impact=4,
        description="Certification issues detected",
        evidence=", ".join(elems),
    )


DEFAULT_RULES: List[Rule] = [
    very_low_price,
    fraudulent_seller,
    duplicate_images,
    suspicious_language,
    certification_issues,
]


def identify_red_flags(analysis: DetailedAnalysis, rules: List[Rule] = DEFAULT_RULES) -> List[RedFlag]:
    flags: List[RedFlag] = []
    for rule in rules:
        hit, flag = rule(analysis)
        if hit:
            flags.append(flag)
    return flags
