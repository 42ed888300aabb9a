# halaleco/services/imagery.py
"""
Simulated image checks.

There is no vision model behind these: quality, duplicate and manipulation
results are drawn from the supplied `random.Random`. Pass a seeded instance
for reproducible output (see Settings.RANDOM_SEED and make_rng).
"""
from __future__ import annotations
import random

from ..schemas import CertificationAnalysis, ImageAnalysis

DUPLICATE_RATE = 0.10
MANIPULATION_RATE = 0.05
CERT_IMAGE_INVALID_RATE = 0.20
BLOCKCHAIN_UNVERIFIED_RATE = 0.30
AUTHENTIC_QUALITY_FLOOR = 70


def make_rng(seed: int | None = None) -> random.Random:
    return random.Random(seed)


def analyze_images(certification_image: str | None, rng: random.Random) -> ImageAnalysis:
    suspicious = []

    quality = rng.random() * 40 + 60  # 60..100
    duplicate = rng.random() < DUPLICATE_RATE
    if duplicate:
        suspicious.append("Image appears in multiple listings")

    manipulated = rng.random() < MANIPULATION_RATE
    if manipulated:
        suspicious.append("Possible image manipulation detected")

    cert_valid = False
    if certification_image:
        cert_valid = rng.random() > CERT_IMAGE_INVALID_RATE
        if not cert_valid:
            suspicious.append("Certification image appears invalid or altered")

    return ImageAnalysis(
        is_authentic=not duplicate and not manipulated and quality > AUTHENTIC_QUALITY_FLOOR,
        duplicate_detected=duplicate,
        quality_score=round(quality, 2),
        manipulation_detected=manipulated,
        certification_image_valid=cert_valid,
        suspicious_elements=suspicious,
    )


def analyze_certification(product_name: str, description: str, certification_image: str | None,
                          rng: random.Random) -> CertificationAnalysis:
    suspicious = []
    claims_halal = "halal" in (description or "").lower() or "halal" in (product_name or "").lower()
    has_cert = bool(certification_image)

    if claims_halal and not has_cert:
        suspicious.append("Claims to be Halal but no certification provided")

    authenticity = 0.0
    onchain = False
    if has_cert:
        authenticity = round(rng.random() * 30 + 70, 2)
        onchain = rng.random() > BLOCKCHAIN_UNVERIFIED_RATE

    return CertificationAnalysis(
        has_valid_certification=has_cert,
        certification_authority="JAKIM Malaysia" if has_cert else "None",
        image_authenticity=authenticity,
        blockchain_verified=onchain,
        suspicious_elements=suspicious,
    )
