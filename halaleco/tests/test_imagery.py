# tests/test_imagery.py
import random

from halaleco.services.imagery import analyze_certification, analyze_images, make_rng


def test_image_scores_stay_in_range():
    for seed in range(25):
        img = analyze_images(None, random.Random(seed))
        assert 60 <= img.quality_score <= 100
        assert not img.certification_image_valid
        if img.duplicate_detected or img.manipulation_detected:
            assert not img.is_authentic


def test_same_seed_same_result():
    assert analyze_images("cert.png", make_rng(42)) == analyze_images("cert.png", make_rng(42))


def test_halal_claim_without_certificate(rng):
    c = analyze_certification("Halal Chicken", "", None, rng)
    assert c.suspicious_elements == ["Claims to be Halal but no certification provided"]
    assert not c.has_valid_certification
    assert c.certification_authority == "None"
    assert c.image_authenticity == 0


def test_certificate_image_present(rng):
    c = analyze_certification("Dates", "premium dates", "cert.png", rng)
    assert c.has_valid_certification
    assert c.certification_authority == "JAKIM Malaysia"
    assert 70 <= c.image_authenticity <= 100
    assert c.suspicious_elements == []
