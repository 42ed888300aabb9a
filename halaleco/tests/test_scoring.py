# tests/test_scoring.py
import random

from halaleco.schemas import SellerHistory
from halaleco.services.scoring import analyze_pricing, analyze_seller, leading_number, score


def test_leading_number():
    assert leading_number("$12.50 USD") == 12.5
    assert leading_number("RM 0.99") == 0.99
    assert leading_number("free") is None
    assert leading_number(None) is None
    assert leading_number("n/a") is None


def test_price_without_digits_is_not_suspicious(rng):
    p = analyze_pricing("Call for price", "food", rng)
    assert p.market_price == 15.0
    assert p.price_category == "normal"
    assert not p.is_price_suspicious
    assert p.price_deviation == 0.0
    assert len(p.competitor_prices) == 5


def test_very_low_price(rng):
    p = analyze_pricing("1.00", "food", rng)
    assert p.market_price == 15.0
    assert p.price_category == "very_low"
    assert p.is_price_suspicious
    assert len(p.competitor_prices) == 5
    assert all(12.0 <= c <= 18.0 for c in p.competitor_prices)


def test_price_bands(rng):
    assert analyze_pricing("15", "food", rng).price_category == "normal"
    assert analyze_pricing("10", "food", rng).price_category == "low"
    assert analyze_pricing("20", "food", rng).price_category == "high"
    assert analyze_pricing("30", "food", rng).price_category == "very_high"
    # unknown category uses the default base price
    assert analyze_pricing("20", "toys", rng).market_price == 20.0


def test_competitor_prices_follow_seed():
    a = analyze_pricing("15", "food", random.Random(1)).competitor_prices
    b = analyze_pricing("15", "food", random.Random(1)).competitor_prices
    assert a == b


def test_fraudulent_seller_clamps_to_zero():
    s = analyze_seller(1.0, SellerHistory(account_age=5, total_sales=2, return_rate=30, complaint_count=15))
    assert s.trust_score == 0
    assert s.behavior_pattern == "fraudulent"
    assert s.account_flags == ["Account less than 30 days old", "Return rate: 30%", "15 complaints"]
    assert "Very low seller rating" in s.risk_factors
    assert not s.verification_status


def test_established_seller():
    s = analyze_seller(4.8, SellerHistory(account_age=400, total_sales=2000))
    assert s.trust_score == 75
    assert s.behavior_pattern == "normal"
    assert s.risk_factors == []
    assert s.verification_status


def test_suspicious_seller():
    s = analyze_seller(4.0, SellerHistory(account_age=60, total_sales=20, return_rate=15))
    assert s.trust_score == 30
    assert s.behavior_pattern == "suspicious"
    assert s.risk_factors == ["Relatively new seller", "Above average return rate"]


def test_score_combines_price_and_seller(rng):
    price, seller = score("$1", 1.5, SellerHistory(account_age=10, total_sales=2, return_rate=30,
                                                    complaint_count=15), "food", rng)
    assert price.price_category == "very_low"
    assert seller.behavior_pattern == "fraudulent"
    assert seller.trust_score == 0
