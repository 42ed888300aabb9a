# scoring.py
from __future__ import annotations
import random
import re
from typing import List, Tuple

from ..rules.tables import CATEGORY_BASE_PRICES, DEFAULT_BASE_PRICE
from ..schemas import PriceAnalysis, SellerAnalysis, SellerHistory

# -----------------------------
# Tunables
# -----------------------------
PRICE_BANDS = {
    "very_low": 75.0,   # deviation > 75  → very_low
    "low": 25.0,        # deviation > 25  → low
    "high": -25.0,      # deviation < -25 → high
    "very_high": -75.0, # deviation < -75 → very_high
}
SUSPICIOUS_DEVIATION = 50.0
COMPETITOR_COUNT = 5
COMPETITOR_SPREAD = 0.4  # ±20%

SELLER_BASE_TRUST = 50
SELLER_WEIGHTS = {
    "rating_very_low": -30,   # < 2.0
    "rating_low": -15,        # < 3.5
    "rating_high": 10,        # > 4.5
    "account_new": -20,       # < 30 days
    "account_young": -10,     # < 90 days
    "sales_few": -15,         # < 10
    "sales_many": 15,         # > 1000
    "returns_high": -25,      # > 20%
    "returns_elevated": -10,  # > 10%
    "complaints_many": -20,   # > 10
    "complaints_some": -10,   # > 5
}
BEHAVIOR_THRESHOLDS = {
    "fraudulent": 30,  # < 30
    "suspicious": 50,  # < 50
}

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"^\d*\.?\d+|^\d+")


# -----------------------------
# Helpers
# -----------------------------
def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def leading_number(raw: str | None) -> float | None:
    """'$12.50 USD' -> 12.5, 'n/a' -> None."""
    cleaned = _NON_NUMERIC.sub("", raw or "")
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


def estimate_market_price(category: str | None) -> float:
    return CATEGORY_BASE_PRICES.get((category or "").lower(), DEFAULT_BASE_PRICE)


def price_category_for(deviation: float) -> str:
    if deviation > PRICE_BANDS["very_low"]:
        return "very_low"
    if deviation > PRICE_BANDS["low"]:
        return "low"
    if deviation < PRICE_BANDS["very_high"]:
        return "very_high"
    if deviation < PRICE_BANDS["high"]:
        return "high"
    return "normal"


def behavior_for(trust: int) -> str:
    if trust < BEHAVIOR_THRESHOLDS["fraudulent"]:
        return "fraudulent"
    if trust < BEHAVIOR_THRESHOLDS["suspicious"]:
        return "suspicious"
    return "normal"


def competitor_prices(market_price: float, rng: random.Random) -> List[float]:
    return [
        round(market_price * (1 + (rng.random() - 0.5) * COMPETITOR_SPREAD), 2)
        for _ in range(COMPETITOR_COUNT)
    ]


# -----------------------------
# Price
# -----------------------------
def analyze_pricing(price: str | None, category: str | None, rng: random.Random) -> PriceAnalysis:
    amount = leading_number(price)
    market = estimate_market_price(category)
    if amount is None:
        # no number to compare: reported at market, never suspicious
        return PriceAnalysis(
            market_price=market,
            price_deviation=0.0,
            is_price_suspicious=False,
            price_category="normal",
            competitor_prices=competitor_prices(market, rng),
        )

    deviation = (market - amount) / market * 100
    return PriceAnalysis(
        market_price=market,
        price_deviation=round(deviation, 2),
        is_price_suspicious=abs(deviation) > SUSPICIOUS_DEVIATION,
        price_category=price_category_for(deviation),
        competitor_prices=competitor_prices(market, rng),
    )


# -----------------------------
# Seller
# -----------------------------
def seller_trust(rating: float, history: SellerHistory) -> Tuple[int, List[str], List[str]]:
    """
    Returns (raw_trust, risk_factors, account_flags).
    raw_trust is NOT clamped; callers clamp for display.
    """
    w = SELLER_WEIGHTS
    risk: List[str] = []
    flags: List[str] = []
    trust = SELLER_BASE_TRUST

    if rating < 2.0:
        trust += w["rating_very_low"]; risk.append("Very low seller rating")
    elif rating < 3.5:
        trust += w["rating_low"]; risk.append("Below average seller rating")
    elif rating > 4.5:
        trust += w["rating_high"]

    if history.account_age < 30:
        trust += w["account_new"]; risk.append("New seller account")
        flags.append("Account less than 30 days old")
    elif history.account_age < 90:
        trust += w["account_young"]; risk.append("Relatively new seller")

    if history.total_sales < 10:
        trust += w["sales_few"]; risk.append("Limited sales history")
    elif history.total_sales > 1000:
        trust += w["sales_many"]

    if history.return_rate > 20:
        trust += w["returns_high"]; risk.append("High return rate")
        flags.append(f"Return rate: {history.return_rate:g}%")
    elif history.return_rate > 10:
        trust += w["returns_elevated"]; risk.append("Above average return rate")

    if history.complaint_count > 10:
        trust += w["complaints_many"]; risk.append("Multiple customer complaints")
        flags.append(f"{history.complaint_count} complaints")
    elif history.complaint_count > 5:
        trust += w["complaints_some"]; risk.append("Some customer complaints")

    return trust, risk, flags


def analyze_seller(rating: float, history: SellerHistory) -> SellerAnalysis:
    raw, risk, flags = seller_trust(rating, history)
    return SellerAnalysis(
        trust_score=int(clamp(raw, 0, 100)),
        risk_factors=risk,
        account_flags=flags,
        behavior_pattern=behavior_for(raw),
        verification_status=history.account_age > 90 and history.total_sales > 50,
    )


def score(price: str | None, rating: float, history: SellerHistory, category: str | None,
          rng: random.Random) -> Tuple[PriceAnalysis, SellerAnalysis]:
    return analyze_pricing(price, category, rng), analyze_seller(rating, history)
