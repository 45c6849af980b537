from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from fraud_api.errors import InvalidAmountError
from fraud_api.parser import RawTransaction


HIGH_RISK_CATEGORIES = frozenset({"shopping_net", "misc_net", "grocery_pos"})
MEDIUM_RISK_CATEGORIES = frozenset({"gas_transport", "shopping_pos"})

AMOUNT_DIVISOR = 10
AMOUNT_CAP = 40
HIGH_RISK_CATEGORY_POINTS = 25
MEDIUM_RISK_CATEGORY_POINTS = 15
NIGHT_HOUR_POINTS = 15
OFF_PEAK_HOUR_POINTS = 10
NOISE_RANGE = 10.0

MAX_SCORE = 100


def parse_amount(value: str) -> float:
    """Parse the ``amt`` text of a transaction into a finite float."""

    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidAmountError(value) from exc
    if not math.isfinite(amount):
        raise InvalidAmountError(value)
    return amount


def transaction_hour(timestamp: str) -> Optional[int]:
    """Hour of day as written in the timestamp, or None if it cannot be read.

    Timezone offsets are not applied; ``"2020-06-21 23:05:00"`` is hour 23.
    """

    parsed = pd.to_datetime(timestamp, errors="coerce")
    if not pd.isna(parsed):
        return int(parsed.hour)

    # Dates outside the nanosecond Timestamp range come back as NaT
    try:
        return datetime.fromisoformat(timestamp.strip()).hour
    except (AttributeError, ValueError):
        return None


def is_night_hour(hour: Optional[int]) -> bool:
    return hour is not None and (hour >= 22 or hour <= 5)


def is_off_peak_hour(hour: Optional[int]) -> bool:
    # Overlaps the night window for hours 0-5 and 22-23
    return hour is not None and (hour >= 18 or hour <= 8)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def risk_level(score: int) -> str:
    """Map a fraud score to the qualitative band shown to analysts."""

    if score >= 80:
        return "High Risk"
    if score >= 60:
        return "Medium Risk"
    if score >= 40:
        return "Low Risk"
    return "Very Low Risk"


class FraudScorer:
    """Heuristic 0-100 fraud score for transactions already flagged as fraud.

    The score adds up an amount contribution (capped at 40 points), a
    merchant category contribution, a time-of-day contribution and a random
    term drawn from ``rng.uniform(0, 10)``. ``rng`` is any object exposing
    ``uniform(low, high)``; it defaults to an unseeded numpy generator, so
    pass a seeded one (or a stub) for reproducible scores.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def base_score(self, amount: float, category: str, hour: Optional[int]) -> float:
        """Deterministic part of the score, before noise and rounding."""

        score = min(amount / AMOUNT_DIVISOR, AMOUNT_CAP)

        if category in HIGH_RISK_CATEGORIES:
            score += HIGH_RISK_CATEGORY_POINTS
        elif category in MEDIUM_RISK_CATEGORIES:
            score += MEDIUM_RISK_CATEGORY_POINTS

        if is_night_hour(hour):
            score += NIGHT_HOUR_POINTS
        elif is_off_peak_hour(hour):
            score += OFF_PEAK_HOUR_POINTS

        return score

    def score(self, record: RawTransaction) -> Tuple[int, str]:
        """Return ``(fraud_score, fraud_analysis)`` for one transaction."""

        amount = parse_amount(record.amt)
        hour = transaction_hour(record.trans_date_trans_time)

        raw = self.base_score(amount, record.category, hour)
        raw += float(self.rng.uniform(0.0, NOISE_RANGE))
        fraud_score = max(0, min(_round_half_up(raw), MAX_SCORE))

        analysis = build_analysis(amount, record.category, hour, fraud_score)
        return fraud_score, analysis


def build_analysis(amount: float, category: str, hour: Optional[int], score: int) -> str:
    """Explain which factors contributed to a fraud score."""

    factors: List[str] = []

    if amount > 500:
        factors.append("high transaction amount")
    if amount > 1000:
        factors.append("unusually high amount")
    if category in HIGH_RISK_CATEGORIES:
        factors.append("high-risk category")
    if is_night_hour(hour):
        factors.append("unusual transaction time")
    if is_off_peak_hour(hour):
        factors.append("off-peak hours")

    if factors:
        text = f"Detected due to: {', '.join(factors)}. "
    else:
        text = "Detected through pattern analysis. "

    return text + f"Transaction flagged with {score}% fraud probability."
