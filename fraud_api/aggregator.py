from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from fraud_api.parser import RawTransaction


FRAUD_FLAG = "1"
LEGITIMATE_FLAG = "0"


@dataclass(frozen=True)
class Statistics:
    total: int
    fraud: int
    legitimate: int
    fraud_percentage: str


def format_percentage(fraud: int, total: int) -> str:
    """Format ``fraud / total`` as a percentage string with two decimals.

    An empty dataset has no fraud, so it reports ``"0.00%"`` instead of
    dividing by zero.
    """

    if total == 0:
        return "0.00%"
    return f"{fraud / total * 100:.2f}%"


def compute_statistics(records: Iterable[RawTransaction]) -> Statistics:
    """Count fraudulent and legitimate transactions in a single pass.

    Flags other than ``"0"`` and ``"1"`` count toward the total only.
    """

    total = fraud = legitimate = 0
    for record in records:
        total += 1
        if record.is_fraud == FRAUD_FLAG:
            fraud += 1
        elif record.is_fraud == LEGITIMATE_FLAG:
            legitimate += 1

    return Statistics(
        total=total,
        fraud=fraud,
        legitimate=legitimate,
        fraud_percentage=format_percentage(fraud, total),
    )
