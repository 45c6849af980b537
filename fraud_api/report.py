from __future__ import annotations

import string
from dataclasses import dataclass
from itertools import islice
from typing import List, Sequence

from fraud_api.aggregator import FRAUD_FLAG, Statistics, compute_statistics
from fraud_api.parser import RawTransaction
from fraud_api.schemas import AnnotatedTransaction
from fraud_api.scorer import FraudScorer, parse_amount, risk_level


# Rows returned per table; fixed, not configurable
TABLE_LIMIT = 100


@dataclass
class FraudReport:
    statistics: Statistics
    transactions: List[AnnotatedTransaction]
    fraud_transactions: List[AnnotatedTransaction]


def mask_card_number(cc_num: str) -> str:
    """Hide all but the last four digits of a card number.

    Cards with fewer than four digits are left-padded with zeros so the
    result is always ``****`` plus four digits; the padding is not card data.
    """

    digits = "".join(ch for ch in cc_num if ch in string.digits)
    return "****" + digits[-4:].rjust(4, "0")


def annotate(record: RawTransaction) -> AnnotatedTransaction:
    return AnnotatedTransaction(
        trans_date_trans_time=record.trans_date_trans_time,
        cc_num=mask_card_number(record.cc_num),
        merchant=record.merchant,
        category=record.category,
        amt=parse_amount(record.amt),
        first=record.first,
        last=record.last,
        gender=record.gender,
        city=record.city,
        state=record.state,
        zip=record.zip,
        job=record.job,
        is_fraud=record.is_fraud == FRAUD_FLAG,
    )


def annotate_with_score(record: RawTransaction, scorer: FraudScorer) -> AnnotatedTransaction:
    fraud_score, analysis = scorer.score(record)
    row = annotate(record)
    row.fraud_score = fraud_score
    row.fraud_analysis = analysis
    row.risk_level = risk_level(fraud_score)
    return row


def build_report(records: Sequence[RawTransaction], scorer: FraudScorer) -> FraudReport:
    """Assemble statistics and the two transaction tables.

    ``transactions`` holds the first rows of the file regardless of their
    flag; ``fraud_transactions`` holds the first fraudulent rows, each scored
    and explained. Both keep file order and stop at ``TABLE_LIMIT`` rows.
    """

    statistics = compute_statistics(records)

    transactions = [annotate(record) for record in records[:TABLE_LIMIT]]

    fraudulent = (record for record in records if record.is_fraud == FRAUD_FLAG)
    fraud_transactions = [
        annotate_with_score(record, scorer)
        for record in islice(fraudulent, TABLE_LIMIT)
    ]

    return FraudReport(
        statistics=statistics,
        transactions=transactions,
        fraud_transactions=fraud_transactions,
    )
