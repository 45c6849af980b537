from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Union

import pandas as pd

from fraud_api.errors import ParseError, SourceFileNotFoundError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawTransaction:
    """One row of the transactions CSV, every field kept as trimmed text."""

    trans_date_trans_time: str
    cc_num: str
    merchant: str
    category: str
    amt: str
    first: str
    last: str
    gender: str
    street: str
    city: str
    state: str
    zip: str
    lat: str
    long: str
    city_pop: str
    job: str
    dob: str
    trans_num: str
    unix_time: str
    merch_lat: str
    merch_long: str
    is_fraud: str


# Header names a transactions file must provide, in RawTransaction order
REQUIRED_COLUMNS = tuple(f.name for f in fields(RawTransaction))


def _check_field_counts(text: str, path: Path) -> None:
    """Raise ParseError if any data row has more or fewer fields than the header.

    pandas pads short rows with blanks once NA detection is off, so the
    counts are checked on the raw rows.
    """

    rows = (row for row in csv.reader(io.StringIO(text)) if row)
    header = next(rows, None)
    if header is None:
        return
    for number, row in enumerate(rows, start=1):
        if len(row) != len(header):
            raise ParseError(
                f"Data row {number} in {path} has {len(row)} fields, header has {len(header)}"
            )


class TransactionParser:
    """Read a transactions CSV into an ordered list of ``RawTransaction``.

    Columns are matched by header name, so their order in the file does not
    matter and extra columns (such as an unnamed index column) are ignored.
    Blank lines are skipped and every header and value is stripped of
    surrounding whitespace.
    """

    def __init__(self, csv_path: Union[str, Path]):
        self.csv_path = Path(csv_path)

    def parse(self) -> List[RawTransaction]:
        path = self.csv_path
        if not path.exists():
            raise SourceFileNotFoundError(path)

        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as exc:
            raise ParseError(f"Could not read transactions file {path}: {exc}") from exc

        _check_field_counts(text, path)

        try:
            df = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            # Nothing at all in the file, not even a header
            logger.debug("Transactions file %s is empty", path)
            return []
        except pd.errors.ParserError as exc:
            raise ParseError(f"Could not read transactions file {path}: {exc}") from exc

        df.columns = [str(c).strip() for c in df.columns]
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ParseError(
                f"Missing columns {missing} in {path} ({len(df.columns)} columns found)"
            )

        df = df[list(REQUIRED_COLUMNS)].copy()
        for column in REQUIRED_COLUMNS:
            df[column] = df[column].str.strip()

        records = [RawTransaction(**row) for row in df.to_dict(orient="records")]
        logger.debug("Parsed %d transactions from %s", len(records), path)
        return records
