import pandas as pd
import pytest
from fastapi.testclient import TestClient

from fraud_api.config import Settings, get_settings
from fraud_api.main import app, get_scorer
from fraud_api.parser import REQUIRED_COLUMNS
from fraud_api.scorer import FraudScorer


BASE_ROW = {
    "trans_date_trans_time": "2020-06-21 12:14:25",
    "cc_num": "2291163933867244",
    "merchant": "fraud_Kirlin and Sons",
    "category": "personal_care",
    "amt": "2.86",
    "first": "Jeff",
    "last": "Elliott",
    "gender": "M",
    "street": "351 Darlene Green",
    "city": "Columbia",
    "state": "SC",
    "zip": "29209",
    "lat": "33.9659",
    "long": "-80.9355",
    "city_pop": "333497",
    "job": "Mechanical engineer",
    "dob": "1968-03-19",
    "trans_num": "2da90c7d74bd46a0caf3777415b3ebd3",
    "unix_time": "1371816865",
    "merch_lat": "33.986391",
    "merch_long": "-81.200714",
    "is_fraud": "0",
}


class FixedRandom:
    """Stands in for a numpy Generator; ``uniform`` always returns ``value``."""

    def __init__(self, value=0.0):
        self.value = value

    def uniform(self, low, high):
        return self.value


@pytest.fixture
def make_row():
    def _make_row(**overrides):
        row = dict(BASE_ROW)
        row.update(overrides)
        return row

    return _make_row


@pytest.fixture
def write_transactions(tmp_path):
    """Write rows to a CSV with the columns in the order of the real dataset."""

    def _write(rows, name="fraudTest.csv"):
        path = tmp_path / name
        pd.DataFrame(rows, columns=list(REQUIRED_COLUMNS)).to_csv(path, index=False)
        return path

    return _write


@pytest.fixture
def client(tmp_path):
    csv_path = tmp_path / "fraudTest.csv"
    settings = Settings(csv_path=csv_path, log_dir=tmp_path / "logs")

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_scorer] = lambda: FraudScorer(rng=FixedRandom(0.0))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def scorer_with_noise():
    def _scorer(noise=0.0):
        return FraudScorer(rng=FixedRandom(noise))

    return _scorer
