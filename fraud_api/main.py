from __future__ import annotations

from typing import Sequence
import logging
from logging.handlers import RotatingFileHandler

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fraud_api.config import Settings, get_settings
from fraud_api.parser import RawTransaction, TransactionParser
from fraud_api.report import build_report, mask_card_number
from fraud_api.schemas import (
    ErrorResponse,
    FraudDetectionResponse,
    StatisticsResponse,
    StatusResponse,
)
from fraud_api.scorer import FraudScorer


API_ROUTE = "/api/fraud-detection"
SAMPLE_SIZE = 5


app = FastAPI(
    title="Fraud Detection System API",
    description=(
        "Loads a credit-card transactions CSV, summarises fraud vs. legitimate "
        "activity and scores the flagged transactions with a heuristic model."
    ),
    version="1.0.0",
)

# Allow the dashboard frontend to call this API. Adjust origins in real deployments.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach a rotating file handler to the service logger."""

    logger = logging.getLogger("fraud_api")
    logger.setLevel(settings.log_level)
    if logger.handlers:
        return logger

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / "fraud_detection.log"

    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.propagate = False
    return logger


logger = configure_logging(get_settings())


def get_scorer() -> FraudScorer:
    return FraudScorer()


def _log_transaction_sample(records: Sequence[RawTransaction]) -> None:
    logger.info("Total transactions loaded: %d", len(records))
    for index, record in enumerate(records[:SAMPLE_SIZE], start=1):
        logger.info(
            "sample=%d time=%s card=%s merchant=%s category=%s amount=%s "
            "location=%s, %s customer=%s %s fraud=%s",
            index,
            record.trans_date_trans_time,
            mask_card_number(record.cc_num),
            record.merchant,
            record.category,
            record.amt,
            record.city,
            record.state,
            record.first,
            record.last,
            "YES" if record.is_fraud == "1" else "NO",
        )


@app.get("/health", summary="Health check")
async def health_check() -> dict:
    """Simple health endpoint to verify that the API is running."""

    return {"status": "ok"}


@app.get(API_ROUTE, response_model=StatusResponse, summary="Describe the fraud detection API")
async def fraud_detection_status() -> StatusResponse:
    return StatusResponse(
        message="Fraud Detection System API is running",
        endpoints={"POST": f"{API_ROUTE} - Process fraud test data"},
    )


@app.post(
    API_ROUTE,
    response_model=FraudDetectionResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Summarise and score the configured transactions file",
)
def process_transactions(
    settings: Settings = Depends(get_settings),
    scorer: FraudScorer = Depends(get_scorer),
):
    """Process the transactions CSV in one go.

    Steps:
    1. Parse the configured CSV into transaction records.
    2. Count fraudulent and legitimate rows.
    3. Score and explain the first fraudulent rows.
    Either everything succeeds or an error body is returned.
    """

    try:
        records = TransactionParser(settings.csv_path).parse()
        _log_transaction_sample(records)
        report = build_report(records, scorer)
    except FileNotFoundError:
        logger.warning("Transactions file not found at %s", settings.csv_path)
        return JSONResponse(
            status_code=404,
            content={"error": f"{settings.csv_path.name} file not found in data directory"},
        )
    except Exception:
        logger.exception("Error processing CSV data from %s", settings.csv_path)
        return JSONResponse(status_code=500, content={"error": "Failed to process CSV data"})

    stats = report.statistics
    logger.info(
        "summary total=%d fraud=%d legitimate=%d fraud_pct=%s scored=%d",
        stats.total,
        stats.fraud,
        stats.legitimate,
        stats.fraud_percentage,
        len(report.fraud_transactions),
    )

    return FraudDetectionResponse(
        success=True,
        message="CSV data processed and logged successfully",
        statistics=StatisticsResponse(
            total_transactions=stats.total,
            fraud_transactions=stats.fraud,
            legitimate_transactions=stats.legitimate,
            fraud_percentage=stats.fraud_percentage,
        ),
        transactions=report.transactions,
        fraud_transactions=report.fraud_transactions,
    )
