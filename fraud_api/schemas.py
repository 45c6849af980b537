from pydantic import BaseModel, ConfigDict, Field, conint
from typing import Dict, List, Optional


class StatisticsResponse(BaseModel):
    """Fraud vs. legitimate counts over the whole transactions file."""

    model_config = ConfigDict(populate_by_name=True)

    total_transactions: int = Field(..., alias="totalTransactions", description="Number of rows in the file")
    fraud_transactions: int = Field(..., alias="fraudTransactions", description="Rows with is_fraud == '1'")
    legitimate_transactions: int = Field(
        ..., alias="legitimateTransactions", description="Rows with is_fraud == '0'"
    )
    fraud_percentage: str = Field(
        ..., alias="fraudPercentage", description="Fraud share with two decimals, e.g. '0.39%'"
    )


class AnnotatedTransaction(BaseModel):
    """Transaction row as displayed in the dashboard table."""

    trans_date_trans_time: str
    cc_num: str = Field(..., description="Card number masked to its last four digits, e.g. '****1234'")
    merchant: str
    category: str
    amt: float
    first: str
    last: str
    gender: str
    city: str
    state: str
    zip: str
    job: str
    is_fraud: bool
    fraud_score: Optional[conint(ge=0, le=100)] = Field(
        default=None, description="Heuristic fraud score, only set on fraudulent rows"
    )
    fraud_analysis: Optional[str] = Field(
        default=None, description="Human-readable reasons behind fraud_score"
    )
    risk_level: Optional[str] = Field(
        default=None, description="Qualitative band derived from fraud_score"
    )


class FraudDetectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    statistics: StatisticsResponse
    transactions: List[AnnotatedTransaction] = Field(default_factory=list)
    fraud_transactions: List[AnnotatedTransaction] = Field(
        default_factory=list, alias="fraudTransactions"
    )


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    message: str
    endpoints: Dict[str, str]
