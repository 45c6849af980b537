from __future__ import annotations


class FraudDetectionError(Exception):
    """Base class for errors raised while processing a transactions file."""


class ParseError(FraudDetectionError):
    """The transactions CSV could not be read or is malformed."""


class SourceFileNotFoundError(ParseError, FileNotFoundError):
    """The configured transactions CSV does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Transactions file not found at {path}")


class InvalidAmountError(FraudDetectionError, ValueError):
    """A transaction amount is not a finite number."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid transaction amount: {value!r}")
