# src/service/errors.py
from __future__ import annotations
from typing import List, Optional


class SavingsServiceError(Exception):
    """Base class for errors raised by the savings service."""


class SubmissionError(SavingsServiceError):
    """Malformed request: missing or out-of-range fields. Maps to a 400."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class ConfigError(SavingsServiceError):
    """Missing or malformed configuration (e.g. the email API key). Maps to a 500."""


class EmailDeliveryError(SavingsServiceError):
    """The email provider rejected the message or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CrmSubmissionError(SavingsServiceError):
    """The CRM form endpoint could not be reached."""
