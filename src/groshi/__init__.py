"""
Typed client library for the groshi personal finance API.

Builds requests from typed parameters, sends them with a bounded timeout,
and turns responses into dataclasses or typed exceptions.
"""

from .api_client import (
    GroshiAPIError,
    GroshiClient,
    GroshiDecodeError,
    GroshiError,
    GroshiTokenRequiredError,
    GroshiTransportError,
)
from .schemas import Authorization, Currency, Transaction, TransactionsSummary, User

__version__ = "0.1.0"

__all__ = [
    "Authorization",
    "Currency",
    "GroshiAPIError",
    "GroshiClient",
    "GroshiDecodeError",
    "GroshiError",
    "GroshiTokenRequiredError",
    "GroshiTransportError",
    "Transaction",
    "TransactionsSummary",
    "User",
]
