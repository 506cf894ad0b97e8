"""
groshi API schemas.

- timestamps: shared RFC-3339 encoding for every date field and parameter
- models: response entities decoded from JSON
- params: per-endpoint request parameters with explicit optional fields
"""

from .models import Authorization, Currency, Transaction, TransactionsSummary, User
from .params import (
    Credentials,
    TransactionCreate,
    TransactionsQuery,
    TransactionsSummaryQuery,
    TransactionUpdate,
    UserUpdate,
)
from .timestamps import format_timestamp, parse_timestamp

__all__ = [
    "Authorization",
    "Credentials",
    "Currency",
    "Transaction",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionsQuery",
    "TransactionsSummary",
    "TransactionsSummaryQuery",
    "User",
    "UserUpdate",
    "format_timestamp",
    "parse_timestamp",
]
