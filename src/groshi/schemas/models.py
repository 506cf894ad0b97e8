"""
groshi API response entities.

Each entity is built from the decoded JSON with ``from_api_response``.
Missing keys, wrong value types and unparsable timestamps raise
``KeyError``, ``TypeError`` or ``ValueError``; the client turns those into
``GroshiDecodeError``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .timestamps import parse_timestamp


def _require(data: dict, key: str, expected: type | tuple[type, ...]) -> Any:
    """Fetch a required key and check its JSON type."""
    value = data[key]
    # bool is an int subclass, but never a valid amount or count
    if isinstance(value, bool) and expected is int:
        raise TypeError(f"Field '{key}' must be int, got bool")
    if not isinstance(value, expected):
        raise TypeError(f"Field '{key}' has unexpected type {type(value).__name__}")
    return value


def _require_mapping(data: object) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"Expected JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Authorization:
    """Bearer token issued by /auth/login or /auth/refresh."""

    token: str
    expires_at: datetime

    @classmethod
    def from_api_response(cls, data: dict) -> "Authorization":
        data = _require_mapping(data)
        return cls(
            token=_require(data, "token", str),
            expires_at=parse_timestamp(data["expires_at"]),
        )


@dataclass(frozen=True)
class User:
    """The authenticated account."""

    username: str

    @classmethod
    def from_api_response(cls, data: dict) -> "User":
        data = _require_mapping(data)
        return cls(username=_require(data, "username", str))


@dataclass(frozen=True)
class Transaction:
    """
    A single financial transaction.

    Amounts are signed integers in the smallest currency unit (e.g. cents):
    negative values are outcome, positive values are income.
    """

    id: str
    amount: int
    currency: str
    timestamp: datetime
    created_at: datetime
    updated_at: datetime
    description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Transaction":
        data = _require_mapping(data)

        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise TypeError("Field 'description' must be a string")

        return cls(
            id=_require(data, "uuid", str),
            amount=_require(data, "amount", int),
            currency=_require(data, "currency", str),
            timestamp=parse_timestamp(data["timestamp"]),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
            # Empty description means absent
            description=description or None,
        )


@dataclass(frozen=True)
class TransactionsSummary:
    """Aggregate over the transactions of one currency in a time range."""

    currency: str
    income: int
    outcome: int
    total: int
    transactions_count: int

    @classmethod
    def from_api_response(cls, data: dict) -> "TransactionsSummary":
        data = _require_mapping(data)
        return cls(
            currency=_require(data, "currency", str),
            income=_require(data, "income", int),
            outcome=_require(data, "outcome", int),
            total=_require(data, "total", int),
            transactions_count=_require(data, "transactions_count", int),
        )


@dataclass(frozen=True)
class Currency:
    """Currency supported by the server.

    Keys other than ``code`` and ``symbol`` are kept in ``metadata``.
    """

    code: str
    symbol: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict) -> "Currency":
        data = _require_mapping(data)

        symbol = data.get("symbol")
        if symbol is not None and not isinstance(symbol, str):
            raise TypeError("Field 'symbol' must be a string")

        return cls(
            code=_require(data, "code", str),
            symbol=symbol,
            metadata={k: v for k, v in data.items() if k not in ("code", "symbol")},
        )
