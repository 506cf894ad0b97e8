"""
Request parameter structures, one per endpoint that takes parameters.

Optional fields are ``None`` when absent. Absent fields are left out of the
request entirely; they are never sent as null or empty placeholders.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .timestamps import format_timestamp


def _drop_absent(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in pairs if value is not None}


@dataclass(frozen=True)
class Credentials:
    """Body of /auth/login and POST /user."""

    username: str
    password: str

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class UserUpdate:
    """Partial update of the current user."""

    new_username: str | None = None
    new_password: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_absent(
            [
                ("new_username", self.new_username),
                ("new_password", self.new_password),
            ]
        )


@dataclass(frozen=True)
class TransactionCreate:
    """Body of POST /transactions."""

    amount: int
    currency: str
    description: str | None = None
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "amount": self.amount,
            "currency": self.currency,
        }
        if self.description is not None:
            result["description"] = self.description
        if self.timestamp is not None:
            result["timestamp"] = format_timestamp(self.timestamp)
        return result


@dataclass(frozen=True)
class TransactionUpdate:
    """Partial update of one transaction. Only fields that are set are sent."""

    new_amount: int | None = None
    new_currency: str | None = None
    new_description: str | None = None
    new_timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_absent(
            [
                ("new_amount", self.new_amount),
                ("new_currency", self.new_currency),
                ("new_description", self.new_description),
                (
                    "new_timestamp",
                    format_timestamp(self.new_timestamp) if self.new_timestamp else None,
                ),
            ]
        )


@dataclass(frozen=True)
class TransactionsQuery:
    """Query of GET /transactions."""

    start_time: datetime
    end_time: datetime | None = None
    currency: str | None = None

    def to_params(self) -> dict[str, str]:
        return _drop_absent(
            [
                ("start_time", format_timestamp(self.start_time)),
                ("end_time", format_timestamp(self.end_time) if self.end_time else None),
                ("currency", self.currency),
            ]
        )


@dataclass(frozen=True)
class TransactionsSummaryQuery:
    """Query of GET /transactions/summary."""

    currency: str
    start_time: datetime
    end_time: datetime | None = None

    def to_params(self) -> dict[str, str]:
        return _drop_absent(
            [
                ("currency", self.currency),
                ("start_time", format_timestamp(self.start_time)),
                ("end_time", format_timestamp(self.end_time) if self.end_time else None),
            ]
        )
