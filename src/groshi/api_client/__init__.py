"""
groshi API client.

Provides:
- Authentication (login, refresh, logout) and token storage
- User account management
- Transactions (create, list, read, update, delete, summary)
- Currency listing

Non-200 responses become GroshiAPIError; nothing is retried.
"""

from .client import (
    GroshiAPIError,
    GroshiClient,
    GroshiDecodeError,
    GroshiError,
    GroshiTokenRequiredError,
    GroshiTransportError,
)

__all__ = [
    "GroshiClient",
    "GroshiError",
    "GroshiAPIError",
    "GroshiDecodeError",
    "GroshiTokenRequiredError",
    "GroshiTransportError",
]
