"""Test fixtures and utilities."""

import pytest

TOKEN = "test-token-12345"

SAMPLE_AUTHORIZATION = {
    "token": TOKEN,
    "expires_at": "2024-11-25T10:00:00Z",
}

SAMPLE_TRANSACTION = {
    "uuid": "5f0c7a3e-8a44-4a9f-9a0e-1c2d3e4f5a6b",
    "amount": -1148,
    "currency": "EUR",
    "description": "SPAR groceries",
    "timestamp": "2024-11-18T09:30:00Z",
    "created_at": "2024-11-18T09:31:12.123456789Z",
    "updated_at": "2024-11-18T09:31:12.123456789Z",
}

SAMPLE_TRANSACTION_2 = {
    "uuid": "0b9e2d4c-1f3a-4e8b-b7c6-d5e4f3a2b1c0",
    "amount": 250000,
    "currency": "EUR",
    "description": "",
    "timestamp": "2024-11-01T08:00:00+01:00",
    "created_at": "2024-11-01T07:00:05Z",
    "updated_at": "2024-11-02T07:00:05Z",
}

SAMPLE_SUMMARY = {
    "currency": "EUR",
    "income": 250000,
    "outcome": 1148,
    "total": 248852,
    "transactions_count": 2,
}


@pytest.fixture
def sample_authorization() -> dict:
    """Sample /auth/login response."""
    return dict(SAMPLE_AUTHORIZATION)


@pytest.fixture
def sample_transaction() -> dict:
    """Sample transaction API response."""
    return dict(SAMPLE_TRANSACTION)


@pytest.fixture
def sample_transactions() -> list[dict]:
    """Sample GET /transactions response, newest first."""
    return [dict(SAMPLE_TRANSACTION), dict(SAMPLE_TRANSACTION_2)]


@pytest.fixture
def sample_summary() -> dict:
    """Sample GET /transactions/summary response."""
    return dict(SAMPLE_SUMMARY)


@pytest.fixture
def sample_currencies() -> list[dict]:
    """Sample GET /currencies response."""
    return [
        {"code": "USD", "symbol": "$"},
        {"code": "EUR", "symbol": "€"},
        {"code": "UAH", "symbol": "₴", "name": "Ukrainian hryvnia"},
    ]
