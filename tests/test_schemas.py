"""Tests for groshi timestamps, response models and request parameters."""

from datetime import datetime, timedelta, timezone

import pytest

from groshi.schemas import (
    Authorization,
    Currency,
    Transaction,
    TransactionCreate,
    TransactionsQuery,
    TransactionsSummary,
    TransactionsSummaryQuery,
    TransactionUpdate,
    User,
    UserUpdate,
    format_timestamp,
    parse_timestamp,
)


class TestTimestamps:
    """Test the shared RFC-3339 routine."""

    def test_format_utc(self):
        value = datetime(2024, 11, 18, 9, 30, 5, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-11-18T09:30:05Z"

    def test_format_offset(self):
        value = datetime(2024, 11, 18, 9, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        assert format_timestamp(value) == "2024-11-18T09:30:00+05:30"

    def test_format_negative_offset(self):
        value = datetime(2024, 11, 18, 9, 30, tzinfo=timezone(timedelta(hours=-3)))
        assert format_timestamp(value) == "2024-11-18T09:30:00-03:00"

    def test_format_pads_small_years(self):
        value = datetime(999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        assert format_timestamp(value) == "0999-12-31T23:59:59Z"

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (timedelta(seconds=-30), "-00:00"),
            (timedelta(hours=-5, minutes=-30, seconds=-45), "-05:30"),
            (timedelta(hours=1, seconds=59), "+01:00"),
        ],
    )
    def test_format_truncates_sub_minute_offsets(self, offset, expected):
        value = datetime(2024, 11, 18, 9, 30, tzinfo=timezone(offset))
        assert format_timestamp(value) == f"2024-11-18T09:30:00{expected}"

    def test_format_naive_is_utc(self):
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"

    def test_format_drops_fraction(self):
        value = datetime(2024, 1, 2, 3, 4, 5, 999999, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-02T03:04:05Z"

    def test_parse_z(self):
        assert parse_timestamp("2024-11-18T09:30:00Z") == datetime(
            2024, 11, 18, 9, 30, tzinfo=timezone.utc
        )

    def test_parse_nanoseconds(self):
        parsed = parse_timestamp("2024-11-18T09:31:12.123456789Z")
        assert parsed.microsecond == 123456

    def test_parse_short_fraction(self):
        assert parse_timestamp("2024-11-18T09:31:12.5+01:00").microsecond == 500000

    @pytest.mark.parametrize(
        "value",
        [
            datetime(2024, 11, 18, 9, 30, 5, tzinfo=timezone.utc),
            datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-8))),
            datetime(2024, 2, 29, 0, 0, tzinfo=timezone(timedelta(hours=14))),
            datetime(999, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
            datetime(5, 6, 7, 8, 9, 10, tzinfo=timezone(timedelta(hours=2))),
        ],
    )
    def test_round_trip_same_instant(self, value):
        assert parse_timestamp(format_timestamp(value)) == value

    @pytest.mark.parametrize("text", ["", "yesterday", "2024-11-18", "2024-11-18T09:30:00"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            parse_timestamp(text)

    def test_parse_non_string(self):
        with pytest.raises(ValueError):
            parse_timestamp(1700000000)


class TestModels:
    """Test response entity decoding."""

    def test_authorization(self, sample_authorization):
        auth = Authorization.from_api_response(sample_authorization)
        assert auth.token == sample_authorization["token"]
        assert auth.expires_at.tzinfo is not None

    def test_user(self):
        assert User.from_api_response({"username": "alice"}) == User("alice")

    def test_user_missing_username(self):
        with pytest.raises(KeyError):
            User.from_api_response({})

    def test_transaction(self, sample_transaction):
        tx = Transaction.from_api_response(sample_transaction)

        assert tx.id == sample_transaction["uuid"]
        assert tx.amount == -1148
        assert tx.currency == "EUR"
        assert tx.description == "SPAR groceries"
        assert tx.timestamp == datetime(2024, 11, 18, 9, 30, tzinfo=timezone.utc)

    def test_transaction_empty_description_is_absent(self, sample_transaction):
        sample_transaction["description"] = ""
        assert Transaction.from_api_response(sample_transaction).description is None

    def test_transaction_missing_description_is_absent(self, sample_transaction):
        del sample_transaction["description"]
        assert Transaction.from_api_response(sample_transaction).description is None

    def test_transaction_bad_amount(self, sample_transaction):
        sample_transaction["amount"] = "11.48"
        with pytest.raises(TypeError):
            Transaction.from_api_response(sample_transaction)

    def test_transaction_bool_amount(self, sample_transaction):
        sample_transaction["amount"] = True
        with pytest.raises(TypeError):
            Transaction.from_api_response(sample_transaction)

    def test_transaction_bad_timestamp(self, sample_transaction):
        sample_transaction["timestamp"] = "18.11.2024"
        with pytest.raises(ValueError):
            Transaction.from_api_response(sample_transaction)

    def test_transaction_not_object(self):
        with pytest.raises(TypeError):
            Transaction.from_api_response(["not", "an", "object"])

    def test_summary(self, sample_summary):
        summary = TransactionsSummary.from_api_response(sample_summary)
        assert summary.total == summary.income - summary.outcome
        assert summary.transactions_count == 2

    def test_currency_without_symbol(self):
        currency = Currency.from_api_response({"code": "JPY"})
        assert currency.code == "JPY"
        assert currency.symbol is None
        assert currency.metadata == {}


class TestParams:
    """Test request parameter serialization."""

    def test_user_update_empty(self):
        assert UserUpdate().to_dict() == {}

    def test_user_update_both(self):
        assert UserUpdate(new_username="bob", new_password="pw").to_dict() == {
            "new_username": "bob",
            "new_password": "pw",
        }

    def test_transaction_create_omits_absent(self):
        assert TransactionCreate(amount=100, currency="USD").to_dict() == {
            "amount": 100,
            "currency": "USD",
        }

    def test_transaction_create_keeps_empty_description(self):
        """An explicitly empty description is present, not absent."""
        body = TransactionCreate(amount=100, currency="USD", description="").to_dict()
        assert body["description"] == ""

    def test_transaction_update_zero_amount_is_present(self):
        assert TransactionUpdate(new_amount=0).to_dict() == {"new_amount": 0}

    def test_transaction_update_timestamp(self):
        body = TransactionUpdate(
            new_timestamp=datetime(2024, 11, 19, 12, 0, tzinfo=timezone.utc)
        ).to_dict()
        assert body == {"new_timestamp": "2024-11-19T12:00:00Z"}

    def test_transactions_query_start_only(self):
        query = TransactionsQuery(start_time=datetime(2024, 11, 1, tzinfo=timezone.utc))
        assert query.to_params() == {"start_time": "2024-11-01T00:00:00Z"}

    def test_summary_query(self):
        query = TransactionsSummaryQuery(
            currency="EUR",
            start_time=datetime(2024, 11, 1, tzinfo=timezone.utc),
            end_time=datetime(2024, 12, 1, tzinfo=timezone.utc),
        )
        assert query.to_params() == {
            "currency": "EUR",
            "start_time": "2024-11-01T00:00:00Z",
            "end_time": "2024-12-01T00:00:00Z",
        }
