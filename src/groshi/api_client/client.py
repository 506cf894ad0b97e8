"""
groshi API client implementation.
"""

import json
import logging
import threading
from datetime import datetime
from typing import Any, Callable, TypeVar
from urllib.parse import quote

import requests

from ..config import Config
from ..schemas.models import Authorization, Currency, Transaction, TransactionsSummary, User
from ..schemas.params import (
    Credentials,
    TransactionCreate,
    TransactionsQuery,
    TransactionsSummaryQuery,
    TransactionUpdate,
    UserUpdate,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Never written to logs
_SECRET_FIELDS = frozenset({"password", "new_password"})


class GroshiError(Exception):
    """Base exception for groshi client errors."""

    pass


class GroshiTokenRequiredError(GroshiError):
    """An authorized endpoint was called while the client holds no token.

    This is a caller error: log in or set a token first. It is raised before
    any request is sent.
    """

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        super().__init__(
            f"{method} {path} requires authorization, but the client token is empty"
        )


class GroshiTransportError(GroshiError):
    """The request could not be completed (connection, timeout, DNS, bad URL).

    The original ``requests`` exception is available as ``__cause__``.
    """

    pass


class GroshiDecodeError(GroshiError):
    """The response body could not be decoded into the expected shape."""

    def __init__(self, message: str, status_code: int, response_body: str | None = None):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class GroshiAPIError(GroshiError):
    """groshi API returned an error response."""

    def __init__(self, status_code: int, message: str, details: list[str] | None = None):
        self.status_code = status_code
        self.message = message
        self.details = list(details or [])

        if self.details:
            text = f"{message} ({', '.join(self.details)})"
        else:
            text = message
        super().__init__(text)


def _redact(body: dict) -> dict:
    return {k: ("***" if k in _SECRET_FIELDS else v) for k, v in body.items()}


def _many(model: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    """Build a decoder for a JSON array of objects, keeping server order."""

    def decode(data: Any) -> list[T]:
        if not isinstance(data, list):
            raise TypeError(f"Expected JSON array, got {type(data).__name__}")
        return [model(item) for item in data]

    return decode


class GroshiClient:
    """
    Client for the groshi personal finance API.

    Every endpoint is a synchronous round trip. Calls that need
    authorization send ``Authorization: Bearer <token>`` with the token the
    client currently holds; the token may be set at construction, with
    ``set_token`` or through ``authenticate``.

    Example:
        client = GroshiClient("http://localhost:8080")
        client.user_create("username-1234", "password-1234")
        client.authenticate("username-1234", "password-1234")
        print(client.user_read().username)
    """

    DEFAULT_TIMEOUT = 10

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize groshi client.

        Args:
            base_url: groshi server URL (e.g., "http://localhost:8080")
            token: Bearer token, empty if not logged in yet
            timeout: Default request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._token = token
        self._token_lock = threading.Lock()

        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_config(cls, config: Config) -> "GroshiClient":
        """Create a client from loaded configuration."""
        return cls(
            config.groshi.base_url,
            token=config.groshi.token,
            timeout=config.groshi.timeout_seconds,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GroshiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Token state

    @property
    def token(self) -> str:
        with self._token_lock:
            return self._token

    @token.setter
    def token(self, value: str) -> None:
        with self._token_lock:
            self._token = value

    def set_token(self, token: str) -> None:
        """Set the bearer token used by authorized calls.

        Useful when an account is created and logged into by hand:

            client = GroshiClient("http://localhost:8080")
            client.user_create("username-1234", "password-1234")
            auth = client.auth_login("username-1234", "password-1234")
            client.set_token(auth.token)
        """
        self.token = token

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    # Dispatcher

    def _auth_headers(self, method: str, path: str) -> dict[str, str]:
        token = self.token
        if not token:
            raise GroshiTokenRequiredError(method, path)
        return {"Authorization": f"Bearer {token}"}

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        authorize: bool = True,
        timeout: float | None = None,
    ) -> requests.Response:
        """Make an API request and raise on anything but HTTP 200."""
        headers = self._auth_headers(method, path) if authorize else {}
        url = f"{self.base_url}{path}"
        body = json_data if json_data is not None else {}

        logger.debug(f"API Request: {method} {url} params={params}")
        if body:
            logger.debug(f"Request body: {json.dumps(_redact(body), indent=2)}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=body,
                headers=headers,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {method} {url}: {e}")
            raise GroshiTransportError(f"Request to groshi failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")

        if response.status_code != requests.codes.ok:
            raise self._api_error(method, path, response)

        return response

    def _api_error(self, method: str, path: str, response: requests.Response) -> GroshiAPIError:
        """Decode a groshi error body: {"error_message": ..., "error_details": [...]}."""
        try:
            error_json = response.json()
            if not isinstance(error_json, dict):
                raise TypeError(f"Expected JSON object, got {type(error_json).__name__}")

            # Missing fields decode as empty, keeping the status code
            message = error_json.get("error_message")
            if message is None:
                message = ""
            details = error_json.get("error_details")
            if details is None:
                details = []
            if not isinstance(message, str):
                raise TypeError("error_message must be a string")
            if not isinstance(details, list) or not all(isinstance(d, str) for d in details):
                raise TypeError("error_details must be a list of strings")
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Undecodable error response {response.status_code} for {method} {path}")
            logger.debug(f"Full response body: {response.text}")
            raise GroshiDecodeError(
                f"Could not decode error response {response.status_code} "
                f"for {method} {path}: {e}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        error = GroshiAPIError(response.status_code, message, details)
        logger.error(f"API Error {response.status_code} for {method} {path}: {error}")
        return error

    def _call(
        self,
        decoder: Callable[[Any], T],
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        authorize: bool = True,
        timeout: float | None = None,
    ) -> T:
        """Send a request and decode the success body with ``decoder``."""
        response = self._request(
            method,
            path,
            params=params,
            json_data=json_data,
            authorize=authorize,
            timeout=timeout,
        )

        try:
            return decoder(response.json())
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Unexpected response body for {method} {path}: {e}")
            logger.debug(f"Full response body: {response.text}")
            raise GroshiDecodeError(
                f"Could not decode response for {method} {path}: {e}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    # Authorization

    def auth_login(self, username: str, password: str, *, timeout: float | None = None) -> Authorization:
        """Log in and return a new authorization. Does not store the token."""
        return self._call(
            Authorization.from_api_response,
            "POST",
            "/auth/login",
            json_data=Credentials(username, password).to_dict(),
            authorize=False,
            timeout=timeout,
        )

    def auth_refresh(self, *, timeout: float | None = None) -> Authorization:
        return self._call(
            Authorization.from_api_response,
            "POST",
            "/auth/refresh",
            timeout=timeout,
        )

    def auth_logout(self, *, timeout: float | None = None) -> None:
        """Invalidate the session server-side. The local token is kept."""
        self._request("POST", "/auth/logout", timeout=timeout)

    def authenticate(self, username: str, password: str, *, timeout: float | None = None) -> Authorization:
        """
        Log in and store the received token on the client.

        Example:
            client = GroshiClient("http://localhost:8080")
            client.authenticate("username-1234", "password-1234")
            print(f"Authorized as {client.user_read().username}")
        """
        authorization = self.auth_login(username, password, timeout=timeout)
        self.set_token(authorization.token)
        logger.info(f"Authorized as '{username}', token expires at {authorization.expires_at}")
        return authorization

    def refresh_token(self, *, timeout: float | None = None) -> Authorization:
        """Refresh the authorization and replace the stored token."""
        authorization = self.auth_refresh(timeout=timeout)
        self.set_token(authorization.token)
        logger.info(f"Token refreshed, expires at {authorization.expires_at}")
        return authorization

    # User

    def user_create(self, username: str, password: str, *, timeout: float | None = None) -> User:
        """Create a new account. Does not require authorization."""
        return self._call(
            User.from_api_response,
            "POST",
            "/user",
            json_data=Credentials(username, password).to_dict(),
            authorize=False,
            timeout=timeout,
        )

    def user_read(self, *, timeout: float | None = None) -> User:
        return self._call(User.from_api_response, "GET", "/user", timeout=timeout)

    def user_update(
        self,
        new_username: str | None = None,
        new_password: str | None = None,
        *,
        timeout: float | None = None,
    ) -> User:
        """
        Update the current user. Only the given fields are changed.

        Args:
            new_username: New username, or None to keep the current one
            new_password: New password, or None to keep the current one

        Returns:
            The updated user
        """
        update = UserUpdate(new_username=new_username, new_password=new_password)
        return self._call(
            User.from_api_response,
            "PUT",
            "/user",
            json_data=update.to_dict(),
            timeout=timeout,
        )

    def user_delete(self, *, timeout: float | None = None) -> User:
        """Delete the current user and return its last snapshot."""
        return self._call(User.from_api_response, "DELETE", "/user", timeout=timeout)

    # Transactions

    def transactions_create(
        self,
        amount: int,
        currency: str,
        description: str | None = None,
        timestamp: datetime | None = None,
        *,
        timeout: float | None = None,
    ) -> Transaction:
        """
        Create a transaction.

        Args:
            amount: Signed amount in the smallest currency unit
            currency: Currency code, e.g. "USD"
            description: Optional description
            timestamp: When the transaction happened; the server uses the
                current time if omitted

        Returns:
            The created transaction
        """
        payload = TransactionCreate(
            amount=amount,
            currency=currency,
            description=description,
            timestamp=timestamp,
        )
        return self._call(
            Transaction.from_api_response,
            "POST",
            "/transactions",
            json_data=payload.to_dict(),
            timeout=timeout,
        )

    def transactions_read_many(
        self,
        start_time: datetime,
        end_time: datetime | None = None,
        currency: str | None = None,
        *,
        timeout: float | None = None,
    ) -> list[Transaction]:
        """
        List transactions made at or after ``start_time``.

        Args:
            start_time: Lower time bound (required)
            end_time: Optional upper time bound
            currency: Optional currency filter

        Returns:
            Transactions in the order the server returned them
        """
        query = TransactionsQuery(start_time=start_time, end_time=end_time, currency=currency)
        return self._call(
            _many(Transaction.from_api_response),
            "GET",
            "/transactions",
            params=query.to_params(),
            timeout=timeout,
        )

    def transactions_read_one(
        self,
        transaction_id: str,
        currency: str | None = None,
        *,
        timeout: float | None = None,
    ) -> Transaction:
        """Get one transaction, optionally converted to ``currency``."""
        params = {"currency": currency} if currency is not None else None
        return self._call(
            Transaction.from_api_response,
            "GET",
            _transaction_path(transaction_id),
            params=params,
            timeout=timeout,
        )

    def transactions_update(
        self,
        transaction_id: str,
        new_amount: int | None = None,
        new_currency: str | None = None,
        new_description: str | None = None,
        new_timestamp: datetime | None = None,
        *,
        timeout: float | None = None,
    ) -> Transaction:
        """
        Update a transaction. Fields left as None keep their current values.

        Returns:
            The updated transaction
        """
        update = TransactionUpdate(
            new_amount=new_amount,
            new_currency=new_currency,
            new_description=new_description,
            new_timestamp=new_timestamp,
        )
        return self._call(
            Transaction.from_api_response,
            "PUT",
            _transaction_path(transaction_id),
            json_data=update.to_dict(),
            timeout=timeout,
        )

    def transactions_delete(self, transaction_id: str, *, timeout: float | None = None) -> Transaction:
        """Delete a transaction and return its last snapshot."""
        return self._call(
            Transaction.from_api_response,
            "DELETE",
            _transaction_path(transaction_id),
            timeout=timeout,
        )

    def transactions_read_summary(
        self,
        currency: str,
        start_time: datetime,
        end_time: datetime | None = None,
        *,
        timeout: float | None = None,
    ) -> TransactionsSummary:
        """Summarize income and outcome in ``currency`` over a time range."""
        query = TransactionsSummaryQuery(currency=currency, start_time=start_time, end_time=end_time)
        return self._call(
            TransactionsSummary.from_api_response,
            "GET",
            "/transactions/summary",
            params=query.to_params(),
            timeout=timeout,
        )

    # Currencies

    def currencies_read(self, *, timeout: float | None = None) -> list[Currency]:
        """List currencies supported by the server. Does not require authorization."""
        return self._call(
            _many(Currency.from_api_response),
            "GET",
            "/currencies",
            authorize=False,
            timeout=timeout,
        )


def _transaction_path(transaction_id: str) -> str:
    return f"/transactions/{quote(str(transaction_id), safe='')}"
