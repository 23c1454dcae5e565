import httpx
import pytest

from clipocr.core.config import DEFAULT_TOKEN_URL, Credentials
from clipocr.core.errors import AuthError, TokenRequestError, TransportError
from clipocr.core.state import CachedToken
from clipocr.engines.auth import TokenIssuer

CREDS = Credentials(app_id="app", api_key="the-key", sec_key="the-secret")


def _issuer(handler, now: float = 1000) -> TokenIssuer:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return TokenIssuer(client=client, clock=lambda: now)


def test_issue_sends_client_credentials() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "refresh_token": "r",
                "expires_in": 3600,
                "scope": "public",
                "session_key": "sk",
                "access_token": "tok1",
                "session_secret": "ss",
            },
        )

    token = _issuer(handler, now=1000.7)(CREDS)

    assert token == CachedToken("tok1", 4600)
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url).startswith(DEFAULT_TOKEN_URL)
    assert dict(request.url.params) == {
        "grant_type": "client_credentials",
        "client_id": "the-key",
        "client_secret": "the-secret",
    }


def test_rejected_credentials() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={"error": "invalid_client", "error_description": "unknown client id"},
        )

    with pytest.raises(AuthError, match="unknown client id"):
        _issuer(handler)(CREDS)


def test_error_reported_with_ok_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "invalid_client", "error_description": "Client authentication failed"})

    with pytest.raises(AuthError, match="Client authentication failed"):
        _issuer(handler)(CREDS)


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b"[1, 2]",
        b'{"expires_in": 3600}',
        b'{"access_token": "tok", "expires_in": "3600"}',
        b'{"access_token": "tok"}',
    ],
)
def test_malformed_token_response(body: bytes) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    with pytest.raises(AuthError):
        _issuer(handler)(CREDS)


def test_network_failure_is_auth_and_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TokenRequestError) as excinfo:
        _issuer(handler)(CREDS)

    assert isinstance(excinfo.value, AuthError)
    assert isinstance(excinfo.value, TransportError)
    # secrets travel in the query string and must not leak into messages
    assert "the-secret" not in str(excinfo.value)


def test_timeout_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError, match="timed out"):
        _issuer(handler)(CREDS)
