"""Client-credentials token issuance."""

import logging
import time

import httpx

from clipocr.core.config import DEFAULT_TIMEOUT, DEFAULT_TOKEN_URL, Credentials
from clipocr.core.errors import AuthError, TokenRequestError
from clipocr.core.state import CachedToken, Clock, redact, unix_now
from clipocr.engines.base import make_client, send

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Exchanges client credentials for a short-lived access token.

    Only ``access_token`` and ``expires_in`` are read from the response. The
    expiry is stored as an absolute time computed from the local clock at
    issuance.
    """

    def __init__(
        self,
        token_url: str = DEFAULT_TOKEN_URL,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Clock = time.time,
    ) -> None:
        self.token_url = token_url
        self.client = client
        self.timeout = timeout
        self.clock = clock

    def __call__(self, credentials: Credentials) -> CachedToken:
        return self.issue(credentials)

    def issue(self, credentials: Credentials) -> CachedToken:
        params = {
            "grant_type": "client_credentials",
            "client_id": credentials.api_key,
            "client_secret": credentials.sec_key,
        }

        if self.client is not None:
            response = send(self.client, "GET", self.token_url, TokenRequestError, params=params)
        else:
            with make_client(self.timeout) as client:
                response = send(client, "GET", self.token_url, TokenRequestError, params=params)

        issued_at = unix_now(self.clock)
        token = self._parse(response, issued_at)
        logger.info("Issued access token %s, expires at %d", redact(token.access_token), token.expire_time)
        return token

    def _parse(self, response: httpx.Response, issued_at: int) -> CachedToken:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            raise AuthError(f"Token request rejected (HTTP {response.status_code}){_describe(payload)}")

        if not isinstance(payload, dict):
            raise AuthError("Token response is not a JSON object")

        if "error" in payload:
            raise AuthError(f"Token request rejected{_describe(payload)}")

        access_token = payload.get("access_token")
        expires_in = payload.get("expires_in")
        if not isinstance(access_token, str) or not access_token:
            raise AuthError("Token response has no access_token")
        if isinstance(expires_in, bool) or not isinstance(expires_in, int) or expires_in < 0:
            raise AuthError("Token response has no valid expires_in")

        return CachedToken(access_token=access_token, expire_time=issued_at + expires_in)


def _describe(payload) -> str:
    if not isinstance(payload, dict):
        return ""
    detail = payload.get("error_description") or payload.get("error")
    return f": {detail}" if detail else ""
