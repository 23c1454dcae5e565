"""Shared pieces for OCR provider adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from clipocr.core.config import DEFAULT_TIMEOUT
from clipocr.core.errors import ResponseFormatError, TransportError

logger = logging.getLogger(__name__)


class OcrResult(ABC):
    """Structured OCR response that can be turned into text fragments.

    Supporting another provider means implementing this class plus the rule
    that builds its request URL.
    """

    @classmethod
    @abstractmethod
    def from_payload(cls, payload: Any) -> "OcrResult":
        """Build a result from a decoded JSON body. Raises ResponseFormatError."""
        ...

    @abstractmethod
    def extract_text(self) -> list[str]:
        """Recognized text fragments in provider order."""
        ...


def make_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create an HTTP client with an explicit timeout."""
    return httpx.Client(timeout=timeout)


def send(
    client: httpx.Client,
    method: str,
    url: str,
    error_cls: type[Exception] = TransportError,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, mapping network failures and timeouts to ``error_cls``."""
    try:
        return client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        raise error_cls(f"Request to {redact_url(url)} timed out") from e
    except httpx.HTTPError as e:
        raise error_cls(f"Request to {redact_url(url)} failed: {e}") from e


def redact_url(url: str) -> str:
    """Drop the query string, which carries tokens and secrets."""
    return url.split("?", 1)[0]


def require_list(payload: dict, key: str) -> list:
    value = payload.get(key)
    if not isinstance(value, list):
        raise ResponseFormatError(f"Field '{key}' must be a list")
    return value


def optional_int(payload: dict, key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ResponseFormatError(f"Field '{key}' must be an integer")
    return value
