"""Baidu OCR engine adapter.

Both endpoints accept the same form-encoded request and return the same
``words_result`` document; they differ only in their base URL.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from clipocr.core.config import DEFAULT_TIMEOUT
from clipocr.core.errors import ResponseFormatError, TransportError
from clipocr.core.state import CachedToken
from clipocr.engines.base import (
    OcrResult,
    make_client,
    optional_int,
    redact_url,
    require_list,
    send,
)

logger = logging.getLogger(__name__)


class OcrVariant(str, Enum):
    """Available OCR endpoints."""

    GENERAL = "general"
    ACCURATE = "accurate"

    @property
    def base_url(self) -> str:
        return BASE_URLS[self]


BASE_URLS = {
    OcrVariant.GENERAL: "https://aip.baidubce.com/rest/2.0/ocr/v1/general_basic",
    OcrVariant.ACCURATE: "https://aip.baidubce.com/rest/2.0/ocr/v1/accurate_basic",
}


@dataclass
class WordRecord:
    """A single recognized line."""

    words: str


@dataclass
class BaiduOcrResult(OcrResult):
    """Parsed ``general_basic`` / ``accurate_basic`` response."""

    words_result: list[WordRecord] = field(default_factory=list)
    log_id: int | None = None
    words_result_num: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "BaiduOcrResult":
        if not isinstance(payload, dict):
            raise ResponseFormatError("OCR response is not a JSON object")

        if "words_result" not in payload and "error_code" in payload:
            raise ResponseFormatError(
                f"OCR provider error {payload.get('error_code')}: {payload.get('error_msg', '')}"
            )

        records = []
        for idx, item in enumerate(require_list(payload, "words_result")):
            if not isinstance(item, dict) or not isinstance(item.get("words"), str):
                raise ResponseFormatError(f"words_result[{idx}] has no 'words' string")
            records.append(WordRecord(words=item["words"]))

        return cls(
            words_result=records,
            log_id=optional_int(payload, "log_id"),
            words_result_num=optional_int(payload, "words_result_num"),
        )

    def extract_text(self) -> list[str]:
        return [record.words for record in self.words_result]


RESULT_TYPES: dict[OcrVariant, type[OcrResult]] = {
    OcrVariant.GENERAL: BaiduOcrResult,
    OcrVariant.ACCURATE: BaiduOcrResult,
}


@dataclass
class OcrClient:
    """Request builder for one OCR endpoint and one access token."""

    variant: OcrVariant
    access_token: str
    timeout: float = DEFAULT_TIMEOUT
    client: httpx.Client | None = field(default=None, repr=False)

    @classmethod
    def from_token(
        cls,
        variant: OcrVariant | str,
        token: CachedToken,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> "OcrClient":
        return cls(
            variant=OcrVariant(variant),
            access_token=token.access_token,
            timeout=timeout,
            client=client,
        )

    @property
    def result_type(self) -> type[OcrResult]:
        return RESULT_TYPES[self.variant]

    def request_url(self) -> str:
        return f"{self.variant.base_url}?access_token={self.access_token}"

    def fetch_result(self, image_payload: str) -> OcrResult:
        """Submit a base64-encoded image and parse the structured result."""
        url = self.request_url()
        logger.debug("POST %s (%d payload chars)", redact_url(url), len(image_payload))

        if self.client is not None:
            response = send(self.client, "POST", url, TransportError, data={"image": image_payload})
        else:
            with make_client(self.timeout) as client:
                response = send(client, "POST", url, TransportError, data={"image": image_payload})

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Failed to parse response: %s", response.text)
            raise ResponseFormatError(
                f"OCR response is not valid JSON (HTTP {response.status_code})"
            ) from e

        if not response.is_success:
            logger.error("OCR request failed: %s", response.text)
            raise ResponseFormatError(f"OCR request failed (HTTP {response.status_code}){_describe(payload)}")

        try:
            return self.result_type.from_payload(payload)
        except ResponseFormatError:
            logger.error("Unexpected response: %s", response.text)
            raise

    def fetch_text(self, image_payload: str) -> list[str]:
        """Recognized text lines in provider order, possibly empty."""
        lines = self.fetch_result(image_payload).extract_text()
        logger.debug("Recognized %d line(s) with %s", len(lines), self.variant.value)
        return lines


def _describe(payload: Any) -> str:
    if isinstance(payload, dict) and "error_msg" in payload:
        return f": {payload.get('error_code')} {payload['error_msg']}"
    return ""
