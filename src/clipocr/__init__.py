"""clipocr - OCR for images through the Baidu OCR API."""

__version__ = "0.1.0"

from clipocr.core.config import Credentials, Settings
from clipocr.core.errors import (
    AuthError,
    ClipOcrError,
    ConfigError,
    ResponseFormatError,
    TransportError,
)
from clipocr.core.state import CachedToken, TokenCache, get_valid_token
from clipocr.engines.baidu import OcrClient, OcrVariant
from clipocr.pipeline.processor import OcrPipeline, get_text_lines

__all__ = [
    "Credentials",
    "Settings",
    "CachedToken",
    "TokenCache",
    "get_valid_token",
    "OcrClient",
    "OcrVariant",
    "OcrPipeline",
    "get_text_lines",
    "ClipOcrError",
    "ConfigError",
    "AuthError",
    "TransportError",
    "ResponseFormatError",
]
