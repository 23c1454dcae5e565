"""OCR provider adapters."""

from clipocr.engines.auth import TokenIssuer
from clipocr.engines.baidu import BaiduOcrResult, OcrClient, OcrVariant, WordRecord
from clipocr.engines.base import OcrResult

__all__ = [
    "OcrResult",
    "TokenIssuer",
    "OcrVariant",
    "OcrClient",
    "BaiduOcrResult",
    "WordRecord",
]
