"""Terminal UI components."""

from clipocr.ui.console import OcrConsole
from clipocr.ui.theme import CLIPOCR_THEME

__all__ = ["OcrConsole", "CLIPOCR_THEME"]
