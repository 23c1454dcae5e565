"""Color theme and styling for the clipocr terminal UI."""

from rich.style import Style
from rich.theme import Theme

# Variant colors
GENERAL_COLOR = "#3498DB"     # Blue - general endpoint
ACCURATE_COLOR = "#9B59B6"    # Purple - high-accuracy endpoint

# Status colors
SUCCESS_COLOR = "#2ECC71"
WARNING_COLOR = "#F39C12"
ERROR_COLOR = "#E74C3C"
INFO_COLOR = "#3498DB"
DIM_COLOR = "#7F8C8D"

VARIANT_LABELS = {
    "general": "General",
    "accurate": "Accurate",
}

STATUS_ICONS = {
    "success": "✓",
    "warning": "⚠",
    "error": "✗",
}

CLIPOCR_THEME = Theme({
    "general": Style(color=GENERAL_COLOR, bold=True),
    "accurate": Style(color=ACCURATE_COLOR, bold=True),
    "success": Style(color=SUCCESS_COLOR),
    "warning": Style(color=WARNING_COLOR),
    "error": Style(color=ERROR_COLOR),
    "info": Style(color=INFO_COLOR),
    "dim": Style(color=DIM_COLOR),
})
