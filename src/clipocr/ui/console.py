"""Console output for the clipocr CLI.

Recognized text goes to stdout untouched; status and errors go to stderr so
the output can be piped.
"""

import logging
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from clipocr.core.state import CachedToken
from clipocr.ui.theme import CLIPOCR_THEME, STATUS_ICONS, VARIANT_LABELS


class OcrConsole:
    """Terminal interface for clipocr."""

    def __init__(self, verbose: bool = False):
        self.console = Console(theme=CLIPOCR_THEME, stderr=True)
        self.verbose = verbose

    def setup_logging(self) -> None:
        """Route library logging through rich on stderr."""
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.WARNING,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=self.console, show_path=False)],
            force=True,
        )

    def print_variant(self, variant: str, line_count: int) -> None:
        label = VARIANT_LABELS.get(variant, variant)

        line = Text()
        line.append(f"{STATUS_ICONS['success']} ", style="success")
        line.append(label, style=variant)
        line.append(f" recognized {line_count} line(s)", style="dim")
        self.console.print(line)

    def print_token(self, token: CachedToken, now: int) -> None:
        try:
            expires = datetime.fromtimestamp(token.expire_time, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        except (OverflowError, ValueError, OSError):
            expires = f"Unix time {token.expire_time}"
        remaining = token.expire_time - now

        line = Text()
        line.append(f"{STATUS_ICONS['success']} ", style="success")
        line.append("Access token valid until ", style="dim")
        line.append(expires, style="info")
        line.append(f" ({remaining}s left)", style="dim")
        self.console.print(line)

    def print_saved(self, path) -> None:
        self.console.print(f"[success]{STATUS_ICONS['success']}[/success] Credentials saved to: [info]{path}[/info]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[error]{STATUS_ICONS['error']} Error:[/error] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[warning]{STATUS_ICONS['warning']} {message}[/warning]")
