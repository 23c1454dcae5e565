"""CLI for clipocr - text recognition through the Baidu OCR API."""

import base64
import os
import sys
from pathlib import Path

import click

from clipocr import __version__
from clipocr.core.config import Credentials, Settings
from clipocr.core.errors import ClipOcrError
from clipocr.core.state import unix_now
from clipocr.engines.baidu import OcrVariant
from clipocr.pipeline.processor import OcrPipeline
from clipocr.ui.console import OcrConsole


def read_image_payload(image: str) -> str:
    """Base64-encode the raw bytes of an image file, or stdin for ``-``."""
    if image == "-":
        data = sys.stdin.buffer.read()
    else:
        try:
            data = Path(image).read_bytes()
        except OSError as e:
            raise click.BadParameter(f"Cannot read image: {e}", param_hint="IMAGE")
    if not data:
        raise click.BadParameter("Image is empty", param_hint="IMAGE")
    return base64.b64encode(data).decode("ascii")


@click.group()
@click.version_option(version=__version__, prog_name="clipocr")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="CLIPOCR_CONFIG_DIR",
    help="Directory holding config.yaml and state.yaml",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="HTTP timeout in seconds (default: 30)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, timeout: float | None, verbose: bool) -> None:
    """Recognize text in images with the Baidu OCR API.

    Run `clipocr generate-config` once to store your API credentials.
    """
    ui = OcrConsole(verbose=verbose)
    ui.setup_logging()

    try:
        settings = Settings(verbose=verbose, timeout=timeout)
    except ClipOcrError as e:
        ui.print_error(str(e))
        raise click.ClickException(str(e))
    if config_dir:
        settings.config_dir = config_dir

    ctx.obj = {"settings": settings, "ui": ui}


def _run_ocr(ctx: click.Context, image: str, variant: OcrVariant) -> None:
    settings: Settings = ctx.obj["settings"]
    ui: OcrConsole = ctx.obj["ui"]

    payload = read_image_payload(image)
    try:
        lines = OcrPipeline(settings).get_text_lines(payload, variant)
    except ClipOcrError as e:
        ui.print_error(str(e))
        raise click.ClickException(str(e))

    if not lines:
        ui.print_warning("No text recognized")
        return
    if settings.verbose:
        ui.print_variant(variant.value, len(lines))
    click.echo(os.linesep.join(lines))


@cli.command()
@click.argument("image", type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
def general(ctx: click.Context, image: str) -> None:
    """Recognize text with the general endpoint.

    Example:
        clipocr general screenshot.png
    """
    _run_ocr(ctx, image, OcrVariant.GENERAL)


@cli.command()
@click.argument("image", type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
def accurate(ctx: click.Context, image: str) -> None:
    """Recognize text with the high-accuracy endpoint.

    Example:
        clipocr accurate scan.jpg
    """
    _run_ocr(ctx, image, OcrVariant.ACCURATE)


@cli.command("generate-config")
@click.option("--app-id", envvar="CLIPOCR_APP_ID", required=True, help="Application ID")
@click.option("--api-key", envvar="CLIPOCR_API_KEY", required=True, help="API key")
@click.option("--sec-key", envvar="CLIPOCR_SEC_KEY", required=True, help="Secret key")
@click.pass_context
def generate_config(ctx: click.Context, app_id: str, api_key: str, sec_key: str) -> None:
    """Store API credentials in the config directory."""
    settings: Settings = ctx.obj["settings"]
    ui: OcrConsole = ctx.obj["ui"]

    for name, value in [("--app-id", app_id), ("--api-key", api_key), ("--sec-key", sec_key)]:
        if not value.strip():
            raise click.BadParameter("must not be blank", param_hint=name)

    credentials = Credentials(app_id=app_id.strip(), api_key=api_key.strip(), sec_key=sec_key.strip())
    try:
        OcrPipeline(settings).save_credentials(credentials)
    except ClipOcrError as e:
        ui.print_error(str(e))
        raise click.ClickException(str(e))

    ui.print_saved(settings.paths.config_file)


@cli.command()
@click.pass_context
def token(ctx: click.Context) -> None:
    """Check credentials by resolving a valid access token."""
    settings: Settings = ctx.obj["settings"]
    ui: OcrConsole = ctx.obj["ui"]

    pipeline = OcrPipeline(settings)
    try:
        cached = pipeline.resolve_token()
    except ClipOcrError as e:
        ui.print_error(str(e))
        raise click.ClickException(str(e))

    ui.print_token(cached, unix_now(pipeline.clock))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
