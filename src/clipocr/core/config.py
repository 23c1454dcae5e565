"""Configuration for clipocr."""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

import click
import yaml

from clipocr.core.errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "clipocr"
CONFIG_FILENAME = "config.yaml"
STATE_FILENAME = "state.yaml"

DEFAULT_TOKEN_URL = "https://aip.baidubce.com/oauth/2.0/token"
DEFAULT_TIMEOUT = 30.0


def read_yaml_mapping(path: Path | str, kind: str) -> dict:
    """Read a YAML document that must be a mapping."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"{kind} file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {kind} file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Invalid encoding in {kind} file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {kind} file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{kind} file {path} must contain a mapping")
    return data


def write_yaml_mapping(path: Path | str, data: dict, kind: str) -> None:
    """Write a mapping as YAML, overwriting any previous content."""
    try:
        text = yaml.safe_dump(data, sort_keys=False)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot serialize {kind}: {e}") from e

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ConfigError(f"Cannot write {kind} file {path}: {e}") from e


def check_fields(data: dict, expected: tuple[str, ...], kind: str) -> None:
    """Reject documents with missing or unexpected keys."""
    missing = [k for k in expected if k not in data]
    extra = sorted(str(k) for k in data if k not in expected)
    if missing:
        raise ConfigError(f"{kind} is missing field(s): {', '.join(missing)}")
    if extra:
        raise ConfigError(f"{kind} has unexpected field(s): {', '.join(extra)}")


@dataclass(frozen=True)
class Credentials:
    """Long-lived identity issued by the OCR provider."""

    app_id: str
    api_key: str
    sec_key: str

    FIELDS = ("app_id", "api_key", "sec_key")

    @classmethod
    def from_dict(cls, data: dict) -> "Credentials":
        check_fields(data, cls.FIELDS, "Credentials")
        for key in cls.FIELDS:
            if not isinstance(data[key], str):
                raise ConfigError(f"Credentials field '{key}' must be a string")
        return cls(**{k: data[k] for k in cls.FIELDS})

    @classmethod
    def from_file(cls, path: Path | str) -> "Credentials":
        """Load credentials from a YAML file."""
        return cls.from_dict(read_yaml_mapping(path, "credential"))

    def to_file(self, path: Path | str) -> None:
        """Persist credentials as YAML. Last writer wins."""
        write_yaml_mapping(path, asdict(self), "credential")
        logger.debug("Wrote credentials to %s", path)

    def __repr__(self) -> str:
        return f"Credentials(app_id={self.app_id!r}, api_key=***, sec_key=***)"


@dataclass
class AppPaths:
    """Locations of the credential and state files."""

    config_dir: Path

    def __post_init__(self) -> None:
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def state_file(self) -> Path:
        return self.config_dir / STATE_FILENAME

    def ensure_dir(self) -> None:
        """Create the configuration directory if needed."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot create config directory {self.config_dir}: {e}") from e


def default_config_dir() -> Path:
    env_dir = os.environ.get("CLIPOCR_CONFIG_DIR", "")
    if env_dir:
        return Path(env_dir)
    return Path(click.get_app_dir(APP_NAME))


def _env_number(name: str, default, cast):
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"Environment variable {name} must be a number, got {raw!r}") from e


@dataclass
class Settings:
    """Runtime settings for the OCR pipeline."""

    config_dir: Path = field(default_factory=default_config_dir)
    timeout: float | None = None  # seconds, applied to every HTTP call
    expiry_margin: int | None = None  # treat tokens as expired this early
    token_url: str = DEFAULT_TOKEN_URL
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)
        if self.timeout is None:
            self.timeout = _env_number("CLIPOCR_TIMEOUT", DEFAULT_TIMEOUT, float)
        if self.expiry_margin is None:
            self.expiry_margin = _env_number("CLIPOCR_EXPIRY_MARGIN", 60, int)
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.expiry_margin < 0:
            raise ConfigError("expiry_margin must not be negative")

    @property
    def paths(self) -> AppPaths:
        return AppPaths(self.config_dir)
