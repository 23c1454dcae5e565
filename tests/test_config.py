from pathlib import Path

import pytest
import yaml

from clipocr.core.config import AppPaths, Credentials, Settings
from clipocr.core.errors import ConfigError


def _write(path: Path, text: str | bytes) -> Path:
    if isinstance(text, bytes):
        path.write_bytes(text)
    else:
        path.write_text(text, encoding="utf-8")
    return path


def test_credentials_roundtrip(tmp_path: Path) -> None:
    creds = Credentials(app_id="123", api_key="key", sec_key="secret")
    path = tmp_path / "config.yaml"

    creds.to_file(path)

    assert yaml.safe_load(path.read_text()) == {"app_id": "123", "api_key": "key", "sec_key": "secret"}
    assert Credentials.from_file(path) == creds


def test_credentials_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        Credentials.from_file(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text, message",
    [
        ("app_id: a\napi_key: b\n", "missing"),
        ("app_id: a\napi_key: b\nsec_key: c\nextra: d\n", "unexpected"),
        ("app_id: a\napi_key: b\nsec_key: 3\n", "must be a string"),
        ("- just\n- a list\n", "mapping"),
        ("app_id: [unclosed\n", "Invalid YAML"),
        (b"app_id: \xff\napi_key: b\nsec_key: c\n", "Invalid encoding"),
    ],
)
def test_credentials_malformed(tmp_path: Path, text: str | bytes, message: str) -> None:
    path = _write(tmp_path / "config.yaml", text)
    with pytest.raises(ConfigError, match=message):
        Credentials.from_file(path)


def test_credentials_save_into_missing_directory(tmp_path: Path) -> None:
    creds = Credentials(app_id="a", api_key="b", sec_key="c")
    with pytest.raises(ConfigError, match="Cannot write"):
        creds.to_file(tmp_path / "missing" / "config.yaml")


def test_credentials_repr_hides_secrets() -> None:
    creds = Credentials(app_id="a", api_key="topsecretkey", sec_key="topsecretsec")
    assert "topsecret" not in repr(creds)


def test_app_paths(tmp_path: Path) -> None:
    paths = AppPaths(str(tmp_path / "cfg"))
    assert paths.config_file == tmp_path / "cfg" / "config.yaml"
    assert paths.state_file == tmp_path / "cfg" / "state.yaml"

    paths.ensure_dir()
    assert (tmp_path / "cfg").is_dir()


def test_settings_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIPOCR_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("CLIPOCR_TIMEOUT", "5.5")
    monkeypatch.setenv("CLIPOCR_EXPIRY_MARGIN", "0")

    settings = Settings()

    assert settings.config_dir == tmp_path
    assert settings.timeout == 5.5
    assert settings.expiry_margin == 0


def test_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CLIPOCR_TIMEOUT", raising=False)
    monkeypatch.delenv("CLIPOCR_EXPIRY_MARGIN", raising=False)

    settings = Settings(config_dir=tmp_path)

    assert settings.timeout == 30.0
    assert settings.expiry_margin == 60
    assert settings.paths.config_dir == tmp_path


def test_settings_rejects_bad_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIPOCR_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="CLIPOCR_TIMEOUT"):
        Settings()


def test_settings_rejects_negative_margin(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Settings(config_dir=tmp_path, expiry_margin=-1)
