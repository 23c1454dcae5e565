"""Core data models for clipocr."""

from clipocr.core.config import AppPaths, Credentials, Settings
from clipocr.core.errors import (
    AuthError,
    ClipOcrError,
    ConfigError,
    ResponseFormatError,
    TokenRequestError,
    TransportError,
)
from clipocr.core.state import CachedToken, MemoryTokenStore, TokenCache, TokenStore, YamlTokenStore

__all__ = [
    "AppPaths",
    "Credentials",
    "Settings",
    "ClipOcrError",
    "ConfigError",
    "AuthError",
    "TransportError",
    "TokenRequestError",
    "ResponseFormatError",
    "CachedToken",
    "TokenStore",
    "YamlTokenStore",
    "MemoryTokenStore",
    "TokenCache",
]
