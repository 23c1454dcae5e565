"""Access token cache.

The cache keeps a short-lived access token together with its absolute expiry
(Unix seconds) in a token store. ``TokenCache.get_valid_token`` is the only
way callers obtain a token; it refreshes through the issuer whenever the
stored token is absent or expired and persists whatever it issues.

No locking is done around the store. Two processes refreshing the same state
file at the same time can lose one of the writes.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable

from clipocr.core.config import Credentials, check_fields, read_yaml_mapping, write_yaml_mapping
from clipocr.core.errors import ConfigError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Issuer = Callable[[Credentials], "CachedToken"]


def unix_now(clock: Clock = time.time) -> int:
    """Current Unix time in whole seconds."""
    return int(clock())


@dataclass(frozen=True)
class CachedToken:
    """Access token plus its absolute expiry time in Unix seconds."""

    access_token: str
    expire_time: int

    FIELDS = ("access_token", "expire_time")

    def is_expired(self, now: int, margin: int = 0) -> bool:
        return self.expire_time - margin < now

    @classmethod
    def from_dict(cls, data: dict) -> "CachedToken":
        check_fields(data, cls.FIELDS, "Token state")
        access_token = data["access_token"]
        expire_time = data["expire_time"]
        if not isinstance(access_token, str):
            raise ConfigError("Token state field 'access_token' must be a string")
        # bool is an int subclass
        if isinstance(expire_time, bool) or not isinstance(expire_time, int) or expire_time < 0:
            raise ConfigError("Token state field 'expire_time' must be a non-negative integer")
        return cls(access_token=access_token, expire_time=expire_time)

    def to_dict(self) -> dict:
        return asdict(self)

    def __repr__(self) -> str:
        return f"CachedToken(access_token={redact(self.access_token)!r}, expire_time={self.expire_time})"


def redact(token: str) -> str:
    """Shorten a secret for log output."""
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


class TokenStore(ABC):
    """Durable home of the cached token."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether a token has been persisted."""
        ...

    @abstractmethod
    def load(self) -> CachedToken:
        """Read the persisted token."""
        ...

    @abstractmethod
    def save(self, token: CachedToken) -> None:
        """Persist a token, replacing the previous one."""
        ...


class YamlTokenStore(TokenStore):
    """Token store backed by a YAML state file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> CachedToken:
        return CachedToken.from_dict(read_yaml_mapping(self.path, "state"))

    def save(self, token: CachedToken) -> None:
        write_yaml_mapping(self.path, token.to_dict(), "state")
        logger.debug("Wrote token state to %s", self.path)


class MemoryTokenStore(TokenStore):
    """In-memory token store. Counts writes."""

    def __init__(self, token: CachedToken | None = None) -> None:
        self.token = token
        self.writes = 0

    def exists(self) -> bool:
        return self.token is not None

    def load(self) -> CachedToken:
        if self.token is None:
            raise ConfigError("No token state stored")
        return self.token

    def save(self, token: CachedToken) -> None:
        self.token = token
        self.writes += 1


class TokenCache:
    """Hands out valid access tokens, refreshing them on expiry."""

    def __init__(
        self,
        credentials: Credentials,
        store: TokenStore,
        issuer: Issuer,
        clock: Clock = time.time,
        expiry_margin: int = 0,
    ) -> None:
        self.credentials = credentials
        self.store = store
        self.issuer = issuer
        self.clock = clock
        self.expiry_margin = expiry_margin

    def get_valid_token(self) -> CachedToken:
        """Return a token whose expiry has not passed, refreshing if needed.

        The stored token is returned unchanged, and nothing is written, while
        it is still valid. After a refresh the newly issued token is returned
        and persisted if it differs from the stored one.
        """
        if not self.store.exists():
            logger.info("No cached token, requesting a new one")
            token = self.issuer(self.credentials)
            self.store.save(token)
            return token

        cached = self.store.load()
        logger.debug("Expire time in state file: %d", cached.expire_time)

        now = unix_now(self.clock)
        if not cached.is_expired(now, self.expiry_margin):
            return cached

        logger.info("Cached token expired at %d (now %d), refreshing", cached.expire_time, now)
        token = self.issuer(self.credentials)
        if token != cached:
            self.store.save(token)
        return token


def get_valid_token(
    credentials: Credentials,
    state_path: Path | str,
    issuer: Issuer,
    clock: Clock = time.time,
    expiry_margin: int = 0,
) -> CachedToken:
    """Resolve a valid token using the YAML state file at ``state_path``."""
    cache = TokenCache(
        credentials,
        YamlTokenStore(state_path),
        issuer,
        clock=clock,
        expiry_margin=expiry_margin,
    )
    return cache.get_valid_token()
