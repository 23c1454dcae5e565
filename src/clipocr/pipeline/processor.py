"""Main OCR pipeline.

One invocation loads the credentials, resolves a valid token and issues a
single OCR request. Errors from any step propagate unchanged.
"""

import logging
import time
from contextlib import nullcontext

import httpx

from clipocr.core.config import Credentials, Settings
from clipocr.core.state import CachedToken, Clock, TokenCache, TokenStore, YamlTokenStore
from clipocr.engines.auth import TokenIssuer
from clipocr.engines.baidu import OcrClient, OcrVariant
from clipocr.engines.base import make_client

logger = logging.getLogger(__name__)


class OcrPipeline:
    """Wires credentials, token cache and OCR client together."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        clock: Clock = time.time,
        store: TokenStore | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.client = client
        self.clock = clock
        self.store = store or YamlTokenStore(self.settings.paths.state_file)

    def load_credentials(self) -> Credentials:
        return Credentials.from_file(self.settings.paths.config_file)

    def save_credentials(self, credentials: Credentials) -> None:
        paths = self.settings.paths
        paths.ensure_dir()
        credentials.to_file(paths.config_file)

    def token_cache(self, credentials: Credentials, client: httpx.Client) -> TokenCache:
        issuer = TokenIssuer(
            token_url=self.settings.token_url,
            client=client,
            timeout=self.settings.timeout,
            clock=self.clock,
        )
        return TokenCache(
            credentials,
            self.store,
            issuer,
            clock=self.clock,
            expiry_margin=self.settings.expiry_margin,
        )

    def resolve_token(self) -> CachedToken:
        """Return a valid access token, refreshing it if needed."""
        credentials = self.load_credentials()
        with self._session() as client:
            return self._resolve(credentials, client)

    def get_text_lines(self, image_payload: str, variant: OcrVariant | str) -> list[str]:
        """Recognize text in a base64-encoded image."""
        variant = OcrVariant(variant)
        credentials = self.load_credentials()
        with self._session() as client:
            token = self._resolve(credentials, client)
            ocr = OcrClient.from_token(variant, token, timeout=self.settings.timeout, client=client)
            return ocr.fetch_text(image_payload)

    def _resolve(self, credentials: Credentials, client: httpx.Client) -> CachedToken:
        if isinstance(self.store, YamlTokenStore):
            self.settings.paths.ensure_dir()
        return self.token_cache(credentials, client).get_valid_token()

    def _session(self):
        # an injected client stays open for its owner
        if self.client is not None:
            return nullcontext(self.client)
        return make_client(self.settings.timeout)


def get_text_lines(
    image_payload: str,
    variant: OcrVariant | str,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> list[str]:
    """Entry point for callers that only have an encoded image."""
    return OcrPipeline(settings, client=client).get_text_lines(image_payload, variant)
