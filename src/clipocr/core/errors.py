"""Error taxonomy for clipocr.

Every failure surfaced by the core is one of the kinds below. Nothing in the
core recovers from them; the CLI decides how to present them.
"""


class ClipOcrError(Exception):
    """Base class for all clipocr errors."""


class ConfigError(ClipOcrError):
    """Credential or state file is missing, unreadable or malformed."""


class AuthError(ClipOcrError):
    """Token issuance was rejected or returned an unusable response."""


class TransportError(ClipOcrError):
    """Network failure or timeout on an HTTP call."""


class TokenRequestError(AuthError, TransportError):
    """Network failure during token issuance."""


class ResponseFormatError(ClipOcrError):
    """OCR response body does not match the expected schema."""
