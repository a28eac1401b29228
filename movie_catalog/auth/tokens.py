"""
HS256 token encoding and signing.

This module provides:
- base64url encoding/decoding of JSON segments
- HMAC-SHA256 signatures
- Assembling and splitting ``header.payload.signature`` tokens

Tokens produced here are standard HS256 JWTs and can be read by any JWT
library given the same secret.
"""
import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Dict, Tuple

ALGORITHM = "HS256"
TOKEN_HEADER = {"alg": ALGORITHM, "typ": "JWT"}


class TokenError(ValueError):
    """Raised when a token or one of its segments is malformed."""


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def encode(obj: Any) -> str:
    """Serialize an object to compact JSON and base64url-encode it."""
    text = json.dumps(obj, separators=(",", ":"))
    return _b64url(text.encode("utf-8"))


def decode(segment: str) -> Any:
    """
    Reverse ``encode``: restore padding, base64url-decode and parse JSON.

    Raises:
        TokenError: If the segment is not valid base64url or JSON
    """
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise TokenError(f"Malformed token segment: {e}") from e


def sign(signing_input: str, secret: str) -> str:
    """HMAC-SHA256 of ``signing_input`` keyed with ``secret``, base64url without padding."""
    digest = hmac.new(
        secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256
    ).digest()
    return _b64url(digest)


def signatures_match(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def issue(payload: Dict[str, Any], secret: str) -> str:
    """Build a signed ``header.payload.signature`` token."""
    signing_input = f"{encode(TOKEN_HEADER)}.{encode(payload)}"
    return f"{signing_input}.{sign(signing_input, secret)}"


def split(token: str) -> Tuple[str, str, str]:
    """
    Split a token into its three segments.

    Raises:
        TokenError: If the token does not have exactly three segments
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise TokenError("Token must have exactly three segments")
    header, payload, signature = parts
    return header, payload, signature
