"""
Session token construction.

Token layout:

    "T1==" + base64url( "partner_id={api_key}&sig={sig}:" + data_string )

    data_string = session_id, create_time, nonce, role, expire_time
                  [, connection_data]   (this order, '&'-joined key=value)

The service recomputes the HMAC over data_string exactly as sent, so the
field order and integer formatting must not change.
"""
from __future__ import annotations

import base64
import binascii
import hmac
import logging
import secrets
import time
from typing import TYPE_CHECKING, Optional
from urllib.parse import parse_qsl, quote_plus

from opentok_sdk.core.errors import InvalidArgumentError, OpenTokError, SigningError
from opentok_sdk.domain.schemas import DecodedToken, Role, TokenOptions
from opentok_sdk.tokens.signing import sign_data

if TYPE_CHECKING:
    from opentok_sdk.domain.session import Session

logger = logging.getLogger(__name__)

TOKEN_SENTINEL = "T1=="
DEFAULT_TOKEN_TTL = 60 * 60 * 24        # 1 day
MAX_TOKEN_TTL = 60 * 60 * 24 * 30       # 30 days
EXPIRY_TOLERANCE = 1                    # seconds of clock skew accepted for "now"
MAX_CONNECTION_DATA_LENGTH = 1000
NONCE_BITS = 31                         # fits a signed 32-bit int on the server


def _now() -> int:
    return int(time.time())


def _new_nonce() -> int:
    return secrets.randbits(NONCE_BITS)


def _resolve_expire_time(expire_time: Optional[int], now: int) -> int:
    if not expire_time:
        return now + DEFAULT_TOKEN_TTL
    if expire_time < now - EXPIRY_TOLERANCE:
        raise InvalidArgumentError(
            f"Expire time must be in the future. relative time: {expire_time - now}"
        )
    if expire_time > now + MAX_TOKEN_TTL:
        raise InvalidArgumentError(
            f"Expire time must be in the next 30 days. too large by {expire_time - (now + MAX_TOKEN_TTL)}"
        )
    return expire_time


def _check_connection_data(data: Optional[str]) -> None:
    if data is not None and len(data) > MAX_CONNECTION_DATA_LENGTH:
        raise InvalidArgumentError(
            f"Connection data must be less than {MAX_CONNECTION_DATA_LENGTH} characters. length: {len(data)}"
        )


def build_data_string(
    session_id: str,
    create_time: int,
    nonce: int,
    role: Role,
    expire_time: int,
    data: Optional[str] = None,
) -> str:
    parts = [
        f"session_id={session_id}",
        f"create_time={create_time:d}",
        f"nonce={nonce:d}",
        f"role={role.value}",
        f"expire_time={expire_time:d}",
    ]
    if data:
        parts.append(f"connection_data={quote_plus(data, encoding='utf-8')}")
    return "&".join(parts)


def _encode(inner: str) -> str:
    encoded = base64.urlsafe_b64encode(inner.encode("utf-8")).decode("ascii")
    return TOKEN_SENTINEL + encoded.rstrip("=")


def generate_token(
    session: "Session",
    options: Optional[TokenOptions],
    *,
    now: Optional[int] = None,
    nonce: Optional[int] = None,
) -> str:
    """
    Sign a token for ``session``.

    ``now`` and ``nonce`` default to the wall clock and a fresh random
    integer; pass them to get reproducible output.

    Raises InvalidArgumentError for missing options, an expiry outside
    [now - 1s, now + 30 days] or connection data over
    MAX_CONNECTION_DATA_LENGTH characters.
    """
    if options is None:
        raise InvalidArgumentError("Token options cannot be None")

    role = Role(options.role or Role.PUBLISHER)
    _check_connection_data(options.data)

    create_time = _now() if now is None else int(now)
    expire_time = _resolve_expire_time(options.expire_time, create_time)
    if nonce is None:
        nonce = _new_nonce()

    data_string = build_data_string(
        session.session_id, create_time, nonce, role, expire_time, options.data
    )

    try:
        sig = sign_data(data_string, session.api_secret)
    except SigningError as e:
        raise OpenTokError("Could not generate token, a signing error occurred.") from e

    inner = f"partner_id={session.api_key:d}&sig={sig}:{data_string}"
    logger.debug(f"Generated {role.value} token for session {session.session_id} expiring at {expire_time}")
    return _encode(inner)


def decode_token(token: str) -> DecodedToken:
    """Reverse the token envelope without checking the signature."""
    if not token or not token.startswith(TOKEN_SENTINEL):
        raise InvalidArgumentError(f"Token must start with {TOKEN_SENTINEL!r}")

    body = token[len(TOKEN_SENTINEL):]
    try:
        inner = base64.urlsafe_b64decode(body + "=" * (-len(body) % 4)).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Token is not valid base64url: {e}") from e

    header, sep, data_string = inner.partition(":")
    if not sep:
        raise InvalidArgumentError("Token is missing the ':' separator")

    header_fields = dict(parse_qsl(header, keep_blank_values=True))
    try:
        partner_id = int(header_fields["partner_id"])
        sig = header_fields["sig"]
    except (KeyError, ValueError) as e:
        raise InvalidArgumentError(f"Token header is malformed: {header!r}") from e

    claims = dict(parse_qsl(data_string, keep_blank_values=True))
    return DecodedToken(partner_id=partner_id, sig=sig, data_string=data_string, claims=claims)


def verify_token(token: str, api_secret: str) -> bool:
    decoded = decode_token(token)
    expected = sign_data(decoded.data_string, api_secret)
    return hmac.compare_digest(expected, decoded.sig)
