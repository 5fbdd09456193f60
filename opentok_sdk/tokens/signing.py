import hashlib
import hmac
from typing import Union

from opentok_sdk.core.errors import SigningError

# Fixed by the token protocol.
SIGNATURE_ALGORITHM = "sha1"


def sign_data(message: Union[str, bytes], secret: str) -> str:
    """Lowercase hex HMAC of message keyed with secret."""
    try:
        digestmod = getattr(hashlib, SIGNATURE_ALGORITHM)
        key = secret.encode("utf-8")
        if isinstance(message, str):
            message = message.encode("utf-8")
        return hmac.new(key, message, digestmod).hexdigest()
    except (AttributeError, ValueError, TypeError) as e:
        raise SigningError(f"Could not compute {SIGNATURE_ALGORITHM} HMAC: {e}") from e
