# dashboard/core/tokens.py
"""
Access token decoding.

The dashboard only ever *reads* the token the API handed out at sign in.
Nothing here checks the signature: the claims are used to pick which
screens to offer, and the API re-checks the role on every request.
"""
import base64
import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def decode_token(token: str) -> Optional[dict]:
    """
    Decodes a JWT payload WITHOUT verifying the signature.

    Args:
        token: The JWT string (header.payload.signature)

    Returns:
        dict: The payload, or None if the token is malformed
    """
    try:
        _header, payload_b64, _signature = token.split(".")
        # URL-safe alphabet -> standard alphabet, then restore padding
        payload_b64 = payload_b64.replace("-", "+").replace("_", "/")
        payload_b64 += "=" * (-len(payload_b64) % 4)
        payload_json = base64.b64decode(payload_b64, validate=True).decode("utf-8")
        payload = json.loads(payload_json)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Error decoding token: %s", exc)
        return None

    if not isinstance(payload, dict):
        logger.warning("Error decoding token: payload is %s, not an object", type(payload).__name__)
        return None
    return payload
