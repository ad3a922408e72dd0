"""
JS-SDK signing
Canonical string, SHA-1 signature and the wx.config payload.
"""

import hashlib
import secrets
import string
import time
from typing import Optional

NONCE_ALPHABET = string.ascii_letters + string.digits
NONCE_LENGTH = 16


def canonical_string(ticket: str, nonce: str, timestamp: int, url: str) -> str:
    """Join the signed fields in the order the platform hashes them."""
    return (
        f"jsapi_ticket={ticket}"
        f"&noncestr={nonce}"
        f"&timestamp={int(timestamp)}"
        f"&url={url}"
    )


def compute_signature(ticket: str, nonce: str, timestamp: int, url: str) -> str:
    """SHA-1 of the canonical string as 40 lowercase hex characters."""
    raw = canonical_string(ticket, nonce, timestamp, url)
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


def make_nonce(length: int = NONCE_LENGTH) -> str:
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def make_timestamp() -> int:
    return int(time.time())


def build_jsapi_config(
    app_id: str,
    ticket: str,
    url: str,
    nonce: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> dict:
    """Build the object a page passes to ``wx.config``.

    The page URL is signed without its ``#fragment``. Nonce and timestamp
    are generated when not given.
    """
    nonce = nonce if nonce is not None else make_nonce()
    timestamp = int(timestamp) if timestamp is not None else make_timestamp()
    page_url = url.split("#", 1)[0]
    return {
        "appId": app_id,
        "timestamp": timestamp,
        "nonceStr": nonce,
        "signature": compute_signature(ticket, nonce, timestamp, page_url),
    }
