"""
weixin — Weixin (WeChat) web API client: OAuth, tokens, user info, JS-SDK signing.
"""

from .client import WeixinClient
from .signature import build_jsapi_config, compute_signature
from .types import (
    AccessTokenResponse,
    Credentials,
    DecodeError,
    TicketResponse,
    TransportError,
    UserInfoResponse,
    WebAccessTokenResponse,
    WeixinError,
)

__all__ = [
    "AccessTokenResponse",
    "Credentials",
    "DecodeError",
    "TicketResponse",
    "TransportError",
    "UserInfoResponse",
    "WebAccessTokenResponse",
    "WeixinClient",
    "WeixinError",
    "build_jsapi_config",
    "compute_signature",
]
__version__ = "0.1.0"
