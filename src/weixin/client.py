"""
Weixin API Client
OAuth redirect, access tokens, user info, JS-SDK tickets and signatures.
"""

import argparse
import json
import logging
import os
import re
import sys
import urllib.parse
from typing import Optional

import requests

from . import signature
from .types import (
    ACCESS_TOKEN_URL,
    AUTHORIZE_URL,
    ENV_APP_ID,
    ENV_APP_SECRET,
    TICKET_URL,
    USER_INFO_URL,
    WEB_ACCESS_TOKEN_URL,
    AccessTokenResponse,
    Credentials,
    DecodeError,
    TicketResponse,
    TransportError,
    UserInfoResponse,
    WebAccessTokenResponse,
    WeixinError,
)

logger = logging.getLogger(__name__)

_SENSITIVE_PARAM = re.compile(r"([?&](?:secret|access_token|code)=)[^&#\s]*")


def _mask(text: str) -> str:
    """Hide secrets and tokens carried in query strings."""
    return _SENSITIVE_PARAM.sub(r"\1***", text)


class WeixinClient:
    """Weixin API client bound to one application's credentials."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    @classmethod
    def from_env(cls) -> "WeixinClient":
        return cls(Credentials.from_env())

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def _get(self, url: str, record_type):
        logger.debug("GET %s", _mask(url))
        try:
            with requests.get(url) as resp:
                body = resp.content
        except requests.RequestException as exc:
            logger.error("request to %s failed: %s", _mask(url), _mask(str(exc)))
            raise TransportError(_mask(str(exc))) from exc

        try:
            data = json.loads(body)
        except (ValueError, RecursionError) as exc:
            logger.error("response from %s is not JSON: %s", _mask(url), exc)
            raise DecodeError(f"response body is not valid JSON: {exc}") from exc

        try:
            record = record_type.from_dict(data)
        except DecodeError as exc:
            logger.error("unexpected response from %s: %s", _mask(url), exc)
            raise

        if not record.ok:
            logger.debug("remote error %s: %s", record.errcode, record.errmsg)
        return record

    # ── OAuth ─────────────────────────────────────────────

    def build_authorization_url(
        self, redirect_uri: str, scope: str = "snsapi_base", state: str = ""
    ) -> str:
        return AUTHORIZE_URL.format(
            app_id=self._credentials.app_id,
            redirect_uri=urllib.parse.quote(redirect_uri, safe=""),
            scope=scope,
            state=state,
        )

    def fetch_web_access_token(self, code: str) -> WebAccessTokenResponse:
        url = WEB_ACCESS_TOKEN_URL.format(
            app_id=self._credentials.app_id,
            secret=self._credentials.app_secret,
            code=code,
        )
        return self._get(url, WebAccessTokenResponse)

    def fetch_user_info(self, access_token: str, openid: str) -> UserInfoResponse:
        url = USER_INFO_URL.format(access_token=access_token, openid=openid)
        return self._get(url, UserInfoResponse)

    # ── Application token ─────────────────────────────────

    def fetch_access_token(self) -> AccessTokenResponse:
        url = ACCESS_TOKEN_URL.format(
            app_id=self._credentials.app_id,
            secret=self._credentials.app_secret,
        )
        return self._get(url, AccessTokenResponse)

    # ── JS-SDK ────────────────────────────────────────────

    def fetch_ticket(self, access_token: str) -> TicketResponse:
        url = TICKET_URL.format(access_token=access_token)
        return self._get(url, TicketResponse)

    @staticmethod
    def compute_signature(ticket: str, nonce: str, timestamp: int, url: str) -> str:
        return signature.compute_signature(ticket, nonce, timestamp, url)

    def jsapi_config(
        self,
        ticket: str,
        url: str,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> dict:
        return signature.build_jsapi_config(
            self._credentials.app_id, ticket, url, nonce=nonce, timestamp=timestamp
        )


# ── CLI ───────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weixin API client")
    parser.add_argument("--app-id", help="defaults to $WEIXIN_APP_ID")
    parser.add_argument("--app-secret", help="defaults to $WEIXIN_APP_SECRET")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("authorize-url")
    p.add_argument("--redirect-uri", required=True)
    p.add_argument("--scope", default="snsapi_base")
    p.add_argument("--state", default="")

    sub.add_parser("token")

    p = sub.add_parser("web-token")
    p.add_argument("--code", required=True)

    p = sub.add_parser("userinfo")
    p.add_argument("--access-token", required=True)
    p.add_argument("--openid", required=True)

    p = sub.add_parser("ticket")
    p.add_argument("--access-token", required=True)

    p = sub.add_parser("sign")
    p.add_argument("--ticket", required=True)
    p.add_argument("--url", required=True)
    p.add_argument("--nonce")
    p.add_argument("--timestamp", type=int)

    return parser


_DISPATCH = {
    "authorize-url": lambda c, a: c.build_authorization_url(
        a.redirect_uri, a.scope, a.state
    ),
    "token": lambda c, _: c.fetch_access_token(),
    "web-token": lambda c, a: c.fetch_web_access_token(a.code),
    "userinfo": lambda c, a: c.fetch_user_info(a.access_token, a.openid),
    "ticket": lambda c, a: c.fetch_ticket(a.access_token),
    "sign": lambda c, a: c.jsapi_config(a.ticket, a.url, a.nonce, a.timestamp),
}


def _credentials(args: argparse.Namespace) -> Credentials:
    app_id = args.app_id or os.environ.get(ENV_APP_ID)
    app_secret = args.app_secret or os.environ.get(ENV_APP_SECRET)
    if not app_id:
        raise ValueError(f"--app-id or {ENV_APP_ID} is required")
    if not app_secret:
        raise ValueError(f"--app-secret or {ENV_APP_SECRET} is required")
    return Credentials(app_id, app_secret)


def main() -> None:
    """CLI entry point for API operations."""
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handler = _DISPATCH[args.command]
    try:
        client = WeixinClient(_credentials(args))
        result = handler(client, args)
    except (WeixinError, ValueError) as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False), file=sys.stderr)
        sys.exit(1)

    if isinstance(result, str):
        print(result)
        return

    payload = result if isinstance(result, dict) else result.to_dict()
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    print()
    if not getattr(result, "ok", True):
        sys.exit(1)
