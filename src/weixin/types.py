"""
Shared types for the Weixin client.
Endpoint templates, credentials and decoded response records.
"""

import os
from dataclasses import asdict, dataclass
from typing import Any, Mapping

OPEN_BASE = "https://open.weixin.qq.com"
API_BASE = "https://api.weixin.qq.com"

AUTHORIZE_URL = (
    OPEN_BASE
    + "/connect/oauth2/authorize?appid={app_id}&redirect_uri={redirect_uri}"
    "&response_type=code&scope={scope}&state={state}#wechat_redirect"
)
ACCESS_TOKEN_URL = (
    API_BASE
    + "/cgi-bin/token?grant_type=client_credential&appid={app_id}&secret={secret}"
)
WEB_ACCESS_TOKEN_URL = (
    API_BASE
    + "/sns/oauth2/access_token?appid={app_id}&secret={secret}&code={code}"
    "&grant_type=authorization_code"
)
USER_INFO_URL = (
    API_BASE + "/sns/userinfo?access_token={access_token}&openid={openid}&lang=zh_CN"
)
TICKET_URL = (
    API_BASE + "/cgi-bin/ticket/getticket?access_token={access_token}&type=jsapi"
)

ENV_APP_ID = "WEIXIN_APP_ID"
ENV_APP_SECRET = "WEIXIN_APP_SECRET"


class WeixinError(Exception):
    """Base class for errors raised by this package."""


class TransportError(WeixinError):
    """The request could not be sent or the response body could not be read."""


class DecodeError(WeixinError, ValueError):
    """Response body is not JSON or does not match the expected record shape."""


@dataclass(frozen=True)
class Credentials:
    app_id: str
    app_secret: str

    def __repr__(self) -> str:
        return f"Credentials(app_id={self.app_id!r}, app_secret='***')"

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read credentials from WEIXIN_APP_ID / WEIXIN_APP_SECRET."""
        values = []
        for name in (ENV_APP_ID, ENV_APP_SECRET):
            value = os.environ.get(name)
            if not value:
                raise ValueError(f"environment variable {name} is not set")
            values.append(value)
        return cls(*values)


# ── Field coercion ───────────────────────────────────────────


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if value is None:
        return 0
    # bool is an int subclass; JSON true/false is never a valid count
    if isinstance(value, bool):
        raise DecodeError(f"field {key!r} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text.startswith("-") else text
        # ASCII decimal digits only, optional leading minus
        if not (digits.isascii() and digits.isdigit()):
            raise DecodeError(f"field {key!r} is not an integer: {value!r}")
        return int(text)
    raise DecodeError(f"field {key!r} must be an integer, got {type(value).__name__}")


def _str_list(data: Mapping[str, Any], key: str) -> tuple:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"field {key!r} must be a list of strings")
    return tuple(value)


def _require_object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    return data


# ── Response records ─────────────────────────────────────────


@dataclass(frozen=True)
class _Response:
    errcode: int = 0
    errmsg: str = ""

    @property
    def ok(self) -> bool:
        return self.errcode == 0

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, tuple):
                result[key] = list(value)
        return result


@dataclass(frozen=True)
class AccessTokenResponse(_Response):
    access_token: str = ""
    expires_in: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "AccessTokenResponse":
        data = _require_object(data)
        return cls(
            access_token=_str(data, "access_token"),
            expires_in=_int(data, "expires_in"),
            errcode=_int(data, "errcode"),
            errmsg=_str(data, "errmsg"),
        )


@dataclass(frozen=True)
class WebAccessTokenResponse(_Response):
    access_token: str = ""
    expires_in: int = 0
    refresh_token: str = ""
    openid: str = ""
    scope: str = ""
    unionid: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "WebAccessTokenResponse":
        data = _require_object(data)
        return cls(
            access_token=_str(data, "access_token"),
            expires_in=_int(data, "expires_in"),
            refresh_token=_str(data, "refresh_token"),
            openid=_str(data, "openid"),
            scope=_str(data, "scope"),
            unionid=_str(data, "unionid"),
            errcode=_int(data, "errcode"),
            errmsg=_str(data, "errmsg"),
        )


@dataclass(frozen=True)
class UserInfoResponse(_Response):
    """Profile of an end user. ``sex`` is 1 for male, 2 for female, 0 unknown."""

    openid: str = ""
    nickname: str = ""
    sex: int = 0
    province: str = ""
    city: str = ""
    country: str = ""
    headimgurl: str = ""
    privilege: tuple = ()
    unionid: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "UserInfoResponse":
        data = _require_object(data)
        return cls(
            openid=_str(data, "openid"),
            nickname=_str(data, "nickname"),
            sex=_int(data, "sex"),
            province=_str(data, "province"),
            city=_str(data, "city"),
            country=_str(data, "country"),
            headimgurl=_str(data, "headimgurl"),
            privilege=_str_list(data, "privilege"),
            unionid=_str(data, "unionid"),
            errcode=_int(data, "errcode"),
            errmsg=_str(data, "errmsg"),
        )


@dataclass(frozen=True)
class TicketResponse(_Response):
    ticket: str = ""
    expires_in: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "TicketResponse":
        data = _require_object(data)
        return cls(
            ticket=_str(data, "ticket"),
            expires_in=_int(data, "expires_in"),
            errcode=_int(data, "errcode"),
            errmsg=_str(data, "errmsg"),
        )
