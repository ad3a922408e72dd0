"""
Shared fixtures for weixin test suite.
"""

import json
from unittest.mock import MagicMock

import pytest

from weixin.client import WeixinClient
from weixin.types import Credentials


# ── Credential fixtures ──────────────────────────────────────

@pytest.fixture
def app_id():
    return "wx1234567890abcdef"


@pytest.fixture
def app_secret():
    return "0123456789abcdef0123456789abcdef"


@pytest.fixture
def credentials(app_id, app_secret):
    return Credentials(app_id=app_id, app_secret=app_secret)


@pytest.fixture
def client(credentials):
    return WeixinClient(credentials)


# ── Mock response factory ────────────────────────────────────

@pytest.fixture
def make_response():
    """Build a MagicMock standing in for a requests.Response.

    Accepts a dict (serialized as JSON) or raw bytes. The mock works as its
    own context manager, like the real Response.
    """

    def _make(body, status_code=200):
        resp = MagicMock()
        resp.status_code = status_code
        resp.content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        resp.__enter__.return_value = resp
        resp.__exit__.return_value = False
        return resp

    return _make


# ── Response bodies ──────────────────────────────────────────

@pytest.fixture
def mock_access_token_response():
    return {"access_token": "T", "expires_in": 7200, "errcode": 0, "errmsg": ""}


@pytest.fixture
def mock_web_access_token_response():
    return {
        "access_token": "ACCESS_TOKEN",
        "expires_in": 7200,
        "refresh_token": "REFRESH_TOKEN",
        "openid": "oOPENID",
        "scope": "snsapi_userinfo",
        "unionid": "oUNIONID",
    }


@pytest.fixture
def mock_user_info_response():
    return {
        "openid": "oOPENID",
        "nickname": "张三",
        "sex": 1,
        "province": "广东",
        "city": "深圳",
        "country": "中国",
        "headimgurl": "https://thirdwx.qlogo.cn/mmopen/avatar/132",
        "privilege": ["PRIVILEGE1", "PRIVILEGE2"],
        "unionid": "oUNIONID",
    }


@pytest.fixture
def mock_ticket_response():
    return {
        "errcode": 0,
        "errmsg": "ok",
        "ticket": "bxLdikRXVbTPdHSM05e5u5sUoXNKd8-41ZO3MhKoyN5OfkWITDGgnr2fwJ0m9E8NYzWKVZvdVtaUgWvsdshFKA",
        "expires_in": 7200,
    }


@pytest.fixture
def mock_error_response():
    return {"errcode": 40001, "errmsg": "invalid credential"}
