"""Shared fixtures: a fake Microsoft/Xbox/Minecraft backend behind httpx.MockTransport"""

from typing import Callable, Dict, List

import httpx
import pytest
import pytest_asyncio

from minecraft_oauth import MicrosoftAuthProvider
from minecraft_oauth.constants import (
    MINECRAFT_ENTITLEMENTS_URL,
    MINECRAFT_LOGIN_URL,
    MINECRAFT_PROFILE_URL,
    TOKEN_URL,
    XBOX_LIVE_AUTH_URL,
    XSTS_AUTH_URL,
)

CLIENT_ID = "00000000-test-client"

MS_TOKEN_BODY = {
    "token_type": "Bearer",
    "scope": "XboxLive.signin offline_access",
    "expires_in": 3600,
    "access_token": "ms-access-token",
    "refresh_token": "ms-refresh-token",
}
XBL_BODY = {
    "IssueInstant": "2024-01-01T00:00:00.0000000Z",
    "NotAfter": "2024-01-15T00:00:00.0000000Z",
    "Token": "xbl-token",
    "DisplayClaims": {"xui": [{"uhs": "user-hash"}]},
}
XSTS_BODY = {
    "IssueInstant": "2024-01-01T00:00:00.0000000Z",
    "NotAfter": "2024-01-02T00:00:00.0000000Z",
    "Token": "xsts-token",
    "DisplayClaims": {"xui": [{"uhs": "user-hash"}]},
}
MC_TOKEN_BODY = {
    "username": "0f0f0f0f-xbox-id",
    "roles": [],
    "access_token": "mc-access-token",
    "token_type": "Bearer",
    "expires_in": 86400,
}
PROFILE_BODY = {
    "id": "069a79f444e94726a5befca90e38aaf5",
    "name": "Notch",
    "skins": [
        {
            "id": "6a6e65e5-76dd-4c3c-a625-162924514568",
            "state": "ACTIVE",
            "url": "http://textures.minecraft.net/texture/abc",
            "variant": "CLASSIC",
            "alias": "STEVE",
        }
    ],
    "capes": [],
}
ENTITLEMENTS_BODY = {
    "items": [
        {"name": "product_minecraft", "signature": "sig"},
        {"name": "game_minecraft", "signature": "sig"},
    ],
    "signature": "sig",
    "keyId": "1",
}

Route = Callable[[httpx.Request], httpx.Response]


def _base_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def respond(status_code: int = 200, json=None, content: bytes = None) -> Route:
    """Route answering every request with a fresh response"""
    def route(request: httpx.Request) -> httpx.Response:
        if json is not None:
            return httpx.Response(status_code, json=json)
        return httpx.Response(status_code, content=content or b"")
    return route


def fail_with(exc_cls=httpx.ConnectError, message: str = "connection refused") -> Route:
    """Route raising a transport error"""
    def route(request: httpx.Request) -> httpx.Response:
        raise exc_cls(message, request=request)
    return route


class FakeServices:
    """Routes requests by URL and records every request received"""

    def __init__(self):
        self.routes: Dict[str, Route] = {
            TOKEN_URL: respond(json=MS_TOKEN_BODY),
            XBOX_LIVE_AUTH_URL: respond(json=XBL_BODY),
            XSTS_AUTH_URL: respond(json=XSTS_BODY),
            MINECRAFT_LOGIN_URL: respond(json=MC_TOKEN_BODY),
            MINECRAFT_PROFILE_URL: respond(json=PROFILE_BODY),
            MINECRAFT_ENTITLEMENTS_URL: respond(json=ENTITLEMENTS_BODY),
        }
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = _base_url(request)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, json={"error": "no route"})
        return route(request)

    def hits(self, url: str) -> List[httpx.Request]:
        return [r for r in self.requests if _base_url(r) == url]


@pytest.fixture
def services() -> FakeServices:
    return FakeServices()


@pytest_asyncio.fixture
async def http_client(services):
    async with httpx.AsyncClient(transport=httpx.MockTransport(services.handler)) as client:
        yield client


@pytest.fixture
def provider(http_client) -> MicrosoftAuthProvider:
    return MicrosoftAuthProvider(client_id=CLIENT_ID, http_client=http_client)
