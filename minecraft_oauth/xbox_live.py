"""Xbox Live user authentication and XSTS authorization"""

import logging
from typing import Any, Dict, Optional

import httpx

from .constants import (
    JSON_HEADERS,
    MINECRAFT_RELYING_PARTY,
    XBOX_LIVE_AUTH_URL,
    XBOX_LIVE_RELYING_PARTY,
    XBOX_LIVE_SITE_NAME,
    XSTS_AUTH_URL,
    XSTS_SANDBOX_ID,
)
from .errors import XERR_ERRORS, XboxLiveTicketError, XSTSTokenError
from .models import SecurityTokenData, TicketData
from .utils import STAGE_FAILURES, build_stage_error, error_payload


logger = logging.getLogger(__name__)


async def request_xbox_live_ticket(
    client: httpx.AsyncClient,
    access_token: str,
) -> TicketData:
    """Authenticate with Xbox Live using a Microsoft access token

    Args:
        client: HTTP client to send the request with
        access_token: Microsoft access token

    Returns:
        TicketData holding the Xbox Live user token

    Raises:
        XboxLiveTicketError: If authentication fails
    """
    body = {
        "Properties": {
            "AuthMethod": "RPS",
            "SiteName": XBOX_LIVE_SITE_NAME,
            "RpsTicket": f"d={access_token}",
        },
        "RelyingParty": XBOX_LIVE_RELYING_PARTY,
        "TokenType": "JWT",
    }

    logger.info("Authenticating with Xbox Live")

    try:
        response = await client.post(XBOX_LIVE_AUTH_URL, json=body, headers=JSON_HEADERS)
        logger.debug(f"Xbox Live response status: {response.status_code}")
        response.raise_for_status()
        return TicketData(ticket=response.json()["Token"])
    except STAGE_FAILURES as e:
        raise build_stage_error(XboxLiveTicketError, "Failed to get Xbox Live token", e) from e


def _xerr_code(payload: Dict[str, Any]) -> Optional[int]:
    """Read the numeric XErr code from an XSTS error body"""
    try:
        return int(payload.get("XErr"))
    except (TypeError, ValueError):
        return None


async def request_xsts_token(
    client: httpx.AsyncClient,
    ticket: str,
) -> SecurityTokenData:
    """Exchange an Xbox Live user token for an XSTS token scoped to Minecraft

    Only the first DisplayClaims.xui entry is used for the user hash.

    Args:
        client: HTTP client to send the request with
        ticket: Xbox Live user token

    Returns:
        SecurityTokenData with the XSTS token and user hash

    Raises:
        NoXboxAccountError: XSTS answered 401 with XErr 2148916233
        UnsupportedRegionError: XSTS answered 401 with XErr 2148916238
        XSTSTokenError: Any other failure
    """
    body = {
        "Properties": {
            "SandboxId": XSTS_SANDBOX_ID,
            "UserTokens": [ticket],
        },
        "RelyingParty": MINECRAFT_RELYING_PARTY,
        "TokenType": "JWT",
    }

    logger.info("Requesting XSTS token")

    try:
        response = await client.post(XSTS_AUTH_URL, json=body, headers=JSON_HEADERS)
        logger.debug(f"XSTS response status: {response.status_code}")
        response.raise_for_status()
        payload = response.json()

        return SecurityTokenData(
            token=payload["Token"],
            user_hash=payload["DisplayClaims"]["xui"][0]["uhs"],
        )
    except httpx.HTTPStatusError as e:
        payload = error_payload(e) or {}
        if e.response.status_code == 401:
            xerr = _xerr_code(payload)
            error_cls = XERR_ERRORS.get(xerr)
            if error_cls is not None:
                logger.error(f"XSTS rejected the account (XErr {xerr}): {payload}")
                raise error_cls(
                    status_code=401,
                    detail=payload,
                    xerr=xerr,
                    redirect=payload.get("Redirect"),
                ) from e
        raise build_stage_error(XSTSTokenError, "Failed to get XSTS token", e) from e
    except STAGE_FAILURES as e:
        raise build_stage_error(XSTSTokenError, "Failed to get XSTS token", e) from e
