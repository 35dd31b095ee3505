"""Minecraft services: login with Xbox, profile and entitlements"""

import logging

import httpx

from .constants import (
    JSON_HEADERS,
    MINECRAFT_ENTITLEMENTS_URL,
    MINECRAFT_LOGIN_URL,
    MINECRAFT_PRODUCT_NAME,
    MINECRAFT_PROFILE_URL,
)
from .errors import MinecraftTokenError, NoLicenseError, ProfileError
from .models import ProfileData, SecurityTokenData, ServiceTokenData
from .utils import STAGE_FAILURES, build_stage_error, error_payload


logger = logging.getLogger(__name__)


def _bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


async def request_minecraft_token(
    client: httpx.AsyncClient,
    xsts: SecurityTokenData,
) -> ServiceTokenData:
    """Log in to Minecraft services with an XSTS token

    Args:
        client: HTTP client to send the request with
        xsts: XSTS token and user hash

    Returns:
        ServiceTokenData with the Minecraft access token

    Raises:
        MinecraftTokenError: If the login fails
    """
    body = {"identityToken": f"XBL3.0 x={xsts.user_hash};{xsts.token}"}

    logger.info("Logging in to Minecraft services with Xbox identity")

    try:
        response = await client.post(MINECRAFT_LOGIN_URL, json=body, headers=JSON_HEADERS)
        logger.debug(f"Minecraft login response status: {response.status_code}")
        response.raise_for_status()
        payload = response.json()

        return ServiceTokenData(
            access_token=payload["access_token"],
            expires_in=int(payload["expires_in"]),
        )
    except STAGE_FAILURES as e:
        raise build_stage_error(MinecraftTokenError, "Failed to get Minecraft token", e) from e


async def fetch_minecraft_profile(
    client: httpx.AsyncClient,
    access_token: str,
) -> ProfileData:
    """Fetch the Minecraft Java profile of the signed-in account

    Args:
        client: HTTP client to send the request with
        access_token: Minecraft access token

    Returns:
        ProfileData with id, name, skins and capes

    Raises:
        NoLicenseError: No profile (HTTP 404 or a body without ``id``)
        ProfileError: Any other failure
    """
    logger.info("Fetching Minecraft profile")

    try:
        response = await client.get(MINECRAFT_PROFILE_URL, headers=_bearer(access_token))
        logger.debug(f"Minecraft profile response status: {response.status_code}")
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.error("Minecraft profile not found (HTTP 404)")
            raise NoLicenseError(
                "This account does not own Minecraft",
                status_code=404,
                detail=error_payload(e),
            ) from e
        raise build_stage_error(ProfileError, "Failed to get Minecraft profile", e) from e
    except STAGE_FAILURES as e:
        raise build_stage_error(ProfileError, "Failed to get Minecraft profile", e) from e

    if not isinstance(payload, dict) or not payload.get("id"):
        logger.error("Minecraft profile response has no id")
        raise NoLicenseError(status_code=response.status_code)

    try:
        return ProfileData.from_payload(payload)
    except STAGE_FAILURES as e:
        raise build_stage_error(ProfileError, "Failed to get Minecraft profile", e) from e


async def has_valid_token(client: httpx.AsyncClient, access_token: str) -> bool:
    """Check a Minecraft access token against the entitlements endpoint

    Never raises: transport errors, unencodable tokens and non-2xx
    responses count as invalid.

    Args:
        client: HTTP client to send the request with
        access_token: Minecraft access token

    Returns:
        True if the endpoint accepted the token
    """
    try:
        response = await client.get(MINECRAFT_ENTITLEMENTS_URL, headers=_bearer(access_token))
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Minecraft token validation failed: {e}")
        return False

    logger.debug(f"Entitlements response status: {response.status_code}")
    return response.is_success


async def owns_minecraft(client: httpx.AsyncClient, access_token: str) -> bool:
    """Check whether the account's entitlements include Minecraft

    Never raises: any failure counts as not owning the game.

    Args:
        client: HTTP client to send the request with
        access_token: Minecraft access token

    Returns:
        True if an entitlement named ``game_minecraft`` is present
    """
    try:
        response = await client.get(MINECRAFT_ENTITLEMENTS_URL, headers=_bearer(access_token))
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to check game ownership: {e}")
        return False

    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        logger.warning("Entitlements response has no items list")
        return False

    return any(
        isinstance(item, dict) and item.get("name") == MINECRAFT_PRODUCT_NAME
        for item in items
    )
