"""Microsoft OAuth token exchange (authorization code and refresh grants)"""

import logging

import httpx

from .constants import SCOPE, TOKEN_URL
from .errors import MicrosoftTokenError
from .models import PlatformTokenData, ProviderConfig
from .utils import STAGE_FAILURES, build_stage_error


logger = logging.getLogger(__name__)


async def request_microsoft_token(
    client: httpx.AsyncClient,
    config: ProviderConfig,
    code: str,
    is_refresh: bool = False,
) -> PlatformTokenData:
    """Exchange an authorization code or a refresh token for Microsoft tokens

    Args:
        client: HTTP client to send the request with
        config: Provider configuration (client id, redirect URI)
        code: Authorization code, or refresh token when ``is_refresh`` is set
        is_refresh: Use the refresh_token grant instead of authorization_code

    Returns:
        PlatformTokenData with access and refresh tokens

    Raises:
        MicrosoftTokenError: If the request fails or the response is unusable
    """
    data = {
        "client_id": config.client_id,
        "scope": SCOPE,
    }
    if is_refresh:
        data["grant_type"] = "refresh_token"
        data["refresh_token"] = code
    else:
        data["grant_type"] = "authorization_code"
        data["code"] = code
        data["redirect_uri"] = config.redirect_uri

    logger.info(f"Requesting Microsoft token ({data['grant_type']}) at {TOKEN_URL}")

    try:
        # httpx form-encodes ``data`` and sets the Content-Type header
        response = await client.post(TOKEN_URL, data=data)
        logger.debug(f"Microsoft token response status: {response.status_code}")
        response.raise_for_status()
        payload = response.json()

        return PlatformTokenData(
            access_token=payload["access_token"],
            # Refresh responses may omit a new refresh token; keep the old one
            refresh_token=payload.get("refresh_token") or (code if is_refresh else ""),
            expires_in=int(payload["expires_in"]),
        )
    except STAGE_FAILURES as e:
        raise build_stage_error(
            MicrosoftTokenError, "Failed to get Microsoft token", e, "error_description"
        ) from e
