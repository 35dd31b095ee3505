"""Microsoft account login for Minecraft

Orchestrates the five-stage chain:

1. Microsoft token (authorization code or refresh grant)
2. Xbox Live user token
3. XSTS token scoped to Minecraft services
4. Minecraft access token
5. Minecraft profile (full login only)

Stages run strictly in order and are never retried. The first failure is
pushed to every registered error listener and then re-raised to the caller.
"""

import inspect
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Iterable, List, Optional, Union

import httpx

import settings
from .authorization import AuthorizationURLBuilder
from .models import (
    LoginResult,
    MicrosoftTokens,
    MinecraftToken,
    ProviderConfig,
    RefreshResult,
    UserInfo,
    expires_at_ms,
)
from .minecraft import (
    fetch_minecraft_profile,
    has_valid_token,
    owns_minecraft,
    request_minecraft_token,
)
from .token_exchange import request_microsoft_token
from .xbox_live import request_xbox_live_ticket, request_xsts_token


logger = logging.getLogger(__name__)

ErrorListener = Callable[[Exception], Union[None, Awaitable[None]]]


class MicrosoftAuthProvider:
    """Microsoft -> Xbox Live -> Minecraft authentication provider

    Holds configuration, an optional shared HTTP client and the error
    listeners; no per-call state, so one instance can serve concurrent logins.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        error_listeners: Optional[Iterable[ErrorListener]] = None,
    ):
        """Initialize the provider

        Args:
            client_id: Azure application (client) id
            redirect_uri: Redirect URI (defaults to the native-client URI)
            http_client: Client used for every request. When omitted each
                operation opens and closes its own httpx.AsyncClient.
            error_listeners: Callables notified of every login/refresh failure

        Raises:
            ConfigurationError: If client_id is empty
        """
        if redirect_uri:
            self.config = ProviderConfig(client_id=client_id, redirect_uri=redirect_uri)
        else:
            self.config = ProviderConfig(client_id=client_id)
        self.auth_builder = AuthorizationURLBuilder(self.config)
        self._http_client = http_client
        self._error_listeners: List[ErrorListener] = list(error_listeners or [])

    @classmethod
    def from_settings(cls, **kwargs) -> "MicrosoftAuthProvider":
        """Create a provider from MS_CLIENT_ID / MS_REDIRECT_URI"""
        config = ProviderConfig.from_settings()
        return cls(config.client_id, config.redirect_uri, **kwargs)

    @property
    def client_id(self) -> str:
        return self.config.client_id

    @property
    def redirect_uri(self) -> str:
        return self.config.redirect_uri

    # Error notification
    def add_error_listener(self, listener: ErrorListener) -> None:
        """Register a callable (sync or async) notified of login/refresh failures"""
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        """Unregister a previously added listener"""
        self._error_listeners.remove(listener)

    async def _notify_error(self, error: Exception) -> None:
        for listener in list(self._error_listeners):
            try:
                result = listener(error)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                # A broken listener must not replace the chain error
                logger.exception("Error listener raised while handling a login failure")

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
                yield client

    # Authorization URL
    def get_authorization_url(self) -> str:
        """Microsoft authorization URL for this client

        Returns:
            Full authorization URL
        """
        return self.auth_builder.get_authorize_url()

    # Chain
    async def _exchange_for_minecraft(
        self,
        client: httpx.AsyncClient,
        code: str,
        is_refresh: bool,
    ) -> RefreshResult:
        """Run stages 1-4 and stamp absolute expiry times as each token arrives"""
        ms_token = await request_microsoft_token(client, self.config, code, is_refresh)
        microsoft = MicrosoftTokens(
            access_token=ms_token.access_token,
            refresh_token=ms_token.refresh_token,
            expires_at=expires_at_ms(ms_token.expires_in),
        )

        xbl_ticket = await request_xbox_live_ticket(client, ms_token.access_token)
        xsts = await request_xsts_token(client, xbl_ticket.ticket)

        mc_token = await request_minecraft_token(client, xsts)
        minecraft = MinecraftToken(
            access_token=mc_token.access_token,
            expires_at=expires_at_ms(mc_token.expires_in),
        )

        return RefreshResult(microsoft=microsoft, minecraft=minecraft)

    async def complete_login(self, auth_code: str) -> LoginResult:
        """Turn an authorization code into Minecraft tokens and profile

        Args:
            auth_code: Authorization code from the redirect

        Returns:
            LoginResult with Microsoft tokens, Minecraft token, profile and user view

        Raises:
            MinecraftAuthError: First stage failure (also sent to error listeners)
        """
        logger.info("Starting Microsoft login")
        try:
            async with self._http() as client:
                tokens = await self._exchange_for_minecraft(client, auth_code, is_refresh=False)
                profile = await fetch_minecraft_profile(client, tokens.minecraft.access_token)
        except Exception as e:
            await self._notify_error(e)
            raise

        logger.info(f"Microsoft login complete for {profile.name}")
        return LoginResult(
            microsoft=tokens.microsoft,
            minecraft=tokens.minecraft,
            profile=profile,
            user=UserInfo(username=profile.name, uuid=profile.id),
        )

    async def refresh_tokens(self, refresh_token: str) -> RefreshResult:
        """Refresh Microsoft and Minecraft tokens without re-fetching the profile

        Args:
            refresh_token: Microsoft refresh token from a previous login

        Returns:
            RefreshResult with new tokens

        Raises:
            MinecraftAuthError: First stage failure (also sent to error listeners)
        """
        logger.info("Refreshing Microsoft/Minecraft tokens")
        try:
            async with self._http() as client:
                result = await self._exchange_for_minecraft(client, refresh_token, is_refresh=True)
        except Exception as e:
            await self._notify_error(e)
            raise

        logger.info("Token refresh complete")
        return result

    # Auxiliary checks (never raise)
    async def validate_token(self, access_token: str) -> bool:
        """Check whether a Minecraft access token is still accepted

        Returns:
            True if valid, False on any failure
        """
        async with self._http() as client:
            return await has_valid_token(client, access_token)

    async def check_game_ownership(self, access_token: str) -> bool:
        """Check whether the account owns Minecraft

        Returns:
            True if owned, False on any failure
        """
        async with self._http() as client:
            return await owns_minecraft(client, access_token)
