"""Microsoft account login for Minecraft

Exchanges a Microsoft authorization code (or refresh token) through Xbox Live
and XSTS for a Minecraft services access token and the player's profile.
"""

from .constants import NATIVE_CLIENT_REDIRECT_URI, SCOPE
from .models import (
    ProviderConfig,
    PlatformTokenData,
    TicketData,
    SecurityTokenData,
    ServiceTokenData,
    SkinEntry,
    CapeEntry,
    ProfileData,
    MicrosoftTokens,
    MinecraftToken,
    UserInfo,
    LoginResult,
    RefreshResult,
)
from .errors import (
    ErrorKind,
    MinecraftAuthError,
    ConfigurationError,
    AuthorizationError,
    UserCancelledError,
    MicrosoftTokenError,
    XboxLiveTicketError,
    XSTSTokenError,
    NoXboxAccountError,
    UnsupportedRegionError,
    MinecraftTokenError,
    ProfileError,
    NoLicenseError,
    XERR_ERRORS,
)
from .authorization import AuthorizationURLBuilder, parse_redirect_url
from .provider import MicrosoftAuthProvider

__all__ = [
    "NATIVE_CLIENT_REDIRECT_URI",
    "SCOPE",
    # Models
    "ProviderConfig",
    "PlatformTokenData",
    "TicketData",
    "SecurityTokenData",
    "ServiceTokenData",
    "SkinEntry",
    "CapeEntry",
    "ProfileData",
    "MicrosoftTokens",
    "MinecraftToken",
    "UserInfo",
    "LoginResult",
    "RefreshResult",
    # Errors
    "ErrorKind",
    "MinecraftAuthError",
    "ConfigurationError",
    "AuthorizationError",
    "UserCancelledError",
    "MicrosoftTokenError",
    "XboxLiveTicketError",
    "XSTSTokenError",
    "NoXboxAccountError",
    "UnsupportedRegionError",
    "MinecraftTokenError",
    "ProfileError",
    "NoLicenseError",
    "XERR_ERRORS",
    # Authorization
    "AuthorizationURLBuilder",
    "parse_redirect_url",
    # Provider
    "MicrosoftAuthProvider",
]
