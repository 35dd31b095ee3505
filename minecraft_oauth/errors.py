"""
Error taxonomy for the Microsoft -> Xbox Live -> Minecraft login chain.

Every failure raised by the chain is a MinecraftAuthError subclass carrying an
ErrorKind, so callers can branch on ``error.kind`` (or ``isinstance``) rather
than parsing message text.
"""

from enum import Enum
from typing import Any, Dict, Optional, Type


class ErrorKind(str, Enum):
    """Kinds of failure surfaced by the login chain"""

    UNKNOWN = "unknown_error"
    MICROSOFT_TOKEN_FAILED = "microsoft_token_failed"
    XBOX_LIVE_TICKET_FAILED = "xbox_live_ticket_failed"
    XSTS_TOKEN_FAILED = "xsts_token_failed"
    MINECRAFT_TOKEN_FAILED = "minecraft_token_failed"
    PROFILE_FAILED = "profile_failed"
    NO_XBOX_ACCOUNT = "no_xbox_account"
    UNSUPPORTED_REGION = "unsupported_region"
    NO_LICENSE = "no_minecraft_license"
    USER_CANCELLED = "user_cancelled"
    AUTHORIZATION_DENIED = "access_denied"


class MinecraftAuthError(Exception):
    """Base exception for all login chain errors.

    Attributes:
        kind: ErrorKind of this failure
        stage: Chain stage that failed, or None outside the chain
        status_code: Upstream HTTP status, when a response was received
        detail: Decoded upstream error body, when it was JSON
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    stage: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class ConfigurationError(MinecraftAuthError, ValueError):
    """Provider configuration is missing or invalid"""


class AuthorizationError(MinecraftAuthError):
    """The authorization redirect reported an error instead of a code"""

    kind = ErrorKind.AUTHORIZATION_DENIED

    def __init__(self, error: str, description: Optional[str] = None):
        message = f"Authorization error: {error}"
        if description:
            message = f"{message} - {description}"
        super().__init__(message, detail={"error": error, "error_description": description})
        self.error = error
        self.description = description


class UserCancelledError(MinecraftAuthError):
    """The user closed the interactive login before a code was obtained.

    Never raised by the token chain itself; UI integrations raise it when the
    login window goes away without producing an authorization code.
    """

    kind = ErrorKind.USER_CANCELLED

    def __init__(self, message: str = "User cancelled the login"):
        super().__init__(message)


class MicrosoftTokenError(MinecraftAuthError):
    """Microsoft token endpoint rejected the code or refresh token"""

    kind = ErrorKind.MICROSOFT_TOKEN_FAILED
    stage = "microsoft_token"


class XboxLiveTicketError(MinecraftAuthError):
    """Xbox Live user authentication failed"""

    kind = ErrorKind.XBOX_LIVE_TICKET_FAILED
    stage = "xbox_live_ticket"


class XSTSTokenError(MinecraftAuthError):
    """XSTS authorization failed"""

    kind = ErrorKind.XSTS_TOKEN_FAILED
    stage = "xsts_token"
    default_message = "Failed to get XSTS token"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        detail: Optional[Dict[str, Any]] = None,
        xerr: Optional[int] = None,
        redirect: Optional[str] = None,
    ):
        super().__init__(message or self.default_message, status_code=status_code, detail=detail)
        self.xerr = xerr
        self.redirect = redirect


class NoXboxAccountError(XSTSTokenError):
    """The Microsoft account has no Xbox profile yet"""

    kind = ErrorKind.NO_XBOX_ACCOUNT
    default_message = "This account does not have an Xbox account, you need to create one"


class UnsupportedRegionError(XSTSTokenError):
    """The account's country/region is not served by Xbox Live"""

    kind = ErrorKind.UNSUPPORTED_REGION
    default_message = "This account is from a country/region where Xbox Live is not available"


class MinecraftTokenError(MinecraftAuthError):
    """Minecraft services refused the XSTS identity token"""

    kind = ErrorKind.MINECRAFT_TOKEN_FAILED
    stage = "minecraft_token"


class ProfileError(MinecraftAuthError):
    """Fetching the Minecraft profile failed"""

    kind = ErrorKind.PROFILE_FAILED
    stage = "minecraft_profile"


class NoLicenseError(ProfileError):
    """The account has no Minecraft profile, usually because it does not own the game"""

    kind = ErrorKind.NO_LICENSE

    def __init__(
        self,
        message: str = "No Minecraft profile found, the account may not own the game",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


# XErr codes returned by XSTS with HTTP 401, mapped to the error raised for each.
# Codes not listed here fall through to a generic XSTSTokenError.
XERR_ERRORS: Dict[int, Type[XSTSTokenError]] = {
    2148916233: NoXboxAccountError,
    2148916238: UnsupportedRegionError,
}
