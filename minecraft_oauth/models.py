"""Data models for the Microsoft -> Minecraft login chain"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import settings
from .constants import ACCOUNT_TYPE, NATIVE_CLIENT_REDIRECT_URI
from .errors import ConfigurationError


def now_ms() -> int:
    """Current time as epoch milliseconds"""
    return int(time.time() * 1000)


def expires_at_ms(expires_in: int) -> int:
    """Absolute expiry (epoch milliseconds) for a token issued now"""
    return now_ms() + int(expires_in) * 1000


@dataclass(frozen=True)
class ProviderConfig:
    """Azure application settings for the provider

    Attributes:
        client_id: Azure application (client) id
        redirect_uri: Redirect URI registered for the application
    """
    client_id: str
    redirect_uri: str = NATIVE_CLIENT_REDIRECT_URI

    def __post_init__(self):
        if not self.client_id:
            raise ConfigurationError("client_id is required")
        if not self.redirect_uri:
            object.__setattr__(self, "redirect_uri", NATIVE_CLIENT_REDIRECT_URI)

    @classmethod
    def from_settings(cls) -> "ProviderConfig":
        """Build a config from MS_CLIENT_ID / MS_REDIRECT_URI"""
        return cls(client_id=settings.MS_CLIENT_ID, redirect_uri=settings.MS_REDIRECT_URI)


@dataclass
class PlatformTokenData:
    """Microsoft OAuth token pair"""
    access_token: str
    refresh_token: str
    expires_in: int


@dataclass
class TicketData:
    """Xbox Live user token (the RPS ticket exchange result)"""
    ticket: str


@dataclass
class SecurityTokenData:
    """XSTS token scoped to Minecraft services

    Attributes:
        token: XSTS JWT
        user_hash: ``uhs`` claim of the first DisplayClaims.xui entry
    """
    token: str
    user_hash: str


@dataclass
class ServiceTokenData:
    """Minecraft services access token"""
    access_token: str
    expires_in: int


@dataclass
class SkinEntry:
    id: str
    state: str
    url: str
    variant: Optional[str] = None
    alias: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "SkinEntry":
        return cls(
            id=data.get("id", ""),
            state=data.get("state", ""),
            url=data.get("url", ""),
            variant=data.get("variant"),
            alias=data.get("alias"),
        )


@dataclass
class CapeEntry:
    id: str
    state: str
    url: str
    alias: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "CapeEntry":
        return cls(
            id=data.get("id", ""),
            state=data.get("state", ""),
            url=data.get("url", ""),
            alias=data.get("alias"),
        )


@dataclass
class ProfileData:
    """Public Minecraft Java profile"""
    id: str
    name: str
    skins: List[SkinEntry] = field(default_factory=list)
    capes: List[CapeEntry] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "ProfileData":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            skins=[SkinEntry.from_payload(s) for s in data.get("skins") or [] if isinstance(s, dict)],
            capes=[CapeEntry.from_payload(c) for c in data.get("capes") or [] if isinstance(c, dict)],
        )


@dataclass
class MicrosoftTokens:
    """Microsoft tokens as handed back to the caller

    Attributes:
        access_token: Microsoft access token
        refresh_token: Token to pass to refresh_tokens() later
        expires_at: Absolute expiry in epoch milliseconds
    """
    access_token: str
    refresh_token: str
    expires_at: int

    def is_expired(self, buffer_seconds: int = 300) -> bool:
        """Check if the access token is expired (with a 5 minute buffer by default)"""
        return now_ms() >= self.expires_at - buffer_seconds * 1000


@dataclass
class MinecraftToken:
    """Minecraft access token as handed back to the caller"""
    access_token: str
    expires_at: int

    def is_expired(self, buffer_seconds: int = 300) -> bool:
        """Check if the access token is expired (with a 5 minute buffer by default)"""
        return now_ms() >= self.expires_at - buffer_seconds * 1000


@dataclass
class UserInfo:
    """Launcher-friendly view of the signed-in player"""
    username: str
    uuid: str
    type: str = ACCOUNT_TYPE


@dataclass
class RefreshResult:
    """Result of refresh_tokens(): new tokens, no profile"""
    microsoft: MicrosoftTokens
    minecraft: MinecraftToken

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return asdict(self)


@dataclass
class LoginResult:
    """Result of complete_login()"""
    microsoft: MicrosoftTokens
    minecraft: MinecraftToken
    profile: ProfileData
    user: UserInfo

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return asdict(self)
