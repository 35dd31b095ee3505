"""Microsoft authorization URL construction and redirect parsing"""

from typing import Optional
from urllib.parse import parse_qs, quote, urlencode, urlparse

from .constants import AUTHORIZE_URL, NATIVE_CLIENT_REDIRECT_URI, SCOPE
from .errors import AuthorizationError
from .models import ProviderConfig


class AuthorizationURLBuilder:
    """Builds Microsoft authorization URLs for the Xbox Live sign-in scope"""

    def __init__(self, config: ProviderConfig):
        self.config = config

    def get_authorize_url(self) -> str:
        """Construct the authorization URL

        Pure function of the configuration; no I/O.

        Returns:
            Full authorization URL
        """
        params = {
            "prompt": "select_account",
            "client_id": self.config.client_id,
            "response_type": "code",
            "scope": SCOPE,
            "redirect_uri": self.config.redirect_uri,
        }
        # quote (not quote_plus) so the scope separator is sent as %20
        return f"{AUTHORIZE_URL}?{urlencode(params, quote_via=quote)}"


def parse_redirect_url(
    url: str,
    redirect_uri: str = NATIVE_CLIENT_REDIRECT_URI,
) -> Optional[str]:
    """Extract the authorization code from a redirect URL

    Args:
        url: URL the login window navigated to
        redirect_uri: Configured redirect URI

    Returns:
        The authorization code, or None if the URL is not the redirect
        or carries neither a code nor an error

    Raises:
        AuthorizationError: If the redirect carries an ``error`` parameter
    """
    if not url or not url.startswith(redirect_uri):
        return None

    params = parse_qs(urlparse(url).query)
    code = params.get("code", [None])[0]
    if code:
        return code

    error = params.get("error", [None])[0]
    if error:
        raise AuthorizationError(error, params.get("error_description", [None])[0])

    return None
