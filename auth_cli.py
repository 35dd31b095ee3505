"""Minecraft Microsoft login CLI flow

Terminal stand-in for a launcher's login window: opens the Microsoft sign-in
page, takes the redirected URL pasted back by the user and runs the chain.
Tokens are printed, never stored.
"""

import argparse
import asyncio
import datetime
import json
import logging
import sys
import webbrowser
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

import settings
from minecraft_oauth import (
    ErrorKind,
    LoginResult,
    MicrosoftAuthProvider,
    MinecraftAuthError,
    RefreshResult,
    UserCancelledError,
    parse_redirect_url,
)

console = Console()

# Follow-up advice for failures the user can act on
ERROR_HINTS = {
    ErrorKind.NO_XBOX_ACCOUNT: "Sign in once at https://www.xbox.com/live to create an Xbox profile, then retry.",
    ErrorKind.UNSUPPORTED_REGION: "Xbox Live is not available in this account's country/region.",
    ErrorKind.NO_LICENSE: "This Microsoft account does not own Minecraft: Java Edition.",
}


def _format_expiry(expires_at: int) -> str:
    return datetime.datetime.fromtimestamp(expires_at / 1000).isoformat(timespec="seconds")


class MinecraftCLIAuthFlow:
    """Handle the Microsoft login flow in the terminal"""

    def __init__(self, provider: MicrosoftAuthProvider, as_json: bool = False):
        self.provider = provider
        self.as_json = as_json
        self.provider.add_error_listener(self._on_error)

    def _on_error(self, error: Exception) -> None:
        console.print(f"[red]Microsoft login error:[/red] {error}")

    def read_authorization_code(self) -> Optional[str]:
        """Open the sign-in page and read the authorization code back

        Returns:
            Authorization code, or None if the pasted URL holds none

        Raises:
            UserCancelledError: If the user aborts or enters nothing
            AuthorizationError: If the redirect reports an error
        """
        auth_url = self.provider.get_authorization_url()

        console.print("\n[bold]Step 1:[/bold] Opening browser for Microsoft sign-in...")
        if webbrowser.open(auth_url):
            console.print("[green][OK][/green] Browser opened successfully")
        else:
            console.print("[yellow]Could not open browser automatically[/yellow]")
            console.print(f"Please open this URL manually:\n{auth_url}")

        console.print("\n[bold]Step 2:[/bold] Sign in with the Microsoft account that owns Minecraft")
        console.print("  The browser ends on a blank page; copy its full URL.")
        console.print(f"[dim]The URL should start with: {self.provider.redirect_uri}?code=[/dim]\n")

        try:
            redirect_url = Prompt.ask("Redirect URL", default="", show_default=False)
        except (KeyboardInterrupt, EOFError):
            raise UserCancelledError()

        if not redirect_url.strip():
            raise UserCancelledError()

        return parse_redirect_url(redirect_url.strip(), self.provider.redirect_uri)

    def login(self) -> LoginResult:
        code = self.read_authorization_code()
        if not code:
            raise MinecraftAuthError("No authorization code found in URL")

        console.print("\n[bold]Step 3:[/bold] Exchanging code for Minecraft tokens...")
        result = asyncio.run(self.provider.complete_login(code))

        if self.as_json:
            console.print_json(json.dumps(result.to_dict()))
        else:
            self.show_login(result)
        return result

    def refresh(self, refresh_token: str) -> RefreshResult:
        result = asyncio.run(self.provider.refresh_tokens(refresh_token))

        if self.as_json:
            console.print_json(json.dumps(result.to_dict()))
        else:
            console.print("[green][OK][/green] Tokens refreshed")
            console.print(f"Minecraft token expires at {_format_expiry(result.minecraft.expires_at)}")
        return result

    def check(self, access_token: str) -> bool:
        async def run_checks():
            return (
                await self.provider.validate_token(access_token),
                await self.provider.check_game_ownership(access_token),
            )

        valid, owned = asyncio.run(run_checks())

        table = Table(title="Minecraft Token Check")
        table.add_column("Check", style="cyan")
        table.add_column("Result")
        table.add_row("Token valid", "Yes" if valid else "No")
        table.add_row("Owns Minecraft", "Yes" if owned else "No")
        console.print(table)
        return valid

    def show_login(self, result: LoginResult) -> None:
        console.print("[green][OK][/green] Login successful!")

        table = Table(title="Minecraft Profile")
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("Username", result.user.username)
        table.add_row("UUID", result.user.uuid)
        table.add_row("Skins", str(len(result.profile.skins)))
        table.add_row("Capes", str(len(result.profile.capes)))
        table.add_row("Minecraft token expires", _format_expiry(result.minecraft.expires_at))
        table.add_row("Microsoft token expires", _format_expiry(result.microsoft.expires_at))
        console.print(table)

        console.print("\n[dim]Keep the Microsoft refresh token to log in again without a browser:[/dim]")
        console.print(result.microsoft.refresh_token)


def main():
    """Entry point for the CLI"""
    parser = argparse.ArgumentParser(description="Sign in to Minecraft with a Microsoft account")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--client-id", default=None, help="Azure client id (default: MS_CLIENT_ID)")
    parser.add_argument("--refresh", metavar="REFRESH_TOKEN", default=None, help="Refresh tokens instead of logging in")
    parser.add_argument("--validate", metavar="ACCESS_TOKEN", default=None, help="Validate a Minecraft access token and check ownership")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    args = parser.parse_args()

    level = logging.DEBUG if args.debug else getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        provider = MicrosoftAuthProvider(
            client_id=args.client_id or settings.MS_CLIENT_ID,
            redirect_uri=settings.MS_REDIRECT_URI,
        )
        flow = MinecraftCLIAuthFlow(provider, as_json=args.json)

        if args.validate:
            ok = flow.check(args.validate)
        elif args.refresh:
            flow.refresh(args.refresh)
            ok = True
        else:
            flow.login()
            ok = True

    except MinecraftAuthError as e:
        if e.stage is None:
            console.print(f"[red]ERROR:[/red] {e}")
        hint = ERROR_HINTS.get(e.kind)
        if hint:
            console.print(f"[yellow]{hint}[/yellow]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
