"""Main CLI application class for twitch-auth"""

import asyncio
import logging

from rich.panel import Panel

import settings
from twitch_oauth import (
    AuthContext,
    AuthStateError,
    BrowserRedirectHandler,
    LoginError,
    ManualRedirectHandler,
    create_auth_session,
)
from cli.status_display import show_session
from utils.debug_console import setup_logging


logger = logging.getLogger(__name__)


class TwitchAuthCLI:
    """Runs one sign-in / sign-out cycle from the terminal"""

    def __init__(self, debug: bool = False, manual: bool = False, open_browser: bool = True):
        self.debug = debug
        self.manual = manual
        self.open_browser = open_browser
        self.console = setup_logging(debug, settings.LOG_LEVEL, settings.DEBUG_LOG_FILE)

        if debug:
            self.console.print(f"[yellow]Debug mode enabled - verbose logging will be written to {settings.DEBUG_LOG_FILE}[/yellow]")

    def display_header(self):
        """Display application header"""
        self.console.print(Panel.fit(
            "[bold magenta]Twitch Sign-In[/bold magenta]\n"
            "[dim]Implicit grant with state verification[/dim]",
            border_style="magenta"
        ))

    def _make_redirect_handler(self):
        if self.manual:
            return ManualRedirectHandler(console=self.console, open_browser=self.open_browser)

        def announce(url: str):
            self.console.print("\nOpening browser for Twitch authorization...")
            self.console.print(f"[dim]If nothing opens, visit:[/dim]\n{url}\n")
            self.console.print("[dim]Press Ctrl+C to cancel[/dim]")

        return BrowserRedirectHandler(
            port=settings.CALLBACK_PORT,
            timeout=settings.REDIRECT_TIMEOUT,
            open_browser=self.open_browser,
            announce=announce,
        )

    def _on_change(self, context: AuthContext):
        if context.is_logging_in:
            self.console.print("[cyan]Signing in...[/cyan]")
        elif context.is_logging_out:
            self.console.print("[cyan]Signing out...[/cyan]")

    async def run_cycle(self) -> bool:
        """Sign in, show the profile, wait for Enter, sign out

        Returns:
            True if sign-in succeeded
        """
        controller = create_auth_session(
            client_id=settings.CLIENT_ID,
            redirect_uri=settings.REDIRECT_URI,
            redirect_handler=self._make_redirect_handler(),
            scopes=settings.SCOPES,
            timeout=settings.REQUEST_TIMEOUT,
        )
        unsubscribe = controller.subscribe(self._on_change)

        try:
            try:
                await controller.sign_in()
            except LoginError as e:
                logger.debug(f"Login failure kind: {e.kind.value if e.kind else 'unknown'}")
                self.console.print(f"[red]{e}[/red]")
                return False
            except AuthStateError as e:
                self.console.print(f"[red]ERROR:[/red] {e}")
                return False

            self.console.print("[green][OK][/green] Authentication successful!")
            show_session(controller, self.console)

            try:
                self.console.input("\nPress Enter to sign out...")
            except (KeyboardInterrupt, EOFError):
                self.console.print()

            await controller.sign_out()
            self.console.print("[green][OK][/green] Signed out")
            return True
        finally:
            unsubscribe()
            await controller.api.aclose()

    def run(self) -> bool:
        """Entry point for one cycle (blocking)"""
        self.display_header()

        if not settings.CLIENT_ID:
            self.console.print("[red]ERROR:[/red] TWITCH_CLIENT_ID is not set (environment or .env)")
            return False

        return asyncio.run(self.run_cycle())
