"""
Redirect mechanisms for the implicit grant

A redirect handler takes a fully formed authorization URL, sends the user to
the provider and resolves exactly once with a RedirectResult.
"""
import asyncio
import logging
import webbrowser
from typing import Callable, Optional, Protocol

from aiohttp import web
from rich.console import Console

from .callback import parse_callback_url, result_from_params
from .constants import OAUTH_CALLBACK_PATH, OAUTH_CALLBACK_PORT, OAUTH_TOKEN_PATH
from .models import RedirectResult


logger = logging.getLogger(__name__)


class RedirectHandler(Protocol):
    """Awaitable redirect boundary used by the session controller"""

    async def __call__(self, authorization_url: str) -> RedirectResult:
        ...


# The access token arrives in the URL fragment, which browsers never send to
# the server. This page forwards the fragment as a query string.
_FORWARD_PAGE = f"""
<html>
    <body>
        <p>Completing sign-in...</p>
        <script>
            var fragment = window.location.hash.substring(1);
            window.location.replace("{OAUTH_TOKEN_PATH}?" + fragment);
        </script>
    </body>
</html>
"""

_SUCCESS_PAGE = """
<html>
    <body>
        <h1>Authorization received</h1>
        <p>You can now close this window and return to the terminal.</p>
        <script>
            setTimeout(function() {
                window.close();
            }, 2000);
        </script>
    </body>
</html>
"""

_DENIED_PAGE = """
<html>
    <body>
        <h1>Authorization was not granted</h1>
        <p>You can close this window.</p>
    </body>
</html>
"""


class CallbackServer:
    """Local HTTP server capturing the Twitch redirect"""

    def __init__(self, host: str = "localhost", port: int = OAUTH_CALLBACK_PORT):
        self.host = host
        self.port = port
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._result: Optional[asyncio.Future] = None

        self.app.router.add_get(OAUTH_CALLBACK_PATH, self._handle_callback)
        self.app.router.add_get(OAUTH_TOKEN_PATH, self._handle_token)

    def _pending(self) -> asyncio.Future:
        if self._result is None:
            self._result = asyncio.get_running_loop().create_future()
        return self._result

    def _resolve(self, result: RedirectResult) -> bool:
        future = self._pending()
        if future.done():
            logger.debug("Ignoring redirect after the result was already resolved")
            return False
        future.set_result(result)
        return True

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Handle the provider redirect (errors arrive in the query string)"""
        if request.query.get("error"):
            self._resolve(result_from_params(request.query))
            return web.Response(text=_DENIED_PAGE, content_type="text/html", status=400)

        return web.Response(text=_FORWARD_PAGE, content_type="text/html")

    async def _handle_token(self, request: web.Request) -> web.Response:
        """Handle the forwarded fragment parameters"""
        result = result_from_params(request.query)
        self._resolve(result)

        if result.params.get("error"):
            return web.Response(text=_DENIED_PAGE, content_type="text/html", status=400)
        return web.Response(text=_SUCCESS_PAGE, content_type="text/html")

    def cancel(self) -> None:
        """Resolve the pending wait with a cancellation"""
        self._resolve(RedirectResult.cancelled())

    async def start(self) -> None:
        """Start the callback server"""
        self._pending()
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)
        try:
            await site.start()
        except OSError as e:
            logger.error(f"Could not bind callback server to port {self.port}: {e}")
            await self.stop()
            raise
        logger.info(f"OAuth callback server listening on port {self.port}")

    async def wait_for_result(self, timeout: Optional[float] = None) -> RedirectResult:
        """
        Wait for the redirect.

        Args:
            timeout: Maximum time to wait in seconds (None waits forever)

        Returns:
            RedirectResult, cancelled on timeout
        """
        try:
            return await asyncio.wait_for(self._pending(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"OAuth callback timeout after {timeout} seconds")
            return RedirectResult.cancelled()

    async def stop(self) -> None:
        """Stop the callback server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None


class BrowserRedirectHandler:
    """Opens the system browser and captures the redirect on localhost"""

    def __init__(
        self,
        port: int = OAUTH_CALLBACK_PORT,
        timeout: Optional[float] = 300,
        open_browser: bool = True,
        announce: Optional[Callable[[str], None]] = None,
    ):
        """Initialize browser redirect handler

        Args:
            port: Local port the redirect URI points at
            timeout: Seconds to wait before treating the attempt as cancelled
            open_browser: Whether to launch the system browser
            announce: Called with the authorization URL before waiting
        """
        self.port = port
        self.timeout = timeout
        self.open_browser = open_browser
        self.announce = announce
        self._server: Optional[CallbackServer] = None

    async def __call__(self, authorization_url: str) -> RedirectResult:
        server = CallbackServer(port=self.port)

        try:
            await server.start()
            self._server = server

            if self.announce:
                self.announce(authorization_url)

            if self.open_browser and not webbrowser.open(authorization_url):
                logger.warning("Could not open browser automatically")

            return await server.wait_for_result(self.timeout)
        finally:
            self._server = None
            await server.stop()

    def cancel(self) -> None:
        """Cancel the redirect currently being awaited, if any"""
        if self._server is not None:
            self._server.cancel()


class ManualRedirectHandler:
    """Asks the user to paste the callback URL from the browser"""

    def __init__(self, console: Optional[Console] = None, open_browser: bool = True):
        self.console = console or Console()
        self.open_browser = open_browser

    async def __call__(self, authorization_url: str) -> RedirectResult:
        self.console.print("\n[bold]Step 1:[/bold] Authorize the application in your browser")
        if not (self.open_browser and webbrowser.open(authorization_url)):
            self.console.print(f"Please open this URL manually:\n{authorization_url}")

        self.console.print("\n[bold]Step 2:[/bold] Paste the URL you were redirected to")
        self.console.print("[dim]Leave empty to cancel[/dim]\n")

        # Plain input keeps the prompt on the loop's thread so Ctrl+C lands here
        try:
            callback_url = self.console.input("Callback URL: ")
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[yellow]Authentication cancelled by user[/yellow]")
            return RedirectResult.cancelled()

        if not callback_url or not callback_url.strip():
            return RedirectResult.cancelled()

        logger.debug(f"User entered URL (length: {len(callback_url.strip())})")
        return result_from_params(parse_callback_url(callback_url))
