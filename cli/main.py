"""CLI entry point and argument parsing"""

import sys
import argparse
from rich.console import Console
from cli.cli_app import TwitchAuthCLI


console = Console()


def main():
    """Entry point for the CLI"""
    parser = argparse.ArgumentParser(description="Sign in to Twitch and sign out again")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--manual",
        action="store_true",
        help="Paste the callback URL instead of running the local callback server"
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Print the authorization URL instead of opening a browser"
    )

    args = parser.parse_args()

    try:
        cli = TwitchAuthCLI(debug=args.debug, manual=args.manual, open_browser=not args.no_browser)
        ok = cli.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
