"""CLI package for twitch-auth

Command-line front end running a single sign-in / sign-out cycle.
"""

from cli.cli_app import TwitchAuthCLI
from cli.main import main

__all__ = [
    "TwitchAuthCLI",
    "main",
]
