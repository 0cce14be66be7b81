"""Session display for CLI"""

from rich.table import Table

from twitch_oauth import AuthSessionController


def show_session(controller: AuthSessionController, console):
    """
    Display the signed-in user

    Args:
        controller: Session controller to read from
        console: Rich console for output
    """
    session = controller.user

    table = Table(title="Twitch Session")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Status", controller.status.value)
    table.add_row("User ID", str(session.user_id) if session.user_id is not None else "-")
    table.add_row("Display Name", session.display_name or "-")
    table.add_row("Email", session.email or "-")
    table.add_row("Profile Image", session.profile_image_url or "-")
    table.add_row("Access Token", "[REDACTED]" if session.access_token else "-")

    console.print(table)
