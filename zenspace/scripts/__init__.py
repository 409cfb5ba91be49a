"""Operational CLI commands."""

from zenspace.scripts.check_user_password import check_user_password_command
from zenspace.scripts.prune_sessions import prune_sessions_command


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(prune_sessions_command)
    app.cli.add_command(check_user_password_command)
