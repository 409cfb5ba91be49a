"""Utility CLI to verify a user's password hash.

Usage:
    flask check-user-password --username="calm_user" --password="secret"
    python -m zenspace.scripts.check_user_password --username="calm_user" --password="secret"
"""

from __future__ import annotations

import sys

import click
from flask.cli import with_appcontext

from zenspace.core.auth.password import verify_password
from zenspace.core.services import get_storage


@click.command("check-user-password")
@click.option("--username", required=True, help="Username to check (case-sensitive)")
@click.option("--password", required=True, help="Plaintext password to verify")
@with_appcontext
def check_user_password_command(username: str, password: str):
    """Verify a user's stored password hash against provided plaintext."""
    user = get_storage().get_user_by_username(username)
    if not user:
        click.echo(f"User not found: {username}", err=True)
        raise click.Abort()

    is_valid = verify_password(password, user.password_hash)
    click.echo(f"user_id={user.id} username={user.username}")
    click.echo(f"password_valid={is_valid}")


def main(argv: list[str] | None = None) -> int:
    """Entry point for python -m zenspace.scripts.check_user_password."""
    from zenspace import create_app

    app = create_app()
    with app.app_context():
        try:
            check_user_password_command.main(standalone_mode=False, args=argv)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
