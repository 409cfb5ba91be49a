"""Delete expired login sessions.

Usage:
    flask prune-sessions
    python -m zenspace.scripts.prune_sessions
"""

from __future__ import annotations

import sys

import click
from flask.cli import with_appcontext

from zenspace.core.services import get_session_repository


@click.command("prune-sessions")
@with_appcontext
def prune_sessions_command():
    """Remove every session row whose expiry has passed."""
    removed = get_session_repository().prune_expired()
    click.echo(f"prune_sessions ok: removed={removed}")


def main(argv: list[str] | None = None) -> int:
    """Entry point for python -m zenspace.scripts.prune_sessions."""
    from zenspace import create_app

    app = create_app()
    with app.app_context():
        try:
            prune_sessions_command.main(standalone_mode=False, args=argv)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
