from datetime import date

import click
from flask import current_app

from library_app.errors import ValidationError
from library_app.services.auth_service import AuthService
from library_app.tasks.overdue_check import run_overdue_check_job


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("username")
    @click.password_option()
    def create_admin(username, password):
        """Create an administrator account."""
        try:
            admin = AuthService.create_admin(username, password)
        except ValidationError as e:
            raise click.ClickException(str(e))
        click.echo(f"Admin {admin.username} created.")

    @app.cli.command("check-overdue")
    @click.option("--as-of", "as_of", default=None, help="Date to check against (YYYY-MM-DD).")
    def check_overdue(as_of):
        """Assess fines for overdue loans and send reminders."""
        day = date.fromisoformat(as_of) if as_of else None
        result = run_overdue_check_job(current_app._get_current_object(), day)
        click.echo(f"fines changed: {result['fines_changed']}, users notified: {result['users_notified']}")
