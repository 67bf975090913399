"""Flask CLI commands for Pennywise."""

from __future__ import annotations

import click

from .errors import PennywiseError


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("pennywise-init-db")
    def pennywise_init_db() -> None:
        """Create any missing database tables."""

        from .extensions import get_services
        from .infra.database import init_database

        init_database(get_services().engine)
        click.echo("Database schema is up to date.")

    @app.cli.command("pennywise-create-admin")
    @click.option("--name", required=True, help="Display name for the admin")
    @click.option("--email", required=True, help="Login email")
    @click.option(
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Login password (prompted when omitted)",
    )
    def pennywise_create_admin(name: str, email: str, password: str) -> None:
        """Create an administrator account, or promote an existing user."""

        from .extensions import get_services
        from .services import auth

        session_factory = get_services().session_factory
        existing = auth.get_user_by_email(email, session_factory)
        try:
            if existing is not None:
                auth.set_role(user_id=existing.id, role="admin", session_factory=session_factory)
                click.echo(f"Promoted {existing.email} to admin.")
                return
            if len(password) < 6:
                raise click.BadParameter("must be at least 6 characters", param_hint="--password")
            user = auth.register_user(
                name=name,
                email=email,
                password=password,
                role="admin",
                session_factory=session_factory,
            )
        except PennywiseError as exc:
            raise click.ClickException(exc.message) from exc
        click.echo(f"Created admin {user.email} (id {user.id}).")
