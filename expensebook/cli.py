import click
from flask import Flask

from .extensions import db
from .services import AuthService, CategoryService


def register_commands(app: Flask):
    @app.cli.command("seed-categories")
    def seed_categories():
        """Create the default shared categories that are missing."""
        created = CategoryService(db.session).seed_defaults()
        click.echo(f"{created} categories created")

    @app.cli.command("delete-user")
    @click.argument("email")
    def delete_user(email):
        """Delete a user account together with all of its expenses."""
        if AuthService(db.session).delete_user(email):
            click.echo(f"Deleted {email}")
        else:
            raise click.ClickException(f"No user with email {email}")
