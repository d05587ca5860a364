"""Flask CLI commands for admin operations."""
import click


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from webapp.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("stats")
    def stats():
        """Show record counts per resource."""
        from webapp.extensions import db
        from webapp.models import Account, Product, Image

        for label, model in (
            ("accounts", Account),
            ("products", Product),
            ("images", Image),
        ):
            count = db.session.query(db.func.count()).select_from(model).scalar()
            click.echo(f"{label}: {count}")

    @app.cli.command("create-account")
    @click.option("--username", required=True)
    @click.option("--password", required=True)
    @click.option("--first-name", default="Admin")
    @click.option("--last-name", default="User")
    def create_account(username, password, first_name, last_name):
        """Create an account directly (for testing)."""
        import json
        from webapp.extensions import get_services
        from webapp.errors import ApiError
        from webapp.services.validation import InboundRequest

        body = json.dumps(
            {
                "username": username,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
            }
        ).encode()
        try:
            outcome = get_services().accounts.create(
                InboundRequest(content_length=len(body), body=body)
            )
        except ApiError as e:
            raise click.ClickException(f"Account not created: {e}")
        click.echo(f"Created account {outcome.body['id']}: {outcome.body['username']}")
