"""Tests for admin CLI commands."""
from webapp.models.account import Account


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Database initialized." in result.output


def test_stats_counts(app, owner, product):
    result = app.test_cli_runner().invoke(args=["stats"])
    assert result.exit_code == 0
    assert "accounts: 1" in result.output
    assert "products: 1" in result.output
    assert "images: 0" in result.output


def test_create_account(app, db, notifier):
    result = app.test_cli_runner().invoke(
        args=["create-account", "--username", "Admin@Example.com", "--password", "Admin1234"]
    )
    assert result.exit_code == 0, result.output
    assert "admin@example.com" in result.output
    assert db.session.query(Account).filter_by(username="admin@example.com").count() == 1
    assert notifier.events[0]["email"] == "admin@example.com"


def test_create_account_rejects_bad_password(app, db):
    result = app.test_cli_runner().invoke(
        args=["create-account", "--username", "a@example.com", "--password", "short"]
    )
    assert result.exit_code != 0
    assert "Account not created" in result.output
    assert db.session.query(Account).count() == 0
