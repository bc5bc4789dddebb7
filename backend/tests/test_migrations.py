"""Data migrations: lifecycle, exit codes, and both bulk updates against sqlite."""
from datetime import date, datetime, timezone

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import SessionTransaction
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import MigrationError
from app.migrations import remove_login_attempts, update_invoice_fields
from app.migrations.runner import (
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_MIGRATION_ERROR,
    EXIT_OK,
    Migration,
    main,
    run_migration,
)
from app.models.invoice import Invoice
from app.models.user import User

LOCKED_UNTIL = datetime(2025, 1, 1, tzinfo=timezone.utc)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _seed(url: str, *rows) -> None:
    engine = create_engine(url)
    with Session(engine) as db, db.begin():
        db.add_all(rows)
    engine.dispose()


def _fetch(url: str, model) -> list:
    engine = create_engine(url)
    with Session(engine) as db:
        rows = db.execute(select(model)).scalars().all()
    engine.dispose()
    return rows


def _user(email: str, **kwargs) -> User:
    return User(username=email.split("@")[0], email=email, password_hash="x", **kwargs)


def _invoice(number: str, **kwargs) -> Invoice:
    return Invoice(invoice_number=number, invoice_date=date(2025, 6, 6), **kwargs)


def _capture_apply(results: list, migration: Migration) -> Migration:
    """Wrap a migration so the test can see its UpdateResult."""
    def apply(db):
        result = migration.apply(db)
        results.append(result)
        return result
    return Migration(name=migration.name, description=migration.description, apply=apply)


# ─── remove_login_attempts ────────────────────────────────────────────────────

def test_remove_login_attempts_clears_every_user(sqlite_url):
    _seed(
        sqlite_url,
        _user("locked@example.com", login_attempts=5, lock_until=LOCKED_UNTIL),
        _user("counted@example.com", login_attempts=2),
        _user("clean@example.com"),
    )
    results = []
    code = run_migration(_capture_apply(results, remove_login_attempts.MIGRATION), sqlite_url)

    assert code == EXIT_OK
    assert results[0].matched_count == 3
    assert results[0].modified_count == 2
    for user in _fetch(sqlite_url, User):
        assert user.login_attempts is None
        assert user.lock_until is None


def test_remove_login_attempts_on_clean_table_modifies_nothing(sqlite_url):
    _seed(sqlite_url, _user("a@example.com"), _user("b@example.com"))
    results = []
    assert run_migration(_capture_apply(results, remove_login_attempts.MIGRATION), sqlite_url) == EXIT_OK
    assert (results[0].matched_count, results[0].modified_count) == (2, 0)


def test_remove_login_attempts_empty_table(sqlite_url):
    results = []
    assert run_migration(_capture_apply(results, remove_login_attempts.MIGRATION), sqlite_url) == EXIT_OK
    assert (results[0].matched_count, results[0].modified_count) == (0, 0)


# ─── update_invoice_fields ────────────────────────────────────────────────────

def test_update_invoice_fields_sets_literals_on_every_invoice(sqlite_url):
    _seed(
        sqlite_url,
        _invoice("DE/1/25-26"),
        _invoice("DE/2/25-26", challan_no="1", po_no="2"),
        _invoice("DE/3/25-26", **update_invoice_fields.INVOICE_FIELD_VALUES),
    )
    results = []
    code = run_migration(_capture_apply(results, update_invoice_fields.MIGRATION), sqlite_url)

    assert code == EXIT_OK
    assert results[0].matched_count == 3
    assert results[0].modified_count == 2
    for invoice in _fetch(sqlite_url, Invoice):
        assert invoice.challan_no == "8239"
        assert invoice.challan_date == date(2025, 6, 25)
        assert invoice.po_no == "8932"
        assert invoice.eway_no == "najsdf93289"
        assert invoice.invoice_number.startswith("DE/")


def test_update_invoice_fields_is_idempotent(sqlite_url):
    _seed(sqlite_url, _invoice("DE/1/25-26"), _invoice("DE/2/25-26"))
    results = []
    migration = _capture_apply(results, update_invoice_fields.MIGRATION)

    assert run_migration(migration, sqlite_url) == EXIT_OK
    first = {(i.invoice_number, i.challan_no, i.challan_date, i.po_no, i.eway_no) for i in _fetch(sqlite_url, Invoice)}
    assert run_migration(migration, sqlite_url) == EXIT_OK
    second = {(i.invoice_number, i.challan_no, i.challan_date, i.po_no, i.eway_no) for i in _fetch(sqlite_url, Invoice)}

    assert first == second
    assert [r.matched_count for r in results] == [2, 2]
    assert [r.modified_count for r in results] == [2, 0]


# ─── Runner outcomes ──────────────────────────────────────────────────────────

def test_missing_database_url_is_a_config_error(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    assert run_migration(update_invoice_fields.MIGRATION) == EXIT_CONFIG_ERROR


def test_unreachable_database_is_a_connection_error(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite'}"
    assert run_migration(update_invoice_fields.MIGRATION, url) == EXIT_CONNECTION_ERROR


def test_failed_update_exits_non_zero(tmp_path):
    # Connectable database without the invoices table.
    url = f"sqlite:///{tmp_path / 'empty.db'}"
    assert run_migration(update_invoice_fields.MIGRATION, url) == EXIT_MIGRATION_ERROR


def test_failed_update_is_rolled_back(sqlite_url):
    _seed(sqlite_url, _user("locked@example.com", login_attempts=3))

    def apply(db):
        remove_login_attempts.remove_login_attempts_fields(db)
        raise MigrationError("broken", RuntimeError("boom"))

    code = run_migration(Migration(name="broken", description="", apply=apply), sqlite_url)
    assert code == EXIT_MIGRATION_ERROR
    assert _fetch(sqlite_url, User)[0].login_attempts == 3


def test_main_exits_with_runner_code(monkeypatch, sqlite_url):
    monkeypatch.setattr(settings, "DATABASE_URL", sqlite_url)
    with pytest.raises(SystemExit) as exc_info:
        main(remove_login_attempts.MIGRATION)
    assert exc_info.value.code == EXIT_OK


def test_commit_failure_exits_non_zero(monkeypatch, sqlite_url):
    _seed(sqlite_url, _invoice("DE/1/25-26"))

    def failing_commit(self, *args, **kwargs):
        raise OperationalError("COMMIT", {}, RuntimeError("server closed the connection"))

    monkeypatch.setattr(SessionTransaction, "commit", failing_commit)
    assert run_migration(update_invoice_fields.MIGRATION, sqlite_url) == EXIT_MIGRATION_ERROR

    monkeypatch.undo()
    assert [i.challan_no for i in _fetch(sqlite_url, Invoice)] == [None]


def test_unexpected_error_in_update_exits_non_zero(sqlite_url):
    def apply(db):
        raise ValueError("bad literal")

    code = run_migration(Migration(name="broken", description="", apply=apply), sqlite_url)
    assert code == EXIT_MIGRATION_ERROR


@pytest.mark.parametrize("bad_url", ["not a database url", "://missing-scheme"])
def test_malformed_database_url_is_a_config_error(monkeypatch, bad_url):
    monkeypatch.setattr(settings, "DATABASE_URL", bad_url)
    assert run_migration(update_invoice_fields.MIGRATION) == EXIT_CONFIG_ERROR


def test_malformed_explicit_url_is_a_config_error():
    assert run_migration(update_invoice_fields.MIGRATION, "not a database url") == EXIT_CONFIG_ERROR
