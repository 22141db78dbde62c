"""Tests for CLI commands."""

from datetime import date
from decimal import Decimal

from tokobook.cli.main import cli
from tokobook.domain.entities import ExpenseItemInput


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "abbreviation" in result.output
    assert "serve" in result.output


def test_abbreviation_add_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "abbreviation", "add", "tki")
    assert result.exit_code == 0
    assert "Added abbreviation 'TKI'" in result.output

    result = _invoke(cli_runner, temp_db, "abbreviation", "add", "TKI")
    assert result.exit_code == 0
    assert "already exists" in result.output

    result = _invoke(cli_runner, temp_db, "abbreviation", "list")
    assert result.exit_code == 0
    assert "TKI" in result.output.splitlines()


def test_abbreviation_add_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "abbreviation", "add", " ")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_abbreviation_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "abbreviation", "list")
    assert result.exit_code == 0
    assert "No abbreviations found." in result.output


def test_store_list(cli_runner, temp_db, resolver):
    resolver.resolve_store("Toko ABC")
    resolver.resolve_store("Warung Sri")

    result = _invoke(cli_runner, temp_db, "store", "list", "--name", "toko")

    assert result.exit_code == 0
    assert "Toko ABC" in result.output
    assert "Warung Sri" not in result.output


def test_store_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "store", "list")
    assert result.exit_code == 0
    assert "No stores found." in result.output


def test_expense_list_groups_by_day(cli_runner, temp_db, expense_service, sample_expense):
    expense_service.create_expense(
        store="Warung Sri",
        items=[ExpenseItemInput(product="Kopi", name="kopi", quantity=Decimal("1.5"), price=Decimal("5000"))],
        date=date(2024, 1, 3),
        total=Decimal("7500"),
    )

    result = _invoke(cli_runner, temp_db, "expense", "list")

    assert result.exit_code == 0
    output = result.output
    assert "Wednesday, 03 January 2024" in output
    assert "Monday, 01 January 2024" in output
    assert output.index("03 January 2024") < output.index("01 January 2024")
    assert "2 x Minyak Goreng @ Rp15,000" in output
    assert "1.5 x Kopi @ Rp5,000" in output
    assert "Count: 2 | Total: Rp37,500" in output


def test_expense_list_search(cli_runner, temp_db, sample_expense):
    result = _invoke(cli_runner, temp_db, "expense", "list", "--search", "xyz")
    assert result.exit_code == 0
    assert "No expenses found." in result.output

    result = _invoke(cli_runner, temp_db, "expense", "list", "--search", "minyak", "--no-items")
    assert result.exit_code == 0
    assert "Toko ABC" in result.output
    assert "Minyak Goreng" not in result.output


def test_expense_list_date_filters(cli_runner, temp_db, sample_expense):
    result = _invoke(cli_runner, temp_db, "expense", "list", "--start-date", "2024-01-02")
    assert "No expenses found." in result.output

    result = _invoke(cli_runner, temp_db, "expense", "list", "--this-month", "--last-month")
    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_expense_delete(cli_runner, temp_db, sample_expense, upload_dir):
    folder = upload_dir / str(sample_expense.id)
    folder.mkdir()
    (folder / "a.jpg").write_bytes(b"jpeg")

    result = _invoke(cli_runner, temp_db, "expense", "delete", str(sample_expense.id), input="y\n")

    assert result.exit_code == 0
    assert f"Deleted expense {sample_expense.id}" in result.output
    assert temp_db.get_expense(sample_expense.id) is None
    assert not folder.exists()


def test_expense_delete_cancelled(cli_runner, temp_db, sample_expense):
    result = _invoke(cli_runner, temp_db, "expense", "delete", str(sample_expense.id), input="n\n")

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert temp_db.get_expense(sample_expense.id) is not None


def test_expense_delete_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "expense", "delete", "999", "--yes")
    assert result.exit_code == 1
    assert "Expense 999 not found" in result.output


def test_serve_runs_uvicorn(cli_runner, temp_db, monkeypatch):
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr("tokobook.cli.commands.serve.uvicorn.run", fake_run)

    result = _invoke(cli_runner, temp_db, "serve", "--port", "9001")

    assert result.exit_code == 0, result.output
    assert calls["port"] == 9001
    assert calls["host"] == "127.0.0.1"
    assert calls["app"].state.settings.database_path == temp_db.database_path
