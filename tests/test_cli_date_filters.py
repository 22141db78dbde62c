"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from tokobook.cli.date_filters import resolve_cli_date_range
from tokobook.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_rejects_period_with_explicit_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date="2024-01-31",
            period_flags={"this-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_returns_period_range():
    assert resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": False, "last-week": True},
    ) == get_date_range("last-week")


def test_parses_explicit_dates():
    assert resolve_cli_date_range(
        _ctx(), start_date="2024-01-02", end_date="2024-01-05", period_flags={}
    ) == (date(2024, 1, 2), date(2024, 1, 5))


def test_open_range():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags={}) == (None, None)
    assert resolve_cli_date_range(_ctx(), start_date="2024-01-02", end_date=None, period_flags={}) == (
        date(2024, 1, 2),
        None,
    )


def test_invalid_end_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date=None, end_date="not-a-date", period_flags={})

    assert excinfo.value.exit_code == 1
    assert "Invalid end date" in capsys.readouterr().err
