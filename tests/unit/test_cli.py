"""
Unit tests for the command-line interface.

Each test runs against a file database in a temporary data directory.
"""

import logging
from io import StringIO

import pytest

from fundbalance.cli import main
from fundbalance.config.settings import reset_settings
from fundbalance.repositories.sqlalchemy.database import reset_database


@pytest.fixture
def data_dir(tmp_path):
    reset_settings()
    yield tmp_path
    reset_database()
    reset_settings()
    logging.getLogger("fundbalance").setLevel(logging.NOTSET)


def run_cli(data_dir, *args: str) -> tuple[int, str]:
    out = StringIO()
    code = main(["--data-dir", str(data_dir), *args], out=out)
    return code, out.getvalue()


class TestCli:
    """Tests for fundbalance subcommands."""

    def test_buckets_shows_seeded_portfolio(self, data_dir):
        code, output = run_cli(data_dir, "buckets")

        assert code == 0
        assert "Short-term" in output
        assert "000009" in output
        assert (data_dir / "fund_data.db").exists()

    def test_rebalance_then_history_and_show(self, data_dir):
        code, output = run_cli(data_dir, "rebalance", "--threshold", "0.05")
        assert code == 0
        assert "Rebalance #1" in output
        assert "total value 350.00" in output
        assert "BUY" in output and "SELL" in output

        code, output = run_cli(data_dir, "history", "--limit", "5")
        assert code == 0
        assert output.startswith("#1 |")

        code, output = run_cli(data_dir, "show", "1")
        assert code == 0
        assert "E Fund Money Market A" in output
        assert "HOLD" in output

    def test_invalid_threshold_exits_nonzero(self, data_dir):
        code, output = run_cli(data_dir, "rebalance", "--threshold", "0")

        assert code == 1
        assert output.startswith("Error:")

    def test_show_unknown_record(self, data_dir):
        code, output = run_cli(data_dir, "show", "42")

        assert code == 1
        assert "not found" in output


class TestCliFundCommands:
    """Tests for add-fund, edit-fund and delete-fund."""

    def test_add_fund(self, data_dir):
        code, output = run_cli(
            data_dir, "add-fund", "1",
            "--name", "New Bond", "--code", "123456", "--current", "15", "--weight", "0.2",
        )

        assert code == 0
        assert output.startswith("Fund added")
        assert "New Bond (123456) | current 15.00 | weight 20.0%" in output

    def test_edit_fund_applies_all_given_fields(self, data_dir):
        code, output = run_cli(
            data_dir, "edit-fund", "1", "0", "--name", "Renamed", "--current", "70",
        )

        assert code == 0
        assert "0. Renamed (003375) | current 70.00 | weight 50.0%" in output

    def test_edit_fund_is_atomic(self, data_dir):
        """
        GIVEN an edit with a valid name and an invalid weight
        WHEN I run edit-fund
        THEN it exits 1 and the fund keeps its name
        """
        code, output = run_cli(
            data_dir, "edit-fund", "1", "0", "--name", "Renamed", "--weight", "2",
        )
        assert code == 1
        assert output.startswith("Error: Weight")

        _, output = run_cli(data_dir, "buckets")
        assert "Renamed" not in output

    def test_edit_fund_without_fields(self, data_dir):
        code, output = run_cli(data_dir, "edit-fund", "1", "0")

        assert code == 1
        assert "No fields" in output

    def test_delete_fund(self, data_dir):
        code, output = run_cli(data_dir, "delete-fund", "2", "0")

        assert code == 0
        assert output.startswith("Fund deleted")
        assert "110020" not in output
        assert "160119" in output

    def test_delete_unknown_fund(self, data_dir):
        code, output = run_cli(data_dir, "delete-fund", "5", "0")

        assert code == 1
        assert "not found" in output

    def test_log_level_option(self, data_dir):
        code, _ = run_cli(data_dir, "--log-level", "debug", "buckets")

        assert code == 0
        assert logging.getLogger("fundbalance").level == logging.DEBUG
