"""Tests for the caisse-noire command line."""

from contextlib import contextmanager
from unittest.mock import Mock, patch

from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError
from typer.testing import CliRunner

from caisse_noire.cli import app

runner = CliRunner()


@patch("caisse_noire.cli.uvicorn.run")
def test_server_runs_uvicorn(mock_run: Mock):
    result = runner.invoke(app, ["server", "--host", "0.0.0.0", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once_with("caisse_noire.main:app", host="0.0.0.0", port=9000, reload=False)


@patch("caisse_noire.cli.setup_logger")
def test_init_db_creates_tables(_mock_logger: Mock, engine):
    with patch("caisse_noire.cli.get_engine", return_value=engine):
        result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert {"teams", "users", "sanctions"} <= set(inspect(engine).get_table_names())


@patch("caisse_noire.cli.setup_logger")
def test_check_db_ok(_mock_logger: Mock, db_session):
    @contextmanager
    def _session():
        yield db_session

    with patch("caisse_noire.cli.get_session", _session):
        result = runner.invoke(app, ["check-db"])

    assert result.exit_code == 0
    assert "connection OK" in result.output


@patch("caisse_noire.cli.setup_logger")
def test_check_db_failure_exits_with_error(_mock_logger: Mock):
    @contextmanager
    def _failing_session():
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))
        yield

    with patch("caisse_noire.cli.get_session", _failing_session):
        result = runner.invoke(app, ["check-db"])

    assert result.exit_code == 1
    assert "DATABASE_URL" in result.output
