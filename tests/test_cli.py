import pytest
from typer.testing import CliRunner

from conftest import StubDialect
from dbtestgen.cli import cli as cli_module
from dbtestgen.cli.common import context
from dbtestgen.core.errors import ConnectionFailure, QueryFailure

runner = CliRunner()


class _Connection:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def cli_dialect(monkeypatch, shop_dialect: StubDialect):
    """Serve the shop catalog to the CLI instead of a real database."""
    connection = _Connection()
    shop_dialect.connection = connection
    shop_dialect.connect = lambda dsn: connection
    shop_dialect.list_tables = lambda conn, schema: ["customers", "orders"]
    monkeypatch.setattr(context, "get_dialect", lambda name: shop_dialect)
    return shop_dialect


def test_script_prints_ddl_to_stdout(cli_dialect: StubDialect):
    result = runner.invoke(
        cli_module.app,
        ["script", "--dsn", "postgres://db/shop", "-t", "public.customers,public.orders"],
    )

    assert result.exit_code == 0, result.output
    assert "CREATE TABLE public.customers" in result.stdout
    assert "orders_customer_fk" in result.stdout
    assert "orders_audit_fk" not in result.stdout
    assert cli_dialect.connection.closed is True


def test_script_reads_dsn_from_environment(cli_dialect: StubDialect):
    result = runner.invoke(
        cli_module.app,
        ["script", "-t", "public.customers"],
        env={"DBTESTGEN_DSN": "postgres://db/shop"},
    )

    assert result.exit_code == 0, result.output
    assert "CREATE TABLE public.customers" in result.stdout


def test_script_writes_output_file(cli_dialect: StubDialect, tmp_path):
    target = tmp_path / "schema.sql"

    result = runner.invoke(
        cli_module.app,
        ["script", "--dsn", "x", "-t", "public.customers", "-o", str(target)],
    )

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8").startswith("CREATE TABLE public.customers")


def test_script_unwritable_output_exits_cleanly(cli_dialect: StubDialect, tmp_path):
    target = tmp_path / "missing" / "schema.sql"

    result = runner.invoke(
        cli_module.app,
        ["script", "--dsn", "x", "-t", "public.customers", "-o", str(target)],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Cannot write" in result.output
    assert not target.parent.exists()


def test_invalid_log_level_is_a_usage_error(cli_dialect: StubDialect):
    result = runner.invoke(
        cli_module.app,
        ["script", "--dsn", "x", "-t", "public.customers"],
        env={"DBTESTGEN_LOG_LEVEL": "verbose"},
    )

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert "DBTESTGEN_LOG_LEVEL" in result.output
    assert cli_dialect.calls == []


def test_script_without_tables_is_a_usage_error(cli_dialect: StubDialect):
    result = runner.invoke(cli_module.app, ["script", "--dsn", "x"])

    assert result.exit_code == 2
    assert cli_dialect.calls == []


def test_script_without_dsn_is_a_usage_error(cli_dialect: StubDialect, monkeypatch):
    monkeypatch.delenv("DBTESTGEN_DSN", raising=False)

    result = runner.invoke(cli_module.app, ["script", "-t", "public.orders"])

    assert result.exit_code == 2


def test_script_query_failure_exits_non_zero(cli_dialect: StubDialect):
    cli_dialect.errors["public.orders"] = QueryFailure("permission denied")

    result = runner.invoke(
        cli_module.app, ["script", "--dsn", "x", "-t", "public.orders"]
    )

    assert result.exit_code == 1
    assert "CREATE TABLE" not in result.stdout


def test_script_connection_failure_exits_non_zero(cli_dialect: StubDialect):
    def _refuse(dsn):
        raise ConnectionFailure("connection refused")

    cli_dialect.connect = _refuse

    result = runner.invoke(cli_module.app, ["script", "--dsn", "x", "-t", "public.orders"])

    assert result.exit_code == 1


def test_script_pick_adds_selected_tables(cli_dialect: StubDialect, monkeypatch):
    from dbtestgen.cli.commands import script as script_cmd

    monkeypatch.setattr(
        script_cmd, "select_tables", lambda schema, names: ["public.customers"]
    )

    result = runner.invoke(cli_module.app, ["script", "--dsn", "x", "--pick", "public"])

    assert result.exit_code == 0, result.output
    assert "CREATE TABLE public.customers" in result.stdout
    assert "CREATE TABLE public.orders" not in result.stdout


def test_tables_lists_schema_tables(cli_dialect: StubDialect):
    result = runner.invoke(cli_module.app, ["tables", "public", "--dsn", "x"])

    assert result.exit_code == 0, result.output
    assert "public.orders" in result.output


def test_dialects_lists_postgres():
    result = runner.invoke(cli_module.app, ["dialects"])

    assert result.exit_code == 0
    assert "postgres" in result.output
