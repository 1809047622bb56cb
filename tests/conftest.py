from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from dbtestgen.core.dialect import RawColumn, RawConstraint  # noqa: E402
from dbtestgen.core.render import render_type  # noqa: E402


class StubDialect:
    """In-memory dialect keyed by `schema.table`, recording every call."""

    name = "stub"

    def __init__(
        self,
        columns: dict[str, list[RawColumn]] | None = None,
        constraints: dict[str, list[RawConstraint]] | None = None,
        procedures: dict[str, str] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.columns = columns or {}
        self.constraints = constraints or {}
        self.procedures = procedures or {}
        self.errors = errors or {}
        self.calls: list[str] = []

    def _maybe_fail(self, key: str) -> None:
        if key in self.errors:
            raise self.errors[key]

    def fetch_columns(self, connection, schema, table):
        key = f"{schema}.{table}"
        self.calls.append(f"columns:{key}")
        self._maybe_fail(key)
        return list(self.columns.get(key, []))

    def fetch_constraints(self, connection, schema, table):
        key = f"{schema}.{table}"
        self.calls.append(f"constraints:{key}")
        return list(self.constraints.get(key, []))

    def render_column_type(self, column):
        return render_type(column)

    def fetch_procedure_definition(self, connection, schema, name_pattern):
        key = f"{schema}.{name_pattern}"
        self.calls.append(f"procedure:{key}")
        return self.procedures.get(key, "")


@pytest.fixture
def shop_dialect() -> StubDialect:
    """Catalog with customers <- orders -> audit_log (audit_log never requested)."""
    return StubDialect(
        columns={
            "public.customers": [
                RawColumn("id", "INT4", nullable=False),
                RawColumn("name", "VARCHAR", length=120, nullable=False),
                RawColumn("email", "VARCHAR", length=200, nullable=True),
            ],
            "public.orders": [
                RawColumn("id", "INT4", nullable=False),
                RawColumn("customer_id", "INT4", nullable=False),
                RawColumn("audit_id", "INT4", nullable=True),
                RawColumn("total", "NUMERIC", precision=10, scale=2, nullable=True),
            ],
        },
        constraints={
            "public.customers": [
                RawConstraint("customers_pkey", "PRIMARY KEY (id)", "public.customers", "p"),
            ],
            "public.orders": [
                RawConstraint(
                    "orders_audit_fk",
                    "FOREIGN KEY (audit_id) REFERENCES public.audit_log(id)",
                    "public.audit_log",
                    "f",
                ),
                RawConstraint(
                    "orders_customer_fk",
                    "FOREIGN KEY (customer_id) REFERENCES public.customers(id)",
                    "public.customers",
                    "f",
                ),
            ],
        },
    )
