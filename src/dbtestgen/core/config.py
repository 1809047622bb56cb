"""Building the requested set from CLI flags and YAML files.

Two input forms are supported and can be combined:

- flat lists such as `public.orders,public.customers`
- a YAML document::

    tables:
      - schema: public
        name: orders
        where: "created > now() - interval '7 days'"
    procs:
      - schema: public
        name: refresh_totals
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import yaml

from dbtestgen.core.errors import ConfigurationError
from dbtestgen.core.models import ProcedureRequest, RequestedSet, TableRequest


def parse_qualified_name(value: str, *, kind: str = "table") -> tuple[str, str]:
    """Split `schema.name` into (schema, name).

    Procedure names are regex patterns and may contain dots, so they are split
    on the first dot only. Table names must have exactly one.
    """
    if kind == "procedure":
        parts = value.strip().split(".", 1)
    else:
        parts = value.strip().split(".")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ConfigurationError(
            f"{kind.capitalize()} must be in the form `schema.name`: '{value}'"
        )
    return parts[0].strip(), parts[1].strip()


def _split_list(values: str | Iterable[str] | None) -> list[str]:
    """Accept repeated options and comma separated values alike."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    return [item.strip() for v in values for item in v.split(",") if item.strip()]


def parse_table_list(values: str | Iterable[str] | None) -> list[TableRequest]:
    """Parse `schema.table[,schema.table...]` into table requests."""
    out: list[TableRequest] = []
    for item in _split_list(values):
        schema, name = parse_qualified_name(item, kind="table")
        out.append(TableRequest(schema=schema, name=name))
    return out


def parse_procedure_list(values: str | Iterable[str] | None) -> list[ProcedureRequest]:
    """Parse `schema.procedure[,schema.procedure...]` into procedure requests."""
    out: list[ProcedureRequest] = []
    for item in _split_list(values):
        schema, name = parse_qualified_name(item, kind="procedure")
        out.append(ProcedureRequest(schema=schema, name=name))
    return out


def _entries(doc: dict[str, Any], *keys: str) -> list[dict[str, Any]]:
    for key in keys:
        if key not in doc:
            continue
        value = doc[key] or []
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            raise ConfigurationError(f"`{key}` must be a list of mappings.")
        return value
    return []


def _field(entry: dict[str, Any], key: str, *, section: str, index: int) -> str:
    value = entry.get(key)
    if value is None or not str(value).strip():
        raise ConfigurationError(
            f"Schema and name must be filled in {section}: item {index}"
        )
    return str(value).strip()


def load_config_file(path: str | Path) -> RequestedSet:
    """
    Load a requested set from a YAML file.

    Keys are matched case-insensitively; procedures may be listed under
    `procs` or `procedures`.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read config file: {exc}", target=str(path)
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML: {exc}", target=str(path)) from exc

    if doc is None:
        return RequestedSet()
    if not isinstance(doc, dict):
        raise ConfigurationError("Config file must contain a mapping.", target=str(path))

    doc = {str(k).lower(): v for k, v in doc.items()}

    tables = []
    for i, entry in enumerate(_entries(doc, "tables")):
        entry = {str(k).lower(): v for k, v in entry.items()}
        where = entry.get("where")
        tables.append(
            TableRequest(
                schema=_field(entry, "schema", section="table", index=i),
                name=_field(entry, "name", section="table", index=i),
                where=str(where) if where else None,
            )
        )

    procedures = []
    for i, entry in enumerate(_entries(doc, "procs", "procedures")):
        entry = {str(k).lower(): v for k, v in entry.items()}
        procedures.append(
            ProcedureRequest(
                schema=_field(entry, "schema", section="procedure", index=i),
                name=_field(entry, "name", section="procedure", index=i),
            )
        )

    return RequestedSet(tables=tuple(tables), procedures=tuple(procedures))


def build_requested_set(
    *,
    tables: str | Iterable[str] | None = None,
    procedures: str | Iterable[str] | None = None,
    config_path: str | Path | None = None,
) -> RequestedSet:
    """Merge a config file (first) with flat table/procedure flags (appended)."""
    base = load_config_file(config_path) if config_path else RequestedSet()
    return RequestedSet(
        tables=base.tables + tuple(parse_table_list(tables)),
        procedures=base.procedures + tuple(parse_procedure_list(procedures)),
    )
