from sqlalchemy import MetaData
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from .db import Base

DIALECTS = {
    "sqlite": sqlite.dialect,
    "postgresql": postgresql.dialect,
    "mysql": mysql.dialect,
}


def render_schema(dialect_name: str = "postgresql", metadata: MetaData | None = None) -> str:
    """CREATE TABLE and CREATE INDEX statements for every table, parents first."""
    from . import models  # noqa: F401

    try:
        dialect = DIALECTS[dialect_name]()
    except KeyError:
        raise ValueError(f"unsupported dialect {dialect_name!r}; choose from {', '.join(sorted(DIALECTS))}") from None

    metadata = metadata or Base.metadata
    statements = []
    for table in metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda ix: ix.name or ""):
            statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
    return "\n\n".join(statements) + "\n"
