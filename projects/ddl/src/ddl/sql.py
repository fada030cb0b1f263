"""DBML to SQL export through SQLAlchemy's dialect compilers."""

from collections.abc import Callable, Iterable
from logging import getLogger
from typing import Any, Literal, NamedTuple

from pydbml.classes import Column as DBMLColumn
from pydbml.classes import Expression, Note, Reference
from pydbml.classes import Table as DBMLTable
from pydbml.database import Database
from sqlalchemy import (
    Column,
    ForeignKeyConstraint,
    Integer,
    MetaData,
    Table,
    TextClause,
    text,
)
from sqlalchemy.dialects import mssql, mysql, postgresql
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import (
    AddConstraint,
    CreateTable,
    ExecutableDDLElement,
    SetTableComment,
)

from dbml import parse_dbml, schema_to_dbml
from ddl.type_conversion import dbml_to_sql_type
from schema.types import Schema

logger = getLogger(__name__)

type SQLEngine = Literal["postgres", "mysql", "mssql"]

MSSQL_DEFAULT_SCHEMA = "dbo"


def _mssql_dialect() -> Dialect:
    """SQL Server dialect with the schema a live connection would report.

    Table comments compile to extended properties, which name the schema
    explicitly; an unconnected dialect has no default schema to fill in.
    """
    dialect = mssql.dialect()
    dialect.default_schema_name = MSSQL_DEFAULT_SCHEMA
    return dialect


DIALECTS: dict[SQLEngine, Callable[[], Dialect]] = {
    "postgres": postgresql.dialect,
    "mysql": mysql.dialect,
    "mssql": _mssql_dialect,
}


class DDLModel(NamedTuple):
    """SQLAlchemy tables plus their foreign keys in declaration order."""

    metadata: MetaData
    foreign_keys: list[ForeignKeyConstraint]


def _note_text(note: Note | str | None) -> str | None:
    """Extract note text, treating empty notes as absent."""
    value = note.text if isinstance(note, Note) else note
    return value or None


def _server_default(value: Any) -> str | TextClause | None:  # noqa: ANN401
    """Convert a parsed DBML default into a SQLAlchemy server default."""
    match value:
        case None:
            return None
        case Expression():
            return text(value.text)
        case bool():
            return text("TRUE" if value else "FALSE")
        case int() | float():
            return text(str(value))
        case _:
            return str(value)


def _build_column(column: DBMLColumn, *, single_pk: bool) -> Column[Any]:
    """Build a SQLAlchemy column from a parsed DBML column."""
    sql_type = dbml_to_sql_type(column.type)
    # Dialects only support autoincrement on a lone integer primary key
    autoincrement = bool(
        column.autoinc and column.pk and single_pk and isinstance(sql_type, Integer),
    )
    return Column(
        column.name,
        sql_type,
        primary_key=bool(column.pk),
        nullable=not (column.not_null or column.pk),
        unique=bool(column.unique),
        autoincrement=autoincrement,
        server_default=_server_default(column.default),
    )


def _build_table(table: DBMLTable, metadata: MetaData) -> Table:
    """Build a SQLAlchemy table from a parsed DBML table."""
    single_pk = sum(1 for column in table.columns if column.pk) == 1
    return Table(
        table.name,
        metadata,
        *(_build_column(column, single_pk=single_pk) for column in table.columns),
        comment=_note_text(table.note),
    )


def _referential_action(action: str | None) -> str | None:
    return action.upper() if action else None


def _foreign_key(
    columns: list[str],
    referred: Iterable[DBMLColumn],
    reference: Reference,
) -> ForeignKeyConstraint:
    return ForeignKeyConstraint(
        columns,
        [f"{column.table.name}.{column.name}" for column in referred],
        ondelete=_referential_action(reference.on_delete),
        onupdate=_referential_action(reference.on_update),
    )


def _junction_table(
    reference: Reference,
    metadata: MetaData,
) -> list[ForeignKeyConstraint]:
    """Build the table resolving a many-to-many reference.

    Named ``<left>_<right>`` with one ``<table>_<column>`` key column per
    referenced column, each pointing back at its table.
    """
    left = reference.col1[0].table.name
    right = reference.col2[0].table.name
    junction = Table(f"{left}_{right}", metadata)
    foreign_keys: list[ForeignKeyConstraint] = []

    for side in (reference.col1, reference.col2):
        table_name = side[0].table.name
        referred = metadata.tables[table_name]
        names = [f"{table_name}_{column.name}" for column in side]
        for name, column in zip(names, side, strict=True):
            junction.append_column(
                Column(name, referred.c[column.name].type, primary_key=True),
            )
        foreign_key = _foreign_key(names, side, reference)
        junction.append_constraint(foreign_key)
        foreign_keys.append(foreign_key)

    return foreign_keys


def build_ddl_model(database: Database) -> DDLModel:
    """Derive SQLAlchemy metadata from a parsed DBML database.

    ``a < b`` and ``a - b`` put the foreign key on ``b``, ``a > b`` on ``a``,
    and ``a <> b`` adds a junction table.
    """
    metadata = MetaData()
    for table in database.tables:
        _build_table(table, metadata)

    foreign_keys: list[ForeignKeyConstraint] = []
    for reference in database.refs:
        if reference.type == "<>":
            foreign_keys.extend(_junction_table(reference, metadata))
            continue

        if reference.type == ">":
            constrained, referred = reference.col1, reference.col2
        else:
            constrained, referred = reference.col2, reference.col1

        columns = [column.name for column in constrained]
        foreign_key = _foreign_key(columns, referred, reference)
        metadata.tables[constrained[0].table.name].append_constraint(foreign_key)
        foreign_keys.append(foreign_key)

    return DDLModel(metadata=metadata, foreign_keys=foreign_keys)


def ddl_statements(model: DDLModel, dialect: Dialect) -> list[ExecutableDDLElement]:
    """List CREATE TABLE statements followed by foreign key additions."""
    statements: list[ExecutableDDLElement] = []
    for table in model.metadata.tables.values():
        statements.append(CreateTable(table, include_foreign_key_constraints=[]))
        if table.comment and dialect.supports_comments and not dialect.inline_comments:
            statements.append(SetTableComment(table))
    statements.extend(AddConstraint(fk) for fk in model.foreign_keys)
    return statements


def render_ddl(model: DDLModel, engine: SQLEngine) -> str:
    """Compile the model into SQL text for the given engine."""
    dialect = DIALECTS[engine]()
    return "\n\n".join(
        f"{str(statement.compile(dialect=dialect)).strip()};"
        for statement in ddl_statements(model, dialect)
    )


def dbml_to_sql(dbml: str, engine: SQLEngine) -> str | None:
    """Export DBML as SQL, returning None when the conversion fails."""
    try:
        return render_ddl(build_ddl_model(parse_dbml(dbml)), engine)
    except Exception:
        logger.exception("Error converting DBML to %s SQL", engine)
        return None


def schema_to_sql(schema: Schema, engine: SQLEngine) -> str | None:
    """Export a designer schema as SQL for the given engine."""
    return dbml_to_sql(schema_to_dbml(schema), engine)
