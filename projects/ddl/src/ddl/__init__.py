"""SQL export of DBML documents."""

from ddl.sql import (
    DIALECTS,
    SQLEngine,
    build_ddl_model,
    dbml_to_sql,
    render_ddl,
    schema_to_sql,
)
from ddl.type_conversion import dbml_to_sql_type

__all__ = [
    "DIALECTS",
    "SQLEngine",
    "build_ddl_model",
    "dbml_to_sql",
    "dbml_to_sql_type",
    "render_ddl",
    "schema_to_sql",
]
