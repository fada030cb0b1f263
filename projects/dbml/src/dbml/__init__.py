"""DBML generation from designer schemas."""

from dbml.convert import (
    collect_relationships,
    derive_relationships,
    field_settings,
    relationship_symbol,
    render_field,
    render_relationship,
    render_table,
    schema_to_dbml,
)
from dbml.parse import DBMLParseError, normalize_dbml, parse_dbml

__all__ = [
    "DBMLParseError",
    "collect_relationships",
    "derive_relationships",
    "field_settings",
    "normalize_dbml",
    "parse_dbml",
    "relationship_symbol",
    "render_field",
    "render_relationship",
    "render_table",
    "schema_to_dbml",
]
