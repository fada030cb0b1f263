"""Summary counts over a schema, as shown next to the designer's editor."""

from collections import Counter
from typing import NamedTuple

from schema.types import Schema


class SchemaStatistics(NamedTuple):
    """Counts describing the size and shape of a schema."""

    tables: int
    fields: int
    relationships: int  # Explicit relationships only
    foreign_keys: int  # Fields carrying an inline reference
    primary_keys: int
    unique_fields: int
    not_null_fields: int
    field_types: dict[str, int]


def schema_statistics(schema: Schema) -> SchemaStatistics:
    """Count tables, fields and constraints of a schema."""
    fields = [field for table in schema.tables for field in table.fields]

    return SchemaStatistics(
        tables=len(schema.tables),
        fields=len(fields),
        relationships=len(schema.relationships),
        foreign_keys=sum(1 for field in fields if field.references),
        primary_keys=sum(1 for field in fields if field.pk),
        unique_fields=sum(1 for field in fields if field.unique),
        not_null_fields=sum(1 for field in fields if field.not_null),
        field_types=dict(Counter(field.type for field in fields)),
    )
