"""Edit actions and the reducer that applies them to a schema."""

from __future__ import annotations

from logging import getLogger
from typing import NamedTuple

from schema.types import Endpoint, Field, Relationship, Schema, Table

logger = getLogger(__name__)


class AddField(NamedTuple):
    """Append a field to a table."""

    table_name: str
    field: Field


class RemoveField(NamedTuple):
    """Remove a field from a table by name."""

    table_name: str
    field_name: str


class UpdateField(NamedTuple):
    """Replace the field sharing the new field's name."""

    table_name: str
    field: Field


class RenameField(NamedTuple):
    """Rename a field and every endpoint pointing at it."""

    table_name: str
    old_field_name: str
    new_field_name: str


class AddTable(NamedTuple):
    """Append a table to the schema."""

    table: Table


class RemoveTable(NamedTuple):
    """Remove a table and every relationship touching it."""

    table_name: str


class UpdateTable(NamedTuple):
    """Replace the table sharing the new table's name."""

    table: Table


class RenameTable(NamedTuple):
    """Rename a table and every endpoint pointing at it."""

    old_table_name: str
    new_table_name: str


class AddRelationship(NamedTuple):
    """Append an explicit relationship."""

    relationship: Relationship


class RemoveRelationship(NamedTuple):
    """Remove explicit relationships with the same endpoints."""

    relationship: Relationship


class UpdateRelationship(NamedTuple):
    """Replace explicit relationships matching ``old``'s endpoints."""

    old: Relationship
    new: Relationship


type SchemaAction = (
    AddField
    | RemoveField
    | UpdateField
    | RenameField
    | AddTable
    | RemoveTable
    | UpdateTable
    | RenameTable
    | AddRelationship
    | RemoveRelationship
    | UpdateRelationship
)


def same_endpoints(left: Relationship, right: Relationship) -> bool:
    """Check whether two relationships connect the same endpoints."""
    return left.source == right.source and left.target == right.target


def _map_table(
    schema: Schema,
    table_name: str,
    fields: tuple[Field, ...],
) -> tuple[Table, ...]:
    """Swap the fields of the named table, leaving the others untouched."""
    return tuple(
        table._replace(fields=fields) if table.name == table_name else table
        for table in schema.tables
    )


def _fields_of(schema: Schema, table_name: str) -> tuple[Field, ...]:
    return next(
        (table.fields for table in schema.tables if table.name == table_name),
        (),
    )


def _rename_endpoint(endpoint: Endpoint, old: Endpoint, new: Endpoint) -> Endpoint:
    return new if endpoint == old else endpoint


def _rename_field(schema: Schema, action: RenameField) -> Schema:
    old = Endpoint(action.table_name, action.old_field_name)
    new = Endpoint(action.table_name, action.new_field_name)

    tables = tuple(
        table._replace(
            fields=tuple(
                field._replace(
                    name=(
                        action.new_field_name
                        if table.name == action.table_name
                        and field.name == action.old_field_name
                        else field.name
                    ),
                    references=(
                        _rename_endpoint(field.references, old, new)
                        if field.references
                        else None
                    ),
                )
                for field in table.fields
            ),
        )
        for table in schema.tables
    )
    relationships = tuple(
        rel._replace(
            source=_rename_endpoint(rel.source, old, new),
            target=_rename_endpoint(rel.target, old, new),
        )
        for rel in schema.relationships
    )
    return Schema(tables=tables, relationships=relationships)


def _retarget_table(endpoint: Endpoint, old_name: str, new_name: str) -> Endpoint:
    return endpoint._replace(table=new_name) if endpoint.table == old_name else endpoint


def _rename_table(schema: Schema, action: RenameTable) -> Schema:
    old_name, new_name = action.old_table_name, action.new_table_name

    tables = tuple(
        table._replace(
            name=new_name if table.name == old_name else table.name,
            fields=tuple(
                field._replace(
                    references=_retarget_table(field.references, old_name, new_name),
                )
                if field.references
                else field
                for field in table.fields
            ),
        )
        for table in schema.tables
    )
    relationships = tuple(
        rel._replace(
            source=_retarget_table(rel.source, old_name, new_name),
            target=_retarget_table(rel.target, old_name, new_name),
        )
        for rel in schema.relationships
    )
    return Schema(tables=tables, relationships=relationships)


def _remove_table(schema: Schema, table_name: str) -> Schema:
    # Inline references into the removed table would become dangling relationships
    tables = tuple(
        table._replace(
            fields=tuple(
                field._replace(references=None)
                if field.references and field.references.table == table_name
                else field
                for field in table.fields
            ),
        )
        for table in schema.tables
        if table.name != table_name
    )
    relationships = tuple(
        rel
        for rel in schema.relationships
        if table_name not in (rel.source.table, rel.target.table)
    )
    return Schema(tables=tables, relationships=relationships)


def apply_action(schema: Schema, action: SchemaAction) -> Schema:  # noqa: C901
    """Return a new schema with the action applied.

    The input schema is never modified. Actions the reducer does not know
    return the schema unchanged.
    """
    logger.debug("Applying %s", type(action).__name__)

    match action:
        case AddField(table_name=table_name, field=field):
            fields = (*_fields_of(schema, table_name), field)
            return schema._replace(tables=_map_table(schema, table_name, fields))
        case RemoveField(table_name=table_name, field_name=field_name):
            fields = tuple(
                f for f in _fields_of(schema, table_name) if f.name != field_name
            )
            return schema._replace(tables=_map_table(schema, table_name, fields))
        case UpdateField(table_name=table_name, field=field):
            fields = tuple(
                field if f.name == field.name else f
                for f in _fields_of(schema, table_name)
            )
            return schema._replace(tables=_map_table(schema, table_name, fields))
        case RenameField():
            return _rename_field(schema, action)
        case AddTable(table=table):
            return schema._replace(tables=(*schema.tables, table))
        case RemoveTable(table_name=table_name):
            return _remove_table(schema, table_name)
        case UpdateTable(table=table):
            return schema._replace(
                tables=tuple(table if t.name == table.name else t for t in schema.tables),
            )
        case RenameTable():
            return _rename_table(schema, action)
        case AddRelationship(relationship=relationship):
            return schema._replace(
                relationships=(*schema.relationships, relationship),
            )
        case RemoveRelationship(relationship=relationship):
            return schema._replace(
                relationships=tuple(
                    rel
                    for rel in schema.relationships
                    if not same_endpoints(rel, relationship)
                ),
            )
        case UpdateRelationship(old=old, new=new):
            return schema._replace(
                relationships=tuple(
                    new if same_endpoints(rel, old) else rel
                    for rel in schema.relationships
                ),
            )
        case _:
            logger.warning("Ignoring unknown action: %r", action)
            return schema
