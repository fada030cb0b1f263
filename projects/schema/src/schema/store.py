"""State container owning the schema being designed."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger

from schema.actions import (
    AddField,
    AddRelationship,
    AddTable,
    RemoveField,
    RemoveRelationship,
    RemoveTable,
    RenameField,
    RenameTable,
    SchemaAction,
    UpdateField,
    UpdateRelationship,
    UpdateTable,
    apply_action,
)
from schema.types import Field, Relationship, Schema, Table

logger = getLogger(__name__)

type Listener = Callable[[Schema], None]


class SchemaStore:
    """Hold one schema value and replace it on every dispatched action."""

    def __init__(self, schema: Schema | None = None) -> None:
        """Start from the given schema, or an empty one."""
        self._schema = schema if schema is not None else Schema()
        self._listeners: list[Listener] = []

    @property
    def schema(self) -> Schema:
        """Current schema value."""
        return self._schema

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new schema after each change.

        Returns a function removing the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_schema(self, schema: Schema) -> Schema:
        if schema != self._schema:
            self._schema = schema
            for listener in list(self._listeners):
                listener(schema)
        return self._schema

    def dispatch(self, action: SchemaAction) -> Schema:
        """Apply an action and notify listeners if the schema changed."""
        return self._set_schema(apply_action(self._schema, action))

    def reset(self) -> Schema:
        """Drop every table and relationship."""
        logger.debug("Resetting schema store")
        return self._set_schema(Schema())

    def add_field(self, table_name: str, field: Field) -> Schema:
        """Append a field to a table."""
        return self.dispatch(AddField(table_name, field))

    def remove_field(self, table_name: str, field_name: str) -> Schema:
        """Drop a field from a table."""
        return self.dispatch(RemoveField(table_name, field_name))

    def update_field(self, table_name: str, field: Field) -> Schema:
        """Replace the table's field of the same name."""
        return self.dispatch(UpdateField(table_name, field))

    def rename_field(self, table_name: str, old_name: str, new_name: str) -> Schema:
        """Rename a field and the endpoints pointing at it."""
        return self.dispatch(RenameField(table_name, old_name, new_name))

    def add_table(self, table: Table) -> Schema:
        """Append a table."""
        return self.dispatch(AddTable(table))

    def remove_table(self, table_name: str) -> Schema:
        """Drop a table and every relationship touching it."""
        return self.dispatch(RemoveTable(table_name))

    def update_table(self, table: Table) -> Schema:
        """Replace the table of the same name."""
        return self.dispatch(UpdateTable(table))

    def rename_table(self, old_name: str, new_name: str) -> Schema:
        """Rename a table and the endpoints pointing at it."""
        return self.dispatch(RenameTable(old_name, new_name))

    def add_relationship(self, relationship: Relationship) -> Schema:
        """Append an explicit relationship."""
        return self.dispatch(AddRelationship(relationship))

    def remove_relationship(self, relationship: Relationship) -> Schema:
        """Drop relationships with the same endpoints."""
        return self.dispatch(RemoveRelationship(relationship))

    def update_relationship(self, old: Relationship, new: Relationship) -> Schema:
        """Replace relationships matching the endpoints of ``old``."""
        return self.dispatch(UpdateRelationship(old, new))
