"""Schema model, edit actions and state container for the designer."""

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
from schema.documents import (
    SchemaDocument,
    SchemaDocumentError,
    action_from_document,
    schema_from_document,
    schema_to_document,
)
from schema.example import EXAMPLE_SCHEMA
from schema.statistics import SchemaStatistics, schema_statistics
from schema.store import SchemaStore
from schema.types import (
    Endpoint,
    Field,
    ReferentialAction,
    Relationship,
    RelationshipType,
    Schema,
    Table,
)

__all__ = [
    "EXAMPLE_SCHEMA",
    "AddField",
    "AddRelationship",
    "AddTable",
    "Endpoint",
    "Field",
    "ReferentialAction",
    "Relationship",
    "RelationshipType",
    "RemoveField",
    "RemoveRelationship",
    "RemoveTable",
    "RenameField",
    "RenameTable",
    "Schema",
    "SchemaAction",
    "SchemaDocument",
    "SchemaDocumentError",
    "SchemaStatistics",
    "SchemaStore",
    "Table",
    "UpdateField",
    "UpdateRelationship",
    "UpdateTable",
    "action_from_document",
    "apply_action",
    "schema_from_document",
    "schema_statistics",
    "schema_to_document",
]
