"""TypedDict shapes for JSON schema documents and their conversion to records.

Documents use the camelCase keys of the designer's JSON format, records use
the immutable types from ``schema.types``.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict, cast, get_args

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
)
from schema.types import (
    Endpoint,
    Field,
    ReferentialAction,
    Relationship,
    RelationshipType,
    Schema,
    Table,
)

REFERENTIAL_ACTIONS: tuple[str, ...] = get_args(ReferentialAction.__value__)


class SchemaDocumentError(ValueError):
    """Raised when a JSON document does not describe a schema or action."""


class EndpointDocument(TypedDict):
    """Schema for a table/field pair."""

    table: str
    field: str


class FieldDocument(TypedDict):
    """Schema for a field definition."""

    name: str
    type: str
    pk: NotRequired[bool]
    unique: NotRequired[bool]
    notNull: NotRequired[bool]
    autoIncrement: NotRequired[bool]
    default: NotRequired[str]
    note: NotRequired[str]
    references: NotRequired[EndpointDocument]


class TableDocument(TypedDict):
    """Schema for a table definition."""

    name: str
    note: NotRequired[str]
    fields: list[FieldDocument]


RelationshipDocument = TypedDict(
    "RelationshipDocument",
    {
        "from": EndpointDocument,
        "to": EndpointDocument,
        "type": NotRequired[str],
        "onDelete": NotRequired[str],
        "onUpdate": NotRequired[str],
    },
)


class SchemaDocument(TypedDict):
    """Root schema for a complete schema document."""

    tables: list[TableDocument]
    relationships: NotRequired[list[RelationshipDocument]]


def _require_object(document: Any, name: str) -> None:  # noqa: ANN401
    """Reject documents that are not JSON objects."""
    if not isinstance(document, dict):
        msg = f"Expected an object for '{name}', got {type(document).__name__}"
        raise SchemaDocumentError(msg)


def _optional_list(document: dict[str, Any], key: str) -> list[Any]:
    """Fetch an optional list-valued key, treating null as empty."""
    value = document.get(key) or []
    if not isinstance(value, list):
        msg = f"Expected a list for '{key}', got {type(value).__name__}"
        raise SchemaDocumentError(msg)
    return value


def _require(document: Any, key: str) -> Any:  # noqa: ANN401
    """Fetch a mandatory key, raising a readable error when it is missing."""
    _require_object(document, key)
    try:
        return document[key]
    except KeyError as err:
        msg = f"Missing required key '{key}'"
        raise SchemaDocumentError(msg) from err


def endpoint_from_document(document: EndpointDocument) -> Endpoint:
    """Build an endpoint from its document."""
    return Endpoint(
        table=str(_require(document, "table")),
        field=str(_require(document, "field")),
    )


def field_from_document(document: FieldDocument) -> Field:
    """Build a field, mapping absent optional keys to the record defaults."""
    _require_object(document, "field")
    references = document.get("references")
    return Field(
        name=str(_require(document, "name")),
        type=str(_require(document, "type")),
        pk=bool(document.get("pk", False)),
        unique=bool(document.get("unique", False)),
        not_null=bool(document.get("notNull", False)),
        auto_increment=bool(document.get("autoIncrement", False)),
        default=document.get("default") or "",
        note=document.get("note") or "",
        references=endpoint_from_document(references) if references else None,
    )


def table_from_document(document: TableDocument) -> Table:
    """Build a table and its fields."""
    _require_object(document, "table")
    return Table(
        name=str(_require(document, "name")),
        fields=tuple(
            field_from_document(field)
            for field in _optional_list(cast("dict[str, Any]", document), "fields")
        ),
        note=document.get("note") or "",
    )


def _referential_action(value: str | None) -> ReferentialAction | None:
    if not value:
        return None
    if value not in REFERENTIAL_ACTIONS:
        msg = f"Unknown referential action: {value}"
        raise SchemaDocumentError(msg)
    return cast("ReferentialAction", value)


def relationship_from_document(document: RelationshipDocument) -> Relationship:
    """Build an explicit relationship.

    Unknown relationship types are kept as-is; rendering treats them as
    one-to-many.
    """
    _require_object(document, "relationship")
    return Relationship(
        source=endpoint_from_document(_require(document, "from")),
        target=endpoint_from_document(_require(document, "to")),
        type=cast("RelationshipType | None", document.get("type") or None),
        on_delete=_referential_action(document.get("onDelete")),
        on_update=_referential_action(document.get("onUpdate")),
    )


def schema_from_document(document: SchemaDocument) -> Schema:
    """Build a schema from a parsed JSON document."""
    _require(document, "tables")
    root = cast("dict[str, Any]", document)
    return Schema(
        tables=tuple(
            table_from_document(table) for table in _optional_list(root, "tables")
        ),
        relationships=tuple(
            relationship_from_document(rel)
            for rel in _optional_list(root, "relationships")
        ),
    )


def endpoint_to_document(endpoint: Endpoint) -> EndpointDocument:
    """Convert an endpoint to its document."""
    return {"table": endpoint.table, "field": endpoint.field}


def field_to_document(field: Field) -> FieldDocument:
    """Convert a field, omitting falsy optional attributes."""
    document: FieldDocument = {"name": field.name, "type": field.type}
    if field.pk:
        document["pk"] = True
    if field.unique:
        document["unique"] = True
    if field.not_null:
        document["notNull"] = True
    if field.auto_increment:
        document["autoIncrement"] = True
    if field.default:
        document["default"] = field.default
    if field.note:
        document["note"] = field.note
    if field.references:
        document["references"] = endpoint_to_document(field.references)
    return document


def table_to_document(table: Table) -> TableDocument:
    """Convert a table and its fields."""
    document: TableDocument = {
        "name": table.name,
        "fields": [field_to_document(field) for field in table.fields],
    }
    if table.note:
        document["note"] = table.note
    return document


def relationship_to_document(relationship: Relationship) -> RelationshipDocument:
    """Convert an explicit relationship."""
    document: RelationshipDocument = {
        "from": endpoint_to_document(relationship.source),
        "to": endpoint_to_document(relationship.target),
    }
    if relationship.type:
        document["type"] = relationship.type
    if relationship.on_delete:
        document["onDelete"] = relationship.on_delete
    if relationship.on_update:
        document["onUpdate"] = relationship.on_update
    return document


def schema_to_document(schema: Schema) -> SchemaDocument:
    """Convert a schema to a JSON-serializable document."""
    return {
        "tables": [table_to_document(table) for table in schema.tables],
        "relationships": [
            relationship_to_document(rel) for rel in schema.relationships
        ],
    }


def action_from_document(document: dict[str, Any]) -> SchemaAction:  # noqa: C901, PLR0911
    """Build an edit action from its document.

    Action documents carry a ``type`` discriminator and the payload keys of
    the designer's dispatch format, e.g.
    ``{"type": "RENAME_TABLE", "oldTableName": "a", "newTableName": "b"}``.
    """
    action_type = _require(document, "type")

    match action_type:
        case "ADD_FIELD":
            return AddField(
                _require(document, "tableName"),
                field_from_document(_require(document, "field")),
            )
        case "REMOVE_FIELD":
            return RemoveField(
                _require(document, "tableName"),
                _require(document, "fieldName"),
            )
        case "UPDATE_FIELD":
            return UpdateField(
                _require(document, "tableName"),
                field_from_document(_require(document, "field")),
            )
        case "RENAME_FIELD":
            return RenameField(
                _require(document, "tableName"),
                _require(document, "oldFieldName"),
                _require(document, "newFieldName"),
            )
        case "ADD_TABLE":
            return AddTable(table_from_document(_require(document, "table")))
        case "REMOVE_TABLE":
            return RemoveTable(_require(document, "tableName"))
        case "UPDATE_TABLE":
            return UpdateTable(table_from_document(_require(document, "table")))
        case "RENAME_TABLE":
            return RenameTable(
                _require(document, "oldTableName"),
                _require(document, "newTableName"),
            )
        case "ADD_RELATIONSHIP":
            return AddRelationship(
                relationship_from_document(_require(document, "relationship")),
            )
        case "REMOVE_RELATIONSHIP":
            return RemoveRelationship(
                relationship_from_document(_require(document, "relationship")),
            )
        case "UPDATE_RELATIONSHIP":
            return UpdateRelationship(
                relationship_from_document(_require(document, "oldRel")),
                relationship_from_document(_require(document, "newRel")),
            )
        case _:
            msg = f"Unknown action type: {action_type}"
            raise SchemaDocumentError(msg)
