"""Tests for converting JSON documents to schema records and back."""

import json

import pytest

from schema import (
    EXAMPLE_SCHEMA,
    AddField,
    Endpoint,
    Field,
    Relationship,
    RenameTable,
    SchemaDocumentError,
    UpdateRelationship,
    action_from_document,
    schema_from_document,
    schema_to_document,
)

DOCUMENT = {
    "tables": [
        {
            "name": "users",
            "note": "People",
            "fields": [
                {"name": "id", "type": "int", "pk": True, "autoIncrement": True},
                {"name": "email", "type": "varchar(100)", "notNull": True},
            ],
        },
        {
            "name": "posts",
            "fields": [
                {
                    "name": "user_id",
                    "type": "int",
                    "references": {"table": "users", "field": "id"},
                },
            ],
        },
    ],
    "relationships": [
        {
            "from": {"table": "users", "field": "id"},
            "to": {"table": "posts", "field": "user_id"},
            "type": "one-to-many",
            "onDelete": "CASCADE",
        },
    ],
}


def test_schema_from_document() -> None:
    """Test that camelCase keys map onto record attributes."""
    schema = schema_from_document(DOCUMENT)

    users, posts = schema.tables
    assert users.note == "People"
    assert users.fields[0] == Field("id", "int", pk=True, auto_increment=True)
    assert users.fields[1] == Field("email", "varchar(100)", not_null=True)
    assert posts.note == ""
    assert posts.fields[0].references == Endpoint("users", "id")
    assert schema.relationships == (
        Relationship(
            source=Endpoint("users", "id"),
            target=Endpoint("posts", "user_id"),
            type="one-to-many",
            on_delete="CASCADE",
        ),
    )


def test_relationships_key_is_optional() -> None:
    """Test that documents without relationships load with none."""
    schema = schema_from_document({"tables": []})
    assert schema.relationships == ()


def test_schema_to_document_omits_falsy_attributes() -> None:
    """Test that defaults are not written back out."""
    document = schema_to_document(schema_from_document(DOCUMENT))
    assert document == DOCUMENT


def test_example_schema_document_is_json_serializable() -> None:
    """Test that the example schema survives a trip through JSON text."""
    text = json.dumps(schema_to_document(EXAMPLE_SCHEMA))
    assert schema_from_document(json.loads(text)) == EXAMPLE_SCHEMA


def test_missing_required_key() -> None:
    """Test that a field without a type is rejected with the key name."""
    with pytest.raises(SchemaDocumentError, match="'type'"):
        schema_from_document({"tables": [{"name": "t", "fields": [{"name": "a"}]}]})


def test_unknown_referential_action() -> None:
    """Test that referential actions are restricted to the known set."""
    document = {
        "tables": [],
        "relationships": [
            {
                "from": {"table": "a", "field": "id"},
                "to": {"table": "b", "field": "a_id"},
                "onDelete": "EXPLODE",
            },
        ],
    }
    with pytest.raises(SchemaDocumentError, match="EXPLODE"):
        schema_from_document(document)


def test_unknown_relationship_type_is_kept() -> None:
    """Test that unrecognised relationship types are passed through."""
    document = {
        "tables": [],
        "relationships": [
            {
                "from": {"table": "a", "field": "id"},
                "to": {"table": "b", "field": "a_id"},
                "type": "some-to-some",
            },
        ],
    }
    assert schema_from_document(document).relationships[0].type == "some-to-some"


def test_action_from_document() -> None:
    """Test decoding of action documents."""
    assert action_from_document(
        {"type": "ADD_FIELD", "tableName": "users", "field": {"name": "a", "type": "int"}},
    ) == AddField("users", Field("a", "int"))
    assert action_from_document(
        {"type": "RENAME_TABLE", "oldTableName": "a", "newTableName": "b"},
    ) == RenameTable("a", "b")


def test_update_relationship_document() -> None:
    """Test that relationship updates decode both relationships."""
    rel = {"from": {"table": "a", "field": "id"}, "to": {"table": "b", "field": "a_id"}}
    action = action_from_document(
        {"type": "UPDATE_RELATIONSHIP", "oldRel": rel, "newRel": rel | {"type": "one-to-one"}},
    )

    assert isinstance(action, UpdateRelationship)
    assert action.new.type == "one-to-one"
    assert action.old.type is None


def test_unknown_action_type() -> None:
    """Test that unknown action documents are rejected."""
    with pytest.raises(SchemaDocumentError, match="SHUFFLE"):
        action_from_document({"type": "SHUFFLE"})


BROKEN_REFERENCE = {"name": "b", "type": "int", "references": "c.id"}


@pytest.mark.parametrize(
    ("document", "message"),
    [
        ({"tables": 3}, "list for 'tables'"),
        ({"tables": ["users"]}, "object for 'table'"),
        ({"tables": [{"name": "a", "fields": 3}]}, "list for 'fields'"),
        ({"tables": [{"name": "a", "fields": ["x"]}]}, "object for 'field'"),
        ({"tables": [], "relationships": {"from": "a"}}, "list for 'relationships'"),
        (
            {"tables": [], "relationships": ["a.id < b.a_id"]},
            "object for 'relationship'",
        ),
        (
            {"tables": [{"name": "a", "fields": [BROKEN_REFERENCE]}]},
            "object for 'table'",
        ),
        (["tables"], "object for 'tables'"),
    ],
)
def test_malformed_nested_documents(document: object, message: str) -> None:
    """Test that wrongly shaped values anywhere raise a document error."""
    with pytest.raises(SchemaDocumentError, match=message):
        schema_from_document(document)  # type: ignore[arg-type]
