"""Tests for the schema state container."""

from dbml import schema_to_dbml
from schema import (
    EXAMPLE_SCHEMA,
    AddTable,
    Endpoint,
    Field,
    Relationship,
    Schema,
    SchemaStore,
    Table,
)


def test_store_starts_empty() -> None:
    """Test that the default document has no tables or relationships."""
    assert SchemaStore().schema == Schema()


def test_dispatch_replaces_schema() -> None:
    """Test that dispatching swaps in a new schema value."""
    store = SchemaStore()
    before = store.schema

    after = store.dispatch(AddTable(Table("users")))

    assert store.schema is after
    assert after.tables == (Table("users"),)
    assert before == Schema()


def test_convenience_methods_build_a_schema() -> None:
    """Test building a small schema through the helper methods."""
    store = SchemaStore()
    store.add_table(Table("users"))
    store.add_field("users", Field("id", "int", pk=True))
    store.add_table(Table("posts"))
    store.add_field("posts", Field("author", "int"))
    store.rename_field("posts", "author", "user_id")
    store.add_relationship(
        Relationship(
            source=Endpoint("users", "id"),
            target=Endpoint("posts", "user_id"),
        ),
    )

    assert schema_to_dbml(store.schema).endswith("Ref: users.id < posts.user_id")


def test_update_and_remove_helpers() -> None:
    """Test the update/remove helpers against the example schema."""
    store = SchemaStore(EXAMPLE_SCHEMA)
    store.update_field("users", Field("email", "varchar(255)", not_null=True))
    store.remove_field("users", "created_at")
    store.update_table(Table("likes", note="Reactions"))
    store.remove_table("comments")
    store.rename_table("posts", "articles")

    users = store.schema.tables[0]
    assert [field.name for field in users.fields] == ["id", "username", "email"]
    assert users.fields[2].type == "varchar(255)"
    assert [table.name for table in store.schema.tables] == [
        "users",
        "articles",
        "likes",
    ]


def test_relationship_helpers() -> None:
    """Test adding, updating and removing an explicit relationship."""
    first = Relationship(source=Endpoint("a", "id"), target=Endpoint("b", "a_id"))
    second = first._replace(type="one-to-one")
    store = SchemaStore()

    store.add_relationship(first)
    store.update_relationship(first, second)
    assert store.schema.relationships == (second,)

    store.remove_relationship(second)
    assert store.schema.relationships == ()


def test_subscribers_receive_new_schema() -> None:
    """Test that listeners see every change until they unsubscribe."""
    store = SchemaStore()
    seen: list[Schema] = []
    unsubscribe = store.subscribe(seen.append)

    store.add_table(Table("users"))
    unsubscribe()
    store.add_table(Table("posts"))

    assert len(seen) == 1
    assert seen[0].tables == (Table("users"),)


def test_unchanged_schema_does_not_notify() -> None:
    """Test that no-op actions do not wake listeners."""
    store = SchemaStore()
    seen: list[Schema] = []
    store.subscribe(seen.append)

    store.remove_table("missing")

    assert seen == []


def test_reset() -> None:
    """Test that reset returns to the empty document."""
    store = SchemaStore(EXAMPLE_SCHEMA)
    assert store.reset() == Schema()
    assert store.schema == Schema()


def test_reset_notifies_only_on_change() -> None:
    """Test that resetting an already empty store wakes no listeners."""
    store = SchemaStore()
    seen: list[Schema] = []
    store.subscribe(seen.append)

    store.reset()
    store.add_table(Table("users"))
    store.reset()

    assert seen == [Schema(tables=(Table("users"),)), Schema()]
