"""Tests for the DBML parsing boundary."""

import pytest

from dbml import DBMLParseError, normalize_dbml, parse_dbml, schema_to_dbml
from schema import EXAMPLE_SCHEMA


def test_normalize_many_to_many_symbol() -> None:
    """Test that the designer's many-to-many symbol becomes DBML's."""
    dbml = "Ref: users.id >< roles.id"
    assert normalize_dbml(dbml) == "Ref: users.id <> roles.id"


def test_normalize_keeps_other_symbols() -> None:
    """Test that other relationship symbols are left alone."""
    dbml = "Ref: users.id < posts.user_id\nRef: posts.user_id > users.id"
    assert normalize_dbml(dbml) == dbml


def test_normalize_referential_actions() -> None:
    """Test that action suffixes are rewritten as DBML ref settings."""
    dbml = "Ref: users.id < posts.user_id [on delete CASCADE, on update SET NULL]"
    assert normalize_dbml(dbml) == (
        "Ref: users.id < posts.user_id [delete: cascade, update: set null]"
    )


def test_normalize_leaves_table_section_untouched() -> None:
    """Test that normalization only affects relationship syntax."""
    tables = "Table users {\n  id int [pk]\n  Note: 'on delete CASCADE'\n}"
    assert normalize_dbml(tables) == tables


def test_parse_example_schema() -> None:
    """Test that translator output for the example schema parses."""
    database = parse_dbml(schema_to_dbml(EXAMPLE_SCHEMA))

    assert [table.name for table in database.tables] == [
        "users",
        "posts",
        "comments",
        "likes",
    ]
    assert len(database.refs) == 5
    assert all(ref.type == "<" for ref in database.refs)

    users = database.tables[0]
    user_id = users.columns[0]
    assert user_id.name == "id"
    assert user_id.pk
    assert user_id.autoinc


def test_parse_invalid_dbml() -> None:
    """Test that unparsable text raises a parse error."""
    with pytest.raises(DBMLParseError):
        parse_dbml("Table users {\n  id int [pk\n}")


def test_parse_dangling_reference() -> None:
    """Test that references to unknown tables are rejected."""
    dbml = "Table users {\n  id int [pk]\n}\n\nRef: users.id < posts.user_id"
    with pytest.raises(DBMLParseError):
        parse_dbml(dbml)
