"""Tests for schema statistics."""

from schema import EXAMPLE_SCHEMA, Schema, schema_statistics


def test_example_schema_statistics() -> None:
    """Test counts over the example schema."""
    statistics = schema_statistics(EXAMPLE_SCHEMA)

    assert statistics.tables == 4
    assert statistics.fields == 18
    assert statistics.relationships == 0
    assert statistics.foreign_keys == 5
    assert statistics.primary_keys == 4
    assert statistics.unique_fields == 1
    assert statistics.not_null_fields == 10
    assert statistics.field_types == {
        "int": 9,
        "varchar(50)": 1,
        "varchar(100)": 1,
        "timestamp": 4,
        "varchar(200)": 1,
        "text": 2,
    }


def test_empty_schema_statistics() -> None:
    """Test that an empty schema counts nothing."""
    statistics = schema_statistics(Schema())

    assert statistics.tables == 0
    assert statistics.fields == 0
    assert statistics.field_types == {}
