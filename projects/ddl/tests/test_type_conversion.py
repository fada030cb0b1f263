"""Tests for mapping DBML column types onto SQLAlchemy types."""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.types import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Double,
    Float,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)

from ddl.type_conversion import VerbatimType, dbml_to_sql_type


@pytest.mark.parametrize(
    ("column_type", "expected"),
    [
        ("int", Integer),
        ("INTEGER", Integer),
        ("bigint", BigInteger),
        ("text", Text),
        ("boolean", Boolean),
        ("timestamp", DateTime),
        ("date", Date),
        ("float", Float),
        ("double", Double),
        ("uuid", Uuid),
        ("jsonb", JSON),
    ],
)
def test_generic_types(column_type: str, expected: type) -> None:
    """Test that common DBML types map onto generic SQLAlchemy types."""
    assert isinstance(dbml_to_sql_type(column_type), expected)


def test_varchar_length() -> None:
    """Test that string lengths are kept."""
    sql_type = dbml_to_sql_type("varchar(50)")
    assert isinstance(sql_type, String)
    assert sql_type.length == 50


def test_decimal_precision_and_scale() -> None:
    """Test that numeric precision and scale are kept."""
    sql_type = dbml_to_sql_type("decimal(10, 2)")
    assert isinstance(sql_type, Numeric)
    assert sql_type.precision == 10
    assert sql_type.scale == 2


def test_timestamptz_is_timezone_aware() -> None:
    """Test that timestamptz keeps its timezone flag."""
    sql_type = dbml_to_sql_type("timestamptz")
    assert isinstance(sql_type, DateTime)
    assert sql_type.timezone


@pytest.mark.parametrize("column_type", ["geometry", "money[]", "int4range"])
def test_unknown_types_are_verbatim(column_type: str) -> None:
    """Test that unknown types render exactly as written."""
    sql_type = dbml_to_sql_type(column_type)

    assert isinstance(sql_type, VerbatimType)
    assert sql_type.compile(dialect=postgresql.dialect()) == column_type
