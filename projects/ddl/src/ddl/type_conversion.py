"""Module for mapping DBML column types onto SQLAlchemy types."""

import re
from typing import Any

from pydbml.classes import Enum as DBMLEnum
from sqlalchemy.types import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Double,
    Enum,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    SmallInteger,
    String,
    Text,
    Time,
    TypeEngine,
    UserDefinedType,
    Uuid,
)

# name, optional length or precision, optional scale: "varchar(50)", "decimal(10, 2)"
TYPE_PATTERN = re.compile(
    r"^\s*(?P<name>[a-z_][\w ]*?)\s*"
    r"(?:\(\s*(?P<size>\d+)\s*(?:,\s*(?P<scale>\d+)\s*)?\))?\s*$",
    re.IGNORECASE,
)


class VerbatimType(UserDefinedType):  # pyright: ignore[reportMissingTypeArgument]
    """Column type emitted exactly as written in the DBML source."""

    cache_ok = True

    def __init__(self, spec: str) -> None:
        """Keep the original type text."""
        self.spec = spec

    def get_col_spec(self, **_kw: Any) -> str:  # noqa: ANN401
        """Render the type text unchanged for every dialect."""
        return self.spec


def _int(value: str | None) -> int | None:
    return int(value) if value is not None else None


def dbml_to_sql_type(column_type: str | DBMLEnum) -> TypeEngine[Any]:  # noqa: C901, PLR0911
    """Parse a DBML column type into a SQLAlchemy TypeEngine.

    Examples:
        varchar(255) -> String(255)
        decimal(10,2) -> Numeric(10, 2)
        int -> Integer
        geometry(point) -> VerbatimType("geometry(point)")

    Types SQLAlchemy has no generic counterpart for are kept verbatim.

    """
    if isinstance(column_type, DBMLEnum):
        values = [item.name for item in column_type.items]
        return Enum(*values, name=column_type.name)

    match_ = TYPE_PATTERN.match(column_type)
    if not match_:
        return VerbatimType(column_type)

    size = _int(match_["size"])
    scale = _int(match_["scale"])

    match match_["name"].lower():
        case "int" | "integer" | "int4" | "mediumint":
            return Integer()
        case "bigint" | "int8":
            return BigInteger()
        case "smallint" | "int2" | "tinyint":
            return SmallInteger()
        case "varchar" | "char" | "character varying" | "string" | "nvarchar":
            return String(size)
        case "text" | "longtext" | "mediumtext":
            return Text()
        case "bool" | "boolean" | "bit":
            return Boolean()
        case "timestamp" | "datetime" | "timestamptz":
            return DateTime(timezone=match_["name"].lower() == "timestamptz")
        case "date":
            return Date()
        case "time":
            return Time()
        case "decimal" | "numeric" | "money":
            return Numeric(precision=size, scale=scale)
        case "float" | "real" | "float4":
            return Float()
        case "double" | "double precision" | "float8":
            return Double()
        case "uuid" | "uniqueidentifier":
            return Uuid()
        case "json" | "jsonb":
            return JSON()
        case "blob" | "bytea" | "binary" | "varbinary":
            return LargeBinary(size)
        case _:
            return VerbatimType(column_type.strip())
