"""Immutable records describing a relational schema under design."""

from __future__ import annotations

from typing import Literal, NamedTuple

type RelationshipType = Literal[
    "one-to-one",
    "one-to-many",
    "many-to-one",
    "many-to-many",
]

type ReferentialAction = Literal["CASCADE", "SET NULL", "RESTRICT", "NO ACTION"]


class Endpoint(NamedTuple):
    """A table/field pair one side of a relationship points at."""

    table: str
    field: str


class Field(NamedTuple):
    """A single column of a table.

    Flags default to ``False`` and text attributes to the empty string, so an
    unset attribute and a falsy one are indistinguishable on purpose.
    """

    name: str
    type: str
    pk: bool = False
    unique: bool = False
    not_null: bool = False
    auto_increment: bool = False
    default: str = ""
    note: str = ""
    references: Endpoint | None = None  # Inline foreign key


class Table(NamedTuple):
    """A table with its ordered fields."""

    name: str
    fields: tuple[Field, ...] = ()
    note: str = ""


class Relationship(NamedTuple):
    """An explicit relationship between two table fields."""

    source: Endpoint
    target: Endpoint
    type: RelationshipType | None = None
    on_delete: ReferentialAction | None = None
    on_update: ReferentialAction | None = None


class Schema(NamedTuple):
    """Root document: ordered tables and explicit relationships."""

    tables: tuple[Table, ...] = ()
    relationships: tuple[Relationship, ...] = ()
