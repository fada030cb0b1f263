"""Translate a designer schema into DBML text.

The output has two sections separated by a blank line: table blocks, then
``Ref:`` lines. Inline field references are not rendered on the field; they
become one-to-many relationships listed before the explicit ones.
"""

from collections.abc import Callable, Iterable

from schema.types import Endpoint, Field, Relationship, Schema, Table

type FieldSetting = Callable[[Field], str | None]

# Checked in this order regardless of how the field was built
FIELD_SETTINGS: tuple[FieldSetting, ...] = (
    lambda field: "pk" if field.pk else None,
    lambda field: "not null" if field.not_null else None,
    lambda field: "unique" if field.unique else None,
    lambda field: "increment" if field.auto_increment else None,
    lambda field: f"default: '{field.default}'" if field.default else None,
)

RELATIONSHIP_SYMBOLS: dict[str, str] = {
    "one-to-one": "-",
    "one-to-many": "<",
    "many-to-one": ">",
    "many-to-many": "><",
}
DEFAULT_SYMBOL = "<"


def field_settings(field: Field) -> list[str]:
    """List the DBML settings that apply to a field."""
    return [
        setting
        for rule in FIELD_SETTINGS
        if (setting := rule(field)) is not None
    ]


def render_field(field: Field) -> str:
    """Render a field line, with a settings suffix only when one applies."""
    settings = field_settings(field)
    suffix = f" [{', '.join(settings)}]" if settings else ""
    return f"  {field.name} {field.type}{suffix}"


def render_table(table: Table) -> str:
    """Render a table block including its (possibly empty) note."""
    fields = "\n".join(render_field(field) for field in table.fields)
    return f"Table {table.name} {{\n{fields}\n  Note: '{table.note}'\n}}"


def relationship_symbol(relationship_type: str | None) -> str:
    """Map a relationship type to its DBML symbol, one-to-many when unknown."""
    if relationship_type is None:
        return DEFAULT_SYMBOL
    return RELATIONSHIP_SYMBOLS.get(relationship_type, DEFAULT_SYMBOL)


def derive_relationships(schema: Schema) -> list[Relationship]:
    """Turn inline field references into one-to-many relationships.

    The referenced field is the "one" side, the referencing field the "many".
    """
    return [
        Relationship(
            source=field.references,
            target=Endpoint(table=table.name, field=field.name),
            type="one-to-many",
        )
        for table in schema.tables
        for field in table.fields
        if field.references
    ]


def collect_relationships(schema: Schema) -> list[Relationship]:
    """Derived relationships followed by the explicit ones, duplicates kept."""
    return [*derive_relationships(schema), *schema.relationships]


def render_relationship(relationship: Relationship) -> str:
    """Render a ``Ref:`` line with optional referential actions."""
    source, target = relationship.source, relationship.target
    symbol = relationship_symbol(relationship.type)
    line = f"Ref: {source.table}.{source.field} {symbol} {target.table}.{target.field}"

    actions = []
    if relationship.on_delete:
        actions.append(f"on delete {relationship.on_delete}")
    if relationship.on_update:
        actions.append(f"on update {relationship.on_update}")

    return f"{line} [{', '.join(actions)}]" if actions else line


def render_relationships(relationships: Iterable[Relationship]) -> str:
    """Render relationship lines, one per relationship."""
    return "\n".join(render_relationship(rel) for rel in relationships)


def schema_to_dbml(schema: Schema) -> str:
    """Render a schema as DBML: table blocks, a blank line, then references."""
    tables = "\n\n".join(render_table(table) for table in schema.tables)
    relationships = render_relationships(collect_relationships(schema))
    return f"{tables}\n\n{relationships}"
