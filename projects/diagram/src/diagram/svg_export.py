"""SVG rendering of DBML documents."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from dbml import parse_dbml, schema_to_dbml
from diagram.layout import DiagramLayout, layout_database
from schema.types import Schema

TEMPLATE_DIR = Path(__file__).parent / "templates"


def layout_to_svg(layout: DiagramLayout) -> str:
    """Render a computed layout through the SVG template."""
    env = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=True)
    template = env.get_template("diagram.svg")
    return template.render(layout=layout)


def dbml_to_svg(dbml: str) -> str:
    """Render DBML text as an SVG diagram.

    Raises ``DBMLParseError`` when the text is not valid DBML.
    """
    return layout_to_svg(layout_database(parse_dbml(dbml)))


def schema_to_svg(schema: Schema) -> str:
    """Render a designer schema as an SVG diagram."""
    return dbml_to_svg(schema_to_dbml(schema))
