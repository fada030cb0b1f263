"""ER diagram generation and visualization package."""

from diagram.client import fetch_svg
from diagram.html_export import svg_to_html
from diagram.layout import DiagramLayout, layout_database
from diagram.svg_export import dbml_to_svg, layout_to_svg, schema_to_svg

__all__ = [
    "DiagramLayout",
    "dbml_to_svg",
    "fetch_svg",
    "layout_database",
    "layout_to_svg",
    "schema_to_svg",
    "svg_to_html",
]
