"""HTML export functionality for ER diagrams."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader


def svg_to_html(svg: str, title: str = "ER Diagram", dbml: str | None = None) -> str:
    """Create a standalone HTML page embedding an SVG diagram."""
    template_dir = Path(__file__).parent / "templates"

    env = Environment(loader=FileSystemLoader(template_dir), autoescape=True)
    template = env.get_template("diagram.html")

    return template.render(title=title, svg=svg, dbml=dbml)
