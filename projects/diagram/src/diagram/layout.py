"""Grid layout of tables and reference lines for the SVG diagram."""

from math import ceil, sqrt
from typing import NamedTuple

from pydbml.classes import Reference
from pydbml.classes import Table as DBMLTable
from pydbml.database import Database

# Geometry in SVG user units, sized for a monospace font
CHAR_WIDTH = 7.5
ROW_HEIGHT = 22
HEADER_HEIGHT = 30
PADDING = 12
GAP = 80
MARGIN = 20
MIN_WIDTH = 160

# Cardinality shown at the (left, right) end of each reference symbol
CARDINALITIES: dict[str, tuple[str, str]] = {
    "<": ("1", "*"),
    ">": ("*", "1"),
    "-": ("1", "1"),
    "<>": ("*", "*"),
}


class ColumnRow(NamedTuple):
    """A column line inside a table box."""

    name: str
    type: str
    y: float  # Baseline-centre of the row
    pk: bool
    not_null: bool


class TableBox(NamedTuple):
    """A positioned table."""

    name: str
    x: float
    y: float
    width: float
    height: float
    rows: list[ColumnRow]


class Edge(NamedTuple):
    """A reference line between two column rows."""

    x1: float
    y1: float
    x2: float
    y2: float
    start_label: str
    end_label: str


class DiagramLayout(NamedTuple):
    """Everything the SVG template needs."""

    width: float
    height: float
    tables: list[TableBox]
    edges: list[Edge]


def table_width(table: DBMLTable) -> float:
    """Width fitting the table name and its longest column line."""
    longest = max(
        [len(table.name), *(len(f"{c.name}  {c.type}") + 3 for c in table.columns)],
    )
    return max(MIN_WIDTH, longest * CHAR_WIDTH + 2 * PADDING)


def table_height(table: DBMLTable) -> float:
    """Header plus one row per column."""
    return HEADER_HEIGHT + ROW_HEIGHT * len(table.columns) + PADDING / 2


def _place_tables(tables: list[DBMLTable]) -> list[TableBox]:
    """Place tables row by row on a near-square grid."""
    if not tables:
        return []

    per_row = ceil(sqrt(len(tables)))
    grid = [tables[i : i + per_row] for i in range(0, len(tables), per_row)]
    column_widths = [
        max(table_width(row[i]) for row in grid if i < len(row))
        for i in range(per_row)
    ]

    boxes: list[TableBox] = []
    y = float(MARGIN)
    for row in grid:
        x = float(MARGIN)
        for index, table in enumerate(row):
            rows = [
                ColumnRow(
                    name=column.name,
                    type=str(column.type),
                    y=y + HEADER_HEIGHT + ROW_HEIGHT * position + ROW_HEIGHT / 2,
                    pk=bool(column.pk),
                    not_null=bool(column.not_null),
                )
                for position, column in enumerate(table.columns)
            ]
            boxes.append(
                TableBox(
                    name=table.name,
                    x=x,
                    y=y,
                    width=column_widths[index],
                    height=table_height(table),
                    rows=rows,
                ),
            )
            x += column_widths[index] + GAP
        y += max(table_height(table) for table in row) + GAP

    return boxes


def _anchor_y(box: TableBox, column_name: str) -> float:
    return next(
        (row.y for row in box.rows if row.name == column_name),
        box.y + HEADER_HEIGHT / 2,
    )


def _edges(reference: Reference, boxes: dict[str, TableBox]) -> list[Edge]:
    """Connect each column pair of a reference, left box's right side first."""
    start_label, end_label = CARDINALITIES.get(reference.type, ("", ""))
    edges: list[Edge] = []

    for left, right in zip(reference.col1, reference.col2, strict=False):
        source = boxes[left.table.name]
        target = boxes[right.table.name]
        y1 = _anchor_y(source, left.name)
        y2 = _anchor_y(target, right.name)

        if source.name == target.name:
            x1 = x2 = source.x + source.width
        elif source.x + source.width / 2 <= target.x + target.width / 2:
            x1, x2 = source.x + source.width, target.x
        else:
            x1, x2 = source.x, target.x + target.width

        edges.append(Edge(x1, y1, x2, y2, start_label, end_label))

    return edges


def layout_database(database: Database) -> DiagramLayout:
    """Lay out every table and reference of a parsed DBML database."""
    boxes = _place_tables(list(database.tables))
    by_name = {box.name: box for box in boxes}
    edges = [edge for ref in database.refs for edge in _edges(ref, by_name)]

    width = max((box.x + box.width for box in boxes), default=0) + MARGIN
    height = max((box.y + box.height for box in boxes), default=0) + MARGIN
    return DiagramLayout(width=width, height=height, tables=boxes, edges=edges)
