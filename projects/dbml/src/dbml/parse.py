"""Parsing boundary between designer DBML and the PyDBML parser."""

import re
from logging import getLogger

from pydbml import PyDBML
from pydbml.database import Database

logger = getLogger(__name__)

# The designer writes many-to-many as "><", DBML spells it "<>"
MANY_TO_MANY = re.compile(r"^(Ref:\s*\S+\s+)><(\s+)")

# The designer writes "on delete CASCADE", DBML expects "delete: cascade"
REFERENTIAL_ACTION = re.compile(
    r"\bon (delete|update) (CASCADE|SET NULL|RESTRICT|NO ACTION)\b",
    re.IGNORECASE,
)


class DBMLParseError(ValueError):
    """Raised when DBML text cannot be parsed."""


def _normalize_reference(line: str) -> str:
    line = MANY_TO_MANY.sub(r"\1<>\2", line)
    return REFERENTIAL_ACTION.sub(
        lambda match: f"{match[1].lower()}: {match[2].lower()}",
        line,
    )


def normalize_dbml(dbml: str) -> str:
    """Rewrite designer-specific relationship syntax into standard DBML.

    Only ``Ref:`` lines are touched, notes and table blocks pass through.
    """
    return "\n".join(
        _normalize_reference(line) if line.startswith("Ref:") else line
        for line in dbml.split("\n")
    )


def parse_dbml(dbml: str) -> Database:
    """Parse DBML text into a PyDBML database."""
    try:
        return PyDBML(normalize_dbml(dbml))
    except Exception as err:
        logger.debug("PyDBML rejected input", exc_info=True)
        msg = f"Invalid DBML: {err}"
        raise DBMLParseError(msg) from err
