"""Rendering of recovered tables to common columnar formats.

Tables are written positionally, so repeated column names survive in CSV,
markdown and delimiter output.  JSON goes through ``records()`` and therefore
keeps only the rightmost of any repeated column.
"""

import csv
import io
import json

from llm_tables.tables.patterns import DEFAULT_NEWLINE_MARKER, DEFAULT_ROW_SPLIT
from llm_tables.tables.rules import is_blank_column, is_identical_row
from llm_tables.tables.schema import RecoveredTable


def to_records(table: RecoveredTable) -> list[dict[str, str]]:
    """Return the table as a list of {column: value} dicts."""
    return table.records()


def to_json(table: RecoveredTable, indent: int | None = 2) -> str:
    """Return the table as a JSON array of objects."""
    return json.dumps(to_records(table), indent=indent, ensure_ascii=False)


def to_csv(table: RecoveredTable) -> str:
    """Return the table as CSV text with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(table.columns)
    writer.writerows(table.rows)
    return buffer.getvalue()


def render_markdown(table: RecoveredTable) -> str:
    """Convert a RecoveredTable into a markdown table string."""
    lines = ["| " + " | ".join(table.columns) + " |"]
    lines.append("| " + " | ".join(["---"] * len(table.columns)) + " |")
    for row in table.rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def serialize(table: RecoveredTable, row_split: str = DEFAULT_ROW_SPLIT, newline_marker: str = DEFAULT_NEWLINE_MARKER) -> str:
    """Join the table back into delimited text that recover_table() parses into an equal table.

    A header whose names are all identical (e.g. ['x', 'x'] left after a blank
    column was dropped) would be pruned as a separator row, so every line then
    gets a leading empty field, which recovery removes again as a blank column.

    Raises ValueError for tables that cannot round-trip: an all-identical
    header with no data rows, or a column whose data cells are all empty.
    """
    blank = [name for idx, name in enumerate(table.columns) if is_blank_column([row[idx] for row in table.rows])]
    if blank:
        raise ValueError(f"Cannot serialise blank column(s) {blank}: recovery would drop them")

    lead = ""
    if is_identical_row(table.columns):
        if table.is_empty:
            raise ValueError("Cannot serialise a header-only table whose column names are all identical")
        lead = row_split

    lines = [lead + row_split.join(table.columns)]
    lines.extend(lead + row_split.join(row) for row in table.rows)
    return newline_marker.join(lines)
