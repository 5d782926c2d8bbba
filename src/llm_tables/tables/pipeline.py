"""Recover a table from a delimited LLM text response.

``recover_table`` runs a fixed pipeline over the response string:

  1. line split        -- on the newline marker (and real line breaks, for the default marker)
  2. field split       -- on the field separator, trimming every cell
  3. edge strip        -- drop '| ' / ' |' artifacts left on the outer cells
  4. degenerate rows   -- drop rows whose cells are all identical
  5. header            -- first surviving row becomes the column names
  6. blank columns     -- drop columns whose data cells are all empty
  7-9. row rules       -- DEFAULT_ROW_RULES from rules.py, in order

The order matters.  Pass 4 runs before the header is taken so a separator row
is never mistaken for the header, and the identical-row rule runs again after
step 6 because removing a blank column can leave a row like ['', '---', '---']
as ['---', '---'].

The heuristics are approximate.  Callers should inspect the result, since a
response that deviates from the usual markdown shape can be over- or
under-pruned.
"""

import logging
from typing import Sequence

from llm_tables.tables.patterns import (
    DEFAULT_NEWLINE_MARKER,
    DEFAULT_ROW_SPLIT,
    LINE_BREAK_RE,
    leading_artifact,
    trailing_artifact,
)
from llm_tables.tables.rules import DEFAULT_ROW_RULES, RowRule, is_blank_column, is_identical_row, rule_name
from llm_tables.tables.schema import RecoveredTable, StructuralMismatchError

logger = logging.getLogger(__name__)


# ─── Input Handling ──────────────────────────────────────────────────────────


def _first_text(text: str | Sequence[str]) -> str:
    """Accept a single string, or a non-empty sequence of which only the first element is used."""
    if isinstance(text, str):
        return text
    if not text:
        raise ValueError("Expected a response string or a non-empty sequence of strings")
    if len(text) > 1:
        logger.warning("Received %d responses; only the first is processed", len(text))
    first = text[0]
    if not isinstance(first, str):
        raise TypeError(f"Expected a string response, got {type(first).__name__}")
    return first


# ─── Pipeline Stages ─────────────────────────────────────────────────────────


def split_lines(text: str, newline_marker: str = DEFAULT_NEWLINE_MARKER, split_line_breaks: bool | None = None) -> list[str]:
    """Split the response into lines on the newline marker.

    Real line breaks are also row separators when *split_line_breaks* is True.
    Left as None, they are split on only with the default escaped marker, so a
    custom marker leaves line breaks inside cells intact.

    Empty input gives a single empty line.  Whitespace-only lines are dropped
    unless every line is blank.
    """
    if split_line_breaks is None:
        split_line_breaks = newline_marker == DEFAULT_NEWLINE_MARKER
    chunks = LINE_BREAK_RE.split(text) if split_line_breaks else [text]
    lines = [line for chunk in chunks for line in chunk.split(newline_marker)]

    non_blank = [line for line in lines if line.strip()]
    if not non_blank:
        return lines[:1]
    return non_blank


def split_fields(lines: list[str], row_split: str = DEFAULT_ROW_SPLIT) -> list[list[str]]:
    """Split each line on the literal field separator and trim every cell.

    Raises StructuralMismatchError if the lines do not all have the same
    number of fields.
    """
    rows = [[cell.strip() for cell in line.split(row_split)] for line in lines]

    expected = len(rows[0])
    mismatched = {idx: len(row) for idx, row in enumerate(rows) if len(row) != expected}
    if mismatched:
        raise StructuralMismatchError(expected, mismatched)
    return rows


def strip_edge_artifacts(rows: list[list[str]], row_split: str = DEFAULT_ROW_SPLIT) -> list[list[str]]:
    """Remove a leading '<sep> ' from the first cell and a trailing ' <sep>' from the last cell."""
    leading = leading_artifact(row_split)
    trailing = trailing_artifact(row_split)
    output = []
    for row in rows:
        cells = list(row)
        cells[0] = cells[0].removeprefix(leading)
        cells[-1] = cells[-1].removesuffix(trailing)
        output.append(cells)
    return output


def drop_rows(rows: list[list[str]], rule: RowRule) -> list[list[str]]:
    """Return the rows for which *rule* is False, preserving order."""
    kept = [row for row in rows if not rule(row)]
    if len(kept) != len(rows):
        logger.debug("%s: dropped %d of %d rows", rule_name(rule), len(rows) - len(kept), len(rows))
    return kept


def drop_blank_columns(columns: list[str], rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Drop every column whose data cells are all empty strings."""
    keep = [idx for idx in range(len(columns)) if not is_blank_column([row[idx] for row in rows])]
    if len(keep) == len(columns):
        return columns, rows

    logger.debug("Dropping %d blank column(s) of %d", len(columns) - len(keep), len(columns))
    new_columns = [columns[idx] for idx in keep]
    new_rows = [[row[idx] for idx in keep] for row in rows]
    return new_columns, new_rows


# ─── Main Entry Point ────────────────────────────────────────────────────────


def recover_table(
    text: str | Sequence[str],
    row_split: str = DEFAULT_ROW_SPLIT,
    newline_marker: str = DEFAULT_NEWLINE_MARKER,
    *,
    split_line_breaks: bool | None = None,
    row_rules: Sequence[RowRule] = DEFAULT_ROW_RULES,
) -> RecoveredTable:
    """Recover a table (header + data rows) from a delimited text response.

    Args:
        text: The LLM response.  A non-empty sequence is also accepted, but
            only its first element is processed.
        row_split: Literal field separator between cells.
        newline_marker: Literal row separator; defaults to the escaped
            two-character ``\\n`` that some APIs return.
        split_line_breaks: Also treat real line breaks as row separators.
            None (the default) does so only for the default marker.
        row_rules: Degeneracy rules applied after the header and blank
            columns are taken out, in order.

    Returns a RecoveredTable.  If every data row is pruned the table is
    header-only (``is_empty`` is True); this is not an error.

    Raises StructuralMismatchError when lines have differing field counts.
    """
    if not row_split:
        raise ValueError("row_split must be a non-empty string")
    if not newline_marker:
        raise ValueError("newline_marker must be a non-empty string")
    raw = _first_text(text)

    # ── 1-3. Build a trimmed rectangular grid ───────────────────────────────
    lines = split_lines(raw, newline_marker, split_line_breaks)
    rows = split_fields(lines, row_split)
    rows = strip_edge_artifacts(rows, row_split)
    logger.debug("Split response into %d rows x %d fields", len(rows), len(rows[0]))

    # ── 4. Separator rows must not become the header ────────────────────────
    rows = drop_rows(rows, is_identical_row)
    if not rows:
        # Same shape as empty input
        logger.warning("Every line was pruned before a header could be taken")
        return RecoveredTable(columns=[""], rows=[])

    # ── 5. Header ───────────────────────────────────────────────────────────
    columns, rows = rows[0], rows[1:]

    # ── 6. Blank columns ────────────────────────────────────────────────────
    columns, rows = drop_blank_columns(columns, rows)

    # ── 7-9. Remaining degeneracy rules ─────────────────────────────────────
    for rule in row_rules:
        rows = drop_rows(rows, rule)

    logger.debug("Recovered table with %d columns and %d rows", len(columns), len(rows))
    return RecoveredTable(columns=columns, rows=rows)
