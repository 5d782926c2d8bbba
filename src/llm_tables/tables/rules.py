"""Degeneracy rules for recovered table rows and columns.

Each rule is a pure predicate: it takes one row (or one column's data cells)
and returns True when that row or column carries no information and should
be pruned.  Markdown separator rows such as ``|---|---|`` or ``|:--|:---|``
are the main target.  The pipeline applies these in a fixed order; see
pipeline.py.
"""

from typing import Callable

# A row rule returns True when the row should be dropped
RowRule = Callable[[list[str]], bool]


def rule_name(rule: RowRule) -> str:
    """Readable name for log lines."""
    return getattr(rule, "__name__", repr(rule))


# ─── Row Rules ───────────────────────────────────────────────────────────────


def is_identical_row(row: list[str]) -> bool:
    """Return True if the row has two or more cells and they all hold the same value.

    Catches separator rows like ``["---", "---"]`` and blank rows.  A
    single-cell row is never identical by this rule, otherwise a one-column
    table would lose every row.
    """
    if len(row) < 2:
        return False
    return all(cell == row[0] for cell in row)


def is_single_character_row(row: list[str]) -> bool:
    """Return True if the row's concatenated content uses exactly one distinct character.

    Catches separators with uneven dash counts, e.g. ``["--", "----", "-"]``.
    """
    return len(set("".join(row))) == 1


def is_single_character_after_first_row(row: list[str]) -> bool:
    """Return True if the row collapses to one distinct character once each cell loses its first character.

    Catches colon-anchored separators, e.g. ``[":---", ":----"]``.
    """
    return len(set("".join(cell[1:] for cell in row))) == 1


# Rules applied after header extraction, in order (pipeline steps 7-9)
DEFAULT_ROW_RULES: tuple[RowRule, ...] = (
    is_identical_row,
    is_single_character_row,
    is_single_character_after_first_row,
)


# ─── Column Rules ────────────────────────────────────────────────────────────


def is_blank_column(cells: list[str]) -> bool:
    """Return True if every data cell in the column is the empty string.

    An empty column (no data rows) is not blank, so a header-only table keeps
    its columns.
    """
    return bool(cells) and all(cell == "" for cell in cells)