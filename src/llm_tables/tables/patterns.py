"""Delimiter defaults and constants for table recovery.

LLM responses encode a table as one string: rows joined by a newline marker,
cells joined by a field separator.  Some APIs return the newline as the
escaped two-character text ``\\n`` rather than a real line break.
"""

import re

# ─── Delimiters ───────────────────────────────────────────────────────────────

# Field separator between cells, as in markdown tables
DEFAULT_ROW_SPLIT = "|"

# Row separator: a literal backslash followed by "n", not a line break
DEFAULT_NEWLINE_MARKER = "\\n"

# Real line breaks, split on in addition to the marker by default
LINE_BREAK_RE = re.compile(r"\r?\n")


# ─── Edge Artifacts ──────────────────────────────────────────────────────────


def leading_artifact(row_split: str) -> str:
    """Boundary delimiter left at the start of a first-column cell, e.g. '| '."""
    return f"{row_split} "


def trailing_artifact(row_split: str) -> str:
    """Boundary delimiter left at the end of a last-column cell, e.g. ' |'."""
    return f" {row_split}"
