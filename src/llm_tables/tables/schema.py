"""Pydantic model for a table recovered from an LLM text response.

The model_validator guarantees the grid is rectangular: every data row has
exactly len(columns) cells.  Column names are kept as-is, duplicates
included, so positional access through ``rows`` is always lossless.
"""

from pydantic import BaseModel, model_validator


class StructuralMismatchError(ValueError):
    """Raised when the split lines of a response do not share one field count.

    Padding or truncating would silently misalign cells, so the mismatch is
    surfaced to the caller instead.
    """

    def __init__(self, expected: int, mismatched: dict[int, int]):
        self.expected = expected
        self.mismatched = mismatched
        details = ", ".join(f"line {idx} has {count}" for idx, count in mismatched.items())
        super().__init__(f"Cannot build a rectangular table: expected {expected} fields per line, but {details}")


class RecoveredTable(BaseModel):
    """Header plus data rows recovered from a delimited text blob."""

    columns: list[str]
    rows: list[list[str]]

    @model_validator(mode="after")
    def validate_row_widths(self) -> "RecoveredTable":
        """Ensure every data row has exactly len(columns) cells."""
        n_cols = len(self.columns)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching columns)")
        return self

    @property
    def is_empty(self) -> bool:
        """True when every data row was pruned (header-only table)."""
        return not self.rows

    def records(self) -> list[dict[str, str]]:
        """Return one {column: value} dict per row.

        Repeated column names are not renamed; the rightmost cell wins.
        """
        return [dict(zip(self.columns, row)) for row in self.rows]

    def column(self, name: str) -> list[str]:
        """Return the values of the first column called *name*."""
        try:
            idx = self.columns.index(name)
        except ValueError as exc:
            raise KeyError(name) from exc
        return [row[idx] for row in self.rows]
