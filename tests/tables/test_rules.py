"""Unit tests for the degeneracy rules.

Each rule is a pure predicate, so every one is tested in isolation here;
their combined order is covered in test_pipeline.py.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

from llm_tables.tables.rules import (
    DEFAULT_ROW_RULES,
    is_blank_column,
    is_identical_row,
    is_single_character_after_first_row,
    is_single_character_row,
    rule_name,
)

# ===========================================================================
# is_identical_row tests
# ===========================================================================


class TestIsIdenticalRow:

    def test_markdown_separator(self):
        assert is_identical_row(["---", "---", "---"]) is True

    def test_blank_row(self):
        assert is_identical_row(["", ""]) is True

    def test_repeated_values(self):
        assert is_identical_row(["n/a", "n/a"]) is True

    def test_distinct_values(self):
        assert is_identical_row(["California", "39237836"]) is False

    def test_separator_with_blank_edges(self):
        """Edge blanks keep a split markdown separator from qualifying before column pruning."""
        assert is_identical_row(["", "---", "---", ""]) is False

    def test_single_cell_never_identical(self):
        assert is_identical_row(["---"]) is False

    def test_empty_row(self):
        assert is_identical_row([]) is False


# ===========================================================================
# is_single_character_row tests
# ===========================================================================


class TestIsSingleCharacterRow:

    def test_uneven_dashes(self):
        assert is_single_character_row(["--", "----", "-"]) is True

    def test_single_cell_of_dashes(self):
        assert is_single_character_row(["-----"]) is True

    def test_blank_cells_ignored_in_concatenation(self):
        assert is_single_character_row(["--", ""]) is True

    def test_colon_anchored_not_caught(self):
        assert is_single_character_row([":---", ":----"]) is False

    def test_all_blank(self):
        """Zero distinct characters is not one."""
        assert is_single_character_row(["", ""]) is False

    def test_data_row(self):
        assert is_single_character_row(["Texas", "30028194"]) is False


# ===========================================================================
# is_single_character_after_first_row tests
# ===========================================================================


class TestIsSingleCharacterAfterFirstRow:

    def test_colon_anchored(self):
        assert is_single_character_after_first_row([":---", ":----"]) is True

    def test_mixed_anchor(self):
        assert is_single_character_after_first_row([":---", "----"]) is True

    def test_trailing_colon_kept(self):
        assert is_single_character_after_first_row([":---:", ":---"]) is False

    def test_one_character_cells(self):
        """Cells of length one contribute nothing once their first character is stripped."""
        assert is_single_character_after_first_row(["1", "2"]) is False

    def test_data_row(self):
        assert is_single_character_after_first_row(["Alice", "42"]) is False


# ===========================================================================
# is_blank_column tests
# ===========================================================================


class TestIsBlankColumn:

    def test_all_blank(self):
        assert is_blank_column(["", "", ""]) is True

    def test_some_values(self):
        assert is_blank_column(["", "x", ""]) is False

    def test_no_cells(self):
        assert is_blank_column([]) is False

    def test_whitespace_is_not_blank(self):
        """Cells are trimmed before this rule runs, so only '' counts."""
        assert is_blank_column([" "]) is False


# ===========================================================================
# Rule ordering
# ===========================================================================


class TestDefaultRowRules:

    def test_order(self):
        assert DEFAULT_ROW_RULES == (is_identical_row, is_single_character_row, is_single_character_after_first_row)

    def test_rule_name(self):
        assert rule_name(is_identical_row) == "is_identical_row"

    def test_rule_name_lambda(self):
        assert rule_name(lambda row: False) == "<lambda>"
