"""Send prompts to LLM APIs and recover tables from their text responses."""

from llm_tables.tables.pipeline import recover_table
from llm_tables.tables.schema import RecoveredTable, StructuralMismatchError

__all__ = ["RecoveredTable", "StructuralMismatchError", "recover_table"]
