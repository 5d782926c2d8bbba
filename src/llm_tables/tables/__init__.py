"""Heuristic recovery of delimited tables from free-form LLM responses.

Submodules:
  patterns    -- delimiter defaults and constant tuples
  rules       -- degeneracy rules (pure row / column predicates)
  schema      -- RecoveredTable Pydantic model and StructuralMismatchError
  pipeline    -- recover_table() entry point
  formatting  -- CSV / JSON / markdown rendering and re-serialisation
"""
