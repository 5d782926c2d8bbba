"""Prompt dispatch to LLM chat APIs (Gemini, OpenAI, Azure OpenAI)."""
