"""LLM construction and prompt templates."""
