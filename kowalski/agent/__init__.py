"""Agents that keep conversations and stream chat replies."""

__all__ = ["academic", "base", "errors", "general", "tooling", "types"]