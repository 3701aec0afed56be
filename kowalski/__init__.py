"""Conversational agents for a local Ollama server."""

__version__ = "0.1.0"

__all__ = ["agent", "config", "conversation", "model", "paper_cleaner", "pdf_reader", "role", "tools"]