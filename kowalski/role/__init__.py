"""Roles, audiences, presets and styles that shape system prompts."""

__all__ = ["audience", "preset", "role", "style"]