"""Artistic styles for illustration requests."""

from __future__ import annotations

from enum import Enum


class Style(Enum):
    """How an illustration should look."""

    VECTOR = "VECTOR"
    REALISTIC = "REALISTIC"
    ARTISTIC = "ARTISTIC"

    def prompt(self) -> str:
        """Return the system prompt for this style."""
        return _PROMPTS[self]

    @classmethod
    def from_str(cls, s: str) -> Style | None:
        """Parse a style name case-insensitively; None if unknown."""
        try:
            return cls(s.upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


_PROMPTS: dict[Style, str] = {
    Style.VECTOR: (
        "Use a vector art style. Minimalist, clean, and sharp, vector artwork is comprised "
        "of straight lines and\npoints with intentional curves."
    ),
    Style.REALISTIC: (
        "Use a realistic art style. Detailed, natural, and most resembling what your prompt "
        "would look like in real life."
    ),
    Style.ARTISTIC: (
        "Use an artistic style. Creative, stylistic, and opinionated. Pair with more samples "
        "to generate several different styles."
    ),
}