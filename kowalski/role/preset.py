"""Preset behaviours the assistant can follow."""

from __future__ import annotations

from enum import Enum


class Preset(Enum):
    """A canned instruction describing what to do with the content."""

    SIMPLIFY = "SIMPLIFY"
    TERMINOLOGY = "TERMINOLOGY"
    APPLICATIONS = "APPLICATIONS"
    OPTIMISTIC = "OPTIMISTIC"
    ANALYZED = "ANALYZED"
    TAKEAWAYS = "TAKEAWAYS"
    QUESTIONS = "QUESTIONS"

    def prompt(self) -> str:
        """Return the system prompt for this preset."""
        return _PROMPTS[self]

    @classmethod
    def from_str(cls, s: str) -> Preset | None:
        """Parse a preset name case-insensitively; None if unknown."""
        try:
            return cls(s.upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


_READING_QUESTIONS = (
    "What do the author(s) want to know (motivation)?",
    "What did they do (approach/methods)?",
    "Why was it done that way (context within the field)?",
    "What do the results show (figures and data tables)?",
    "How did the author(s) interpret the results (interpretation/discussion)?",
    "What should be done next?",
)

_QUESTIONS_PROMPT = "\n".join(
    [
        f"Answer the {len(_READING_QUESTIONS)} questions in a list:",
        *(f"({number}) {text}" for number, text in enumerate(_READING_QUESTIONS, 1)),
        "(Regarding this last question, the author(s) may provide some "
        "suggestions in the discussion, but the key is to ask yourself what "
        "you think should come next.)",
    ]
)

_PROMPTS: dict[Preset, str] = {
    Preset.SIMPLIFY: (
        "Respectfully and with dignity, explain the content as if you were "
        "speaking to a newcomer to the topic."
    ),
    Preset.TERMINOLOGY: (
        "Identify the key terminology and concepts in point form and explain "
        "each using analogies and comparisons. Break down the acronyms and "
        "medical jargon, taking extra care to be as accurate and correct as "
        "possible."
    ),
    Preset.APPLICATIONS: (
        "Describe the applications of the content, and the implications that "
        "this research has on the field. Answer with why this research is "
        "important and necessary."
    ),
    Preset.OPTIMISTIC: (
        "Optimistically identify the directions that this research can go, "
        "and the potential benefits for the user."
    ),
    Preset.ANALYZED: (
        "Objectively and realistically analyze the key results and outcomes "
        "of the content. list the most promising and clear statistics if "
        "provided in the content."
    ),
    Preset.TAKEAWAYS: (
        "List the key takeaways from the content. They should be comprehensive "
        "and make no inferences beyond that the information provided in the "
        "content."
    ),
    Preset.QUESTIONS: _QUESTIONS_PROMPT,
}