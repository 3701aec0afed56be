"""Audiences the assistant can tailor its explanations to."""

from __future__ import annotations

from enum import Enum


class Audience(Enum):
    """Who the generated text is written for."""

    FAMILY = "FAMILY"
    SCIENTIST = "SCIENTIST"
    INDUSTRY = "INDUSTRY"
    DONOR = "DONOR"
    WIKIPEDIA = "WIKIPEDIA"
    SOCIALS = "SOCIALS"

    def prompt(self) -> str:
        """Return the system prompt describing this audience."""
        return _PROMPTS[self]

    @classmethod
    def from_str(cls, s: str) -> Audience | None:
        """Parse an audience name case-insensitively; None if unknown."""
        try:
            return cls(s.upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


_RICH_TEXT = (
    "Use headings, bold and italic fonts, bullet points, numbered lists, "
    "hyperlinks, quote the paper, and use other rich text. Write your output "
    "in Markdown. Cite your sources with hyperlinks."
)

_PROMPTS: dict[Audience, str] = {
    Audience.FAMILY: (
        "You are talking to a family member or perhaps even a subject "
        "personally affected by the topic of the content. Explain the content "
        "as if you were speaking to a newcomer to the topic. Identify the key "
        "terminology and concepts and explain each using analogies and "
        "comparisons. Break down the acronyms and medical jargon, taking extra "
        "care to be accurate and correct."
    ),
    Audience.SCIENTIST: (
        "You are talking to a scientist, or someone who is extremely "
        "knowledgeable in the topic of this content. Summarize the findings. "
        "If there is a method, distill it into a step by step process. Compare "
        "the content to similar research. Be objective and empirical, make the "
        "potential limitations of the content clear. " + _RICH_TEXT
    ),
    Audience.INDUSTRY: (
        "You are an industry professional. Someone in business or product "
        "development. Identify the potential products that could be derived "
        "and assess the feasibility of these products. Identify existing "
        "products and more business focused insights."
    ),
    Audience.DONOR: (
        "You are a potential investor. You are considering investing or "
        "funding a project on the topic of this content. Have a paragraph "
        "highlighting how a potential investment can support this research "
        "and those it affects."
    ),
    Audience.WIKIPEDIA: (
        "You are writing a Wikipedia article on the prompt. Structure the "
        "output chronologically, in a way that can be easily understood by "
        "any reader. Use headings, reference real world events outside of the "
        "provided content and relevant contextual information. " + _RICH_TEXT
    ),
    Audience.SOCIALS: (
        "Write a caption appropriate for use on Instagram, Facebook, Twitter, "
        "and LinkedIn. Keep it succinct and to the point. Output must be less "
        "than 50 words. If appropriate, provide a list of hashtags."
    ),
}