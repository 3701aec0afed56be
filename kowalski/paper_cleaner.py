"""Clean up text extracted from academic papers."""

from __future__ import annotations

REFERENCE_HEADERS = (
    "References",
    "REFERENCES",
    "Bibliography",
    "BIBLIOGRAPHY",
    "References and Notes",
    "REFERENCES AND NOTES",
)


class PaperCleanerError(Exception):
    """Raised when paper text cannot be cleaned."""

    prefix = "Paper cleaner error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class InvalidInputError(PaperCleanerError):
    """The text given to the cleaner is not usable."""

    prefix = "Invalid input"


class ProcessingError(PaperCleanerError):
    """Cleaning failed part way through."""

    prefix = "Processing error"


def remove_references_section(text: str) -> str:
    """Return the text before the earliest references header, or all of it if there is none."""
    positions = [pos for pos in (text.find(h) for h in REFERENCE_HEADERS) if pos >= 0]
    return text[: min(positions)] if positions else text


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def fix_hyphenated_line_breaks(text: str) -> str:
    """Join words split by a hyphen at the end of a line and trim every line."""
    parts: list[str] = []
    lines = iter(_lines(text))
    for line in lines:
        current = line.strip()
        if current.endswith("-"):
            following = next(lines, None)
            if following is not None:
                parts.append(current[:-1] + following.strip() + " ")
                continue
        parts.append(current + "\n")
    return "".join(parts).strip()


class PaperCleaner:
    """Removes reference sections and repairs hyphenated line breaks."""

    def clean(self, text: str) -> str:
        """Return the cleaned text; raise InvalidInputError for empty input."""
        if not text:
            raise InvalidInputError("Input text cannot be empty")
        return fix_hyphenated_line_breaks(remove_references_section(text))