"""An agent that reads academic papers and discusses them."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from kowalski.agent.base import BaseAgent
from kowalski.agent.errors import AgentToolError
from kowalski.config import Config
from kowalski.paper_cleaner import PaperCleaner, PaperCleanerError
from kowalski.pdf_reader import PdfReader, PdfReaderError


@dataclass
class PaperMetadata:
    """Descriptive data about a paper."""

    title: str = ""
    authors: list[str] = field(default_factory=list)
    abstract_text: str = ""
    keywords: list[str] = field(default_factory=list)


class AcademicAgent(BaseAgent):
    """Reads PDF papers, cleans their text and sends it to the model."""

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(
            config,
            "Academic Agent",
            "A sophisticated paper processor that pretends to understand research "
            "better than you do",
            client,
        )
        self.pdf_reader = PdfReader()
        self.paper_cleaner = PaperCleaner()

    def _read(self, path: str) -> str:
        try:
            return self.pdf_reader.read_pdf(path)
        except PdfReaderError as exc:
            raise AgentToolError(exc) from exc

    def _clean(self, text: str) -> str:
        try:
            return self.paper_cleaner.clean(text)
        except PaperCleanerError as exc:
            raise AgentToolError(exc) from exc

    async def prepare_content(self, content: str) -> str:
        """Replace a path ending in .pdf with the cleaned text of that paper."""
        if content.endswith(".pdf"):
            return self._clean(self._read(content))
        return content

    def process_paper(self, path: str) -> str:
        """Return the cleaned text of a paper."""
        return self._clean(self._read(path))

    def extract_metadata(self, path: str) -> PaperMetadata:
        """Return metadata for a paper; the whole text serves as its abstract."""
        return PaperMetadata(abstract_text=self._read(path))