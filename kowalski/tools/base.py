"""Core tool types: inputs, outputs, task routing and the tool chain."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from kowalski.tools.exceptions import NoSuitableToolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolInput:
    """What a tool is asked to work on."""

    query: str
    context: str | None = None

    @classmethod
    def with_context(cls, query: str, context: str) -> ToolInput:
        """Create an input carrying extra context."""
        return cls(query=query, context=context)

    def __str__(self) -> str:
        return f"{self.query}:{self.context or ''}"


@dataclass
class ToolOutput:
    """What a tool produced, with optional metadata and the source it came from."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source: str | None = None


class Tool(ABC):
    """A named capability that turns a ToolInput into a ToolOutput."""

    name: str = ""
    description: str = ""

    @abstractmethod
    async def execute(self, tool_input: ToolInput) -> ToolOutput:
        """Run the tool on the given input."""


class TaskType(Enum):
    """The kind of work a query asks for."""

    SEARCH = "Search"
    BROWSE_DYNAMIC = "BrowseDynamic"
    SCRAP_STATIC = "ScrapStatic"
    UNKNOWN = "Unknown"


_SEARCH_PREFIXES = ("search:", "find:", "lookup:")


class TaskRouter:
    """Decides which kind of task a query represents."""

    def __init__(self) -> None:
        self.patterns: dict[str, TaskType] = {
            "search:": TaskType.SEARCH,
            "find:": TaskType.SEARCH,
            "lookup:": TaskType.SEARCH,
            "twitter.com": TaskType.BROWSE_DYNAMIC,
            "linkedin.com": TaskType.BROWSE_DYNAMIC,
            "facebook.com": TaskType.BROWSE_DYNAMIC,
            "github.com": TaskType.SCRAP_STATIC,
            "docs.rs": TaskType.SCRAP_STATIC,
        }

    def determine_task_type(self, text: str) -> TaskType:
        """Classify a query as a search, a dynamic page, a static page or unknown."""
        if text.startswith(_SEARCH_PREFIXES):
            return TaskType.SEARCH
        if text.startswith("http"):
            for pattern, task_type in self.patterns.items():
                if pattern in text:
                    return task_type
            return TaskType.SCRAP_STATIC
        return TaskType.UNKNOWN


class ToolChain:
    """Routes each input to the first tool registered for its task type."""

    def __init__(self) -> None:
        self._tools: dict[TaskType, list[Tool]] = {}
        self.router = TaskRouter()

    def add_tool(self, tool: Tool, task_types: list[TaskType]) -> None:
        """Register a tool for each of the given task types."""
        for task_type in task_types:
            self._tools.setdefault(task_type, []).append(tool)

    async def execute(self, tool_input: ToolInput) -> ToolOutput:
        """Run the input through the tool for its task type."""
        task_type = self.router.determine_task_type(tool_input.query)
        tools = self._tools.get(task_type)
        if tools:
            tool = tools[0]
            logger.debug("Using tool %s for task type %s", tool.name, task_type.value)
            return await tool.execute(tool_input)
        raise NoSuitableToolError(
            f"No suitable tool found for task type {task_type.value}"
        )