"""Roles that decide how the assistant treats the content it is given."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kowalski.role.audience import Audience
from kowalski.role.preset import Preset
from kowalski.role.style import Style


class RoleKind(Enum):
    """The kind of job the assistant is asked to do."""

    TRANSLATOR = "TRANSLATOR"
    ILLUSTRATOR = "ILLUSTRATOR"


_PROMPTS: dict[RoleKind, str] = {
    RoleKind.TRANSLATOR: (
        "You are a highly skilled AI trained in language comprehension and simplification.\n"
        "I would like you to read the following text and simplify it. Do not use first person.\n"
        "Remember the key here is to simplify, not necessarily summarize.\n"
        "Provide only the output don't reply as if you're talking to someone."
    ),
    RoleKind.ILLUSTRATOR: (
        "I would like you to read the following prompt and generate an illustration for it.\n"
        "Use images, pictures and visuals."
    ),
}


@dataclass(frozen=True)
class Role:
    """A role, with the audience and preset of a translator or the style of an illustrator."""

    kind: RoleKind
    audience: Audience | None = None
    preset: Preset | None = None
    style: Style | None = None

    def __post_init__(self) -> None:
        if self.kind is RoleKind.TRANSLATOR and self.style is not None:
            raise ValueError("a translator role has no style")
        if self.kind is RoleKind.ILLUSTRATOR and (
            self.audience is not None or self.preset is not None
        ):
            raise ValueError("an illustrator role has no audience or preset")

    def prompt(self) -> str:
        """Return the system prompt for this role."""
        return _PROMPTS[self.kind]

    @classmethod
    def translator(
        cls, audience: Audience | None = None, preset: Preset | None = None
    ) -> Role:
        """Create a translator role."""
        return cls(RoleKind.TRANSLATOR, audience=audience, preset=preset)

    @classmethod
    def illustrator(cls, style: Style | None = None) -> Role:
        """Create an illustrator role."""
        return cls(RoleKind.ILLUSTRATOR, style=style)

    @classmethod
    def from_str(cls, s: str) -> Role | None:
        """Parse a role name case-insensitively; None if unknown."""
        try:
            return cls(RoleKind(s.upper()))
        except ValueError:
            return None

    def system_prompts(self) -> list[str]:
        """Return the role prompt followed by the audience, preset and style prompts that apply."""
        extras = (self.audience, self.preset, self.style)
        return [self.prompt(), *(extra.prompt() for extra in extras if extra is not None)]

    def __str__(self) -> str:
        return self.kind.value