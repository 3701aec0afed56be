import pytest

from kowalski.role.audience import Audience
from kowalski.role.preset import Preset
from kowalski.role.role import Role, RoleKind
from kowalski.role.style import Style


def test_role_prompts():
    assert "simplify" in Role(RoleKind.TRANSLATOR).prompt()
    assert "illustration" in Role(RoleKind.ILLUSTRATOR).prompt()


def test_role_from_str():
    assert Role.from_str("TRANSLATOR") == Role(RoleKind.TRANSLATOR)
    assert Role.from_str("translator") == Role(RoleKind.TRANSLATOR)
    assert Role.from_str("ILLUSTRATOR") == Role(RoleKind.ILLUSTRATOR)
    assert Role.from_str("UNKNOWN") is None


def test_translator_with_config():
    role = Role.translator(Audience.SCIENTIST, Preset.QUESTIONS)
    assert role.audience is Audience.SCIENTIST
    assert role.preset is Preset.QUESTIONS
    assert role.style is None


def test_illustrator_with_style():
    role = Role.illustrator(Style.VECTOR)
    assert role.style is Style.VECTOR
    assert role.audience is None
    assert role.preset is None


def test_display():
    assert str(Role.translator()) == "TRANSLATOR"
    assert str(Role.illustrator()) == "ILLUSTRATOR"


def test_system_prompts_order_for_translator():
    role = Role.translator(Audience.FAMILY, Preset.SIMPLIFY)
    assert role.system_prompts() == [
        role.prompt(),
        Audience.FAMILY.prompt(),
        Preset.SIMPLIFY.prompt(),
    ]


def test_system_prompts_without_extras():
    role = Role.translator()
    assert role.system_prompts() == [role.prompt()]


def test_system_prompts_for_illustrator():
    role = Role.illustrator(Style.ARTISTIC)
    assert role.system_prompts() == [role.prompt(), Style.ARTISTIC.prompt()]


def test_translator_rejects_style():
    with pytest.raises(ValueError):
        Role(RoleKind.TRANSLATOR, style=Style.VECTOR)


def test_illustrator_rejects_audience():
    with pytest.raises(ValueError):
        Role(RoleKind.ILLUSTRATOR, audience=Audience.DONOR)


def test_roles_are_hashable_and_equal_by_value():
    first = Role.translator(Audience.SCIENTIST, Preset.QUESTIONS)
    second = Role.translator(Audience.SCIENTIST, Preset.QUESTIONS)
    assert first == second
    assert len({first, second}) == 1