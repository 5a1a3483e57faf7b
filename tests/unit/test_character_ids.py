import pytest

from framecoach.core.data.characters import (
    CHARACTER_ID_OVERRIDES,
    fallback_character_id,
    resolve_character_id,
)
from framecoach.core.errors import ResolutionError


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Devil Jin", "devil-jin"),
        ("Sergei Dragunov", "dragunov"),
        ("Jin Kazama", "jin"),
        ("Azucena Milagros Ortiz Castillo", "azucena"),
        ("devil jin", "devil-jin"),
        ("  Marshall Law ", "law"),
    ],
)
def test_overrides(name: str, expected: str) -> None:
    assert resolve_character_id(name) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Kazuya", "kazuya"),
        ("Jack-8", "jack-8"),
        ("Paul Phoenix", "paul-phoenix"),
        ("Leroy Smith!", "leroy-smith"),
        ("Dragunov", "dragunov"),
        ("  Kazuya  ", "kazuya"),
        ("PAUL PHOENIX", "paul-phoenix"),
    ],
)
def test_fallback(name: str, expected: str) -> None:
    assert resolve_character_id(name) == expected


def test_fallback_only_keeps_id_characters() -> None:
    assert fallback_character_id("King (T8)") == "king-t8"


def test_every_override_is_a_valid_id() -> None:
    for character_id in CHARACTER_ID_OVERRIDES.values():
        assert fallback_character_id(character_id) == character_id


@pytest.mark.parametrize("name", ["", "   ", "???", "- -"])
def test_unresolvable_names(name: str) -> None:
    with pytest.raises(ResolutionError) as exc_info:
        resolve_character_id(name)
    assert exc_info.value.display_name == name
