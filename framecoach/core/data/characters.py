"""Display name -> frame-data character id.

Names whose id is not simply the hyphenated display name are listed
explicitly; everything else goes through ``fallback_character_id``.
"""

from __future__ import annotations

import re
from typing import Final

from framecoach.core.errors import ResolutionError

CHARACTER_ID_OVERRIDES: Final[dict[str, str]] = {
    "Devil Jin": "devil-jin",
    "Sergei Dragunov": "dragunov",
    "Jun Kazama": "jun",
    "Jin Kazama": "jin",
    "Steve Fox": "steve",
    "Ling Xiaoyu": "xiaoyu",
    "Marshall Law": "law",
    "Nina Williams": "nina",
    "Anna Williams": "anna",
    "Armor King": "armor-king",
    "Azucena Milagros Ortiz Castillo": "azucena",
    "Lee Chaolan": "lee",
    "Clive Rosfield": "clive",
    "Eddy Gordo": "eddy",
    "Heihachi Mishima": "heihachi",
    "Lidia Sobieska": "lidia",
}

_OVERRIDES_BY_KEY: Final[dict[str, str]] = {
    name.casefold(): character_id for name, character_id in CHARACTER_ID_OVERRIDES.items()
}

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def fallback_character_id(display_name: str) -> str:
    """Lowercase, spaces to hyphens, drop anything but ``[a-z0-9-]``."""
    return _DISALLOWED.sub("", display_name.lower().replace(" ", "-"))


def resolve_character_id(display_name: str) -> str:
    """Map a display name to a character id.

    Raises ResolutionError only when no usable id can be formed at all; an id
    the source does not know surfaces later as FetchError / DataEmpty.
    """
    name = (display_name or "").strip()
    override = CHARACTER_ID_OVERRIDES.get(name) or _OVERRIDES_BY_KEY.get(name.casefold())
    if override:
        return override

    character_id = fallback_character_id(name)
    if not character_id.strip("-"):
        raise ResolutionError(
            f"Cannot resolve character name {display_name!r}", display_name=display_name
        )
    return character_id
