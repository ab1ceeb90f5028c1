# guards.py
"""Fixed corrections that pre-empt intent routing."""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from .helpers import lower

SPRITE_CORRECTION = (
    "There’s no Sprite race in Blox Fruits. Valid races include Angel, Cyborg, Draco, Ghoul, Rabbit."
)
AURA_CORRECTION = (
    "Aura (Haki) lets you hit Elemental users — it doesn’t buff damage. Keep it on to bypass Elementals."
)
INSTINCT_CORRECTION = (
    "Instinct helps with dodging/reading, not stats. Use **Ken Tricking** (timed ON/OFF) "
    "to survive combos and punish endlag."
)

_SPRITE_RE = re.compile(r"\bsprite\b")
_AURA_RE = re.compile(r"haki|aura")
_INSTINCT_RE = re.compile(r"\binstinct\b")
_KEN_OR_TRICK_RE = re.compile(r"ken|trick")


def _sprite(s: str) -> Optional[str]:
    return SPRITE_CORRECTION if _SPRITE_RE.search(s) else None


def _aura(s: str) -> Optional[str]:
    return AURA_CORRECTION if _AURA_RE.search(s) else None


def _instinct(s: str) -> Optional[str]:
    if _INSTINCT_RE.search(s) and not _KEN_OR_TRICK_RE.search(s):
        return INSTINCT_CORRECTION
    return None


GUARDS: Tuple[Callable[[str], Optional[str]], ...] = (_sprite, _aura, _instinct)


def guard_reply(text: str) -> Optional[str]:
    """Return a corrective statement if the message trips a guard, else None."""
    s = lower(text)
    for guard in GUARDS:
        out = guard(s)
        if out:
            return out
    return None
