# entities.py
"""Whole-word entity detection over the alias lexicon."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from .lexicon import ALIAS_INDEX, CANONICALS

# Hyphens survive so "e-claw" stays one token.
_PUNCT_RE = re.compile(r"[^a-z0-9\s\-]")


@lru_cache(maxsize=512)
def _alias_re(alias: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\S)" + re.escape(alias) + r"(?!\S)")


def _words(text: str) -> str:
    return " ".join(_PUNCT_RE.sub(" ", (text or "").lower()).split())


def detect_entities(
    text: str,
    alias_index: Iterable[Tuple[str, str]] = ALIAS_INDEX,
    order: Iterable[str] = CANONICALS,
) -> List[str]:
    """Return canonical entities mentioned in text, in lexicon order, without duplicates.

    Matching is case-insensitive and whole-word, so "sanding" never matches "sand";
    punctuation counts as a word boundary. Longer aliases are matched first and
    consume their words: "dragon trident" does not also report "dragon".
    """
    s = _words(text)
    found = set()
    for alias, canon in sorted(alias_index, key=lambda p: -len(p[0])):
        pat = _alias_re(alias)
        if pat.search(s):
            found.add(canon)
            s = pat.sub("|", s)
    return [c for c in order if c in found]


def first_entity_in(text: str) -> Optional[str]:
    hits = detect_entities(text)
    return hits[0] if hits else None
