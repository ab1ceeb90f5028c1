# lexicon.py
"""Canonical game entities and the surface forms players type for them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class AliasEntry:
    canonical: str
    kind: str
    aliases: Tuple[str, ...]


def _entries(kind: str, table: Iterable[Tuple[str, Tuple[str, ...]]]) -> List[AliasEntry]:
    return [AliasEntry(canonical=c, kind=kind, aliases=tuple(a.lower() for a in al)) for c, al in table]


# Declaration order matters: detection returns canonicals in this order.
LEXICON: Tuple[AliasEntry, ...] = tuple(
    _entries("fruit", [
        ("buddha", ("buddha",)),
        ("dough", ("dough", "doe", "doh")),
        ("ice", ("ice",)),
        ("portal", ("portal",)),
        ("kitsune", ("kitsune", "fox")),
        ("sand", ("sand",)),
        ("dragon", ("dragon",)),
        ("gas", ("gas",)),
        ("bomb", ("bomb",)),
        ("gravity", ("gravity", "grav")),
        ("blizzard", ("blizzard",)),
        ("venom", ("venom",)),
        ("dark", ("dark",)),
        ("quake", ("quake",)),
        ("rumble", ("rumble",)),
    ])
    + _entries("style", [
        ("godhuman", ("godhuman", "gh")),
        ("sanguine art", ("sanguine", "sanguine art")),
        ("electric claw", ("eclaw", "electric claw", "e-claw")),
        ("superhuman", ("superhuman",)),
    ])
    + _entries("sword", [
        ("cursed dual katana", ("cdk", "cursed dual katana")),
        ("spikey trident", ("spikey trident", "trident")),
        ("shark anchor", ("shark anchor", "anchor")),
        ("dragon trident", ("dragon trident", "dt")),
        ("gravity cane", ("gravity cane",)),
        ("yama", ("yama",)),
    ])
    + _entries("gun", [
        ("acidum rifle", ("acidum rifle", "acidum")),
        ("kabucha", ("kabucha",)),
        ("serpent bow", ("serpent bow", "serpent")),
        ("venom bow", ("venom bow",)),
        ("soul guitar", ("soul guitar", "skull guitar", "skull")),
    ])
    + _entries("race", [
        ("angel v4", ("angel v4", "angel")),
        ("cyborg v4", ("cyborg v4", "cyborg")),
        ("draco v4", ("draco v4", "draco")),
        ("ghoul v4", ("ghoul v4", "ghoul")),
        ("rabbit v4", ("rabbit v4", "rabbit", "mink")),
    ])
)


def build_alias_index(entries: Iterable[AliasEntry]) -> Tuple[Tuple[str, str], ...]:
    """Flatten to (alias, canonical) pairs; raises if an alias is claimed twice."""
    owner: Dict[str, str] = {}
    pairs: List[Tuple[str, str]] = []
    for e in entries:
        for alias in e.aliases:
            prev = owner.get(alias)
            if prev is not None and prev != e.canonical:
                raise ValueError(f"alias '{alias}' maps to both '{prev}' and '{e.canonical}'")
            if prev is None:
                owner[alias] = e.canonical
                pairs.append((alias, e.canonical))
    return tuple(pairs)


ALIAS_INDEX: Tuple[Tuple[str, str], ...] = build_alias_index(LEXICON)
CANONICALS: Tuple[str, ...] = tuple(e.canonical for e in LEXICON)
