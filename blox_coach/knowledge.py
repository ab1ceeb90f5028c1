# knowledge.py
"""Knowledge-base schema, parsing and multi-file loading.

Every field is optional. Malformed values are coerced or defaulted at parse
time, so downstream code never has to guard against missing keys.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def _str(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (str, int, float)):
        return str(v).strip()
    return ""


def _str_list(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (str, int, float)):
        s = _str(v)
        return [s] if s else []
    if isinstance(v, (list, tuple)):
        out = []
        for item in v:
            s = _str(item)
            if s:
                out.append(s)
        return out
    return []


def _dicts(v: Any) -> List[Dict[str, Any]]:
    if not isinstance(v, list):
        return []
    return [x for x in v if isinstance(x, dict)]


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

@dataclass
class ComboEntry:
    title: str = ""
    inputs: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "ComboEntry":
        return cls(title=_str(d.get("title")), inputs=_str_list(d.get("inputs")), notes=_str_list(d.get("notes")))


@dataclass
class CounterEntry:
    enemy: str = ""
    tips: List[str] = field(default_factory=list)
    use: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "CounterEntry":
        return cls(enemy=_str(d.get("enemy")), tips=_str_list(d.get("tips")), use=_str_list(d.get("use")))


@dataclass
class BuildEntry:
    label: str = ""
    style: str = ""
    notes: List[str] = field(default_factory=list)
    accessories: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "BuildEntry":
        return cls(
            label=_str(d.get("label")),
            style=_str(d.get("style")),
            notes=_str_list(d.get("notes")),
            accessories=_str_list(d.get("accessories")),
        )


@dataclass
class RaceEntry:
    name: str = ""
    v4: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "RaceEntry":
        return cls(
            name=_str(d.get("name")),
            v4=_str(d.get("v4")),
            strengths=_str_list(d.get("strengths")),
            weaknesses=_str_list(d.get("weaknesses")),
            tips=_str_list(d.get("tips")),
        )


@dataclass
class PlaystyleEntry:
    name: str = ""
    summary: str = ""
    tips: List[str] = field(default_factory=list)
    drills: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "PlaystyleEntry":
        return cls(
            name=_str(d.get("name")),
            summary=_str(d.get("summary")),
            tips=_str_list(d.get("tips")),
            drills=_str_list(d.get("drills")),
        )


@dataclass
class FruitEntry:
    name: str = ""
    type: str = ""
    moves: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, d: Dict[str, Any]) -> "FruitEntry":
        return cls(
            name=_str(d.get("name")),
            type=_str(d.get("type")),
            moves=_str_list(d.get("moves")),
            tips=_str_list(d.get("tips")),
        )


@dataclass
class KnowledgeBase:
    combos: List[ComboEntry] = field(default_factory=list)
    counters: List[CounterEntry] = field(default_factory=list)
    builds: List[BuildEntry] = field(default_factory=list)
    races: List[RaceEntry] = field(default_factory=list)
    playstyles: List[PlaystyleEntry] = field(default_factory=list)
    fruits: List[FruitEntry] = field(default_factory=list)
    guides: Dict[str, str] = field(default_factory=dict)
    about: str = ""
    fundamentals: str = ""

    def is_empty(self) -> bool:
        return not (
            self.combos or self.counters or self.builds or self.races
            or self.playstyles or self.fruits or self.guides
            or self.about or self.fundamentals
        )

    @property
    def theory(self) -> str:
        return self.guides.get("theory", "")

    def merge(self, other: "KnowledgeBase") -> "KnowledgeBase":
        """Lists concatenate, guides merge (other wins per key), free text keeps the first value."""
        guides = dict(self.guides)
        guides.update(other.guides)
        return KnowledgeBase(
            combos=self.combos + other.combos,
            counters=self.counters + other.counters,
            builds=self.builds + other.builds,
            races=self.races + other.races,
            playstyles=self.playstyles + other.playstyles,
            fruits=self.fruits + other.fruits,
            guides=guides,
            about=self.about or other.about,
            fundamentals=self.fundamentals or other.fundamentals,
        )


def _guides(v: Any) -> Dict[str, str]:
    if not isinstance(v, dict):
        return {}
    out: Dict[str, str] = {}
    for k, txt in v.items():
        name = _str(k).lower()
        body = _str(txt) if not isinstance(txt, list) else "\n".join(_str_list(txt))
        if name and body:
            out[name] = body
    return out


def _free_text(v: Any) -> str:
    if isinstance(v, list):
        return "\n".join(_str_list(v))
    return _str(v)


def parse_kb(data: Any) -> KnowledgeBase:
    """Build a KnowledgeBase from decoded JSON. Anything unexpected becomes empty."""
    if not isinstance(data, dict):
        return KnowledgeBase()
    return KnowledgeBase(
        combos=[ComboEntry.parse(d) for d in _dicts(data.get("combos"))],
        counters=[CounterEntry.parse(d) for d in _dicts(data.get("counters"))],
        builds=[BuildEntry.parse(d) for d in _dicts(data.get("builds"))],
        races=[RaceEntry.parse(d) for d in _dicts(data.get("races"))],
        playstyles=[PlaystyleEntry.parse(d) for d in _dicts(data.get("playstyles"))],
        fruits=[FruitEntry.parse(d) for d in _dicts(data.get("fruits"))],
        guides=_guides(data.get("guides")),
        about=_free_text(data.get("about")),
        fundamentals=_free_text(data.get("fundamentals")),
    )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class KBLoadError(Exception):
    pass


def load_kb_file(path: str) -> KnowledgeBase:
    """Read and parse one KB json file. Raises KBLoadError when unreadable."""
    if not path or not os.path.isfile(path):
        raise KBLoadError(f"not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise KBLoadError(f"unreadable: {path}: {e}") from e
    return parse_kb(data)


def load_kb(paths: Optional[Iterable[str]], *, strict: bool = False) -> KnowledgeBase:
    """Load and merge KB files in order.

    Lenient mode skips files that fail to load. Strict mode gives up on the
    whole merge and returns an empty KB. Never raises.
    """
    kb = KnowledgeBase()
    loaded = 0
    for p in paths or []:
        try:
            part = load_kb_file(p)
        except KBLoadError as e:
            print(f"[coach kb] {e}", flush=True)
            if strict:
                print("[coach kb] strict mode: discarding KB, canned facts only", flush=True)
                return KnowledgeBase()
            continue
        kb = kb.merge(part)
        loaded += 1

    if not loaded:
        print("[coach kb] no KB loaded; canned facts only", flush=True)
    return kb
