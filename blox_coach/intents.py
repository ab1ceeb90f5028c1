# intents.py
"""Ordered keyword rules mapping a message to one intent.

Rules are evaluated top to bottom and the first match wins. The order is
load-bearing: "counter this combo" must stay a counter request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .helpers import lower


class IntentKind:
    TOGGLE = "toggle"
    ELABORATE = "elaborate"
    COUNTER = "counter"
    COMBO = "combo"
    USAGE = "usage"
    BUILD = "build"
    KENTRICK = "kentrick"
    PLAYSTYLE = "playstyle"
    GREET = "greet"
    FREE = "free"


@dataclass(frozen=True)
class Intent:
    kind: str
    on: Optional[bool] = None


_DEEP_ON_RE = re.compile(r"^deep mode on\b")
_DEEP_OFF_RE = re.compile(r"^deep mode off\b")
_ELABORATE_RE = re.compile(r"(elaborate|explain more|go deeper|more detail|in depth|details)\b")
_COUNTER_RE = re.compile(r"\b(counter|vs|beat|against)\b")
_COMBO_RE = re.compile(r"\b(combo|route|string)\b")
_USAGE_RE = re.compile(r"\bhow to use\b|\bhow do i use\b|\busage\b|\bplay with\b")
_BUILD_RE = re.compile(r"\bbest build\b|\bbuild\b|\bstat\b|\bdistribution\b|\baccessor|\bgear\b")
_KENTRICK_RE = re.compile(r"\bken.?trick|\binstinct trick\b|\btoggle instinct\b|\bken\b")
_STYLE_WORD_RE = re.compile(r"\b(passive|aggressive)\b")
_STYLE_CONTEXT_RE = re.compile(r"\b(playstyle|style)\b")
_GREET_RE = re.compile(r"\b(yo|hey|hello|hi|wsp|sup)\b")


def _toggle(s: str) -> Optional[Intent]:
    if _DEEP_ON_RE.search(s):
        return Intent(IntentKind.TOGGLE, on=True)
    if _DEEP_OFF_RE.search(s):
        return Intent(IntentKind.TOGGLE, on=False)
    return None


def _when(pattern: "re.Pattern[str]", kind: str) -> Callable[[str], Optional[Intent]]:
    def rule(s: str) -> Optional[Intent]:
        return Intent(kind) if pattern.search(s) else None
    return rule


def _playstyle(s: str) -> Optional[Intent]:
    if _STYLE_WORD_RE.search(s) and _STYLE_CONTEXT_RE.search(s):
        return Intent(IntentKind.PLAYSTYLE)
    return None


INTENT_RULES: Tuple[Tuple[str, Callable[[str], Optional[Intent]]], ...] = (
    ("toggle", _toggle),
    ("elaborate", _when(_ELABORATE_RE, IntentKind.ELABORATE)),
    ("counter", _when(_COUNTER_RE, IntentKind.COUNTER)),
    ("combo", _when(_COMBO_RE, IntentKind.COMBO)),
    ("usage", _when(_USAGE_RE, IntentKind.USAGE)),
    ("build", _when(_BUILD_RE, IntentKind.BUILD)),
    ("kentrick", _when(_KENTRICK_RE, IntentKind.KENTRICK)),
    ("playstyle", _playstyle),
    ("greet", _when(_GREET_RE, IntentKind.GREET)),
)


def classify(text: str) -> Intent:
    s = lower(text).strip()
    for _, rule in INTENT_RULES:
        hit = rule(s)
        if hit is not None:
            return hit
    return Intent(IntentKind.FREE)
