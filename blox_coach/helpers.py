# helpers.py
"""Text normalisation and message parsing helpers."""

import re
from typing import Any, Dict, List, Tuple


# ---------------------------------------------------------------------------
# Text Normalisation
# ---------------------------------------------------------------------------

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WS_RE = re.compile(r"\s+")


def lower(text: str) -> str:
    return (text or "").lower()


def normalize_text(text: str) -> str:
    """Lowercase, drop everything outside [a-z0-9 whitespace], collapse spaces."""
    s = _NON_ALNUM_RE.sub(" ", lower(text))
    return _WS_RE.sub(" ", s).strip()


def clip(text: str, max_chars: int) -> str:
    s = (text or "").strip()
    if max_chars <= 0 or len(s) <= max_chars:
        return s
    return s[:max_chars].rstrip()


def cap(word: str) -> str:
    w = str(word or "")
    return w[:1].upper() + w[1:]


# ---------------------------------------------------------------------------
# Message Parsing
# ---------------------------------------------------------------------------

def _extract_text_from_blocks(blocks: List[Dict[str, Any]]) -> str:
    parts: List[str] = []
    for b in blocks:
        if not isinstance(b, dict):
            continue
        if b.get("type") in ("text", "input_text"):
            t = b.get("text")
            if isinstance(t, str) and t.strip():
                parts.append(t.strip())
    return "\n".join(parts).strip()


def last_user_message(messages: List[Dict[str, Any]]) -> Tuple[str, int]:
    """Extract the last user message text and its index."""
    for i in range(len(messages) - 1, -1, -1):
        m = messages[i]
        if not isinstance(m, dict) or m.get("role") != "user":
            continue
        c = m.get("content", "")
        if isinstance(c, str):
            return c, i
        if isinstance(c, list):
            return _extract_text_from_blocks(c), i
        return "", i
    return "", -1
