"""Shared helpers for privacy-safe logging and previews."""

from __future__ import annotations

import hashlib
import re


_EMAIL_RE = re.compile(r"\b[\w\.-]+@[\w\.-]+\.\w+\b", re.IGNORECASE)
_HANDLE_RE = re.compile(r"(?<!\w)@[A-Za-z0-9_]{3,}")
_LINK_RE = re.compile(r"\bhttps?://\S+", re.IGNORECASE)


def short_hash(text: str) -> str:
    raw = str(text or "")
    return hashlib.sha256(raw.encode("utf-8", errors="ignore")).hexdigest()[:12]


def redact(text: str, token: str = "[REDACTED]") -> str:
    s = str(text or "")
    s = _EMAIL_RE.sub(token, s)
    s = _LINK_RE.sub(token, s)
    s = _HANDLE_RE.sub(token, s)
    return s


def safe_preview(text: str, max_len: int = 160) -> str:
    s = redact(str(text or "")).replace("\n", " ").strip()
    if len(s) > max_len:
        return s[: max(0, max_len - 3)].rstrip() + "..."
    return s


def user_text_for_log(text: str, *, allow_raw: bool) -> str:
    """Preview when raw logging is allowed, else only a length + hash."""
    if allow_raw:
        return safe_preview(text)
    return f"<{len(text or '')} chars #{short_hash(text)}>"
