# chunking.py
"""Split long replies into display segments and pace their delivery."""

from __future__ import annotations

import asyncio
import re
import time
from typing import AsyncIterator, Iterable, Iterator, List

PARA_SEP = "\n\n"
_PARA_SPLIT_RE = re.compile(r"\n{2,}")


def _hard_split(text: str, max_size: int) -> List[str]:
    return [text[i : i + max_size] for i in range(0, len(text), max_size)]


def chunk_text(text: str, max_size: int = 1200) -> List[str]:
    """Greedy paragraph packing.

    Paragraphs (split on runs of 2+ newlines) are packed into a segment while it
    stays within max_size. A paragraph that would overflow flushes the current
    segment first; a paragraph longer than max_size on its own is hard-split.
    Always returns at least one segment.
    """
    s = text or ""
    if max_size <= 0 or len(s) <= max_size:
        return [s]

    out: List[str] = []
    buf = ""
    for para in _PARA_SPLIT_RE.split(s):
        candidate = f"{buf}{PARA_SEP}{para}" if buf else para
        if len(candidate) <= max_size:
            buf = candidate
            continue
        if buf:
            out.append(buf)
            buf = ""
        if len(para) <= max_size:
            buf = para
        else:
            out.extend(_hard_split(para, max_size))
    if buf:
        out.append(buf)
    return out or [s]


def needs_chunking(text: str, *, max_chars: int, max_lines: int) -> bool:
    t = text or ""
    return len(t) > max_chars or len(t.split("\n")) > max_lines


def paced(segments: Iterable[str], delay_ms: int) -> Iterator[str]:
    """Yield segments with a fixed pause between them (none before the first)."""
    first = True
    for seg in segments:
        if not first and delay_ms > 0:
            time.sleep(delay_ms / 1000.0)
        first = False
        yield seg


async def apaced(segments: Iterable[str], delay_ms: int) -> AsyncIterator[str]:
    first = True
    for seg in segments:
        if not first and delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000.0)
        first = False
        yield seg
