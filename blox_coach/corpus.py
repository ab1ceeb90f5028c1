# corpus.py
"""Flatten a KnowledgeBase into searchable text blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .helpers import normalize_text
from .knowledge import KnowledgeBase

BLOCK_TAGS = ("combo", "counter", "build", "theory", "guide", "race", "playstyle", "fruit")


@dataclass(frozen=True)
class CorpusBlock:
    title: str
    body: str
    tag: str
    key: str


def _block(tag: str, title: str, body: str, *key_parts: str) -> CorpusBlock:
    # The tag word is searchable too, so "build" finds every build block.
    key = normalize_text(" ".join([tag] + [p for p in key_parts if p]))
    return CorpusBlock(title=title, body=body, tag=tag, key=key)


def _join(parts: List[str], sep: str = " | ") -> str:
    return sep.join(p for p in parts if p)


def build_corpus(kb: KnowledgeBase) -> List[CorpusBlock]:
    out: List[CorpusBlock] = []

    for c in kb.combos:
        body = _join([" → ".join(c.inputs), _join(c.notes)])
        out.append(_block("combo", c.title or "Combo", body, c.title, " ".join(c.inputs), " ".join(c.notes)))

    for ct in kb.counters:
        parts = [_join(ct.tips)]
        if ct.use:
            parts.append("Use: " + ", ".join(ct.use))
        out.append(_block("counter", f"vs {ct.enemy or '?'}", _join(parts), ct.enemy, " ".join(ct.tips), " ".join(ct.use)))

    for b in kb.builds:
        parts = []
        if b.style:
            parts.append(f"Style: {b.style}")
        parts.append(_join(b.notes))
        if b.accessories:
            parts.append("Accessories: " + ", ".join(b.accessories))
        out.append(_block("build", b.label or "Build", _join(parts), b.label, b.style, " ".join(b.notes), " ".join(b.accessories)))

    for r in kb.races:
        parts = []
        if r.v4:
            parts.append(f"V4: {r.v4}")
        if r.strengths:
            parts.append("Strengths: " + ", ".join(r.strengths))
        if r.weaknesses:
            parts.append("Weaknesses: " + ", ".join(r.weaknesses))
        parts.append(_join(r.tips))
        out.append(_block(
            "race", r.name or "Race", _join(parts),
            r.name, r.v4, " ".join(r.strengths), " ".join(r.weaknesses), " ".join(r.tips),
        ))

    for p in kb.playstyles:
        parts = [p.summary, _join(p.tips)]
        if p.drills:
            parts.append("Drills: " + "; ".join(p.drills))
        out.append(_block(
            "playstyle", p.name or "Playstyle", _join(parts),
            p.name, p.summary, " ".join(p.tips), " ".join(p.drills),
        ))

    for fr in kb.fruits:
        parts = []
        if fr.type:
            parts.append(f"Type: {fr.type}")
        if fr.moves:
            parts.append("Moves: " + ", ".join(fr.moves))
        parts.append(_join(fr.tips))
        out.append(_block(
            "fruit", fr.name or "Fruit", _join(parts),
            fr.name, fr.type, " ".join(fr.moves), " ".join(fr.tips),
        ))

    for name, text in kb.guides.items():
        if name == "theory":
            out.append(_block("theory", "PvP Theory", text, text))
        else:
            title = name.replace("_", " ").title()
            out.append(_block("guide", title, text, name, text))

    if kb.about:
        out.append(_block("guide", "About", kb.about, "about", kb.about))
    if kb.fundamentals:
        out.append(_block("guide", "Fundamentals", kb.fundamentals, "fundamentals", kb.fundamentals))

    return out
