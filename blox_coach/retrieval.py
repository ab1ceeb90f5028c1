# retrieval.py
"""Token-overlap retrieval over corpus blocks."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from .corpus import CorpusBlock, build_corpus
from .helpers import cap, clip, normalize_text
from .knowledge import KnowledgeBase

HIT_WEIGHT = 2
PHRASE_BONUS = 3

# Shorthand players type -> words the KB actually uses.
ABBREVIATIONS: Dict[str, Tuple[str, ...]] = {
    "gh": ("godhuman",),
    "cdk": ("cursed", "dual", "katana"),
    "dt": ("dragon", "trident"),
    "eclaw": ("electric", "claw"),
    # haki/aura turns are answered by guards before the engine retrieves;
    # these two serve direct retrieve()/Retriever callers.
    "haki": ("aura",),
    "buso": ("aura",),
    "ken": ("instinct",),
    "obs": ("instinct",),
    "v4": ("awakening",),
}

_STOP_WORDS = {
    "a", "an", "and", "are", "can", "do", "does", "for", "how", "i", "in", "is",
    "it", "me", "my", "of", "on", "or", "the", "to", "what", "whats", "with", "you",
}


def query_tokens(query: str) -> List[str]:
    """Significant tokens of the normalised query, in order."""
    return [t for t in normalize_text(query).split() if t not in _STOP_WORDS]


def expand_tokens(tokens: Sequence[str]) -> Set[str]:
    out = set(tokens)
    for t in tokens:
        out.update(ABBREVIATIONS.get(t, ()))
    return out


def score_block(tokens: Set[str], phrase: str, block: CorpusBlock) -> int:
    if not tokens:
        return 0
    key_tokens = set(block.key.split())
    score = HIT_WEIGHT * len(tokens & key_tokens)
    if score and phrase and phrase in block.key:
        score += PHRASE_BONUS
    return score


def theory_fallback(kb: Optional[KnowledgeBase], max_chars: int) -> List[CorpusBlock]:
    theory = kb.theory if kb is not None else ""
    if not theory:
        return []
    body = clip(theory, max_chars)
    return [CorpusBlock(title="PvP Theory", body=body, tag="theory", key=normalize_text(body))]


def retrieve(
    corpus: Sequence[CorpusBlock],
    query: str,
    k: int = 5,
    *,
    kb: Optional[KnowledgeBase] = None,
    fallback_chars: int = 900,
) -> List[CorpusBlock]:
    """Top-k blocks by score; the theory slice when nothing scores; [] when neither exists."""
    toks = query_tokens(query)
    expanded = expand_tokens(toks)
    phrase = " ".join(toks)

    scored: List[Tuple[int, int, CorpusBlock]] = []
    for i, block in enumerate(corpus):
        s = score_block(expanded, phrase, block)
        if s > 0:
            scored.append((s, i, block))

    if not scored:
        return theory_fallback(kb, fallback_chars)

    scored.sort(key=lambda t: (-t[0], t[1]))
    return [b for _, _, b in scored[: max(1, k)]]


def format_context(blocks: Sequence[CorpusBlock]) -> str:
    """Render blocks as bullet lines; a lone theory fallback renders as a context paragraph."""
    if not blocks:
        return ""
    if len(blocks) == 1 and blocks[0].tag == "theory":
        return f"Context — {blocks[0].title}: {blocks[0].body}"
    return "\n".join(f"• {cap(b.tag)} | {b.title}: {b.body}" for b in blocks)


class Retriever:
    """Caches the corpus for one KnowledgeBase."""

    def __init__(self, kb: Optional[KnowledgeBase] = None, *, top_k: int = 5, fallback_chars: int = 900):
        self.kb = kb or KnowledgeBase()
        self.top_k = top_k
        self.fallback_chars = fallback_chars
        self._corpus: Optional[List[CorpusBlock]] = None

    @property
    def corpus(self) -> List[CorpusBlock]:
        if self._corpus is None:
            self._corpus = build_corpus(self.kb)
        return self._corpus

    def search(self, query: str, k: Optional[int] = None) -> List[CorpusBlock]:
        return retrieve(
            self.corpus,
            query,
            self.top_k if k is None else k,
            kb=self.kb,
            fallback_chars=self.fallback_chars,
        )

    def context(self, query: str, k: Optional[int] = None) -> str:
        return format_context(self.search(query, k))
