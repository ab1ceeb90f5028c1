# engine.py
"""One coaching turn: guards -> intent + entities -> reply -> chunks."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from . import facts
from .chunking import chunk_text, needs_chunking
from .config import COACH_DEBUG, COACH_DEBUG_LOG_USER_TEXT, KB_PATHS, KB_STRICT, Settings
from .entities import detect_entities
from .guards import guard_reply
from .intents import Intent, IntentKind, classify
from .knowledge import KnowledgeBase, load_kb
from .model_calls import HttpGenerator
from .privacy_utils import user_text_for_log
from .retrieval import Retriever
from .session_state import SessionState
from .synthesizer import Generator, respond


@dataclass
class TurnResult:
    text: str
    state: SessionState
    segments: List[str] = field(default_factory=list)
    intent: Optional[Intent] = None
    entities: List[str] = field(default_factory=list)
    guarded: bool = False


class CoachEngine:
    """Stateless with respect to conversations: state goes in and comes back out."""

    def __init__(
        self,
        kb: Optional[KnowledgeBase] = None,
        *,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        generator: Optional[Generator] = None,
    ):
        self.settings = settings or Settings()
        self.kb = kb or KnowledgeBase()
        self.retriever = Retriever(
            self.kb,
            top_k=self.settings.top_k,
            fallback_chars=self.settings.theory_fallback_chars,
        )
        self.rng = rng or random.Random()
        self.generator = generator

    @classmethod
    def from_config(cls, *, rng: Optional[random.Random] = None) -> "CoachEngine":
        settings = Settings()
        generator = None
        if settings.generation_enabled:
            generator = HttpGenerator(
                timeout=settings.model_timeout_s,
                max_continuations=settings.max_continuations,
            )
        return cls(load_kb(KB_PATHS, strict=KB_STRICT), settings=settings, rng=rng, generator=generator)

    def _segments(self, text: str) -> List[str]:
        s = self.settings
        if needs_chunking(text, max_chars=s.long_reply_chars, max_lines=s.long_reply_lines):
            return chunk_text(text, s.chunk_max_chars)
        return [text]

    def handle(self, text: str, state: SessionState) -> TurnResult:
        q = (text or "").strip()
        if not q:
            return TurnResult(text=facts.EMPTY_INPUT, state=state, segments=[facts.EMPTY_INPUT])

        if COACH_DEBUG:
            print(f"[coach] turn {user_text_for_log(q, allow_raw=COACH_DEBUG_LOG_USER_TEXT)}", flush=True)

        guard = guard_reply(q)
        if guard:
            return TurnResult(
                text=guard,
                state=state.evolve(last_question=q),
                segments=[guard],
                guarded=True,
            )

        intent = classify(q)
        entities = detect_entities(q)
        reply = respond(
            intent,
            entities,
            state,
            question=q,
            retriever=self.retriever,
            rng=self.rng,
            generator=self.generator,
            settings=self.settings,
        )

        # Toggles and bare "elaborate" keep the previous question for entity follow-ups.
        if reply.failed:
            next_state = state
        elif intent.kind == IntentKind.TOGGLE or (intent.kind == IntentKind.ELABORATE and not entities):
            next_state = reply.state
        else:
            next_state = reply.state.evolve(last_question=q)

        if COACH_DEBUG:
            print(
                f"[coach] intent={intent.kind} entities={entities} topic={next_state.last_topic} "
                f"deep={next_state.deep_mode}",
                flush=True,
            )

        return TurnResult(
            text=reply.text,
            state=next_state,
            segments=self._segments(reply.text),
            intent=intent,
            entities=entities,
        )
