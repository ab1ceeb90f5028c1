# synthesizer.py
"""Turn (intent, entities, session state) into a reply and the next state.

respond() never mutates its inputs. The returned state carries the topic
change for the turn; the engine stamps last_question afterwards.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from . import facts
from .config import Settings
from .entities import first_entity_in
from .intents import Intent, IntentKind
from .model_calls import GenerationError, GenerationTimeout
from .retrieval import Retriever
from .session_state import SessionState, Topic

Generator = Callable[[str, str], str]


@dataclass(frozen=True)
class Reply:
    text: str
    state: SessionState
    # True when the turn failed at the generative boundary; callers keep the old state.
    failed: bool = False


# Topic a fresh intent establishes (used for deep-mode long answers).
INTENT_TOPIC: Dict[str, str] = {
    IntentKind.COUNTER: Topic.COUNTERS,
    IntentKind.COMBO: Topic.COMBOS,
    IntentKind.USAGE: Topic.USAGE,
    IntentKind.BUILD: Topic.BUILDS,
    IntentKind.KENTRICK: Topic.KENTRICK,
    IntentKind.PLAYSTYLE: Topic.PLAYSTYLES,
}


def _kb_context(retriever: Optional[Retriever], query: str, k: Optional[int] = None) -> str:
    if retriever is None or retriever.kb.is_empty():
        return ""
    return retriever.context(query, k)


# ---------------------------------------------------------------------------
# Long-form
# ---------------------------------------------------------------------------

def elaborate(
    topic: str,
    entities: Sequence[str],
    last_question: str,
    retriever: Optional[Retriever] = None,
    query: str = "",
) -> str:
    """Long-form answer for a topic, tailored to the current or previous entity.

    Combos and counters without a canned answer get KB notes for `query`
    (default: the previous question) appended.
    """
    e = (entities[0] if entities else None) or first_entity_in(last_question) or ""
    query = query or last_question

    if topic == Topic.KENTRICK:
        return facts.KENTRICK_LONG
    if topic == Topic.PLAYSTYLES:
        return facts.PLAYSTYLE_LONG
    if topic == Topic.COMBOS:
        if e == "portal":
            return facts.PORTAL_COMBOS_LONG
        kb = _kb_context(retriever, query) if query else ""
        return f"{facts.COMBOS_LONG}\n\n{kb}" if kb else facts.COMBOS_LONG
    if topic == Topic.COUNTERS:
        base = facts.counter_fact(e)
        if base:
            return f"{base}\n\n{facts.COUNTER_DEEP_NOTES}"
        kb = _kb_context(retriever, query) if query else ""
        return f"{facts.COUNTERS_LONG}\n\n{kb}" if kb else facts.COUNTERS_LONG
    if topic == Topic.USAGE:
        tip = facts.USAGE.get(e)
        if tip:
            return f"{tip}\n\n{facts.USAGE_DEEP_NOTES}"
        return facts.USAGE_LONG
    if topic == Topic.BUILDS:
        kb = _kb_context(retriever, "build")
        return f"{facts.BUILDS_LONG}\n\n{kb}" if kb else facts.BUILDS_LONG
    return facts.ASK_ELABORATE_TOPIC


# ---------------------------------------------------------------------------
# Per-intent handlers
# ---------------------------------------------------------------------------

def _counter(state: SessionState, entities: Sequence[str], question: str, retriever) -> Reply:
    state = state.evolve(last_topic=Topic.COUNTERS)
    fact = facts.counter_fact(entities[0] if entities else None)
    if fact:
        return Reply(fact + facts.ELABORATE_HINT_COUNTER, state)
    kb = _kb_context(retriever, question)
    if kb:
        return Reply(kb + facts.ELABORATE_HINT_KB, state)
    return Reply(facts.ASK_COUNTER_TARGET, state)


def _combo(state: SessionState, entities: Sequence[str], question: str, retriever) -> Reply:
    state = state.evolve(last_topic=Topic.COMBOS)
    if "portal" in entities:
        return Reply(facts.PORTAL_COMBO_REPLY, state)
    kb = _kb_context(retriever, question)
    if kb:
        return Reply(f"⚔️ Combos\n{kb}\nSay **elaborate** for a bigger pack.", state)
    return Reply(facts.GENERIC_COMBOS, state)


def _usage(state: SessionState, entities: Sequence[str]) -> Reply:
    state = state.evolve(last_topic=Topic.USAGE)
    if entities:
        tip = facts.USAGE.get(entities[0])
        if tip:
            return Reply(tip + facts.ELABORATE_HINT_USAGE, state)
    return Reply(facts.ASK_USAGE_TARGET, state)


def _build(state: SessionState, retriever) -> Reply:
    state = state.evolve(last_topic=Topic.BUILDS)
    kb = _kb_context(retriever, "build")
    return Reply(kb or facts.BUILDS[facts.DEFAULT_BUILD], state)


def _free(
    state: SessionState,
    entities: Sequence[str],
    question: str,
    retriever,
    rng: random.Random,
    generator: Optional[Generator],
    settings: Settings,
) -> Reply:
    if entities:
        target = entities[0]
        tailored = facts.FREE_TIPS.get(target)
        if tailored:
            text, topic = tailored
            return Reply(text, state.evolve(last_topic=topic))
        return Reply(facts.mention_prompt(target), state.evolve(last_topic=Topic.MISC))

    misc = state.evolve(last_topic=Topic.MISC)
    kb = _kb_context(retriever, question)

    if settings.generation_enabled and generator is not None:
        if not kb and settings.kb_only:
            return Reply(facts.KB_ONLY_REFUSAL, misc)
        try:
            return Reply(generator(question, kb), misc)
        except GenerationTimeout:
            print("[coach model] generation timed out", flush=True)
            return Reply(facts.GENERATION_TIMED_OUT, state, failed=True)
        except GenerationError as e:
            print(f"[coach model] generation failed: {e}", flush=True)
            return Reply(facts.GENERATION_FAILED, state, failed=True)

    if kb:
        return Reply(kb, misc)
    return Reply(rng.choice(facts.FREE_PROMPTS), misc)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def respond(
    intent: Intent,
    entities: Sequence[str],
    state: SessionState,
    *,
    question: str = "",
    retriever: Optional[Retriever] = None,
    rng: Optional[random.Random] = None,
    generator: Optional[Generator] = None,
    settings: Optional[Settings] = None,
) -> Reply:
    rng = rng or random.Random()
    settings = settings or Settings()
    entities: List[str] = list(entities)
    kind = intent.kind

    if kind == IntentKind.TOGGLE:
        on = bool(intent.on)
        return Reply(f"Deep mode: {'ON' if on else 'OFF'}.", state.evolve(deep_mode=on))

    if kind == IntentKind.ELABORATE:
        return Reply(elaborate(state.last_topic, entities, state.last_question, retriever), state)

    if state.deep_mode and kind in INTENT_TOPIC:
        topic = INTENT_TOPIC[kind]
        text = elaborate(topic, entities, state.last_question, retriever, query=question)
        return Reply(text, state.evolve(last_topic=topic))

    if kind == IntentKind.COUNTER:
        return _counter(state, entities, question, retriever)
    if kind == IntentKind.COMBO:
        return _combo(state, entities, question, retriever)
    if kind == IntentKind.USAGE:
        return _usage(state, entities)
    if kind == IntentKind.BUILD:
        return _build(state, retriever)
    if kind == IntentKind.KENTRICK:
        return Reply(facts.KENTRICK_SHORT + facts.ELABORATE_HINT_KENTRICK, state.evolve(last_topic=Topic.KENTRICK))
    if kind == IntentKind.PLAYSTYLE:
        return Reply(facts.PLAYSTYLE_SHORT + facts.ELABORATE_HINT_PLAYSTYLE, state.evolve(last_topic=Topic.PLAYSTYLES))
    if kind == IntentKind.GREET:
        return Reply(rng.choice(facts.GREETINGS), state.evolve(last_topic=Topic.MISC))

    return _free(state, entities, question, retriever, rng, generator, settings)
