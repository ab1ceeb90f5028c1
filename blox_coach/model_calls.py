# model_calls.py
"""Generative backend calls (OpenAI-compatible chat completions)."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from .config import (
    COACH_DEBUG,
    MAX_CONTINUATIONS,
    MODEL_MAX_TOKENS,
    MODEL_NAME,
    MODEL_TEMPERATURE,
    MODEL_TIMEOUT_S,
    MODEL_URL,
)
from .privacy_utils import short_hash

CONTINUE_DIRECTIVE = "Continue exactly where you stopped. Do not repeat anything."

SYSTEM_PROMPT = (
    "You are a Blox Fruits PvP coach. Answer briefly and practically. "
    "Use the CONTEXT notes when they are relevant; do not invent moves, fruits or races."
)


class GenerationError(Exception):
    pass


class GenerationTimeout(GenerationError):
    pass


@dataclass
class Completion:
    text: str
    finish_reason: str = "stop"

    @property
    def truncated(self) -> bool:
        return self.finish_reason == "length"


def build_coach_prompt(question: str, context: str = "") -> List[Dict[str, str]]:
    user = question.strip()
    if context.strip():
        user = f"CONTEXT:\n{context.strip()}\n\nQUESTION: {user}"
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


def call_model_messages(
    messages: List[Dict[str, Any]],
    *,
    url: str = MODEL_URL,
    model: str = MODEL_NAME,
    max_tokens: int = MODEL_MAX_TOKENS,
    temperature: float = MODEL_TEMPERATURE,
    timeout: float = MODEL_TIMEOUT_S,
) -> Completion:
    """One completion request. Raises GenerationError on transport or payload problems."""
    payload = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "stream": False,
    }

    try:
        resp = requests.post(url, json=payload, timeout=timeout)
        resp.raise_for_status()
        data = resp.json() or {}
    except requests.Timeout as e:
        raise GenerationTimeout(f"model '{model}' timed out") from e
    except (requests.RequestException, ValueError) as e:
        raise GenerationError(f"model '{model}' unavailable: {e}") from e

    try:
        choices = data.get("choices", []) or []
        if not choices:
            raise GenerationError("no choices from model")
        first = choices[0] or {}
        msg = first.get("message", {}) or {}
        content = str(msg.get("content", "") or "")
        finish = str(first.get("finish_reason") or "stop")
    except (AttributeError, KeyError, IndexError, TypeError) as e:
        raise GenerationError(f"malformed reply from model '{model}': {e}") from e

    if COACH_DEBUG:
        print(
            f"[coach model] finish={finish} chars={len(content)} hash={short_hash(content)}",
            flush=True,
        )
    return Completion(text=content, finish_reason=finish)


def generate_with_continuation(
    messages: List[Dict[str, Any]],
    *,
    max_continuations: int = MAX_CONTINUATIONS,
    call=call_model_messages,
    cancel: Optional[threading.Event] = None,
) -> str:
    """Generate, asking for more while the backend stops on its length limit.

    At most max_continuations extra rounds are requested; pages are concatenated.
    The caller's message list is not modified. Once `cancel` is set no further
    request is sent.
    """
    convo = list(messages)
    pages: List[str] = []
    rounds = 0
    while True:
        if cancel is not None and cancel.is_set():
            raise GenerationTimeout("generation cancelled")
        comp = call(convo)
        pages.append(comp.text)
        if not comp.truncated or rounds >= max(0, max_continuations):
            break
        rounds += 1
        convo = convo + [
            {"role": "assistant", "content": comp.text},
            {"role": "user", "content": CONTINUE_DIRECTIVE},
        ]

    text = "".join(pages).strip()
    if not text:
        raise GenerationError("empty completion")
    return text


def run_with_timeout(
    fn,
    *args,
    timeout: Optional[float] = MODEL_TIMEOUT_S,
    on_timeout: Optional[Callable[[], None]] = None,
    **kwargs,
):
    """Run fn in a worker thread and give up after timeout seconds (GenerationTimeout).

    on_timeout runs when the deadline passes so the worker can stop early.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except FutureTimeout as e:
            future.cancel()
            if on_timeout is not None:
                on_timeout()
            raise GenerationTimeout(f"generation exceeded {timeout}s") from e
    finally:
        # Don't block on a hung worker; it finishes (or dies) in the background.
        executor.shutdown(wait=False)


class HttpGenerator:
    """Default backend: coach prompt -> continued completion with a hard timeout."""

    def __init__(self, *, timeout: float = MODEL_TIMEOUT_S, max_continuations: int = MAX_CONTINUATIONS):
        self.timeout = timeout
        self.max_continuations = max_continuations

    def __call__(self, question: str, context: str) -> str:
        messages = build_coach_prompt(question, context)
        cancel = threading.Event()
        return run_with_timeout(
            generate_with_continuation,
            messages,
            max_continuations=self.max_continuations,
            cancel=cancel,
            timeout=self.timeout,
            on_timeout=cancel.set,
        )
