# streaming.py
"""OpenAI-shaped responses and Server-Sent Events for chunked replies."""

import json
import time
from typing import Any, AsyncIterator, Dict, Iterable, Optional

from .chunking import apaced

MODEL_ID = "blox-coach"


def make_openai_response(text: str) -> Dict[str, Any]:
    """Create OpenAI-compatible response format."""
    return {
        "id": f"chatcmpl-{int(time.time())}",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": MODEL_ID,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
    }


def _chunk_event(content: Optional[str]) -> str:
    delta: Dict[str, Any] = {"content": content} if content is not None else {}
    chunk = {
        "id": f"chatcmpl-{int(time.time())}",
        "object": "chat.completion.chunk",
        "created": int(time.time()),
        "model": MODEL_ID,
        "choices": [
            {
                "index": 0,
                "delta": delta,
                "finish_reason": None if content is not None else "stop",
            }
        ],
    }
    return f"data: {json.dumps(chunk)}\n\n"


async def stream_segments_sse(segments: Iterable[str], delay_ms: int) -> AsyncIterator[str]:
    """
    Stream reply segments as SSE, one delta per segment, paced by delay_ms.

    Segments after the first are prefixed with a blank line so clients that
    concatenate deltas see paragraph breaks.
    """
    first = True
    async for seg in apaced(segments, delay_ms):
        yield _chunk_event(seg if first else "\n\n" + seg)
        first = False

    yield _chunk_event(None)
    yield "data: [DONE]\n\n"
