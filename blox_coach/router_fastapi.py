"""FastAPI surface for blox-coach.

Responsibilities:
- expose an OpenAI-compatible chat route backed by the coach engine
- keep one SessionState per conversation and serialise its turns
- stream chunked replies with display pacing
"""

from __future__ import annotations

import asyncio
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, StreamingResponse

from .__about__ import __version__
from .config import cfg_get
from .engine import CoachEngine
from .helpers import last_user_message
from .session_state import get_state, put_state, reset_state
from .streaming import MODEL_ID, make_openai_response as _make_openai_response, stream_segments_sse


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

_ENGINE: Optional[CoachEngine] = None
_SESSION_LOCKS: Dict[str, asyncio.Lock] = {}


def get_engine() -> CoachEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = CoachEngine.from_config()
    return _ENGINE


def set_engine(engine: Optional[CoachEngine]) -> None:
    """Swap the engine (tests, embedding)."""
    global _ENGINE
    _ENGINE = engine


def _session_lock(session_id: str) -> asyncio.Lock:
    lock = _SESSION_LOCKS.get(session_id)
    if lock is None:
        lock = asyncio.Lock()
        _SESSION_LOCKS[session_id] = lock
    return lock


# ---------------------------------------------------------------------------
# FastAPI App
# ---------------------------------------------------------------------------

app = FastAPI()


def _format_router_exception(exc: Exception) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    tb = traceback.format_exc()
    print(f"[coach][unhandled][{ts}] {exc.__class__.__name__}: {exc}\n{tb}", flush=True)
    return f"[coach error: unhandled {exc.__class__.__name__}: {exc}]"


@app.middleware("http")
async def _chat_exception_guard(request: Request, call_next):
    """Fail-soft for chat route so clients do not see transport-level failures."""
    try:
        return await call_next(request)
    except Exception as exc:
        text = _format_router_exception(exc)
        if request.url.path == "/v1/chat/completions":
            return JSONResponse(_make_openai_response(text), status_code=200)
        return JSONResponse({"ok": False, "error": text}, status_code=500)


@app.get("/healthz")
def healthz():
    engine = get_engine()
    return {"ok": True, "version": __version__, "kb_loaded": not engine.kb.is_empty()}


@app.get("/v1/models")
def v1_models():
    """OpenAI-compatible models endpoint."""
    return {"object": "list", "data": [{"id": MODEL_ID, "object": "model"}]}


def _session_id_from_request(req: Request, body: Dict[str, Any]) -> str:
    """Extract session ID from request."""
    sid = req.headers.get("x-chat-id") or req.headers.get("x-session-id")
    if sid and sid.strip():
        return sid.strip()

    for key in ("session_id", "chat_id", "conversation_id"):
        v = body.get(key)
        if isinstance(v, str) and v.strip():
            return v.strip()

    user = body.get("user")
    if isinstance(user, str) and user.strip():
        return user.strip()

    host = req.client.host if req.client else "local"
    return f"sess-{host}"


@app.post("/v1/sessions/{session_id}/reset")
def reset_session(session_id: str):
    reset_state(session_id)
    lock = _SESSION_LOCKS.get(session_id)
    if lock is not None and not lock.locked():
        _SESSION_LOCKS.pop(session_id, None)
    return {"ok": True, "session_id": session_id}


@app.post("/v1/chat/completions")
async def v1_chat_completions(req: Request):
    """Main chat completions endpoint."""
    body = await req.json()
    if not isinstance(body, dict):
        return JSONResponse(_make_openai_response("[coach error: body must be an object]"))
    session_id = _session_id_from_request(req, body)
    stream = bool(body.get("stream", False))

    raw_messages = body.get("messages", []) or []
    if not isinstance(raw_messages, list):
        return JSONResponse(_make_openai_response("[coach error: messages must be a list]"))

    user_text, _ = last_user_message(raw_messages)
    if not user_text.strip():
        return JSONResponse(_make_openai_response("[coach error: no user message]"))

    engine = get_engine()
    async with _session_lock(session_id):
        state = get_state(session_id)
        result = await run_in_threadpool(engine.handle, user_text, state)
        put_state(session_id, result.state)

    if stream:
        return StreamingResponse(
            stream_segments_sse(result.segments, engine.settings.chunk_delay_ms),
            media_type="text/event-stream",
        )
    return JSONResponse(_make_openai_response(result.text))


# Convenience for `python -m blox_coach.router_fastapi`
if __name__ == "__main__":
    import uvicorn

    host = str(cfg_get("server.host", "0.0.0.0"))
    port = int(cfg_get("server.port", 9100))
    uvicorn.run("blox_coach.router_fastapi:app", host=host, port=port, reload=False)
