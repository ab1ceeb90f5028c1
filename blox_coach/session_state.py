# session_state.py
"""Per-conversation state for the coach (in-memory only)."""

from dataclasses import dataclass, replace
from typing import Dict


class Topic:
    COUNTERS = "counters"
    COMBOS = "combos"
    USAGE = "usage"
    BUILDS = "builds"
    KENTRICK = "kentrick"
    PLAYSTYLES = "playstyles"
    MISC = "misc"


@dataclass(frozen=True)
class SessionState:
    last_topic: str = Topic.MISC
    last_question: str = ""
    deep_mode: bool = False

    def evolve(self, **changes) -> "SessionState":
        return replace(self, **changes)


def new_state() -> SessionState:
    return SessionState()


# Global session storage
_SESSIONS: Dict[str, SessionState] = {}


def get_state(session_id: str) -> SessionState:
    """Get or create session state for given session ID."""
    if session_id not in _SESSIONS:
        _SESSIONS[session_id] = new_state()
    return _SESSIONS[session_id]


def put_state(session_id: str, state: SessionState) -> None:
    _SESSIONS[session_id] = state


def reset_state(session_id: str) -> None:
    _SESSIONS.pop(session_id, None)
