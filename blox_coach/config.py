# config.py
"""Configuration management for blox-coach."""

import os
from dataclasses import dataclass
from typing import Any, Dict, List

import yaml


# ---------------------------------------------------------------------------
# Config Loading
# ---------------------------------------------------------------------------

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(HERE, "coach_config.yaml")


def _load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


CFG: Dict[str, Any] = {}


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    global CFG
    try:
        loaded = _load_yaml(path)
        CFG = loaded if isinstance(loaded, dict) else {}
    except Exception as e:
        CFG = {}
        print(f"[coach] failed to load config '{path}': {e}", flush=True)
    return CFG


def cfg_get(path: str, default: Any) -> Any:
    """Get config value by dot-separated path (e.g., 'server.host')."""
    cur: Any = CFG
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def resolve_path(p: str) -> str:
    """Resolve a config path relative to the package directory."""
    p = os.path.expanduser(str(p or "").strip())
    if not p or os.path.isabs(p):
        return p
    return os.path.join(HERE, p)


# Load config on import
load_config(DEFAULT_CONFIG_PATH)

# KB
KB_PATHS: List[str] = [resolve_path(p) for p in (cfg_get("kb.paths", []) or []) if str(p or "").strip()]
KB_STRICT: bool = bool(cfg_get("kb.strict", False))

# Retrieval
TOP_K: int = int(cfg_get("retrieval.top_k", 5))
THEORY_FALLBACK_CHARS: int = int(cfg_get("retrieval.theory_fallback_chars", 900))

# Chunked display
CHUNK_MAX_CHARS: int = int(cfg_get("chunking.max_chars", 1200))
CHUNK_DELAY_MS: int = int(cfg_get("chunking.delay_ms", 18))
LONG_REPLY_CHARS: int = int(cfg_get("chunking.long_reply_chars", 1000))
LONG_REPLY_LINES: int = int(cfg_get("chunking.long_reply_lines", 16))

# Generative backend
GENERATION_ENABLED: bool = bool(cfg_get("generation.enabled", False))
MODEL_URL: str = str(cfg_get("generation.url", "http://127.0.0.1:8011/v1/chat/completions"))
MODEL_NAME: str = str(cfg_get("generation.model", "coach"))
MODEL_TIMEOUT_S: float = float(cfg_get("generation.timeout_s", 60))
MODEL_MAX_TOKENS: int = int(cfg_get("generation.max_tokens", 512))
MODEL_TEMPERATURE: float = float(cfg_get("generation.temperature", 0.4))
MAX_CONTINUATIONS: int = int(cfg_get("generation.max_continuations", 2))
KB_ONLY: bool = bool(cfg_get("generation.kb_only", False))

# Debug/privacy flags
COACH_DEBUG: bool = bool(cfg_get("debug.enabled", False))
COACH_DEBUG_LOG_USER_TEXT: bool = bool(cfg_get("debug.log_user_text", False))


@dataclass(frozen=True)
class Settings:
    """Engine knobs; defaults come from the loaded config."""

    top_k: int = TOP_K
    theory_fallback_chars: int = THEORY_FALLBACK_CHARS
    chunk_max_chars: int = CHUNK_MAX_CHARS
    chunk_delay_ms: int = CHUNK_DELAY_MS
    long_reply_chars: int = LONG_REPLY_CHARS
    long_reply_lines: int = LONG_REPLY_LINES
    generation_enabled: bool = GENERATION_ENABLED
    kb_only: bool = KB_ONLY
    max_continuations: int = MAX_CONTINUATIONS
    model_timeout_s: float = MODEL_TIMEOUT_S
