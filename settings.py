# -----------------------------------------------------------------------------
# Created: 2026-02-01
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Chunking (markdown import)
# -----------------------------------------------------------------------------
CHUNK_SIZE = _env_int("KB_CHUNK_SIZE", 1000)
CHUNK_OVERLAP = _env_int("KB_CHUNK_OVERLAP", 200)
EXTRACT_FRONTMATTER = _env_bool("KB_EXTRACT_FRONTMATTER", True)
STRIP_FORMATTING = _env_bool("KB_STRIP_FORMATTING", False)


# -----------------------------------------------------------------------------
# Search defaults (env-controlled)
# -----------------------------------------------------------------------------
SEARCH_DEFAULTS: Dict[str, Any] = {
    "limit": _env_int("KB_DEFAULT_LIMIT", 10),
    "threshold": _env_float("KB_DEFAULT_THRESHOLD", 0.0),
}

# Upper bound accepted by the API for any result limit
MAX_RESULT_LIMIT = _env_int("KB_MAX_RESULT_LIMIT", 100)


# -----------------------------------------------------------------------------
# Embedding provider
# -----------------------------------------------------------------------------
EMBED_BATCH_SIZE = _env_int("KB_EMBED_BATCH_SIZE", 100)
EMBED_MAX_RETRIES = _env_int("KB_EMBED_MAX_RETRIES", 3)
EMBED_RETRY_DELAY = _env_float("KB_EMBED_RETRY_DELAY", 1.0)


# -----------------------------------------------------------------------------
# Vector index tuning (HNSW)
# -----------------------------------------------------------------------------
HNSW_M = _env_int("KB_HNSW_M", 16)
HNSW_EF_CONSTRUCTION = _env_int("KB_HNSW_EF_CONSTRUCTION", 200)
HNSW_EF_SEARCH = _env_int("KB_HNSW_EF_SEARCH", 50)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if CHUNK_SIZE <= 0:
    raise RuntimeError(f"KB_CHUNK_SIZE must be > 0, got {CHUNK_SIZE}")

# overlap >= chunk size cannot make forward progress
if not 0 <= CHUNK_OVERLAP < CHUNK_SIZE:
    raise RuntimeError(
        f"KB_CHUNK_OVERLAP ({CHUNK_OVERLAP}) must be >= 0 and < KB_CHUNK_SIZE ({CHUNK_SIZE})"
    )

if SEARCH_DEFAULTS["limit"] <= 0:
    raise RuntimeError("KB_DEFAULT_LIMIT must be > 0")

if EMBED_MAX_RETRIES < 0:
    raise RuntimeError("KB_EMBED_MAX_RETRIES must be >= 0")
