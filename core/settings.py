# core/settings.py
from __future__ import annotations


import os


def _env_bool(name: str, default: bool) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if not v:
        return default
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    v = (os.getenv(name) or "").strip()
    if not v:
        return default
    try:
        return int(v)
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    v = (os.getenv(name) or "").strip()
    if not v:
        return default
    try:
        return float(v)
    except Exception:
        return default


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()

# Device-side diagnostics posted to /{version}/log are relayed to this logger.
PASSKIT_LOG_LOGGER: str = os.getenv("PASSKIT_LOG_LOGGER", "passkit.device_log")

# -------------------------
# Storage (SQLite)
# WALLET_DB_PATH itself is resolved per call in storage.db_core.get_db_path.
# -------------------------
SQLITE_TIMEOUT_S: float = _env_float("SQLITE_TIMEOUT_S", 5.0)
SQLITE_JOURNAL_MODE: str = (os.getenv("WALLET_SQLITE_JOURNAL_MODE", "WAL") or "WAL").strip().upper()
SQLITE_SYNCHRONOUS: str = (os.getenv("WALLET_SQLITE_SYNCHRONOUS", "NORMAL") or "NORMAL").strip().upper()

# -------------------------
# Protocol
# Unknown passes / registrations historically answer 500, same as a storage
# failure. Set to 404 only when the wallet client is being replaced as well.
# -------------------------
PASSKIT_NOT_FOUND_STATUS: int = _env_int("PASSKIT_NOT_FOUND_STATUS", 500)
if PASSKIT_NOT_FOUND_STATUS not in {404, 500}:
    PASSKIT_NOT_FOUND_STATUS = 500

# -------------------------
# Server (python server.py)
# -------------------------
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = _env_int("PORT", 8000)
UVICORN_RELOAD: bool = _env_bool("UVICORN_RELOAD", False)
