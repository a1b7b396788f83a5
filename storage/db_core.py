from __future__ import annotations

import os
import sqlite3
import json
from contextlib import contextmanager
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Optional

from core.settings import SQLITE_JOURNAL_MODE, SQLITE_SYNCHRONOUS, SQLITE_TIMEOUT_S

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_DB_PATH = BASE_DIR / "wallet.sqlite3"


def get_db_path() -> Path:
    env = (os.getenv("WALLET_DB_PATH") or "").strip()
    if env:
        return Path(env).expanduser().resolve()
    return DEFAULT_DB_PATH


def connect(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """
    Unified connection factory:
    - PRAGMA foreign_keys=ON
    - PRAGMA journal_mode=WAL (default, env overridable)
    - PRAGMA synchronous=NORMAL (default, env overridable)
    - PRAGMA busy_timeout
    """
    path = Path(db_path or get_db_path()).expanduser().resolve()
    conn = sqlite3.connect(str(path), timeout=SQLITE_TIMEOUT_S)
    conn.row_factory = sqlite3.Row

    # SQLite enforces FKs per connection
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.execute(f"PRAGMA busy_timeout={int(SQLITE_TIMEOUT_S * 1000)};")

    try:
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    except sqlite3.OperationalError:
        # Some environments restrict changing journal mode; keep usable.
        pass

    if SQLITE_SYNCHRONOUS in {"OFF", "NORMAL", "FULL", "EXTRA"}:
        try:
            conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
        except sqlite3.OperationalError:
            pass

    return conn


def _safe_json_loads(s: str) -> Any:
    try:
        return json.loads(s) if s else None
    except Exception:
        return None


def _utc_now_iso() -> str:
    """Timezone-aware UTC timestamp for storage."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@contextmanager
def read_only(db_path: Optional[Path] = None):
    """Read-only connection context."""
    conn = connect(db_path=db_path)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(db_path: Optional[Path] = None, *, immediate: bool = False):
    """Read-write connection context with explicit BEGIN/COMMIT/ROLLBACK.

    `immediate=True` takes the write lock up front (read-then-write sections).
    """
    conn = connect(db_path=db_path)
    try:
        conn.execute("BEGIN IMMEDIATE;" if immediate else "BEGIN;")
        yield conn
        conn.commit()
    except Exception:
        try:
            conn.rollback()
        except Exception:
            pass
        raise
    finally:
        conn.close()


def init_db(db_path: Optional[Path] = None) -> None:
    """Create the wallet schema. Safe to call on every startup."""
    with transaction(db_path=db_path) as conn:
        # =====================
        # devices
        # =====================
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS devices (
                device_library_identifier TEXT PRIMARY KEY,
                push_token TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )

        # =====================
        # registrations (device <-> pass edge)
        # =====================
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS registrations (
                registration_id INTEGER PRIMARY KEY AUTOINCREMENT,
                device_library_identifier TEXT NOT NULL,
                pass_type_identifier TEXT NOT NULL,
                serial_number TEXT NOT NULL,
                created_at TEXT NOT NULL,
                FOREIGN KEY(device_library_identifier)
                    REFERENCES devices(device_library_identifier) ON DELETE CASCADE,
                UNIQUE(device_library_identifier, pass_type_identifier, serial_number)
            );
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_registrations_pass "
            "ON registrations(pass_type_identifier, serial_number);"
        )

        # =====================
        # passes
        # last_updated is a logical tag drawn from pass_clock, never wall-clock.
        # =====================
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS passes (
                pass_type_identifier TEXT NOT NULL,
                serial_number TEXT NOT NULL,
                last_updated INTEGER NOT NULL,
                payload_json TEXT NOT NULL DEFAULT '{}',
                updated_at TEXT NOT NULL,
                PRIMARY KEY(pass_type_identifier, serial_number)
            );
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_passes_last_updated ON passes(last_updated);")

        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS pass_clock (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                value INTEGER NOT NULL
            );
            """
        )
        conn.execute("INSERT OR IGNORE INTO pass_clock(id, value) VALUES (1, 0);")
