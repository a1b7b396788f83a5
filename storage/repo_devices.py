from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional

from .db_core import _utc_now_iso


def upsert_device(conn: sqlite3.Connection, *, device_library_identifier: str, push_token: str) -> None:
    """Create the device or overwrite its push token."""
    now = _utc_now_iso()
    conn.execute(
        """
        INSERT INTO devices(device_library_identifier, push_token, created_at, updated_at)
        VALUES(?,?,?,?)
        ON CONFLICT(device_library_identifier) DO UPDATE SET
            push_token=excluded.push_token,
            updated_at=excluded.updated_at
        """,
        (device_library_identifier, push_token, now, now),
    )


def get_device(conn: sqlite3.Connection, device_library_identifier: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        """
        SELECT device_library_identifier, push_token, created_at, updated_at
        FROM devices
        WHERE device_library_identifier=?
        """,
        (device_library_identifier,),
    ).fetchone()
    return dict(row) if row else None
