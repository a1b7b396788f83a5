from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, Iterable, Optional

from .db_core import _safe_json_loads, _utc_now_iso

# Sync responses hand out at most clock + 1, so each write steps past that.
TAG_STEP = 2


def _row_to_pass(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "pass_type_identifier": row["pass_type_identifier"],
        "serial_number": row["serial_number"],
        "last_updated": int(row["last_updated"]),
        "payload": _safe_json_loads(row["payload_json"]) or {},
        "updated_at": row["updated_at"],
    }


def get_pass(conn: sqlite3.Connection, *, pass_type_identifier: str, serial_number: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        """
        SELECT pass_type_identifier, serial_number, last_updated, payload_json, updated_at
        FROM passes
        WHERE pass_type_identifier=? AND serial_number=?
        """,
        (pass_type_identifier, serial_number),
    ).fetchone()
    return _row_to_pass(row) if row else None


def list_pass_tags(
    conn: sqlite3.Connection,
    *,
    pass_type_identifier: str,
    serial_numbers: Iterable[str],
) -> Dict[str, int]:
    """Map serial_number -> last_updated for the existing passes among `serial_numbers`."""
    serials = list(dict.fromkeys(serial_numbers))
    out: Dict[str, int] = {}
    # Stay well below SQLITE_MAX_VARIABLE_NUMBER on old builds.
    chunk = 500
    for i in range(0, len(serials), chunk):
        part = serials[i : i + chunk]
        marks = ",".join("?" for _ in part)
        rows = conn.execute(
            f"""
            SELECT serial_number, last_updated
            FROM passes
            WHERE pass_type_identifier=? AND serial_number IN ({marks})
            """,
            (pass_type_identifier, *part),
        ).fetchall()
        for r in rows:
            out[str(r["serial_number"])] = int(r["last_updated"])
    return out


def current_clock(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT value FROM pass_clock WHERE id=1").fetchone()
    return int(row["value"]) if row else 0


def _advance_clock(conn: sqlite3.Connection, *, at_least: int = 0) -> int:
    # UPDATE first so the write lock is taken before the value is read.
    conn.execute(
        "UPDATE pass_clock SET value = MAX(value + ?, ?) WHERE id=1",
        (TAG_STEP, int(at_least)),
    )
    return current_clock(conn)


def _raise_clock_to(conn: sqlite3.Connection, value: int) -> None:
    conn.execute("UPDATE pass_clock SET value = MAX(value, ?) WHERE id=1", (int(value),))


def write_pass(
    conn: sqlite3.Connection,
    *,
    pass_type_identifier: str,
    serial_number: str,
    payload: Optional[Dict[str, Any]] = None,
    last_updated: Optional[int] = None,
) -> int:
    """Create or update a pass and return its new tag.

    Without `last_updated` the tag is drawn from pass_clock. An explicit tag is
    meant for seeding and must be greater than `current_clock + 1`: sync may
    already have handed out `current_clock + 1`, and every stored tag is at
    most `current_clock`. Tags are always >= 1.
    When `payload` is None an existing payload is kept.
    """
    existing = get_pass(conn, pass_type_identifier=pass_type_identifier, serial_number=serial_number)

    if last_updated is None:
        tag = _advance_clock(conn, at_least=(existing["last_updated"] + 1) if existing else 0)
    else:
        tag = int(last_updated)
        floor = current_clock(conn) + 1
        if tag <= floor:
            raise ValueError(
                f"last_updated must be greater than {floor} (got {tag}) "
                f"for {pass_type_identifier}/{serial_number}"
            )
        _raise_clock_to(conn, tag)

    if payload is None:
        payload = existing["payload"] if existing else {}

    conn.execute(
        """
        INSERT INTO passes(pass_type_identifier, serial_number, last_updated, payload_json, updated_at)
        VALUES(?,?,?,?,?)
        ON CONFLICT(pass_type_identifier, serial_number) DO UPDATE SET
            last_updated=excluded.last_updated,
            payload_json=excluded.payload_json,
            updated_at=excluded.updated_at
        """,
        (
            pass_type_identifier,
            serial_number,
            tag,
            json.dumps(payload, ensure_ascii=False, sort_keys=True),
            _utc_now_iso(),
        ),
    )
    return tag

