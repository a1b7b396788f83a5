from __future__ import annotations

import sqlite3
from typing import List

from .db_core import _utc_now_iso


def insert_registration(
    conn: sqlite3.Connection,
    *,
    device_library_identifier: str,
    pass_type_identifier: str,
    serial_number: str,
) -> bool:
    """Insert the triple unless it already exists. Returns True if a row was written.

    UNIQUE(device, pass type, serial) makes this a single atomic create-if-absent.
    """
    cur = conn.execute(
        """
        INSERT INTO registrations(device_library_identifier, pass_type_identifier, serial_number, created_at)
        VALUES(?,?,?,?)
        ON CONFLICT(device_library_identifier, pass_type_identifier, serial_number) DO NOTHING
        """,
        (device_library_identifier, pass_type_identifier, serial_number, _utc_now_iso()),
    )
    return cur.rowcount == 1


def delete_registration(
    conn: sqlite3.Connection,
    *,
    device_library_identifier: str,
    pass_type_identifier: str,
    serial_number: str,
) -> bool:
    cur = conn.execute(
        """
        DELETE FROM registrations
        WHERE device_library_identifier=? AND pass_type_identifier=? AND serial_number=?
        """,
        (device_library_identifier, pass_type_identifier, serial_number),
    )
    return cur.rowcount > 0


def list_registered_serials(
    conn: sqlite3.Connection,
    *,
    device_library_identifier: str,
    pass_type_identifier: str,
) -> List[str]:
    rows = conn.execute(
        """
        SELECT serial_number
        FROM registrations
        WHERE device_library_identifier=? AND pass_type_identifier=?
        ORDER BY serial_number ASC
        """,
        (device_library_identifier, pass_type_identifier),
    ).fetchall()
    return [str(r["serial_number"]) for r in rows]


def count_registrations(
    conn: sqlite3.Connection,
    *,
    device_library_identifier: str,
    pass_type_identifier: str,
    serial_number: str,
) -> int:
    row = conn.execute(
        """
        SELECT COUNT(*) AS n
        FROM registrations
        WHERE device_library_identifier=? AND pass_type_identifier=? AND serial_number=?
        """,
        (device_library_identifier, pass_type_identifier, serial_number),
    ).fetchone()
    return int(row["n"] if row else 0)


def list_push_tokens(
    conn: sqlite3.Connection,
    *,
    pass_type_identifier: str,
    serial_number: str,
) -> List[str]:
    """Push tokens of every device registered for one pass."""
    rows = conn.execute(
        """
        SELECT DISTINCT d.push_token AS push_token
        FROM registrations r
        JOIN devices d ON d.device_library_identifier = r.device_library_identifier
        WHERE r.pass_type_identifier=? AND r.serial_number=?
        ORDER BY d.push_token ASC
        """,
        (pass_type_identifier, serial_number),
    ).fetchall()
    return [str(r["push_token"]) for r in rows]
