from __future__ import annotations

"""
storage.gateway
===============

`WalletStore` is the storage handle injected into every passkit service.

It owns the database path (no process-wide connection), opens one
connection per call, and translates sqlite3 failures into
`StorageUnavailable` so services never have to know about sqlite3.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from . import repo_devices, repo_passes, repo_registrations
from .db_core import get_db_path, init_db, read_only, transaction

logger = logging.getLogger(__name__)


class StorageUnavailable(RuntimeError):
    """Any persistence I/O failure. Never retried inside the store."""


class WalletStore:
    def __init__(self, db_path: Union[str, Path, None] = None) -> None:
        self.db_path = Path(db_path).expanduser() if db_path else get_db_path()

    def __repr__(self) -> str:
        return f"WalletStore(db_path={str(self.db_path)!r})"

    @contextmanager
    def _ro(self):
        try:
            with read_only(self.db_path) as conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageUnavailable(f"{type(e).__name__}: {e}") from e

    @contextmanager
    def _txn(self, *, immediate: bool = False):
        try:
            with transaction(self.db_path, immediate=immediate) as conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageUnavailable(f"{type(e).__name__}: {e}") from e

    def init_schema(self) -> None:
        try:
            init_db(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"{type(e).__name__}: {e}") from e
        logger.info(f"wallet store ready: {self.db_path}")

    # =====================
    # devices + registrations
    # =====================

    def register_device(
        self,
        *,
        device_library_identifier: str,
        pass_type_identifier: str,
        serial_number: str,
        push_token: str,
    ) -> bool:
        """Upsert the device, then create the registration if absent.

        Both writes share one transaction. Returns True when a new registration was created.
        """
        with self._txn(immediate=True) as conn:
            repo_devices.upsert_device(
                conn,
                device_library_identifier=device_library_identifier,
                push_token=push_token,
            )
            return repo_registrations.insert_registration(
                conn,
                device_library_identifier=device_library_identifier,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
            )

    def delete_registration(
        self,
        *,
        device_library_identifier: str,
        pass_type_identifier: str,
        serial_number: str,
    ) -> bool:
        with self._txn() as conn:
            return repo_registrations.delete_registration(
                conn,
                device_library_identifier=device_library_identifier,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
            )

    def registered_serials(self, *, device_library_identifier: str, pass_type_identifier: str) -> List[str]:
        with self._ro() as conn:
            return repo_registrations.list_registered_serials(
                conn,
                device_library_identifier=device_library_identifier,
                pass_type_identifier=pass_type_identifier,
            )

    def count_registrations(
        self,
        *,
        device_library_identifier: str,
        pass_type_identifier: str,
        serial_number: str,
    ) -> int:
        with self._ro() as conn:
            return repo_registrations.count_registrations(
                conn,
                device_library_identifier=device_library_identifier,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
            )

    def get_device(self, device_library_identifier: str) -> Optional[Dict[str, Any]]:
        with self._ro() as conn:
            return repo_devices.get_device(conn, device_library_identifier)

    def list_push_tokens(self, *, pass_type_identifier: str, serial_number: str) -> List[str]:
        with self._ro() as conn:
            return repo_registrations.list_push_tokens(
                conn,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
            )

    # =====================
    # passes
    # =====================

    def get_pass(self, *, pass_type_identifier: str, serial_number: str) -> Optional[Dict[str, Any]]:
        with self._ro() as conn:
            return repo_passes.get_pass(
                conn,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
            )

    def pass_tags(self, *, pass_type_identifier: str, serial_numbers: Iterable[str]) -> Dict[str, int]:
        with self._ro() as conn:
            return repo_passes.list_pass_tags(
                conn,
                pass_type_identifier=pass_type_identifier,
                serial_numbers=serial_numbers,
            )

    def pass_clock(self) -> int:
        with self._ro() as conn:
            return repo_passes.current_clock(conn)

    def upsert_pass(
        self,
        *,
        pass_type_identifier: str,
        serial_number: str,
        payload: Optional[Dict[str, Any]] = None,
        last_updated: Optional[int] = None,
    ) -> int:
        """Write pass content and return the new tag (see repo_passes.write_pass)."""
        with self._txn(immediate=True) as conn:
            return repo_passes.write_pass(
                conn,
                pass_type_identifier=pass_type_identifier,
                serial_number=serial_number,
                payload=payload,
                last_updated=last_updated,
            )

    def touch_pass(self, *, pass_type_identifier: str, serial_number: str) -> int:
        """Bump a pass's tag without changing its payload."""
        return self.upsert_pass(pass_type_identifier=pass_type_identifier, serial_number=serial_number)
