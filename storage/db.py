from __future__ import annotations

"""
storage.db
===========

Facade over the storage layer:
- storage/db_core.py            (connection + schema + shared helpers)
- storage/repo_devices.py       (devices)
- storage/repo_registrations.py (device <-> pass registrations)
- storage/repo_passes.py        (passes + the logical pass clock)
- storage/gateway.py            (WalletStore, the handle services receive)
"""

# Core (schema + connection helpers)
from .db_core import (  # noqa: F401
    BASE_DIR,
    DEFAULT_DB_PATH,
    connect,
    transaction,
    read_only,
    get_db_path,
    init_db,
)

from .repo_devices import get_device, upsert_device  # noqa: F401
from .repo_registrations import (  # noqa: F401
    insert_registration,
    delete_registration,
    list_registered_serials,
    count_registrations,
    list_push_tokens,
)
from .repo_passes import (  # noqa: F401
    TAG_STEP,
    current_clock,
    get_pass,
    list_pass_tags,
    write_pass,
)

from .gateway import StorageUnavailable, WalletStore  # noqa: F401

__all__ = [
    # core
    "BASE_DIR",
    "DEFAULT_DB_PATH",
    "connect",
    "transaction",
    "read_only",
    "get_db_path",
    "init_db",
    # devices
    "get_device",
    "upsert_device",
    # registrations
    "insert_registration",
    "delete_registration",
    "list_registered_serials",
    "count_registrations",
    "list_push_tokens",
    # passes
    "TAG_STEP",
    "current_clock",
    "get_pass",
    "list_pass_tags",
    "write_pass",
    # gateway
    "StorageUnavailable",
    "WalletStore",
]
