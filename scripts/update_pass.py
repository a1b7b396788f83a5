#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

# Ensure project root is importable when running this script directly.
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from storage.gateway import StorageUnavailable, WalletStore  # noqa: E402


def _load_payload(raw: Optional[str]) -> Optional[dict]:
    if raw is None:
        return None
    if raw.startswith("@"):
        with open(raw[1:], "r", encoding="utf-8") as f:
            raw = f.read()
    obj = json.loads(raw)
    if not isinstance(obj, dict):
        raise ValueError("payload must be a JSON object")
    return obj


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Write pass content and bump its sync tag")
    ap.add_argument("pass_type_identifier")
    ap.add_argument("serial_number")
    ap.add_argument("--payload", default=None, help="JSON object, or @file.json (default: keep current payload)")
    ap.add_argument("--db", default=None, help="SQLite path (default: WALLET_DB_PATH / storage/wallet.sqlite3)")
    args = ap.parse_args(argv)

    try:
        payload = _load_payload(args.payload)
    except (OSError, ValueError) as e:
        print(f"FAIL: invalid payload: {e}")
        return 2

    store = WalletStore(args.db)
    try:
        store.init_schema()
        tag = store.upsert_pass(
            pass_type_identifier=args.pass_type_identifier,
            serial_number=args.serial_number,
            payload=payload,
        )
        tokens = store.list_push_tokens(
            pass_type_identifier=args.pass_type_identifier,
            serial_number=args.serial_number,
        )
    except StorageUnavailable as e:
        print(f"FAIL: storage unavailable: {e}")
        return 1

    print(f"PASS: {args.pass_type_identifier}/{args.serial_number} lastUpdated={tag}")
    print(f"push tokens to notify: {len(tokens)}")
    for t in tokens:
        print(f"  {t}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
