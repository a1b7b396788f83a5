import json

from scripts.update_pass import main
from storage.gateway import WalletStore

PASS_TYPE = "pass.com.example.coupon"


def test_update_pass_bumps_tag_and_lists_push_tokens(tmp_path, capsys):
    db_path = tmp_path / "script.sqlite3"
    store = WalletStore(db_path)
    store.init_schema()
    store.register_device(
        device_library_identifier="D1",
        pass_type_identifier=PASS_TYPE,
        serial_number="S1",
        push_token="tok-1",
    )

    rc = main([PASS_TYPE, "S1", "--payload", json.dumps({"userName": "Jane"}), "--db", str(db_path)])
    out = capsys.readouterr().out

    assert rc == 0
    got = store.get_pass(pass_type_identifier=PASS_TYPE, serial_number="S1")
    assert got["payload"] == {"userName": "Jane"}
    assert f"lastUpdated={got['last_updated']}" in out
    assert "push tokens to notify: 1" in out
    assert "tok-1" in out


def test_update_pass_rejects_non_object_payload(tmp_path):
    rc = main([PASS_TYPE, "S1", "--payload", "[1, 2]", "--db", str(tmp_path / "x.sqlite3")])
    assert rc == 2
