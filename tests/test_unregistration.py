from passkit import (
    ErrorKind,
    Outcome,
    RegisterRequest,
    RegistrationService,
    UnregisterRequest,
    UnregistrationService,
)
from storage.gateway import WalletStore

PASS_TYPE = "pass.com.example.coupon"


def _setup(tmp_path):
    store = WalletStore(tmp_path / "unreg.sqlite3")
    store.init_schema()
    reg = RegistrationService(store)
    for serial in ("S1", "S2"):
        reg.register(
            RegisterRequest(
                device_library_identifier="D1",
                pass_type_identifier=PASS_TYPE,
                serial_number=serial,
                push_token="tok-1",
            )
        )
    store.upsert_pass(pass_type_identifier=PASS_TYPE, serial_number="S1", payload={"userName": "x"})
    return store, UnregistrationService(store)


def test_unregister_removes_exactly_one_registration(tmp_path):
    store, svc = _setup(tmp_path)
    req = UnregisterRequest(device_library_identifier="D1", pass_type_identifier=PASS_TYPE, serial_number="S1")

    res = svc.unregister(req)
    assert res.status == 200
    assert res.outcome is Outcome.SUCCESS_NO_DATA
    assert store.registered_serials(device_library_identifier="D1", pass_type_identifier=PASS_TYPE) == ["S2"]


def test_repeat_unregister_is_a_failure_and_leaves_records(tmp_path):
    store, svc = _setup(tmp_path)
    req = UnregisterRequest(device_library_identifier="D1", pass_type_identifier=PASS_TYPE, serial_number="S1")

    assert svc.unregister(req).status == 200
    again = svc.unregister(req)

    assert again.status == 500
    assert again.error is ErrorKind.NOT_FOUND
    assert store.get_device("D1") is not None
    assert store.get_pass(pass_type_identifier=PASS_TYPE, serial_number="S1") is not None


def test_last_registration_removed_keeps_device(tmp_path):
    store, svc = _setup(tmp_path)
    for serial in ("S1", "S2"):
        svc.unregister(UnregisterRequest(device_library_identifier="D1", pass_type_identifier=PASS_TYPE, serial_number=serial))

    assert store.registered_serials(device_library_identifier="D1", pass_type_identifier=PASS_TYPE) == []
    assert store.get_device("D1")["push_token"] == "tok-1"


def test_not_found_status_is_configurable(tmp_path):
    store, _ = _setup(tmp_path)
    svc = UnregistrationService(store, not_found_status=404)

    res = svc.unregister(UnregisterRequest(device_library_identifier="D9", pass_type_identifier=PASS_TYPE, serial_number="S1"))
    assert res.status == 404
