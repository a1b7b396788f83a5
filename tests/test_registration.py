from passkit import Outcome, RegisterRequest, RegistrationService
from storage.gateway import WalletStore


def _store(tmp_path) -> WalletStore:
    store = WalletStore(tmp_path / "reg.sqlite3")
    store.init_schema()
    return store


def _req(push_token: str = "tok-1") -> RegisterRequest:
    return RegisterRequest(
        device_library_identifier="D1",
        pass_type_identifier="pass.com.example.coupon",
        serial_number="S1",
        push_token=push_token,
    )


def test_register_twice_is_idempotent(tmp_path):
    store = _store(tmp_path)
    svc = RegistrationService(store)

    first = svc.register(_req())
    second = svc.register(_req())

    assert first.status == 201
    assert first.outcome is Outcome.SUCCESS_NO_DATA
    assert second.status == 200
    assert second.outcome is Outcome.SUCCESS_NO_DATA
    assert store.count_registrations(
        device_library_identifier="D1",
        pass_type_identifier="pass.com.example.coupon",
        serial_number="S1",
    ) == 1


def test_reregister_overwrites_push_token(tmp_path):
    store = _store(tmp_path)
    svc = RegistrationService(store)

    svc.register(_req("tok-old"))
    res = svc.register(_req("tok-new"))

    assert res.status == 200
    assert store.get_device("D1")["push_token"] == "tok-new"


def test_same_device_new_serial_is_a_new_registration(tmp_path):
    store = _store(tmp_path)
    svc = RegistrationService(store)
    svc.register(_req())

    res = svc.register(
        RegisterRequest(
            device_library_identifier="D1",
            pass_type_identifier="pass.com.example.coupon",
            serial_number="S2",
            push_token="tok-1",
        )
    )
    assert res.status == 201
    assert store.registered_serials(
        device_library_identifier="D1",
        pass_type_identifier="pass.com.example.coupon",
    ) == ["S1", "S2"]


def test_register_does_not_require_existing_pass(tmp_path):
    store = _store(tmp_path)
    res = RegistrationService(store).register(_req())

    assert res.status == 201
    assert store.get_pass(pass_type_identifier="pass.com.example.coupon", serial_number="S1") is None


def test_empty_identifiers_are_stored_as_given(tmp_path):
    store = _store(tmp_path)
    svc = RegistrationService(store)
    req = RegisterRequest(device_library_identifier="", pass_type_identifier="", serial_number="", push_token="")

    assert svc.register(req).status == 201
    assert svc.register(req).status == 200


def test_concurrent_registration_creates_one_row(tmp_path):
    from concurrent.futures import ThreadPoolExecutor
    from threading import Barrier

    db_path = tmp_path / "reg.sqlite3"
    _store(tmp_path)
    workers = 8
    barrier = Barrier(workers)

    def _register(i: int):
        svc = RegistrationService(WalletStore(db_path))
        barrier.wait()
        return svc.register(_req(f"tok-{i}"))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_register, range(workers)))

    statuses = sorted(r.status for r in results)
    assert statuses == [200] * (workers - 1) + [201]
    assert WalletStore(db_path).count_registrations(
        device_library_identifier="D1",
        pass_type_identifier="pass.com.example.coupon",
        serial_number="S1",
    ) == 1
