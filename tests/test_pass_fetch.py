from passkit import ErrorKind, Outcome, PassFetchService, PassRequest
from storage.gateway import WalletStore

PASS_TYPE = "pass.com.example.coupon"


def _setup(tmp_path, **kwargs):
    store = WalletStore(tmp_path / "fetch.sqlite3")
    store.init_schema()
    store.upsert_pass(
        pass_type_identifier=PASS_TYPE,
        serial_number="S1",
        payload={"userName": "John Doe"},
        last_updated=1000,
    )
    return store, PassFetchService(store, **kwargs)


def test_modified_pass_returns_full_payload(tmp_path):
    _, svc = _setup(tmp_path)

    for since in (None, 0, 999):
        res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="S1", if_modified_since=since))
        assert res.status == 200
        assert res.outcome is Outcome.SUCCESS_WITH_DATA
        assert res.body["userName"] == "John Doe"
        assert res.body["serialNumber"] == "S1"
        assert res.body["lastUpdated"] == 1000


def test_unchanged_pass_returns_304(tmp_path):
    _, svc = _setup(tmp_path)

    for since in (1000, 1001, 10**12):
        res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="S1", if_modified_since=since))
        assert res.status == 304
        assert res.outcome is Outcome.CLIENT_UNCHANGED
        assert res.body is None


def test_unknown_serial_is_a_failure(tmp_path):
    _, svc = _setup(tmp_path)

    res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="", if_modified_since=1000))
    assert res.status == 500
    assert res.outcome is Outcome.FAILURE
    assert res.error is ErrorKind.NOT_FOUND


def test_not_found_status_is_configurable(tmp_path):
    _, svc = _setup(tmp_path, not_found_status=404)

    res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="nope"))
    assert res.status == 404
    assert res.error is ErrorKind.NOT_FOUND


def test_get_pass_does_not_mutate(tmp_path):
    store, svc = _setup(tmp_path)
    svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="S1"))

    got = store.get_pass(pass_type_identifier=PASS_TYPE, serial_number="S1")
    assert got["last_updated"] == 1000
    assert got["payload"] == {"userName": "John Doe"}


def test_missing_header_always_sends_the_pass(tmp_path):
    store = WalletStore(tmp_path / "fetch.sqlite3")
    store.init_schema()
    tag = store.upsert_pass(pass_type_identifier=PASS_TYPE, serial_number="S1", payload={"userName": "a"})
    svc = PassFetchService(store)

    res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="S1"))
    assert res.status == 200
    assert res.body["lastUpdated"] == tag

    res = svc.get_pass(PassRequest(pass_type_identifier=PASS_TYPE, serial_number="S1", if_modified_since=tag))
    assert res.status == 304
