import pytest

from secret_store import AdminSecretStore


def test_verify_and_update():
    store = AdminSecretStore("truview")
    assert store.verify("truview")
    assert not store.verify("nope")
    assert store.update("  fresh-code  ") == "fresh-code"
    assert store.value == "fresh-code"
    assert not store.verify("truview")


def test_rejects_short_codes():
    store = AdminSecretStore("truview")
    with pytest.raises(ValueError):
        store.update(" ab ")
    assert store.value == "truview"


def test_verify_rejects_non_strings():
    assert not AdminSecretStore("truview").verify(None)
