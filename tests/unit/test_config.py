import pytest

from oneaccount.config import OneAccount, OneAccountConfig
from oneaccount.domain.errors import MissingIdentifier
from oneaccount.infrastructure.adapter_store import AdapterStore
from oneaccount.infrastructure.memory.ttl_store import TTLStore
from oneaccount.infrastructure.verifier.http_verifier import HttpVerifier


@pytest.mark.asyncio
async def test_defaults():
    oa = OneAccount()

    assert isinstance(oa.store, TTLStore)
    assert isinstance(oa.verifier, HttpVerifier)
    assert oa.callback_path == "oneaccountauth"
    assert oa.on_error is None

    await oa.aclose()


def test_custom_store_and_verifier_are_used(store, verifier):
    oa = OneAccount(OneAccountConfig(store=store, verifier=verifier))
    assert oa.store is store
    assert oa.verifier is verifier


def test_setter_or_getter_builds_adapter_store(verifier):
    oa = OneAccount(OneAccountConfig(getter=lambda k: b"", verifier=verifier))
    assert isinstance(oa.store, AdapterStore)
    assert oa.store.setter is None


def test_store_and_setter_are_exclusive(store):
    with pytest.raises(ValueError):
        OneAccountConfig(store=store, setter=lambda k, v: None)


def test_http_client_needs_default_verifier(verifier):
    import httpx

    with pytest.raises(ValueError):
        OneAccountConfig(verifier=verifier, http_client=httpx.AsyncClient())


@pytest.mark.parametrize(
    "configured, path, expected",
    [
        ("oneaccountauth", "/oneaccountauth", True),
        ("/oneaccountauth/", "/oneaccountauth", True),
        ("oneaccountauth", "/oneaccountauth/", True),
        ("auth/callback", "/auth/callback", True),
        ("oneaccountauth", "/other", False),
        ("", "/oneaccountauth", False),
        ("", "/", False),
    ],
)
def test_matches(store, verifier, configured, path, expected):
    oa = OneAccount(
        OneAccountConfig(store=store, verifier=verifier, callback_path=configured)
    )
    assert oa.matches(path) is expected


@pytest.mark.asyncio
async def test_report_calls_sync_and_async_listeners(store, verifier):
    seen = []

    oa = OneAccount(
        OneAccountConfig(store=store, verifier=verifier, on_error=seen.append)
    )
    await oa.report(MissingIdentifier())

    async def listener(exc):
        seen.append(exc)

    oa_async = OneAccount(
        OneAccountConfig(store=store, verifier=verifier, on_error=listener)
    )
    await oa_async.report(MissingIdentifier())

    assert len(seen) == 2
    assert all(isinstance(e, MissingIdentifier) for e in seen)


@pytest.mark.asyncio
async def test_report_swallows_listener_failure(store, verifier):
    def listener(exc):
        raise RuntimeError("telemetry down")

    oa = OneAccount(OneAccountConfig(store=store, verifier=verifier, on_error=listener))

    await oa.report(MissingIdentifier())  # does not raise


@pytest.mark.asyncio
async def test_start_and_aclose_drive_ttl_store_sweeper(verifier):
    oa = OneAccount(OneAccountConfig(verifier=verifier))
    oa.start()
    assert oa.store.running
    await oa.aclose()
    assert not oa.store.running
