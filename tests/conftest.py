import pytest
import pytest_asyncio

from oneaccount.infrastructure.memory.ttl_store import TTLStore
from tests.fakes import FakeClock, FakeErroredStore, FakeStore, FakeVerifier


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def errored_store():
    return FakeErroredStore()


@pytest.fixture()
def verifier():
    return FakeVerifier(accept=True)


@pytest.fixture()
def verifier_bad():
    return FakeVerifier(accept=False)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def ttl_store(clock):
    store = TTLStore(ttl_seconds=60, sweep_interval=5, clock=clock)
    try:
        yield store
    finally:
        await store.aclose()
