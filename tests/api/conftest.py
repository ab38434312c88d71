import pytest
from fastapi.testclient import TestClient

from oneaccount.config import OneAccount, OneAccountConfig
from oneaccount.infrastructure.memory.ttl_store import TTLStore
from oneaccount.main import create_app
from tests.fakes import FakeVerifier

CALLBACK = "/oneaccountauth"


@pytest.fixture()
def errors_seen():
    return []


@pytest.fixture()
def verifier():
    return FakeVerifier(accept=True)


@pytest.fixture()
def oneaccount(verifier, errors_seen):
    return OneAccount(
        OneAccountConfig(
            store=TTLStore(),
            verifier=verifier,
            on_error=errors_seen.append,
        )
    )


@pytest.fixture()
def client(oneaccount):
    app = create_app(oneaccount)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def bearer(token: str, uuid: str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"BEARER {token}"}
    if uuid is not None:
        headers["uuid"] = uuid
    return headers
