import pytest
from fastapi import HTTPException
from starlette.requests import Request

from oneaccount.presentation.context import (
    DATA_KEY,
    data,
    is_authenticated,
    require_oneaccount_data,
)


def make_request(**extra) -> Request:
    scope = {"type": "http", "method": "GET", "path": "/", "headers": [], **extra}
    return Request(scope)


def test_data_after_pickup():
    request = make_request(**{DATA_KEY: b'{"name":"bob"}'})

    assert data(request) == b'{"name":"bob"}'
    assert is_authenticated(request) is True
    assert require_oneaccount_data(request) == b'{"name":"bob"}'


def test_no_data_without_pickup():
    request = make_request()

    assert data(request) is None
    assert is_authenticated(request) is False
    with pytest.raises(HTTPException) as ei:
        require_oneaccount_data(request)
    assert ei.value.status_code == 401


def test_only_bytes_count_as_data():
    request = make_request(**{DATA_KEY: "not-bytes"})
    assert data(request) is None
