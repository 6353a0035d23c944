from __future__ import annotations

import json
from urllib.parse import urlparse

import pytest
import requests

from tidbit_client.container import Container
from tidbit_client.exceptions import WalletRejectedError
from tidbit_client.services.api_service import TidbitApi
from tidbit_client.services.navigation import Navigator
from tidbit_client.services.wallet_service import WalletProvider
from tidbit_client.session_store import MemorySessionStore

BASE_URL = "http://tidbit.test"


def make_response(status_code: int, json_body=None, text: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    return response


class FakeHttp:
    """Stands in for requests.Session; answers from a (method, path) table."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], object] = {}
        self.calls: list[tuple[str, str, dict]] = []

    def add(self, method: str, path: str, result) -> None:
        self.routes[(method, path)] = result

    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]

    def _handle(self, method: str, url: str, **kwargs):
        path = urlparse(url).path
        self.calls.append((method, path, kwargs))
        result = self.routes.get((method, path))
        if result is None:
            raise AssertionError(f"unexpected request {method} {path}")
        if isinstance(result, Exception):
            raise result
        return result

    def post(self, url: str, **kwargs):
        return self._handle("POST", url, **kwargs)

    def get(self, url: str, **kwargs):
        return self._handle("GET", url, **kwargs)


class FakeWallet(WalletProvider):
    def __init__(self, address: str = "0xAAA", signature: str = "0xSIG") -> None:
        self.address = address
        self.signature = signature
        self.reject_accounts = False
        self.reject_sign = False
        self.calls: list[tuple] = []

    def request_accounts(self):
        self.calls.append(("request_accounts",))
        if self.reject_accounts:
            raise WalletRejectedError("User rejected the request.")
        return [self.address]

    def personal_sign(self, message, address):
        self.calls.append(("personal_sign", message, address))
        if self.reject_sign:
            raise WalletRejectedError("User denied message signature.")
        return self.signature


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def wallet() -> FakeWallet:
    return FakeWallet()


@pytest.fixture
def sessions() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def container(http: FakeHttp, wallet: FakeWallet, sessions: MemorySessionStore) -> Container:
    return Container(
        api=TidbitApi(base_url=BASE_URL, http=http, timeout=5),
        sessions=sessions,
        wallet=wallet,
        navigator=Navigator(),
    )
