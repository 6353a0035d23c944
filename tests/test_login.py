from __future__ import annotations

import requests

from conftest import make_response
from tidbit_client import config
from tidbit_client.models.page_models import index_page
from tidbit_client.routers.auth import build_login_message, login


def _nonce_ok(http, session_id="s1", nonce="n1"):
    http.add("POST", "/auth/evm/nonce", make_response(200, {"session_id": session_id, "nonce": nonce}))


def test_login_message_is_exact() -> None:
    assert build_login_message("abc123") == "TIDBIT Authentication\nNonce: abc123\nPurpose: Login\nVersion: 1"


def test_login_message_keeps_nonce_verbatim() -> None:
    assert "Nonce: {x}%s\n" in build_login_message("{x}%s")


def test_login_end_to_end(container, http, wallet, sessions) -> None:
    _nonce_ok(http)
    http.add("POST", "/auth/evm/verify", make_response(200, {"ok": True, "wallet": "0xaaa", "chain": "evm"}))
    page = index_page()

    assert login(container, page) is True

    assert sessions.read() == "s1"
    assert page.status == "Authenticated"
    assert container.navigator.location == config.DASHBOARD_PAGE
    assert wallet.calls == [
        ("request_accounts",),
        ("personal_sign", build_login_message("n1"), "0xAAA"),
    ]
    method, path, kwargs = http.calls[-1]
    assert (method, path) == ("POST", "/auth/evm/verify")
    assert kwargs["json"] == {"session_id": "s1", "address": "0xAAA", "signature": "0xSIG"}


def test_stored_token_comes_from_nonce_step(container, http, sessions) -> None:
    _nonce_ok(http, session_id="from-nonce")
    http.add("POST", "/auth/evm/verify", make_response(200, {"ok": True, "session_id": "from-verify"}))

    assert login(container) is True
    assert sessions.read() == "from-nonce"


def test_nonce_failure_skips_wallet(container, http, wallet, sessions) -> None:
    http.add("POST", "/auth/evm/nonce", make_response(500, text="boom"))
    page = index_page()

    assert login(container, page) is False

    assert wallet.calls == []
    assert sessions.read() is None
    assert page.status == "Login failed"
    assert container.navigator.location is None


def test_nonce_body_missing_fields_fails_fast(container, http, wallet, sessions) -> None:
    http.add("POST", "/auth/evm/nonce", make_response(200, {"nonce": "n1"}))

    assert login(container) is False
    assert wallet.calls == []
    assert sessions.read() is None


def test_nonce_body_not_json(container, http, wallet) -> None:
    http.add("POST", "/auth/evm/nonce", make_response(200, text="<html>"))

    assert login(container) is False
    assert wallet.calls == []


def test_verify_failure_persists_nothing(container, http, wallet, sessions) -> None:
    _nonce_ok(http)
    http.add("POST", "/auth/evm/verify", make_response(401, text="Invalid signature"))
    page = index_page()

    assert login(container, page) is False

    assert len(wallet.calls) == 2
    assert sessions.read() is None
    assert page.status == "Login failed"
    assert container.navigator.history == []


def test_verify_ok_false_is_a_failure(container, http, sessions) -> None:
    _nonce_ok(http)
    http.add("POST", "/auth/evm/verify", make_response(200, {"ok": False}))

    assert login(container) is False
    assert sessions.read() is None


def test_verify_body_not_json_is_a_failure(container, http, sessions) -> None:
    _nonce_ok(http)
    http.add("POST", "/auth/evm/verify", make_response(200, text="OK"))

    assert login(container) is False
    assert sessions.read() is None


def test_missing_wallet_makes_no_requests(container, http, sessions) -> None:
    container.wallet = None
    page = index_page()

    assert login(container, page) is False

    assert http.calls == []
    assert page.status == "Wallet provider not found"
    assert sessions.read() is None


def test_account_rejection_aborts(container, http, wallet, sessions) -> None:
    _nonce_ok(http)
    wallet.reject_accounts = True
    page = index_page()

    assert login(container, page) is False
    assert http.paths() == ["/auth/evm/nonce"]
    assert page.status == "Login failed"
    assert sessions.read() is None


def test_empty_account_list_aborts(container, http, wallet, sessions, monkeypatch) -> None:
    _nonce_ok(http)
    monkeypatch.setattr(wallet, "request_accounts", lambda: [])
    page = index_page()

    assert login(container, page) is False
    assert http.paths() == ["/auth/evm/nonce"]
    assert page.status == "Login failed"
    assert sessions.read() is None
    assert container.navigator.location is None


def test_nonce_redirect_is_not_success(container, http, wallet, sessions) -> None:
    http.add("POST", "/auth/evm/nonce", make_response(302, {"session_id": "s1", "nonce": "n1"}))

    assert login(container) is False
    assert wallet.calls == []
    assert sessions.read() is None


def test_signature_rejection_aborts(container, http, wallet, sessions) -> None:
    _nonce_ok(http)
    wallet.reject_sign = True
    page = index_page()

    assert login(container, page) is False
    assert http.paths() == ["/auth/evm/nonce"]
    assert page.status == "Login failed"
    assert sessions.read() is None


def test_network_error_is_reported(container, http, sessions) -> None:
    http.add("POST", "/auth/evm/nonce", requests.ConnectionError("refused"))
    page = index_page()

    assert login(container, page) is False
    assert page.status == "Login failed"
    assert sessions.read() is None


def test_store_failure_leaves_no_session(container, http, sessions, monkeypatch) -> None:
    _nonce_ok(http)
    http.add("POST", "/auth/evm/verify", make_response(200, {"ok": True}))

    def broken_save(token):
        raise OSError("disk full")

    monkeypatch.setattr(sessions, "save", broken_save)

    assert login(container) is False
    assert sessions.read() is None
    assert container.navigator.location is None
