# tidbit_client/routers/auth.py

import logging
import requests
from pydantic import ValidationError

from .. import config
from ..container import Container
from ..exceptions import (
    MalformedResponseError,
    NonceRequestError,
    TidbitClientError,
    VerificationError,
    WalletRejectedError,
    WalletUnavailableError,
)
from ..models.auth_models import NonceResponse, VerifyRequest, VerifyResponse
from ..models.page_models import Page
from ..services.api_service import NONCE_PATH, TidbitApi, VERIFY_PATH, is_success

logger = logging.getLogger(__name__)

# The backend rebuilds this text from the nonce to recover the signer,
# so it must match byte for byte.
LOGIN_MESSAGE_TEMPLATE = (
    "TIDBIT Authentication\n"
    "Nonce: {nonce}\n"
    "Purpose: Login\n"
    "Version: 1"
)

STATUS_REQUESTING_NONCE = "Requesting nonce…"
STATUS_SIGNING = "Signing message…"
STATUS_VERIFYING = "Verifying…"
STATUS_AUTHENTICATED = "Authenticated"
STATUS_LOGIN_FAILED = "Login failed"

# --- Helper Functions ---
def build_login_message(nonce: str) -> str:
    """Returns the exact challenge text the wallet signs for `nonce`."""
    return LOGIN_MESSAGE_TEMPLATE.format(nonce=nonce)

def _set_status(page: Page | None, text: str):
    if page is not None:
        page.status = text

def _request_challenge(api: TidbitApi) -> NonceResponse:
    response = api.request_nonce()
    if not is_success(response):
        raise NonceRequestError(response.status_code)
    try:
        return NonceResponse.model_validate(response.json())
    except ValidationError as e:
        raise MalformedResponseError(NONCE_PATH, f"{e.error_count()} invalid field(s)") from e
    except ValueError as e:
        raise MalformedResponseError(NONCE_PATH, "body is not JSON") from e

def _verify_signature(api: TidbitApi, payload: VerifyRequest) -> VerifyResponse:
    response = api.verify(payload)
    if not is_success(response):
        body = response.text
        logger.error(f"Verify failed: {body}")
        raise VerificationError(response.status_code, body)
    try:
        body = response.json()
    except ValueError as e:
        raise MalformedResponseError(VERIFY_PATH, "body is not JSON") from e
    if not isinstance(body, dict):
        raise MalformedResponseError(VERIFY_PATH, "body is not a JSON object")
    logger.info(f"Verify OK: {body}")
    result = VerifyResponse.model_validate(body)
    if not result.ok:
        raise VerificationError(response.status_code, response.text)
    return result

# --- Flows ---
def login(container: Container, page: Page | None = None) -> bool:
    """
    Nonce -> wallet account -> personal_sign -> verify -> store session.

    Every failure is reported through `page.status` and the log; nothing
    is raised. The session id from the nonce step is persisted only after
    verification succeeds, then the client is sent to the dashboard.
    Returns True when a session was stored.
    """
    if container.wallet is None:
        error = WalletUnavailableError()
        logger.error(error.message)
        _set_status(page, error.message)
        return False

    try:
        _set_status(page, STATUS_REQUESTING_NONCE)
        challenge = _request_challenge(container.api)
        logger.info(f"Nonce: {challenge.nonce}")
        logger.info(f"Session ID: {challenge.session_id}")

        accounts = container.wallet.request_accounts()
        if not accounts:
            raise WalletRejectedError("Wallet returned no accounts")
        address = accounts[0]
        logger.info(f"Wallet: {address}")

        message = build_login_message(challenge.nonce)

        _set_status(page, STATUS_SIGNING)
        signature = container.wallet.personal_sign(message, address)
        logger.debug(f"Signature: {signature}")

        _set_status(page, STATUS_VERIFYING)
        _verify_signature(
            container.api,
            VerifyRequest(session_id=challenge.session_id, address=address, signature=signature),
        )

        container.sessions.save(challenge.session_id)

    except WalletRejectedError as e:
        logger.warning(f"Login aborted by wallet: {e.message}")
        _set_status(page, STATUS_LOGIN_FAILED)
        return False
    except TidbitClientError as e:
        logger.error(f"Login failed [{e.code}]: {e.message}")
        _set_status(page, STATUS_LOGIN_FAILED)
        return False
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error during login: {type(e).__name__} - {e}")
        _set_status(page, STATUS_LOGIN_FAILED)
        return False
    except Exception as e:
        logger.error(f"Unexpected error during login: {e}", exc_info=True)
        _set_status(page, STATUS_LOGIN_FAILED)
        return False

    _set_status(page, STATUS_AUTHENTICATED)
    container.navigator.replace(config.DASHBOARD_PAGE)
    return True

def logout(container: Container) -> None:
    """
    Tells the backend to drop the session, then clears it locally and
    redirects to the index page whatever the backend answered.
    """
    session_id = container.sessions.read()
    if not session_id:
        return

    try:
        response = container.api.logout(session_id)
        logger.info(f"Logout returned HTTP {response.status_code}")
    except requests.exceptions.RequestException as e:
        logger.warning(f"Logout request failed, clearing local session anyway: {e}")

    container.sessions.clear()
    container.navigator.replace(config.INDEX_PAGE)
