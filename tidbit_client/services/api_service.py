import requests
import logging

from .. import config
from ..models.auth_models import VerifyRequest

logger = logging.getLogger(__name__)

SESSION_HEADER = "x-session-id"

# --- Endpoints ---
NONCE_PATH = "/auth/evm/nonce"
VERIFY_PATH = "/auth/evm/verify"
LOGOUT_PATH = "/auth/logout"
SESSION_PATH = "/auth/session"
DOC_LIST_PATH = "/api/doc/list"
HEALTH_PATH = "/health"


def is_success(response: requests.Response) -> bool:
    """2xx only; an unfollowed redirect is not a success."""
    return 200 <= response.status_code < 300


class TidbitApi:
    """
    Thin wrapper over the TIDBIT backend endpoints.

    Every method returns the raw ``requests.Response``; deciding what a
    status code means is left to the caller. Transport failures surface
    as ``requests.RequestException``.
    """

    def __init__(self, base_url: str = config.API_URL, http: requests.Session | None = None, timeout: float | None = config.HTTP_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def request_nonce(self) -> requests.Response:
        """Starts a login attempt. The endpoint takes no request body."""
        url = self._url(NONCE_PATH)
        logger.debug(f"POST {url}")
        return self.http.post(url, timeout=self.timeout)

    def verify(self, payload: VerifyRequest) -> requests.Response:
        url = self._url(VERIFY_PATH)
        logger.debug(f"POST {url} for address {payload.address}")
        return self.http.post(url, json=payload.model_dump(), timeout=self.timeout)

    def logout(self, session_id: str) -> requests.Response:
        url = self._url(LOGOUT_PATH)
        logger.debug(f"POST {url}")
        return self.http.post(url, headers={SESSION_HEADER: session_id}, timeout=self.timeout)

    def get(self, path: str, session_id: str) -> requests.Response:
        """Authenticated read: the session travels in the x-session-id header, never a cookie."""
        url = self._url(path)
        logger.debug(f"GET {url}")
        return self.http.get(url, headers={SESSION_HEADER: session_id}, timeout=self.timeout)

    def health(self) -> bool:
        """Returns True if the backend answers its liveness probe."""
        url = self._url(HEALTH_PATH)
        try:
            response = self.http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Health check against {url} failed: {type(e).__name__} - {e}")
            return False
        if response.status_code != 200:
            logger.warning(f"Health check against {url} returned HTTP {response.status_code}")
            return False
        return True
