import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Backend base URL (the TIDBIT identity server listens on :4100 by default)
API_URL = os.getenv("TIDBIT_API_URL", "http://localhost:4100").rstrip("/")

# --- Session persistence ---
SESSION_FILE = os.path.expanduser(os.getenv("TIDBIT_SESSION_FILE", "~/.tidbit/session.json"))
SESSION_KEY = os.getenv("TIDBIT_SESSION_KEY", "tidbit_session_id")

# --- Landing pages ---
INDEX_PAGE = os.getenv("TIDBIT_INDEX_PAGE", "/index.html")
DASHBOARD_PAGE = os.getenv("TIDBIT_DASHBOARD_PAGE", "/dashboard.html")

# Local EVM key standing in for the browser wallet. Unset means no wallet provider.
WALLET_PRIVATE_KEY = os.getenv("TIDBIT_WALLET_PRIVATE_KEY")

LOG_LEVEL = os.getenv("TIDBIT_LOG_LEVEL", "INFO").upper()

# --- HTTP timeout (seconds, 0 disables) ---
try:
    HTTP_TIMEOUT = float(os.getenv("TIDBIT_HTTP_TIMEOUT", "30"))
except ValueError:
    logger.warning("Invalid TIDBIT_HTTP_TIMEOUT in environment. Defaulting to 30 seconds.")
    HTTP_TIMEOUT = 30.0

if HTTP_TIMEOUT <= 0:
    HTTP_TIMEOUT = None

if not WALLET_PRIVATE_KEY:
    logger.debug("TIDBIT_WALLET_PRIVATE_KEY not set. Wallet login will be unavailable.")
