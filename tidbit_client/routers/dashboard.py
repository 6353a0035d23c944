# tidbit_client/routers/dashboard.py

import json
import logging
import requests
from typing import Any, List
from pydantic import ValidationError

from .. import config
from ..container import Container
from ..models.auth_models import SessionInfo
from ..models.data_models import DocumentSummary
from ..models.page_models import Page
from ..services.api_service import DOC_LIST_PATH, SESSION_PATH, is_success

logger = logging.getLogger(__name__)

# --- Helper Functions ---
def _expire_session(container: Container):
    """Drops the local session and sends the user back to the index page."""
    container.sessions.clear()
    container.navigator.replace(config.INDEX_PAGE)

def render_document(doc: DocumentSummary) -> str:
    """Renders one document list entry as a text block."""
    return "\n".join([
        doc.display_label(),
        f"Hash: {doc.hash_hex}",
        f"Doc ID: {doc.logical_id}",
        f"Owner: {doc.display_owner()}",
    ])

def describe_session(data: Any) -> str | None:
    """One-line summary of a session info payload, or None if it has no wallet."""
    if not isinstance(data, dict):
        return None
    try:
        info = SessionInfo.model_validate(data)
    except ValidationError:
        return None
    if not info.wallet:
        return None
    return f"Signed in as {info.wallet} ({info.chain or 'unknown chain'})"

def authenticated_get(container: Container, path: str) -> Any | None:
    """
    GET `path` with the stored session attached.

    Returns the decoded JSON body, or None when the caller should not
    proceed: no session (redirected), 401 (session cleared and
    redirected), any other non-success status, transport error or a
    body that is not JSON. Only the 401 case touches the session.
    """
    session_id = container.sessions.read()
    if not session_id:
        container.navigator.replace(config.INDEX_PAGE)
        return None

    try:
        response = container.api.get(path, session_id)
    except requests.exceptions.RequestException as e:
        logger.error(f"GET {path} failed: {type(e).__name__} - {e}")
        return None

    if response.status_code == 401:
        logger.info(f"Session expired while requesting {path}")
        _expire_session(container)
        return None

    if not is_success(response):
        logger.warning(f"GET {path} returned HTTP {response.status_code}: {response.text[:200]}")
        return None

    try:
        return response.json()
    except ValueError:
        logger.warning(f"GET {path} returned a non-JSON body")
        return None

# --- Loaders ---
def load_session_info(container: Container, page: Page) -> None:
    """
    Renders the backend's session record into `page.session_info`.

    Stricter than `authenticated_get`: any non-success answer ends the
    session locally.
    """
    session_id = container.sessions.read()
    if not session_id:
        container.navigator.replace(config.INDEX_PAGE)
        return

    try:
        response = container.api.get(SESSION_PATH, session_id)
    except requests.exceptions.RequestException as e:
        logger.error(f"Session info request failed: {type(e).__name__} - {e}")
        return

    if not is_success(response):
        logger.info(f"Session info returned HTTP {response.status_code}; signing out")
        _expire_session(container)
        return

    try:
        data = response.json()
    except ValueError:
        logger.error("Session info returned a non-JSON body")
        return

    page.session_info = json.dumps(data, indent=2, ensure_ascii=False)
    summary = describe_session(data)
    if summary:
        page.status = summary

def load_documents(container: Container, page: Page) -> None:
    """Replaces `page.doc_list` with one rendered block per document."""
    docs = authenticated_get(container, DOC_LIST_PATH)
    if docs is None:
        return
    if not isinstance(docs, list):
        logger.warning(f"Document list is not an array: {type(docs).__name__}")
        return

    blocks: List[str] = []
    for item in docs:
        try:
            doc = DocumentSummary.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Skipping malformed document entry {item!r}: {e.error_count()} invalid field(s)")
            continue
        blocks.append(render_document(doc))

    page.doc_list = blocks
    logger.info(f"Rendered {len(blocks)} document(s)")
