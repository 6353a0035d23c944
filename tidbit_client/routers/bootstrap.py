import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict

from ..container import Container
from ..models.page_models import Page
from .auth import login
from .dashboard import load_documents, load_session_info

logger = logging.getLogger(__name__)

def bootstrap(container: Container, page: Page) -> Dict[str, Callable[[], Any]]:
    """
    Page-ready hook.

    Binds the login action when the page has a login control and, on a
    page with a document list area, runs both dashboard loaders side by
    side and waits for them. The loaders do not coordinate; either may
    redirect while the other is still running.
    """
    logger.info(f"Page ready: {page.path}")
    actions: Dict[str, Callable[[], Any]] = {}

    if page.login_control:
        actions["login"] = functools.partial(login, container, page)

    if page.doc_list is not None:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard") as pool:
            futures = [
                pool.submit(load_session_info, container, page),
                pool.submit(load_documents, container, page),
            ]
        for future in futures:
            error = future.exception()
            if error is not None:
                logger.error(f"Dashboard loader failed: {error}", exc_info=error)

    return actions
