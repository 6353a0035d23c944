"""
Dependency container for the client.

Bundles the collaborators every controller needs so they can be swapped
for fakes: backend API, session store, wallet provider and navigator.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from . import config
from .services.api_service import TidbitApi
from .services.navigation import Navigator
from .services.wallet_service import LocalWalletProvider, WalletProvider
from .session_store import FileSessionStore, SessionStore

logger = logging.getLogger(__name__)


@dataclass
class Container:
    api: TidbitApi
    sessions: SessionStore
    wallet: Optional[WalletProvider]
    navigator: Navigator


def build_container(
    api_url: str = config.API_URL,
    session_file: str = config.SESSION_FILE,
    private_key: str | None = config.WALLET_PRIVATE_KEY,
    approve: Callable[[str], bool] | None = None,
) -> Container:
    """Wires the production collaborators from configuration."""
    wallet = None
    if private_key:
        wallet = LocalWalletProvider(private_key, approve=approve)
    else:
        logger.debug("No wallet key configured; wallet login unavailable.")

    return Container(
        api=TidbitApi(base_url=api_url),
        sessions=FileSessionStore(path=session_file),
        wallet=wallet,
        navigator=Navigator(),
    )
