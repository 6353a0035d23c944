import logging
from typing import List

logger = logging.getLogger(__name__)


class Navigator:
    """
    Records hard redirects issued by the controllers.

    ``replace`` swaps the current location instead of pushing a new
    entry, so ``history`` only lists the replacements in order.
    """

    def __init__(self, location: str | None = None):
        self.location = location
        self.history: List[str] = []

    def replace(self, target: str) -> None:
        logger.info(f"Redirecting to {target}")
        self.location = target
        self.history.append(target)
