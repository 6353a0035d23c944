# tidbit_client/session_store.py

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Dict

from . import config

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Holds the single session token of this client."""

    @abstractmethod
    def save(self, token: str) -> None:
        pass

    @abstractmethod
    def read(self) -> str | None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def _check_token(self, token: str):
        if not isinstance(token, str) or not token:
            raise ValueError("Session token must be a non-empty string.")


class MemorySessionStore(SessionStore):
    """In-process store. Lost when the process exits."""

    def __init__(self, key: str = config.SESSION_KEY):
        self.key = key
        self._slots: Dict[str, str] = {}

    def save(self, token: str) -> None:
        self._check_token(token)
        self._slots[self.key] = token

    def read(self) -> str | None:
        return self._slots.get(self.key)

    def clear(self) -> None:
        self._slots.pop(self.key, None)


class FileSessionStore(SessionStore):
    """
    Persists the token as ``{key: token}`` in a JSON file so it survives
    restarts until an explicit logout or a server-side rejection.
    """

    def __init__(self, path: str = config.SESSION_FILE, key: str = config.SESSION_KEY):
        self.path = path
        self.key = key
        self._lock = threading.Lock()

    # --- Helper Functions ---
    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file {self.path} with unexpected content.")
            return {}
        return data

    def _dump(self, data: Dict[str, str]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def save(self, token: str) -> None:
        self._check_token(token)
        with self._lock:
            data = self._load()
            data[self.key] = token
            self._dump(data)
        logger.debug(f"Session stored under '{self.key}' in {self.path}")

    def read(self) -> str | None:
        with self._lock:
            token = self._load().get(self.key)
        return token if isinstance(token, str) and token else None

    def clear(self) -> None:
        with self._lock:
            data = self._load()
            if self.key not in data:
                return
            del data[self.key]
            self._dump(data)
        logger.debug(f"Session '{self.key}' cleared from {self.path}")
