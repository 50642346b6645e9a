"""
Local Store - persisted key/value strings for this installation.

Holds the values a browser would keep in local storage: the admin flag,
the trusted-contact list and the restorable auth session. The file is read
once at startup and written on every change and at shutdown.
"""

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from safety_hub.core.settings import settings

logger = logging.getLogger(__name__)

ADMIN_FLAG_KEY = "isAdmin"
TRUSTED_CONTACTS_KEY = "trustedContacts"
AUTH_USER_KEY = "authUser"


class LocalStore:
    """
    JSON file backed string store.
    """

    def __init__(self, path: str):
        self.path = path
        self._values: Dict[str, str] = {}
        self.loaded = False

    def load(self) -> None:
        self.loaded = True
        if not os.path.exists(self.path):
            self._values = {}
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Local state at {self.path} unreadable, starting empty: {e}")
            self._values = {}
            return

        if not isinstance(data, dict):
            logger.warning(f"Local state at {self.path} is not an object, starting empty")
            self._values = {}
            return

        self._values = {str(k): str(v) for k, v in data.items()}
        logger.info(f"Local state loaded: {sorted(self._values)}")

    def save(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self.save()

    def remove(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            self.save()


# Global store instance (singleton pattern)
_local_store: Optional[LocalStore] = None


def get_local_store() -> LocalStore:
    """
    Get or create the LocalStore singleton, loading it on first use.
    """
    global _local_store
    if _local_store is None:
        _local_store = LocalStore(settings.LOCAL_STATE_PATH)
    if not _local_store.loaded:
        _local_store.load()
    return _local_store
