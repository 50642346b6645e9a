"""
Trusted contacts - an ordered list of phone numbers kept in local state.

The list belongs to this installation, not to an account. Entries are
stored exactly as typed; no format check and no de-duplication.
"""

import json
import logging
from typing import List, Optional

from safety_hub.core.exceptions import NotFoundError, ValidationError
from safety_hub.services.local_store import TRUSTED_CONTACTS_KEY, LocalStore, get_local_store

logger = logging.getLogger(__name__)


class TrustedContactList:
    def __init__(self, local_store: LocalStore):
        self.local_store = local_store
        self.contacts: List[str] = self._read()

    def _read(self) -> List[str]:
        raw = self.local_store.get(TRUSTED_CONTACTS_KEY)
        if not raw:
            return []
        try:
            contacts = json.loads(raw)
        except ValueError:
            logger.warning("Stored trusted contacts are not valid JSON, ignoring them")
            return []
        if not isinstance(contacts, list):
            return []
        return [str(c) for c in contacts]

    def _persist(self) -> None:
        self.local_store.set(TRUSTED_CONTACTS_KEY, json.dumps(self.contacts))

    def add(self, contact: str) -> List[str]:
        if not contact or not contact.strip():
            raise ValidationError("Please enter a contact number.")
        self.contacts = [*self.contacts, contact]
        self._persist()
        return self.contacts

    def remove(self, index: int) -> List[str]:
        if index < 0 or index >= len(self.contacts):
            raise NotFoundError(f"No trusted contact at position {index}.")
        self.contacts = [c for i, c in enumerate(self.contacts) if i != index]
        self._persist()
        return self.contacts


_contact_list: Optional[TrustedContactList] = None


def get_contact_list() -> TrustedContactList:
    global _contact_list
    if _contact_list is None:
        _contact_list = TrustedContactList(get_local_store())
    return _contact_list
