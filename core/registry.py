"""In-memory set of active registrations used by the notification subsystem."""

import logging
import threading
from typing import Dict, List, Optional, Protocol

from config.models import Registration, SubscriptionStatus

logger = logging.getLogger(__name__)

LOADABLE_STATUSES = (SubscriptionStatus.REQUESTED, SubscriptionStatus.ACTIVE)

class RegistrationReloader(Protocol):
    """Protocol for the notification subsystem's reload signal."""

    def sync_registrations(self) -> int:
        """Re-read registrations from the store and return how many are active."""
        ...

class SearchableStore(Protocol):
    def search(self) -> List[Registration]:
        ...

class ActiveRegistrationRegistry:
    """
    Holds the registrations notifications are currently delivered for.

    ``sync_registrations`` replaces the whole active set with every stored
    registration in a loadable status; requested ones are activated.
    """

    def __init__(self, store: SearchableStore):
        self.store = store
        self._active: Dict[str, Registration] = {}
        self._lock = threading.Lock()
        self.sync_count = 0

    def sync_registrations(self) -> int:
        loaded: Dict[str, Registration] = {}
        for registration in self.store.search():
            if registration.status not in LOADABLE_STATUSES:
                continue
            registration.status = SubscriptionStatus.ACTIVE
            loaded[registration.id] = registration

        with self._lock:
            self._active = loaded
            self.sync_count += 1

        logger.info(f"Synchronized {len(loaded)} active registrations")
        return len(loaded)

    def get(self, registration_id: str) -> Optional[Registration]:
        with self._lock:
            return self._active.get(registration_id)

    def active_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._active)

    def __contains__(self, registration_id: str) -> bool:
        with self._lock:
            return registration_id in self._active

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
