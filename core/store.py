"""Registration storage interface and an in-memory implementation."""

import copy
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Set, Tuple

from config.models import Registration
from core.exceptions import ResourceGoneError, ResourceNotFoundError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RequestDetails:
    """Partition scope of a store request."""
    partition: Optional[str] = None
    all_partitions: bool = False

    @classmethod
    def for_all_partitions(cls) -> 'RequestDetails':
        return cls(all_partitions=True)

    @classmethod
    def for_partition(cls, partition: str) -> 'RequestDetails':
        return cls(partition=partition)

class RegistrationStore(Protocol):
    """Protocol for the persistent store holding registrations."""

    def read(self, resource_id: str, request: RequestDetails) -> Registration:
        """Return the registration or raise ResourceNotFoundError / ResourceGoneError."""
        ...

    def create(self, registration: Registration, request: RequestDetails) -> Registration:
        """Store the registration under its own id."""
        ...

class InMemoryRegistrationStore:
    """
    Thread-safe store keeping registrations in a dict.

    Registrations written with an all-partitions request are visible from
    every partition; others only from the partition they were written to.
    Deleted ids are remembered so that later reads report them as gone.
    """

    def __init__(self):
        self._records: Dict[str, Tuple[Optional[str], Registration]] = {}
        self._deleted: Set[str] = set()
        self._lock = threading.Lock()
        self.create_count = 0

    def read(
        self,
        resource_id: str,
        request: RequestDetails = RequestDetails.for_all_partitions()
    ) -> Registration:
        with self._lock:
            record = self._records.get(resource_id)
            if record is None:
                if resource_id in self._deleted:
                    raise ResourceGoneError(resource_id)
                raise ResourceNotFoundError(resource_id)

            partition, registration = record
            if not self._visible(partition, request):
                raise ResourceNotFoundError(resource_id)
            return copy.deepcopy(registration)

    def create(
        self,
        registration: Registration,
        request: RequestDetails = RequestDetails.for_all_partitions()
    ) -> Registration:
        partition = None if request.all_partitions else request.partition
        with self._lock:
            self._records[registration.id] = (partition, copy.deepcopy(registration))
            self._deleted.discard(registration.id)
            self.create_count += 1
        logger.debug(f"Stored registration {registration.id} (partition={partition})")
        return registration

    def delete(self, resource_id: str) -> None:
        """
        Remove a registration.

        Raises:
            ResourceNotFoundError: If nothing is stored under ``resource_id``
        """
        with self._lock:
            if self._records.pop(resource_id, None) is None:
                raise ResourceNotFoundError(resource_id)
            self._deleted.add(resource_id)

    def search(
        self,
        tag_system: Optional[str] = None,
        tag_code: Optional[str] = None
    ) -> List[Registration]:
        """Return stored registrations, optionally only those carrying a tag."""
        with self._lock:
            registrations = [copy.deepcopy(r) for _, r in self._records.values()]
        if tag_system is None:
            return registrations
        return [r for r in registrations if r.has_tag(tag_system, tag_code)]

    def search_managed(self) -> List[Registration]:
        """Return only the registrations owned by MDM."""
        return [r for r in self.search() if r.is_mdm_managed()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @staticmethod
    def _visible(partition: Optional[str], request: RequestDetails) -> bool:
        return partition is None or request.all_partitions or partition == request.partition
