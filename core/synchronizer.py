"""Keeps the MDM-managed registrations present in the registration store."""

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config.models import Registration
from config.settings import CHANNEL_ENDPOINT_SCHEME, MdmSettings
from core.builders import builder_for, make_registration_id
from core.channels import ChannelNamer, ChannelProducerSettings, PrefixChannelNamer
from core.exceptions import ResourceGoneError, ResourceNotFoundError
from core.logs import get_troubleshooting_log
from core.registry import ActiveRegistrationRegistry, RegistrationReloader
from core.store import InMemoryRegistrationStore, RegistrationStore, RequestDetails

@dataclass
class SyncResult:
    """Outcome of one synchronization pass."""
    built: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    reloaded: bool = False

    @property
    def skipped(self) -> List[str]:
        skipped = list(self.built)
        for registration_id in self.created:
            skipped.remove(registration_id)
        return skipped

class RegistrationSynchronizer:
    """
    Ensures one MDM-managed registration exists per managed resource type.

    Registrations that are already stored are never updated; missing or
    deleted ones are created. After a pass that built at least one
    registration the notification subsystem is asked to reload.
    """

    def __init__(
        self,
        settings: MdmSettings,
        store: RegistrationStore,
        channel_namer: ChannelNamer,
        reloader: RegistrationReloader
    ):
        """
        Initialize the synchronizer.

        Args:
            settings: MDM settings (schema variant, managed types, channel)
            store: Store holding registrations
            channel_namer: Resolves the logical MDM channel name
            reloader: Notification subsystem to signal after a pass
        """
        self.settings = settings
        self.store = store
        self.channel_namer = channel_namer
        self.reloader = reloader
        self.logger = get_troubleshooting_log()

        # Guards every read-then-create sequence; reentrant so synchronize()
        # can call update_if_not_present() while holding it.
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls,
        settings: MdmSettings,
        store: InMemoryRegistrationStore
    ) -> 'RegistrationSynchronizer':
        """Wire a synchronizer with the default namer and an active registry over ``store``."""
        return cls(
            settings=settings,
            store=store,
            channel_namer=PrefixChannelNamer(settings.channel_prefix),
            reloader=ActiveRegistrationRegistry(store)
        )

    def synchronize(self, resource_types: Optional[Sequence[str]] = None) -> SyncResult:
        """
        Build and store the managed registrations.

        Args:
            resource_types: Types to manage; defaults to the configured MDM types

        Returns:
            SyncResult: Ids built and created during this pass

        Raises:
            ConfigurationError: If the configured schema variant is unsupported
            StoreError: For any store failure other than not-found/gone
        """
        result = SyncResult()
        if not self.settings.enabled:
            self.logger.info("MDM is disabled; skipping registration synchronization")
            return result

        builder = builder_for(self.settings.schema_variant)
        if resource_types is None:
            resource_types = self.settings.rules.mdm_types

        endpoint = self._endpoint()
        registrations = [
            builder(make_registration_id(self.settings.id_prefix, t), t, endpoint)
            for t in resource_types
        ]
        result.built = [r.id for r in registrations]

        with self._lock:
            for registration in registrations:
                if self.update_if_not_present(registration):
                    result.created.append(registration.id)

        if registrations:
            active = self.reloader.sync_registrations()
            result.reloaded = True
            self.logger.debug(f"Notification subsystem reloaded {active} registrations")

        return result

    def update_if_not_present(self, registration: Registration) -> bool:
        """
        Create ``registration`` unless one with the same id is stored.

        Returns:
            bool: True if the registration was created
        """
        request = RequestDetails.for_all_partitions()
        with self._lock:
            try:
                self.store.read(registration.id, request)
                return False
            except (ResourceNotFoundError, ResourceGoneError):
                self.logger.info(f"Creating registration {registration.id}")
                self.store.create(registration, request)
                return True

    def _endpoint(self) -> str:
        name = self.channel_namer.get_channel_name(
            self.settings.channel_name,
            ChannelProducerSettings()
        )
        return CHANNEL_ENDPOINT_SCHEME + name
