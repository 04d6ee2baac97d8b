"""Shared fixtures for the MDM linkage tests."""

from unittest.mock import Mock

import pytest

from config.rules import MdmRules
from config.settings import MdmSettings
from core.channels import PrefixChannelNamer
from core.store import InMemoryRegistrationStore
from core.synchronizer import RegistrationSynchronizer


@pytest.fixture
def store():
    return InMemoryRegistrationStore()


@pytest.fixture
def reloader():
    mock = Mock()
    mock.sync_registrations.return_value = 0
    return mock


@pytest.fixture
def make_synchronizer(store, reloader):
    """Factory building a synchronizer over the shared store and mock reloader."""
    def _make(variant="R4", mdm_types=("Patient", "Practitioner"), **overrides):
        settings = MdmSettings(
            schema_variant=variant,
            rules=MdmRules(mdm_types=list(mdm_types)),
            **overrides
        )
        return RegistrationSynchronizer(
            settings=settings,
            store=store,
            channel_namer=PrefixChannelNamer(settings.channel_prefix),
            reloader=reloader
        )
    return _make
