"""
Tests for the in-memory registration store, channel naming and the active
registration registry.
"""

import pytest

from config.models import CriteriaRegistration, SchemaVariant, SubscriptionStatus
from config.settings import CODE_HAPI_MDM_MANAGED, SYSTEM_MDM_MANAGED
from core.builders import build_r4_registration
from core.channels import ChannelProducerSettings, PrefixChannelNamer
from core.exceptions import ResourceGoneError, ResourceNotFoundError
from core.registry import ActiveRegistrationRegistry
from core.store import RequestDetails


def _user_registration(registration_id, status=SubscriptionStatus.ACTIVE):
    return CriteriaRegistration(
        id=registration_id,
        variant=SchemaVariant.R4,
        reason="user",
        status=status,
        criteria="Observation?code=1234-5"
    )


def test_read_missing_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError) as excinfo:
        store.read("mdm-Patient", RequestDetails.for_all_partitions())
    assert excinfo.value.resource_id == "mdm-Patient"


def test_read_after_delete_raises_gone(store):
    store.create(build_r4_registration("mdm-Patient", "Patient", "channel:empi"))
    store.delete("mdm-Patient")

    with pytest.raises(ResourceGoneError):
        store.read("mdm-Patient")


def test_delete_missing_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        store.delete("mdm-Patient")


def test_store_returns_copies(store):
    registration = build_r4_registration("mdm-Patient", "Patient", "channel:empi")
    store.create(registration)

    stored = store.read("mdm-Patient")
    stored.reason = "changed"

    assert store.read("mdm-Patient").reason == "MDM"


def test_partition_visibility(store):
    store.create(_user_registration("sub-a"), RequestDetails.for_partition("A"))
    store.create(_user_registration("sub-all"), RequestDetails.for_all_partitions())

    assert store.read("sub-a", RequestDetails.for_partition("A")).id == "sub-a"
    assert store.read("sub-a", RequestDetails.for_all_partitions()).id == "sub-a"
    assert store.read("sub-all", RequestDetails.for_partition("B")).id == "sub-all"
    with pytest.raises(ResourceNotFoundError):
        store.read("sub-a", RequestDetails.for_partition("B"))


def test_search_by_managed_tag(store):
    store.create(build_r4_registration("mdm-Patient", "Patient", "channel:empi"))
    store.create(_user_registration("user-sub"))

    managed = store.search(SYSTEM_MDM_MANAGED, CODE_HAPI_MDM_MANAGED)

    assert [r.id for r in managed] == ["mdm-Patient"]
    assert len(store.search()) == 2
    assert [r.id for r in store.search_managed()] == ["mdm-Patient"]
    assert not store.read("user-sub").is_mdm_managed()


def test_prefix_channel_namer():
    namer = PrefixChannelNamer("prod-")

    assert namer.get_channel_name("empi", ChannelProducerSettings()) == "prod-empi"
    assert namer.get_channel_name(
        "empi", ChannelProducerSettings(qualify_channel_name=False)
    ) == "empi"


def test_registry_loads_requested_and_active_only(store):
    store.create(build_r4_registration("mdm-Patient", "Patient", "channel:empi"))
    store.create(_user_registration("user-active"))
    store.create(_user_registration("user-off", status=SubscriptionStatus.OFF))
    registry = ActiveRegistrationRegistry(store)

    count = registry.sync_registrations()

    assert count == 2
    assert registry.active_ids() == ["mdm-Patient", "user-active"]
    assert "user-off" not in registry
    assert registry.get("mdm-Patient").status == SubscriptionStatus.ACTIVE
    assert registry.sync_count == 1


def test_registry_reload_replaces_active_set(store):
    store.create(build_r4_registration("mdm-Patient", "Patient", "channel:empi"))
    registry = ActiveRegistrationRegistry(store)
    registry.sync_registrations()

    store.delete("mdm-Patient")
    registry.sync_registrations()

    assert len(registry) == 0
    assert registry.get("mdm-Patient") is None
