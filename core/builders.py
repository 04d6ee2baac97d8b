"""Builders for MDM-managed registrations, one per schema variant."""

from typing import Callable, Dict, Union

from config.models import (
    Channel,
    Coding,
    CriteriaRegistration,
    Extension,
    InteractionTrigger,
    Registration,
    SchemaVariant,
    SubscriptionStatus,
    Topic,
    TopicRegistration,
)
from config.settings import (
    CHANNEL_TYPE_MESSAGE,
    CHANNEL_TYPE_SYSTEM,
    CODE_HAPI_MDM_MANAGED,
    CONTENT_TYPE_JSON,
    EXTENSION_SUBSCRIPTION_CROSS_PARTITION,
    MDM_REASON,
    MDM_TOPIC_DESCRIPTION,
    MDM_TOPIC_NOTIFICATION_SHAPE,
    MDM_TOPIC_TITLE,
    MDM_TOPIC_URL,
    SYSTEM_MDM_MANAGED,
)
from core.exceptions import ConfigurationError

Builder = Callable[[str, str, str], Registration]

def make_registration_id(prefix: str, resource_type: str) -> str:
    return prefix + resource_type

def criteria_for(resource_type: str) -> str:
    """Query matching every instance of ``resource_type``."""
    return resource_type + "?"

def _managed_tag() -> Coding:
    return Coding(system=SYSTEM_MDM_MANAGED, code=CODE_HAPI_MDM_MANAGED)

def _cross_partition_extension() -> Extension:
    return Extension(url=EXTENSION_SUBSCRIPTION_CROSS_PARTITION, value_boolean=True)

def _build_criteria_registration(
    variant: SchemaVariant,
    registration_id: str,
    resource_type: str,
    endpoint: str
) -> CriteriaRegistration:
    return CriteriaRegistration(
        id=registration_id,
        variant=variant,
        reason=MDM_REASON,
        status=SubscriptionStatus.REQUESTED,
        tags=[_managed_tag()],
        extensions=[_cross_partition_extension()],
        criteria=criteria_for(resource_type),
        channel=Channel(
            type=CHANNEL_TYPE_MESSAGE,
            endpoint=endpoint,
            payload=CONTENT_TYPE_JSON
        )
    )

def build_dstu3_registration(registration_id: str, resource_type: str, endpoint: str) -> CriteriaRegistration:
    return _build_criteria_registration(SchemaVariant.DSTU3, registration_id, resource_type, endpoint)

def build_r4_registration(registration_id: str, resource_type: str, endpoint: str) -> CriteriaRegistration:
    return _build_criteria_registration(SchemaVariant.R4, registration_id, resource_type, endpoint)

def build_mdm_topic(resource_type: str) -> Topic:
    """
    Topic firing on create and update of ``resource_type``.

    Args:
        resource_type: Resource type the topic's single trigger watches

    Returns:
        Topic: Topic with one resource trigger
    """
    # TODO: derive the topic id/url from resource_type; every MDM type currently
    # shares one locator even though each carries a different trigger.
    topic = Topic(
        id=MDM_TOPIC_URL,
        url=MDM_TOPIC_URL,
        title=MDM_TOPIC_TITLE,
        status="draft",
        experimental=True,
        description=MDM_TOPIC_DESCRIPTION,
        notification_shape=[MDM_TOPIC_NOTIFICATION_SHAPE]
    )
    topic.add_resource_trigger(
        resource_type,
        [InteractionTrigger.CREATE, InteractionTrigger.UPDATE],
        criteria_for(resource_type)
    )
    return topic

def build_r5_registration(registration_id: str, resource_type: str, endpoint: str) -> TopicRegistration:
    """
    Topic-based registration for ``resource_type``.

    There is no top-level criteria: the contained topic carries the trigger
    and the registration points at it through the topic's canonical url.
    """
    topic = build_mdm_topic(resource_type)
    return TopicRegistration(
        id=registration_id,
        variant=SchemaVariant.R5,
        reason=MDM_REASON,
        status=SubscriptionStatus.REQUESTED,
        tags=[_managed_tag()],
        extensions=[_cross_partition_extension()],
        channel_type=Coding(
            system=CHANNEL_TYPE_SYSTEM,
            code=CHANNEL_TYPE_MESSAGE,
            display=CHANNEL_TYPE_MESSAGE
        ),
        endpoint=endpoint,
        content_type=CONTENT_TYPE_JSON,
        topic=topic.url,
        contained=[topic]
    )

BUILDERS: Dict[SchemaVariant, Builder] = {
    SchemaVariant.DSTU3: build_dstu3_registration,
    SchemaVariant.R4: build_r4_registration,
    SchemaVariant.R5: build_r5_registration,
}

def resolve_variant(variant: Union[str, SchemaVariant]) -> SchemaVariant:
    """
    Turn a configured version into a supported variant.

    Raises:
        ConfigurationError: If the version is unknown or has no builder
    """
    try:
        resolved = SchemaVariant(variant)
    except ValueError:
        resolved = None

    if resolved not in BUILDERS:
        name = getattr(variant, 'value', variant)
        raise ConfigurationError(f"MDM not supported for FHIR version {name}", variant=name)
    return resolved

def builder_for(variant: Union[str, SchemaVariant]) -> Builder:
    return BUILDERS[resolve_variant(variant)]
