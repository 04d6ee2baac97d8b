"""Data models for MDM-managed registrations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

# Managed-tag marker identifying registrations owned by MDM
SYSTEM_MDM_MANAGED = "https://hapifhir.org/NamingSystem/managing-mdm-system"
CODE_HAPI_MDM_MANAGED = "HAPI-MDM"

class SchemaVariant(str, Enum):
    """FHIR structure versions a server can run with."""
    DSTU2 = "DSTU2"
    DSTU2_1 = "DSTU2_1"
    DSTU3 = "DSTU3"
    R4 = "R4"
    R4B = "R4B"
    R5 = "R5"

class SubscriptionStatus(str, Enum):
    """Lifecycle states of a registration."""
    REQUESTED = "requested"
    ACTIVE = "active"
    ERROR = "error"
    OFF = "off"

class InteractionTrigger(str, Enum):
    """Resource interactions a topic trigger can fire on."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

@dataclass(frozen=True)
class Coding:
    """A system/code pair."""
    system: str
    code: str
    display: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        result = {"system": self.system, "code": self.code}
        if self.display is not None:
            result["display"] = self.display
        return result

@dataclass(frozen=True)
class Extension:
    """Boolean-valued extension."""
    url: str
    value_boolean: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "valueBoolean": self.value_boolean}

@dataclass
class Channel:
    """Delivery settings of a criteria-based registration."""
    type: str = ""
    endpoint: str = ""
    payload: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "endpoint": self.endpoint, "payload": self.payload}

@dataclass
class QueryCriteria:
    """Search predicate evaluated against the current resource version."""
    current: str

@dataclass
class ResourceTrigger:
    """Which interactions on which resource type fire a topic."""
    resource: str
    supported_interactions: List[InteractionTrigger] = field(default_factory=list)
    query_criteria: Optional[QueryCriteria] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "resource": self.resource,
            "supportedInteraction": [i.value for i in self.supported_interactions],
        }
        if self.query_criteria is not None:
            result["queryCriteria"] = {"current": self.query_criteria.current}
        return result

@dataclass
class Topic:
    """Topic definition owned by (contained in) a topic-based registration."""
    id: str
    url: str
    title: str = ""
    status: str = "draft"
    experimental: bool = True
    description: str = ""
    notification_shape: List[str] = field(default_factory=list)
    resource_triggers: List[ResourceTrigger] = field(default_factory=list)

    def add_resource_trigger(
        self,
        resource: str,
        interactions: List[InteractionTrigger],
        current_criteria: str
    ) -> ResourceTrigger:
        """
        Append a trigger for ``resource`` and return it.

        Args:
            resource: Resource type the trigger watches
            interactions: Interactions that fire the trigger
            current_criteria: Query predicate for the current resource version

        Returns:
            ResourceTrigger: The trigger that was added
        """
        trigger = ResourceTrigger(
            resource=resource,
            supported_interactions=list(interactions),
            query_criteria=QueryCriteria(current=current_criteria)
        )
        self.resource_triggers.append(trigger)
        return trigger

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceType": "SubscriptionTopic",
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "status": self.status,
            "experimental": self.experimental,
            "description": self.description,
            "notificationShape": [{"resource": r} for r in self.notification_shape],
            "resourceTrigger": [t.to_dict() for t in self.resource_triggers],
        }

@dataclass
class Registration:
    """
    A persisted interest record that makes the notification subsystem watch a
    resource type. Variant specific fields live on the subclasses.
    """
    id: str
    variant: SchemaVariant
    reason: str = "MDM"
    status: SubscriptionStatus = SubscriptionStatus.REQUESTED
    tags: List[Coding] = field(default_factory=list)
    extensions: List[Extension] = field(default_factory=list)

    def has_tag(self, system: str, code: str) -> bool:
        return any(t.system == system and t.code == code for t in self.tags)

    def is_mdm_managed(self) -> bool:
        """True if the registration carries the MDM managed tag."""
        return self.has_tag(SYSTEM_MDM_MANAGED, CODE_HAPI_MDM_MANAGED)

    def get_extension(self, url: str) -> Optional[Extension]:
        for extension in self.extensions:
            if extension.url == url:
                return extension
        return None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "resourceType": "Subscription",
            "id": self.id,
            "meta": {"tag": [t.to_dict() for t in self.tags]},
            "extension": [e.to_dict() for e in self.extensions],
            "reason": self.reason,
            "status": self.status.value,
        }
        result.update(self._variant_fields())
        return result

    def _variant_fields(self) -> Dict[str, Any]:
        return {}

@dataclass
class CriteriaRegistration(Registration):
    """Registration shape of the flat-criteria variants (DSTU3, R4)."""
    criteria: str = ""
    channel: Channel = field(default_factory=Channel)

    def _variant_fields(self) -> Dict[str, Any]:
        return {"criteria": self.criteria, "channel": self.channel.to_dict()}

@dataclass
class TopicRegistration(Registration):
    """Registration shape of the topic-based variant (R5)."""
    channel_type: Optional[Coding] = None
    endpoint: str = ""
    content_type: str = ""
    topic: str = ""
    contained: List[Topic] = field(default_factory=list)

    def _variant_fields(self) -> Dict[str, Any]:
        return {
            "channelType": self.channel_type.to_dict() if self.channel_type else None,
            "endpoint": self.endpoint,
            "contentType": self.content_type,
            "topic": self.topic,
            "contained": [t.to_dict() for t in self.contained],
        }
