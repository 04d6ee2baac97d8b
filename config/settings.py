"""
Settings for MDM registration management.

Constants shared by every schema variant, plus the environment-driven
``MdmSettings``.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from config.models import CODE_HAPI_MDM_MANAGED, SYSTEM_MDM_MANAGED, SchemaVariant
from config.rules import MdmRules

# Registration identity
MDM_REGISTRATION_ID_PREFIX = "mdm-"
MDM_REASON = "MDM"

# Markers other tooling relies on to recognise subsystem-owned registrations
EXTENSION_SUBSCRIPTION_CROSS_PARTITION = (
    "https://smilecdr.com/fhir/ns/StructureDefinition/subscription-cross-partition"
)

# Delivery
MDM_CHANNEL_NAME = "empi"
CHANNEL_ENDPOINT_SCHEME = "channel:"
CHANNEL_TYPE_MESSAGE = "message"
CHANNEL_TYPE_SYSTEM = "http://terminology.hl7.org/CodeSystem/subscription-channel-type"
CONTENT_TYPE_JSON = "application/json"

# Topic-based variant
MDM_TOPIC_ID = "r5-mdm-topic"
MDM_TOPIC_URL = "test/" + MDM_TOPIC_ID
MDM_TOPIC_TITLE = "Health equity data quality requests within Immunization systems"
MDM_TOPIC_DESCRIPTION = "Testing communication between EHR and IIS and operation outcome"
MDM_TOPIC_NOTIFICATION_SHAPE = "OperationOutcome"

_TRUE_VALUES = {"1", "true", "yes", "on"}

@dataclass(frozen=True)
class MdmSettings:
    """Configuration of the registration synchronizer."""
    enabled: bool = True
    schema_variant: str = SchemaVariant.R4.value
    rules: MdmRules = field(default_factory=MdmRules)
    channel_name: str = MDM_CHANNEL_NAME
    channel_prefix: str = ""
    id_prefix: str = MDM_REGISTRATION_ID_PREFIX

    def __post_init__(self):
        if not self.id_prefix:
            raise ValueError("id_prefix must not be empty")
        if not self.channel_name:
            raise ValueError("channel_name must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MdmSettings':
        """
        Read settings from environment variables.

        ``MDM_RULES_FILE`` takes precedence over ``MDM_TYPES``. The schema
        variant is kept as given; unsupported values are reported when the
        synchronizer runs.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            MdmSettings: Settings built from the environment
        """
        env = os.environ if environ is None else environ

        rules_file = env.get("MDM_RULES_FILE", "")
        if rules_file:
            rules = MdmRules.from_json(rules_file)
        else:
            types = [t.strip() for t in env.get("MDM_TYPES", "").split(",") if t.strip()]
            rules = MdmRules(mdm_types=types)

        return cls(
            enabled=env.get("MDM_ENABLED", "true").strip().lower() in _TRUE_VALUES,
            schema_variant=env.get("MDM_FHIR_VERSION", SchemaVariant.R4.value).strip().upper(),
            rules=rules,
            channel_name=env.get("MDM_CHANNEL_NAME", MDM_CHANNEL_NAME),
            channel_prefix=env.get("MDM_CHANNEL_PREFIX", ""),
            id_prefix=env.get("MDM_REGISTRATION_ID_PREFIX", MDM_REGISTRATION_ID_PREFIX),
        )
