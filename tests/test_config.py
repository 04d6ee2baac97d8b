"""
Unit tests for the configuration layer: models, MDM rules and settings.
"""

import json

import pytest

from config.models import (
    Coding,
    CriteriaRegistration,
    SchemaVariant,
    SubscriptionStatus,
    Topic,
    InteractionTrigger,
)
from config.rules import MdmRules
from config.settings import MDM_CHANNEL_NAME, MDM_REGISTRATION_ID_PREFIX, MdmSettings


def test_rules_deduplicate_and_keep_order():
    rules = MdmRules(mdm_types=["Patient", "Practitioner", "Patient"])
    assert rules.mdm_types == ["Patient", "Practitioner"]


@pytest.mark.parametrize("bad_type", ["patient", "", "Patient?", "Organization Type", 42])
def test_rules_reject_invalid_resource_types(bad_type):
    with pytest.raises(ValueError):
        MdmRules(mdm_types=[bad_type])


def test_rules_from_dict():
    rules = MdmRules.from_dict({"version": 2, "mdmTypes": ["Patient"], "candidateSearchParams": []})
    assert rules.mdm_types == ["Patient"]
    assert rules.version == "2"


def test_rules_from_dict_requires_mdm_types():
    with pytest.raises(ValueError):
        MdmRules.from_dict({"version": "1"})


def test_rules_from_json_string_and_file(tmp_path):
    document = {"mdmTypes": ["Patient", "Organization"]}

    from_string = MdmRules.from_json(json.dumps(document))
    assert from_string.mdm_types == ["Patient", "Organization"]

    path = tmp_path / "mdm-rules.json"
    path.write_text(json.dumps(document))
    assert MdmRules.from_json(path).mdm_types == ["Patient", "Organization"]
    assert MdmRules.from_json(str(path)).mdm_types == ["Patient", "Organization"]


def test_settings_defaults():
    settings = MdmSettings()
    assert settings.enabled is True
    assert settings.schema_variant == "R4"
    assert settings.rules.mdm_types == []
    assert settings.channel_name == MDM_CHANNEL_NAME
    assert settings.id_prefix == MDM_REGISTRATION_ID_PREFIX


def test_settings_reject_empty_prefix():
    with pytest.raises(ValueError):
        MdmSettings(id_prefix="")


def test_settings_from_env():
    settings = MdmSettings.from_env({
        "MDM_ENABLED": "False",
        "MDM_FHIR_VERSION": " r5 ",
        "MDM_TYPES": "Patient, Practitioner,,Patient",
        "MDM_CHANNEL_PREFIX": "site1-",
    })

    assert settings.enabled is False
    assert settings.schema_variant == "R5"
    assert settings.rules.mdm_types == ["Patient", "Practitioner"]
    assert settings.channel_prefix == "site1-"
    assert settings.channel_name == MDM_CHANNEL_NAME


def test_settings_from_env_prefers_rules_file(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"mdmTypes": ["Organization"]}))

    settings = MdmSettings.from_env({"MDM_RULES_FILE": str(path), "MDM_TYPES": "Patient"})

    assert settings.rules.mdm_types == ["Organization"]
    assert settings.enabled is True


def test_criteria_registration_to_dict():
    registration = CriteriaRegistration(
        id="mdm-Patient",
        variant=SchemaVariant.R4,
        tags=[Coding(system="urn:sys", code="X")],
        criteria="Patient?"
    )

    data = registration.to_dict()

    assert data["resourceType"] == "Subscription"
    assert data["status"] == SubscriptionStatus.REQUESTED.value
    assert data["meta"]["tag"] == [{"system": "urn:sys", "code": "X"}]
    assert data["criteria"] == "Patient?"
    assert registration.has_tag("urn:sys", "X")
    assert not registration.has_tag("urn:sys", "Y")


def test_topic_add_resource_trigger():
    topic = Topic(id="t", url="t")
    trigger = topic.add_resource_trigger("Patient", [InteractionTrigger.CREATE], "Patient?")

    assert topic.resource_triggers == [trigger]
    assert topic.to_dict()["resourceTrigger"] == [{
        "resource": "Patient",
        "supportedInteraction": ["create"],
        "queryCriteria": {"current": "Patient?"},
    }]
