"""MDM rules: which resource types take part in record linkage."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union
import regex as re

RESOURCE_TYPE_PATTERN = re.compile(r'^[A-Z][A-Za-z]{0,63}$')

@dataclass(frozen=True)
class MdmRules:
    """
    Linkage rules relevant to registration management.

    Only the managed resource types are modelled here; matcher selection and
    scoring rules belong to the rules engine.
    """

    mdm_types: List[str] = field(default_factory=list)
    version: str = "1"

    def __post_init__(self):
        """Validate resource type names and drop duplicates, keeping order."""
        seen = []
        for resource_type in self.mdm_types:
            if not isinstance(resource_type, str) or not RESOURCE_TYPE_PATTERN.match(resource_type):
                raise ValueError(f"Invalid MDM resource type: {resource_type!r}")
            if resource_type not in seen:
                seen.append(resource_type)
        object.__setattr__(self, 'mdm_types', seen)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MdmRules':
        """
        Build rules from a parsed MDM rules document.

        Args:
            data: Document with an ``mdmTypes`` list and optional ``version``

        Returns:
            MdmRules: Parsed rules

        Raises:
            ValueError: If ``mdmTypes`` is missing or not a list
        """
        mdm_types = data.get("mdmTypes")
        if not isinstance(mdm_types, list):
            raise ValueError("MDM rules must declare an 'mdmTypes' list")
        return cls(mdm_types=mdm_types, version=str(data.get("version", "1")))

    @classmethod
    def from_json(cls, source: Union[str, Path]) -> 'MdmRules':
        """Load rules from a JSON file path or a JSON string."""
        if isinstance(source, Path) or not source.lstrip().startswith('{'):
            with open(source, 'r') as f:
                data = json.load(f)
        else:
            data = json.loads(source)
        return cls.from_dict(data)
