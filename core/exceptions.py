"""Exceptions raised by MDM registration management."""

from typing import Any

class MdmError(Exception):
    """Base class for MDM errors."""

class ConfigurationError(MdmError):
    """The server is configured in a way MDM cannot support. Not retryable."""

    def __init__(self, message: str, variant: Any = None):
        super().__init__(message)
        self.variant = variant

class StoreError(MdmError):
    """Base class for errors reported by a registration store."""

class ResourceNotFoundError(StoreError):
    """No registration exists under the requested id."""

    def __init__(self, resource_id: str):
        super().__init__(f"Registration not found: {resource_id}")
        self.resource_id = resource_id

class ResourceGoneError(StoreError):
    """The registration existed but has been deleted."""

    def __init__(self, resource_id: str):
        super().__init__(f"Registration has been deleted: {resource_id}")
        self.resource_id = resource_id
