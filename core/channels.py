"""Channel naming for notification delivery."""

from dataclasses import dataclass
from typing import Protocol

@dataclass(frozen=True)
class ChannelProducerSettings:
    """Settings of the producer side of a delivery channel."""
    concurrent_consumers: int = 2
    qualify_channel_name: bool = True

class ChannelNamer(Protocol):
    """Protocol for resolving logical channel names."""

    def get_channel_name(self, name: str, producer_settings: ChannelProducerSettings) -> str:
        """Resolve a logical channel name to the name used by the broker."""
        ...

class PrefixChannelNamer:
    """Qualifies channel names with a deployment-wide prefix."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def get_channel_name(self, name: str, producer_settings: ChannelProducerSettings) -> str:
        if producer_settings.qualify_channel_name:
            return f"{self.prefix}{name}"
        return name
