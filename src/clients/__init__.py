"""
Resource clients package.

One CRUD client per Graylog resource kind, all built on the shared
transport.
"""

from clients.base import ResourceClient
from clients.resources import (
    CLIENTS,
    EventDefinitionClient,
    EventNotificationClient,
    IndexSetClient,
    InputClient,
)

__all__ = [
    "CLIENTS",
    "ResourceClient",
    "EventDefinitionClient",
    "EventNotificationClient",
    "IndexSetClient",
    "InputClient",
]
