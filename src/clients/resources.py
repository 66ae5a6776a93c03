"""
Per-kind resource clients.

Event definitions and event notifications are sent inside an entity
envelope; index sets and inputs are sent flat. Creating an input only
returns its id.
"""

from clients.base import ResourceClient
from kinds import ResourceKind


class EventDefinitionClient(ResourceClient):
    """Client for ``events/definitions``."""

    kind = ResourceKind.EVENT_DEFINITION


class EventNotificationClient(ResourceClient):
    """Client for ``events/notifications``."""

    kind = ResourceKind.EVENT_NOTIFICATION


class IndexSetClient(ResourceClient):
    """Client for ``system/indices/index_sets``."""

    kind = ResourceKind.INDEX_SET


class InputClient(ResourceClient):
    """Client for ``system/inputs``."""

    kind = ResourceKind.INPUT


CLIENTS = {
    ResourceKind.EVENT_DEFINITION: EventDefinitionClient,
    ResourceKind.EVENT_NOTIFICATION: EventNotificationClient,
    ResourceKind.INDEX_SET: IndexSetClient,
    ResourceKind.INPUT: InputClient,
}
