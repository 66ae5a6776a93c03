"""
Resource kinds and their API conventions.

Each kind of Graylog entity managed here is described by one KindDescriptor:
where its collection lives, whether create/update bodies are wrapped in an
entity envelope, which fields must be present, and whether the API's answer
has to be confirmed with a follow-up fetch. Clients and reconcilers read
these descriptors instead of branching on the kind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


class ResourceKind(Enum):
    """Kinds of Graylog entities."""

    EVENT_DEFINITION = "event_definition"
    EVENT_NOTIFICATION = "event_notification"
    INDEX_SET = "index_set"
    INPUT = "input"


AGGREGATION_V1 = "aggregation-v1"

# Sub-fields the API rejects an aggregation event definition without.
AGGREGATION_DEFAULTS: Dict[str, Any] = {
    "query": "",
    "streams": [],
    "group_by": [],
    "series": [],
    "conditions": {},
    "search_within_ms": 60000,
    "execute_every_ms": 60000,
    "event_limit": 1,
}


@dataclass(frozen=True)
class KindDescriptor:
    """Path, envelope and confirmation conventions of one resource kind."""

    kind: ResourceKind
    label: str
    collection_path: str
    list_key: str
    envelope: bool = False
    required_on_create: Tuple[str, ...] = ("title",)
    required_on_update: Tuple[str, ...] = ("title",)
    confirm_after_create: bool = False
    confirm_after_update: bool = False
    # Backfilled extra-configuration values, keyed by discriminator value
    required_defaults: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    timestamp_fields: Tuple[str, ...] = ()

    def item_path(self, resource_id: str) -> str:
        return f"{self.collection_path}/{resource_id}"


DESCRIPTORS: Dict[ResourceKind, KindDescriptor] = {
    ResourceKind.EVENT_DEFINITION: KindDescriptor(
        kind=ResourceKind.EVENT_DEFINITION,
        label="event definition",
        collection_path="events/definitions",
        list_key="event_definitions",
        envelope=True,
        required_on_create=("title", "config.type"),
        required_on_update=("title", "config.type"),
        confirm_after_update=True,
        required_defaults={AGGREGATION_V1: AGGREGATION_DEFAULTS},
        timestamp_fields=("updated_at", "matched_at"),
    ),
    ResourceKind.EVENT_NOTIFICATION: KindDescriptor(
        kind=ResourceKind.EVENT_NOTIFICATION,
        label="event notification",
        collection_path="events/notifications",
        list_key="notifications",
        envelope=True,
        required_on_create=("title", "config.type"),
        required_on_update=("title", "config.type"),
    ),
    ResourceKind.INDEX_SET: KindDescriptor(
        kind=ResourceKind.INDEX_SET,
        label="index set",
        collection_path="system/indices/index_sets",
        list_key="index_sets",
        required_on_create=("title", "index_prefix"),
        required_on_update=("title",),
    ),
    ResourceKind.INPUT: KindDescriptor(
        kind=ResourceKind.INPUT,
        label="input",
        collection_path="system/inputs",
        list_key="inputs",
        required_on_create=("title", "type"),
        required_on_update=("title", "type"),
        confirm_after_create=True,
        confirm_after_update=True,
        timestamp_fields=("created_at",),
    ),
}


def get_descriptor(kind: ResourceKind) -> KindDescriptor:
    """Return the descriptor for a resource kind."""
    return DESCRIPTORS[kind]
