"""
Event definition reconciler.

Event definitions are sent inside an entity envelope. Aggregation
definitions get their structurally required config keys backfilled, and the
list of attached notification ids is owned by the API: it is always
resynced from the remote record rather than filtered by the tracked set.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from kinds import ResourceKind
from reconcilers.base import ResourceReconciler


@dataclass
class EventDefinitionSpec:
    """Desired (or reconciled) state of one event definition."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    priority: int = 2
    config_type: str = ""
    config: Optional[Dict[str, Any]] = None
    grace_period_ms: int = 0
    backlog_size: int = 0
    notification_ids: Optional[List[str]] = None
    share_with: Optional[Dict[str, str]] = None


class EventDefinitionReconciler(ResourceReconciler):
    """Reconciles ``events/definitions``."""

    kind = ResourceKind.EVENT_DEFINITION
    spec_type = EventDefinitionSpec
    discriminator_field = "config_type"
    extra_field = "config"

    def build_payload(
        self, spec: EventDefinitionSpec, extra: Dict[str, Any], creating: bool
    ) -> Dict[str, Any]:
        config: Dict[str, Any] = {"type": spec.config_type}
        config.update((k, v) for k, v in extra.items() if k != "type")

        notifications = [
            {"notification_id": notification_id}
            for notification_id in spec.notification_ids or []
        ]

        entity: Dict[str, Any] = {"title": spec.title}
        if not creating:
            entity["id"] = spec.id
        if spec.description:
            entity["description"] = spec.description
        entity.update(
            {
                "priority": spec.priority,
                "alert": len(notifications) > 0,
                "config": config,
                "field_spec": {},
                "key_spec": [],
                "notification_settings": {
                    "grace_period_ms": spec.grace_period_ms,
                    "backlog_size": spec.backlog_size,
                },
                "notifications": notifications,
                "storage": [],
            }
        )
        return entity

    def share_request(self, spec: EventDefinitionSpec) -> Optional[Dict[str, Any]]:
        if not spec.share_with:
            return None
        return {"selected_grantee_capabilities": dict(spec.share_with)}

    def apply_record(
        self, state: EventDefinitionSpec, record: Dict[str, Any]
    ) -> EventDefinitionSpec:
        config = record.get("config") or {}
        settings = record.get("notification_settings") or {}
        notifications = record.get("notifications") or []

        if notifications:
            notification_ids = [n.get("notification_id") for n in notifications]
        elif state.notification_ids is None:
            notification_ids = None
        else:
            notification_ids = []

        return dataclasses.replace(
            state,
            title=record.get("title", ""),
            description=record.get("description") or "",
            priority=record.get("priority", state.priority),
            config_type=config.get("type", state.config_type),
            grace_period_ms=settings.get("grace_period_ms", 0),
            backlog_size=settings.get("backlog_size", 0),
            notification_ids=notification_ids,
        )
