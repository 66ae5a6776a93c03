"""Event notification reconciler."""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kinds import ResourceKind
from reconcilers.base import ResourceReconciler


@dataclass
class EventNotificationSpec:
    """Desired (or reconciled) state of one event notification."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    notification_type: str = ""
    config: Optional[Dict[str, Any]] = None
    share_with: Optional[Dict[str, str]] = None


class EventNotificationReconciler(ResourceReconciler):
    """Reconciles ``events/notifications``; the notification type lives in config."""

    kind = ResourceKind.EVENT_NOTIFICATION
    spec_type = EventNotificationSpec
    discriminator_field = "notification_type"
    extra_field = "config"

    def build_payload(
        self, spec: EventNotificationSpec, extra: Dict[str, Any], creating: bool
    ) -> Dict[str, Any]:
        config: Dict[str, Any] = {"type": spec.notification_type}
        config.update((k, v) for k, v in extra.items() if k != "type")

        entity: Dict[str, Any] = {"title": spec.title}
        if not creating:
            entity["id"] = spec.id
        if spec.description:
            entity["description"] = spec.description
        entity["config"] = config
        return entity

    def share_request(self, spec: EventNotificationSpec) -> Optional[Dict[str, Any]]:
        if not spec.share_with:
            return None
        return {"selected_grantee_capabilities": dict(spec.share_with)}

    def apply_record(
        self, state: EventNotificationSpec, record: Dict[str, Any]
    ) -> EventNotificationSpec:
        config = record.get("config") or {}
        return dataclasses.replace(
            state,
            title=record.get("title", ""),
            description=record.get("description") or "",
            notification_type=config.get("type", state.notification_type),
        )
