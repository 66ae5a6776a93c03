"""
Reconcilers package.

One reconciler per resource kind, each implementing the Create/Read/Update/
Delete lifecycle on top of its resource client.
"""

from reconcilers.base import ResourcePhase, ResourceReconciler
from reconcilers.event_definition import EventDefinitionReconciler, EventDefinitionSpec
from reconcilers.event_notification import (
    EventNotificationReconciler,
    EventNotificationSpec,
)
from reconcilers.index_set import IndexSetReconciler, IndexSetSpec
from reconcilers.input import InputReconciler, InputSpec
from reconcilers.registry import RECONCILERS, get_reconciler

__all__ = [
    "ResourcePhase",
    "ResourceReconciler",
    "EventDefinitionReconciler",
    "EventDefinitionSpec",
    "EventNotificationReconciler",
    "EventNotificationSpec",
    "IndexSetReconciler",
    "IndexSetSpec",
    "InputReconciler",
    "InputSpec",
    "RECONCILERS",
    "get_reconciler",
]
