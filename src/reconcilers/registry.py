"""
Reconciler Registry - Maps resource kinds to their reconcilers.
"""

import logging
from typing import Dict, Type

from clients.base import ResourceClient
from kinds import ResourceKind
from reconcilers.base import ResourceReconciler
from reconcilers.event_definition import EventDefinitionReconciler
from reconcilers.event_notification import EventNotificationReconciler
from reconcilers.index_set import IndexSetReconciler
from reconcilers.input import InputReconciler

logger = logging.getLogger(__name__)

RECONCILERS: Dict[ResourceKind, Type[ResourceReconciler]] = {
    ResourceKind.EVENT_DEFINITION: EventDefinitionReconciler,
    ResourceKind.EVENT_NOTIFICATION: EventNotificationReconciler,
    ResourceKind.INDEX_SET: IndexSetReconciler,
    ResourceKind.INPUT: InputReconciler,
}


def get_reconciler(kind: ResourceKind, client: ResourceClient) -> ResourceReconciler:
    """
    Build the reconciler for a resource kind.

    Args:
        kind: The resource kind.
        client: The resource client of the same kind.

    Raises:
        ValueError: If the client serves a different kind.
    """
    if client.kind != kind:
        raise ValueError(
            f"Cannot reconcile {kind.value} with a {client.kind.value} client"
        )
    reconciler_class = RECONCILERS[kind]
    logger.debug(f"Using {reconciler_class.__name__} for {kind.value}")
    return reconciler_class(client)
