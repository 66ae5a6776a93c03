"""
Graylog - Entry point bundling the transport, clients and reconcilers.
"""

import logging
from typing import Optional

from clients import CLIENTS, ResourceClient
from config import GraylogConfig
from kinds import ResourceKind
from reconcilers import ResourceReconciler, get_reconciler
from transport import GraylogTransport

logger = logging.getLogger(__name__)


class GraylogClient:
    """
    One connection to a Graylog server.

    All resource clients share a single transport, and therefore a single
    immutable configuration.
    """

    def __init__(
        self, config: GraylogConfig, transport: Optional[GraylogTransport] = None
    ):
        self.config = config
        self.transport = transport or GraylogTransport(config)
        self._clients = {
            kind: client_class(self.transport)
            for kind, client_class in CLIENTS.items()
        }

        self.event_definitions = self._clients[ResourceKind.EVENT_DEFINITION]
        self.event_notifications = self._clients[ResourceKind.EVENT_NOTIFICATION]
        self.index_sets = self._clients[ResourceKind.INDEX_SET]
        self.inputs = self._clients[ResourceKind.INPUT]

        logger.debug(f"Graylog client for {config.api_url}")

    @classmethod
    def from_env(cls) -> "GraylogClient":
        """Build a client from the GRAYLOG_* environment variables."""
        return cls(GraylogConfig.from_env())

    def client_for(self, kind: ResourceKind) -> ResourceClient:
        return self._clients[kind]

    def reconciler_for(self, kind: ResourceKind) -> ResourceReconciler:
        return get_reconciler(kind, self.client_for(kind))
