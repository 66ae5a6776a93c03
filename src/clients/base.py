"""
Resource Client Base - Generic CRUD client for one Graylog resource kind.

A resource client turns Get/List/Search/Create/Update/Delete into a single
transport call, using its kind's descriptor for the collection path, the
required fields and the entity envelope. Required-field checks run before
any request is sent.
"""

import logging
from typing import Any, Dict, List, Optional

from errors import TransportError, ValidationError
from kinds import KindDescriptor, ResourceKind, get_descriptor
from transport import GraylogTransport

logger = logging.getLogger(__name__)


def _lookup_path(payload: Dict[str, Any], dotted: str) -> Any:
    value: Any = payload
    for part in dotted.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class ResourceClient:
    """
    CRUD client for one resource kind.

    Subclasses only pick the kind; every convention comes from its
    KindDescriptor.
    """

    kind: ResourceKind

    def __init__(self, transport: GraylogTransport):
        self.transport = transport

    @property
    def descriptor(self) -> KindDescriptor:
        return get_descriptor(self.kind)

    def _require_id(self, resource_id: Optional[str]) -> str:
        if not resource_id:
            raise ValidationError(f"{self.descriptor.label} ID is required")
        return resource_id

    def _require_fields(
        self, operation: str, payload: Optional[Dict[str, Any]], fields: tuple
    ) -> Dict[str, Any]:
        label = self.descriptor.label
        if payload is None:
            raise ValidationError(f"{operation} {label} request is required")
        for name in fields:
            if _lookup_path(payload, name) in (None, ""):
                raise ValidationError(f"{label} {name} is required")
        return payload

    def _wrap(
        self, payload: Dict[str, Any], share_request: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Apply the kind's entity envelope, if it has one."""
        if not self.descriptor.envelope:
            return payload
        body: Dict[str, Any] = {"entity": payload}
        if share_request:
            body["share_request"] = share_request
        return body

    async def get(self, resource_id: str) -> Dict[str, Any]:
        """
        Fetch one record by id.

        Raises:
            ValidationError: If ``resource_id`` is empty.
            ResourceNotFoundError: If the API has no such record.
        """
        resource_id = self._require_id(resource_id)
        record = await self.transport.call(
            "GET", self.descriptor.item_path(resource_id)
        )
        if not isinstance(record, dict):
            raise TransportError(
                "GET",
                self.descriptor.item_path(resource_id),
                f"expected a {self.descriptor.label} object",
            )
        return record

    async def list(self) -> Dict[str, Any]:
        """Fetch the collection's list envelope (total count and items)."""
        envelope = await self.transport.call("GET", self.descriptor.collection_path)
        return envelope or {}

    async def search(self, title: str) -> List[Dict[str, Any]]:
        """Return the listed records whose title equals ``title`` exactly."""
        envelope = await self.list()
        items = envelope.get(self.descriptor.list_key) or []
        matches = [item for item in items if item.get("title") == title]
        logger.debug(
            f"Found {len(matches)} {self.descriptor.label}(s) titled '{title}'"
        )
        return matches

    async def create(
        self,
        payload: Optional[Dict[str, Any]],
        share_request: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Create a record.

        Args:
            payload: The entity fields; wrapped in an envelope when the kind
                requires one.
            share_request: Optional sharing block for enveloped kinds.

        Returns:
            The decoded response. For some kinds this only holds the new id.
        """
        payload = self._require_fields(
            "create", payload, self.descriptor.required_on_create
        )
        record = await self.transport.call(
            "POST",
            self.descriptor.collection_path,
            self._wrap(payload, share_request),
        )
        logger.info(f"Created {self.descriptor.label} '{payload.get('title')}'")
        return record or {}

    async def update(
        self,
        resource_id: str,
        payload: Optional[Dict[str, Any]],
        share_request: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Replace a record by id; returns the decoded response."""
        resource_id = self._require_id(resource_id)
        payload = self._require_fields(
            "update", payload, self.descriptor.required_on_update
        )
        record = await self.transport.call(
            "PUT",
            self.descriptor.item_path(resource_id),
            self._wrap(payload, share_request),
        )
        logger.info(f"Updated {self.descriptor.label} {resource_id}")
        return record or {}

    async def delete(self, resource_id: str) -> None:
        """Delete a record by id. An empty 2xx answer is success."""
        resource_id = self._require_id(resource_id)
        await self.transport.call(
            "DELETE", self.descriptor.item_path(resource_id), decode=False
        )
        logger.info(f"Deleted {self.descriptor.label} {resource_id}")
