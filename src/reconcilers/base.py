"""
Reconciler Base - Create/Read/Update/Delete lifecycle for one resource kind.

A reconciler keeps a locally declared spec and the remote Graylog record
consistent. It copes with two asymmetries of the API:

* The API enriches records with fields the caller never declared. Read only
  refreshes the extra-configuration keys the caller declared (the tracked
  set), so server-side additions never show up as drift.
* Some create responses are partial. The reconciler then fetches the full
  record by id before handing anything back. Between the two calls the
  remote record exists but is unconfirmed (ResourcePhase.CREATED_UNCONFIRMED);
  a failure in that window is logged with the orphaned id and re-raised.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Type

from clients.base import ResourceClient
from coercion import apply_defaults, coerce_mapping
from errors import GraylogError, TransportError, ValidationError
from kinds import KindDescriptor, ResourceKind, get_descriptor
from validation import require_valid_spec

logger = logging.getLogger(__name__)


class ResourcePhase(Enum):
    """Lifecycle phases of one remote resource, as seen by a reconciler."""

    ABSENT = "absent"
    CREATED_UNCONFIRMED = "created_unconfirmed"
    PRESENT = "present"


def is_partial(record: Dict[str, Any]) -> bool:
    """True when a response carries nothing beyond an identifier."""
    return set(record) <= {"id"}


class ResourceReconciler(ABC):
    """
    Abstract base class for per-kind reconcilers.

    Subclasses declare the spec dataclass they work with, the name of its
    discriminator field and of its extra-configuration mapping (if any),
    and implement payload construction and record mapping.
    """

    kind: ResourceKind
    spec_type: Type
    discriminator_field: str
    extra_field: Optional[str] = None

    def __init__(self, client: ResourceClient):
        self.client = client

    @property
    def descriptor(self) -> KindDescriptor:
        return get_descriptor(self.kind)

    # Hooks

    @abstractmethod
    def build_payload(
        self, spec: Any, extra: Dict[str, Any], creating: bool
    ) -> Dict[str, Any]:
        """
        Build the entity fields sent to the API.

        Args:
            spec: The desired spec.
            extra: Coerced and backfilled extra configuration.
            creating: True for create, False for update.

        Returns:
            The payload, without any envelope.
        """
        pass

    @abstractmethod
    def apply_record(self, state: Any, record: Dict[str, Any]) -> Any:
        """
        Copy the always-visible fields of ``record`` onto ``state``.

        Args:
            state: The spec being refreshed.
            record: The full remote record.

        Returns:
            A new spec with those fields replaced.
        """
        pass

    def remote_extra(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the record's extra-configuration mapping."""
        return record.get("config")

    def share_request(self, spec: Any) -> Optional[Dict[str, Any]]:
        """Return the sharing block to send alongside the entity, if any."""
        return None

    # Request construction

    def validate(self, spec: Any) -> None:
        """Raise ValidationError unless ``spec`` is complete."""
        if spec is None:
            raise ValidationError(f"{self.descriptor.label} spec is required")
        values = dataclasses.asdict(spec)
        values.pop("id", None)
        require_valid_spec(self.kind, values)

    def build_extra(self, spec: Any) -> Dict[str, Any]:
        """Coerce the declared extra configuration and backfill required keys."""
        declared = getattr(spec, self.extra_field) if self.extra_field else None
        extra = coerce_mapping(declared)
        discriminator = getattr(spec, self.discriminator_field)
        return apply_defaults(
            extra, self.descriptor.required_defaults.get(discriminator)
        )

    # Response mapping

    def sync_extra(
        self,
        declared: Optional[Dict[str, Any]],
        record: Dict[str, Any],
        sent: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Refresh only the declared extra-configuration keys.

        Args:
            declared: The extra mapping of the prior spec; its keys are the
                tracked set. None means nothing is tracked.
            record: The full remote record.
            sent: Values just transmitted, used for declared keys the API
                did not echo back.

        Returns:
            A mapping with exactly the tracked keys that still have a value,
            or None when nothing is tracked.
        """
        if declared is None:
            return None
        remote = self.remote_extra(record) or {}
        synced: Dict[str, Any] = {}
        for key in declared:
            if key in remote:
                synced[key] = remote[key]
            elif sent is not None and key in sent:
                synced[key] = sent[key]
        return synced

    def to_state(
        self,
        prior: Any,
        record: Dict[str, Any],
        sent: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Map a full record back onto the shape of the prior spec."""
        state = dataclasses.replace(prior, id=record.get("id") or prior.id)
        state = self.apply_record(state, record)
        if self.extra_field:
            extra = self.sync_extra(getattr(prior, self.extra_field), record, sent)
            state = dataclasses.replace(state, **{self.extra_field: extra})
        return state

    async def _confirm(
        self, record: Dict[str, Any], creating: bool, resource_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Fetch the full record when the kind or the response requires it."""
        label = self.descriptor.label
        resource_id = record.get("id") or resource_id
        if not resource_id:
            raise TransportError(
                "POST",
                self.descriptor.collection_path,
                f"{label} creation did not return an ID",
            )

        if creating:
            needed = self.descriptor.confirm_after_create or is_partial(record)
            phase = ResourcePhase.CREATED_UNCONFIRMED
        else:
            needed = self.descriptor.confirm_after_update or is_partial(record)
            phase = ResourcePhase.PRESENT

        if not needed:
            return record

        logger.debug(f"Confirming {label} {resource_id} (phase: {phase.value})")
        try:
            return await self.client.get(resource_id)
        except GraylogError as e:
            logger.error(
                f"Confirmation fetch for {label} {resource_id} failed "
                f"(phase: {phase.value}): {e}"
            )
            raise

    # Lifecycle

    async def create(self, spec: Any) -> Any:
        """
        Create the remote resource described by ``spec``.

        Returns:
            The spec refreshed from the confirmed remote record, carrying
            the new id and only the extra-configuration keys declared.
        """
        self.validate(spec)
        label = self.descriptor.label
        extra = self.build_extra(spec)
        payload = self.build_payload(spec, extra, creating=True)

        try:
            record = await self.client.create(payload, self.share_request(spec))
        except GraylogError as e:
            logger.error(f"Failed to create {label} '{spec.title}': {e}")
            raise

        record = await self._confirm(record, creating=True)
        logger.info(f"{label} '{spec.title}' is present as {record.get('id')}")
        return self.to_state(spec, record, sent=extra)

    async def read(self, state: Any) -> Any:
        """
        Refresh ``state`` from the remote record.

        Raises:
            ValidationError: If the state carries no id.
            ResourceNotFoundError: If the remote record no longer exists.
        """
        if state is None or not state.id:
            raise ValidationError(f"{self.descriptor.label} ID is required")

        try:
            record = await self.client.get(state.id)
        except GraylogError as e:
            logger.error(f"Failed to read {self.descriptor.label} {state.id}: {e}")
            raise

        return self.to_state(state, record)

    async def update(self, spec: Any) -> Any:
        """Push ``spec`` onto the existing remote resource ``spec.id``."""
        if spec is None:
            raise ValidationError(f"{self.descriptor.label} spec is required")
        if not spec.id:
            raise ValidationError(f"{self.descriptor.label} ID is required")
        self.validate(spec)

        label = self.descriptor.label
        extra = self.build_extra(spec)
        payload = self.build_payload(spec, extra, creating=False)

        try:
            record = await self.client.update(
                spec.id, payload, self.share_request(spec)
            )
        except GraylogError as e:
            logger.error(f"Failed to update {label} {spec.id}: {e}")
            raise

        record = await self._confirm(record, creating=False, resource_id=spec.id)
        return self.to_state(spec, record, sent=extra)

    async def delete(self, resource_id: str) -> None:
        """Delete the remote resource."""
        if not resource_id:
            raise ValidationError(f"{self.descriptor.label} ID is required")

        try:
            await self.client.delete(resource_id)
        except GraylogError as e:
            logger.error(
                f"Failed to delete {self.descriptor.label} {resource_id}: {e}"
            )
            raise

    async def import_state(self, resource_id: str) -> Any:
        """Adopt an existing remote resource by id, tracking no extra keys."""
        if not resource_id:
            raise ValidationError(f"{self.descriptor.label} ID is required")
        return await self.read(self.spec_type(id=resource_id))
