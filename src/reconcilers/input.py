"""
Input reconciler.

Creating an input returns only its id, so every create is followed by a
fetch of the full record. The API reports the running configuration of an
input under ``attributes``.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kinds import ResourceKind
from reconcilers.base import ResourceReconciler


@dataclass
class InputSpec:
    """Desired (or reconciled) state of one input."""

    id: Optional[str] = None
    title: str = ""
    type: str = ""
    global_: bool = False
    node: Optional[str] = None
    configuration: Optional[Dict[str, Any]] = None


class InputReconciler(ResourceReconciler):
    """Reconciles ``system/inputs``."""

    kind = ResourceKind.INPUT
    spec_type = InputSpec
    discriminator_field = "type"
    extra_field = "configuration"

    def build_payload(
        self, spec: InputSpec, extra: Dict[str, Any], creating: bool
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": spec.title,
            "type": spec.type,
            "global": spec.global_,
            "configuration": extra,
        }
        if spec.node:
            payload["node"] = spec.node
        return payload

    def remote_extra(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if "attributes" in record:
            return record["attributes"]
        return record.get("configuration")

    def apply_record(self, state: InputSpec, record: Dict[str, Any]) -> InputSpec:
        return dataclasses.replace(
            state,
            title=record.get("title", ""),
            type=record.get("type", state.type),
            global_=bool(record.get("global", False)),
            node=record.get("node"),
        )
