"""
Index set reconciler.

Index sets are sent flat. They have no open extra configuration: every
field is a typed scalar that Read copies back unconditionally. Rotation,
retention and data tiering blocks default to a time-based rotation with
deletion retention unless the spec provides its own.
"""

import copy
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kinds import ResourceKind
from reconcilers.base import ResourceReconciler

DEFAULT_ROTATION_STRATEGY_CLASS = (
    "org.graylog2.indexer.rotation.strategies.TimeBasedSizeOptimizingStrategy"
)
DEFAULT_RETENTION_STRATEGY_CLASS = (
    "org.graylog2.indexer.retention.strategies.DeletionRetentionStrategy"
)

DEFAULT_ROTATION_STRATEGY: Dict[str, Any] = {
    "type": "org.graylog2.indexer.rotation.strategies.TimeBasedSizeOptimizingStrategyConfig",
    "index_lifetime_min": "P30D",
    "index_lifetime_max": "P40D",
}
DEFAULT_RETENTION_STRATEGY: Dict[str, Any] = {
    "type": "org.graylog2.indexer.retention.strategies.DeletionRetentionStrategyConfig",
    "max_number_of_indices": 20,
}
DEFAULT_DATA_TIERING: Dict[str, Any] = {
    "type": "hot_only",
    "index_lifetime_min": "P30D",
    "index_lifetime_max": "P40D",
}


@dataclass
class IndexSetSpec:
    """Desired (or reconciled) state of one index set."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    index_prefix: str = ""
    shards: int = 1
    replicas: int = 0
    rotation_strategy_class: str = DEFAULT_ROTATION_STRATEGY_CLASS
    retention_strategy_class: str = DEFAULT_RETENTION_STRATEGY_CLASS
    index_analyzer: str = "standard"
    index_optimization_max_num_segments: int = 1
    field_type_refresh_interval: int = 5000
    rotation_strategy: Optional[Dict[str, Any]] = None
    retention_strategy: Optional[Dict[str, Any]] = None
    data_tiering: Optional[Dict[str, Any]] = None
    # Computed by the API
    writable: Optional[bool] = None
    default: Optional[bool] = None


class IndexSetReconciler(ResourceReconciler):
    """Reconciles ``system/indices/index_sets``."""

    kind = ResourceKind.INDEX_SET
    spec_type = IndexSetSpec
    discriminator_field = "index_prefix"

    def build_payload(
        self, spec: IndexSetSpec, extra: Dict[str, Any], creating: bool
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": spec.title}
        if spec.description:
            payload["description"] = spec.description
        if creating:
            payload["index_prefix"] = spec.index_prefix
        payload.update(
            {
                "shards": spec.shards,
                "replicas": spec.replicas,
                "rotation_strategy_class": spec.rotation_strategy_class,
                "rotation_strategy": copy.deepcopy(
                    spec.rotation_strategy or DEFAULT_ROTATION_STRATEGY
                ),
                "retention_strategy_class": spec.retention_strategy_class,
                "retention_strategy": copy.deepcopy(
                    spec.retention_strategy or DEFAULT_RETENTION_STRATEGY
                ),
                "index_analyzer": spec.index_analyzer,
                "index_optimization_max_num_segments": spec.index_optimization_max_num_segments,
                "index_optimization_disabled": False,
                "field_type_refresh_interval": spec.field_type_refresh_interval,
                "use_legacy_rotation": False,
            }
        )
        if creating:
            payload["writable"] = True
            payload["data_tiering"] = copy.deepcopy(
                spec.data_tiering or DEFAULT_DATA_TIERING
            )
        return payload

    def apply_record(self, state: IndexSetSpec, record: Dict[str, Any]) -> IndexSetSpec:
        return dataclasses.replace(
            state,
            title=record.get("title", ""),
            description=record.get("description") or "",
            index_prefix=record.get("index_prefix") or state.index_prefix,
            shards=record.get("shards", state.shards),
            replicas=record.get("replicas", state.replicas),
            rotation_strategy_class=record.get(
                "rotation_strategy_class", state.rotation_strategy_class
            ),
            retention_strategy_class=record.get(
                "retention_strategy_class", state.retention_strategy_class
            ),
            index_analyzer=record.get("index_analyzer", state.index_analyzer),
            index_optimization_max_num_segments=record.get(
                "index_optimization_max_num_segments",
                state.index_optimization_max_num_segments,
            ),
            field_type_refresh_interval=record.get(
                "field_type_refresh_interval", state.field_type_refresh_interval
            ),
            writable=bool(record.get("writable", False)),
            default=bool(record.get("default", False)),
        )
