"""
Spec Validation - JSON Schema validation of desired specs.

Every desired spec is checked against its kind's schema before any request
is built, so malformed input never reaches the network.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator

from errors import ValidationError
from kinds import ResourceKind

logger = logging.getLogger(__name__)

_NON_EMPTY = {"type": "string", "minLength": 1}
_OPTIONAL_TEXT = {"type": ["string", "null"]}
_EXTRA_CONFIG = {
    "type": ["object", "null"],
    "additionalProperties": {"type": ["string", "integer", "boolean"]},
}
_SHARE_WITH = {
    "type": ["object", "null"],
    "additionalProperties": {"type": "string"},
}
_COUNT = {"type": "integer", "minimum": 0}
_STRATEGY = {"type": ["object", "null"]}

SPEC_SCHEMAS: Dict[ResourceKind, Dict[str, Any]] = {
    ResourceKind.EVENT_DEFINITION: {
        "type": "object",
        "required": ["title", "priority", "config_type"],
        "properties": {
            "title": _NON_EMPTY,
            "description": _OPTIONAL_TEXT,
            "priority": {"type": "integer"},
            "config_type": _NON_EMPTY,
            "config": _EXTRA_CONFIG,
            "grace_period_ms": _COUNT,
            "backlog_size": _COUNT,
            "notification_ids": {
                "type": ["array", "null"],
                "items": _NON_EMPTY,
            },
            "share_with": _SHARE_WITH,
        },
    },
    ResourceKind.EVENT_NOTIFICATION: {
        "type": "object",
        "required": ["title", "notification_type"],
        "properties": {
            "title": _NON_EMPTY,
            "description": _OPTIONAL_TEXT,
            "notification_type": _NON_EMPTY,
            "config": _EXTRA_CONFIG,
            "share_with": _SHARE_WITH,
        },
    },
    ResourceKind.INDEX_SET: {
        "type": "object",
        "required": ["title", "index_prefix"],
        "properties": {
            "title": _NON_EMPTY,
            "description": _OPTIONAL_TEXT,
            "index_prefix": _NON_EMPTY,
            "shards": {"type": "integer", "minimum": 1},
            "replicas": _COUNT,
            "rotation_strategy_class": _NON_EMPTY,
            "retention_strategy_class": _NON_EMPTY,
            "index_analyzer": _NON_EMPTY,
            "index_optimization_max_num_segments": {"type": "integer", "minimum": 1},
            "field_type_refresh_interval": _COUNT,
            "rotation_strategy": _STRATEGY,
            "retention_strategy": _STRATEGY,
            "data_tiering": _STRATEGY,
        },
    },
    ResourceKind.INPUT: {
        "type": "object",
        "required": ["title", "type"],
        "properties": {
            "title": _NON_EMPTY,
            "type": _NON_EMPTY,
            "global_": {"type": "boolean"},
            "node": _OPTIONAL_TEXT,
            "configuration": _EXTRA_CONFIG,
        },
    },
}


def validate_spec_against_schema(
    spec: Dict[str, Any], schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate a desired spec against a JSON Schema.

    Args:
        spec: The desired spec as a plain dict
        schema: The JSON Schema to validate against

    Returns:
        Tuple of (is_valid, error_message)
    """
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(spec), key=lambda e: [str(p) for p in e.path])

    if not errors:
        return True, None

    # Collect all validation errors
    error_messages = []
    for error in errors:
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        error_messages.append(f"{path}: {error.message}")

    return False, "; ".join(error_messages)


def require_valid_spec(kind: ResourceKind, spec: Dict[str, Any]) -> None:
    """
    Raise ValidationError unless ``spec`` satisfies its kind's schema.

    Args:
        kind: The resource kind the spec describes.
        spec: The desired spec as a plain dict.

    Raises:
        ValidationError: With every schema violation joined by "; ".
    """
    is_valid, error = validate_spec_against_schema(spec, SPEC_SCHEMAS[kind])
    if not is_valid:
        logger.debug(f"Rejected {kind.value} spec: {error}")
        raise ValidationError(f"Invalid {kind.value} spec: {error}")
