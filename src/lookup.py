"""
Lookup - Resolve a single resource by id or by title.

Titles are not unique in Graylog. A title lookup succeeds only when exactly
one listed record carries that title; otherwise the caller is told whether
nothing or several records matched. The matched record is then fetched in
full by id, with its timestamps normalized.
"""

import logging
from typing import Any, Dict, Optional

from clients.base import ResourceClient
from errors import (
    AmbiguousResultError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from timestamps import normalize_timestamps

logger = logging.getLogger(__name__)


async def resolve_by_title(client: ResourceClient, title: str) -> Dict[str, Any]:
    """
    Return the one listed record titled ``title``.

    Raises:
        NotFoundError: If no record has that title.
        AmbiguousResultError: If several records have that title.
    """
    label = client.descriptor.label
    matches = await client.search(title)

    if not matches:
        raise NotFoundError(f"No {label} found with title: {title}", title=title)
    if len(matches) > 1:
        logger.warning(f"{len(matches)} {label}s share the title '{title}'")
        raise AmbiguousResultError(label, title, len(matches))

    return matches[0]


async def find_one(
    client: ResourceClient,
    resource_id: Optional[str] = None,
    title: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Find one resource by id, or by title when no id is given.

    Args:
        client: Client of the kind to search.
        resource_id: Exact id; takes precedence over ``title``.
        title: Exact title.

    Returns:
        The full record, with unset timestamps removed and the rest
        formatted with millisecond precision.

    Raises:
        ValidationError: If neither id nor title is given.
        NotFoundError: If nothing matches (ResourceNotFoundError for an id).
        AmbiguousResultError: If the title matches several records.
        TransportError: If a timestamp of the record cannot be parsed.
    """
    if not resource_id:
        if not title:
            raise ValidationError(
                f"Either 'id' or 'title' must be provided to find a "
                f"{client.descriptor.label}"
            )
        match = await resolve_by_title(client, title)
        resource_id = match.get("id")
        if not resource_id:
            raise NotFoundError(
                f"{client.descriptor.label} titled {title} has no id", title=title
            )

    record = await client.get(resource_id)
    try:
        return normalize_timestamps(record, client.descriptor.timestamp_fields)
    except ValueError as e:
        raise TransportError(
            "GET",
            client.descriptor.item_path(resource_id),
            f"failed to decode timestamp {e}",
        ) from e
