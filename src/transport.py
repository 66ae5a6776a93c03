"""
Transport - Authenticated JSON calls against the Graylog REST API.

Each call opens its own aiohttp session, sends one request with HTTP Basic
credentials and the caller-identification header, and either returns the
decoded body or raises a classified error. The transport keeps no state
besides its immutable configuration, so concurrent calls are safe.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from config import GraylogConfig
from errors import APIError, ResourceNotFoundError, TransportError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


class GraylogTransport:
    """Sends single requests to ``<base_url>/api/<path>``."""

    def __init__(self, config: GraylogConfig):
        self.config = config

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for Graylog API requests."""
        headers = {
            "Authorization": aiohttp.encode_basic_auth(
                self.config.username, self.config.password, encoding="utf-8"
            ),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.x_requested_by:
            headers["X-Requested-By"] = self.config.x_requested_by
        return headers

    def _url(self, path: str) -> str:
        return f"{self.config.api_url}/{path.lstrip('/')}"

    async def call(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        decode: bool = True,
    ) -> Any:
        """
        Perform one API call.

        Args:
            method: One of GET, POST, PUT, DELETE.
            path: API path relative to ``/api`` (e.g. ``system/inputs``).
            body: Optional JSON-serializable request body.
            decode: Whether to decode the response body as JSON.

        Returns:
            The decoded response body, or None when decoding was not
            requested or the body was empty.

        Raises:
            ValidationError: If the method is not supported.
            APIError: If the API answers with a non-2xx status.
            TransportError: If the request cannot be built, sent or decoded.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method}")

        payload = None
        if body is not None:
            try:
                payload = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise TransportError(
                    method, path, f"failed to marshal request body: {e}"
                ) from e

        try:
            headers = self._get_headers()
        except (ValueError, UnicodeError) as e:
            raise TransportError(
                method, path, f"failed to build request headers: {e}"
            ) from e

        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        logger.debug(f"{method} {path}")

        try:
            async with aiohttp.ClientSession(
                timeout=timeout, headers=headers
            ) as session:
                async with session.request(
                    method, self._url(path), data=payload
                ) as response:
                    status = response.status
                    text = await response.text()
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            ValueError,
            UnicodeError,
        ) as e:
            raise TransportError(
                method, path, f"failed to execute request: {e!r}"
            ) from e

        if status == 404:
            raise ResourceNotFoundError(text, method=method, path=path)
        if status < 200 or status >= 300:
            raise APIError(status, text, method=method, path=path)

        if not decode or not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(method, path, f"failed to decode response: {e}") from e
