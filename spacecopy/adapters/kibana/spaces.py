"""Kibana spaces adapter.

Implements SpaceCopyPort by calling the Kibana spaces API
``_copy_saved_objects`` endpoint and normalizing its per space
response into core domain models.

API documentation:
https://www.elastic.co/guide/en/kibana/master/spaces-api-copy-saved-objects.html
"""

import logging
from typing import Any

import httpx

from spacecopy.core.models import (
    DEFAULT_SPACE,
    CopyResult,
    CopySavedObjectsParameters,
    SpaceCopyOutcome,
)
from spacecopy.core.ports import SpaceCopyPort

logger = logging.getLogger(__name__)

COPY_SAVED_OBJECTS_PATH = "/api/spaces/_copy_saved_objects"


class KibanaAPIError(RuntimeError):
    """Raised when Kibana answers a request with a non-success status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Kibana API error {status_code}: {message}")


def copy_saved_objects_path(source_space: str) -> str:
    """Return the endpoint path for copying out of ``source_space``.

    The default space is addressed without a ``/s/<space>`` prefix.
    """
    if not source_space or source_space == DEFAULT_SPACE:
        return COPY_SAVED_OBJECTS_PATH
    return f"/s/{source_space}{COPY_SAVED_OBJECTS_PATH}"


def _count(value: Any) -> int:
    """Return a reported object count, or 0 if it is not a number."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


class KibanaSpacesAdapter(SpaceCopyPort):
    """Kibana-backed space copy adapter via REST API."""

    def __init__(
        self,
        api_url: str,
        username: str = "",
        password: str = "",
        api_key: str = "",
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Kibana adapter.

        Args:
            api_url: Base URL for Kibana (e.g., http://localhost:5601)
            username: Optional user for basic authentication.
            password: Password for basic authentication.
            api_key: Optional API key, used instead of basic authentication.
            timeout: Request timeout in seconds.
            verify: Verify TLS certificates.
            transport: Optional httpx transport, mainly for tests.
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        auth = httpx.BasicAuth(username, password) if username and not api_key else None
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=self._get_headers(),
            auth=auth,
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Build request headers."""
        headers = {"Content-Type": "application/json", "kbn-xsrf": "true"}
        if self.api_key:
            headers["Authorization"] = f"ApiKey {self.api_key}"
        return headers

    async def __aenter__(self) -> "KibanaSpacesAdapter":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def copy_saved_objects(
        self, parameters: CopySavedObjectsParameters, source_space: str
    ) -> CopyResult:
        """Copy saved objects from ``source_space`` to the target spaces.

        Raises:
            KibanaAPIError: If Kibana answers with a status >= 300.
            httpx.HTTPError: If the request cannot be sent.
        """
        path = copy_saved_objects_path(source_space)
        try:
            response = await self.client.post(path, json=parameters.to_payload())
        except httpx.HTTPError as e:
            logger.error(f"Failed to copy saved objects via Kibana: {e}", exc_info=True)
            raise

        if response.status_code >= 300:
            raise KibanaAPIError(response.status_code, response.text)

        return self._parse_copy_result(response)

    def _parse_copy_result(self, response: httpx.Response) -> CopyResult:
        """Normalize the per space copy response.

        Kibana answers ``{"<space>": {"success": ..., "successCount": ...,
        "errors": [...]}}``. An unparsable body yields an empty result.
        """
        try:
            data = response.json()
        except ValueError:
            logger.warning("Kibana returned a non JSON copy response")
            return CopyResult()
        if not isinstance(data, dict):
            return CopyResult()

        outcomes = []
        for space, body in sorted(data.items()):
            if not isinstance(body, dict):
                continue
            errors = body.get("errors") or []
            outcomes.append(
                SpaceCopyOutcome(
                    space=space,
                    success=bool(body.get("success", False)),
                    success_count=_count(body.get("successCount")),
                    errors=tuple(e for e in errors if isinstance(e, dict)),
                )
            )
        return CopyResult(outcomes=tuple(outcomes))
