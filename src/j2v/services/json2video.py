"""JSON2Video movies API client."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import config

logger = logging.getLogger(__name__)


class Json2VideoClient:
    """Thin client for the JSON2Video ``/movies`` endpoint.

    Requests are sent once; HTTP errors are raised to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the JSON2Video client.

        Args:
            api_key: JSON2Video API key. Defaults to JSON2VIDEO_API_KEY env var.
            base_url: API base URL. Defaults to config.json2video_base_url.
            timeout: Request timeout in seconds. Defaults to config.request_timeout.
            transport: Optional httpx transport, used to stub the API in tests.
        """
        self._api_key = api_key or config.json2video_api_key
        if not self._api_key:
            raise ValueError(
                "JSON2Video API key not provided. Set JSON2VIDEO_API_KEY env var."
            )

        self._base_url = (base_url or config.json2video_base_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"x-api-key": self._api_key, "Content-Type": "application/json"},
            timeout=timeout if timeout is not None else config.request_timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        """Return the API base URL."""
        return self._base_url

    def __enter__(self) -> "Json2VideoClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def create_movie(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Submit a movie render request.

        Args:
            body: Compiled request body.

        Returns:
            The API response, including the ``project`` id on success.

        Raises:
            httpx.HTTPStatusError: If the API answers with an error status.
        """
        logger.debug(f"Submitting movie with {len(body.get('scenes', []))} scenes")
        response = self._client.post("/movies", json=body)
        response.raise_for_status()
        result = response.json()
        logger.info(f"Movie submitted: project {result.get('project', 'unknown')}")
        return result

    def get_movie_status(self, project_id: str) -> Dict[str, Any]:
        """Fetch the render status of a project.

        Args:
            project_id: Project id returned by create_movie.

        Returns:
            The API response; render details are under ``movie``.

        Raises:
            httpx.HTTPStatusError: If the API answers with an error status.
        """
        response = self._client.get("/movies", params={"project": project_id})
        response.raise_for_status()
        return response.json()
