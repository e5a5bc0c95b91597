"""HTTP client for the Open Build Service API.

Implements the two calls the reconciler needs: reading a project's meta
document and writing it back. Writes use ``PUT /source/<project>/_meta``,
which creates the project when absent and replaces it otherwise.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
from loguru import logger

from obscli.config import DEFAULT_API_URL, OBSCredentials
from obscli.errors import OBSError, ProjectNotFoundError
from obscli.models.project import Project
from obscli.obs.meta import project_from_xml, project_to_xml, status_summary

DEFAULT_TIMEOUT = 30.0


class OBSClient:
    """Thin wrapper around ``httpx.Client`` for project meta operations.

    Parameters
    ----------
    username, password : str
        Credentials for HTTP basic authentication.
    api_url : str
        Base URL of the OBS API.
    timeout : float
        Per-request timeout in seconds.
    transport : httpx.BaseTransport | None
        Optional transport override (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        username: str,
        password: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self._client = httpx.Client(
            base_url=api_url,
            auth=(username, password),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/xml"},
        )

    @classmethod
    def from_credentials(cls, credentials: OBSCredentials, **kwargs) -> OBSClient:
        return cls(
            credentials.username,
            credentials.password,
            api_url=credentials.api_url,
            **kwargs,
        )

    # -- context management --------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OBSClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- project meta ---------------------------------------------------------

    def fetch(self, name: str) -> Project:
        """Return the remote meta of project ``name``.

        Raises:
            ProjectNotFoundError: the project does not exist.
            OBSError: the request failed or returned an unexpected status.
        """
        if not name:
            raise OBSError("project name must not be empty")

        response = self._request("GET", _meta_path(name))
        if response.status_code == 404:
            raise ProjectNotFoundError(name)
        _raise_for_status(response, f"fetching project '{name}'")

        return project_from_xml(response.content)

    def upsert(self, project: Project) -> None:
        """Create or replace ``project`` on the remote instance."""
        if not project.name:
            raise OBSError("project name must not be empty")

        response = self._request(
            "PUT",
            _meta_path(project.name),
            content=project_to_xml(project),
            headers={"Content-Type": "application/xml"},
        )
        _raise_for_status(response, f"updating project '{project.name}'")

    # -- internals ------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug("{} {}{}", method, self.api_url, path)
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise OBSError(f"{method} {path} failed: {e}") from e


def _meta_path(name: str) -> str:
    # Project names are a single path segment; ":" separates subprojects.
    return f"/source/{quote(name, safe=':')}/_meta"


def _raise_for_status(response: httpx.Response, action: str) -> None:
    if response.is_success:
        return

    summary = status_summary(response.content)
    message = f"{action}: HTTP {response.status_code}"
    if summary:
        message += f" ({summary})"
    raise OBSError(message, status_code=response.status_code)
