"""Exception hierarchy for obscli.

Configuration-level errors abort a run before any remote work happens.
Remote errors are raised per call and handled per project by the reconciler.
"""

from __future__ import annotations


class ObscliError(Exception):
    """Base class for all obscli errors."""


class ConfigError(ObscliError):
    """Missing or invalid configuration (credentials, API URL)."""


class ManifestError(ObscliError):
    """The manifest could not be found, read or parsed."""


class OBSError(ObscliError):
    """A call against the Open Build Service API failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProjectNotFoundError(OBSError):
    """The requested project does not exist on the remote instance."""

    def __init__(self, project: str, status_code: int | None = 404):
        super().__init__(f"project '{project}' not found", status_code=status_code)
        self.project = project
