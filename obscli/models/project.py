"""OBS project data model.

A ``Project`` is used both for the desired state read from a manifest and
for the state observed on the remote build service; the two have the same
shape. Models are passive: nothing here validates field contents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# --- Persons ---


@dataclass
class Person:
    """One (account, role) binding on a project."""

    user_id: str = ""
    role: str = ""  # maintainer | bugowner | reviewer | downloader | reader

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Person:
        return cls(
            user_id=_first_str(data, "userID", "userid", "user_id"),
            role=_str(data, "role"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"userID": self.user_id, "role": self.role}


# --- Repositories ---


@dataclass
class RepositoryPath:
    """A build dependency of a repository on another project's repository."""

    project: str = ""
    repository: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepositoryPath:
        return cls(
            project=_str(data, "project"),
            repository=_str(data, "repository"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"project": self.project, "repository": self.repository}


@dataclass
class Repository:
    """A named build target and the architectures it builds for.

    ``paths`` are sent to the remote on upsert but take no part in the
    equivalence check.
    """

    repository: str = ""
    architectures: list[str] = field(default_factory=list)
    paths: list[RepositoryPath] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Repository:
        return cls(
            repository=_str(data, "repository"),
            architectures=[
                _check_str("architectures", a) for a in _list(data, "architectures")
            ],
            paths=[RepositoryPath.from_dict(_mapping("paths", p)) for p in _list(data, "paths")],
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "repository": self.repository,
            "architectures": list(self.architectures),
        }
        if self.paths:
            result["paths"] = [p.to_dict() for p in self.paths]
        return result


# --- Project ---


@dataclass
class Project:
    """A build-service project, keyed by ``name``."""

    name: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    persons: list[Person] = field(default_factory=list)
    repositories: list[Repository] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        """Build a project from its manifest mapping.

        Unknown keys are ignored and missing or null keys fall back to empty
        values. A value of the wrong type raises ``TypeError``.
        """
        return cls(
            name=_str(data, "name"),
            title=_str(data, "title"),
            description=_str(data, "description"),
            url=_str(data, "url"),
            persons=[Person.from_dict(_mapping("persons", p)) for p in _list(data, "persons")],
            repositories=[
                Repository.from_dict(_mapping("repositories", r))
                for r in _list(data, "repositories")
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "persons": [p.to_dict() for p in self.persons],
            "repositories": [r.to_dict() for r in self.repositories],
        }


# --- Field readers ---


def _check_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return _check_str(key, value)


def _first_str(data: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = _str(data, key)
        if value:
            return value
    return ""


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _mapping(key: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"entries of '{key}' must be mappings, got {type(value).__name__}")
    return value
