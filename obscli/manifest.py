"""Manifest loading: the desired state for a reconciliation run.

A manifest is a YAML document with a top-level ``projects`` list::

    projects:
      - name: home:alice:kubernetes
        title: Kubernetes packages
        description: Packages for Kubernetes
        url: https://kubernetes.io
        persons:
          - userID: alice
            role: maintainer
        repositories:
          - repository: openSUSE_Tumbleweed
            paths:
              - project: openSUSE:Factory
                repository: snapshot
            architectures:
              - x86_64
              - aarch64

Loading is all-or-nothing: any problem, including a field of the wrong
type, raises ``ManifestError``.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from obscli.errors import ManifestError
from obscli.models.project import Project


def load_manifest(path: str | Path) -> list[Project]:
    """Load and parse a manifest file into a list of projects."""
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"{path} does not exist")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(f"unable to read the manifest content: {e}") from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"manifest is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"error unmarshalling yaml: {e}") from e

    return parse_manifest(data)


def parse_manifest(data: object) -> list[Project]:
    """Convert an already-deserialized manifest document into projects.

    The document must be a mapping with a ``projects`` list; an empty
    document or a missing key is rejected rather than read as no projects.
    """
    if not isinstance(data, dict) or "projects" not in data:
        raise ManifestError("manifest must be a mapping with a 'projects' list")

    entries = data["projects"]
    if not isinstance(entries, list):
        raise ManifestError("'projects' must be a list")

    projects = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ManifestError(f"project #{i + 1} must be a mapping")
        try:
            projects.append(Project.from_dict(entry))
        except TypeError as e:
            raise ManifestError(f"project #{i + 1} is malformed: {e}") from e

    return projects
