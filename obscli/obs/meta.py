"""Conversion between ``Project`` and OBS project meta XML.

Only the elements obscli manages are read or written; anything else in a
remote meta document (groups, build flags, locks) is ignored on read.
Responses are parsed with defusedxml, so DTD entity declarations are refused.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import defusedxml.ElementTree as SafeET
from defusedxml import DefusedXmlException

from obscli.errors import OBSError
from obscli.models.project import Person, Project, Repository, RepositoryPath


def project_to_xml(project: Project) -> bytes:
    root = ET.Element("project", {"name": project.name})
    ET.SubElement(root, "title").text = project.title
    ET.SubElement(root, "description").text = project.description
    if project.url:
        ET.SubElement(root, "url").text = project.url

    for person in project.persons:
        ET.SubElement(root, "person", {"userid": person.user_id, "role": person.role})

    for repo in project.repositories:
        repo_el = ET.SubElement(root, "repository", {"name": repo.repository})
        for path in repo.paths:
            ET.SubElement(
                repo_el, "path", {"project": path.project, "repository": path.repository}
            )
        for arch in repo.architectures:
            ET.SubElement(repo_el, "arch").text = arch

    return ET.tostring(root, encoding="utf-8")


def project_from_xml(content: bytes | str) -> Project:
    """Parse a ``<project>`` meta document.

    Raises:
        OBSError: if the document is not well-formed or not a project.
    """
    try:
        root = SafeET.fromstring(content)
    except (ET.ParseError, DefusedXmlException) as e:
        raise OBSError(f"invalid project meta XML: {e}") from e

    if root.tag != "project":
        raise OBSError(f"expected <project> element, got <{root.tag}>")

    return Project(
        name=root.get("name", ""),
        title=root.findtext("title", ""),
        description=root.findtext("description", ""),
        url=root.findtext("url", ""),
        persons=[
            Person(user_id=el.get("userid", ""), role=el.get("role", ""))
            for el in root.findall("person")
        ],
        repositories=[_repository_from_element(el) for el in root.findall("repository")],
    )


def status_summary(content: bytes | str) -> str:
    """Extract the ``<summary>`` text from an OBS ``<status>`` error body."""
    try:
        root = SafeET.fromstring(content)
    except (ET.ParseError, DefusedXmlException):
        return ""
    if root.tag != "status":
        return ""
    return (root.findtext("summary") or "").strip()


def _repository_from_element(el: ET.Element) -> Repository:
    return Repository(
        repository=el.get("name", ""),
        architectures=[(a.text or "") for a in el.findall("arch")],
        paths=[
            RepositoryPath(project=p.get("project", ""), repository=p.get("repository", ""))
            for p in el.findall("path")
        ],
    )
