"""Data models for OBS projects and their sub-entities."""

from obscli.models.project import Person, Project, Repository, RepositoryPath

__all__ = ["Person", "Project", "Repository", "RepositoryPath"]
