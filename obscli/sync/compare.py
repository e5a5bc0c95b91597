"""Equivalence check between a desired project and its remote state.

The check answers a single question, "do these differ?", and stops at the
first mismatch. Persons, repositories and architectures are compared by
position, so the same entries in a different order count as a difference.
``ignore_order=True`` switches all three to multiset comparison instead.

Repository paths are not compared.
"""

from __future__ import annotations

from collections import Counter

from obscli.models.project import Person, Project, Repository


def projects_differ(local: Project, remote: Project, *, ignore_order: bool = False) -> bool:
    """Return True when ``remote`` must be updated to match ``local``."""
    if (
        local.name != remote.name
        or local.title != remote.title
        or local.description != remote.description
        or local.url != remote.url
    ):
        return True

    if ignore_order:
        return not (
            _same_multiset(_person_keys(local.persons), _person_keys(remote.persons))
            and _same_multiset(
                _repository_keys(local.repositories),
                _repository_keys(remote.repositories),
            )
        )

    return not (
        persons_equal(local.persons, remote.persons)
        and repositories_equal(local.repositories, remote.repositories)
    )


def persons_equal(local: list[Person], remote: list[Person]) -> bool:
    if len(local) != len(remote):
        return False

    for mine, theirs in zip(local, remote):
        if mine.user_id != theirs.user_id or mine.role != theirs.role:
            return False

    return True


def repositories_equal(local: list[Repository], remote: list[Repository]) -> bool:
    if len(local) != len(remote):
        return False

    for mine, theirs in zip(local, remote):
        if mine.repository != theirs.repository or not architectures_equal(
            mine.architectures, theirs.architectures
        ):
            return False

    return True


def architectures_equal(local: list[str], remote: list[str]) -> bool:
    if len(local) != len(remote):
        return False

    return all(mine == theirs for mine, theirs in zip(local, remote))


# --- Order-insensitive helpers ---


def _person_keys(persons: list[Person]) -> list[tuple[str, str]]:
    return [(p.user_id, p.role) for p in persons]


def _repository_keys(repositories: list[Repository]) -> list[tuple[str, tuple[str, ...]]]:
    return [(r.repository, tuple(sorted(r.architectures))) for r in repositories]


def _same_multiset(local: list, remote: list) -> bool:
    return len(local) == len(remote) and Counter(local) == Counter(remote)
