"""Tests for the project equivalence check."""

import copy

from obscli.models.project import Person, Project, Repository, RepositoryPath
from obscli.sync.compare import (
    architectures_equal,
    persons_equal,
    projects_differ,
    repositories_equal,
)


def _project(**overrides) -> Project:
    data = {
        "name": "foo",
        "title": "T",
        "description": "D",
        "url": "https://example.com",
        "persons": [Person("alice", "maintainer")],
        "repositories": [Repository("standard", ["x86_64"])],
    }
    data.update(overrides)
    return Project(**data)


def test_identical_projects_do_not_differ():
    local = _project()
    assert not projects_differ(local, copy.deepcopy(local))


def test_same_object_does_not_differ():
    local = _project()
    assert not projects_differ(local, local)


def test_scalar_field_changes_differ():
    local = _project()
    for field_name in ("name", "title", "description", "url"):
        remote = copy.deepcopy(local)
        setattr(remote, field_name, "changed")
        assert projects_differ(local, remote), field_name


def test_reordered_persons_differ():
    alice = Person("alice", "maintainer")
    bob = Person("bob", "reviewer")
    local = _project(persons=[alice, bob])
    remote = _project(persons=[bob, alice])
    assert projects_differ(local, remote)


def test_reordered_repositories_differ():
    a = Repository("standard", ["x86_64"])
    b = Repository("tumbleweed", ["aarch64"])
    assert projects_differ(_project(repositories=[a, b]), _project(repositories=[b, a]))


def test_person_role_change_differs():
    local = _project(persons=[Person("alice", "maintainer")])
    remote = _project(persons=[Person("alice", "bugowner")])
    assert projects_differ(local, remote)


def test_length_mismatch_with_common_prefix():
    alice = Person("alice", "maintainer")
    bob = Person("bob", "reviewer")
    assert not persons_equal([alice], [alice, bob])
    assert not persons_equal([alice, bob], [alice])

    repo = Repository("standard", ["x86_64"])
    extra = Repository("extra", ["x86_64"])
    assert not repositories_equal([repo], [repo, extra])

    assert not architectures_equal(["x86_64"], ["x86_64", "aarch64"])
    assert not architectures_equal(["x86_64", "aarch64"], ["x86_64"])


def test_architecture_changes_differ():
    local = _project(repositories=[Repository("standard", ["x86_64", "aarch64"])])
    reordered = _project(repositories=[Repository("standard", ["aarch64", "x86_64"])])
    fewer = _project(repositories=[Repository("standard", ["x86_64"])])
    assert projects_differ(local, reordered)
    assert projects_differ(local, fewer)


def test_empty_lists_are_equal():
    assert persons_equal([], [])
    assert repositories_equal([], [])
    assert architectures_equal([], [])
    assert not projects_differ(_project(persons=[], repositories=[]), _project(persons=[], repositories=[]))


def test_repository_paths_are_not_compared():
    local = _project(
        repositories=[
            Repository(
                "standard",
                ["x86_64"],
                paths=[RepositoryPath("openSUSE:Factory", "snapshot")],
            )
        ]
    )
    remote = _project(repositories=[Repository("standard", ["x86_64"])])
    assert not projects_differ(local, remote)


def test_ignore_order_treats_reordering_as_equal():
    alice = Person("alice", "maintainer")
    bob = Person("bob", "reviewer")
    a = Repository("standard", ["x86_64", "aarch64"])
    b = Repository("tumbleweed", ["x86_64"])
    local = _project(persons=[alice, bob], repositories=[a, b])
    remote = _project(
        persons=[bob, alice],
        repositories=[b, Repository("standard", ["aarch64", "x86_64"])],
    )
    assert projects_differ(local, remote)
    assert not projects_differ(local, remote, ignore_order=True)


def test_ignore_order_still_counts_duplicates():
    alice = Person("alice", "maintainer")
    bob = Person("bob", "reviewer")
    local = _project(persons=[alice, alice, bob])
    remote = _project(persons=[alice, bob, bob])
    assert projects_differ(local, remote, ignore_order=True)


def test_ignore_order_still_checks_scalars():
    assert projects_differ(_project(), _project(title="Old"), ignore_order=True)
