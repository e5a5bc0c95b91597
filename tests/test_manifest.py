"""Tests for manifest loading."""

import tempfile
from pathlib import Path

import pytest
import yaml

from obscli.errors import ManifestError
from obscli.manifest import load_manifest, parse_manifest


def _write(tmpdir: str, content: str) -> str:
    path = Path(tmpdir) / "manifest.yaml"
    path.write_text(content)
    return str(path)


def test_load_manifest():
    data = {
        "projects": [
            {
                "name": "foo",
                "title": "T",
                "persons": [{"userID": "alice", "role": "maintainer"}],
                "repositories": [{"repository": "standard", "architectures": ["x86_64"]}],
            },
            {"name": "bar"},
        ]
    }
    with tempfile.TemporaryDirectory() as tmpdir:
        projects = load_manifest(_write(tmpdir, yaml.dump(data)))

    assert [p.name for p in projects] == ["foo", "bar"]
    assert projects[0].persons[0].user_id == "alice"
    assert projects[0].repositories[0].architectures == ["x86_64"]


def test_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ManifestError, match="does not exist"):
            load_manifest(Path(tmpdir) / "nope.yaml")


def test_invalid_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ManifestError, match="yaml"):
            load_manifest(_write(tmpdir, "projects: [unclosed"))


def test_empty_file_is_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ManifestError, match="projects"):
            load_manifest(_write(tmpdir, ""))


def test_explicit_empty_project_list():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert load_manifest(_write(tmpdir, "projects: []\n")) == []


def test_missing_projects_key():
    with pytest.raises(ManifestError, match="projects"):
        parse_manifest({"projcts": [{"name": "foo"}]})
    with pytest.raises(ManifestError, match="projects"):
        parse_manifest({})
    with pytest.raises(ManifestError):
        parse_manifest({"projects": None})


def test_invalid_utf8():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "manifest.yaml"
        path.write_bytes(b"projects:\n  - name: \xff\xfe\n")
        with pytest.raises(ManifestError, match="UTF-8"):
            load_manifest(path)


def test_wrong_shapes():
    with pytest.raises(ManifestError):
        parse_manifest(["not", "a", "mapping"])
    with pytest.raises(ManifestError):
        parse_manifest({"projects": {"name": "foo"}})
    with pytest.raises(ManifestError):
        parse_manifest({"projects": ["foo"]})
    with pytest.raises(ManifestError):
        parse_manifest({"projects": [{"name": "foo", "persons": ["alice"]}]})


def test_scalar_architectures_are_rejected():
    data = {
        "projects": [
            {
                "name": "foo",
                "repositories": [{"repository": "r", "architectures": "x86_64"}],
            }
        ]
    }
    with pytest.raises(ManifestError, match="project #1.*architectures"):
        parse_manifest(data)


def test_wrong_field_types_are_rejected():
    bad_entries = [
        {"name": {"k": "v"}},
        {"name": "foo", "title": ["a"]},
        {"name": 123},
        {"name": "foo", "persons": {"userID": "alice"}},
        {"name": "foo", "persons": [{"userID": ["alice"], "role": "maintainer"}]},
        {"name": "foo", "repositories": ["standard"]},
        {"name": "foo", "repositories": [{"repository": "r", "architectures": [64]}]},
        {"name": "foo", "repositories": [{"repository": "r", "paths": "openSUSE:Factory"}]},
    ]
    for entry in bad_entries:
        with pytest.raises(ManifestError):
            parse_manifest({"projects": [{"name": "ok"}, entry]})


def test_null_fields_fall_back_to_empty():
    projects = parse_manifest({"projects": [{"name": "foo", "title": None, "persons": None}]})
    assert projects[0].title == ""
    assert projects[0].persons == []
