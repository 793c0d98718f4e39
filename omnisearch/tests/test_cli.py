"""Tests for the omni command line interface."""

import json

import pytest
from click.testing import CliRunner

from omnisearch.cli.omni import cli


@pytest.fixture
def snapshot_file(tmp_path):
    """Write a small two-workspace snapshot."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({
        "activeWorkspaceId": "w-a",
        "workspaces": [
            {
                "workspaceId": "w-a",
                "workspaceName": "A",
                "files": ["src/report.py", "docs/readme.md"],
                "threads": [{"id": "t-a", "name": "Report bugs", "updatedAt": 5}],
            },
            {
                "workspaceId": "w-b",
                "workspaceName": "B",
                "files": ["report/b.py", 42],
                "threads": "not-a-list",
            },
        ],
        "threadItemsByThread": {
            "t-a": [
                {"id": "m1", "kind": "message", "role": "user", "text": "weekly report draft"},
                {"id": "r1", "kind": "reasoning"},
            ],
        },
        "kanbanTasks": [{"id": "k1", "workspaceId": "w-a", "title": "Ship report"}],
        "historyItems": [{"text": "report status", "importance": "high"}],
        "skills": [],
        "commands": [{"name": "report", "description": "Make a report"}],
    }))
    return path


def run(tmp_path, *args):
    runner = CliRunner()
    return runner.invoke(cli, ["--data-dir", str(tmp_path / "data"), *args])


def test_search_active_scope_json(tmp_path, snapshot_file):
    """Active scope only returns results from the active workspace."""
    result = run(tmp_path, "search", str(snapshot_file), "report", "--json")

    assert result.exit_code == 0, result.output
    results = json.loads(result.output)
    assert results
    assert all(r.get("workspaceId") in (None, "w-a") for r in results)
    assert {r["kind"] for r in results} >= {"file", "thread", "message", "kanban", "history", "command"}


def test_search_global_scope_with_filter(tmp_path, snapshot_file):
    result = run(tmp_path, "search", str(snapshot_file), "report",
                 "--scope", "global", "--filter", "files", "--json")

    assert result.exit_code == 0, result.output
    results = json.loads(result.output)
    assert {r["workspaceId"] for r in results} == {"w-a", "w-b"}
    assert {r["kind"] for r in results} == {"file"}


def test_open_boosts_later_searches(tmp_path, snapshot_file):
    """Opening a result is persisted and ranks it first at equal score."""
    result = run(tmp_path, "open", "file:w-a:docs/readme.md")
    assert result.exit_code == 0, result.output

    recents = run(tmp_path, "recents")
    assert "file:w-a:docs/readme.md" in recents.output

    search = run(tmp_path, "search", str(snapshot_file), "re", "--json", "--filter", "files")
    ids = [r["id"] for r in json.loads(search.output)]
    assert ids[0] == "file:w-a:docs/readme.md"


def test_bad_snapshot_exits_nonzero(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[]")

    result = run(tmp_path, "search", str(bad), "x")

    assert result.exit_code == 1


@pytest.mark.parametrize("selected,current,expected", [
    ("files", [], "files"),
    ("all", ["files", "threads"], "all"),
    ("files", ["files", "threads"], "threads"),
    ("threads", ["threads"], "all"),
])
def test_toggle_filter(tmp_path, selected, current, expected):
    args = ["toggle-filter", selected]
    for item in current:
        args += ["--current", item]

    result = run(tmp_path, *args)

    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected
