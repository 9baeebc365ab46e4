"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest

from dashplus import cli, graph_commands
from dashplus.backends.memory import MemoryBackend
from dashplus.backends.yaml_store import YamlBackend


@pytest.fixture
def store(backend: MemoryBackend, monkeypatch: pytest.MonkeyPatch) -> MemoryBackend:
    """Serve a small graph to the CLI commands."""
    backend.add_project("Home", project_id="p1")
    backend.add_task("Write report", task_id="a")
    backend.add_task("Get numbers", task_id="b", status="waiting")
    backend.add_task("Review", task_id="c")
    backend.add_task("Lonely", task_id="d")
    backend.add_task("Filed", task_id="e", project_id="p1")
    backend.add_link("b", "a", "waiting", link_id="l1", label="numbers")
    backend.add_link("c", "b", "blocks", link_id="l2")
    backend.add_link("a", "c", "waiting", link_id="l3")
    monkeypatch.setattr(cli, "get_backend", lambda: backend)
    return backend


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config lookups away from the real working and home directories."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_get_backend_uses_store_path(workdir: Path) -> None:
    """Test that the configured store file is loaded."""
    (workdir / "tasks.yaml").write_text("tasks:\n  - {id: a, content: A}\n")
    cli.get_config().set("store.path", str(workdir / "tasks.yaml"))

    backend = cli.get_backend()

    assert isinstance(backend, YamlBackend)
    assert backend.read_task("a").content == "A"


def test_backlinks(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test listing backlinks."""
    graph_commands.backlinks("a", indirect=True, depth=2)

    out = capsys.readouterr().out
    assert "[1] b Get numbers (waiting)" in out
    assert "[2] c Review (blocks)" in out


def test_no_forward_links(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the message for a task without forward links."""
    graph_commands.forward("d")

    assert "No forward links found for task d" in capsys.readouterr().out


def test_related_json(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing the related graph as JSON."""
    graph_commands.related("a", depth=2, format="json")

    data = json.loads(capsys.readouterr().out)
    assert data["node_count"] == 3
    assert data["edge_count"] == 3
    assert data["cycles"][0]["length"] == 3


def test_related_dot_with_type_filter(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing the related graph as DOT with a link type filter."""
    graph_commands.related("a", types="waiting", format="dot")

    out = capsys.readouterr().out
    assert out.startswith("digraph TaskGraph {")
    assert '"b" -> "a"' in out
    assert '"c" -> "b"' not in out


def test_related_mermaid_from_config(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that the default format comes from configuration."""
    cli.get_config().set("graph.format", "mermaid")

    graph_commands.related("a")

    assert capsys.readouterr().out.startswith("graph LR\n")


def test_blocking_and_dependencies(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing blocking and dependency chains."""
    graph_commands.blocking("a")
    graph_commands.dependencies("d")

    out = capsys.readouterr().out
    assert "[0] b Get numbers (waiting)" in out
    assert "[1] c Review (blocks)" in out
    assert "Task d has no dependencies" in out


def test_cycles(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing cycles from one task and across all tasks."""
    graph_commands.cycles("a")
    out = capsys.readouterr().out
    assert "Found 1 cycle(s)" in out
    assert "a -> c -> b -> a (length 3; waiting, blocks, waiting)" in out

    graph_commands.cycles()
    assert "Found 3 cycle(s)" in capsys.readouterr().out


def test_importance(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing a task's importance."""
    graph_commands.importance("a")

    out = capsys.readouterr().out
    assert "Ranking: medium" in out
    assert "Score: 7" in out


def test_orphans(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test listing orphan tasks."""
    graph_commands.orphans()

    out = capsys.readouterr().out
    assert "Found 1 orphan task(s)" in out
    assert "d: Lonely" in out
    assert "Filed" not in out


def test_show_missing_task(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test showing a task that does not exist."""
    cli.show("zzz")

    assert "Task zzz not found" in capsys.readouterr().out


def test_show_task(store: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test showing a task with its links."""
    cli.show("a")

    out = capsys.readouterr().out
    assert "Content: - Write report" in out
    assert "b --[waiting]--> a (numbers)" in out
