"""Shared pytest fixtures for ai-specflow tests."""

from pathlib import Path

import pytest

from ai_specflow.sync.orchestrator import default_package_root


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> text) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative POSIX path) to its bytes."""
    if not root.exists():
        return {}
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def make_tree():
    """Factory fixture wrapping ``write_tree``."""
    return write_tree


@pytest.fixture
def snapshot():
    """Factory fixture wrapping ``snapshot_tree``."""
    return snapshot_tree


@pytest.fixture
def package_root(tmp_path):
    """A small, self-contained template package with every provider."""
    return write_tree(
        tmp_path / "package",
        {
            ".ai/README.md": "ai readme\n",
            ".ai/rules/workflow.md": "workflow\n",
            "docs/sdd/README.md": "sdd readme\n",
            "docs/sdd/templates/spec.md": "spec template\n",
            "CLAUDE.md": "CLAUDE RULES\n",
            "AGENTS.md": "AGENT RULES\n",
            "codex.md": "CODEX RULES\n",
            "GEMINI.md": "GEMINI RULES\n",
            ".claude/commands/specify.md": "specify\n",
            ".cursor/rules/specflow.mdc": "cursor rule\n",
        },
    )


@pytest.fixture
def target(tmp_path):
    """An empty target project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def bundled_root():
    """The real template directory shipped with the package."""
    return default_package_root()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user-level config and env overrides out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("AI_SPECFLOW_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
