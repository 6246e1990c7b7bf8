"""Shared fixtures: a throwaway skills directory, a mocked mirror, and an API client."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.deps import get_skill_store
from api.main import app
from core.config import Settings
from core.skill_store import SkillStore
from services.github_mirror import GitHubMirror


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    s = Settings(project_dir=tmp_path)
    s.skills_dir.mkdir(parents=True)
    return s


@pytest.fixture
def skills_dir(settings: Settings) -> Path:
    return settings.skills_dir


@pytest.fixture
def mirror() -> MagicMock:
    return MagicMock(spec=GitHubMirror)


@pytest.fixture
def store(settings: Settings, mirror: MagicMock) -> SkillStore:
    return SkillStore(settings=settings, mirror=mirror)


@pytest.fixture
def client(store: SkillStore):
    app.dependency_overrides[get_skill_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_skill(skills_dir: Path):
    """Create a skill directory with the given {relative path: content} files."""

    def _make(name: str, files: dict[str, str] | None = None) -> Path:
        skill_dir = skills_dir / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            target = skill_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


def snapshot(root: Path) -> set[str]:
    """Every path under root, for asserting that nothing was touched."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}
