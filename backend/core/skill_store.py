"""
core/skill_store.py
-------------------
Reads and edits skill directories on local disk, mirroring every file
mutation to GitHub first.

Order for every mutating call:
  validate name/path -> GitHub mirror -> local filesystem

Validation failures are raised before any I/O. A mirror failure aborts
before the local write. A local failure after a successful mirror call
leaves GitHub ahead of the disk; nothing repairs that automatically and
the client has to retry.

Directories have no representation in the GitHub contents API, so
create_directory only touches the local disk.

Owner: Core team
Depends on: core/config, core/errors, services/github_mirror, skills/*, utilities/file_tree
Depended on by: api/routes/skills
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from core.config import Settings
from core.errors import (
    InvalidSkillName,
    InvalidSkillPath,
    SkillExists,
    SkillFileNotFound,
    SkillNotFound,
)
from services.github_mirror import GitHubMirror
from skills.base_skill import SkillSummary
from skills.frontmatter import MANIFEST_FILENAME, default_manifest
from skills.paths import is_valid_name, mirror_path, safe_path
from skills.skill_registry import SkillRegistry
from utilities.file_tree import TreeEntry, build_tree

logger = logging.getLogger(__name__)


class SkillStore:
    def __init__(self, settings: Settings, mirror: GitHubMirror):
        self.settings = settings
        self.skills_dir = settings.skills_dir
        self.mirror = mirror
        self.registry = SkillRegistry(self.skills_dir)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _skill_dir(self, name: str) -> Path:
        if not is_valid_name(name):
            raise InvalidSkillName()
        return safe_path(self.skills_dir, name)

    def _skill_file(self, name: str, rel_path: str) -> Path:
        if not is_valid_name(name):
            raise InvalidSkillName()
        resolved = safe_path(self.skills_dir, name, rel_path)
        if resolved is None:
            raise InvalidSkillPath()
        return resolved

    def _remote(self, name: str, rel_path: Optional[str] = None) -> str:
        return mirror_path(name, rel_path, prefix=self.settings.skills_subdir)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_skills(self) -> list[SkillSummary]:
        return self.registry.list_skills()

    def get_tree(self, name: str) -> list[TreeEntry]:
        """Raises SkillNotFound if the skill directory is missing or cannot be listed."""
        skill_dir = self._skill_dir(name)
        try:
            return build_tree(skill_dir)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", skill_dir, exc)
            raise SkillNotFound(name)

    def read_file(self, name: str, rel_path: str) -> str:
        """Any read failure (missing, a directory, not UTF-8) is SkillFileNotFound."""
        resolved = self._skill_file(name, rel_path)
        try:
            return resolved.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", resolved, exc)
            raise SkillFileNotFound(rel_path)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write_file(self, name: str, rel_path: str, content: str) -> None:
        resolved = self._skill_file(name, rel_path)
        self.mirror.create_or_update_file(
            self._remote(name, rel_path), content, f"Update {name}/{rel_path}",
        )
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(content, encoding="utf-8")
        logger.info("Wrote %s/%s (%d chars)", name, rel_path, len(content))

    def delete_file(self, name: str, rel_path: str) -> None:
        """
        The local unlink runs even when the mirror had nothing to delete,
        so a file that never existed raises FileNotFoundError here.
        """
        resolved = self._skill_file(name, rel_path)
        self.mirror.delete_file(self._remote(name, rel_path), f"Delete {name}/{rel_path}")
        resolved.unlink()
        logger.info("Deleted %s/%s", name, rel_path)

    def create_skill(self, name: str, description: str = "") -> None:
        """Raises SkillExists (with no side effects) if the directory is already there."""
        skill_dir = self._skill_dir(name)
        if skill_dir.exists():
            raise SkillExists(name)

        manifest = default_manifest(name, description)
        self.mirror.create_or_update_file(
            self._remote(name, MANIFEST_FILENAME), manifest, f"Create skill {name}",
        )
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / MANIFEST_FILENAME).write_text(manifest, encoding="utf-8")
        logger.info("Created skill %s", name)

    def delete_skill(self, name: str) -> None:
        skill_dir = self._skill_dir(name)
        if not skill_dir.exists():
            raise SkillNotFound(name)

        self.mirror.delete_directory(self._remote(name), f"Delete skill {name}")
        shutil.rmtree(skill_dir)
        logger.info("Deleted skill %s", name)

    def create_directory(self, name: str, rel_path: str) -> Path:
        resolved = self._skill_file(name, rel_path)
        resolved.mkdir(parents=True, exist_ok=True)
        return resolved
