"""
skills/skill_registry.py
------------------------
Lists the skills installed under the skills directory.

Unlike a load-once registry, the listing is recomputed on every call:
skills are edited at runtime through the API, so the disk is the only
source of truth.

Owner: Skills team
Depends on: base_skill, frontmatter
Depended on by: core/skill_store
"""

import logging
from pathlib import Path

from .base_skill import SkillSummary
from .frontmatter import MANIFEST_FILENAME, parse_frontmatter

logger = logging.getLogger(__name__)


class SkillRegistry:
    def __init__(self, skills_dir: Path):
        self.skills_dir = skills_dir

    def list_skills(self) -> list[SkillSummary]:
        """
        One summary per sub-directory, sorted by name.
        Raises OSError if the skills directory itself cannot be listed.
        """
        skills = []
        for entry in sorted(self.skills_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_dir():
                continue
            skills.append(SkillSummary.from_metadata(entry.name, self.read_metadata(entry)))
        return skills

    def read_metadata(self, skill_dir: Path) -> dict[str, str]:
        """SKILL.md header of a skill; {} if the file is missing or unreadable."""
        try:
            content = (skill_dir / MANIFEST_FILENAME).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("No readable %s in %s: %s", MANIFEST_FILENAME, skill_dir, exc)
            return {}
        return parse_frontmatter(content)
