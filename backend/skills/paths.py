"""
skills/paths.py
---------------
Name and path validation for skill directories.

Every route runs its input through here before the filesystem or the
GitHub mirror is touched. Containment is checked textually: the joined,
normalised path must be the skill directory itself or sit under
"<skill dir>/". Symlinks are not resolved, so a link inside a skill
directory that points elsewhere is followed.

Owner: Skills team
Depends on: nothing
Depended on by: core/skill_store
"""

import os
import re
from pathlib import Path
from typing import Optional

from core.config import SKILLS_SUBDIR


SKILL_NAME_RE = re.compile(r"^[a-z0-9-]+$")


def is_valid_name(name: Optional[str]) -> bool:
    """Lowercase letters, digits and hyphens only."""
    if not name or not isinstance(name, str):
        return False
    return SKILL_NAME_RE.fullmatch(name) is not None


def safe_path(skills_dir: Path, name: str, rel_path: Optional[str] = None) -> Optional[Path]:
    """
    Resolve rel_path inside the skill directory.
    Returns the skill directory when rel_path is empty, or None when the
    path would escape it.
    """
    base = os.path.normpath(os.path.join(str(skills_dir), name))
    if not rel_path:
        return Path(base)

    if ".." in rel_path or "\x00" in rel_path or os.path.isabs(rel_path):
        return None

    resolved = os.path.normpath(os.path.join(base, rel_path))
    if not is_inside(base, resolved):
        return None
    return Path(resolved)


def is_inside(base: str, candidate: str) -> bool:
    """True if candidate is base itself or below it. "foo-evil" is not inside "foo"."""
    return candidate == base or candidate.startswith(base.rstrip(os.sep) + os.sep)


def mirror_path(name: str, rel_path: Optional[str] = None, prefix: str = SKILLS_SUBDIR) -> str:
    """Repository path of a skill (or a file in it) in the GitHub mirror."""
    path = f"{prefix}/{name}"
    if rel_path:
        path = f"{path}/{rel_path}"
    return path
