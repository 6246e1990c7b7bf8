"""
core/config.py
--------------
Process-wide settings, resolved once at startup from the environment
(after load_dotenv) and handed explicitly to the services that need them.
Tests build a Settings directly instead of patching os.environ.

Owner: Core team
Depends on: pydantic
Depended on by: api/main.py, services/github_mirror, core/skill_store, agents/hr_agent
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field


DEFAULT_GITHUB_REPO = "inna-demidova/skill-system-agent"
SKILLS_SUBDIR = ".claude/skills"


class Settings(BaseModel):
    github_token: Optional[str] = None
    github_repo: str = DEFAULT_GITHUB_REPO
    github_branch: str = "main"
    github_api_url: str = "https://api.github.com"
    project_dir: Path = Field(default_factory=Path.cwd)
    skills_subdir: str = SKILLS_SUBDIR
    mirror_delete_concurrency: int = Field(default=1, ge=1)
    allowed_origin: str = "*"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def mirror_enabled(self) -> bool:
        return bool(self.github_token)

    @property
    def skills_dir(self) -> Path:
        return self.project_dir / self.skills_subdir

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables; unset vars keep defaults."""
        env = os.environ if environ is None else environ
        values: dict = {}
        mapping = {
            "GITHUB_TOKEN": "github_token",
            "GITHUB_REPO": "github_repo",
            "GITHUB_BRANCH": "github_branch",
            "GITHUB_API_URL": "github_api_url",
            "PROJECT_DIR": "project_dir",
            "GITHUB_DELETE_CONCURRENCY": "mirror_delete_concurrency",
            "ALLOWED_ORIGIN": "allowed_origin",
            "PORT": "port",
            "LOG_LEVEL": "log_level",
        }
        for var, field_name in mapping.items():
            raw = env.get(var)
            if raw:
                values[field_name] = raw
        return cls(**values)
