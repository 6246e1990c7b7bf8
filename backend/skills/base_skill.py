"""
skills/base_skill.py
--------------------
Pydantic model for one entry of the skill listing.
Built from a skill directory name plus its SKILL.md header.

A skill is a directory under .claude/skills/ that the agent SDK loads
on demand. Missing header fields fall back to defaults so a skill
without a SKILL.md still shows up in the editor.

Owner: Skills team
Depends on: nothing
Depended on by: skill_registry, api/routes/skills
"""

from pydantic import BaseModel, ConfigDict, Field


class SkillSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    description: str = ""
    user_invocable: bool = Field(default=True, alias="userInvocable")

    @classmethod
    def from_metadata(cls, name: str, metadata: dict[str, str]) -> "SkillSummary":
        # anything other than the literal "false" keeps the skill invocable
        return cls(
            name=name,
            display_name=metadata.get("name") or name,
            description=metadata.get("description") or "",
            user_invocable=metadata.get("user-invocable") != "false",
        )
