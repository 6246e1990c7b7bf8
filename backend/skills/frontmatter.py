"""
skills/frontmatter.py
---------------------
Reads the "---" delimited header at the top of a SKILL.md file.

Only flat "key: value" lines are understood; this is not a YAML parser.
Each line is split at its first colon, so values may themselves contain
colons (URLs, times).

Owner: Skills team
Depends on: nothing
Depended on by: skills/base_skill, skills/skill_registry
"""

import re


MANIFEST_FILENAME = "SKILL.md"

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---", re.DOTALL)


def parse_frontmatter(content: str) -> dict[str, str]:
    """Return the header key/value pairs, or {} when there is no header."""
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}

    result: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        result[key.strip()] = value.strip()
    return result


def default_manifest(name: str, description: str = "") -> str:
    """SKILL.md written for a freshly created skill."""
    return (
        "---\n"
        f"name: {name}\n"
        f"description: {description or ''}\n"
        "user-invocable: true\n"
        "---\n"
        "\n"
        f"# {name}\n"
        "\n"
        "Describe your skill instructions here.\n"
    )
