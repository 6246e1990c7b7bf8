"""
utilities/file_tree.py
----------------------
Builds the nested file listing shown in the skill editor sidebar.

The tree is never stored; it is rebuilt from disk on every request.
Skill directories hold a handful of markdown and script files, so a
full walk per request is fine.

Owner: Utilities team
Depends on: pydantic
Depended on by: core/skill_store
"""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel


class TreeEntry(BaseModel):
    path: str                                   # relative to the skill root, "/" separated
    type: Literal["file", "dir"]
    size: Optional[int] = None                  # files only
    children: Optional[list["TreeEntry"]] = None  # dirs only


def _sort_key(entry: os.DirEntry) -> tuple[str, str]:
    # case-insensitive first so "Readme.md" sits next to "readme.md"
    return (entry.name.casefold(), entry.name)


def build_tree(directory: Path, relative_to: Optional[Path] = None) -> list[TreeEntry]:
    """
    Walk directory depth-first and return its entries sorted by name.
    Raises FileNotFoundError if directory does not exist.
    """
    root = relative_to if relative_to is not None else directory
    with os.scandir(directory) as it:
        entries = sorted(it, key=_sort_key)

    result: list[TreeEntry] = []
    for entry in entries:
        rel_path = Path(os.path.relpath(entry.path, root)).as_posix()
        if entry.is_dir():
            children = build_tree(Path(entry.path), root)
            result.append(TreeEntry(path=rel_path, type="dir", children=children))
        else:
            result.append(TreeEntry(path=rel_path, type="file", size=entry.stat().st_size))
    return result
