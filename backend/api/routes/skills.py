"""
api/routes/skills.py
--------------------
Skill editor endpoints: browse, read, and edit the skill directories the
agent loads, with every file change committed to GitHub as well.

GET    /api/skills                          — list skills with SKILL.md metadata
POST   /api/skills                          — create a skill { name, description }
GET    /api/skills/{name}/tree              — recursive file tree
GET    /api/skills/{name}/file?path=        — read a file
PUT    /api/skills/{name}/file?path=        — write a file { content }
DELETE /api/skills/{name}/file?path=        — delete a file
DELETE /api/skills/{name}                   — delete the whole skill
POST   /api/skills/{name}/directory?path=   — create a sub-directory (local only)

Handlers are sync: the store does blocking disk and GitHub I/O, so FastAPI
runs them in its threadpool.

Owner: API team
Depends on: core/skill_store
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_json_body, get_skill_store
from core.errors import (
    InvalidSkillName,
    InvalidSkillPath,
    MirrorError,
    SkillExists,
    SkillFileNotFound,
    SkillNotFound,
)
from core.skill_store import SkillStore
from skills.paths import is_valid_name

router = APIRouter()


_MISSING_PATH = "Invalid skill name or missing path"


def _require_name_and_path(name: str, path: Optional[str]) -> None:
    if not is_valid_name(name) or not path:
        raise HTTPException(status_code=400, detail=_MISSING_PATH)


@router.get("")
def list_skills(store: SkillStore = Depends(get_skill_store)):
    """
    Returns: [ { name, displayName, description, userInvocable } ]
    A skill without a readable SKILL.md is listed with defaults.
    """
    try:
        skills = store.list_skills()
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to list skills")
    return [skill.model_dump(by_alias=True) for skill in skills]


@router.post("", status_code=201)
def create_skill(
    body: dict = Depends(get_json_body),
    store: SkillStore = Depends(get_skill_store),
):
    """
    Body: { name: str, description?: str }
    Writes a default SKILL.md. 409 if the skill directory already exists.
    """
    name = body.get("name")
    if not name or not is_valid_name(name):
        raise HTTPException(
            status_code=400,
            detail="Invalid skill name. Use lowercase letters, numbers, and hyphens only.",
        )
    description = body.get("description") or ""

    try:
        store.create_skill(name, str(description))
    except SkillExists as exc:
        raise HTTPException(status_code=409, detail=exc.message)
    except (MirrorError, OSError) as exc:
        raise HTTPException(status_code=500, detail=str(exc) or "Failed to create skill")
    return {"ok": True, "name": name}


@router.get("/{name}/tree")
def get_tree(name: str, store: SkillStore = Depends(get_skill_store)):
    """Returns: { name, files: [ { path, type, size? , children? } ] }"""
    try:
        files = store.get_tree(name)
    except InvalidSkillName as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except SkillNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    return {"name": name, "files": [entry.model_dump(exclude_none=True) for entry in files]}


@router.get("/{name}/file")
def read_file(
    name: str,
    path: Optional[str] = None,
    store: SkillStore = Depends(get_skill_store),
):
    _require_name_and_path(name, path)
    try:
        content = store.read_file(name, path)
    except (InvalidSkillName, InvalidSkillPath) as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except SkillFileNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    return {"path": path, "content": content}


@router.put("/{name}/file")
def write_file(
    name: str,
    path: Optional[str] = None,
    body: dict = Depends(get_json_body),
    store: SkillStore = Depends(get_skill_store),
):
    """
    Body: { content: str }
    GitHub is updated first; if that fails nothing is written locally.
    """
    _require_name_and_path(name, path)
    content = body.get("content")
    if not isinstance(content, str):
        raise HTTPException(status_code=400, detail="content (string) is required in body")

    try:
        store.write_file(name, path, content)
    except (InvalidSkillName, InvalidSkillPath) as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except (MirrorError, OSError) as exc:
        raise HTTPException(status_code=500, detail=str(exc) or "Failed to write file")
    return {"ok": True, "path": path}


@router.delete("/{name}/file")
def delete_file(
    name: str,
    path: Optional[str] = None,
    store: SkillStore = Depends(get_skill_store),
):
    """
    A file missing locally is a 500 even if GitHub had nothing to delete.
    """
    _require_name_and_path(name, path)
    try:
        store.delete_file(name, path)
    except (InvalidSkillName, InvalidSkillPath) as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except (MirrorError, OSError) as exc:
        raise HTTPException(status_code=500, detail=str(exc) or "File not found")
    return {"ok": True}


@router.delete("/{name}")
def delete_skill(name: str, store: SkillStore = Depends(get_skill_store)):
    try:
        store.delete_skill(name)
    except InvalidSkillName as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except (SkillNotFound, MirrorError, OSError) as exc:
        raise HTTPException(status_code=500, detail=str(exc) or "Skill not found")
    return {"ok": True}


@router.post("/{name}/directory", status_code=201)
def create_directory(
    name: str,
    path: Optional[str] = None,
    store: SkillStore = Depends(get_skill_store),
):
    _require_name_and_path(name, path)
    try:
        store.create_directory(name, path)
    except (InvalidSkillName, InvalidSkillPath) as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to create directory")
    return {"ok": True, "path": path}
