"""
api/deps.py
-----------
FastAPI dependency injection helpers.
Route handlers that need the shared singletons (SkillStore, the HR agent)
declare them as Depends(get_*) parameters.

The singletons are stored on app.state by the lifespan handler in main.py.
Tests swap them out through app.dependency_overrides.

Owner: API team
"""

from typing import Any

from fastapi import Request

from agents.hr_agent import HRAssistantAgent
from core.skill_store import SkillStore


def get_skill_store(request: Request) -> SkillStore:
    return request.app.state.skill_store


def get_agent(request: Request) -> HRAssistantAgent:
    return request.app.state.agent


async def get_json_body(request: Request) -> dict[str, Any]:
    """
    The request body as a JSON object. A missing body, malformed JSON or a
    non-object all read as {} so handlers answer with their own 400.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
