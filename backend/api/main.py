"""
api/main.py
-----------
FastAPI application entry point for the HR assistant backend.
Listens on 0.0.0.0:$PORT (default 3000).

Startup (lifespan):
  Resolves Settings once from the environment, then builds the shared
  singletons (GitHubMirror, SkillStore, HRAssistantAgent) and stores them
  on app.state for dependency injection in route handlers.

Run:
  cd backend && uvicorn api.main:app --port 3000
  cd backend && python -m api.main

Owner: API team
Depends on: core/*, services/github_mirror, agents/hr_agent
Depended on by: the web UI, scripts/chat.py
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import chat, skills
from agents.hr_agent import HRAssistantAgent
from core.config import Settings
from core.skill_store import SkillStore
from services.github_mirror import GitHubMirror


load_dotenv()

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    mirror = GitHubMirror(settings)
    skill_store = SkillStore(settings=settings, mirror=mirror)
    agent = HRAssistantAgent(settings)

    app.state.settings = settings
    app.state.skill_store = skill_store
    app.state.agent = agent

    logger.info("Skills directory: %s", settings.skills_dir)
    yield
    # --- shutdown (nothing to clean up) ---


app = FastAPI(title="Skill System Agent", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allowed_origin],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(skills.router, prefix="/api/skills", tags=["skills"])


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
