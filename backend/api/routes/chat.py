"""
api/routes/chat.py
------------------
Streaming chat with the HR assistant over Server-Sent Events.

POST /api/chat — body { message: str, sessionId?: str }

Event sequence:
  session  { sessionId }         always first, so the client can resume later
  message  { text }              zero or more partial text deltas
  result   { text, sessionId }   or  error { error, details }
  error    { error }             if the agent raised (not sent after a disconnect)
  done     {}                    always last

Owner: API team
Depends on: agents/hr_agent
"""

import json
import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from agents.hr_agent import HRAssistantAgent
from api.deps import get_agent, get_json_body

logger = logging.getLogger(__name__)

router = APIRouter()


def _sse(event: str, data: Any) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


@router.post("/chat")
async def chat(
    request: Request,
    body: dict = Depends(get_json_body),
    agent: HRAssistantAgent = Depends(get_agent),
):
    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        raise HTTPException(status_code=400, detail="message is required")

    prompt = message.strip()
    client_session_id = body.get("sessionId") or None
    session_id = client_session_id or str(uuid.uuid4())

    async def event_stream():
        yield _sse("session", {"sessionId": session_id})
        logger.info("Starting query: %r (session %s)", prompt[:50], session_id)

        try:
            async for event, data in agent.stream(
                prompt, session_id, resume=client_session_id is not None,
            ):
                if await request.is_disconnected():
                    logger.info("Client disconnected; stopping session %s", session_id)
                    break
                yield _sse(event, data)
        except Exception as exc:
            logger.exception("Chat query failed for session %s", session_id)
            if not await request.is_disconnected():
                yield _sse("error", {"error": str(exc) or "Unknown error"})

        yield _sse("done", {})

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
