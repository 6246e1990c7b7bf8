"""
agents/hr_agent.py
------------------
The HR assistant. Runs one conversational turn through the Claude Agent
SDK, which discovers the project skills under .claude/skills/ and executes
their scripts (employee search, team building, CV parsing) itself.

This module does no reasoning of its own: it configures the SDK and turns
the SDK's message stream into plain (event, data) pairs for the chat route.

Events yielded by stream():
  ("message", {"text": str})                      partial text delta
  ("result",  {"text": str, "sessionId": str})    successful final answer
  ("error",   {"error": str, "details": list})    run ended unsuccessfully

Owner: Agents team
Depends on: claude-agent-sdk, core/config
Depended on by: api/routes/chat
"""

import logging
from typing import Any, AsyncIterator, Optional

from claude_agent_sdk import ClaudeAgentOptions, ResultMessage, query
from claude_agent_sdk.types import StreamEvent

from core.config import Settings

logger = logging.getLogger(__name__)


ALLOWED_TOOLS = ["Skill", "Bash", "Read"]


class HRAssistantAgent:
    def __init__(self, settings: Settings):
        self.cwd = settings.project_dir

    def build_options(self, session_id: str, resume: bool) -> ClaudeAgentOptions:
        """
        A resumed conversation continues the client's session; a new one is
        started under the id already announced to the client.
        """
        options = ClaudeAgentOptions(
            allowed_tools=list(ALLOWED_TOOLS),
            setting_sources=["project"],
            cwd=str(self.cwd),
            permission_mode="bypassPermissions",
            include_partial_messages=True,
        )
        if resume:
            options.resume = session_id
        else:
            options.extra_args = {"session-id": session_id}
        return options

    async def stream(
        self,
        message: str,
        session_id: str,
        resume: bool = False,
    ) -> AsyncIterator[tuple[str, dict[str, Any]]]:
        options = self.build_options(session_id, resume)
        message_count = 0
        async for msg in query(prompt=message, options=options):
            message_count += 1
            logger.debug("Agent message #%d: %s", message_count, type(msg).__name__)
            event = to_event(msg)
            if event is not None:
                yield event
        logger.info("Agent query finished. Total messages: %d", message_count)


def to_event(msg: Any) -> Optional[tuple[str, dict[str, Any]]]:
    """Map one SDK message to a chat event, or None if the client doesn't need it."""
    if isinstance(msg, StreamEvent):
        event = msg.event or {}
        delta = event.get("delta") or {}
        if (
            event.get("type") == "content_block_delta"
            and delta.get("type") == "text_delta"
            and delta.get("text")
        ):
            return "message", {"text": delta["text"]}
        return None

    if isinstance(msg, ResultMessage):
        if msg.subtype == "success":
            return "result", {"text": msg.result, "sessionId": msg.session_id}
        logger.error("Agent result error: %s", msg.subtype)
        return "error", {"error": msg.subtype, "details": list(getattr(msg, "errors", None) or [])}

    return None
