#!/usr/bin/env python3
"""
scripts/chat.py
---------------
Textual TUI for the HR assistant.

Two tabs:
  [💬 Chat] — conversation log + message input
  [📋 Logs] — raw SSE events from the backend

Usage:
  python scripts/chat.py [--url http://localhost:3000]

Requires the backend:
  cd backend && uvicorn api.main:app --port 3000
"""

import argparse
import json
import sys
from typing import Iterator, Optional

import requests
from rich.markup import escape
from textual import on, work
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, RichLog, Static, TabbedContent, TabPane


# ─────────────────────────────────────────────────────────────────────────────
# Config
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_URL = "http://localhost:3000"

GREETING = "Hi! I'm your HR assistant. I can help you find employees or build project teams."


# ─────────────────────────────────────────────────────────────────────────────
# API helpers  (sync, always called from background thread workers)
# ─────────────────────────────────────────────────────────────────────────────

def iter_sse(lines: Iterator[str]) -> Iterator[tuple[str, dict]]:
    """Parse "event:" / "data:" line pairs into (event, data) tuples."""
    event = "message"
    data_lines: list[str] = []
    for line in lines:
        if line is None:
            continue
        if line == "":
            if data_lines:
                yield event, json.loads("\n".join(data_lines))
            event, data_lines = "message", []
        elif line.startswith("event:"):
            event = line[len("event:"):].strip()
        elif line.startswith("data:"):
            data_lines.append(line[len("data:"):].strip())
    if data_lines:
        yield event, json.loads("\n".join(data_lines))


def _stream_chat(
    base_url: str,
    message: str,
    session_id: Optional[str],
    timeout: int = 300,
) -> Iterator[tuple[str, dict]]:
    body = {"message": message}
    if session_id:
        body["sessionId"] = session_id
    with requests.post(f"{base_url}/api/chat", json=body, stream=True, timeout=timeout) as r:
        r.raise_for_status()
        yield from iter_sse(r.iter_lines(decode_unicode=True))


# ─────────────────────────────────────────────────────────────────────────────
# App
# ─────────────────────────────────────────────────────────────────────────────

class HRAssistantApp(App[None]):
    """HR assistant — chat TUI."""

    TITLE = "HR Assistant"
    SUB_TITLE = "Find employees · Build project teams"

    CSS = """
    TabbedContent, TabPane {
        height: 1fr;
    }
    #chat-view {
        layout: vertical;
        height: 1fr;
    }
    #chat-log {
        height: 1fr;
        border: round #1e3a5f;
        padding: 0 1;
    }
    #partial {
        color: #9ca3af;
        height: auto;
        padding: 0 2;
    }
    #message-input {
        margin-top: 1;
    }
    #status-bar {
        height: 1;
        background: #111827;
        color: #6b7280;
        padding: 0 2;
        dock: bottom;
    }
    #event-log {
        height: 1fr;
        padding: 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+n", "new_conversation", "New Conversation"),
    ]

    def __init__(self, base_url: str = DEFAULT_URL) -> None:
        super().__init__()
        self.base_url = base_url
        self._session_id: Optional[str] = None
        self._partial: str = ""
        self._busy: bool = False

    # ── Compose ──────────────────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with TabbedContent(initial="chat-pane"):
            with TabPane("💬  Chat", id="chat-pane"):
                with Vertical(id="chat-view"):
                    yield RichLog(id="chat-log", highlight=True, markup=True, wrap=True)
                    yield Static("", id="partial", markup=False)
                    yield Input(placeholder='Ask something, or "exit" to quit', id="message-input")
                yield Static("…", id="status-bar", markup=True)

            with TabPane("📋  Logs", id="logs-pane"):
                yield RichLog(id="event-log", highlight=True, markup=True, wrap=True)

        yield Footer()

    def on_mount(self) -> None:
        self._chat(f"[bold cyan]Assistant:[/bold cyan] {GREETING}")
        self._set_status(f"[dim]Backend: {self.base_url}[/dim]")
        self.query_one("#message-input", Input).focus()

    # ── Input ────────────────────────────────────────────────────────────────

    @on(Input.Submitted, "#message-input")
    def _on_message(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        if not text or self._busy:
            return
        if text.lower() == "exit":
            self.exit()
            return

        event.input.value = ""
        self._chat(f"[bold green]You:[/bold green] {escape(text)}")
        self._busy = True
        self._partial = ""
        self.query_one("#message-input", Input).disabled = True
        self._set_status("[yellow]⠋ Thinking…[/yellow]")
        self._chat_worker(text)

    @work(thread=True)
    def _chat_worker(self, text: str) -> None:
        try:
            for event, data in _stream_chat(self.base_url, text, self._session_id):
                self.call_from_thread(self._on_event, event, data)
        except requests.RequestException as exc:
            self.call_from_thread(self._on_failure, str(exc))
        finally:
            self.call_from_thread(self._on_done)

    # ── Events ───────────────────────────────────────────────────────────────

    def _on_event(self, event: str, data: dict) -> None:
        self._log(f"[dim]{event}[/dim] {escape(json.dumps(data))}")

        if event == "session":
            self._session_id = data.get("sessionId") or self._session_id
        elif event == "message":
            self._partial += data.get("text", "")
            self.query_one("#partial", Static).update(self._partial)
        elif event == "result":
            self._session_id = data.get("sessionId") or self._session_id
            self.query_one("#partial", Static).update("")
            self._chat(f"[bold cyan]Assistant:[/bold cyan] {escape(data.get('text') or self._partial)}")
            self._partial = ""
        elif event == "error":
            details = data.get("details")
            suffix = f" {details}" if details else ""
            self._chat(f"[bold red]Error:[/bold red] {escape(str(data.get('error')) + suffix)}")

    def _on_failure(self, reason: str) -> None:
        self._chat(f"[bold red]Backend unreachable:[/bold red] {escape(reason)}")
        self._log(f"[bold red]FATAL:[/bold red] {escape(reason)}")

    def _on_done(self) -> None:
        self._busy = False
        inp = self.query_one("#message-input", Input)
        inp.disabled = False
        inp.focus()
        session = self._session_id[:8] if self._session_id else "—"
        self._set_status(f"[dim]Session {session}  ·  Backend: {self.base_url}[/dim]")

    def action_new_conversation(self) -> None:
        if self._busy:
            return
        self._session_id = None
        self._partial = ""
        self.query_one("#chat-log", RichLog).clear()
        self.query_one("#partial", Static).update("")
        self._chat(f"[bold cyan]Assistant:[/bold cyan] {GREETING}")
        self._log("[cyan]New conversation started.[/cyan]")

    # ── Utilities ────────────────────────────────────────────────────────────

    def _chat(self, msg: str) -> None:
        self.query_one("#chat-log", RichLog).write(msg)

    def _set_status(self, msg: str) -> None:
        self.query_one("#status-bar", Static).update(msg)

    def _log(self, msg: str) -> None:
        self.query_one("#event-log", RichLog).write(msg)


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(description="HR Assistant — TUI")
    parser.add_argument("--url", default=DEFAULT_URL, help="Backend base URL")
    args = parser.parse_args()

    try:
        HRAssistantApp(base_url=args.url).run()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
