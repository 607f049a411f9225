"""Progress events and the sinks a push run reports into."""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Protocol


class ProgressSink(Protocol):
    async def emit(self, event: dict[str, Any]) -> None: ...

    async def close(self) -> None: ...


def progress_event(current: int, total: int, event_type: str, message: str) -> dict[str, Any]:
    return {
        "type": "progress",
        "current": current,
        "total": total,
        "eventType": event_type,
        "message": message,
    }


def complete_event(synced: int, errors: int) -> dict[str, Any]:
    return {"type": "complete", "synced": synced, "errors": errors}


def error_event(message: str) -> dict[str, Any]:
    return {"type": "error", "message": message}


def format_sse(event: dict[str, Any]) -> str:
    """Serialize one event as an SSE ``data:`` frame."""
    return f"data: {json.dumps(event)}\n\n"


class QueueProgressSink:
    """Sink backed by an asyncio.Queue; iterate it to drain events until close()."""

    _CLOSED = object()

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self.closed = False

    async def emit(self, event: dict[str, Any]) -> None:
        if self.closed:
            return
        await self._queue.put(event)

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        await self._queue.put(self._CLOSED)

    async def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        while True:
            item = await self._queue.get()
            if item is self._CLOSED:
                return
            yield item


class ListProgressSink:
    """Collects events in memory (CLI and tests)."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []
        self.closed = False

    async def emit(self, event: dict[str, Any]) -> None:
        self.events.append(event)

    async def close(self) -> None:
        self.closed = True

    @property
    def terminal(self) -> dict[str, Any] | None:
        if self.events and self.events[-1]["type"] in ("complete", "error"):
            return self.events[-1]
        return None
