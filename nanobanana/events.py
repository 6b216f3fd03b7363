"""Append-only tool event stream."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .utils import now_utc_iso


@dataclass
class EventWriter:
    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, init=False)

    def emit(self, event_type: str, session_id: str, **payload: Any) -> dict[str, Any]:
        event = {
            "type": event_type,
            "session_id": session_id,
            "ts": now_utc_iso(),
        }
        event.update(payload)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = f"{json.dumps(event)}\n"
        with self._lock:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        return event


class NullEventWriter:
    def emit(self, event_type: str, session_id: str, **payload: Any) -> dict[str, Any]:
        return {"type": event_type, "session_id": session_id, **payload}


def event_writer_for(path: str | Path | None) -> EventWriter | NullEventWriter:
    if not path:
        return NullEventWriter()
    return EventWriter(Path(path).expanduser())
