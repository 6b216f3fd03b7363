"""Per-conversation session memory."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass
class SessionState:
    """Remembers the most recent image produced in one conversation.

    Not shared between conversations and never persisted; a new process starts
    with no prior image.
    """

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    last_image_path: str | None = None

    @property
    def has_prior_image(self) -> bool:
        return self.last_image_path is not None

    def remember(self, file_path: str) -> None:
        self.last_image_path = file_path
