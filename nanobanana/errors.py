"""Error taxonomy for the nanobanana server."""

from __future__ import annotations

from typing import Iterable


class NanoBananaError(RuntimeError):
    kind = "error"


class ConfigurationError(NanoBananaError):
    kind = "configuration"


class InvalidModelError(ConfigurationError):
    kind = "invalid_model"


class InvalidArgumentsError(NanoBananaError):
    kind = "invalid_arguments"

    def __init__(self, violations: Iterable[str]) -> None:
        self.violations = [str(item) for item in violations]
        super().__init__("; ".join(self.violations) or "Invalid arguments.")


class OutOfBoundsError(NanoBananaError):
    kind = "out_of_bounds"


class FileTooLargeError(NanoBananaError):
    kind = "file_too_large"


class NoPriorImageError(NanoBananaError):
    kind = "no_prior_image"


class StaleImageError(NanoBananaError):
    kind = "stale_image"


class UnknownToolError(NanoBananaError):
    kind = "unknown_tool"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InternalError(NanoBananaError):
    kind = "internal"
