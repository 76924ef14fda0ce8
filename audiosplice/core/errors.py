"""
Exception hierarchy for audiosplice.

Region coordinates are never an error (they are clamped); the classes here
cover failures at the engine's external boundaries.
"""
from typing import Any


class AudioEditError(Exception):
    """Base class for audiosplice errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "context": self.context,
        }


class DecodeError(AudioEditError):
    """Source audio is malformed or in an unsupported format."""


class FormatUnavailableError(AudioEditError):
    """The encoder needed for an export format cannot be loaded or run."""


class RecordingError(AudioEditError):
    """A capture device, stream or recorder failed."""


class CaptureInProgressError(AudioEditError):
    """A real-time capture is already running on this output device."""
