"""
Type definitions for the audiosplice core module.
Provides enums, type aliases and protocols for the engine's seams.
"""
from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol
import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .buffer import AudioBuffer

# Audio data types
AudioArray = NDArray[np.float32]  # Shape: (frames, channels)
ChannelArray = NDArray[np.float32]  # Shape: (frames,)
PCM16Array = NDArray[np.int16]  # Interleaved or (frames, channels)

# Callback types
BlockCallback = Callable[[AudioArray], None]


class ChannelMode(Enum):
    """Which channel(s) a region operation targets."""
    LEFT = "left"
    RIGHT = "right"
    STEREO = "stereo"

    @property
    def channel_index(self) -> int:
        """Channel index addressed by LEFT/RIGHT."""
        if self is ChannelMode.LEFT:
            return 0
        if self is ChannelMode.RIGHT:
            return 1
        raise ValueError("STEREO addresses the whole buffer, not a single channel")


class ExportFormat(Enum):
    """Export targets."""
    WAV = "wav"
    MP3 = "mp3"
    WEBM = "webm"
    MP4 = "mp4"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    ExportFormat.WAV: "audio/wav",
    ExportFormat.MP3: "audio/mpeg",
    ExportFormat.WEBM: "audio/webm",
    ExportFormat.MP4: "audio/mp4",
}


class CompressedEncoder(Protocol):
    """Streaming hand-off to an external compressed-audio encoder."""
    def encode(self, pcm: PCM16Array) -> bytes: ...
    def flush(self) -> bytes: ...


class Recorder(Protocol):
    """Captures rendered audio blocks into an encoded container."""
    mime_type: str

    @classmethod
    def is_type_supported(cls, mime_type: str) -> bool: ...
    def start(self) -> None: ...
    def write(self, block: AudioArray) -> None: ...
    def stop(self) -> bytes: ...


class PlaybackSink(Protocol):
    """Plays a buffer in real time, tapping each rendered block."""
    async def play(self, buffer: "AudioBuffer", on_block: BlockCallback) -> None: ...
