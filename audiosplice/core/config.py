"""
Centralized configuration for audiosplice.
All magic numbers and default settings in one place.
"""
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Editing and mixing configuration."""
    default_samplerate: int = 44100
    workspace_padding_seconds: float = 300.0  # Trailing work margin after edits
    mix_tail_seconds: float = 0.5  # Kept after the last audible frame
    silence_threshold: float = 1e-4  # Ignores float noise near zero
    pan_threshold: float = 0.01  # |pan| above this promotes mono to stereo


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Encoder settings."""
    mp3_bitrate: str = "192k"
    mp3_block_frames: int = 1152  # One MPEG-1 Layer III frame
    webm_codec: str = "libvorbis"
    webm_bitrate: str = "128k"
    mp4_codec: str = "aac"
    mp4_bitrate: str = "192k"


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Real-time capture fallback settings."""
    blocksize: int = 4096
    # Tried in order after the requested container; the last entry is always writable
    mime_preference: tuple[str, ...] = ("audio/webm", "audio/ogg", "audio/wav")


@dataclass(frozen=True, slots=True)
class UndoConfig:
    """Undo/Redo configuration."""
    max_depth: int = 50


# Global config instances (immutable singletons)
AUDIO_CONFIG = AudioConfig()
EXPORT_CONFIG = ExportConfig()
CAPTURE_CONFIG = CaptureConfig()
UNDO_CONFIG = UndoConfig()
