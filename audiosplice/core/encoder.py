"""
Format encoders.

WAV is written natively and bit-exactly. MP3 and the WebM/MP4 containers
are handed to ffmpeg through pydub; this module only prepares 16-bit PCM
and drives the hand-off.
"""
from __future__ import annotations
import base64
import io
import logging
import struct
from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np

from .buffer import AudioBuffer
from .config import EXPORT_CONFIG
from .errors import FormatUnavailableError
from .types import CompressedEncoder, ExportFormat, PCM16Array

logger = logging.getLogger("audiosplice")

WAV_HEADER_SIZE = 44

EncoderFactory = Callable[[int, int, str], CompressedEncoder]  # (sample_rate, channels, bitrate)


@dataclass(frozen=True, slots=True)
class EncodedAudio:
    """An encoded byte blob and its MIME type."""
    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode('ascii')

    def __len__(self) -> int:
        return len(self.data)


# =============================================================================
# PCM / WAV
# =============================================================================

def float_to_pcm16(samples: np.ndarray) -> PCM16Array:
    """
    Convert float samples to little-endian int16.

    NaN becomes silence and samples are clamped to [-1, 1]; negatives
    scale by 32768 and positives by 32767, rounding half up.
    """
    s = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0)
    s = np.clip(s, -1.0, 1.0)
    scaled = np.where(s < 0, s * 32768.0, s * 32767.0)
    return np.floor(scaled + 0.5).astype('<i2')


def encode_wav(buffer: AudioBuffer) -> bytes:
    """Serialize to a RIFF/WAVE PCM16 file with interleaved frames."""
    channels = buffer.channel_count
    data_size = buffer.frame_count * channels * 2

    header = struct.pack(
        '<4sI4s4sIHHIIHH4sI',
        b'RIFF', 36 + data_size, b'WAVE',
        b'fmt ', 16, 1, channels, buffer.sample_rate,
        buffer.sample_rate * channels * 2, channels * 2, 16,
        b'data', data_size,
    )
    # (frames, channels) in C order is already frame-interleaved
    return header + float_to_pcm16(buffer.data).tobytes()


# =============================================================================
# FFMPEG (pydub)
# =============================================================================

def is_ffmpeg_available() -> bool:
    """Check if pydub and an ffmpeg binary are available."""
    try:
        from pydub import AudioSegment
        from pydub.utils import which
    except ImportError:
        return False
    return which(AudioSegment.converter) is not None


def _require_ffmpeg(fmt: ExportFormat) -> None:
    if not is_ffmpeg_available():
        raise FormatUnavailableError(
            f"{fmt.value.upper()} export needs pydub and ffmpeg, which could not be loaded",
            {"format": fmt.value},
        )


def export_pcm(pcm: bytes, sample_rate: int, channels: int, fmt: ExportFormat, **params) -> bytes:
    """Encode raw PCM16 with ffmpeg; ``params`` go to ``AudioSegment.export``."""
    from pydub import AudioSegment
    from pydub.exceptions import CouldntEncodeError

    segment = AudioSegment(data=pcm, sample_width=2, frame_rate=sample_rate, channels=channels)
    out = io.BytesIO()
    try:
        segment.export(out, format=fmt.value, **params)
    except (CouldntEncodeError, OSError) as e:
        logger.error("ffmpeg failed to encode %s: %s", fmt.value, e, exc_info=True)
        raise FormatUnavailableError(f"ffmpeg could not encode {fmt.value}: {e}", {"format": fmt.value}) from e
    return out.getvalue()


class PydubMp3Encoder:
    """
    MP3 encoder backed by ffmpeg (libmp3lame) via pydub.

    ffmpeg encodes whole streams, so ``encode`` buffers PCM and returns
    nothing; the compressed stream comes out of ``flush``.
    """
    __slots__ = ('sample_rate', 'channels', 'bitrate', '_chunks')

    def __init__(self, sample_rate: int, channels: int, bitrate: str = EXPORT_CONFIG.mp3_bitrate) -> None:
        _require_ffmpeg(ExportFormat.MP3)
        self.sample_rate = sample_rate
        self.channels = channels
        self.bitrate = bitrate
        self._chunks: list[bytes] = []

    def encode(self, pcm: PCM16Array) -> bytes:
        self._chunks.append(np.ascontiguousarray(pcm, dtype='<i2').tobytes())
        return b''

    def flush(self) -> bytes:
        pcm = b''.join(self._chunks)
        self._chunks.clear()
        return export_pcm(pcm, self.sample_rate, self.channels, ExportFormat.MP3, bitrate=self.bitrate)


def encode_mp3(
    buffer: AudioBuffer,
    encoder_factory: Optional[EncoderFactory] = None,
    bitrate: str = EXPORT_CONFIG.mp3_bitrate
) -> bytes:
    """
    Encode to MP3 through a compressed-encoder hand-off.

    Raises:
        FormatUnavailableError: if the encoder cannot be loaded
    """
    factory = encoder_factory or PydubMp3Encoder
    encoder = factory(buffer.sample_rate, buffer.channel_count, bitrate)

    pcm = float_to_pcm16(buffer.data)
    block = EXPORT_CONFIG.mp3_block_frames
    parts = []
    for offset in range(0, len(pcm), block):
        chunk = encoder.encode(pcm[offset:offset + block])
        if chunk:
            parts.append(chunk)
    parts.append(encoder.flush())
    return b''.join(parts)


def encode_container(buffer: AudioBuffer, fmt: ExportFormat) -> bytes:
    """
    Offline WebM/MP4 encode through ffmpeg.

    Raises:
        FormatUnavailableError: if ffmpeg is missing or the encode fails
    """
    if fmt is ExportFormat.WEBM:
        codec, bitrate = EXPORT_CONFIG.webm_codec, EXPORT_CONFIG.webm_bitrate
    elif fmt is ExportFormat.MP4:
        codec, bitrate = EXPORT_CONFIG.mp4_codec, EXPORT_CONFIG.mp4_bitrate
    else:
        raise ValueError(f"{fmt.value} is not a container format")

    _require_ffmpeg(fmt)
    pcm = float_to_pcm16(buffer.data).tobytes()
    return export_pcm(pcm, buffer.sample_rate, buffer.channel_count, fmt, codec=codec, bitrate=bitrate)


def encode(
    buffer: AudioBuffer,
    fmt: ExportFormat,
    encoder_factory: Optional[EncoderFactory] = None
) -> EncodedAudio:
    """Synchronous encode; WebM/MP4 use the offline path only."""
    if fmt is ExportFormat.WAV:
        data = encode_wav(buffer)
    elif fmt is ExportFormat.MP3:
        data = encode_mp3(buffer, encoder_factory)
    else:
        data = encode_container(buffer, fmt)
    logger.info("Encoded %s as %s (%d bytes)", buffer, fmt.value, len(data))
    return EncodedAudio(data, fmt.mime_type)
