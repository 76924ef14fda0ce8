"""
Audio context: the explicit resource handle every engine operation
allocates through. Also owns the decode boundary.
"""
from __future__ import annotations
import io
import logging
import numpy as np
import soundfile as sf

from .buffer import AudioBuffer
from .config import AUDIO_CONFIG
from .errors import DecodeError

logger = logging.getLogger("audiosplice")

# pydub sample_width (bytes) -> full-scale divisor
_PCM_SCALE = {1: 128.0, 2: 32768.0, 3: 8388608.0, 4: 2147483648.0}


class AudioContext:
    """
    Shared processing context, created once by the caller and passed
    explicitly into each operation.
    """
    __slots__ = ('_sample_rate',)

    def __init__(self, sample_rate: int = AUDIO_CONFIG.default_samplerate) -> None:
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        self._sample_rate = int(sample_rate)

    @property
    def sample_rate(self) -> int:
        """Rate used for mix output and for decoded buffers."""
        return self._sample_rate

    def allocate(self, frames: int, channels: int) -> np.ndarray:
        """Writable zero-filled (frames, channels) float32 array."""
        if channels < 1:
            raise ValueError(f"Buffer must have at least one channel, got {channels}")
        return np.zeros((max(0, frames), channels), dtype=np.float32)

    def create_buffer(self, channels: int, frames: int, sample_rate: int | None = None) -> AudioBuffer:
        """Allocate a silent buffer (at the context rate unless given)."""
        rate = self._sample_rate if sample_rate is None else sample_rate
        return AudioBuffer(self.allocate(frames, channels), rate)

    def decode(self, blob: bytes) -> AudioBuffer:
        """
        Decode an encoded byte blob into a buffer at the context rate.

        libsndfile formats are read with soundfile; anything else (MP3 on
        older libsndfile, WebM, MP4) goes through pydub/ffmpeg.

        Raises:
            DecodeError: if no backend can decode the data
        """
        if not blob:
            raise DecodeError("Cannot decode an empty blob")

        try:
            data, rate = sf.read(io.BytesIO(blob), dtype='float32', always_2d=True)
        except sf.LibsndfileError as e:
            logger.debug("soundfile could not decode blob (%s), trying pydub", e)
            data, rate = self._decode_pydub(blob)

        if rate != self._sample_rate and len(data) > 0:
            import librosa
            logger.debug("Resampling decoded audio %d Hz -> %d Hz", rate, self._sample_rate)
            data = librosa.resample(data, orig_sr=rate, target_sr=self._sample_rate, axis=0)

        buffer = AudioBuffer(np.array(data, dtype=np.float32), self._sample_rate)
        logger.info("Decoded %s", buffer)
        return buffer

    @staticmethod
    def _decode_pydub(blob: bytes) -> tuple[np.ndarray, int]:
        try:
            from pydub import AudioSegment
        except ImportError as e:
            raise DecodeError("Unsupported audio format and pydub is not installed") from e

        try:
            segment = AudioSegment.from_file(io.BytesIO(blob))
        except Exception as e:
            # CouldntDecodeError, missing ffmpeg/ffprobe, or unparseable probe output
            raise DecodeError(f"Could not decode audio: {e}", {"bytes": len(blob)}) from e

        scale = _PCM_SCALE.get(segment.sample_width)
        if scale is None:
            raise DecodeError(f"Unsupported sample width: {segment.sample_width} bytes")

        samples = np.array(segment.get_array_of_samples()).astype(np.float32)
        if segment.sample_width == 1:
            samples -= 128.0  # 8-bit PCM is unsigned
        data = (samples / scale).reshape(-1, segment.channels)
        return data, segment.frame_rate
