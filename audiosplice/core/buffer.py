"""
Immutable multichannel sample container.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np

from .types import AudioArray, ChannelArray


@dataclass(frozen=True, eq=False)
class AudioBuffer:
    """
    Multichannel float32 audio, shape (frames, channels).

    The buffer takes ownership of ``data`` and marks it read-only. Engine
    operations never modify a buffer; they allocate a new one.
    """
    data: AudioArray
    sample_rate: int

    def __post_init__(self) -> None:
        data = np.ascontiguousarray(self.data, dtype=np.float32)
        if data.ndim != 2:
            raise ValueError(f"Buffer data must be 2-D (frames, channels), got {data.ndim}-D")
        if data.shape[1] < 1:
            raise ValueError("Buffer must have at least one channel")
        if int(self.sample_rate) <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        data.setflags(write=False)
        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'sample_rate', int(self.sample_rate))

    @classmethod
    def from_channels(cls, channels: Sequence[ChannelArray], sample_rate: int) -> AudioBuffer:
        """Build a buffer from per-channel sample arrays of equal length."""
        if not channels:
            raise ValueError("Buffer must have at least one channel")
        lengths = {len(c) for c in channels}
        if len(lengths) != 1:
            raise ValueError(f"Channel lengths differ: {sorted(lengths)}")
        return cls(np.column_stack([np.asarray(c, dtype=np.float32) for c in channels]), sample_rate)

    @classmethod
    def from_array(cls, array: np.ndarray, sample_rate: int) -> AudioBuffer:
        """Copy a (frames,) mono or (frames, channels) array into a new buffer."""
        data = np.array(array, dtype=np.float32, copy=True)
        if data.ndim == 1:
            data = data[:, np.newaxis]
        return cls(data, sample_rate)

    @property
    def frame_count(self) -> int:
        return self.data.shape[0]

    @property
    def channel_count(self) -> int:
        return self.data.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.frame_count / self.sample_rate

    @property
    def is_mono(self) -> bool:
        return self.channel_count == 1

    def channel(self, index: int) -> ChannelArray:
        """Read-only view of one channel's samples."""
        return self.data[:, index]

    def copy(self) -> AudioBuffer:
        return AudioBuffer(self.data.copy(), self.sample_rate)

    def __len__(self) -> int:
        return self.frame_count

    def __repr__(self) -> str:
        return (f"AudioBuffer(channels={self.channel_count}, frames={self.frame_count}, "
                f"sample_rate={self.sample_rate}, duration={self.duration:.2f}s)")
