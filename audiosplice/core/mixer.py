"""
Multi-track mixdown with a hard-clip limiter and trailing-silence trim.
"""
from __future__ import annotations
import logging
import math
from typing import Iterable
import numpy as np

from .buffer import AudioBuffer
from .config import AUDIO_CONFIG
from .context import AudioContext
from .track import Track

logger = logging.getLogger("audiosplice")


def last_audible_frame(data: np.ndarray, threshold: float = AUDIO_CONFIG.silence_threshold) -> int:
    """Index of the last frame where any channel exceeds ``threshold`` (0 if none)."""
    loud = np.flatnonzero(np.any(np.abs(data) > threshold, axis=1))
    return int(loud[-1]) if loud.size else 0


def mix_all(tracks: Iterable[Track], ctx: AudioContext) -> AudioBuffer:
    """
    Sum all non-muted tracks into a stereo buffer.

    Mono tracks count as dual-mono and shorter tracks are silent past
    their end. The sum is hard-clipped to [-1, 1], then trimmed to the
    last audible frame plus a fixed tail margin.
    """
    active = [t for t in tracks if not t.muted]
    max_len = max((t.buffer.frame_count for t in active), default=0)

    if max_len == 0:
        return ctx.create_buffer(2, 1)

    # Pre-allocate output buffer
    master = ctx.allocate(max_len, 2)

    for track in active:
        data = track.buffer.data
        t_len = len(data)
        right = 1 if data.shape[1] > 1 else 0
        master[:t_len, 0] += data[:, 0]
        master[:t_len, 1] += data[:, right]

    # Hard clip
    np.clip(master, -1.0, 1.0, out=master)

    last = last_audible_frame(master)
    tail = math.floor(ctx.sample_rate * AUDIO_CONFIG.mix_tail_seconds)
    trim_end = min(max_len, last + tail)

    if trim_end == 0:
        return ctx.create_buffer(2, 1)

    logger.info("Mixed %d track(s): %d -> %d frames", len(active), max_len, trim_end)
    return AudioBuffer(master[:trim_end].copy(), ctx.sample_rate)
