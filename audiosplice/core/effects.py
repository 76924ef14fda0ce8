"""
Region volume and constant-power pan.
"""
from __future__ import annotations
import logging
import math

from .buffer import AudioBuffer
from .channels import ensure_stereo
from .config import AUDIO_CONFIG
from .context import AudioContext
from .region import region_frames

logger = logging.getLogger("audiosplice")


def pan_gains(pan: float) -> tuple[float, float]:
    """
    Constant-power pan law.

    Args:
        pan: -1.0 (hard left) to 1.0 (hard right)

    Returns:
        (left_gain, right_gain) with left**2 + right**2 == 1
    """
    angle = (pan + 1.0) / 2.0 * (math.pi / 2.0)
    return math.cos(angle), math.sin(angle)


def apply_effects(
    buffer: AudioBuffer,
    start_sec: float,
    end_sec: float,
    volume: float,
    pan: float,
    ctx: AudioContext
) -> AudioBuffer:
    """
    Apply gain and pan to a region.

    A mono buffer is promoted to stereo when a pan is requested. Pan only
    applies to exactly-stereo buffers; any other layout gets ``volume``
    alone. Samples are not clamped, so ``volume > 1`` may leave the
    [-1, 1] range until mix/encode time.

    Args:
        buffer: Source audio
        start_sec: Region start in seconds
        end_sec: Region end in seconds
        volume: Linear gain (>= 0)
        pan: Pan position in [-1, 1]
        ctx: Audio context

    Returns:
        New buffer with the region processed
    """
    if volume < 0:
        raise ValueError(f"Volume must be non-negative, got {volume}")

    working = buffer
    if buffer.channel_count == 1 and abs(pan) > AUDIO_CONFIG.pan_threshold:
        working = ensure_stereo(buffer, ctx)

    start, end = region_frames(working, start_sec, end_sec)
    channels = working.channel_count

    if channels == 2:
        left, right = pan_gains(pan)
        gains = [volume * left, volume * right]
    else:
        gains = [volume] * channels

    out = ctx.allocate(working.frame_count, channels)
    out[:] = working.data
    if start < end:
        for ch, gain in enumerate(gains):
            out[start:end, ch] *= gain

    logger.debug("Effects on frames [%d, %d): volume=%.3f pan=%.3f", start, end, volume, pan)
    return AudioBuffer(out, working.sample_rate)
