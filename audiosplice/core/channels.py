"""
Channel normalization (dual-mono promotion).
"""
from __future__ import annotations

from .buffer import AudioBuffer
from .context import AudioContext


def ensure_stereo(buffer: AudioBuffer, ctx: AudioContext) -> AudioBuffer:
    """
    Promote a mono buffer to two identical channels.

    Buffers that already have two or more channels are returned as-is,
    so this is safe to call unconditionally.
    """
    if buffer.channel_count >= 2:
        return buffer

    stereo = ctx.allocate(buffer.frame_count, 2)
    stereo[:, 0] = buffer.channel(0)
    stereo[:, 1] = buffer.channel(0)
    return AudioBuffer(stereo, buffer.sample_rate)
