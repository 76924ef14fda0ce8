"""
Region editing: cut and extract over a time range and a channel mode.

Times are converted with ``floor(seconds * sample_rate)`` and clamped to
the buffer, so out-of-range or reversed ranges degrade to an empty region
instead of raising.
"""
from __future__ import annotations
import logging
import math
import numpy as np

from .buffer import AudioBuffer
from .channels import ensure_stereo
from .context import AudioContext
from .types import ChannelMode

logger = logging.getLogger("audiosplice")


def seconds_to_frame(seconds: float, sample_rate: int) -> int:
    """Frame index for a time in seconds (floor, unclamped)."""
    return math.floor(seconds * sample_rate)


def region_frames(buffer: AudioBuffer, start_sec: float, end_sec: float) -> tuple[int, int]:
    """
    Clamped ``(start_frame, end_frame)`` for a time range.

    ``start_frame >= end_frame`` denotes an empty region.
    """
    total = buffer.frame_count
    start = min(max(seconds_to_frame(start_sec, buffer.sample_rate), 0), total)
    end = min(max(seconds_to_frame(end_sec, buffer.sample_rate), 0), total)
    return start, end


def cut_region(
    buffer: AudioBuffer,
    start_sec: float,
    end_sec: float,
    mode: ChannelMode,
    ctx: AudioContext
) -> AudioBuffer:
    """
    Remove or silence a region.

    STEREO ripple-deletes the region from every channel and shortens the
    buffer. LEFT/RIGHT keep the length and zero the region in the targeted
    channel only, promoting mono sources to dual-mono first.
    """
    working = buffer if mode is ChannelMode.STEREO else ensure_stereo(buffer, ctx)
    start, end = region_frames(working, start_sec, end_sec)

    if mode is ChannelMode.STEREO:
        removed = max(0, end - start)
        new_length = working.frame_count - removed
        logger.debug("Ripple delete frames [%d, %d) of %d", start, end, working.frame_count)

        if new_length <= 0:
            return ctx.create_buffer(working.channel_count, 1, working.sample_rate)

        if removed == 0:
            return working.copy()
        data = np.concatenate((working.data[:start], working.data[end:]), axis=0)
        return AudioBuffer(data, working.sample_rate)

    target = mode.channel_index
    logger.debug("Silence channel %d frames [%d, %d)", target, start, end)
    data = working.data.copy()
    if start < end:
        data[start:end, target] = 0.0
    return AudioBuffer(data, working.sample_rate)


def extract_region(
    buffer: AudioBuffer,
    start_sec: float,
    end_sec: float,
    mode: ChannelMode,
    ctx: AudioContext
) -> AudioBuffer:
    """
    Copy a region out of a buffer.

    STEREO keeps every channel; LEFT/RIGHT return a single-channel buffer
    of the selected side (the mono signal itself for mono sources). An
    empty region yields a 1-frame silent mono buffer.
    """
    working = buffer if mode is ChannelMode.STEREO else ensure_stereo(buffer, ctx)
    start, end = region_frames(working, start_sec, end_sec)

    if end - start <= 0:
        return ctx.create_buffer(1, 1, working.sample_rate)

    if mode is ChannelMode.STEREO:
        data = working.data[start:end].copy()
    else:
        data = working.data[start:end, mode.channel_index:mode.channel_index + 1].copy()
    return AudioBuffer(data, working.sample_rate)
