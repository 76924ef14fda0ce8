"""
Buffer composition: concatenation, ripple insert, overwrite paste and
tail padding.

``insert`` grows every channel and shifts later content; ``paste_to_channel``
and ``overwrite`` replace samples in place and only grow the buffer when
the pasted material runs past the end.
"""
from __future__ import annotations
import logging
import math
from typing import Optional

from .buffer import AudioBuffer
from .channels import ensure_stereo
from .config import AUDIO_CONFIG
from .context import AudioContext
from .region import seconds_to_frame
from .types import ChannelArray, ChannelMode

logger = logging.getLogger("audiosplice")


def _upmixed_channel(buffer: AudioBuffer, index: int) -> Optional[ChannelArray]:
    """
    Source samples for output channel ``index``.

    A mono buffer feeds output channel 1 with its only channel; any other
    channel the buffer lacks stays silent.
    """
    if index < buffer.channel_count:
        return buffer.channel(index)
    if buffer.channel_count == 1 and index == 1:
        return buffer.channel(0)
    return None


def concatenate(a: AudioBuffer, b: AudioBuffer, ctx: AudioContext) -> AudioBuffer:
    """Append ``b`` after ``a`` (sample rate of ``a``)."""
    channels = max(a.channel_count, b.channel_count)
    out = ctx.allocate(a.frame_count + b.frame_count, channels)

    for ch in range(channels):
        first = _upmixed_channel(a, ch)
        if first is not None:
            out[:a.frame_count, ch] = first
        second = _upmixed_channel(b, ch)
        if second is not None:
            out[a.frame_count:, ch] = second

    logger.debug("Concatenated %d + %d frames", a.frame_count, b.frame_count)
    return AudioBuffer(out, a.sample_rate)


def insert(target: AudioBuffer, paste: AudioBuffer, at_sec: float, ctx: AudioContext) -> AudioBuffer:
    """Ripple-insert ``paste`` into ``target`` at ``at_sec``."""
    at = min(max(seconds_to_frame(at_sec, target.sample_rate), 0), target.frame_count)
    after = at + paste.frame_count
    channels = max(target.channel_count, paste.channel_count)
    out = ctx.allocate(target.frame_count + paste.frame_count, channels)

    for ch in range(channels):
        head = _upmixed_channel(target, ch)
        if head is not None:
            out[:at, ch] = head[:at]
            out[after:, ch] = head[at:]
        pasted = _upmixed_channel(paste, ch)
        if pasted is not None:
            out[at:after, ch] = pasted

    logger.debug("Inserted %d frames at frame %d", paste.frame_count, at)
    return AudioBuffer(out, target.sample_rate)


def paste_to_channel(
    target: AudioBuffer,
    paste: AudioBuffer,
    at_sec: float,
    mode: ChannelMode,
    ctx: AudioContext
) -> AudioBuffer:
    """
    Overwrite one channel of ``target`` with ``paste``'s first channel.

    The target is promoted to stereo; the other channel is copied
    unchanged. The buffer grows only if the paste overruns the end.

    Raises:
        ValueError: for ChannelMode.STEREO (use ``insert`` instead)
    """
    target_ch = mode.channel_index
    working = ensure_stereo(target, ctx)
    start = max(0, seconds_to_frame(at_sec, working.sample_rate))
    end = start + paste.frame_count

    out = ctx.allocate(max(working.frame_count, end), working.channel_count)
    out[:working.frame_count] = working.data
    out[start:end, target_ch] = paste.channel(0)

    logger.debug("Pasted %d frames to channel %d at frame %d", paste.frame_count, target_ch, start)
    return AudioBuffer(out, working.sample_rate)


def overwrite(target: AudioBuffer, source: AudioBuffer, at_sec: float, ctx: AudioContext) -> AudioBuffer:
    """
    Overwrite every channel of ``target`` with ``source`` from ``at_sec``.

    Target channel ``i`` takes source channel ``i % source.channel_count``,
    so a mono source lands on all channels.
    """
    start = max(0, seconds_to_frame(at_sec, target.sample_rate))
    end = start + source.frame_count

    out = ctx.allocate(max(target.frame_count, end), target.channel_count)
    out[:target.frame_count] = target.data
    for ch in range(target.channel_count):
        out[start:end, ch] = source.channel(ch % source.channel_count)

    logger.debug("Overwrote frames [%d, %d) on %d channels", start, end, target.channel_count)
    return AudioBuffer(out, target.sample_rate)


def splice_recording(
    target: AudioBuffer,
    recorded: AudioBuffer,
    at_sec: float,
    mode: ChannelMode,
    ctx: AudioContext
) -> AudioBuffer:
    """Drop a decoded recording into ``target`` at ``at_sec``."""
    if mode is ChannelMode.STEREO:
        return overwrite(target, recorded, at_sec, ctx)
    return paste_to_channel(target, recorded, at_sec, mode, ctx)


def paste_clipboard(
    target: AudioBuffer,
    clip: AudioBuffer,
    at_sec: float,
    mode: ChannelMode,
    ctx: AudioContext
) -> AudioBuffer:
    """
    Paste a copied region at ``at_sec`` and restore the work margin.

    STEREO ripple-inserts; LEFT/RIGHT overwrite the targeted channel.
    """
    if mode is ChannelMode.STEREO:
        pasted = insert(target, clip, at_sec, ctx)
    else:
        pasted = paste_to_channel(target, clip, at_sec, mode, ctx)
    return pad_workspace(pasted, ctx)


def pad(buffer: AudioBuffer, extra_sec: float, ctx: AudioContext) -> AudioBuffer:
    """Append ``floor(extra_sec * rate)`` silent frames."""
    extra = max(0, math.floor(extra_sec * buffer.sample_rate))
    out = ctx.allocate(buffer.frame_count + extra, buffer.channel_count)
    out[:buffer.frame_count] = buffer.data
    return AudioBuffer(out, buffer.sample_rate)


def pad_workspace(buffer: AudioBuffer, ctx: AudioContext) -> AudioBuffer:
    """Pad with the editing session's trailing work margin."""
    return pad(buffer, AUDIO_CONFIG.workspace_padding_seconds, ctx)
