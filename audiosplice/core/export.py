"""
Export entry point with the container fallback chain.

WAV and MP3 never fall back: WAV always succeeds and MP3 has no real-time
path, so a missing MP3 encoder surfaces as FormatUnavailableError. WebM
and MP4 try the offline ffmpeg encode first and degrade to real-time
capture.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Optional

from .buffer import AudioBuffer
from .capture import RealtimeCapture
from .encoder import EncodedAudio, EncoderFactory, encode, encode_container
from .errors import FormatUnavailableError
from .types import ExportFormat

logger = logging.getLogger("audiosplice")


async def export_audio(
    buffer: AudioBuffer,
    fmt: ExportFormat,
    capture: Optional[RealtimeCapture] = None,
    encoder_factory: Optional[EncoderFactory] = None
) -> EncodedAudio:
    """
    Encode ``buffer`` as ``fmt``.

    Args:
        buffer: Audio to export
        fmt: Target format
        capture: Real-time capture runner for the WebM/MP4 fallback
            (one sounddevice-backed runner is created if omitted)
        encoder_factory: MP3 encoder override

    Returns:
        The encoded blob with its MIME type
    """
    logger.info("Exporting %s as %s", buffer, fmt.value)

    if fmt is ExportFormat.WAV:
        return encode(buffer, fmt)
    if fmt is ExportFormat.MP3:
        return await asyncio.to_thread(encode, buffer, fmt, encoder_factory)

    try:
        data = await asyncio.to_thread(encode_container, buffer, fmt)
        return EncodedAudio(data, fmt.mime_type)
    except FormatUnavailableError as e:
        logger.warning("Offline %s encode unavailable (%s), falling back to real-time capture",
                       fmt.value, e.message)

    runner = capture if capture is not None else RealtimeCapture()
    return await runner.run(buffer, fmt)
