"""
Real-time capture fallback for container exports.

When no offline container encoder is usable, the buffer is played through
an output stream while a recorder taps every rendered block. The capture
finishes once playback ends, so it takes as long as the audio itself.

Recorders are tried in MIME preference order. ``PydubRecorder`` needs
ffmpeg; ``SoundfileRecorder`` only needs libsndfile and can always fall
back to WAV, so a capture never ends without a container to write.
"""
from __future__ import annotations
import asyncio
import io
import logging
from typing import Optional, Sequence
import numpy as np
import soundfile as sf

from .buffer import AudioBuffer
from .config import CAPTURE_CONFIG, EXPORT_CONFIG
from .encoder import EncodedAudio, encode_wav, export_pcm, float_to_pcm16, is_ffmpeg_available
from .errors import CaptureInProgressError, FormatUnavailableError, RecordingError
from .types import AudioArray, BlockCallback, ExportFormat, PlaybackSink

logger = logging.getLogger("audiosplice")


def _candidate_mime_types(fmt: ExportFormat) -> list[str]:
    candidates = list(CAPTURE_CONFIG.mime_preference)
    if fmt is ExportFormat.MP4:
        candidates.insert(0, ExportFormat.MP4.mime_type)
    return candidates


def select_recorder(fmt: ExportFormat, recorders: Sequence[type]) -> tuple[type, str]:
    """
    First (recorder class, MIME type) pair able to capture ``fmt``.

    MP4 is only tried when requested; after that the configured preference
    order applies, and each MIME type goes to the first recorder that
    supports it.

    Raises:
        RecordingError: if no recorder supports any candidate type
    """
    candidates = _candidate_mime_types(fmt)
    for mime_type in candidates:
        for recorder_cls in recorders:
            if recorder_cls.is_type_supported(mime_type):
                return recorder_cls, mime_type
    raise RecordingError(
        f"No recorder can capture {fmt.value}",
        {"candidates": candidates, "recorders": [r.__name__ for r in recorders]},
    )


def select_mime_type(fmt: ExportFormat, recorder_cls: type) -> str:
    """Best container a single recorder can produce for ``fmt``."""
    return select_recorder(fmt, (recorder_cls,))[1]


def _load_sounddevice():
    import sounddevice as sd
    return sd


class SoundDeviceSink:
    """
    Plays a buffer on a sounddevice output stream.

    Blocks are handed to ``on_block`` on the event loop thread, in order,
    before playback is reported as ended.
    """
    __slots__ = ('device', 'blocksize')

    def __init__(self, device: Optional[int | str] = None, blocksize: int = CAPTURE_CONFIG.blocksize) -> None:
        self.device = device
        self.blocksize = blocksize

    async def play(self, buffer: AudioBuffer, on_block: BlockCallback) -> None:
        """
        Raises:
            RecordingError: if the stream cannot be opened or started, or
                stops before the whole buffer was rendered
        """
        sd = _load_sounddevice()

        loop = asyncio.get_running_loop()
        ended = asyncio.Event()
        data = buffer.data
        total = len(data)
        position = 0

        def _post(callback, *args) -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(callback, *args)

        def playback_callback(outdata, frames: int, time: object, status: sd.CallbackFlags) -> None:
            """Real-time audio callback."""
            nonlocal position
            if status:
                logger.debug("Capture stream status: %s", status)
            chunk = data[position:position + frames]
            n = len(chunk)
            outdata.fill(0)
            outdata[:n] = chunk
            if n:
                _post(on_block, chunk.copy())
            position += frames
            if position >= total:
                raise sd.CallbackStop()

        try:
            stream = sd.OutputStream(
                samplerate=buffer.sample_rate,
                channels=buffer.channel_count,
                blocksize=self.blocksize,
                device=self.device,
                dtype='float32',
                callback=playback_callback,
                finished_callback=lambda: _post(ended.set)
            )
            with stream:
                await ended.wait()
        except sd.PortAudioError as e:
            logger.error("Capture stream failed: %s", e, exc_info=True)
            raise RecordingError(f"Output stream failed: {e}", {"device": self.device}) from e

        if position < total:
            logger.error("Capture stream stopped at frame %d of %d", position, total)
            raise RecordingError(
                "Output stream stopped before the end of the buffer",
                {"device": self.device, "rendered": position, "frames": total},
            )


class PydubRecorder:
    """
    Accumulates rendered blocks as PCM16 and encodes them into a
    WebM/MP4 container through ffmpeg when stopped.
    """
    _CONTAINERS = {
        ExportFormat.WEBM.mime_type: (ExportFormat.WEBM, EXPORT_CONFIG.webm_codec, EXPORT_CONFIG.webm_bitrate),
        ExportFormat.MP4.mime_type: (ExportFormat.MP4, EXPORT_CONFIG.mp4_codec, EXPORT_CONFIG.mp4_bitrate),
    }

    def __init__(self, mime_type: str, sample_rate: int, channels: int) -> None:
        if mime_type not in self._CONTAINERS:
            raise RecordingError(f"Unsupported recorder MIME type: {mime_type}")
        self.mime_type = mime_type
        self.sample_rate = sample_rate
        self.channels = channels
        self._chunks: list[bytes] = []
        self._recording = False

    @classmethod
    def is_type_supported(cls, mime_type: str) -> bool:
        return mime_type in cls._CONTAINERS and is_ffmpeg_available()

    def start(self) -> None:
        self._chunks = []
        self._recording = True

    def write(self, block: AudioArray) -> None:
        if not self._recording:
            raise RecordingError("Recorder is not running")
        self._chunks.append(float_to_pcm16(block).tobytes())

    def stop(self) -> bytes:
        if not self._recording:
            raise RecordingError("Recorder is not running")
        self._recording = False

        fmt, codec, bitrate = self._CONTAINERS[self.mime_type]
        pcm = b''.join(self._chunks)
        self._chunks = []
        try:
            return export_pcm(pcm, self.sample_rate, self.channels, fmt, codec=codec, bitrate=bitrate)
        except FormatUnavailableError as e:
            raise RecordingError(f"Recorder could not encode {self.mime_type}: {e.message}") from e


class SoundfileRecorder:
    """
    Accumulates rendered blocks and writes them with libsndfile when
    stopped: Ogg/Vorbis where the bundled libsndfile has it, WAV always.
    """
    _CONTAINERS = {
        "audio/ogg": ("OGG", "VORBIS"),
        "audio/wav": ("WAV", "PCM_16"),
    }

    def __init__(self, mime_type: str, sample_rate: int, channels: int) -> None:
        if mime_type not in self._CONTAINERS:
            raise RecordingError(f"Unsupported recorder MIME type: {mime_type}")
        self.mime_type = mime_type
        self.sample_rate = sample_rate
        self.channels = channels
        self._blocks: list[AudioArray] = []
        self._recording = False

    @classmethod
    def is_type_supported(cls, mime_type: str) -> bool:
        if mime_type not in cls._CONTAINERS:
            return False
        container, _ = cls._CONTAINERS[mime_type]
        return container in sf.available_formats()

    def start(self) -> None:
        self._blocks = []
        self._recording = True

    def write(self, block: AudioArray) -> None:
        if not self._recording:
            raise RecordingError("Recorder is not running")
        self._blocks.append(np.asarray(block, dtype=np.float32))

    def stop(self) -> bytes:
        if not self._recording:
            raise RecordingError("Recorder is not running")
        self._recording = False

        if self._blocks:
            data = np.concatenate(self._blocks, axis=0)
        else:
            data = np.zeros((0, self.channels), dtype=np.float32)
        self._blocks = []

        if self.mime_type == "audio/wav":
            return encode_wav(AudioBuffer(data, self.sample_rate))

        container, subtype = self._CONTAINERS[self.mime_type]
        out = io.BytesIO()
        try:
            sf.write(out, np.clip(data, -1.0, 1.0), self.sample_rate, format=container, subtype=subtype)
        except sf.LibsndfileError as e:
            logger.error("libsndfile failed to write %s: %s", self.mime_type, e, exc_info=True)
            raise RecordingError(f"Recorder could not encode {self.mime_type}: {e}") from e
        return out.getvalue()


DEFAULT_RECORDERS: tuple[type, ...] = (PydubRecorder, SoundfileRecorder)


class RealtimeCapture:
    """
    Runs captures on one output device, one at a time.

    ``recorders`` are consulted in order for each candidate MIME type (see
    ``select_recorder``).

    Cancelling the awaiting task stops playback and discards the recording.
    """
    __slots__ = ('_sink', '_recorders', '_in_flight')

    def __init__(
        self,
        sink: Optional[PlaybackSink] = None,
        recorders: Sequence[type] = DEFAULT_RECORDERS
    ) -> None:
        self._sink = sink if sink is not None else SoundDeviceSink()
        self._recorders = tuple(recorders)
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def run(self, buffer: AudioBuffer, fmt: ExportFormat) -> EncodedAudio:
        """
        Capture ``buffer`` into the best available container for ``fmt``.

        Raises:
            CaptureInProgressError: if a capture is already running here
            RecordingError: if the stream or recorder fails
        """
        if self._in_flight:
            raise CaptureInProgressError("A capture is already running on this output device")
        self._in_flight = True
        try:
            recorder_cls, mime_type = select_recorder(fmt, self._recorders)
            recorder = recorder_cls(mime_type, buffer.sample_rate, buffer.channel_count)
            failures: list[Exception] = []

            def on_block(block: AudioArray) -> None:
                if failures:
                    return
                try:
                    recorder.write(block)
                except Exception as e:
                    failures.append(e)

            logger.info("Real-time capture of %s as %s", buffer, mime_type)
            recorder.start()
            try:
                await self._sink.play(buffer, on_block)
            except asyncio.CancelledError:
                logger.info("Capture cancelled, recording discarded")
                raise

            if failures:
                raise RecordingError(f"Recorder failed during capture: {failures[0]}") from failures[0]

            data = await asyncio.to_thread(recorder.stop)
            logger.info("Capture finished (%d bytes)", len(data))
            return EncodedAudio(data, mime_type)
        finally:
            self._in_flight = False
