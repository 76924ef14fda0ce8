"""
audiosplice Core Module

This module contains the editing engine:
- AudioBuffer / AudioContext: sample container and allocation/decode handle
- Region editing: cut_region, extract_region
- Composition: concatenate, insert, paste_to_channel, overwrite, pad
- Effects: apply_effects (volume + constant-power pan)
- Mixing: mix_all
- Encoding: encode, encode_wav, encode_mp3, export_audio
"""
from .buffer import AudioBuffer
from .context import AudioContext
from .track import Track
from .history import EditHistory
from .channels import ensure_stereo
from .region import region_frames, cut_region, extract_region
from .compositor import (
    concatenate,
    insert,
    paste_to_channel,
    overwrite,
    splice_recording,
    paste_clipboard,
    pad,
    pad_workspace,
)
from .effects import apply_effects, pan_gains
from .mixer import mix_all
from .encoder import EncodedAudio, encode, encode_wav, encode_mp3, float_to_pcm16
from .capture import (
    RealtimeCapture,
    SoundDeviceSink,
    PydubRecorder,
    SoundfileRecorder,
    select_mime_type,
    select_recorder,
)
from .export import export_audio
from .analysis import AnalysisType, AnalysisRequest, build_analysis_request
from .types import ChannelMode, ExportFormat
from .errors import (
    AudioEditError,
    DecodeError,
    FormatUnavailableError,
    RecordingError,
    CaptureInProgressError,
)
from .config import (
    AUDIO_CONFIG,
    EXPORT_CONFIG,
    CAPTURE_CONFIG,
    UNDO_CONFIG,
)

__all__ = [
    # Data types
    'AudioBuffer',
    'AudioContext',
    'Track',
    'EditHistory',
    'ChannelMode',
    'ExportFormat',
    'EncodedAudio',
    # Operations
    'ensure_stereo',
    'region_frames',
    'cut_region',
    'extract_region',
    'concatenate',
    'insert',
    'paste_to_channel',
    'overwrite',
    'splice_recording',
    'paste_clipboard',
    'pad',
    'pad_workspace',
    'apply_effects',
    'pan_gains',
    'mix_all',
    'encode',
    'encode_wav',
    'encode_mp3',
    'float_to_pcm16',
    'export_audio',
    # Capture
    'RealtimeCapture',
    'SoundDeviceSink',
    'PydubRecorder',
    'SoundfileRecorder',
    'select_mime_type',
    'select_recorder',
    # Analysis
    'AnalysisType',
    'AnalysisRequest',
    'build_analysis_request',
    # Errors
    'AudioEditError',
    'DecodeError',
    'FormatUnavailableError',
    'RecordingError',
    'CaptureInProgressError',
    # Config
    'AUDIO_CONFIG',
    'EXPORT_CONFIG',
    'CAPTURE_CONFIG',
    'UNDO_CONFIG',
]
