"""
Payloads for the external audio-analysis service.

The service itself (and its network client) lives outside this package;
this module turns a selected region into the request it expects.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .buffer import AudioBuffer
from .context import AudioContext
from .encoder import EncodedAudio, encode_wav
from .region import extract_region
from .types import ChannelMode, ExportFormat


class AnalysisType(Enum):
    """Kinds of analysis the service can run."""
    TRANSCRIPTION = "transcription"
    SUMMARY = "summary"
    SENTIMENT = "sentiment"
    KEYWORDS = "keywords"

    @property
    def prompt(self) -> str:
        return _PROMPTS[self]


_PROMPTS = {
    AnalysisType.TRANSCRIPTION: "Transcribe this audio to text accurately. Return only the transcription.",
    AnalysisType.SUMMARY: "Give a concise but detailed summary of this audio recording.",
    AnalysisType.SENTIMENT: "Analyze the sentiment and emotional tone of this audio.",
    AnalysisType.KEYWORDS: "Extract the main keywords and topics discussed in this audio.",
}


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    analysis_type: AnalysisType
    prompt: str
    mime_type: str
    data_base64: str


def build_analysis_request(
    buffer: AudioBuffer,
    start_sec: float,
    end_sec: float,
    mode: ChannelMode,
    analysis_type: AnalysisType,
    ctx: AudioContext
) -> AnalysisRequest:
    """Extract the region, encode it as WAV and wrap it for the service."""
    region = extract_region(buffer, start_sec, end_sec, mode, ctx)
    blob = EncodedAudio(encode_wav(region), ExportFormat.WAV.mime_type)
    return AnalysisRequest(
        analysis_type=analysis_type,
        prompt=analysis_type.prompt,
        mime_type=blob.mime_type,
        data_base64=blob.to_base64(),
    )
