"""
Pytest configuration and fixtures for audiosplice tests.
"""
import pytest
import numpy as np

from audiosplice.core.buffer import AudioBuffer
from audiosplice.core.context import AudioContext

SAMPLE_RATE = 8000


@pytest.fixture
def ctx() -> AudioContext:
    """Audio context at the test sample rate."""
    return AudioContext(sample_rate=SAMPLE_RATE)


@pytest.fixture
def sample_mono_audio() -> np.ndarray:
    """Generate 1 second of mono sine wave audio."""
    t = np.linspace(0, 1, SAMPLE_RATE, dtype=np.float32)
    return (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)


@pytest.fixture
def sample_stereo_audio() -> np.ndarray:
    """Generate 1 second of stereo sine wave audio."""
    t = np.linspace(0, 1, SAMPLE_RATE, dtype=np.float32)
    left = 0.5 * np.sin(2 * np.pi * 440 * t)
    right = 0.5 * np.sin(2 * np.pi * 880 * t)
    return np.column_stack((left, right)).astype(np.float32)


@pytest.fixture
def mono_buffer(sample_mono_audio) -> AudioBuffer:
    return AudioBuffer.from_array(sample_mono_audio, SAMPLE_RATE)


@pytest.fixture
def stereo_buffer(sample_stereo_audio) -> AudioBuffer:
    return AudioBuffer.from_array(sample_stereo_audio, SAMPLE_RATE)


@pytest.fixture
def ramp_buffer() -> AudioBuffer:
    """10 frames at 10 Hz: left 0..9, right -0..-9 (scaled by 0.01)."""
    left = np.arange(10, dtype=np.float32) * 0.01
    return AudioBuffer.from_channels([left, -left], 10)


@pytest.fixture
def mono_ramp_buffer() -> AudioBuffer:
    """10 frames at 10 Hz, mono, values 0.01..0.10."""
    return AudioBuffer.from_array(np.arange(1, 11, dtype=np.float32) * 0.01, 10)
