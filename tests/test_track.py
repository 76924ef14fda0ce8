"""
Tests for Track.
"""
import numpy as np

from audiosplice.core.track import Track


class TestTrack:
    """Tests for Track functionality."""

    def test_default_initialization(self, stereo_buffer):
        track = Track(stereo_buffer)
        assert track.name == "Track"
        assert not track.muted
        assert track.buffer is stereo_buffer

    def test_ids_are_unique(self, stereo_buffer):
        assert Track(stereo_buffer).id != Track(stereo_buffer).id

    def test_duration(self, stereo_buffer):
        track = Track(stereo_buffer)
        assert track.duration_samples == 8000
        assert np.isclose(track.duration_seconds, 1.0)

    def test_with_buffer_keeps_identity(self, stereo_buffer, mono_buffer):
        track = Track(stereo_buffer, muted=True, name="Voice")
        replaced = track.with_buffer(mono_buffer)
        assert replaced.id == track.id
        assert replaced.muted and replaced.name == "Voice"
        assert replaced.buffer is mono_buffer
        assert track.buffer is stereo_buffer

    def test_repr(self, stereo_buffer):
        rep = repr(Track(stereo_buffer, name="Test Track", muted=True))
        assert "Test Track" in rep
        assert "1.00s" in rep
        assert "muted" in rep
