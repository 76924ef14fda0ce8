"""
Tests for concatenation, insertion, overwrite paste and padding.
"""
import pytest
import numpy as np

from audiosplice.core.buffer import AudioBuffer
from audiosplice.core.compositor import (
    concatenate,
    insert,
    overwrite,
    pad,
    pad_workspace,
    paste_clipboard,
    paste_to_channel,
    splice_recording,
)
from audiosplice.core.config import AUDIO_CONFIG
from audiosplice.core.types import ChannelMode


@pytest.fixture
def short_mono() -> AudioBuffer:
    """3 frames at 10 Hz."""
    return AudioBuffer.from_array(np.array([0.7, 0.8, 0.9], dtype=np.float32), 10)


class TestConcatenate:

    def test_length_and_channels(self, ramp_buffer, short_mono, ctx):
        result = concatenate(ramp_buffer, short_mono, ctx)
        assert result.frame_count == 13
        assert result.channel_count == 2

    def test_mono_tail_is_duplicated(self, ramp_buffer, short_mono, ctx):
        result = concatenate(ramp_buffer, short_mono, ctx)
        assert np.array_equal(result.data[:10], ramp_buffer.data)
        assert np.array_equal(result.channel(0)[10:], short_mono.channel(0))
        assert np.array_equal(result.channel(1)[10:], short_mono.channel(0))

    def test_mono_head_is_duplicated(self, short_mono, ramp_buffer, ctx):
        result = concatenate(short_mono, ramp_buffer, ctx)
        assert np.array_equal(result.channel(1)[:3], short_mono.channel(0))
        assert np.array_equal(result.data[3:], ramp_buffer.data)

    def test_mono_plus_mono_stays_mono(self, short_mono, ctx):
        result = concatenate(short_mono, short_mono, ctx)
        assert result.channel_count == 1
        assert result.frame_count == 6

    def test_uses_first_sample_rate(self, ramp_buffer, ctx):
        other = AudioBuffer.from_array(np.zeros(4, dtype=np.float32), 44100)
        assert concatenate(ramp_buffer, other, ctx).sample_rate == ramp_buffer.sample_rate


class TestInsert:

    def test_ripple_insert(self, ramp_buffer, short_mono, ctx):
        result = insert(ramp_buffer, short_mono, 0.4, ctx)
        assert result.frame_count == 13
        assert np.array_equal(result.data[:4], ramp_buffer.data[:4])
        assert np.array_equal(result.channel(0)[4:7], short_mono.channel(0))
        assert np.array_equal(result.channel(1)[4:7], short_mono.channel(0))
        assert np.array_equal(result.data[7:], ramp_buffer.data[4:])

    def test_insert_clamps_past_end(self, ramp_buffer, short_mono, ctx):
        result = insert(ramp_buffer, short_mono, 50.0, ctx)
        assert np.array_equal(result.data[:10], ramp_buffer.data)
        assert np.array_equal(result.channel(0)[10:], short_mono.channel(0))

    def test_insert_clamps_negative(self, ramp_buffer, short_mono, ctx):
        result = insert(ramp_buffer, short_mono, -1.0, ctx)
        assert np.array_equal(result.channel(0)[:3], short_mono.channel(0))
        assert np.array_equal(result.data[3:], ramp_buffer.data)

    def test_mono_target_with_stereo_paste(self, short_mono, ramp_buffer, ctx):
        result = insert(short_mono, ramp_buffer, 0.1, ctx)
        assert result.channel_count == 2
        assert result.channel(1)[0] == short_mono.channel(0)[0]
        assert np.array_equal(result.data[1:11], ramp_buffer.data)
        assert np.array_equal(result.channel(1)[11:], short_mono.channel(0)[1:])


class TestPasteToChannel:

    def test_overwrites_target_channel_only(self, ramp_buffer, short_mono, ctx):
        result = paste_to_channel(ramp_buffer, short_mono, 0.2, ChannelMode.LEFT, ctx)
        assert result.frame_count == ramp_buffer.frame_count
        assert np.array_equal(result.channel(0)[2:5], short_mono.channel(0))
        assert np.array_equal(result.channel(0)[:2], ramp_buffer.channel(0)[:2])
        assert np.array_equal(result.channel(0)[5:], ramp_buffer.channel(0)[5:])
        assert np.array_equal(result.channel(1), ramp_buffer.channel(1))

    def test_overrun_grows_buffer(self, ramp_buffer, short_mono, ctx):
        result = paste_to_channel(ramp_buffer, short_mono, 0.8, ChannelMode.RIGHT, ctx)
        assert result.frame_count == 8 + short_mono.frame_count
        assert np.array_equal(result.channel(1)[8:], short_mono.channel(0))
        # Untouched channel keeps the original frames byte for byte
        assert result.channel(0)[:10].tobytes() == ramp_buffer.channel(0).tobytes()
        assert not result.channel(0)[10:].any()

    def test_mono_target_is_promoted(self, mono_ramp_buffer, short_mono, ctx):
        result = paste_to_channel(mono_ramp_buffer, short_mono, 0.0, ChannelMode.RIGHT, ctx)
        assert result.channel_count == 2
        assert np.array_equal(result.channel(0), mono_ramp_buffer.channel(0))
        assert np.array_equal(result.channel(1)[:3], short_mono.channel(0))

    def test_negative_time_clamps_to_zero(self, ramp_buffer, short_mono, ctx):
        result = paste_to_channel(ramp_buffer, short_mono, -2.0, ChannelMode.LEFT, ctx)
        assert np.array_equal(result.channel(0)[:3], short_mono.channel(0))

    def test_uses_first_paste_channel(self, ramp_buffer, ctx):
        paste = AudioBuffer.from_channels([np.full(2, 0.3), np.full(2, -0.3)], 10)
        result = paste_to_channel(ramp_buffer, paste, 0.0, ChannelMode.RIGHT, ctx)
        assert np.allclose(result.channel(1)[:2], 0.3)

    def test_stereo_mode_rejected(self, ramp_buffer, short_mono, ctx):
        with pytest.raises(ValueError):
            paste_to_channel(ramp_buffer, short_mono, 0.0, ChannelMode.STEREO, ctx)


class TestOverwrite:

    def test_mono_source_on_all_channels(self, ramp_buffer, short_mono, ctx):
        result = overwrite(ramp_buffer, short_mono, 0.1, ctx)
        assert result.frame_count == ramp_buffer.frame_count
        for ch in range(2):
            assert np.array_equal(result.channel(ch)[1:4], short_mono.channel(0))
            assert np.array_equal(result.channel(ch)[4:], ramp_buffer.channel(ch)[4:])

    def test_grows_when_overrunning(self, ramp_buffer, short_mono, ctx):
        result = overwrite(ramp_buffer, short_mono, 0.9, ctx)
        assert result.frame_count == 12

    def test_keeps_target_channel_count(self, mono_ramp_buffer, ramp_buffer, ctx):
        result = overwrite(mono_ramp_buffer, ramp_buffer, 0.0, ctx)
        assert result.channel_count == 1
        assert np.array_equal(result.channel(0), ramp_buffer.channel(0))


class TestSpliceRecording:

    def test_stereo_overwrites_everything(self, ramp_buffer, short_mono, ctx):
        result = splice_recording(ramp_buffer, short_mono, 0.0, ChannelMode.STEREO, ctx)
        assert np.array_equal(result.channel(1)[:3], short_mono.channel(0))
        assert np.array_equal(result.channel(0)[:3], short_mono.channel(0))

    def test_channel_mode_pastes_one_side(self, ramp_buffer, short_mono, ctx):
        result = splice_recording(ramp_buffer, short_mono, 0.0, ChannelMode.LEFT, ctx)
        assert np.array_equal(result.channel(0)[:3], short_mono.channel(0))
        assert np.array_equal(result.channel(1), ramp_buffer.channel(1))


class TestPasteClipboard:

    def test_stereo_inserts_then_pads(self, ramp_buffer, short_mono, ctx):
        result = paste_clipboard(ramp_buffer, short_mono, 0.2, ChannelMode.STEREO, ctx)
        margin = int(AUDIO_CONFIG.workspace_padding_seconds * 10)
        assert result.frame_count == 13 + margin
        assert np.array_equal(result.data[:13], insert(ramp_buffer, short_mono, 0.2, ctx).data)
        assert np.array_equal(result.channel(0)[2:5], short_mono.channel(0))
        assert np.array_equal(result.channel(0)[5:13], ramp_buffer.channel(0)[2:])
        assert not result.data[13:].any()

    def test_channel_mode_overwrites_then_pads(self, ramp_buffer, short_mono, ctx):
        result = paste_clipboard(ramp_buffer, short_mono, 0.2, ChannelMode.RIGHT, ctx)
        margin = int(AUDIO_CONFIG.workspace_padding_seconds * 10)
        assert result.frame_count == 10 + margin
        assert np.array_equal(result.channel(1)[2:5], short_mono.channel(0))
        assert np.array_equal(result.channel(0)[:10], ramp_buffer.channel(0))
        assert np.array_equal(result.channel(1)[5:10], ramp_buffer.channel(1)[5:])


class TestPad:

    def test_appends_silence(self, ramp_buffer, ctx):
        result = pad(ramp_buffer, 0.55, ctx)
        assert result.frame_count == 15
        assert np.array_equal(result.data[:10], ramp_buffer.data)
        assert not result.data[10:].any()

    def test_negative_pad_is_noop(self, ramp_buffer, ctx):
        assert pad(ramp_buffer, -1.0, ctx).frame_count == ramp_buffer.frame_count

    def test_workspace_padding(self, ramp_buffer, ctx):
        result = pad_workspace(ramp_buffer, ctx)
        expected = 10 + int(AUDIO_CONFIG.workspace_padding_seconds * 10)
        assert result.frame_count == expected
