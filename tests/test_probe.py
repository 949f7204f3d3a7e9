import subprocess
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from audio_overlay.errors import MediaUnreadable
from audio_overlay.probe import DEFAULT_CHANNELS, FFprobe, probe_media


class FakeProbe:
    def __init__(self, duration, channels=2):
        self._duration = Decimal(str(duration))
        self._channels = channels

    def duration(self, path):
        return self._duration

    def audio_channel_count(self, path):
        return self._channels


class TestFFprobe:
    def test_duration(self):
        with patch("audio_overlay.probe.run_cmd_capture", return_value="120.500000") as run:
            assert FFprobe().duration(Path("v.mp4")) == Decimal("120.5")

        cmd = run.call_args.args[0]
        assert cmd[0] == "ffprobe"
        assert "format=duration" in cmd
        assert cmd[-1] == "v.mp4"

    def test_custom_binary(self):
        with patch("audio_overlay.probe.run_cmd_capture", return_value="1") as run:
            FFprobe("/opt/ffmpeg/bin/ffprobe").duration(Path("v.mp4"))

        assert run.call_args.args[0][0] == "/opt/ffmpeg/bin/ffprobe"

    @pytest.mark.parametrize("output", ["", "N/A", "nan", "-3"])
    def test_unknown_duration_is_zero(self, output):
        with patch("audio_overlay.probe.run_cmd_capture", return_value=output):
            assert FFprobe().duration(Path("v.mp4")) == 0

    def test_failed_probe_is_zero(self):
        error = subprocess.CalledProcessError(1, ["ffprobe"])
        with patch("audio_overlay.probe.run_cmd_capture", side_effect=error):
            assert FFprobe().duration(Path("broken.mp4")) == 0

    def test_channels(self):
        with patch("audio_overlay.probe.run_cmd_capture", return_value="6") as run:
            assert FFprobe().audio_channel_count(Path("a.wav")) == 6

        cmd = run.call_args.args[0]
        assert cmd[cmd.index("-select_streams") + 1] == "a:0"
        assert "stream=channels" in cmd

    @pytest.mark.parametrize("output", ["", "N/A"])
    def test_unknown_channels_default_to_stereo(self, output):
        with patch("audio_overlay.probe.run_cmd_capture", return_value=output):
            assert FFprobe().audio_channel_count(Path("a.wav")) == DEFAULT_CHANNELS == 2

    def test_failed_channel_probe_defaults_to_stereo(self):
        with patch("audio_overlay.probe.run_cmd_capture", side_effect=OSError("no ffprobe")):
            assert FFprobe().audio_channel_count(Path("a.wav")) == 2


class TestProbeMedia:
    def test_builds_asset(self):
        media = probe_media(FakeProbe("42.5", channels=1), Path("a.wav"))

        assert media.path == Path("a.wav")
        assert media.total_duration_seconds == Decimal("42.5")
        assert media.audio_channel_count == 1

    def test_zero_duration_is_unreadable(self):
        with pytest.raises(MediaUnreadable, match="duration of v.mp4"):
            probe_media(FakeProbe(0), Path("v.mp4"))

    def test_zero_channels_is_unreadable(self):
        with pytest.raises(MediaUnreadable, match="channel count"):
            probe_media(FakeProbe(10, channels=0), Path("a.wav"))

    def test_duration_only_skips_channel_query(self):
        probe = FakeProbe(60, channels=0)

        media = probe_media(probe, Path("v.mp4"), channels=False)

        assert media.total_duration_seconds == 60
        assert media.audio_channel_count == DEFAULT_CHANNELS
