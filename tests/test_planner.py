from decimal import Decimal

import pytest

from audio_overlay.errors import AudioOffsetOutOfRange, StartIndexOutOfRange
from audio_overlay.models import RespectLength, Strategy
from audio_overlay.planner import describe_plan, plan_alignment

from conftest import asset, make_plan, make_request


class TestPreconditions:
    def test_start_index_past_video_end(self):
        with pytest.raises(StartIndexOutOfRange, match="200"):
            make_plan(video=60, audio=10, start="200")

    def test_start_index_equal_to_video_duration(self):
        with pytest.raises(StartIndexOutOfRange):
            make_plan(video=60, audio=10, start="01:00")

    def test_audio_offset_past_audio_end(self):
        with pytest.raises(AudioOffsetOutOfRange):
            make_plan(video=60, audio=10, offset="10")

    @pytest.mark.parametrize("respect", list(RespectLength))
    @pytest.mark.parametrize("loop", [False, True])
    def test_rejected_for_every_mode(self, respect, loop):
        with pytest.raises(StartIndexOutOfRange):
            make_plan(video=30, audio=10, start="31", respect=respect, loop=loop)
        with pytest.raises(AudioOffsetOutOfRange):
            make_plan(video=30, audio=10, offset="12", respect=respect, loop=loop)


class TestVideoRespect:
    def test_pad_when_audio_exactly_fills_remaining_video(self):
        plan = make_plan(video=120, audio=30, start="90")

        assert plan.strategy is Strategy.VIDEO_RESPECT_PAD
        assert plan.needed_duration_seconds == 30
        assert plan.pad_silence_seconds == 0
        assert plan.output_duration_seconds == 120
        assert not plan.needs_video_extend

    def test_pad_adds_silence_for_short_audio(self):
        plan = make_plan(video=120, audio=30, start="10")

        assert plan.pad_silence_seconds == 80
        assert plan.output_duration_seconds == 120

    def test_long_audio_is_cut_to_video_length(self):
        plan = make_plan(video=60, audio=600, start="30")

        assert plan.strategy is Strategy.VIDEO_RESPECT_PAD
        assert plan.output_duration_seconds == 60
        assert plan.pad_silence_seconds == 0

    def test_loop_fills_video(self):
        plan = make_plan(video=60, audio=10, loop=True)

        assert plan.strategy is Strategy.VIDEO_RESPECT_LOOP
        assert plan.needed_duration_seconds == 60
        assert plan.output_duration_seconds == 60
        assert plan.pad_silence_seconds == 0

    def test_loop_with_offset_and_start(self):
        plan = make_plan(video=60, audio=10, start="15", offset="2.5", loop=True)

        assert plan.strategy is Strategy.VIDEO_RESPECT_LOOP
        assert plan.needed_duration_seconds == 45
        assert plan.effective_audio_duration_seconds == Decimal("7.5")
        assert plan.has_audio_offset


class TestAudioRespect:
    def test_extend_when_audio_runs_past_video(self):
        plan = make_plan(video=30, audio=50, respect=RespectLength.AUDIO)

        assert plan.strategy is Strategy.AUDIO_RESPECT_EXTEND
        assert plan.audio_end_time_seconds == 50
        assert plan.needs_video_extend
        assert plan.video_extend_duration_seconds == 20
        assert plan.output_duration_seconds == 50

    def test_fit_when_audio_ends_inside_video(self):
        plan = make_plan(video=60, audio=30, start="10", respect=RespectLength.AUDIO)

        assert plan.strategy is Strategy.AUDIO_RESPECT_FIT
        assert not plan.needs_video_extend
        assert plan.video_extend_duration_seconds == 0
        assert plan.output_duration_seconds == 40

    def test_fit_when_audio_ends_exactly_at_video_end(self):
        plan = make_plan(video=60, audio=30, start="30", respect=RespectLength.AUDIO)

        assert plan.strategy is Strategy.AUDIO_RESPECT_FIT
        assert plan.output_duration_seconds == 60

    def test_offset_shortens_effective_audio(self):
        plan = make_plan(video=30, audio=50, offset="10", respect=RespectLength.AUDIO)

        assert plan.effective_audio_duration_seconds == 40
        assert plan.video_extend_duration_seconds == 10
        assert plan.output_duration_seconds == 40

    def test_loop_flag_is_ignored(self):
        plan = make_plan(video=30, audio=10, respect=RespectLength.AUDIO, loop=True)

        assert plan.strategy is Strategy.AUDIO_RESPECT_FIT
        assert plan.output_duration_seconds == 10


class TestPerChannelDelay:
    @pytest.mark.parametrize("channels", [1, 2, 6])
    def test_one_delay_per_channel(self, channels):
        plan = make_plan(video=120, audio=30, start="00:01.5", channels=channels)

        assert plan.per_channel_delay_ms == (1500,) * channels
        assert plan.channel_count == channels

    def test_channel_count_comes_from_audio_asset(self):
        plan = plan_alignment(make_request(start="2"), asset("v.mp4", 60, channels=2), asset("a.wav", 10, channels=1))

        assert plan.per_channel_delay_ms == (2000,)


def test_no_offset_flag():
    assert not make_plan(video=60, audio=10).has_audio_offset


def test_plan_is_immutable():
    plan = make_plan(video=60, audio=10)
    with pytest.raises(AttributeError):
        plan.output_duration_seconds = Decimal(1)


def test_describe_plan_mentions_strategy_and_padding():
    req = make_request(start="90")
    plan = plan_alignment(req, asset("video.mp4", 120), asset("audio.mp3", 30))
    lines = describe_plan(plan, req)

    assert "Strategy:        VIDEO_RESPECT_PAD" in lines
    assert "Silence padding: 0s" in lines
    assert "Start index:     90s (90000ms delay in video)" in lines
    assert "Loop audio:      no (pad silence)" in lines


def test_describe_plan_mentions_extension():
    req = make_request(respect=RespectLength.AUDIO)
    plan = plan_alignment(req, asset("video.mp4", 30), asset("audio.mp3", 50))

    assert "Video extend:    20s (last frame hold)" in describe_plan(plan, req)
