import logging
from decimal import Decimal
from pathlib import Path

import pytest

from audio_overlay.logging_config import ConsoleFormatter, StructuredFormatter
from audio_overlay.models import AlignmentRequest, MediaAsset, RespectLength
from audio_overlay.planner import plan_alignment
from audio_overlay.timeparse import parse_time


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop handlers installed by setup_logging() so streams do not leak between tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (ConsoleFormatter, StructuredFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)


def asset(name: str, duration, channels: int = 2) -> MediaAsset:
    return MediaAsset(path=Path(name), total_duration_seconds=Decimal(str(duration)), audio_channel_count=channels)


def make_request(start="0", offset="0", respect=RespectLength.VIDEO, loop=False, **kwargs) -> AlignmentRequest:
    return AlignmentRequest(
        start_index=parse_time(start),
        audio_offset=parse_time(offset),
        respect_length=respect,
        loop_audio=loop,
        **kwargs,
    )


def make_plan(video, audio, channels: int = 2, **kwargs):
    return plan_alignment(make_request(**kwargs), asset("video.mp4", video), asset("audio.mp3", audio, channels))
