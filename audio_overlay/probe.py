"""Media probing through ffprobe."""

import logging
import subprocess
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Protocol

from .errors import MediaUnreadable
from .models import MediaAsset
from .utils import run_cmd_capture

logger = logging.getLogger("audio_overlay.probe")

DEFAULT_CHANNELS = 2


class MediaProbe(Protocol):
    def duration(self, path: Path) -> Decimal:
        ...

    def audio_channel_count(self, path: Path) -> int:
        ...


class FFprobe:
    """Reads duration and channel count with the ``ffprobe`` executable."""

    def __init__(self, ffprobe_bin: str = "ffprobe"):
        self.ffprobe_bin = ffprobe_bin

    def _query(self, path: Path, *args: str) -> str:
        try:
            return run_cmd_capture([
                self.ffprobe_bin, "-v", "error",
                *args,
                "-of", "default=noprint_wrappers=1:nokey=1",
                str(path),
            ])
        except (subprocess.CalledProcessError, OSError) as e:
            logger.debug("ffprobe failed on %s: %s", path, e)
            return ""

    def duration(self, path: Path) -> Decimal:
        """Container duration in seconds, 0 when unknown."""
        out = self._query(path, "-show_entries", "format=duration")
        try:
            value = Decimal(out.splitlines()[0].strip()) if out else Decimal(0)
        except InvalidOperation:
            return Decimal(0)
        if not value.is_finite() or value < 0:
            return Decimal(0)
        return value

    def audio_channel_count(self, path: Path) -> int:
        """Channels of the first audio stream, 2 when unknown."""
        out = self._query(path, "-select_streams", "a:0", "-show_entries", "stream=channels")
        try:
            return int(out.splitlines()[0].strip()) if out else DEFAULT_CHANNELS
        except ValueError:
            return DEFAULT_CHANNELS


def probe_media(probe: MediaProbe, path: Path, *, channels: bool = True) -> MediaAsset:
    """Probe a file into a :class:`MediaAsset`.

    Raises :class:`MediaUnreadable` when the duration is zero or unknown, or
    when the probe explicitly reports no channels. With ``channels=False``
    only the duration is queried and the asset keeps the default count.
    """
    duration = probe.duration(path)
    if not duration or duration <= 0:
        raise MediaUnreadable(path, "duration")
    if not channels:
        return MediaAsset(path=Path(path), total_duration_seconds=Decimal(duration))
    count = probe.audio_channel_count(path)
    if count < 1:
        raise MediaUnreadable(path, "audio channel count")
    return MediaAsset(path=Path(path), total_duration_seconds=Decimal(duration), audio_channel_count=count)
