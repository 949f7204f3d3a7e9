"""Data models for Audio Overlay."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path

MS_PER_SECOND = Decimal(1000)


class RespectLength(str, Enum):
    """Which input's natural length the output must preserve."""

    VIDEO = "video"
    AUDIO = "audio"


class Strategy(str, Enum):
    """How the audio is merged into the video timeline."""

    AUDIO_RESPECT_EXTEND = "audio_respect_extend"
    AUDIO_RESPECT_FIT = "audio_respect_fit"
    VIDEO_RESPECT_LOOP = "video_respect_loop"
    VIDEO_RESPECT_PAD = "video_respect_pad"

    @property
    def respects_audio(self) -> bool:
        return self in (Strategy.AUDIO_RESPECT_EXTEND, Strategy.AUDIO_RESPECT_FIT)


@dataclass(frozen=True)
class TimeSpec:
    """An elapsed duration in seconds."""

    seconds: Decimal

    @property
    def milliseconds(self) -> int:
        # truncates sub-millisecond precision
        return int(self.seconds * MS_PER_SECOND)


@dataclass(frozen=True)
class MediaAsset:
    """A probed input file."""

    path: Path
    total_duration_seconds: Decimal
    audio_channel_count: int = 2


@dataclass(frozen=True)
class AlignmentRequest:
    """What the user asked for."""

    start_index: TimeSpec
    audio_offset: TimeSpec
    respect_length: RespectLength = RespectLength.VIDEO
    loop_audio: bool = False
    audio_codec: str = "aac"
    audio_bitrate: str = "192k"


@dataclass(frozen=True)
class AlignmentPlan:
    """The computed merge decision for one request and two assets."""

    strategy: Strategy
    output_duration_seconds: Decimal
    per_channel_delay_ms: tuple[int, ...]
    start_index_seconds: Decimal
    audio_offset_seconds: Decimal
    video_duration_seconds: Decimal
    audio_duration_seconds: Decimal
    effective_audio_duration_seconds: Decimal
    needed_duration_seconds: Decimal
    audio_end_time_seconds: Decimal
    needs_video_extend: bool = False
    video_extend_duration_seconds: Decimal = Decimal(0)

    @property
    def has_audio_offset(self) -> bool:
        return self.audio_offset_seconds > 0

    @property
    def channel_count(self) -> int:
        return len(self.per_channel_delay_ms)

    @property
    def pad_silence_seconds(self) -> Decimal:
        """Trailing silence added under VIDEO_RESPECT_PAD (zero for other strategies)."""
        if self.strategy is not Strategy.VIDEO_RESPECT_PAD:
            return Decimal(0)
        return max(Decimal(0), self.needed_duration_seconds - self.effective_audio_duration_seconds)


@dataclass(frozen=True)
class FilterStage:
    """One filter invocation, e.g. ``adelay=1000|1000``.

    ``params`` is an ordered sequence of ``(key, value)`` pairs; a ``None`` key
    renders the value positionally.
    """

    name: str
    params: tuple[tuple[str | None, str], ...] = ()

    def render(self) -> str:
        if not self.params:
            return self.name
        args = ":".join(value if key is None else f"{key}={value}" for key, value in self.params)
        return f"{self.name}={args}"


@dataclass(frozen=True)
class FilterChain:
    """A linear run of stages from one input label to one output label."""

    input_label: str
    output_label: str
    stages: tuple[FilterStage, ...]

    def render(self) -> str:
        body = ",".join(stage.render() for stage in self.stages)
        return f"[{self.input_label}]{body}[{self.output_label}]"


@dataclass(frozen=True)
class FilterGraph:
    """Audio chain plus an optional video chain."""

    audio: FilterChain
    video: FilterChain | None = None
    chains: tuple[FilterChain, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        chains = (self.video, self.audio) if self.video else (self.audio,)
        object.__setattr__(self, "chains", chains)

    @property
    def audio_label(self) -> str:
        return self.audio.output_label

    @property
    def video_label(self) -> str | None:
        return self.video.output_label if self.video else None

    def render(self) -> str:
        """Render as an ffmpeg ``-filter_complex`` argument."""
        return ";".join(chain.render() for chain in self.chains)


@dataclass
class RunResult:
    """Result of an overlay run."""

    command: list[str]
    plan: AlignmentPlan
    output_path: Path
    executed: bool
    output_size_bytes: int = 0
