"""Filter graph construction for each alignment strategy.

Inputs are numbered the way the emitted command orders them: ``0`` is the
video file, ``1`` the audio file.
"""

from .models import AlignmentPlan, FilterChain, FilterGraph, FilterStage, Strategy
from .utils import format_seconds

VIDEO_IN = "0:v"
AUDIO_IN = "1:a"
VIDEO_OUT = "vout"
AUDIO_OUT = "aout"

RESET_PTS = FilterStage("asetpts", ((None, "PTS-STARTPTS"),))


def _skip_offset(plan: AlignmentPlan) -> list[FilterStage]:
    if not plan.has_audio_offset:
        return []
    return [
        FilterStage("atrim", (("start", format_seconds(plan.audio_offset_seconds)),)),
        RESET_PTS,
    ]


def _delay(plan: AlignmentPlan) -> FilterStage:
    # adelay takes one value per channel, separated by "|"
    return FilterStage("adelay", ((None, "|".join(str(ms) for ms in plan.per_channel_delay_ms)),))


def _audio_stages(plan: AlignmentPlan) -> list[FilterStage]:
    strategy = plan.strategy
    if strategy in (Strategy.AUDIO_RESPECT_EXTEND, Strategy.AUDIO_RESPECT_FIT):
        return _skip_offset(plan) + [_delay(plan)]

    if strategy is Strategy.VIDEO_RESPECT_LOOP:
        # the offset is an input seek here; the input is already looped
        return [
            FilterStage("atrim", (("duration", format_seconds(plan.needed_duration_seconds)),)),
            RESET_PTS,
            _delay(plan),
        ]

    if strategy is Strategy.VIDEO_RESPECT_PAD:
        total = format_seconds(plan.video_duration_seconds)
        return _skip_offset(plan) + [
            _delay(plan),
            FilterStage("apad", (("whole_dur", total),)),
            FilterStage("atrim", (("duration", total),)),
        ]

    raise ValueError(f"Unhandled strategy: {strategy}")


def _video_chain(plan: AlignmentPlan) -> FilterChain | None:
    if plan.strategy is not Strategy.AUDIO_RESPECT_EXTEND:
        return None
    return FilterChain(
        input_label=VIDEO_IN,
        output_label=VIDEO_OUT,
        stages=(
            FilterStage("tpad", (
                ("stop_mode", "clone"),
                ("stop_duration", format_seconds(plan.video_extend_duration_seconds)),
            )),
        ),
    )


def build_filter_graph(plan: AlignmentPlan) -> FilterGraph:
    """Build the :class:`FilterGraph` that realises ``plan``."""
    audio = FilterChain(input_label=AUDIO_IN, output_label=AUDIO_OUT, stages=tuple(_audio_stages(plan)))
    return FilterGraph(audio=audio, video=_video_chain(plan))
