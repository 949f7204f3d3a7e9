"""Alignment planning: decide how the audio lands on the video timeline."""

from decimal import Decimal

from .errors import AudioOffsetOutOfRange, StartIndexOutOfRange
from .models import AlignmentPlan, AlignmentRequest, MediaAsset, RespectLength, Strategy
from .utils import format_seconds


def plan_alignment(request: AlignmentRequest, video: MediaAsset, audio: MediaAsset) -> AlignmentPlan:
    """Compute the :class:`AlignmentPlan` for ``request``.

    ``video`` supplies the timeline length, ``audio`` its length and channel
    layout. Raises :class:`StartIndexOutOfRange` or
    :class:`AudioOffsetOutOfRange` when the request does not fit the media.
    """
    start = request.start_index.seconds
    offset = request.audio_offset.seconds
    video_duration = Decimal(video.total_duration_seconds)
    audio_duration = Decimal(audio.total_duration_seconds)

    if start >= video_duration:
        raise StartIndexOutOfRange(format_seconds(start), format_seconds(video_duration))
    if offset >= audio_duration:
        raise AudioOffsetOutOfRange(format_seconds(offset), format_seconds(audio_duration))

    effective_audio = audio_duration - offset
    needed = video_duration - start
    audio_end = start + effective_audio

    extend = Decimal(0)
    if request.respect_length is RespectLength.AUDIO:
        output_duration = audio_end
        if audio_end > video_duration:
            strategy = Strategy.AUDIO_RESPECT_EXTEND
            extend = audio_end - video_duration
        else:
            strategy = Strategy.AUDIO_RESPECT_FIT
    else:
        output_duration = video_duration
        strategy = Strategy.VIDEO_RESPECT_LOOP if request.loop_audio else Strategy.VIDEO_RESPECT_PAD

    delay_ms = request.start_index.milliseconds

    return AlignmentPlan(
        strategy=strategy,
        output_duration_seconds=output_duration,
        per_channel_delay_ms=(delay_ms,) * audio.audio_channel_count,
        start_index_seconds=start,
        audio_offset_seconds=offset,
        video_duration_seconds=video_duration,
        audio_duration_seconds=audio_duration,
        effective_audio_duration_seconds=effective_audio,
        needed_duration_seconds=needed,
        audio_end_time_seconds=audio_end,
        needs_video_extend=strategy is Strategy.AUDIO_RESPECT_EXTEND,
        video_extend_duration_seconds=extend,
    )


def describe_plan(plan: AlignmentPlan, request: AlignmentRequest) -> list[str]:
    """Human-readable summary lines for verbose and dry-run output."""
    lines = [
        f"Video duration:  {format_seconds(plan.video_duration_seconds)}s",
        f"Audio duration:  {format_seconds(plan.audio_duration_seconds)}s (total)",
        f"Audio offset:    {format_seconds(plan.audio_offset_seconds)}s",
        f"Effective audio: {format_seconds(plan.effective_audio_duration_seconds)}s (after offset)",
        f"Start index:     {format_seconds(plan.start_index_seconds)}s ({request.start_index.milliseconds}ms delay in video)",
        f"Needed duration: {format_seconds(plan.needed_duration_seconds)}s (video remaining after start)",
        f"Audio channels:  {plan.channel_count}",
        f"Respect length:  {request.respect_length.value}",
    ]
    if request.respect_length is RespectLength.VIDEO:
        lines.append(f"Loop audio:      {'yes' if request.loop_audio else 'no (pad silence)'}")
    if plan.needs_video_extend:
        lines.append(f"Video extend:    {format_seconds(plan.video_extend_duration_seconds)}s (last frame hold)")
    if plan.strategy is Strategy.VIDEO_RESPECT_PAD:
        lines.append(f"Silence padding: {format_seconds(plan.pad_silence_seconds)}s")
    lines.append(f"Strategy:        {plan.strategy.name}")
    lines.append(f"Output duration: {format_seconds(plan.output_duration_seconds)}s")
    return lines
