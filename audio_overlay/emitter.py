"""ffmpeg command assembly, dry-run rendering and execution."""

import shlex
from pathlib import Path

from .config import EncodeConfig
from .errors import EngineInvocationFailed, OutputNotProduced
from .models import AlignmentPlan, AlignmentRequest, FilterGraph, Strategy
from .utils import format_seconds, run_cmd


def _audio_input_args(plan: AlignmentPlan, audio_path: Path) -> list[str]:
    if plan.strategy is Strategy.VIDEO_RESPECT_LOOP:
        # -ss must precede -stream_loop so the seek happens once, not per repetition
        seek = ["-ss", format_seconds(plan.audio_offset_seconds)] if plan.has_audio_offset else []
        return seek + ["-stream_loop", "-1", "-i", str(audio_path)]
    return ["-i", str(audio_path)]


def _video_codec_args(plan: AlignmentPlan, encode: EncodeConfig) -> list[str]:
    if plan.strategy is Strategy.AUDIO_RESPECT_EXTEND:
        return ["-c:v", encode.video_codec, "-preset", encode.video_preset, "-crf", str(encode.video_crf)]
    return ["-c:v", "copy"]


def _duration_args(plan: AlignmentPlan) -> list[str]:
    if plan.strategy.respects_audio:
        return ["-t", format_seconds(plan.output_duration_seconds)]
    return ["-shortest"]


def build_command(
    plan: AlignmentPlan,
    graph: FilterGraph,
    request: AlignmentRequest,
    *,
    video_path: Path,
    audio_path: Path,
    output_path: Path,
    encode: EncodeConfig | None = None,
    ffmpeg_bin: str = "ffmpeg",
    verbose: bool = False,
) -> list[str]:
    """Assemble the full ffmpeg argument list for ``plan``.

    The same list is used for dry-run display and for execution. In quiet
    mode ``-loglevel warning`` is added before the output path.
    """
    encode = encode or EncodeConfig()
    video_map = f"[{graph.video_label}]" if graph.video_label else "0:v:0"

    cmd = [ffmpeg_bin, "-y", "-i", str(video_path)]
    cmd += _audio_input_args(plan, audio_path)
    cmd += ["-filter_complex", graph.render()]
    cmd += ["-map", video_map, "-map", f"[{graph.audio_label}]"]
    cmd += _video_codec_args(plan, encode)
    cmd += ["-c:a", request.audio_codec, "-b:a", request.audio_bitrate]
    cmd += _duration_args(plan)
    if not verbose:
        cmd += ["-loglevel", "warning"]
    cmd.append(str(output_path))
    return cmd


def render_command(cmd: list[str]) -> str:
    """Pretty-print a command: one option per continuation line."""
    out = cmd[0]
    for arg in cmd[1:]:
        if arg.startswith("-") and arg != "-1":
            out += f" \\\n  {arg}"
        else:
            out += f" {shlex.quote(arg)}"
    return out


def execute_command(cmd: list[str], output_path: Path) -> int:
    """Run the engine and return the size of the produced file in bytes.

    Raises :class:`EngineInvocationFailed` on a non-zero exit status and
    :class:`OutputNotProduced` when ffmpeg succeeds without writing
    ``output_path``.
    """
    result = run_cmd(cmd, check=False)
    if result.returncode != 0:
        raise EngineInvocationFailed(result.returncode)
    output_path = Path(output_path)
    if not output_path.is_file():
        raise OutputNotProduced(output_path)
    return output_path.stat().st_size
