#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Overlay or replace the audio track of a video starting at a time index.

The video stream is copied without re-encoding unless it has to be extended
with its last frame to cover longer audio.

Examples:
  # Insert audio starting at 2:34 in the video (respect video length)
  audio-overlay -ia music.mp3 -iv video.mp4 -index 02:34.00 -ov output.mp4

  # Use audio starting from 1:30 in the source file, insert at video start
  audio-overlay -ia music.mp3 -iv video.mp4 -ao 01:30.00 -ov output.mp4

  # Respect audio length: extend video with last frame if audio is longer
  audio-overlay -ia long_audio.mp3 -iv short_video.mp4 -rl audio -ov output.mp4

  # Skip first 30s of audio, insert at 1:00 in video, loop to fill
  audio-overlay -ia music.mp3 -iv video.mp4 -ao 00:30 -index 01:00 -ov output.mp4 -la

  # Dry run to preview the ffmpeg command
  audio-overlay -ia audio.mp3 -iv video.mp4 -index 00:30 -ov out.mp4 -n
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, TextIO

from audio_overlay import __version__
from audio_overlay.config import Config
from audio_overlay.emitter import build_command, execute_command, render_command
from audio_overlay.errors import InvalidInput, MissingDependency, OverlayError
from audio_overlay.filtergraph import build_filter_graph
from audio_overlay.logging_config import ExecutionLogger, create_execution_logger, setup_logging
from audio_overlay.models import AlignmentRequest, RespectLength, RunResult
from audio_overlay.planner import describe_plan, plan_alignment
from audio_overlay.probe import FFprobe, MediaProbe, probe_media
from audio_overlay.timeparse import parse_time
from audio_overlay.utils import human_size, which

PROG = "audio-overlay"

_RESPECT_ALIASES = {
    "v": RespectLength.VIDEO,
    "video": RespectLength.VIDEO,
    "a": RespectLength.AUDIO,
    "audio": RespectLength.AUDIO,
}


def respect_length(value: str) -> RespectLength:
    try:
        return _RESPECT_ALIASES[value.strip().lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"invalid value {value!r} (use 'video' or 'audio')"
        ) from None


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    req = parser.add_argument_group("required arguments")
    req.add_argument("-ia", "--input-audio", metavar="FILE", help="Input audio file (.mp3, .wav, .flac, .m4a, ...)")
    req.add_argument("-iv", "--input-video", metavar="FILE", help="Input video file (.mp4, .mkv, .mov, ...)")
    req.add_argument("-ov", "--output-video", metavar="FILE", help="Output video file")

    tg = parser.add_argument_group("time index")
    tg.add_argument(
        "-index", "--start-index", default="00:00.00", metavar="TIME",
        help="Start time for audio insertion in the video (default: 00:00.00). "
             "Formats: HH:MM:SS.ms, MM:SS.ms, SS.ms or seconds",
    )
    tg.add_argument(
        "-ao", "--audio-offset", default="00:00.00", metavar="TIME",
        help="Start offset within the source audio (default: 00:00.00)",
    )

    lg = parser.add_argument_group("output length")
    lg.add_argument(
        "-rl", "--respect-length", type=respect_length, default=RespectLength.VIDEO, metavar="{v,a}",
        help="video (v): keep video length, pad/loop/trim audio; "
             "audio (a): keep full audio, extend video with its last frame if needed (default: video)",
    )
    lg.add_argument(
        "-la", "--loop-audio", action="store_true",
        help="Loop audio to fill the remaining video instead of padding with silence "
             "(only with --respect-length=video)",
    )

    eg = parser.add_argument_group("encoding")
    eg.add_argument("-ac", "--audio-codec", default=config.audio_codec, help=f"Audio codec (default: {config.audio_codec})")
    eg.add_argument("-ab", "--audio-bitrate", default=config.audio_bitrate, help=f"Audio bitrate (default: {config.audio_bitrate})")

    parser.add_argument("-n", "--dry-run", action="store_true", help="Show the ffmpeg command without executing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    parser.add_argument("--version", action="version", version=f"{PROG} v{__version__}")
    return parser


def validate_inputs(args: argparse.Namespace) -> None:
    if not args.input_audio:
        raise InvalidInput("Input audio not specified (-ia)")
    if not args.input_video:
        raise InvalidInput("Input video not specified (-iv)")
    if not args.output_video:
        raise InvalidInput("Output video not specified (-ov)")

    if not Path(args.input_audio).is_file():
        raise InvalidInput(f"Audio file not found: {args.input_audio}")
    if not Path(args.input_video).is_file():
        raise InvalidInput(f"Video file not found: {args.input_video}")

    out_dir = Path(args.output_video).parent
    if not out_dir.is_dir():
        raise InvalidInput(f"Output directory not found: {out_dir}")


def check_dependencies(config: Config) -> None:
    tools = config.get_tool_config()
    missing = [cmd for cmd in (tools.ffmpeg, tools.ffprobe) if not which(cmd)]
    if missing:
        raise MissingDependency(f"Missing dependencies: {' '.join(missing)}")


def run(
    args: argparse.Namespace,
    config: Config,
    log: ExecutionLogger,
    *,
    probe: Optional[MediaProbe] = None,
    out: Optional[TextIO] = None,
) -> RunResult:
    """Probe, plan and either print or execute the overlay command."""
    out = out or sys.stdout
    validate_inputs(args)

    request = AlignmentRequest(
        start_index=parse_time(args.start_index),
        audio_offset=parse_time(args.audio_offset),
        respect_length=args.respect_length,
        loop_audio=args.loop_audio,
        audio_codec=args.audio_codec,
        audio_bitrate=args.audio_bitrate,
    )
    if request.loop_audio and request.respect_length is RespectLength.AUDIO:
        log.warning("--loop-audio has no effect with --respect-length=audio")

    check_dependencies(config)
    probe = probe or FFprobe(config.get_tool_config().ffprobe)

    video = probe_media(probe, Path(args.input_video), channels=False)
    audio = probe_media(probe, Path(args.input_audio))

    plan = plan_alignment(request, video, audio)
    if args.verbose or args.dry_run:
        for line in describe_plan(plan, request):
            log.info(line)

    graph = build_filter_graph(plan)
    cmd = build_command(
        plan, graph, request,
        video_path=video.path,
        audio_path=audio.path,
        output_path=Path(args.output_video),
        encode=config.get_encode_config(),
        ffmpeg_bin=config.get_tool_config().ffmpeg,
        verbose=args.verbose,
    )
    result = RunResult(command=cmd, plan=plan, output_path=Path(args.output_video), executed=False)

    if args.dry_run:
        print("Command to execute:", file=out)
        print("", file=out)
        print(render_command(cmd), file=out)
        print("", file=out)
        return result

    log.info("Processing...")
    result.output_size_bytes = execute_command(cmd, result.output_path)
    result.executed = True
    log.ok(f"Output created: {result.output_path} ({human_size(result.output_size_bytes)})")
    return result


def main(argv: Optional[list[str]] = None, *, probe: Optional[MediaProbe] = None, out: Optional[TextIO] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    out = out or sys.stdout
    config = Config()
    parser = build_parser(config)

    if not argv:
        parser.print_help(out)
        return 0

    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else config.log_level, config.log_format)
    log = create_execution_logger("main")

    errors = config.validate()
    if errors:
        for err in errors:
            log.error(err)
        return 1

    bookkeeping = config.log_format == "json"
    if bookkeeping:
        log.log_execution_start(dry_run=args.dry_run)
    started = time.monotonic()
    try:
        result = run(args, config, log, probe=probe, out=out)
    except OverlayError as e:
        log.error(str(e))
        if bookkeeping:
            log.log_execution_end(success=False)
        return e.exit_code

    log.log_metrics({
        "strategy": result.plan.strategy.name,
        "output_duration_seconds": str(result.plan.output_duration_seconds),
        "executed": result.executed,
        "wall_seconds": round(time.monotonic() - started, 3),
    })
    if bookkeeping:
        log.log_execution_end(success=True)
    return 0


def cli() -> None:
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        raise SystemExit(130)


if __name__ == "__main__":
    cli()
