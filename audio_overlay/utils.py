"""Utility functions for Audio Overlay."""

import logging
import os
import shlex
import subprocess
from decimal import Decimal
from pathlib import Path

logger = logging.getLogger("audio_overlay.utils")


def quote_cmd(cmd: list[str]) -> str:
    """Return a command as a single shell-quoted line."""
    return " ".join(shlex.quote(c) for c in cmd)


def run_cmd(cmd: list[str], *, cwd: Path | None = None, check: bool = True) -> subprocess.CompletedProcess:
    """Run a command and log it. Output goes straight to the terminal."""
    logger.debug("RUN: %s", quote_cmd(cmd))
    return subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=check, text=True, capture_output=False)


def run_cmd_capture(cmd: list[str], *, cwd: Path | None = None) -> str:
    """Run a command and capture output."""
    logger.debug("RUN: %s", quote_cmd(cmd))
    p = subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=True, text=True, capture_output=True)
    return p.stdout.strip()


def which(cmd: str) -> str | None:
    """Find executable in PATH."""
    if os.sep in cmd:
        return cmd if os.path.isfile(cmd) and os.access(cmd, os.X_OK) else None
    for p in os.environ.get("PATH", "").split(os.pathsep):
        cand = os.path.join(p, cmd)
        if os.path.isfile(cand) and os.access(cand, os.X_OK):
            return cand
    return None


def format_seconds(value: Decimal) -> str:
    """Format a duration for ffmpeg without exponent or trailing zeros."""
    return format(Decimal(value).normalize(), "f")


def human_size(num_bytes: int) -> str:
    """Format a byte count the way ``du -h`` does (1024 based, one decimal)."""
    size = float(num_bytes)
    if size < 1024:
        return f"{int(size)}B"
    for unit in ("K", "M", "G"):
        size /= 1024
        if size < 1024:
            return f"{size:.1f}{unit}"
    return f"{size / 1024:.1f}T"
