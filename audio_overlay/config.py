"""Configuration management for Audio Overlay."""

import os
from dataclasses import dataclass

LOG_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ToolConfig:
    """External executables."""

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"


@dataclass
class EncodeConfig:
    """Video encoder settings.

    These only apply when the video has to be re-encoded (last-frame
    extension); otherwise the video stream is copied.
    """

    video_codec: str = "libx264"
    video_preset: str = "fast"
    video_crf: int = 18


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.ffmpeg_bin = os.getenv("AUDIO_OVERLAY_FFMPEG", "ffmpeg")
        self.ffprobe_bin = os.getenv("AUDIO_OVERLAY_FFPROBE", "ffprobe")
        self.audio_codec = os.getenv("AUDIO_OVERLAY_AUDIO_CODEC", "aac")
        self.audio_bitrate = os.getenv("AUDIO_OVERLAY_AUDIO_BITRATE", "192k")
        self.video_codec = os.getenv("AUDIO_OVERLAY_VIDEO_CODEC", "libx264")
        self.video_preset = os.getenv("AUDIO_OVERLAY_VIDEO_PRESET", "fast")
        self.video_crf = os.getenv("AUDIO_OVERLAY_VIDEO_CRF", "18")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = os.getenv("LOG_FORMAT", "text").strip().lower()

    def get_tool_config(self) -> ToolConfig:
        """Get external tool configuration."""
        return ToolConfig(ffmpeg=self.ffmpeg_bin, ffprobe=self.ffprobe_bin)

    def get_encode_config(self) -> EncodeConfig:
        """Get video encoder configuration."""
        return EncodeConfig(
            video_codec=self.video_codec,
            video_preset=self.video_preset,
            video_crf=int(self.video_crf),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        try:
            crf = int(self.video_crf)
        except ValueError:
            errors.append(f"AUDIO_OVERLAY_VIDEO_CRF must be an integer, got {self.video_crf!r}")
        else:
            if not 0 <= crf <= 51:
                errors.append(f"AUDIO_OVERLAY_VIDEO_CRF must be between 0 and 51, got {crf}")

        if not self.audio_codec.strip():
            errors.append("AUDIO_OVERLAY_AUDIO_CODEC must not be empty")
        if not self.audio_bitrate.strip():
            errors.append("AUDIO_OVERLAY_AUDIO_BITRATE must not be empty")
        if not self.ffmpeg_bin or not self.ffprobe_bin:
            errors.append("AUDIO_OVERLAY_FFMPEG and AUDIO_OVERLAY_FFPROBE must not be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            errors.append(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}")

        return errors
