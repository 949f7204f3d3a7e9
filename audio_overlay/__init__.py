"""Audio Overlay: place an audio track on a video timeline with ffmpeg."""

__version__ = "1.0.0"
