"""Error types for Audio Overlay."""


class OverlayError(Exception):
    """Base class for every fatal condition of an overlay run."""

    exit_code = 1


class InvalidInput(OverlayError):
    """Missing or unusable command-line input."""


class MissingDependency(OverlayError):
    """A required external executable is not available."""


class InvalidTimeFormat(OverlayError):
    """A time expression could not be parsed."""

    def __init__(self, text: str):
        super().__init__(f"Invalid time format: {text!r}")
        self.text = text


class MediaUnreadable(OverlayError):
    """Duration or channel layout of a media file could not be determined."""

    def __init__(self, path, what: str = "duration"):
        super().__init__(f"Cannot determine {what} of {path}")
        self.path = path


class StartIndexOutOfRange(OverlayError):
    def __init__(self, start_seconds, video_duration):
        super().__init__(
            f"Start index ({start_seconds}s) exceeds video duration ({video_duration}s)"
        )


class AudioOffsetOutOfRange(OverlayError):
    def __init__(self, offset_seconds, audio_duration):
        super().__init__(
            f"Audio offset ({offset_seconds}s) exceeds audio duration ({audio_duration}s)"
        )


class EngineInvocationFailed(OverlayError):
    """The transcoding engine exited with a non-zero status."""

    def __init__(self, returncode: int):
        super().__init__(f"ffmpeg exited with status {returncode}")
        self.returncode = returncode


class OutputNotProduced(OverlayError):
    """The engine reported success but the output file does not exist."""

    def __init__(self, path):
        super().__init__(f"Output file was not created: {path}")
        self.path = path
