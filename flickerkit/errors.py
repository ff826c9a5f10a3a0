from __future__ import annotations

class FlickerError(Exception):
    """Base class for everything flickerkit raises on purpose."""

class ConfigError(FlickerError, ValueError):
    pass

class DetectorLoadError(FlickerError):
    """Face/eye detector assets are missing or could not be loaded."""

class VideoOpenError(FlickerError):
    pass

class VideoMetadataError(VideoOpenError):
    """Video opened but reports no frame count or frame rate."""

class FrameError(FlickerError):
    """A single frame is empty or unreadable; the scan skips it."""
