"""Reporter implementations."""

from .console import ConsoleReporter
from .recording import RecordingReporter

__all__ = ["ConsoleReporter", "RecordingReporter"]
