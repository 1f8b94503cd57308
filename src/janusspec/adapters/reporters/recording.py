"""In-memory reporter."""

from collections.abc import Sequence
from typing import Any

from janusspec.domain.outcome import Diagnostic
from janusspec.interfaces.reporter import Reporter


class RecordingReporter(Reporter):
    """Keeps every reporter call in memory.

    Useful for hosts that render results themselves and for testing the engine.
    `events` preserves the interleaving of all calls as ``(kind, payload)``.
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    @property
    def descriptions(self) -> list[str]:
        return [p for kind, p in self.events if kind == "description"]

    @property
    def results(self) -> list[tuple[Diagnostic, ...]]:
        return [p for kind, p in self.events if kind == "result"]

    @property
    def errors(self) -> list[str]:
        return [p for kind, p in self.events if kind == "error"]

    @property
    def summaries(self) -> list[tuple[int, int]]:
        return [p for kind, p in self.events if kind == "summary"]

    def log_description(self, text: str) -> None:
        self.events.append(("description", text))

    def log_result(self, diagnostics: Sequence[Diagnostic]) -> None:
        self.events.append(("result", tuple(diagnostics)))

    def log_error(self, text: str) -> None:
        self.events.append(("error", text))

    def log_summary(self, passed_count: int, total_count: int) -> None:
        self.events.append(("summary", (passed_count, total_count)))
