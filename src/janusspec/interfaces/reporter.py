"""Reporter interface definitions."""

import abc
from collections.abc import Sequence

from janusspec.domain.outcome import Diagnostic


class Reporter(abc.ABC):
    """Renders run progress. The engine only ever hands it plain data."""

    @abc.abstractmethod
    def log_description(self, text: str) -> None:
        """Announce the spec about to run.

        Args:
            text: The spec's description.
        """

    @abc.abstractmethod
    def log_result(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Render the finalized diagnostic trail of the current spec.

        Args:
            diagnostics: Every diagnostic in recording order. An empty trail
                means no assertions were run and the spec failed.
        """

    @abc.abstractmethod
    def log_error(self, text: str) -> None:
        """Render a body error or timeout of the current spec."""

    @abc.abstractmethod
    def log_summary(self, passed_count: int, total_count: int) -> None:
        """Render the final tally of the run."""
