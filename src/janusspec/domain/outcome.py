"""Value objects describing spec results."""

from dataclasses import dataclass, field
from enum import Enum

NO_ASSERTIONS_MESSAGE = "No assertions were run"


class SpecStatus(Enum):
    """Lifecycle of a single spec."""

    PENDING = "pending"
    RUNNING = "running"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class Diagnostic:
    """A single matcher result.

    The message is only meaningful when the diagnostic failed.
    """

    passed: bool
    message: str = ""

    @classmethod
    def from_error(cls, error: Exception) -> "Diagnostic":
        """A failing diagnostic carrying the error's message."""
        return cls(False, str(error))


@dataclass(frozen=True)
class SpecOutcome:
    """Frozen result of one spec.

    A spec passes iff it recorded at least one diagnostic and all of them passed.
    """

    description: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def passed(self) -> bool:
        """True when at least one diagnostic was recorded and none failed."""
        return bool(self.diagnostics) and all(d.passed for d in self.diagnostics)

    @property
    def failures(self) -> tuple[Diagnostic, ...]:
        """The failing diagnostics, in recording order."""
        return tuple(d for d in self.diagnostics if not d.passed)


@dataclass(frozen=True)
class RunSummary:
    """Aggregate of all finalized spec outcomes of one run."""

    outcomes: tuple[SpecOutcome, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def ok(self) -> bool:
        """True when at least one spec ran and every spec passed."""
        return self.total > 0 and self.failed == 0
