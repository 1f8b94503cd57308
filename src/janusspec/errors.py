"""Error definitions for the test engine."""

# ============================================================================
#                     Spec-level errors (never abort a run)
# ============================================================================


class JanusError(Exception):
    """Base class for all janusspec errors."""


class SpecError(JanusError):
    """Base class for errors raised while a single spec executes.

    These are always converted into failing diagnostics by the scheduler.
    """


class AssertionFailure(SpecError):
    """Raised when a matcher's validator returns False."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotObservedError(SpecError):
    """Raised when a call-observation matcher is used on an un-observed value."""

    def __init__(self, value_repr: str) -> None:
        super().__init__(f"{value_repr} was not observed")
        self.value_repr = value_repr


class SpecBodyError(SpecError):
    """Wraps an exception raised by a spec body."""

    def __init__(self, description: str, cause: BaseException) -> None:
        super().__init__(
            f"Spec '{description}' raised {type(cause).__name__}: {cause}"
        )
        self.description = description
        self.cause = cause


class AsyncTimeoutError(SpecError):
    """Raised when an async continuation does not finish within the bound."""

    def __init__(self, description: str, timeout_ms: int) -> None:
        super().__init__(
            f"Spec '{description}' did not finish within allotted time "
            f"({timeout_ms} ms)"
        )
        self.description = description
        self.timeout_ms = timeout_ms


class AsyncAlreadyRegisteredError(SpecError):
    """Raised when `async_` is called more than once by the same spec."""

    def __init__(self, description: str) -> None:
        super().__init__(
            f"Spec '{description}' registered an async continuation more than once"
        )
        self.description = description


# ============================================================================
#                 Lifecycle errors (raised to the caller)
# ============================================================================


class RegistrySealedError(JanusError):
    """Raised when a spec is registered after the run has started."""

    def __init__(self, description: str) -> None:
        super().__init__(
            f"Cannot register spec '{description}': the registry is sealed."
        )
        self.description = description


class RegistryAlreadyRunError(RegistrySealedError):
    """Raised when a sealed registry is handed to a second run.

    Spec outcomes freeze on the first run, so running the bodies again would
    repeat their side effects while reporting the stale verdicts.
    """

    def __init__(self, spec_count: int) -> None:
        JanusError.__init__(
            self,
            f"Cannot run a registry of {spec_count} spec(s) twice: it is already sealed.",
        )
        self.spec_count = spec_count


class SchedulerStateError(JanusError):
    """Raised when the scheduler is driven out of order."""

    def __init__(self, state: str, action: str) -> None:
        super().__init__(f"Cannot {action} while the scheduler is {state}.")
        self.state = state
        self.action = action


class MatcherRegistryError(JanusError):
    """Base class for custom matcher registration errors."""


class DuplicateMatcherError(MatcherRegistryError):
    """Raised when a matcher name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Matcher '{name}' is already registered.")
        self.name = name


class MatcherRegistryLockedError(MatcherRegistryError):
    """Raised when a matcher is registered while a run is draining."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Cannot register matcher '{name}' while a run is in progress."
        )
        self.name = name


class InvalidTimeoutError(JanusError):
    """Raised when a configured async timeout is not a positive integer."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Async timeout must be a positive integer of milliseconds, got {value!r}."
        )
        self.value = value


class SpecFileLoadError(JanusError):
    """Raised when a spec file cannot be loaded."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Could not load spec file '{path}': {cause}")
        self.path = path
        self.cause = cause
