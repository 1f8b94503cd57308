"""Matcher generation and the process-wide custom matcher registry.

`expect(actual)` returns a `MatcherSet`. Every matcher call is terminal and
appends exactly one `Diagnostic` to the owning spec, whether it passed or not.
Errors raised while evaluating a matcher never propagate; they become a
failing diagnostic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from janusspec.domain import validators
from janusspec.domain.outcome import Diagnostic
from janusspec.domain.rendering import render, render_args
from janusspec.domain.validators import Validator
from janusspec.errors import (
    AssertionFailure,
    DuplicateMatcherError,
    JanusError,
    MatcherRegistryLockedError,
    NotObservedError,
)
from janusspec.observation import ObservationManager

logger = logging.getLogger(__name__)

BUILTIN_MATCHERS = frozenset(
    {
        "to_be",
        "to_equal",
        "to_have_been_called",
        "to_have_been_called_times",
        "to_have_been_called_with",
    }
)


@dataclass(frozen=True)
class CustomMatcher:
    """A user supplied matcher.

    The validator is called as ``validator(expected, actual)``.
    """

    name: str
    validator: Validator
    description: str


class MatcherRegistry:
    """Name → custom matcher table.

    Writable before and between runs; locked while a run is draining.
    """

    def __init__(self) -> None:
        self._matchers: dict[str, CustomMatcher] = {}
        self._locked = False

    def __contains__(self, name: object) -> bool:
        return name in self._matchers

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._matchers)

    def register(
        self, name: str, validator: Validator, description: str | None = None
    ) -> CustomMatcher:
        """Register a custom matcher.

        Args:
            name: Attribute name the matcher is exposed under on `MatcherSet`.
            validator: Predicate called as ``validator(expected, actual)``.
            description: Phrase used in messages; defaults to the name with
                underscores replaced by spaces (``to_be_even`` -> "to be even").

        Raises:
            MatcherRegistryLockedError: If a run is in progress.
            DuplicateMatcherError: If the name is built in or already taken.
            ValueError: If the name is not a valid public identifier.
        """
        if self._locked:
            raise MatcherRegistryLockedError(name)
        if not name.isidentifier() or name.startswith("_"):
            raise ValueError(f"Invalid matcher name: {name!r}")
        if name in BUILTIN_MATCHERS or name in self._matchers:
            raise DuplicateMatcherError(name)
        matcher = CustomMatcher(
            name=name,
            validator=validator,
            description=description or name.replace("_", " "),
        )
        self._matchers[name] = matcher
        logger.debug("Registered custom matcher %s", name)
        return matcher

    def unregister(self, name: str) -> None:
        """Remove a custom matcher. Unknown names are ignored."""
        if self._locked:
            raise MatcherRegistryLockedError(name)
        self._matchers.pop(name, None)

    def get(self, name: str) -> CustomMatcher | None:
        return self._matchers.get(name)

    @contextmanager
    def lock(self) -> Iterator[MatcherRegistry]:
        """Reject registrations for the duration of the block."""
        self._locked = True
        try:
            yield self
        finally:
            self._locked = False


MATCHERS = MatcherRegistry()


def register_matcher(
    name: str, validator: Validator, description: str | None = None
) -> CustomMatcher:
    """Register a custom matcher on the process-wide registry."""
    return MATCHERS.register(name, validator, description)


class MatcherSet:
    """Assertion methods bound to one captured value and one spec."""

    def __init__(
        self,
        actual: Any,
        record: Callable[[Diagnostic], None],
        observations: ObservationManager,
        registry: MatcherRegistry = MATCHERS,
    ) -> None:
        self._actual = actual
        self._record = record
        self._observations = observations
        self._registry = registry

    def __getattr__(self, name: str) -> Callable[..., None]:
        # only reached for names that are not regular attributes
        custom = self._registry.get(name)
        if custom is None:
            raise AttributeError(f"Unknown matcher: {name!r}")

        def matcher(expected: Any = None) -> None:
            message = f"Expected {self._render(self._actual)} {custom.description}"
            if expected is not None:
                message += f" {self._render(expected)}"
            self._evaluate(message, lambda: custom.validator(expected, self._actual))

        matcher.__name__ = name
        return matcher

    # --- value matchers ---

    def to_be(self, expected: Any) -> None:
        """Expect the actual value to be exactly `expected`."""
        self._evaluate(
            f"Expected {self._render(self._actual)} to be {self._render(expected)}",
            lambda: validators.exact(expected, self._actual),
        )

    def to_equal(self, expected: Any) -> None:
        """Expect the actual value to be structurally equal to `expected`."""
        self._evaluate(
            f"Expected {self._render(self._actual)} to equal {self._render(expected)}",
            lambda: validators.deep_equal(expected, self._actual),
        )

    # --- call-observation matchers ---

    def to_have_been_called(self) -> None:
        """Expect the observed method to have been called at least once."""
        self._evaluate(
            f"Expected {self._render(self._actual)} to have been called",
            lambda: validators.was_observed(None, self._observation()),
        )

    def to_have_been_called_times(self, times: int) -> None:
        """Expect the observed method to have been called exactly `times` times."""

        def check() -> bool:
            handle = self._observation()
            self._detail = f". Actual call count was {handle.call_count}"
            return validators.observed_call_count(times, handle)

        self._evaluate(
            f"Expected {self._render(self._actual)} to have been called {times} times",
            check,
        )

    def to_have_been_called_with(self, *args: Any, **kwargs: Any) -> None:
        """Expect the most recent call to have received these arguments."""

        def check() -> bool:
            handle = self._observation()
            last = handle.last_call
            self._detail = (
                ". It was never called"
                if last is None
                else f". Actual call was {self._render_args(last.args, last.kwargs)}"
            )
            return validators.observed_last_call_args((args, kwargs), handle)

        self._evaluate(
            f"Expected {self._render(self._actual)} to have been called with "
            f"{self._render_args(args, kwargs)}",
            check,
        )

    # --- helpers ---

    _detail = ""

    def _observation(self) -> validators.Observation:
        handle = self._observations.handle_for(self._actual)
        if handle is None:
            raise NotObservedError(self._render(self._actual))
        return handle

    def _render(self, value: Any) -> str:
        return render(value, self._observations.describe)

    def _render_args(self, args: Any, kwargs: Any) -> str:
        return render_args(args, kwargs, self._observations.describe) or "no arguments"

    def _evaluate(self, message: str, check: Callable[[], bool]) -> None:
        try:
            self._assert(message, check)
        except AssertionFailure as failure:
            self._record(Diagnostic.from_error(failure))
            return
        self._record(Diagnostic(True, message + self._detail))

    def _assert(self, message: str, check: Callable[[], bool]) -> None:
        """Run `check`, raising AssertionFailure unless it returns a truthy value."""
        self._detail = ""
        try:
            passed = check()
        except JanusError as error:
            raise AssertionFailure(f"{message}: {error}") from error
        except Exception as error:  # pylint: disable=broad-except
            logger.debug("Matcher raised while evaluating %r", message, exc_info=True)
            raise AssertionFailure(
                f"{message}: {type(error).__name__}: {error}"
            ) from error
        if not passed:
            raise AssertionFailure(message + self._detail)
