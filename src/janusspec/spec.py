"""A registered spec and the tool surface handed to its body."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from janusspec.domain.outcome import Diagnostic, SpecOutcome, SpecStatus
from janusspec.errors import AsyncAlreadyRegisteredError, JanusError, SpecBodyError
from janusspec.matchers import MATCHERS, MatcherRegistry, MatcherSet
from janusspec.observation import ObservationHandle, ObservationManager

logger = logging.getLogger(__name__)

Done = Callable[[], None]
Continuation = Callable[[Done], "Awaitable[Any] | None"]
SpecBody = Callable[["Tools"], "Awaitable[Any] | None"]
ErrorListener = Callable[[JanusError], None]


class Spec:
    """One registered test case.

    Mutable only while it runs; once finalized its outcome is frozen and any
    late diagnostics are discarded.
    """

    def __init__(self, description: str, body: SpecBody, focused: bool = False) -> None:
        self.description = description
        self.body = body
        self.focused = focused
        self.status = SpecStatus.PENDING
        self.observations = ObservationManager()
        self._diagnostics: list[Diagnostic] = []
        self._outcome: SpecOutcome | None = None
        self._pending: asyncio.Future[None] | None = None
        self._task: asyncio.Future[Any] | None = None
        self._on_error: ErrorListener | None = None

    def __repr__(self) -> str:
        flag = " focused" if self.focused else ""
        return f"<Spec {self.description!r}{flag} {self.status.value}>"

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def outcome(self) -> SpecOutcome | None:
        """The frozen outcome, or None until the spec is finalized."""
        return self._outcome

    @property
    def pending(self) -> asyncio.Future[None] | None:
        """Future resolved by the async continuation's ``done`` callback."""
        return self._pending

    def start(self, on_error: ErrorListener | None = None) -> None:
        """Mark the spec running; `on_error` hears about every error it fails with."""
        self._on_error = on_error
        self.status = SpecStatus.RUNNING

    def record(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic; ignored once the spec is finalized."""
        if self.status is SpecStatus.FINALIZED:
            logger.warning(
                "Discarding diagnostic recorded after '%s' finished: %s",
                self.description,
                diagnostic.message,
            )
            return
        self._diagnostics.append(diagnostic)

    def fail(self, error: JanusError) -> None:
        """Record an error as a failing diagnostic and notify the error listener."""
        if self.status is SpecStatus.RUNNING and self._on_error is not None:
            self._on_error(error)
        self.record(Diagnostic.from_error(error))

    def register_async(self, continuation: Continuation) -> None:
        """Invoke `continuation` with a ``done`` callback and arm the wait.

        Must be called from within the running event loop.

        Raises:
            AsyncAlreadyRegisteredError: If a continuation was already registered.
        """
        if self._pending is not None:
            raise AsyncAlreadyRegisteredError(self.description)
        loop = asyncio.get_running_loop()
        pending: asyncio.Future[None] = loop.create_future()
        self._pending = pending

        def resolve() -> None:
            if not pending.done():
                pending.set_result(None)

        def done() -> None:
            if loop.is_closed():
                return
            loop.call_soon_threadsafe(resolve)

        try:
            result = continuation(done)
        except BaseException:
            pending.cancel()
            raise
        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            self.fail(SpecBodyError(self.description, exc))
            if self._pending is not None and not self._pending.done():
                self._pending.set_result(None)

    def cancel_pending(self) -> None:
        """Stop waiting on the continuation; its late work is ignored."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    def finalize(self) -> SpecOutcome:
        """Freeze the outcome. Idempotent."""
        if self._outcome is None:
            self._outcome = SpecOutcome(self.description, tuple(self._diagnostics))
            self.status = SpecStatus.FINALIZED
        return self._outcome


class Tools:
    """Capabilities available to a spec body during its single invocation."""

    def __init__(self, spec: Spec, matchers: MatcherRegistry = MATCHERS) -> None:
        self._spec = spec
        self._matchers = matchers

    def expect(self, actual: Any) -> MatcherSet:
        """Capture `actual` and return the matchers bound to this spec."""
        return MatcherSet(
            actual, self._spec.record, self._spec.observations, self._matchers
        )

    def observe(
        self, target: Any, name: str, pass_through: bool = True
    ) -> ObservationHandle:
        """Intercept ``target.<name>`` until the spec finishes."""
        return self._spec.observations.observe(target, name, pass_through)

    def async_(self, continuation: Continuation) -> None:
        """Make the spec wait for `continuation` to call its ``done`` argument."""
        self._spec.register_async(continuation)
