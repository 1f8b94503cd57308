"""The run scheduler.

Drains a sealed registry strictly in order. Each spec goes through four
phases: invoke the body, wait (bounded) for any asynchronous work, restore
observations, finalize the outcome. No error raised by a spec escapes this
module; each one becomes a failing diagnostic and a reporter error line.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable
from enum import Enum
from typing import Any

from janusspec.adapters.reporters import ConsoleReporter
from janusspec.config import get_async_timeout_ms, validate_timeout_ms
from janusspec.domain.outcome import RunSummary, SpecOutcome
from janusspec.errors import (
    AsyncTimeoutError,
    JanusError,
    SchedulerStateError,
    SpecBodyError,
    SpecError,
)
from janusspec.interfaces.reporter import Reporter
from janusspec.logging import running_spec
from janusspec.matchers import MATCHERS, MatcherRegistry
from janusspec.registry import Registry, active_registry
from janusspec.spec import Spec, Tools

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """Scheduler lifecycle."""

    IDLE = "idle"
    DRAINING = "draining"
    COMPLETE = "complete"


class RunScheduler:
    """Runs every effective spec of a registry, one at a time.

    Args:
        registry: The registry to drain. It is sealed when the run starts.
        reporter: Receives descriptions, results, errors and the final tally.
        matchers: Custom matcher registry exposed to `expect`; locked during the run.
        timeout_ms: Bound on the asynchronous wait of each spec. Defaults to
            `janusspec.config.get_async_timeout_ms()`.
    """

    def __init__(
        self,
        registry: Registry,
        reporter: Reporter,
        *,
        matchers: MatcherRegistry = MATCHERS,
        timeout_ms: int | None = None,
    ) -> None:
        self.registry = registry
        self.reporter = reporter
        self.matchers = matchers
        self.timeout_ms = (
            get_async_timeout_ms() if timeout_ms is None else validate_timeout_ms(timeout_ms)
        )
        self.state = SchedulerState.IDLE
        self.summary: RunSummary | None = None

    def run(self) -> RunSummary:
        """Drain the registry on a fresh event loop."""
        return asyncio.run(self.drain())

    async def drain(self) -> RunSummary:
        """Drain the registry on the running event loop.

        Raises:
            SchedulerStateError: If this scheduler already ran.
        """
        if self.state is not SchedulerState.IDLE:
            raise SchedulerStateError(self.state.value, "start a run")

        specs = self.registry.seal()
        self.state = SchedulerState.DRAINING
        logger.info(
            "Running %d of %d registered spec(s)", len(specs), len(self.registry)
        )

        outcomes: list[SpecOutcome] = []
        with self.matchers.lock():
            for spec in specs:
                outcomes.append(await self._execute(spec))

        self.state = SchedulerState.COMPLETE
        self.summary = RunSummary(tuple(outcomes))
        logger.info(
            "Run complete: %d passed, %d failed",
            self.summary.passed,
            self.summary.failed,
        )
        self.reporter.log_summary(self.summary.passed, self.summary.total)
        return self.summary

    async def _execute(self, spec: Spec) -> SpecOutcome:
        with running_spec(spec.description):
            return await self._execute_in_context(spec)

    async def _execute_in_context(self, spec: Spec) -> SpecOutcome:
        logger.debug("Starting spec '%s'", spec.description)
        self.reporter.log_description(spec.description)
        spec.start(on_error=self._report_error)

        with spec.observations.scope():
            result: Any = None
            try:
                result = spec.body(Tools(spec, self.matchers))
            except SpecError as error:
                spec.fail(error)
            except (Exception, asyncio.CancelledError) as exc:  # pylint: disable=broad-except
                logger.debug("Spec '%s' raised", spec.description, exc_info=True)
                spec.fail(SpecBodyError(spec.description, exc))
                spec.cancel_pending()

            deadline = asyncio.get_running_loop().time() + self.timeout_ms / 1000
            if inspect.isawaitable(result):
                await self._wait(spec, result, deadline)
            if spec.pending is not None and not spec.pending.cancelled():
                await self._wait(spec, spec.pending, deadline)

        outcome = spec.finalize()
        self.reporter.log_result(outcome.diagnostics)
        logger.debug(
            "Finished spec '%s': %s (%d diagnostic(s))",
            spec.description,
            "passed" if outcome.passed else "failed",
            len(outcome.diagnostics),
        )
        return outcome

    async def _wait(self, spec: Spec, awaitable: Awaitable[Any], deadline: float) -> None:
        remaining = max(0.0, deadline - asyncio.get_running_loop().time())
        try:
            await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError:
            spec.cancel_pending()
            spec.fail(AsyncTimeoutError(spec.description, self.timeout_ms))
        except SpecError as error:
            spec.fail(error)
        except asyncio.CancelledError as exc:
            if _scheduler_cancelled():
                raise
            logger.debug("Spec '%s' was cancelled while awaited", spec.description)
            spec.fail(SpecBodyError(spec.description, exc))
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Spec '%s' raised while awaited", spec.description, exc_info=True)
            spec.fail(SpecBodyError(spec.description, exc))

    def _report_error(self, error: JanusError) -> None:
        logger.warning("%s", error)
        self.reporter.log_error(str(error))


def _scheduler_cancelled() -> bool:
    """True when the draining task itself, not something a spec awaited, was cancelled."""
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


def run(
    registry: Registry | None = None,
    reporter: Reporter | None = None,
    *,
    timeout_ms: int | None = None,
) -> RunSummary:
    """Run a registry (the active one by default) and return its summary.

    Results are printed by a `ConsoleReporter` unless another reporter is given.
    """
    if reporter is None:
        reporter = ConsoleReporter()
    scheduler = RunScheduler(
        registry if registry is not None else active_registry(),
        reporter,
        timeout_ms=timeout_ms,
    )
    return scheduler.run()
