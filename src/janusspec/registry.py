"""Spec registration.

A `Registry` is open for registration until a run starts, then sealed. The
module-level `test` and `focused_test` helpers register on the *active*
registry, which is `DEFAULT_REGISTRY` unless `use_registry` says otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import overload

from janusspec.errors import RegistryAlreadyRunError, RegistrySealedError
from janusspec.spec import Spec, SpecBody

logger = logging.getLogger(__name__)


class RegistryState(Enum):
    """Registration lifecycle."""

    OPEN = "open"
    SEALED = "sealed"


class Registry:
    """Append-only queue of specs, in registration order."""

    def __init__(self) -> None:
        self._specs: list[Spec] = []
        self.state = RegistryState.OPEN

    def __len__(self) -> int:
        return len(self._specs)

    @property
    def specs(self) -> tuple[Spec, ...]:
        return tuple(self._specs)

    @property
    def sealed(self) -> bool:
        return self.state is RegistryState.SEALED

    def add(self, description: str, body: SpecBody, *, focused: bool = False) -> Spec:
        """Append a spec to the queue.

        Raises:
            RegistrySealedError: If the registry was already sealed by a run.
        """
        if self.sealed:
            raise RegistrySealedError(description)
        spec = Spec(description, body, focused=focused)
        self._specs.append(spec)
        logger.debug("Registered %r", spec)
        return spec

    @overload
    def test(self, description: str) -> Callable[[SpecBody], SpecBody]: ...

    @overload
    def test(self, description: str, body: SpecBody) -> SpecBody: ...

    def test(self, description, body=None):
        """Register a spec, either directly or as a decorator.

        Examples:
            registry.test("adds", lambda t: t.expect(1 + 1).to_be(2))

            @registry.test("adds")
            def _(t):
                t.expect(1 + 1).to_be(2)
        """
        return self._register(description, body, focused=False)

    def focused_test(self, description, body=None):
        """Like `test`, but restricts the run to focused specs."""
        return self._register(description, body, focused=True)

    def _register(self, description, body, *, focused):
        if body is not None:
            self.add(description, body, focused=focused)
            return body

        def decorator(func: SpecBody) -> SpecBody:
            self.add(description, func, focused=focused)
            return func

        return decorator

    def effective_specs(self) -> tuple[Spec, ...]:
        """The focused subset if any spec is focused, else every spec."""
        focused = tuple(s for s in self._specs if s.focused)
        return focused or tuple(self._specs)

    def seal(self) -> tuple[Spec, ...]:
        """Close registration and return the effective run set.

        Raises:
            RegistryAlreadyRunError: If a previous run already sealed it.
        """
        if self.sealed:
            raise RegistryAlreadyRunError(len(self._specs))
        self.state = RegistryState.SEALED
        return self.effective_specs()


DEFAULT_REGISTRY = Registry()
_active: list[Registry] = [DEFAULT_REGISTRY]


def active_registry() -> Registry:
    """The registry module-level helpers currently register on."""
    return _active[-1]


@contextmanager
def use_registry(registry: Registry) -> Iterator[Registry]:
    """Route module-level `test`/`focused_test` calls to `registry`."""
    _active.append(registry)
    try:
        yield registry
    finally:
        _active.pop()


def test(description, body=None):
    """Register a spec on the active registry (call or decorator)."""
    return active_registry().test(description, body)


def focused_test(description, body=None):
    """Register a focused spec on the active registry (call or decorator)."""
    return active_registry().focused_test(description, body)


# keep pytest from collecting the helper when imported into test modules
test.__test__ = False  # type: ignore[attr-defined]
