"""Method-call observation (spying) with guaranteed restoration.

`ObservationManager.observe` replaces ``target.<name>`` with a wrapper that
records each call and, when ``pass_through`` is true, forwards it to the
original implementation. Bookkeeping lives in a side table held by the
manager; observed objects never gain extra attributes apart from the wrapper
itself. Every handle is restored exactly once, either explicitly or when the
manager's scope ends.
"""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Call:
    """Arguments of one intercepted call."""

    args: tuple[Any, ...]
    kwargs: Mapping[str, Any] = field(default_factory=dict)


class ObservationHandle:
    """Bookkeeping for one observed ``(target, name)`` pair.

    Attributes:
        target: The observed object. Shared with the test, never owned.
        name: The attribute name that was replaced.
        original: The callable calls are forwarded to.
        pass_through: Whether calls reach `original`.
        wrapper: The interception callable installed on the target.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        target: Any,
        name: str,
        original: Callable[..., Any],
        stored: Any,
        *,
        pass_through: bool,
        skip_receiver: bool,
        as_static: bool,
    ) -> None:
        self.target = target
        self.name = name
        self.original = original
        self.pass_through = pass_through
        self._stored = stored
        self._skip_receiver = skip_receiver
        self._as_static = as_static
        self._calls: list[Call] = []
        self._lock = threading.Lock()
        self._restored = False
        self.wrapper = self._build_wrapper()

    def __repr__(self) -> str:
        return f"<ObservationHandle {self.label} calls={self.call_count}>"

    @property
    def label(self) -> str:
        """Human readable ``Owner.name`` label."""
        owner = getattr(self.target, "__name__", None) or type(self.target).__name__
        return f"{owner}.{self.name}"

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self._calls)

    @property
    def calls(self) -> tuple[Call, ...]:
        with self._lock:
            return tuple(self._calls)

    @property
    def last_call(self) -> Call | None:
        with self._lock:
            return self._calls[-1] if self._calls else None

    @property
    def restored(self) -> bool:
        return self._restored

    def _build_wrapper(self) -> Callable[..., Any]:
        original = self.original

        @functools.wraps(original)
        def observed(*args: Any, **kwargs: Any) -> Any:
            if self._restored:
                return original(*args, **kwargs)
            recorded = args[1:] if self._skip_receiver else args
            with self._lock:
                self._calls.append(Call(tuple(recorded), dict(kwargs)))
            if self.pass_through:
                return original(*args, **kwargs)
            return None

        return observed

    def install(self) -> None:
        """Put the wrapper in place on the target."""
        installed: Any = staticmethod(self.wrapper) if self._as_static else self.wrapper
        setattr(self.target, self.name, installed)

    def restore(self) -> None:
        """Put the original attribute back. Calling it twice is a no-op."""
        if self._restored:
            return
        self._restored = True
        if self._stored is _MISSING:
            delattr(self.target, self.name)
        else:
            setattr(self.target, self.name, self._stored)
        logger.debug("Restored %s after %d call(s)", self.label, self.call_count)

    def snapshot(self) -> tuple[Callable[..., Any], Any, bool, bool]:
        """What a replacement observation of the same attribute must reuse."""
        return self.original, self._stored, self._skip_receiver, self._as_static

    def _retire(self) -> None:
        """Mark as superseded without touching the target."""
        self._restored = True


class ObservationManager:
    """Creates, tracks and restores the observations of one spec."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[int, str], ObservationHandle] = {}
        self._by_wrapper: dict[int, ObservationHandle] = {}
        self._handles: list[ObservationHandle] = []

    @property
    def handles(self) -> tuple[ObservationHandle, ...]:
        """Every handle created by this manager, in creation order."""
        return tuple(self._handles)

    def observe(
        self, target: Any, name: str, pass_through: bool = True
    ) -> ObservationHandle:
        """Intercept calls to ``target.<name>``.

        Args:
            target: Object, class or module owning the method.
            name: Name of the method to intercept.
            pass_through: When False the original never runs and calls return None.

        Returns:
            ObservationHandle: The live handle for the observation.

        Raises:
            AttributeError: If the target has no attribute `name`.
            TypeError: If the attribute is not callable.
        """
        key = (id(target), name)
        previous = self._by_key.get(key)
        if previous is not None and not previous.restored:
            original, stored, skip_receiver, as_static = previous.snapshot()
            previous._retire()  # pylint: disable=protected-access
            self._by_wrapper.pop(id(previous.wrapper), None)
        else:
            original, stored, skip_receiver, as_static = _capture(target, name)

        handle = ObservationHandle(
            target,
            name,
            original,
            stored,
            pass_through=pass_through,
            skip_receiver=skip_receiver,
            as_static=as_static,
        )
        handle.install()
        self._by_key[key] = handle
        self._by_wrapper[id(handle.wrapper)] = handle
        self._handles.append(handle)
        logger.debug("Observing %s (pass_through=%s)", handle.label, pass_through)
        return handle

    def handle_for(self, value: Any) -> ObservationHandle | None:
        """Return the live handle whose wrapper is `value`, if any.

        Bound methods of an observed class-level function resolve through
        their ``__func__``.
        """
        func = getattr(value, "__func__", value)
        handle = self._by_wrapper.get(id(func))
        if handle is None or handle.wrapper is not func:
            return None
        return handle

    def describe(self, value: Any) -> str | None:
        """Label observed wrappers for diagnostic rendering."""
        if callable(value) and (handle := self.handle_for(value)) is not None:
            return f"<observed {handle.label}>"
        return None

    def restore_all(self) -> None:
        """Restore every handle, newest first."""
        for handle in reversed(self._handles):
            handle.restore()

    @contextmanager
    def scope(self) -> Iterator[ObservationManager]:
        """Context in which observations are guaranteed to be restored on exit."""
        try:
            yield self
        finally:
            self.restore_all()


def _capture(target: Any, name: str) -> tuple[Callable[..., Any], Any, bool, bool]:
    """Snapshot what calls are forwarded to and what restoration puts back.

    Returns:
        tuple: ``(original, stored, skip_receiver, as_static)``.
    """
    current = getattr(target, name)
    if not callable(current):
        raise TypeError(f"{name!r} on {target!r} is not callable")

    namespace = getattr(target, "__dict__", None)
    stored = namespace[name] if namespace is not None and name in namespace else _MISSING

    raw = inspect.getattr_static(target, name)
    if isinstance(raw, (staticmethod, classmethod)):
        return current, stored, False, True
    if isinstance(target, type) and inspect.isfunction(raw):
        # plain function on a class: instances pass themselves as the receiver
        return raw, stored, True, False
    return current, stored, False, False
