"""The validator set.

Validators are pure predicates of the form ``validator(expected, actual)``.
They hold no state and are shared by every spec. Call-observation validators
receive the observation handle (anything exposing ``call_count`` and
``last_call``) in place of ``actual``.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from janusspec.errors import NotObservedError

Validator = Callable[[Any, Any], bool]

_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)
_DATE_TYPES = (dt.date, dt.time, dt.timedelta)


class ObservedCall(Protocol):  # pylint: disable=too-few-public-methods
    """Shape of a recorded call."""

    args: tuple[Any, ...]
    kwargs: Mapping[str, Any]


class Observation(Protocol):  # pylint: disable=too-few-public-methods
    """Shape of an observation handle as seen by validators."""

    @property
    def call_count(self) -> int: ...  # pragma: no cover

    @property
    def last_call(self) -> ObservedCall | None: ...  # pragma: no cover


# ----------------------------------------------------------------------------
# Value validators
# ----------------------------------------------------------------------------


def exact(expected: Any, actual: Any) -> bool:
    """Identity comparison, with value equality for immutable primitives.

    No coercion takes place: ``exact(1, True)`` and ``exact(1, 1.0)`` are False
    because the types differ. Containers and other objects compare by identity.
    """
    if type(expected) is not type(actual):  # pylint: disable=unidiomatic-typecheck
        return False
    if isinstance(expected, _PRIMITIVES):
        return expected is actual or expected == actual
    return expected is actual


def deep_equal(expected: Any, actual: Any) -> bool:
    """Structural, recursive comparison.

    Rules, in order:

    1. ``None`` is only equal to ``None``.
    2. Values of different concrete types are never equal.
    3. Callables and compiled regular expressions compare by identity.
    4. Dates, times and timedeltas are never equal (known limitation).
    5. Primitives compare by value.
    6. Sequences must have the same length and be equal element-wise.
    7. Mappings and plain objects (via ``vars``) must have the same key set
       and equal values for every key.
    8. Sets compare with ``==``; anything else falls back to ``==``.

    Self-referencing structures are handled: a pair of values already being
    compared further up the stack is assumed equal.
    """
    return _deep_equal(expected, actual, set())


def _deep_equal(  # pylint: disable=too-many-return-statements
    expected: Any, actual: Any, active: set[tuple[int, int]]
) -> bool:
    if expected is None or actual is None:
        return expected is actual
    if type(expected) is not type(actual):  # pylint: disable=unidiomatic-typecheck
        return False
    if isinstance(expected, re.Pattern) or (
        callable(expected) and not isinstance(expected, type)
    ):
        return expected is actual
    if isinstance(expected, _DATE_TYPES):
        return False
    if isinstance(expected, _PRIMITIVES):
        return expected is actual or expected == actual

    pair = (id(expected), id(actual))
    if pair in active:
        return True
    active.add(pair)
    try:
        if isinstance(expected, Mapping):
            return _mapping_equal(expected, actual, active)
        if isinstance(expected, Sequence):
            return len(expected) == len(actual) and all(
                _deep_equal(e, a, active) for e, a in zip(expected, actual)
            )
        if isinstance(expected, (set, frozenset)):
            return expected == actual
        if hasattr(expected, "__dict__") and not isinstance(expected, type):
            return _mapping_equal(vars(expected), vars(actual), active)
        return expected is actual or expected == actual
    finally:
        active.discard(pair)


def _mapping_equal(
    expected: Mapping[Any, Any], actual: Mapping[Any, Any], active: set[tuple[int, int]]
) -> bool:
    if expected.keys() != actual.keys():
        return False
    return all(_deep_equal(expected[k], actual[k], active) for k in expected)


# ----------------------------------------------------------------------------
# Call-observation validators
# ----------------------------------------------------------------------------


def _require(observation: Observation | None) -> Observation:
    if observation is None:
        raise NotObservedError("value")
    return observation


def was_observed(_expected: Any, observation: Observation | None) -> bool:
    """True when the observed method was called at least once."""
    return _require(observation).call_count > 0


def observed_call_count(expected: int, observation: Observation | None) -> bool:
    """True when the observed method was called exactly `expected` times."""
    return exact(expected, _require(observation).call_count)


def observed_last_call_args(
    expected: tuple[tuple[Any, ...], Mapping[str, Any]],
    observation: Observation | None,
) -> bool:
    """Deep-compare the most recent call against an ``(args, kwargs)`` pair.

    A method that was never called never matches.
    """
    last = _require(observation).last_call
    if last is None:
        return False
    args, kwargs = expected
    return deep_equal(list(args), list(last.args)) and deep_equal(
        dict(kwargs), dict(last.kwargs)
    )
