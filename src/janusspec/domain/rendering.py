"""Structured-value rendering for diagnostic messages.

Rendering rules:

- strings are double-quoted with JSON-style escaping;
- ``None``, booleans and numbers use ``repr``;
- lists, tuples, sets and dicts render their items recursively, sets are
  sorted by rendered text so output is stable;
- functions and other callables render as ``<function qualname>`` unless the
  optional ``describe`` hook supplies a label (used for observed methods);
- objects carrying a ``__dict__`` render as ``ClassName(field=value, ...)``;
- anything else falls back to ``repr``.

A container that (directly or indirectly) contains itself renders the inner
reference as ``<cycle>`` instead of recursing forever.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from types import ModuleType
from typing import Any

CYCLE_MARKER = "<cycle>"

Describe = Callable[[Any], "str | None"]

_SCALARS = (bool, int, float, complex, bytes)


def render(value: Any, describe: Describe | None = None) -> str:
    """Render a value for a diagnostic message.

    Args:
        value: Any Python value.
        describe: Optional hook returning a label for values it recognizes
            (or None to fall through to the default rules).

    Returns:
        str: A single-line, human readable rendering.
    """
    return _render(value, describe, set())


def render_args(
    args: Iterable[Any],
    kwargs: Mapping[str, Any] | None = None,
    describe: Describe | None = None,
) -> str:
    """Render a call's arguments as ``a, b, key=c``."""
    parts = [_render(arg, describe, set()) for arg in args]
    parts.extend(
        f"{key}={_render(val, describe, set())}" for key, val in (kwargs or {}).items()
    )
    return ", ".join(parts)


def _render(value: Any, describe: Describe | None, seen: set[int]) -> str:
    # pylint: disable=too-many-return-statements
    if describe is not None and (label := describe(value)) is not None:
        return label
    if value is None or isinstance(value, _SCALARS):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, type):
        return f"<class {value.__qualname__}>"
    if isinstance(value, ModuleType):
        return f"<module {value.__name__}>"
    if isinstance(value, Enum):
        return repr(value)
    if callable(value):
        name = getattr(value, "__qualname__", None) or type(value).__qualname__
        return f"<function {name}>"

    if id(value) in seen:
        return CYCLE_MARKER
    seen.add(id(value))
    try:
        return _render_container(value, describe, seen)
    finally:
        seen.discard(id(value))


def _render_container(value: Any, describe: Describe | None, seen: set[int]) -> str:
    if isinstance(value, Mapping):
        items = ", ".join(
            f"{_render(k, describe, seen)}: {_render(v, describe, seen)}"
            for k, v in value.items()
        )
        return "{" + items + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_render(v, describe, seen) for v in value) + "]"
    if isinstance(value, tuple):
        inner = ", ".join(_render(v, describe, seen) for v in value)
        return f"({inner},)" if len(value) == 1 else f"({inner})"
    if isinstance(value, (set, frozenset)):
        if not value:
            return f"{type(value).__name__}()"
        return "{" + ", ".join(sorted(_render(v, describe, seen) for v in value)) + "}"
    if hasattr(value, "__dict__") and not isinstance(value, type):
        fields = ", ".join(
            f"{k}={_render(v, describe, seen)}"
            for k, v in vars(value).items()
            if not k.startswith("_")
        )
        return f"{type(value).__name__}({fields})"
    return repr(value)
