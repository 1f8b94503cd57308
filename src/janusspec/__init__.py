"""JANUSSPEC

A small unit-testing engine. Specs are registered up front, then drained
sequentially by a scheduler that evaluates matchers, observes method calls,
waits for asynchronous continuations and reports pass/fail per spec.
"""

from .matchers import register_matcher
from .registry import DEFAULT_REGISTRY, Registry, focused_test, test
from .scheduler import RunScheduler, run

__all__ = [
    "__version__",
    "DEFAULT_REGISTRY",
    "Registry",
    "RunScheduler",
    "focused_test",
    "register_matcher",
    "run",
    "test",
]
__version__ = "0.1.0"
