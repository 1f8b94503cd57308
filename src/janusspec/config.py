"""Configuration utilities for janusspec.

This module centralizes small helpers and constants related to run configuration.
"""

import os

from janusspec.errors import InvalidTimeoutError

DEFAULT_ASYNC_TIMEOUT_MS = 5000
ASYNC_TIMEOUT_ENV = "JANUS_ASYNC_TIMEOUT_MS"  # pragma: no mutate


def validate_timeout_ms(value: object) -> int:
    """Coerce a timeout setting into a positive number of milliseconds.

    Args:
        value: An int or a string of digits.

    Returns:
        The timeout in milliseconds.

    Raises:
        InvalidTimeoutError: If the value is not a positive integer.
    """
    if isinstance(value, bool):
        raise InvalidTimeoutError(value)
    try:
        timeout = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise InvalidTimeoutError(value) from e
    if timeout <= 0 or (isinstance(value, float) and value != timeout):
        raise InvalidTimeoutError(value)
    return timeout


def get_async_timeout_ms() -> int:
    """Get the async continuation timeout from the environment.

    Returns:
        The value of `JANUS_ASYNC_TIMEOUT_MS`, or `DEFAULT_ASYNC_TIMEOUT_MS`
        when it is unset or empty.

    Raises:
        InvalidTimeoutError: If the variable is set to something other than a
            positive integer.
    """
    if not (raw := os.environ.get(ASYNC_TIMEOUT_ENV)):
        return DEFAULT_ASYNC_TIMEOUT_MS
    return validate_timeout_ms(raw.strip())
