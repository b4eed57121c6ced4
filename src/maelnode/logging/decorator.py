# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Method-level trace decorator for the node runtime."""

import base64
import functools
import inspect
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from maelnode.logging.event_log import EventLog


@runtime_checkable
class Loggable(Protocol):
    """Instance with an optional event log. Used by @log_method."""

    _log: EventLog | None


def _build_args_dict(
    fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Map positional + keyword args to parameter names, skipping self."""
    sig = inspect.signature(fn)
    # None stands in for self (already stripped from args by the wrapper).
    bound = sig.bind(None, *args, **kwargs)
    bound.arguments.pop("self", None)
    return {name: _serialize_value(v) for name, v in bound.arguments.items()}


def _get_log(instance: Loggable) -> EventLog | None:
    return instance._log


_F = TypeVar("_F", bound=Callable[..., Any])


def log_method(
    *,
    before: bool = False,
    after: bool = False,
) -> Callable[[_F], _F]:
    """Log method calls to the instance's EventLog.

    Expects the instance to have a `_log: EventLog | None` attribute.
    If _log is None, the method runs without logging. The after-entry is
    written only when the call returns; exceptions propagate unlogged.
    """

    def decorator(fn: _F) -> _F:
        if inspect.iscoroutinefunction(fn) or inspect.isgeneratorfunction(fn):
            raise TypeError(f"log_method only wraps plain methods: {fn.__name__}")
        event_name = fn.__name__

        @functools.wraps(fn)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            log = _get_log(self)
            args_dict = _build_args_dict(fn, args, kwargs) if log else {}
            if log and before:
                log.log(event_name, args_dict)
            result = fn(self, *args, **kwargs)
            if log and after:
                result_data: dict[str, Any] = {}
                if result is not None:
                    result_data["result"] = _serialize_value(result)
                log.log(f"{event_name}.result", result_data)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _serialize_value(value: Any) -> Any:
    """Best-effort serialization for log entries."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode()
    if isinstance(value, str | int | float | bool | type(None)):
        return value
    return str(value)
