"""Decorator that classifies whatever a function raises, then re-raises it."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Optional, TypeVar

from apiguard.classifier.classifier import FailureClassifier

F = TypeVar("F", bound=Callable[..., Any])


def classify_errors(classifier: FailureClassifier, context: Optional[str] = None) -> Callable[[F], F]:
    """Wrap a sync or async callable so every exception it raises is classified.

    The original exception is re-raised unchanged; classification only adds
    the logging, notification, and recovery side effects.  *context*
    defaults to the wrapped function's qualified name.

    Example::

        @classify_errors(classifier)
        async def load_projects(client):
            return await client.get("/projects")
    """

    def decorator(func: F) -> F:
        label = context or func.__qualname__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    classifier.classify(exc, label)
                    raise

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                classifier.classify(exc, label)
                raise

        return wrapper  # type: ignore[return-value]

    return decorator
