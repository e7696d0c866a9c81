"""Opt-in, caller-side retry driven by failure classification.

Neither the clients nor the classifier retry on their own; a caller that
wants retries wraps the operation with :func:`retry_call` or
:func:`async_retry_call`.  Only failures that classify as retryable
(``NETWORK`` or ``SERVER``) are retried, with exponential delay
(1 s, 2 s, 4 s, ...).

Intermediate failures are classified without side effects; only the
failure that ends the attempt loop goes through
:meth:`~apiguard.classifier.FailureClassifier.classify`, so the user sees
one notification per operation.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

from apiguard.classifier import FailureClassifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_call(
    func: Callable[[], T],
    classifier: FailureClassifier,
    max_retries: int = 3,
    context: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call *func*, retrying retryable failures up to *max_retries* times.

    Raises:
        Exception: The last failure, after it has been classified.
    """
    attempt = 0
    while True:
        try:
            return func()
        except Exception as exc:
            classified = classifier.build(exc, context)
            if not classified.retryable or attempt >= max_retries:
                classifier.classify(exc, context)
                raise
            delay = 2 ** attempt
            logger.debug(
                "%s failure, retrying in %ss (attempt %d/%d)",
                classified.kind.value, delay, attempt + 1, max_retries,
            )
            sleep(delay)
            attempt += 1


async def async_retry_call(
    func: Callable[[], Awaitable[T]],
    classifier: FailureClassifier,
    max_retries: int = 3,
    context: Optional[str] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Async counterpart of :func:`retry_call`; *func* returns a fresh awaitable per attempt."""
    attempt = 0
    while True:
        try:
            return await func()
        except Exception as exc:
            classified = classifier.build(exc, context)
            if not classified.retryable or attempt >= max_retries:
                classifier.classify(exc, context)
                raise
            delay = 2 ** attempt
            logger.debug(
                "%s failure, retrying in %ss (attempt %d/%d)",
                classified.kind.value, delay, attempt + 1, max_retries,
            )
            await sleep(delay)
            attempt += 1
