"""Failure classification and reaction.

- :class:`FailureClassifier` -- maps any failure into one
  :class:`~apiguard.models.ClassifiedError` and runs logging, notification,
  and recovery hooks.
- :class:`ClassifierOptions` -- the hooks and the ``redirect_on_auth`` switch.
- :func:`classify_errors` -- decorator that classifies and re-raises.
"""

from apiguard.classifier.classifier import ClassifierOptions, FailureClassifier
from apiguard.classifier.decorators import classify_errors
from apiguard.classifier.shapes import describe_failure

__all__ = [
    "ClassifierOptions",
    "FailureClassifier",
    "classify_errors",
    "describe_failure",
]
