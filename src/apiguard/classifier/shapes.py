"""Tagged variants describing the shape of a raw failure.

Classification first reduces whatever was raised or passed in to exactly
one of four variants, in this precedence:

1. :class:`StructuredShape` -- anything with a numeric ``status`` and a
   string ``message``, as attributes (e.g.
   :class:`~apiguard.exceptions.StructuredFailure`) or as mapping keys
   (e.g. a decoded JSON error body).
2. :class:`ExceptionShape` -- any other exception instance.
3. :class:`TextShape` -- a plain string.
4. :class:`OpaqueShape` -- everything else.

The classifier then dispatches on the variant type alone.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class StructuredShape:
    status: Union[int, float]
    message: str
    code: Optional[str] = None


@dataclass(frozen=True)
class ExceptionShape:
    error: BaseException


@dataclass(frozen=True)
class TextShape:
    text: str


@dataclass(frozen=True)
class OpaqueShape:
    value: Any


FailureShape = Union[StructuredShape, ExceptionShape, TextShape, OpaqueShape]


def _field(failure: Any, name: str) -> Any:
    # Lazy properties and odd mappings may raise anything; treat as absent.
    try:
        if isinstance(failure, Mapping):
            return failure.get(name)
        return getattr(failure, name, None)
    except Exception:
        return None


def _as_structured(failure: Any) -> Optional[StructuredShape]:
    status = _field(failure, "status")
    message = _field(failure, "message")
    # bool is an int subclass; True is not a status code.
    if not isinstance(status, (int, float)) or isinstance(status, bool):
        return None
    if not isinstance(message, str):
        return None
    code = _field(failure, "code")
    return StructuredShape(status, message, code if isinstance(code, str) else None)


def describe_failure(failure: Any) -> FailureShape:
    """Reduce *failure* to its :data:`FailureShape` variant."""
    structured = _as_structured(failure)
    if structured is not None:
        return structured
    if isinstance(failure, BaseException):
        return ExceptionShape(failure)
    if isinstance(failure, str):
        return TextShape(failure)
    return OpaqueShape(failure)
