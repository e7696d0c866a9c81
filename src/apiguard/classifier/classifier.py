"""Failure classification and the side effects that follow it.

:class:`FailureClassifier` turns any failure into one
:class:`~apiguard.models.ClassifiedError` and then, in order:

1. **Logs** it on the ``apiguard.classifier.classifier`` logger at a level
   chosen by kind, and hands it to the ``log_error`` hook.
2. **Notifies** the user through the ``show_toast`` hook (at most once).
3. **Recovers** according to kind:

   * ``AUTHENTICATION`` -- when ``redirect_on_auth`` is set, calls
     ``clear_credential`` and then ``redirect_to_login``.
   * ``NETWORK`` -- calls ``on_network_failure`` so the caller can queue
     or retry the operation.
   * ``SERVER`` -- calls ``on_server_failure`` likewise.

The classifier never performs network calls, never retries, and never
raises: a hook that fails is logged and the remaining effects still run.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Optional

from apiguard.classifier.shapes import (
    ExceptionShape,
    FailureShape,
    OpaqueShape,
    StructuredShape,
    TextShape,
    describe_failure,
)
from apiguard.classifier.taxonomy import (
    MSG_UNEXPECTED,
    MSG_UNKNOWN_RAW,
    classify_exception,
    classify_status,
    log_level_for,
    notification_severity_for,
)
from apiguard.models import ClassifiedError, ErrorKind, NotificationSeverity

logger = logging.getLogger(__name__)

ToastHook = Callable[[str, NotificationSeverity], None]
ErrorHook = Callable[[ClassifiedError], None]
ActionHook = Callable[[], None]


@dataclass
class ClassifierOptions:
    """Hooks and switches for :class:`FailureClassifier`.

    Attributes:
        show_toast: Displays ``user_message`` to the user with a severity.
        log_error: Receives every :class:`ClassifiedError` (telemetry).
        redirect_on_auth: Enables the ``AUTHENTICATION`` recovery action.
        clear_credential: Forgets the persisted credential, typically
            :meth:`CredentialSession.clear <apiguard.auth.CredentialSession.clear>`.
        redirect_to_login: Sends the user to the login entry point.
        on_network_failure: Retry/queue hook point for ``NETWORK`` failures.
        on_server_failure: Retry hook point for ``SERVER`` failures.
    """

    show_toast: Optional[ToastHook] = None
    log_error: Optional[ErrorHook] = None
    redirect_on_auth: bool = True
    clear_credential: Optional[ActionHook] = None
    redirect_to_login: Optional[ActionHook] = None
    on_network_failure: Optional[ErrorHook] = None
    on_server_failure: Optional[ErrorHook] = None


class FailureClassifier:
    """Classifies failures into the :class:`~apiguard.models.ErrorKind` taxonomy and reacts.

    Args:
        options: Hooks and switches; defaults to no hooks with
            ``redirect_on_auth=True``.

    Example::

        classifier = FailureClassifier(ClassifierOptions(show_toast=toast))
        try:
            client.get("/projects")
        except Exception as exc:
            error = classifier.classify(exc, "load projects")
            if error.retryable:
                schedule_retry()
    """

    def __init__(self, options: Optional[ClassifierOptions] = None) -> None:
        self._options = options if options is not None else ClassifierOptions()
        self._builders: dict[type, Callable[[Any, Optional[str]], ClassifiedError]] = {
            StructuredShape: self._from_structured,
            ExceptionShape: self._from_exception,
            TextShape: self._from_text,
            OpaqueShape: self._from_opaque,
        }

    @property
    def options(self) -> ClassifierOptions:
        return self._options

    def classify(self, failure: Any, context: Optional[str] = None) -> ClassifiedError:
        """Classify *failure*, run the side effects, and return the result.

        Args:
            failure: A :class:`~apiguard.exceptions.StructuredFailure`, a
                mapping with ``status``/``message``, any exception, a string,
                or any other value.
            context: Free-form label of where the failure happened; stored
                in ``details["context"]``.

        Returns:
            The :class:`~apiguard.models.ClassifiedError`.  Never raises.
        """
        error = self.build(failure, context)
        self._log(error)
        self._notify(error)
        self._recover(error)
        return error

    def build(self, failure: Any, context: Optional[str] = None) -> ClassifiedError:
        """Classify *failure* without any side effects."""
        shape: FailureShape = describe_failure(failure)
        return self._builders[type(shape)](shape, context)

    # ------------------------------------------------------------------ #
    # Builders, one per shape
    # ------------------------------------------------------------------ #

    def _from_structured(self, shape: StructuredShape, context: Optional[str]) -> ClassifiedError:
        kind, user_message = classify_status(shape.status)
        return ClassifiedError(
            kind=kind,
            message=shape.message,
            user_message=user_message,
            details={"status": shape.status, "code": shape.code, "context": context},
        )

    def _from_exception(self, shape: ExceptionShape, context: Optional[str]) -> ClassifiedError:
        error = shape.error
        kind, user_message = classify_exception(error)
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return ClassifiedError(
            kind=kind,
            message=str(error),
            user_message=user_message,
            details={"name": type(error).__name__, "stack": stack, "context": context},
        )

    def _from_text(self, shape: TextShape, context: Optional[str]) -> ClassifiedError:
        return ClassifiedError(
            kind=ErrorKind.UNKNOWN,
            message=shape.text,
            user_message=shape.text,
            details={"context": context},
        )

    def _from_opaque(self, shape: OpaqueShape, context: Optional[str]) -> ClassifiedError:
        return ClassifiedError(
            kind=ErrorKind.UNKNOWN,
            message=MSG_UNKNOWN_RAW,
            user_message=MSG_UNEXPECTED,
            details={"error": shape.value, "context": context},
        )

    # ------------------------------------------------------------------ #
    # Side effects
    # ------------------------------------------------------------------ #

    def _log(self, error: ClassifiedError) -> None:
        logger.log(
            log_level_for(error.kind),
            "[%s] %s",
            error.kind.value,
            error.message,
            extra={
                "error_kind": error.kind.value,
                "user_message": error.user_message,
                "error_details": error.details,
            },
        )
        if self._options.log_error is not None:
            self._invoke("log_error", self._options.log_error, error)

    def _notify(self, error: ClassifiedError) -> None:
        if self._options.show_toast is not None:
            severity = notification_severity_for(error.kind)
            self._invoke("show_toast", self._options.show_toast, error.user_message, severity)

    def _recover(self, error: ClassifiedError) -> None:
        opts = self._options
        if error.kind is ErrorKind.AUTHENTICATION:
            if not opts.redirect_on_auth:
                return
            if opts.clear_credential is not None:
                self._invoke("clear_credential", opts.clear_credential)
            if opts.redirect_to_login is not None:
                self._invoke("redirect_to_login", opts.redirect_to_login)
        elif error.kind is ErrorKind.NETWORK:
            if opts.on_network_failure is not None:
                self._invoke("on_network_failure", opts.on_network_failure, error)
        elif error.kind is ErrorKind.SERVER:
            if opts.on_server_failure is not None:
                self._invoke("on_server_failure", opts.on_server_failure, error)

    @staticmethod
    def _invoke(name: str, hook: Callable[..., Any], *args: Any) -> None:
        try:
            hook(*args)
        except Exception:
            logger.exception("Classifier hook %s failed", name)
