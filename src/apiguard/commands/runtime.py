"""Wiring shared by every CLI command.

:func:`build_runtime` resolves configuration and assembles the
credential session, event bus, and failure classifier a command needs.
:func:`fail` classifies an exception and exits with the matching code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NoReturn, Optional

import typer

from apiguard.auth import CredentialSession, FileCredentialStore
from apiguard.classifier import ClassifierOptions, FailureClassifier
from apiguard.client import SyncClient
from apiguard.config import resolve_config
from apiguard.events import UNAUTHORIZED_EVENT, EventBus, get_event_bus
from apiguard.exceptions import ApiguardError
from apiguard.exit_codes import exit_code_for_kind
from apiguard.models import ClientConfig
from apiguard.output import debug, error, get_output, suggest


@dataclass
class Runtime:
    """Everything a command needs to talk to the API."""

    config: ClientConfig
    session: CredentialSession
    events: EventBus
    classifier: FailureClassifier

    def client(self) -> SyncClient:
        return SyncClient(self.config, self.session, events=self.events)


def _on_unauthorized(failure: Any) -> None:
    debug("Server rejected the credential; stored token removed.")


def build_runtime(ctx: typer.Context) -> Runtime:
    """Resolve config and assemble the runtime for the current invocation.

    Raises:
        typer.Exit: With the error's exit code if configuration is invalid.
    """
    obj = ctx.obj or {}
    try:
        config = resolve_config(cli_base_url=obj.get("base_url"))
    except ApiguardError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    session = CredentialSession(FileCredentialStore(), key=config.credential_key)
    events = get_event_bus()
    if events.listener_count(UNAUTHORIZED_EVENT) == 0:
        events.subscribe(UNAUTHORIZED_EVENT, _on_unauthorized)

    classifier = FailureClassifier(
        ClassifierOptions(
            show_toast=get_output().notify,
            clear_credential=session.clear,
            redirect_to_login=lambda: suggest("Sign in again: apiguard auth login <email>"),
            on_network_failure=lambda err: suggest("Check the API address with --base-url."),
        )
    )
    return Runtime(config=config, session=session, events=events, classifier=classifier)


def fail(runtime: Runtime, exc: Exception, context: Optional[str] = None) -> NoReturn:
    """Classify *exc*, report it, and exit with the kind's exit code."""
    classified = runtime.classifier.classify(exc, context)
    debug(f"{classified.kind.value}: {classified.message}")
    raise typer.Exit(code=exit_code_for_kind(classified.kind))
