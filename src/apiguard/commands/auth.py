"""Auth commands -- manage the stored bearer credential.

Provides the ``apiguard auth`` sub-command group::

    apiguard auth login alice@example.com   # prompts for the password
    apiguard auth whoami                    # GET /auth/me
    apiguard auth status                    # local check, no network
    apiguard auth logout
"""

from __future__ import annotations

import typer

from apiguard.commands.runtime import build_runtime, fail
from apiguard.output import format_response, get_output, info, success, suggest

auth_app = typer.Typer(no_args_is_help=True)


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    email: str = typer.Argument(help="Account e-mail address."),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Account password."
    ),
) -> None:
    """Log in and store the returned credential."""
    runtime = build_runtime(ctx)
    try:
        with runtime.client() as client:
            client.login(email, password)
    except Exception as exc:
        fail(runtime, exc, "auth login")
    success(f"Logged in as {email}.")
    suggest("Check the session: apiguard auth whoami")


@auth_app.command("logout")
def auth_logout(ctx: typer.Context) -> None:
    """Log out.  The local credential is removed even if the server call fails."""
    runtime = build_runtime(ctx)
    try:
        with runtime.client() as client:
            client.logout()
    except Exception as exc:
        get_output().debug("Server-side logout failed; local credential removed anyway.")
        fail(runtime, exc, "auth logout")
    success("Logged out.")


@auth_app.command("whoami")
def auth_whoami(ctx: typer.Context) -> None:
    """Show the user the stored credential belongs to."""
    runtime = build_runtime(ctx)
    try:
        with runtime.client() as client:
            user = client.current_user()
    except Exception as exc:
        fail(runtime, exc, "auth whoami")
    format_response(user)


@auth_app.command("status")
def auth_status(ctx: typer.Context) -> None:
    """Report whether a credential is stored.  Does not contact the server."""
    runtime = build_runtime(ctx)
    if runtime.session.is_authenticated():
        get_output().print_data("authenticated")
    else:
        get_output().print_data("not authenticated")
        info("Log in with: apiguard auth login <email>")
