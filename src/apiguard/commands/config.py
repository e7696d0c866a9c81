"""Config commands -- view and modify the persisted client configuration.

Provides the ``apiguard config`` sub-command group.  Settings live in
``config.json`` under the apiguard config directory; environment
variables and ``--base-url`` still override them at run time::

    apiguard config show
    apiguard config set base_url https://api.example.com/api
    apiguard config set timeout 10
"""

from __future__ import annotations

import typer

from apiguard.config import config_path, get_config_dir, load_config, save_config
from apiguard.exceptions import ConfigError
from apiguard.exit_codes import EXIT_INVALID_USAGE
from apiguard.models import ClientConfig
from apiguard.output import error, format_response, info, success

config_app = typer.Typer(no_args_is_help=True)


def _load() -> ClientConfig:
    try:
        return load_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@config_app.command("show")
def config_show() -> None:
    """Show the configuration stored on disk."""
    config = _load()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key, e.g. 'base_url' or 'timeout'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the field's type and the whole configuration is
    validated before it is written.
    """
    data = _load().model_dump(mode="json")
    if key not in data:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    data[key] = value
    try:
        updated = ClientConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_config(updated)
    success(f"Set {key} = {getattr(updated, key)}")
    info(f"Saved to {config_path()}")
