"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for apiguard:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.apiguard/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config file** -- a single :class:`~apiguard.models.ClientConfig` JSON
  file, managed via :func:`load_config` and :func:`save_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the config file, and defaults into the effective
  :class:`~apiguard.models.ClientConfig`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a crash never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from apiguard.exceptions import ConfigError
from apiguard.models import ClientConfig

_APP_NAME = "apiguard"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "APIGUARD_API_BASE_URL"
ENV_TIMEOUT = "APIGUARD_TIMEOUT"
ENV_DEBUG = "APIGUARD_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/apiguard/`` (default ``~/.config/apiguard/``).
    On macOS/Windows: ``~/.apiguard/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (stored credentials, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/apiguard/`` (default ``~/.local/share/apiguard/``).
    On macOS/Windows: ``~/.apiguard/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  When *mode* is
    given, permissions are applied before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_config_file() -> dict[str, Any]:
    path = config_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


def _build(data: dict[str, Any], source: str) -> ClientConfig:
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration ({source}): {exc}") from exc


def load_config() -> ClientConfig:
    """Load the configuration file.

    Returns:
        The deserialised :class:`~apiguard.models.ClientConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    return _build(_read_config_file(), str(config_path()))


def save_config(config: ClientConfig) -> None:
    """Persist *config* atomically to the config directory."""
    data = config.model_dump(mode="json")
    atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def resolve_config(cli_base_url: Optional[str] = None) -> ClientConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flag (``cli_base_url``)
        2. Environment variables (``APIGUARD_API_BASE_URL``,
           ``APIGUARD_TIMEOUT``, ``APIGUARD_DEBUG``)
        3. Config file (``~/.config/apiguard/config.json``)
        4. Defaults

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """
    data = _read_config_file()

    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        data["base_url"] = env_base_url

    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            data["timeout"] = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {env_timeout!r}") from exc

    env_debug = os.environ.get(ENV_DEBUG)
    if env_debug is not None:
        data["debug"] = _parse_bool(ENV_DEBUG, env_debug)

    if cli_base_url is not None:
        data["base_url"] = cli_base_url

    return _build(data, "resolved")
