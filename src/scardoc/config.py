"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for scardoc:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.scardoc/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~scardoc.models.ScardocConfig`
  JSON file storing defaults (doc marker, file extensions, output path).
* **Project config** -- An optional ``./.scardoc.json`` holding a partial
  config that is layered over the global one.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so an interrupted run never leaves a truncated
document or config behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from scardoc.exceptions import ConfigError
from scardoc.models import ScardocConfig

_APP_NAME = "scardoc"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = ".scardoc.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


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

    On Linux/BSD: ``$XDG_CONFIG_HOME/scardoc/`` (default ``~/.config/scardoc/``).
    On macOS/Windows: ``~/.scardoc/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/scardoc/`` (default ``~/.local/share/scardoc/``).
    On macOS/Windows: ``~/.scardoc/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the exception re-raised.
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
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_global_config() -> ScardocConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~scardoc.models.ScardocConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return ScardocConfig()
    data = _read_json_object(path, "global config")
    try:
        return ScardocConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: ScardocConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./.scardoc.json``.

    The file may contain any subset of the :class:`~scardoc.models.ScardocConfig`
    sections, e.g. ``{"parser": {"strict": true}}``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json_object(path, "project config")


def _deep_update(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay *overlay* onto a copy of *base*."""
    result = dict(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{raw}'")


# --- Precedence resolution ---


def resolve_config(
    cli_marker: Optional[str] = None,
    cli_strict: Optional[bool] = None,
    cli_output: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> ScardocConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_marker``, ``cli_strict``, ``cli_output``, ``cli_format``)
        2. Environment variables (``SCARDOC_MARKER``, ``SCARDOC_STRICT``,
           ``SCARDOC_OUTPUT``)
        3. Project config (``./.scardoc.json``)
        4. User config (``~/.config/scardoc/config.json``)
        5. Defaults

    Returns:
        The effective :class:`~scardoc.models.ScardocConfig`.

    Raises:
        ConfigError: If any layer holds invalid values.
    """
    # 5 + 4. Global config (fills in defaults automatically)
    data = load_global_config().model_dump()

    # 3. Project-local overlay
    project = load_project_config()
    if project is not None:
        data = _deep_update(data, project)

    # 2. Environment
    env_marker = os.environ.get("SCARDOC_MARKER")
    if env_marker:
        data["parser"]["marker"] = env_marker
    env_strict = _env_bool("SCARDOC_STRICT")
    if env_strict is not None:
        data["parser"]["strict"] = env_strict
    env_output = os.environ.get("SCARDOC_OUTPUT")
    if env_output:
        data["output"]["path"] = env_output

    # 1. CLI flags (highest precedence)
    if cli_marker is not None:
        data["parser"]["marker"] = cli_marker
    if cli_strict is not None:
        data["parser"]["strict"] = cli_strict
    if cli_output is not None:
        data["output"]["path"] = cli_output
    if cli_format is not None:
        data["output"]["format"] = cli_format

    try:
        return ScardocConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
