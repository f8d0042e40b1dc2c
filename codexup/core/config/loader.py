"""
Settings loader — reads persisted installer choices into options.

Users can keep their answers in a YAML file so repeat runs do not ask
again.  The file is validated with Pydantic and merged *under* CLI flags:
flags win over settings, settings win over built-in defaults.

Example ``~/.codex-1up/settings.yml``::

    profile: balanced
    install_tools: select
    tools_selected: [rg, fd, jq]
    notify: "yes"
    skills: all
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from codexup.core.models.options import InstallerOptions

logger = logging.getLogger(__name__)

SETTINGS_ENV = "CODEXUP_SETTINGS"
SETTINGS_FILE = "settings.yml"

# Keys that only make sense per invocation, never persisted.
_RUNTIME_ONLY = frozenset({"dry_run", "assume_yes", "skip_confirmation"})


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


def default_settings_path(home_dir: Path | None = None) -> Path:
    return (home_dir or Path.home()) / ".codex-1up" / SETTINGS_FILE


def find_settings_file(home_dir: Path | None = None) -> Path | None:
    """Locate the settings file.

    ``$CODEXUP_SETTINGS`` wins when set (even if the file is missing, so
    a typo surfaces as an error instead of silently using defaults).

    Returns:
        Path to the settings file, or None if there is none.
    """
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(env_path).expanduser()

    candidate = default_settings_path(home_dir)
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None = None, home_dir: Path | None = None) -> dict[str, Any]:
    """Load and validate persisted installer choices.

    Args:
        path: Explicit settings path. If None, searches the default locations.
        home_dir: Home directory used for the default location.

    Returns:
        Mapping of option names to values (empty when no file exists).

    Raises:
        ConfigError: If the file is missing (explicit path) or invalid.
    """
    if path is None:
        path = find_settings_file(home_dir)
        if path is None:
            return {}

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading installer settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    ignored = sorted(k for k in data if k in _RUNTIME_ONLY)
    if ignored:
        logger.warning("Ignoring per-run keys in %s: %s", path, ", ".join(ignored))
    data = {k: _normalise(v) for k, v in data.items() if k not in _RUNTIME_ONLY}

    try:
        InstallerOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer settings in {path}: {e}") from e

    logger.info("Loaded %d installer setting(s) from %s", len(data), path)
    return data


def build_options(
    settings: dict[str, Any] | None = None,
    **flags: Any,
) -> InstallerOptions:
    """Merge settings and CLI flags into frozen options.

    ``None`` flag values mean "not given on the command line" and leave
    the settings/default value in place.
    """
    base = InstallerOptions.model_validate(settings or {})
    return base.with_overrides(**flags)


def _normalise(value: Any) -> Any:
    # YAML 1.1 reads bare yes/no as booleans.
    if value is True:
        return "yes"
    if value is False:
        return "no"
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    return value
