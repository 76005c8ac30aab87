"""Configuration loader.

Reads config/config.yaml (or the file named by ADMISSIONS_CONFIG_PATH),
validates it with the pydantic schema and caches the result for the
process. Without a config file the built-in defaults apply, so the CLI
works out of the box on a bare roster file.

Usage:
    from admissions.config import get_config

    cutoff = get_config().classifier.urgent_within_days
"""

import os
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from admissions.config_schema import CURRENT_SCHEMA_VERSION, AppConfig
from admissions.core.errors import ConfigLoadError, ConfigValidationError
from admissions.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "ADMISSIONS_CONFIG_PATH"
DEFAULT_CONFIG_PATH = Path("config/config.yaml")

_lock = threading.Lock()
_cached: AppConfig | None = None


def config_path() -> Path:
    """The config file in effect: $ADMISSIONS_CONFIG_PATH, else config/config.yaml."""
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override) if override else DEFAULT_CONFIG_PATH


def _describe_error(err: dict[str, Any]) -> str:
    where = ".".join(str(part) for part in err["loc"]) or "(root)"
    ctx = err.get("ctx") or {}
    kind = err["type"]

    if kind in ("int_type", "int_parsing"):
        return f"'{where}' must be a whole number (got {err.get('input')!r})"
    if kind == "greater_than_equal":
        return f"'{where}' must be at least {ctx.get('ge')} (got {err.get('input')!r})"
    if kind == "less_than_equal":
        return f"'{where}' must be at most {ctx.get('le')} (got {err.get('input')!r})"
    if kind == "literal_error":
        return f"'{where}' must be one of {ctx.get('expected')} (got {err.get('input')!r})"
    if kind == "string_type":
        return f"'{where}' must be text"
    if kind == "model_type":
        return f"'{where}' must be a section (a YAML mapping)"
    return f"'{where}': {err['msg']}"


def _read_yaml(path: Path) -> dict[str, Any]:
    """Parse a config file into a mapping; an empty file is an empty mapping.

    Raises:
        ConfigLoadError: If the file is missing, unreadable or not a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigLoadError(
            f"Configuration file not found: {path}\n"
            f"Copy config/config.yaml.example there, or set {CONFIG_PATH_ENV}"
        ) from None
    except OSError as e:
        raise ConfigLoadError(f"Cannot read configuration file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse YAML in {path}:\n{e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Configuration file must be a YAML mapping, got {type(data).__name__}"
        )
    return data


def _build_config(data: dict[str, Any], path: Path) -> AppConfig:
    """Validate parsed YAML against AppConfig.

    Raises:
        ConfigValidationError: On schema errors or an unsupported schema_version
    """
    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        details = "\n".join(f"  - {_describe_error(err)}" for err in e.errors())
        raise ConfigValidationError(
            f"Configuration validation failed for {path}:\n{details}"
        ) from e

    if config.schema_version > CURRENT_SCHEMA_VERSION:
        raise ConfigValidationError(
            f"{path} declares schema_version {config.schema_version}, but this "
            f"release understands up to {CURRENT_SCHEMA_VERSION}; upgrade the "
            "assistant or lower schema_version"
        )
    return config


def load_config(path: Path | None = None) -> AppConfig:
    """Read and validate a config file, bypassing the cache.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed
        ConfigValidationError: If validation fails
    """
    path = path or config_path()
    config = _build_config(_read_yaml(path), path)
    logger.info(
        "config_loaded",
        path=str(path),
        schema_version=config.schema_version,
        roster=config.roster.path,
        urgent_within_days=config.classifier.urgent_within_days,
    )
    return config


def get_config() -> AppConfig:
    """Return the process-wide config, loading it on first use.

    A missing file means defaults; a file that exists but is invalid raises.

    Raises:
        ConfigLoadError: If an existing file cannot be parsed
        ConfigValidationError: If validation fails
    """
    global _cached

    with _lock:
        if _cached is None:
            path = config_path()
            if path.exists():
                _cached = load_config(path)
            else:
                logger.info("config_file_absent_using_defaults", path=str(path))
                _cached = AppConfig()
        return _cached


def validate_config_file(path: Path | None = None) -> tuple[bool, str]:
    """Check a config file without touching the cached config.

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        config = load_config(path)
    except ConfigLoadError as e:
        return False, f"Load error: {e}"
    except ConfigValidationError as e:
        return False, f"Validation error: {e}"

    summary = [
        f"Configuration valid (schema version {config.schema_version})",
        f"  - roster: {config.roster.path or '(none)'}",
        f"  - urgent within {config.classifier.urgent_within_days} days",
        f"  - default deadline {config.classifier.default_deadline_days} days",
    ]
    return True, "\n".join(summary)


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads. Used by tests."""
    global _cached
    with _lock:
        _cached = None
