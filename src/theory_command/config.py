"""Configuration loading and logging setup for theory invocation.

``load_config`` reads an ``InvokerConfig`` from a YAML file,
``apply_env_overrides`` layers ``THEORY_COMMAND_*`` environment variables
over default fields, and ``configure_logging`` wires the
``theory_command`` logger to the console and an optional log file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from theory_command.models import InvokerConfig

# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


def load_config(path: str | Path) -> InvokerConfig:
    """Load an ``InvokerConfig`` from a YAML mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file does not parse to a mapping.
        pydantic.ValidationError: If a field value is invalid.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"config file not found: {path}"
        raise FileNotFoundError(msg)

    with open(file_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"config file must contain a YAML mapping, got {type(data).__name__}"
        raise ValueError(msg)

    return InvokerConfig(**data)


# ---------------------------------------------------------------------------
# Environment variable support
# ---------------------------------------------------------------------------

_ENV_FIELD_MAP: dict[str, str] = {
    "THEORY_COMMAND_LOG_LEVEL": "log_level",
    "THEORY_COMMAND_LOG_FILE": "log_file",
    "THEORY_COMMAND_MAX_STRING_LENGTH": "max_string_length",
}
"""Maps environment variable names to InvokerConfig field names."""


def apply_env_overrides(config: InvokerConfig) -> InvokerConfig:
    """Apply ``THEORY_COMMAND_*`` env var overrides to *config*.

    Environment variables only replace fields still at their default
    value; explicitly configured fields win. Unparseable values are
    ignored.

    Args:
        config: The configuration to apply overrides to.

    Returns:
        A new ``InvokerConfig`` with overrides applied, or *config* itself
        when nothing changed.
    """
    defaults = InvokerConfig()
    overrides: dict[str, Any] = {}

    for env_var, field_name in _ENV_FIELD_MAP.items():
        env_value = os.environ.get(env_var)
        if env_value is None:
            continue
        if getattr(config, field_name) != getattr(defaults, field_name):
            continue

        parsed = _parse_env_value(field_name, env_value)
        if parsed is not None:
            overrides[field_name] = parsed

    if not overrides:
        return config

    return config.model_copy(update=overrides)


def _parse_env_value(field_name: str, raw: str) -> Any:
    """Parse a raw env var string for *field_name*, or ``None`` if invalid."""
    if field_name in ("log_level", "log_file"):
        return raw or None

    if field_name == "max_string_length":
        try:
            value = int(raw)
        except ValueError:
            return None
        if value < 1:
            return None
        return value

    return None


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def configure_logging(config: InvokerConfig) -> None:
    """Configure the ``theory_command`` logger.

    Adds a console handler and, when ``config.log_file`` is set, a file
    handler. Idempotent: repeated calls do not duplicate handlers.

    Args:
        config: Configuration providing ``log_level`` and ``log_file``.
    """
    package_logger = logging.getLogger("theory_command")
    package_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    if not any(type(h) is logging.StreamHandler for h in package_logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(console)

    if config.log_file is not None:
        target = str(Path(config.log_file).resolve())
        has_file = any(
            isinstance(h, logging.FileHandler)
            and getattr(h, "baseFilename", None) == target
            for h in package_logger.handlers
        )
        if not has_file:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            package_logger.addHandler(file_handler)
