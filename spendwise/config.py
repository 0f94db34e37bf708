"""Configuration file management for spendwise."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendwise.currency import DEFAULT_CONVERSION_RATE, validate_currency
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "currency": "USD",
    "conversion_rate": DEFAULT_CONVERSION_RATE,
    "analysis_delay": 2.0,
    "assistant_model": "gemini-pro",
}


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    currency: str = "USD"
    conversion_rate: float = DEFAULT_CONVERSION_RATE
    analysis_delay: float = 2.0
    assistant_api_key: str | None = None
    assistant_model: str = "gemini-pro"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendwise" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    The file may hold an API key, so it is readable by the owner only.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def parse_setting(key: str, value: str) -> tuple[Any, str | None]:
    """Parse and validate a single setting from its string form.

    Args:
        key: Setting name.
        value: Raw value as typed by the user.

    Returns:
        Tuple of (parsed_value, error_message).
    """
    if key == "currency":
        currency = value.upper()
        is_valid, error = validate_currency(currency)
        if not is_valid:
            return None, error
        return currency, None

    if key in ("conversion_rate", "analysis_delay"):
        try:
            number = float(value)
        except ValueError:
            return None, f"{key} must be a number"
        if key == "conversion_rate" and number <= 0:
            return None, "conversion_rate must be positive"
        if key == "analysis_delay" and number < 0:
            return None, "analysis_delay must not be negative"
        return number, None

    if key in ("assistant_api_key", "assistant_model"):
        return value, None

    return None, f"Unknown setting '{key}'"


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults for a missing file or missing keys.

    An unsupported currency in the file is logged and replaced by the default.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings built from the file merged over the defaults.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    merged = {**DEFAULT_CONFIG, **config}

    currency = str(merged["currency"]).upper()
    is_valid, error = validate_currency(currency)
    if not is_valid:
        logger.warning("Ignoring configured currency: %s", error)
        currency = DEFAULT_CONFIG["currency"]

    return Settings(
        currency=currency,
        conversion_rate=float(merged["conversion_rate"]),
        analysis_delay=float(merged["analysis_delay"]),
        assistant_api_key=merged.get("assistant_api_key") or None,
        assistant_model=str(merged["assistant_model"]),
    )


def set_setting(key: str, value: str, config_path: Path | None = None) -> str | None:
    """Validate and persist one setting.

    Args:
        key: Setting name.
        value: Raw value as typed by the user.
        config_path: Path to config file. If None, uses default location.

    Returns:
        Error message, or None on success.
    """
    parsed, error = parse_setting(key, value)
    if error:
        return error

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = dict(DEFAULT_CONFIG)

    config[key] = parsed
    save_config(config, config_path)
    return None
