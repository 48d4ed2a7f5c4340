"""Configuration file management for spendtrack."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendtrack.store.storage import get_storage_path

DEFAULT_CURRENCY_SYMBOL = "$"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration with defaults applied."""

    data_path: Path
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    log_level: str = DEFAULT_LOG_LEVEL


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
    return get_xdg_config_home() / "spendtrack" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "data_path": str(get_storage_path()),
        "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
        "log_level": DEFAULT_LOG_LEVEL,
    }

    save_config(default_config, config_path)


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

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when there is no config file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings with every field resolved.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    data_path = config.get("data_path")
    return Settings(
        data_path=Path(data_path).expanduser() if data_path else get_storage_path(),
        currency_symbol=config.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
        log_level=config.get("log_level", DEFAULT_LOG_LEVEL),
    )
