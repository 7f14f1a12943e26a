"""Configuration management for quotescroll.

This module handles reading and writing configuration settings, feed
preferences, and the locally stored Readwise API token.
"""

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any

from quotescroll.utils.credentials import delete_token_file, load_token_from_file, mask_token, save_token_to_file

logger = logging.getLogger(__name__)

APP_NAME = "quotescroll"

# Default configuration settings
DEFAULT_CONFIG = {
    "log_level": "INFO",
    "database_path": "",  # Will be auto-populated based on config_dir
    "show_sample_quotes": True,
    "randomize": False,
    "show_deleted": False,
    "include_deleted": False,
}

BOOLEAN_KEYS = ("show_sample_quotes", "randomize", "show_deleted", "include_deleted")


def get_config_dir() -> Path:
    """Get the platform-specific configuration directory."""
    system = platform.system()
    home = Path.home()

    if system == "Darwin":  # macOS
        config_dir = home / "Library" / "Application Support" / APP_NAME
    elif system == "Windows":
        config_dir = Path(os.getenv("APPDATA", str(home / "AppData" / "Roaming"))) / APP_NAME
    else:  # Linux and others
        config_dir = home / ".config" / APP_NAME

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_data_dir() -> Path:
    """Get the platform-specific data directory."""
    data_dir = get_config_dir() / "data"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def get_credentials_dir() -> Path:
    """Get the directory for storing credentials."""
    creds_dir = get_config_dir() / "credentials"
    creds_dir.mkdir(exist_ok=True)
    return creds_dir


def get_token_file_path() -> Path:
    """Get the path to the Readwise API token file."""
    return get_credentials_dir() / "readwise_token"


def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from file or create with defaults if not exists."""
    config_file = get_config_file_path()

    if config_file.exists():
        try:
            with open(config_file) as f:
                config = json.load(f)
            logger.debug(f"Loaded configuration from {config_file}")

            # Merge with defaults to ensure all keys exist
            merged_config = DEFAULT_CONFIG.copy()
            merged_config.update(config)
            return merged_config
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration: {e}")
            logger.info("Using default configuration instead")
            return DEFAULT_CONFIG.copy()

    config = DEFAULT_CONFIG.copy()
    config["database_path"] = str(get_data_dir() / f"{APP_NAME}.db")
    save_config(config)
    return config


def save_config(config: dict[str, Any]) -> bool:
    """Save configuration to file.

    Returns:
        bool: True if successful, False otherwise
    """
    config_file = get_config_file_path()
    try:
        with open(config_file, "w") as f:
            json.dump(config, f, indent=2)
        logger.debug(f"Saved configuration to {config_file}")
        return True
    except OSError as e:
        logger.error(f"Error saving configuration: {e}")
        return False


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a configuration value by key, or `default` if it is not set."""
    return load_config().get(key, default)


def set_config_value(key: str, value: Any) -> bool:
    """Set a configuration value.

    Returns:
        bool: True if successful, False otherwise
    """
    config = load_config()
    config[key] = value
    return save_config(config)


def set_readwise_token(token: str) -> bool:
    """Store the Readwise API token in its own obfuscated file.

    Returns:
        bool: True if stored successfully, False otherwise
    """
    if not token:
        logger.warning("Attempting to store empty API token")
        return False

    logger.info(f"Storing Readwise API token {mask_token(token)}")
    return save_token_to_file(token, get_token_file_path())


def get_readwise_token() -> str:
    """Retrieve the stored Readwise API token, or an empty string if not set."""
    token = load_token_from_file(get_token_file_path())

    if token:
        logger.debug(f"Retrieved Readwise API token: {mask_token(token)}")
    else:
        logger.debug("No Readwise API token found")

    return token


def clear_readwise_token() -> bool:
    """Forget the stored Readwise API token."""
    logger.info("Clearing stored Readwise API token")
    return delete_token_file(get_token_file_path())


def get_database_path() -> str:
    """Get the path to the SQLite database file, setting the default on first use."""
    path = get_config_value("database_path", "")
    if not path:
        path = str(get_data_dir() / f"{APP_NAME}.db")
        set_config_value("database_path", path)
    return path


def is_configured() -> bool:
    """Check if a Readwise token has been stored."""
    return bool(get_readwise_token())


def list_config() -> dict[str, Any]:
    """Get all configuration values for display, with the API token masked."""
    display_config = load_config().copy()

    token = get_readwise_token()
    display_config["readwise_token"] = mask_token(token) if token else "[Not Set]"

    return display_config
