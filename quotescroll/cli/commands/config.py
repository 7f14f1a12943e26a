"""Configuration command handler for the quotescroll CLI."""

import getpass
import logging
import platform
import sys

from ...config import (
    BOOLEAN_KEYS,
    clear_readwise_token,
    get_config_dir,
    get_config_value,
    get_data_dir,
    get_token_file_path,
    is_configured,
    list_config,
    set_config_value,
    set_readwise_token,
)
from ...utils.credentials import mask_token

logger = logging.getLogger(__name__)

VALID_KEYS = ["log_level", "database_path", *BOOLEAN_KEYS]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def handle_configure(args):
    """Handle the 'config' command and its subcommands."""
    if not getattr(args, "config_command", None):
        # Default to 'show' if no subcommand specified
        args.config_command = "show"

    if args.config_command == "show":
        handle_config_show(args)
    elif args.config_command == "token":
        handle_config_token(args)
    elif args.config_command == "clear-token":
        handle_config_clear_token(args)
    elif args.config_command == "set":
        handle_config_set(args)
    elif args.config_command == "paths":
        handle_config_paths(args)
    else:
        logger.error("Unknown config subcommand: %s", args.config_command)
        sys.exit(1)


def handle_config_show(_):
    """Show current configuration."""
    logger.info("Showing current configuration")
    config = list_config()

    print("\n--- Current Configuration ---")
    for key, value in config.items():
        print(f"{key}: {value}")

    if is_configured():
        print("\nApplication is properly configured.")
    else:
        print("\nWARNING: No Readwise API token stored. Set it with 'quotescroll config token'.")


def _save_token(token: str) -> None:
    if set_readwise_token(token):
        logger.info("Readwise API token successfully saved.")
        print(f"Readwise API token {mask_token(token)} successfully saved.")
    else:
        logger.error("Failed to save Readwise API token.")
        print("Failed to save Readwise API token.")
        sys.exit(1)


def handle_config_token(args):
    """Configure the Readwise API token."""
    if args.token:
        _save_token(args.token)
        return

    # Interactive mode - prompt for token
    try:
        token = getpass.getpass("Enter your Readwise API token: ")
    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled.")
        return

    if not token:
        print("No token provided. Operation cancelled.")
        return
    _save_token(token)


def handle_config_clear_token(_):
    """Forget the stored Readwise API token."""
    if clear_readwise_token():
        print("Readwise API token removed.")
    else:
        print("Failed to remove Readwise API token.")
        sys.exit(1)


def _parse_bool(key: str, raw: str) -> bool:
    if raw.lower() in ("true", "yes", "1", "on"):
        return True
    if raw.lower() in ("false", "no", "0", "off"):
        return False
    logger.error("Invalid boolean value for %s: %s", key, raw)
    print("Error: Invalid boolean value. Use 'true' or 'false'.")
    sys.exit(1)


def handle_config_set(args):
    """Set a configuration value."""
    if args.key not in VALID_KEYS:
        logger.error("Unknown configuration key: %s", args.key)
        print(f"Error: Unknown configuration key: {args.key}")
        print(f"Valid keys are: {', '.join(VALID_KEYS)}")
        sys.exit(1)

    if args.key in BOOLEAN_KEYS:
        value = _parse_bool(args.key, args.value)
    elif args.key == "log_level":
        if args.value.upper() not in VALID_LOG_LEVELS:
            logger.error("Invalid log level: %s", args.value)
            print(f"Error: Invalid log level. Valid values are: {', '.join(VALID_LOG_LEVELS)}")
            sys.exit(1)
        value = args.value.upper()
    else:
        value = args.value

    if set_config_value(args.key, value):
        logger.info("Configuration value set: %s = %s", args.key, value)
        print(f"Configuration updated: {args.key} = {value}")
    else:
        logger.error("Failed to set configuration value: %s", args.key)
        print("Error: Failed to update configuration.")
        sys.exit(1)


def handle_config_paths(_):
    """Show configuration and data paths."""
    print("\n--- Application Paths ---")
    print(f"Configuration directory: {get_config_dir()}")
    print(f"Data directory: {get_data_dir()}")
    print(f"Database path: {get_config_value('database_path')}")
    print(f"Token file: {get_token_file_path()}")
    print(f"Detected platform: {platform.system() or sys.platform}")
