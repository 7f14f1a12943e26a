"""Common utility functions for CLI commands."""

import logging
import os

from ...config import get_database_path, get_readwise_token
from ...core import QuoteScroll

# Environment variable for Readwise token (optional)
READWISE_TOKEN_ENV_VAR = "READWISE_API_TOKEN"

logger = logging.getLogger(__name__)


def get_readwise_token_cli(args) -> str | None:
    """Get Readwise token from args, environment variable, or config."""
    # First try command line argument
    if getattr(args, "api_token", None):
        logger.debug("Using Readwise API token from command line argument.")
        return args.api_token

    # Then try environment variable
    token_from_env = os.environ.get(READWISE_TOKEN_ENV_VAR)
    if token_from_env:
        logger.debug("Using Readwise API token from environment variable %s.", READWISE_TOKEN_ENV_VAR)
        return token_from_env

    # Finally try configured token
    token_from_config = get_readwise_token()
    if token_from_config:
        logger.debug("Using Readwise API token from configuration.")
        return token_from_config

    logger.debug("Readwise API token not found in args, environment variable, or configuration.")
    return None


def get_db_path_cli(args) -> str:
    """Get the database path from args, falling back to the configured one."""
    if getattr(args, "db_path", None):
        logger.debug("Using database path from command line argument: %s", args.db_path)
        return args.db_path
    return get_database_path()


def pick(cli_value, config_value):
    """Use the command line value when one was given, else the config default."""
    return config_value if cli_value is None else cli_value


def get_app_cli(args) -> QuoteScroll:
    """Open the application for commands that only read or edit the local store."""
    return QuoteScroll(readwise_token=get_readwise_token_cli(args) or "", db_path=get_db_path_cli(args))
