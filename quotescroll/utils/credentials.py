"""Local storage for the Readwise API token.

The token is kept in its own file, base64-encoded and readable only by the
owner. It never leaves the device except as the bearer value sent to Readwise.
"""

import base64
import binascii
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def encode_token(token: str) -> str:
    """Encode a token with base64 encoding.

    This is not secure encryption, only obfuscation against casual reading.
    """
    if not token:
        return ""
    return base64.b64encode(token.encode()).decode()


def decode_token(encoded_token: str) -> str:
    """Decode a base64-encoded token.

    Returns:
        str: The decoded token or empty string if the value is not valid base64
    """
    if not encoded_token:
        return ""
    try:
        return base64.b64decode(encoded_token.encode(), validate=True).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.error(f"Error decoding token: {e}")
        return ""


def save_token_to_file(token: str, file_path: Path) -> bool:
    """Save an API token to a file with basic encoding.

    Args:
        token: The API token to save
        file_path: Path to save the token to

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w") as f:
            f.write(encode_token(token))

        # Owner read/write only on Unix-like systems
        if os.name == "posix":
            os.chmod(file_path, 0o600)

        logger.debug(f"Token saved to {file_path}")
        return True
    except OSError as e:
        logger.error(f"Error saving token to file: {e}")
        return False


def load_token_from_file(file_path: Path) -> str:
    """Load an API token from a file and decode it.

    Returns:
        str: The decoded token or empty string if error or file not found
    """
    if not file_path.exists():
        logger.debug(f"Token file not found: {file_path}")
        return ""

    try:
        with open(file_path) as f:
            encoded_token = f.read().strip()
    except OSError as e:
        logger.error(f"Error loading token from file: {e}")
        return ""

    return decode_token(encoded_token)


def delete_token_file(file_path: Path) -> bool:
    """Remove a stored token.

    Returns:
        bool: True if the token is gone afterwards (including when there was none)
    """
    try:
        file_path.unlink(missing_ok=True)
        logger.debug(f"Token file removed: {file_path}")
        return True
    except OSError as e:
        logger.error(f"Error removing token file: {e}")
        return False


def mask_token(token: str) -> str:
    """Mask a token for display or logging.

    Returns:
        str: The masked token (first 4 + last 4 characters visible)
    """
    if not token:
        return ""

    min_token_length_for_partial_mask = 8
    if len(token) <= min_token_length_for_partial_mask:
        return "*" * len(token)

    visible_chars = 4
    return token[:visible_chars] + "*" * (len(token) - 2 * visible_chars) + token[-visible_chars:]
