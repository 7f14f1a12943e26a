"""Main CLI entry point for quotescroll."""

import logging
import sys
from pathlib import Path

from ..logging_config import setup_logging
from .parsers import create_parser

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI application."""
    parser = create_parser()

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=Path(args.log_file) if args.log_file else None)

    # Call the appropriate function
    try:
        args.func(args)
    except Exception as e:
        logger.error("Unhandled exception: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
