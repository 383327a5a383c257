"""
Main entry point for the shtuff command-line application.
"""

import sys

from .cli import parse_args, handle_cli_command


def main(argv=None) -> int:
    """Entry point for the ``shtuff`` console script."""
    args = parse_args(argv)
    return handle_cli_command(args)


if __name__ == "__main__":
    sys.exit(main())
