"""
Command-line argument parser for shtuff.
"""

import argparse

from .. import __version__
from ..ui.styles import list_styles


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="shtuff",
        description="shtuff - watch background tasks and draw progress in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shtuff run -m "Building" --success "Built" -- make all
  shtuff progress --current 4 --total 10 --message Downloading
  shtuff copy /etc/nginx /backup/nginx --style dots
  shtuff delete -r build/ dist/
  shtuff styles
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"shtuff {__version__}"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # run
    run_parser = subparsers.add_parser("run", help="Run a command and watch it")
    _add_style_argument(run_parser)
    run_parser.add_argument("-m", "--message", default=None, help="Label shown while the command runs")
    run_parser.add_argument("--success", dest="success_label", metavar="MSG",
                            default="Process completed", help="Printed when the command succeeds")
    run_parser.add_argument("--failure", dest="failure_label", metavar="MSG",
                            default="Process failed", help="Printed when the command fails")
    run_parser.add_argument("--log", dest="log_file", metavar="FILE",
                            help="Append the command's output to FILE")
    run_parser.add_argument("cmd", nargs=argparse.REMAINDER, metavar="-- CMD",
                            help="Command to run")

    # progress
    progress_parser = subparsers.add_parser("progress", help="Draw or update a progress bar")
    progress_parser.add_argument("-c", "--current", required=True, help="Completed units")
    progress_parser.add_argument("-t", "--total", required=True, help="Units representing 100%%")
    progress_parser.add_argument("-m", "--message", default=None, help="Label before the bar")
    progress_parser.add_argument("-w", "--width", default=None, help="Bar width in glyphs")
    progress_parser.add_argument("--lines-above", default=0, help="Redraw the bar N lines above the cursor")
    progress_parser.add_argument("-d", "--done", action="store_true", help="Finalize the bar now")

    # styles
    subparsers.add_parser("styles", help="List indicator styles")

    # copy
    copy_parser = subparsers.add_parser("copy", help="Copy a file or directory")
    copy_parser.add_argument("source")
    copy_parser.add_argument("destination")
    _add_style_argument(copy_parser)
    copy_parser.add_argument("-m", "--message", default="Copying...")

    # move
    move_parser = subparsers.add_parser("move", help="Move files or directories")
    move_parser.add_argument("paths", nargs="+", metavar="PATH",
                             help="Sources followed by the destination")
    move_parser.add_argument("-m", "--message", default="Moving")

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete files or directories")
    delete_parser.add_argument("paths", nargs="+", metavar="PATH")
    delete_parser.add_argument("-r", "--recursive", action="store_true",
                               help="Remove directories and their contents")
    delete_parser.add_argument("-m", "--message", default="Deleting")

    return parser


def _add_style_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s", "--style",
        default=None,
        help=f"Indicator style ({', '.join(list_styles())})"
    )


def parse_args(args=None):
    """Parse command line arguments."""
    parser = create_parser()
    return parser.parse_args(args)
