"""
CLI command handlers for shtuff.

Each handler returns the process exit code. Library errors have already been
printed by the time they reach a handler, so handlers only translate them
into exit codes.
"""

import signal
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .. import operations
from ..config import ConfigurationError, load_config
from ..core.monitor import DisplayOptions, Monitor
from ..core.tasks import launch
from ..ui.progress import ProgressBar
from ..ui.styles import STYLES
from ..ui.terminal import Terminal
from ..utils import ShtuffError, TaskFailure, get_logger, setup_logging


def handle_cli_command(args, terminal: Optional[Terminal] = None,
                       console: Optional[Console] = None) -> int:
    """
    Dispatch parsed arguments to the matching handler.

    Returns:
        int: Exit code (0 for success, non-zero for error)
    """
    console = console or Console(stderr=True)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        return 1

    setup_logging(config, verbose=args.verbose)
    logger = get_logger(__name__)
    terminal = terminal or Terminal.from_config(config.ui)

    handlers = {
        "run": _handle_run,
        "progress": _handle_progress,
        "styles": _handle_styles,
        "copy": _handle_copy,
        "move": _handle_move,
        "delete": _handle_delete,
    }

    logger.debug(f"Running command '{args.command}'")
    try:
        return handlers[args.command](args, config, terminal, console)
    except TaskFailure as e:
        return _shell_exit_code(e.exit_code)
    except ShtuffError as e:
        logger.debug(f"Command '{args.command}' failed: {e}")
        return 1
    except KeyboardInterrupt:
        terminal.show_cursor()
        return 128 + signal.SIGINT


def _shell_exit_code(exit_code: int) -> int:
    """Map Python's negative signal codes to the shell convention."""
    if exit_code < 0:
        return 128 - exit_code
    return exit_code


def _strip_separator(command: List[str]) -> List[str]:
    if command and command[0] == "--":
        return command[1:]
    return command


def _handle_run(args, config, terminal, console) -> int:
    command = _strip_separator(args.cmd)
    handle = launch(command, log_file=args.log_file, terminal=terminal)
    options = DisplayOptions(
        label=args.message or config.monitor.label,
        style=args.style,
        success_label=args.success_label,
        failure_label=args.failure_label,
    )
    exit_code = Monitor(terminal, config.monitor).watch(handle, options)
    return _shell_exit_code(exit_code)


def _handle_progress(args, config, terminal, console) -> int:
    ProgressBar(terminal, config.progress).render(
        args.current,
        args.total,
        label=args.message,
        width=args.width,
        lines_above=args.lines_above,
        done=args.done,
    )
    return 0


def _handle_styles(args, config, terminal, console) -> int:
    table = Table(title="Indicator styles", box=box.ROUNDED, show_header=True)
    table.add_column("Style", style="cyan", no_wrap=True)
    table.add_column("Frames")
    table.add_column("Default", justify="center")

    for name, style in STYLES.items():
        is_default = "✓" if name == config.monitor.default_style else ""
        table.add_row(name, " ".join(style.frames), is_default)

    Console(file=terminal.stream).print(table)
    return 0


def _handle_copy(args, config, terminal, console) -> int:
    operations.copy(
        args.source, args.destination,
        style=args.style, message=args.message,
        terminal=terminal, config=config,
    )
    return 0


def _handle_move(args, config, terminal, console) -> int:
    if len(args.paths) < 2:
        console.print("[bold red]✗ move:[/bold red] expected at least one source and a destination")
        return 1
    *sources, destination = args.paths
    operations.move(sources, destination, message=args.message,
                    terminal=terminal, config=config)
    return 0


def _handle_delete(args, config, terminal, console) -> int:
    operations.delete(args.paths, recursive=args.recursive, message=args.message,
                      terminal=terminal, config=config)
    return 0
