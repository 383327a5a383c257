"""
File operations built on the monitor and the progress bar.

``copy`` runs one external command and watches it. ``move`` and ``delete``
work item by item and advance a progress bar after each one.
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .core.monitor import DisplayOptions, Monitor
from .core.tasks import launch
from .ui.progress import ProgressBar
from .ui.terminal import Terminal
from .utils.error_handling import (
    ArgumentError, NotFoundError, OperationError, TaskFailure, reports_failures
)
from .utils.logging import get_logger

PathLike = Union[str, Path]

logger = get_logger(__name__)


def _setup(terminal: Optional[Terminal], config):
    if config is None:
        from .config import get_config
        config = get_config()
    return terminal or Terminal.from_config(config.ui), config


def _copy_command(source: Path, destination: Path) -> List[str]:
    if shutil.which("rsync"):
        return ["rsync", "-a", str(source), str(destination)]
    if source.is_dir():
        return ["cp", "-r", str(source), str(destination)]
    return ["cp", str(source), str(destination)]


def _end_bar_line(terminal: Terminal, index: int) -> None:
    # Items before ``index`` already drew a partial bar
    if index > 1:
        terminal.write("\n")


def _remove(item: Path, recursive: bool) -> None:
    try:
        if item.is_dir() and not item.is_symlink():
            if not recursive:
                raise OperationError(f"'{item}' is a directory (use recursive=True)")
            shutil.rmtree(item)
        else:
            item.unlink()
    except OSError as e:
        raise OperationError(f"failed to remove '{item}': {e}") from e


@reports_failures("copy")
def copy(source: PathLike, destination: PathLike, style: Optional[str] = None,
         message: str = "Copying...", terminal: Optional[Terminal] = None,
         config=None) -> int:
    """
    Copy a file or directory while showing an indicator.

    Uses rsync when available and falls back to cp.

    Returns:
        0 once the copy succeeded

    Raises:
        ArgumentError: If source or destination is missing
        NotFoundError: If the source does not exist
        TaskFailure: If the copy command exited nonzero
    """
    if not source:
        raise ArgumentError("source path is required")
    if not destination:
        raise ArgumentError("destination path is required")

    source, destination = Path(source), Path(destination)
    if not source.exists():
        raise NotFoundError(f"source not found: {source}", details={"path": str(source)})

    terminal, config = _setup(terminal, config)
    command = _copy_command(source, destination)
    logger.info(f"Copying '{source}' to '{destination}' with {command[0]}")

    exit_code = Monitor(terminal, config.monitor).watch(
        launch(command, terminal=terminal),
        DisplayOptions(
            label=message,
            style=style,
            success_label="Copy complete.",
            failure_label="Copy failed.",
        ),
    )
    if exit_code != 0:
        raise TaskFailure(f"copy of {source} failed", exit_code=exit_code)
    return exit_code


@reports_failures("move")
def move(sources: Iterable[PathLike], destination: PathLike, message: str = "Moving",
         terminal: Optional[Terminal] = None, config=None) -> None:
    """
    Move one or more paths into ``destination``, one progress step per item.

    With several sources the destination must be an existing directory.

    Raises:
        ArgumentError: If nothing is to be moved or the destination is unusable
        NotFoundError: If a source does not exist
        OperationError: If moving an item fails
    """
    items = [Path(source) for source in sources]
    if not items:
        raise ArgumentError("at least one source path is required")
    if not destination:
        raise ArgumentError("destination path is required")

    destination = Path(destination)
    if len(items) > 1 and not destination.is_dir():
        raise ArgumentError(f"destination must be a directory when moving several items: {destination}")

    for item in items:
        if not item.exists():
            raise NotFoundError(f"source not found: {item}", details={"path": str(item)})

    terminal, config = _setup(terminal, config)
    bar = ProgressBar(terminal, config.progress)

    for index, item in enumerate(items, start=1):
        try:
            shutil.move(str(item), str(destination))
        except (OSError, shutil.Error) as e:
            _end_bar_line(terminal, index)
            raise OperationError(f"failed to move '{item}' to '{destination}': {e}") from e
        logger.debug(f"Moved '{item}' to '{destination}'")
        bar.render(index, len(items), label=message)


@reports_failures("delete")
def delete(targets: Iterable[PathLike], recursive: bool = False, message: str = "Deleting",
           terminal: Optional[Terminal] = None, config=None) -> None:
    """
    Delete files, or directories when ``recursive`` is set.

    Raises:
        ArgumentError: If no targets were given
        OperationError: If a target could not be removed
    """
    items = [Path(target) for target in targets]
    if not items:
        raise ArgumentError("at least one target path is required")

    terminal, config = _setup(terminal, config)
    bar = ProgressBar(terminal, config.progress)

    for index, item in enumerate(items, start=1):
        try:
            _remove(item, recursive)
        except OperationError:
            _end_bar_line(terminal, index)
            raise
        logger.debug(f"Deleted '{item}'")
        bar.render(index, len(items), label=message)
