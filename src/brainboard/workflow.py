# src/brainboard/workflow.py

"""
Read / route / write cycle for a brainfile on disk.

One call handles one command: the board is read, the command routed
through the engine, and the file rewritten only when the board changed.
Callers must not run two cycles against the same file concurrently.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from brainboard.archive import append_to_archive, get_archive_path
from brainboard.document import ParseError, read_board, write_board
from brainboard.engine.messages import create_parse_warning_message
from brainboard.engine.model import Board
from brainboard.engine.operations import delete_task
from brainboard.engine.query import find_column
from brainboard.engine.router import BoardUpdated, Error, Outcome, process_message

logger = logging.getLogger(__name__)

BoardCallback = Callable[[Board], None]


def execute_update_workflow(
    path: str | Path,
    message: Mapping[str, Any],
    *,
    on_before_write: Optional[BoardCallback] = None,
    on_after_write: Optional[BoardCallback] = None,
) -> Outcome:
    """
    Apply one command to the brainfile at `path` and return the outcome.
    """
    p = Path(path)

    try:
        board = read_board(p)
    except ParseError as e:
        warning = create_parse_warning_message(str(e))
        logger.warning("%s", warning["message"])
        return Error(message=str(e))

    outcome, action_name = process_message(board, message)
    logger.info("Processing %s", action_name)

    if isinstance(outcome, BoardUpdated):
        if on_before_write is not None:
            on_before_write(outcome.board)

        try:
            write_board(p, outcome.board)
        except OSError as e:
            logger.error("Failed to write %s: %s", p, e)
            return Error(message=f"Failed to write board: {e}")

        if on_after_write is not None:
            on_after_write(outcome.board)
        logger.info("%s completed successfully", action_name)

    return outcome


def execute_archive_workflow(
    path: str | Path,
    column_id: str,
    task_id: str,
    *,
    archive_root: Optional[str | Path] = None,
) -> Outcome:
    """
    Move one task from the brainfile at `path` into its archive file.

    The archive is written first, so a failed board write can leave the
    task in both files but never in neither.
    """
    p = Path(path)

    try:
        board = read_board(p)
    except ParseError as e:
        warning = create_parse_warning_message(str(e))
        logger.warning("%s", warning["message"])
        return Error(message=str(e))

    column = find_column(board, column_id)
    result = delete_task(board, column_id, task_id)
    if not result.success or column is None or result.board is None:
        logger.info("Archive Task failed: %s", result.error)
        return Error(message=result.error or "Unknown error")
    task = column.tasks[column.index_of(task_id)]

    archive_path = get_archive_path(p, archive_root)
    try:
        append_to_archive(archive_path, task)
    except ParseError as e:
        logger.warning("Archive not updated: %s", e)
        return Error(message=str(e))
    except OSError as e:
        logger.error("Failed to write %s: %s", archive_path, e)
        return Error(message=f"Failed to write archive: {e}")

    try:
        write_board(p, result.board)
    except OSError as e:
        logger.error("Failed to write %s: %s", p, e)
        return Error(message=f"Failed to write board: {e}")

    logger.info("Archived %s to %s", task_id, archive_path)
    return BoardUpdated(board=result.board)
