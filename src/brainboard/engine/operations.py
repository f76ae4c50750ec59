# src/brainboard/engine/operations.py

"""
Board mutation operations.

This module contains *all* state-changing operations on a Board.

Design principles:
- Operations are pure: the input board is never modified. A new Board is
  built by replacing only the path from the root to the changed node;
  untouched columns and tasks are reused as-is.
- Expected failures (unknown ids, empty titles) are returned as a failed
  OperationResult, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from .model import Board, Column, StatsConfig, Task
from .query import find_column, find_task, get_next_task_id


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OperationResult:
    """
    Outcome of a single board operation.

    On success `board` holds the new board. On failure `board` is None,
    `error` is a short diagnostic and `code` a stable identifier suitable
    for tests and filtering.
    """

    success: bool
    board: Optional[Board] = None
    error: Optional[str] = None
    code: Optional[str] = None


def _ok(board: Board) -> OperationResult:
    return OperationResult(success=True, board=board)


def _fail(code: str, error: str) -> OperationResult:
    return OperationResult(success=False, error=error, code=code)


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _replace_column(board: Board, column_id: str, fn: Callable[[Column], Column]) -> Board:
    """
    Return a board where the column `column_id` is replaced by fn(column).
    """
    return replace(
        board,
        columns=tuple(fn(col) if col.id == column_id else col for col in board.columns),
    )


def _replace_task(column: Column, task_id: str, fn: Callable[[Task], Task]) -> Column:
    return replace(
        column,
        tasks=tuple(fn(t) if t.id == task_id else t for t in column.tasks),
    )


def _column_not_found(column_id: str, label: str = "Column") -> OperationResult:
    return _fail("column_not_found", f"{label} {column_id} not found")


def _task_not_in_column(task_id: str, column_id: str) -> OperationResult:
    return _fail("task_not_found", f"Task {task_id} not found in column {column_id}")


# ---------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------

def update_task(
    board: Board,
    column_id: str,
    task_id: str,
    title: str,
    description: str,
) -> OperationResult:
    """
    Replace a task's title and description, keeping its position.
    """
    column = find_column(board, column_id)
    if column is None:
        return _column_not_found(column_id)

    if column.index_of(task_id) == -1:
        return _task_not_in_column(task_id, column_id)

    return _ok(
        _replace_column(
            board,
            column_id,
            lambda col: _replace_task(
                col,
                task_id,
                lambda t: replace(t, title=title, description=description),
            ),
        )
    )


def delete_task(board: Board, column_id: str, task_id: str) -> OperationResult:
    column = find_column(board, column_id)
    if column is None:
        return _column_not_found(column_id)

    if column.index_of(task_id) == -1:
        return _task_not_in_column(task_id, column_id)

    return _ok(
        _replace_column(
            board,
            column_id,
            lambda col: replace(col, tasks=tuple(t for t in col.tasks if t.id != task_id)),
        )
    )


def move_task(
    board: Board,
    task_id: str,
    from_column_id: str,
    to_column_id: str,
    to_index: int,
) -> OperationResult:
    """
    Move a task to `to_index` in the target column.

    The task is removed from the source column first, and `to_index` is
    interpreted against the target list *after* that removal (clamped to
    its bounds). For a same-column move this is a pure reorder in which
    `to_index` is the final position of the task.
    """
    from_column = find_column(board, from_column_id)
    if from_column is None:
        return _column_not_found(from_column_id, "Source column")

    to_column = find_column(board, to_column_id)
    if to_column is None:
        return _column_not_found(to_column_id, "Target column")

    index = from_column.index_of(task_id)
    if index == -1:
        return _task_not_in_column(task_id, from_column_id)

    task = from_column.tasks[index]
    remaining = from_column.tasks[:index] + from_column.tasks[index + 1:]

    if from_column_id == to_column_id:
        target = remaining
    else:
        target = to_column.tasks

    pos = max(0, min(to_index, len(target)))
    inserted = target[:pos] + (task,) + target[pos:]

    def _move(col: Column) -> Column:
        if col.id == to_column_id:
            return replace(col, tasks=inserted)
        if col.id == from_column_id:
            return replace(col, tasks=remaining)
        return col

    return _ok(replace(board, columns=tuple(_move(col) for col in board.columns)))


def add_task(
    board: Board,
    column_id: str,
    title: str,
    description: str = "",
) -> OperationResult:
    """
    Append a new task to a column.

    The id is generated from the ids already on the board.
    """
    column = find_column(board, column_id)
    if column is None:
        return _column_not_found(column_id)

    title = (title or "").strip()
    if not title:
        return _fail("empty_field", "Task title cannot be empty")

    new_task = Task(
        id=get_next_task_id(board),
        title=title,
        description=(description or "").strip(),
    )

    return _ok(
        _replace_column(board, column_id, lambda col: replace(col, tasks=col.tasks + (new_task,)))
    )


def update_board_title(board: Board, title: str) -> OperationResult:
    if not (title or "").strip():
        return _fail("empty_field", "Board title cannot be empty")
    return _ok(replace(board, title=title))


def toggle_subtask(board: Board, task_id: str, subtask_id: str) -> OperationResult:
    """
    Flip the completed flag of one subtask.

    The task is looked up across the whole board (first match wins).
    Applying the same toggle twice restores the original board content.
    """
    location = find_task(board, task_id)
    if location is None:
        return _fail("task_not_found", f"Task {task_id} not found")

    task = location.task
    if not task.subtasks:
        return _fail("subtask_not_found", f"Task {task_id} has no subtasks")

    if not any(st.id == subtask_id for st in task.subtasks):
        return _fail("subtask_not_found", f"Subtask {subtask_id} not found")

    new_task = replace(
        task,
        subtasks=tuple(
            replace(st, completed=not st.completed) if st.id == subtask_id else st
            for st in task.subtasks
        ),
    )

    # Replace by position so a duplicate id in the same column is left alone.
    column = location.column
    tasks = column.tasks[:location.index] + (new_task,) + column.tasks[location.index + 1:]
    return _ok(_replace_column(board, column.id, lambda col: replace(col, tasks=tasks)))


def update_stats_config(board: Board, columns: Sequence[str]) -> OperationResult:
    """
    Set the stats column list verbatim.

    Column ids are not checked against the board.
    """
    return _ok(replace(board, stats_config=StatsConfig(columns=tuple(columns))))
