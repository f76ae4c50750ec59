# src/brainboard/engine/query.py

"""
Read-only lookups over a board.

Nothing here builds or changes a board; see operations.py for that.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final, Optional

from .model import Board, Column, Task


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TaskLocation:
    """
    Where a task lives: its column and its position in that column.
    """

    column: Column
    task: Task
    index: int


@dataclass(frozen=True, slots=True)
class StatItem:
    label: str
    value: int


# ---------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------

def find_column(board: Board, column_id: str) -> Optional[Column]:
    for col in board.columns:
        if col.id == column_id:
            return col
    return None


def find_task(board: Board, task_id: str) -> Optional[TaskLocation]:
    """
    Find a task anywhere on the board.

    Columns are scanned in board order and tasks in column order; the
    first match wins. Task ids are only unique per column, so with a
    duplicated id the task in the earliest column is returned.
    """
    for col in board.columns:
        index = col.index_of(task_id)
        if index != -1:
            return TaskLocation(column=col, task=col.tasks[index], index=index)
    return None


def task_id_exists(board: Board, task_id: str) -> bool:
    return find_task(board, task_id) is not None


def iter_tasks(board: Board) -> Iterator[Task]:
    for col in board.columns:
        yield from col.tasks


def get_all_tasks(board: Board) -> list[Task]:
    return list(iter_tasks(board))


def get_total_task_count(board: Board) -> int:
    return sum(len(col.tasks) for col in board.columns)


def get_column_task_count(board: Board, column_id: str) -> int:
    col = find_column(board, column_id)
    return len(col.tasks) if col is not None else 0


# ---------------------------------------------------------------------
# Task ids
# ---------------------------------------------------------------------

_TASK_ID_RE: Final = re.compile(r"task-(\d+)")


def extract_task_id_number(task_id: str) -> int:
    """
    Return the numeric part of an id like "task-42", or 0 if there is none.
    """
    m = _TASK_ID_RE.search(task_id)
    return int(m.group(1)) if m else 0


def get_max_task_id_number(board: Board) -> int:
    return max((extract_task_id_number(t.id) for t in iter_tasks(board)), default=0)


def get_next_task_id(board: Board) -> str:
    """
    Compute a fresh task id for the board.

    The id is derived by scanning existing ids (no counter state), so it
    is always one past the highest "task-<n>" currently on the board.
    Ids that do not follow the pattern are ignored.
    """
    return f"task-{get_max_task_id_number(board) + 1}"


# ---------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------

def get_tasks_by_tag(board: Board, tag: str) -> list[Task]:
    return [t for t in iter_tasks(board) if tag in (t.tags or ())]


def get_tasks_by_assignee(board: Board, assignee: str) -> list[Task]:
    return [t for t in iter_tasks(board) if t.assignee == assignee]


def get_tasks_by_priority(board: Board, priority: str) -> list[Task]:
    return [t for t in iter_tasks(board) if t.priority == priority]


def get_tasks_with_incomplete_subtasks(board: Board) -> list[Task]:
    return [t for t in iter_tasks(board) if t.has_incomplete_subtasks]


def search_tasks(board: Board, query: str) -> list[Task]:
    """
    Case-insensitive substring search over task titles and descriptions.
    """
    q = query.strip().lower()
    if not q:
        return []
    return [
        t
        for t in iter_tasks(board)
        if q in t.title.lower() or q in (t.description or "").lower()
    ]


# ---------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------

DEFAULT_STATS_LIMIT: Final[int] = 4


def compute_stats(board: Board, *, limit: int = DEFAULT_STATS_LIMIT) -> list[StatItem]:
    """
    Task counts for the stats panel.

    With a configured stats column list, the first `limit` configured ids
    are used and ids without a matching column are skipped. Otherwise the
    panel shows the total task count and the size of the "done" column.
    """
    configured = board.stats_config.columns if board.stats_config else ()
    if configured:
        items: list[StatItem] = []
        for column_id in configured[:limit]:
            col = find_column(board, column_id)
            if col is not None:
                items.append(StatItem(label=col.title, value=len(col.tasks)))
        return items

    return [
        StatItem(label="Total", value=get_total_task_count(board)),
        StatItem(label="Done", value=get_column_task_count(board, "done")),
    ]
