"""
Tests for pure board operations.
"""
import pytest

from brainboard.engine.model import Board, Column, StatsConfig, Task
from brainboard.engine.operations import (
    add_task,
    delete_task,
    move_task,
    toggle_subtask,
    update_board_title,
    update_stats_config,
    update_task,
)
from brainboard.engine.query import find_task, get_total_task_count


def _ids(board, column_index):
    return [t.id for t in board.columns[column_index].tasks]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# update_task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_update_task_replaces_title_and_description(board):
    result = update_task(board, "todo", "task-1", "New Title", "New Desc")

    assert result.success
    task = result.board.columns[0].tasks[0]
    assert task.title == "New Title"
    assert task.description == "New Desc"
    # Untouched task is the very same object
    assert result.board.columns[0].tasks[1] is board.columns[0].tasks[1]


def test_update_task_leaves_input_board_unchanged(board):
    update_task(board, "todo", "task-1", "New Title", "New Desc")
    assert board.columns[0].tasks[0].title == "First"


def test_update_task_unknown_column(board):
    result = update_task(board, "invalid", "task-1", "x", "")
    assert not result.success
    assert result.board is None
    assert result.error == "Column invalid not found"
    assert result.code == "column_not_found"


def test_update_task_unknown_task(board):
    result = update_task(board, "todo", "task-99", "x", "")
    assert not result.success
    assert "Task task-99 not found" in result.error
    assert result.code == "task_not_found"


def test_update_task_keeps_other_columns_by_reference(board):
    result = update_task(board, "todo", "task-1", "x", "y")
    assert result.board.columns[1] is board.columns[1]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# delete_task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_delete_task(board):
    result = delete_task(board, "todo", "task-1")
    assert result.success
    assert _ids(result.board, 0) == ["task-2"]
    assert _ids(board, 0) == ["task-1", "task-2"]


def test_delete_task_failures(board):
    assert delete_task(board, "nope", "task-1").code == "column_not_found"
    assert delete_task(board, "done", "task-1").code == "task_not_found"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# move_task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_move_task_to_other_column(board):
    result = move_task(board, "task-1", "todo", "done", 0)

    assert result.success
    assert _ids(result.board, 0) == ["task-2"]
    assert _ids(result.board, 1) == ["task-1"]
    # The moved task is transferred, not copied
    assert result.board.columns[1].tasks[0] is board.columns[0].tasks[0]


def test_move_task_clamps_index(board):
    assert _ids(move_task(board, "task-1", "todo", "done", 10).board, 1) == ["task-1"]
    assert _ids(move_task(board, "task-2", "todo", "done", -5).board, 1) == ["task-2"]


@pytest.mark.parametrize(
    "task_id, to_index, expected",
    [
        # index is relative to the list with the task already removed
        ("a", 1, ["b", "a", "c", "d"]),
        ("a", 3, ["b", "c", "d", "a"]),
        ("a", 99, ["b", "c", "d", "a"]),
        ("d", 0, ["d", "a", "b", "c"]),
        ("c", 2, ["a", "b", "c", "d"]),
        ("b", 2, ["a", "c", "b", "d"]),
    ],
)
def test_move_task_same_column_reorder(task_id, to_index, expected):
    board = Board(
        title="B",
        columns=(Column(id="todo", title="To Do", tasks=tuple(Task(id=i, title=i) for i in "abcd")),),
    )

    result = move_task(board, task_id, "todo", "todo", to_index)

    assert result.success
    assert _ids(result.board, 0) == expected


def test_move_task_conserves_task_count(board_with_subtasks):
    before = get_total_task_count(board_with_subtasks)
    for task_id, src, dst, idx in [
        ("task-1", "todo", "done", 0),
        ("task-3", "in-progress", "todo", 1),
        ("task-2", "todo", "todo", 0),
    ]:
        result = move_task(board_with_subtasks, task_id, src, dst, idx)
        assert result.success
        assert get_total_task_count(result.board) == before


def test_move_task_keeps_uninvolved_columns_by_reference(board_with_subtasks):
    result = move_task(board_with_subtasks, "task-1", "todo", "done", 0)
    assert result.board.columns[1] is board_with_subtasks.columns[1]


def test_move_task_failures(board):
    r = move_task(board, "task-1", "nope", "done", 0)
    assert r.error == "Source column nope not found"
    r = move_task(board, "task-1", "todo", "nope", 0)
    assert r.error == "Target column nope not found"
    r = move_task(board, "task-1", "done", "todo", 0)
    assert r.code == "task_not_found"
    assert r.board is None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# add_task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_add_task_appends_with_next_id(board):
    result = add_task(board, "todo", "New Task")

    assert result.success
    tasks = result.board.columns[0].tasks
    assert tasks[-1].id == "task-3"
    assert tasks[-1].title == "New Task"
    assert tasks[-1].description == ""
    assert len(tasks) == 3


def test_add_task_strips_input(board):
    task = add_task(board, "done", "  Padded  ", "  desc  ").board.columns[1].tasks[0]
    assert task.title == "Padded"
    assert task.description == "desc"


def test_add_task_failures(board):
    assert add_task(board, "nope", "x").code == "column_not_found"
    r = add_task(board, "todo", "   ")
    assert r.code == "empty_field"
    assert r.error == "Task title cannot be empty"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# update_board_title
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_update_board_title(board):
    result = update_board_title(board, "Renamed")
    assert result.board.title == "Renamed"
    assert result.board.columns is board.columns


def test_update_board_title_rejects_empty(board):
    result = update_board_title(board, "  ")
    assert not result.success
    assert result.error == "Board title cannot be empty"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# toggle_subtask
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_toggle_subtask_flips_flag(board_with_subtasks):
    result = toggle_subtask(board_with_subtasks, "task-1", "task-1-1")

    assert result.success
    subtasks = find_task(result.board, "task-1").task.subtasks
    assert subtasks[0].completed is True
    assert subtasks[1].completed is True


def test_toggle_subtask_twice_restores_original(board_with_subtasks):
    once = toggle_subtask(board_with_subtasks, "task-1", "task-1-2").board
    twice = toggle_subtask(once, "task-1", "task-1-2").board
    assert twice == board_with_subtasks


def test_toggle_subtask_failures(board_with_subtasks):
    assert toggle_subtask(board_with_subtasks, "task-99", "x").error == "Task task-99 not found"
    assert toggle_subtask(board_with_subtasks, "task-2", "x").error == "Task task-2 has no subtasks"
    r = toggle_subtask(board_with_subtasks, "task-1", "task-1-9")
    assert r.error == "Subtask task-1-9 not found"
    assert r.code == "subtask_not_found"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# update_stats_config
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_update_stats_config_is_verbatim(board):
    columns = ["done", "ghost-column", "todo"]
    result = update_stats_config(board, columns)

    assert result.success
    assert list(result.board.stats_config.columns) == columns
    assert result.board.columns is board.columns


def test_update_stats_config_is_idempotent(board):
    once = update_stats_config(board, ["todo"]).board
    twice = update_stats_config(once, ["todo"]).board
    assert once == twice
    assert twice.stats_config == StatsConfig(columns=("todo",))
