"""
Tests for the board document model: invariants and mapping conversion.
"""
import dataclasses

import pytest

from brainboard.engine.model import Board, Column, DocumentError, StatsConfig, Subtask, Task


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Invariants
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_duplicate_column_ids_rejected():
    """Column ids must be unique within a board"""
    with pytest.raises(DocumentError):
        Board(title="B", columns=(Column(id="todo", title="A"), Column(id="todo", title="B")))


def test_entities_are_frozen(board):
    """Boards cannot be mutated in place"""
    with pytest.raises(dataclasses.FrozenInstanceError):
        board.title = "Changed"
    with pytest.raises(dataclasses.FrozenInstanceError):
        board.columns[0].tasks[0].title = "Changed"


def test_column_index_of(board):
    todo = board.columns[0]
    assert todo.index_of("task-2") == 1
    assert todo.index_of("task-99") == -1


def test_has_incomplete_subtasks():
    task = Task(
        id="task-1",
        title="T",
        subtasks=(Subtask(id="a", title="a", completed=True), Subtask(id="b", title="b")),
    )
    assert task.has_incomplete_subtasks
    assert not Task(id="task-2", title="T").has_incomplete_subtasks


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Mapping conversion
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_board_from_dict_reads_camel_case_fields():
    """dueDate, relatedFiles and statsConfig map onto the model"""
    board = Board.from_dict(
        {
            "title": "B",
            "statsConfig": {"columns": ["todo", "ghost"]},
            "columns": [
                {
                    "id": "todo",
                    "title": "To Do",
                    "tasks": [
                        {
                            "id": "task-1",
                            "title": "T",
                            "dueDate": "2025-01-31",
                            "relatedFiles": ["src/a.py"],
                            "tags": ["x", "y"],
                            "subtasks": [{"id": "task-1-1", "title": "s", "completed": True}],
                        }
                    ],
                }
            ],
        }
    )

    task = board.columns[0].tasks[0]
    assert task.due_date == "2025-01-31"
    assert task.related_files == ("src/a.py",)
    assert task.tags == ("x", "y")
    assert task.subtasks == (Subtask(id="task-1-1", title="s", completed=True),)
    assert board.stats_config == StatsConfig(columns=("todo", "ghost"))


def test_to_dict_omits_unset_optional_fields():
    task = Task(id="task-1", title="T")
    assert task.to_dict() == {"id": "task-1", "title": "T"}


def test_unknown_keys_survive_round_trip():
    """agent/rules/archive and task-level extras are kept verbatim"""
    data = {
        "title": "B",
        "agent": {"instructions": ["be nice"]},
        "rules": {"always": [{"id": 1, "rule": "test"}]},
        "columns": [
            {"id": "todo", "title": "To Do", "tasks": [{"id": "task-1", "title": "T", "template": "bug"}]}
        ],
        "archive": [{"id": "task-0", "title": "Old"}],
    }

    out = Board.from_dict(data).to_dict()

    assert out["agent"] == data["agent"]
    assert out["rules"] == data["rules"]
    assert out["archive"] == data["archive"]
    assert out["columns"][0]["tasks"][0]["template"] == "bug"
    assert list(out)[:3] == ["title", "agent", "rules"]


def test_missing_columns_and_tasks_default_to_empty():
    board = Board.from_dict({"title": "B", "columns": [{"id": "todo", "title": "To Do"}]})
    assert board.columns[0].tasks == ()
    assert Board.from_dict({"title": "Empty"}).columns == ()


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"title": "B", "columns": "todo"},
        {"title": "B", "columns": [{"title": "no id"}]},
        {"title": "B", "columns": [{"id": "todo", "title": "T", "tasks": [{"title": "no id"}]}]},
        {"title": "B", "columns": [{"id": "todo", "title": "T", "tasks": [{"id": "task-1", "tags": "x"}]}]},
    ],
)
def test_from_dict_rejects_malformed_documents(data):
    with pytest.raises(DocumentError):
        Board.from_dict(data)


def test_extra_is_ignored_for_equality():
    a = Task(id="task-1", title="T", extra={"template": "bug"})
    b = Task(id="task-1", title="T")
    assert a == b


def test_extra_is_read_only_and_not_shared():
    data = {"title": "B", "agent": {"instructions": ["be nice"]}}
    board = Board.from_dict(data)
    renamed = dataclasses.replace(board, title="C")

    with pytest.raises(TypeError):
        renamed.extra["agent"] = {}

    data["agent"]["instructions"].append("changed later")
    renamed.to_dict()["agent"]["instructions"].append("changed in output")

    assert board.extra["agent"] == {"instructions": ["be nice"]}
    assert renamed.extra["agent"] == {"instructions": ["be nice"]}


def test_task_extra_is_read_only():
    task = Task(id="task-1", title="T", extra={"template": "bug"})
    with pytest.raises(TypeError):
        task.extra["template"] = "feature"
    assert task.to_dict()["template"] == "bug"
