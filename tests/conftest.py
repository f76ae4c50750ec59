"""Shared board fixtures for brainboard tests."""

import pytest

from brainboard.engine.model import Board, Column, Subtask, Task


@pytest.fixture
def board() -> Board:
    """Two columns: todo with task-1/task-2, empty done."""
    return Board(
        title="Test Board",
        columns=(
            Column(
                id="todo",
                title="To Do",
                tasks=(
                    Task(id="task-1", title="First", description="First desc"),
                    Task(id="task-2", title="Second", description="Second desc"),
                ),
            ),
            Column(id="done", title="Done"),
        ),
    )


@pytest.fixture
def board_with_subtasks() -> Board:
    """Board where task-1 carries two subtasks and a third column is present."""
    return Board(
        title="Subtask Board",
        columns=(
            Column(
                id="todo",
                title="To Do",
                tasks=(
                    Task(
                        id="task-1",
                        title="Parent",
                        subtasks=(
                            Subtask(id="task-1-1", title="Step one"),
                            Subtask(id="task-1-2", title="Step two", completed=True),
                        ),
                    ),
                    Task(id="task-2", title="Plain"),
                ),
            ),
            Column(
                id="in-progress",
                title="In Progress",
                tasks=(Task(id="task-3", title="Third"),),
            ),
            Column(id="done", title="Done"),
        ),
    )


BRAINFILE_TEXT = """---
title: Project Board
agent:
  instructions:
    - Keep ids stable
columns:
  - id: todo
    title: To Do
    tasks:
      - id: task-1
        title: First
        description: First desc
        priority: high
        tags:
          - backend
        subtasks:
          - id: task-1-1
            title: Step one
            completed: false
      - id: task-2
        title: Second
  - id: done
    title: Done
    tasks: []
---

# Notes

Free-form markdown below the board.
"""


@pytest.fixture
def brainfile_text() -> str:
    return BRAINFILE_TEXT


@pytest.fixture
def brainfile(tmp_path):
    """A brainfile.md on disk in a temporary directory."""
    path = tmp_path / "brainfile.md"
    path.write_text(BRAINFILE_TEXT, encoding="utf-8")
    return path
