# src/brainboard/engine/model.py

"""
Core board document models.

This module defines the in-memory representation of a brainfile board:
board, columns, tasks, subtasks and the stats configuration.

All entities are frozen and hold tuples instead of lists, so a board
value can be shared freely between snapshots. Mutation happens only by
building new values (see operations.py).

No filesystem access should happen here.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class DocumentError(ValueError):
    """
    Raised when a plain mapping cannot be converted into a Board.
    """


# ---------------------------------------------------------------------
# Subtask
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Subtask:
    """
    A checkbox item owned by exactly one task.
    """

    id: str
    title: str
    completed: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Subtask":
        if not isinstance(data, Mapping):
            raise DocumentError("Subtask entries must be mappings")
        return cls(
            id=_require_id(data, "subtask"),
            title=str(data.get("title") or ""),
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "completed": self.completed}


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

# Document key -> attribute name for optional task fields.
_TASK_OPTIONAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("description", "description"),
    ("priority", "priority"),
    ("tags", "tags"),
    ("assignee", "assignee"),
    ("dueDate", "due_date"),
    ("relatedFiles", "related_files"),
    ("subtasks", "subtasks"),
)

_TASK_KEYS = frozenset({"id", "title"} | {k for k, _ in _TASK_OPTIONAL_FIELDS})


@dataclass(frozen=True, slots=True)
class Task:
    """
    A unit of work on the board.

    Notes:
    - id is expected to look like "task-<n>", but any string is accepted.
    - Optional fields are None when absent from the document, so they
      are omitted again on serialisation.
    - extra keeps document keys the engine does not interpret (e.g. template).
    """

    id: str
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    assignee: Optional[str] = None
    due_date: Optional[str] = None
    related_files: Optional[tuple[str, ...]] = None
    subtasks: Optional[tuple[Subtask, ...]] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        _freeze_extra(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        if not isinstance(data, Mapping):
            raise DocumentError("Task entries must be mappings")

        subtasks = data.get("subtasks")
        if subtasks is not None:
            if not isinstance(subtasks, list):
                raise DocumentError("Task key 'subtasks' must be a list")
            subtasks = tuple(Subtask.from_dict(s) for s in subtasks)

        return cls(
            id=_require_id(data, "task"),
            title=str(data.get("title") or ""),
            description=_optional_str(data.get("description")),
            priority=_optional_str(data.get("priority")),
            tags=_optional_str_tuple(data.get("tags"), "tags"),
            assignee=_optional_str(data.get("assignee")),
            due_date=_optional_str(data.get("dueDate")),
            related_files=_optional_str_tuple(data.get("relatedFiles"), "relatedFiles"),
            subtasks=subtasks,
            extra=_copy_extra(data, _TASK_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "title": self.title}
        for key, attr in _TASK_OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == "subtasks":
                out[key] = [s.to_dict() for s in value]
            elif isinstance(value, tuple):
                out[key] = list(value)
            else:
                out[key] = value
        out.update(copy.deepcopy(dict(self.extra)))
        return out

    @property
    def has_incomplete_subtasks(self) -> bool:
        return any(not s.completed for s in self.subtasks or ())


# ---------------------------------------------------------------------
# Column
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Column:
    """
    Named, ordered container of tasks.

    Position in `tasks` is the display order on the board.
    """

    id: str
    title: str
    tasks: tuple[Task, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Column":
        if not isinstance(data, Mapping):
            raise DocumentError("Column entries must be mappings")

        tasks = data.get("tasks") or []
        if not isinstance(tasks, list):
            raise DocumentError("Column key 'tasks' must be a list")

        return cls(
            id=_require_id(data, "column"),
            title=str(data.get("title") or ""),
            tasks=tuple(Task.from_dict(t) for t in tasks),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    def index_of(self, task_id: str) -> int:
        """Return the position of task_id in this column, or -1."""
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return -1


# ---------------------------------------------------------------------
# Stats configuration
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StatsConfig:
    """
    Column ids whose task counts are shown in the stats panel.

    Ids are not checked against the board: they may name columns that
    do not exist yet.
    """

    columns: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"columns": list(self.columns)}


# ---------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------

_BOARD_KEYS = frozenset({"title", "columns", "statsConfig"})


@dataclass(frozen=True, slots=True)
class Board:
    """
    Root of the brainfile document.

    Boards are created by parsing a document; the engine never creates one.
    """

    title: str
    columns: tuple[Column, ...] = ()
    stats_config: Optional[StatsConfig] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        _freeze_extra(self)
        seen: set[str] = set()
        for col in self.columns:
            if col.id in seen:
                raise DocumentError(f"Duplicate column id: {col.id}")
            seen.add(col.id)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Board":
        """
        Build a Board from a parsed document mapping (camelCase keys).

        Unknown keys (agent, rules, archive, ...) are kept in `extra`.
        """
        if not isinstance(data, Mapping):
            raise DocumentError("Board document root must be a mapping")

        columns = data.get("columns") or []
        if not isinstance(columns, list):
            raise DocumentError("Board key 'columns' must be a list")

        stats_config = None
        raw_stats = data.get("statsConfig")
        if isinstance(raw_stats, Mapping):
            stats_config = StatsConfig(
                columns=_optional_str_tuple(raw_stats.get("columns"), "statsConfig.columns") or ()
            )

        return cls(
            title=str(data.get("title") or ""),
            columns=tuple(Column.from_dict(c) for c in columns),
            stats_config=stats_config,
            extra=_copy_extra(data, _BOARD_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"title": self.title}
        # Keep interpreted-elsewhere keys (agent, rules) ahead of columns.
        extra = copy.deepcopy(dict(self.extra))
        archive = extra.pop("archive", None)
        out.update(extra)
        out["columns"] = [c.to_dict() for c in self.columns]
        if self.stats_config is not None:
            out["statsConfig"] = self.stats_config.to_dict()
        if archive is not None:
            out["archive"] = archive
        return out


# ---------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------

def _require_id(data: Mapping[str, Any], kind: str) -> str:
    value = data.get("id")
    if value is None or (isinstance(value, str) and not value.strip()):
        raise DocumentError(f"Every {kind} must have an 'id'")
    return str(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _optional_str_tuple(value: Any, key: str) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise DocumentError(f"Key '{key}' must be a list")
    return tuple(str(v) for v in value)


def _copy_extra(data: Mapping[str, Any], known: frozenset[str]) -> dict[str, Any]:
    return copy.deepcopy({k: v for k, v in data.items() if k not in known})


def _freeze_extra(obj: Any) -> None:
    # A proxy passed on by dataclasses.replace is already read-only.
    if not isinstance(obj.extra, MappingProxyType):
        object.__setattr__(obj, "extra", MappingProxyType(dict(obj.extra)))
