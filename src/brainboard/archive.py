# src/brainboard/archive.py

"""
Archive file support.

Archived tasks live in a sibling brainfile named after the board file
("brainfile.md" -> "brainfile-archive.md"). It is an ordinary brainfile
with no columns and a top-level `archive` list of task entries.

The same `archive` key may also be attached to a live board so a host
can show archived tasks next to the columns. In both cases the list is
kept in `Board.extra["archive"]` as plain task mappings, oldest first.

Everything here except the two file helpers at the bottom is pure.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Final, Iterable, Optional

from brainboard.document import ParseError, parse_board, read_board, serialize_board, write_board
from brainboard.engine.model import Board, DocumentError, Task


ARCHIVE_KEY: Final[str] = "archive"
ARCHIVE_SUFFIX: Final[str] = "-archive.md"
DEFAULT_ARCHIVE_TITLE: Final[str] = "Archive"


# ---------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------

def get_archive_path(board_path: str | Path, root: Optional[str | Path] = None) -> Path:
    """
    Archive file for `board_path`, placed in `root`.

    `root` defaults to the board file's own directory. A board file
    without an ".md" suffix gets "-archive.md" appended, so the archive
    never resolves to the board file itself.
    """
    p = Path(board_path)
    name = p.name
    if name.endswith(".md"):
        name = name[: -len(".md")] + ARCHIVE_SUFFIX
    else:
        name += ARCHIVE_SUFFIX
    base = Path(root) if root is not None else p.parent
    return base / name


# ---------------------------------------------------------------------
# Pure board helpers
# ---------------------------------------------------------------------

def get_archived_tasks(board: Board) -> list[Task]:
    """
    Archived tasks attached to `board`, or [] when there are none.

    Raises DocumentError if the archive list holds malformed entries.
    """
    raw = board.extra.get(ARCHIVE_KEY)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DocumentError("Board key 'archive' must be a list")
    return [Task.from_dict(entry) for entry in raw]


def parse_archive(text: str) -> list[Task]:
    """
    Archived tasks from archive file text.

    Never raises: unparsable text, a missing `archive` key or a malformed
    entry all give an empty list.
    """
    try:
        return get_archived_tasks(parse_board(text))
    except (ParseError, DocumentError):
        return []


def create_empty_archive_board(title: str = DEFAULT_ARCHIVE_TITLE) -> Board:
    return Board(title=title, columns=(), extra={ARCHIVE_KEY: []})


def _with_archive(board: Board, entries: list[dict[str, Any]]) -> Board:
    return replace(board, extra={**board.extra, ARCHIVE_KEY: entries})


def add_task_to_archive(archive_board: Board, task: Task) -> Board:
    """
    Return a copy of `archive_board` with `task` appended to its archive.
    """
    current = archive_board.extra.get(ARCHIVE_KEY)
    entries = list(current) if isinstance(current, list) else []
    entries.append(task.to_dict())
    return _with_archive(archive_board, entries)


def load_archive_into_board(board: Board, archived_tasks: Iterable[Task]) -> Board:
    """
    Return a copy of `board` whose archive is exactly `archived_tasks`.
    """
    return _with_archive(board, [t.to_dict() for t in archived_tasks])


def serialize_archive(archive_board: Board) -> str:
    return serialize_board(archive_board)


# ---------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------

def read_archive(path: str | Path) -> list[Task]:
    """
    Archived tasks stored at `path`; a missing or unreadable file gives [].
    """
    p = Path(path)
    if not p.is_file():
        return []
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    return parse_archive(text)


def append_to_archive(path: str | Path, task: Task) -> Board:
    """
    Append `task` to the archive file at `path`, creating it if needed.

    An existing file that is not a valid brainfile is left untouched and
    ParseError is raised. Returns the archive board that was written.
    """
    p = Path(path)
    archive_board = read_board(p) if p.exists() else create_empty_archive_board()
    try:
        get_archived_tasks(archive_board)
    except DocumentError as e:
        raise ParseError(str(p), str(e)) from e

    updated = add_task_to_archive(archive_board, task)
    write_board(p, updated)
    return updated
