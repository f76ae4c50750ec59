# src/brainboard/document.py

"""
Brainfile document adapter.

A brainfile is a markdown file whose YAML frontmatter holds the board:

    ---
    title: My Board
    columns:
      - id: todo
        title: To Do
        tasks:
          - id: task-1
            title: First
    ---
    (optional markdown body)

This module converts between that text and the Board model. It belongs
to the host side: the engine itself never reads or writes text.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional

import yaml

from brainboard.engine.model import Board, DocumentError


FRONTMATTER_DELIM: Final[str] = "---"


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """
    Raised when a brainfile is unreadable or structurally invalid.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------

def split_frontmatter(text: str, path: str = "<string>") -> tuple[str, str]:
    """
    Split brainfile text into (yaml_text, body).
    """
    lines = text.split("\n")
    if not lines or not lines[0].strip().startswith(FRONTMATTER_DELIM):
        raise ParseError(path, "Missing YAML frontmatter (file must start with '---')")

    for i in range(1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIM:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1:])

    raise ParseError(path, "Unterminated YAML frontmatter (closing '---' not found)")


def parse_board(text: str, path: str = "<string>") -> Board:
    """
    Parse brainfile text into a Board.
    """
    yaml_text, _ = split_frontmatter(text, path)

    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as e:
        raise ParseError(path, f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(path, "YAML frontmatter must be a mapping/dictionary")

    try:
        return Board.from_dict(data)
    except DocumentError as e:
        raise ParseError(path, str(e)) from e


def read_board(path: str | Path) -> Board:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(str(p), f"Cannot read file: {e}") from e
    return parse_board(text, str(p))


# ---------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------

def serialize_board(board: Board, body: str = "") -> str:
    """
    Render a Board as brainfile text.

    `body` is markdown placed after the frontmatter, unchanged.
    """
    yaml_text = yaml.safe_dump(
        _plain(board.to_dict()),
        sort_keys=False,
        allow_unicode=True,
        width=1_000_000,
    )
    out = f"{FRONTMATTER_DELIM}\n{yaml_text}{FRONTMATTER_DELIM}\n"
    if body:
        out += body
    return out


def write_board(path: str | Path, board: Board) -> None:
    """
    Persist a Board, keeping the markdown body of an existing file.
    """
    p = Path(path)
    body = ""
    if p.is_file():
        try:
            _, body = split_frontmatter(p.read_text(encoding="utf-8"), str(p))
        except ParseError:
            body = ""
    p.write_text(serialize_board(board, body), encoding="utf-8")


def _plain(value: Any) -> Any:
    # safe_dump only knows builtin containers.
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


# ---------------------------------------------------------------------
# Editor helpers
# ---------------------------------------------------------------------

def find_task_location(text: str, task_id: str) -> Optional[tuple[int, int]]:
    """
    Locate a task entry in brainfile text.

    Returns (line, column) with a 1-based line, or None. For the
    "- id: task-N" form the id line is returned; when the id sits on the
    line after a bare "-", the dash line is returned instead.
    """
    lines = text.split("\n")
    needle = f"id: {task_id}"

    for i, line in enumerate(lines):
        stripped = line.strip()
        is_item = stripped.startswith("-")
        entry = stripped[1:].strip() if is_item else stripped
        if entry != needle:
            continue
        if is_item:
            return i + 1, 0
        if i > 0 and lines[i - 1].strip() == "-":
            return i, 0
        return i + 1, 0

    return None


def hash_content(text: str) -> str:
    """
    Cheap content fingerprint for change detection.
    """
    return format(zlib.crc32(text.encode("utf-8")), "08x")
