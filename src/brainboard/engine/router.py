# src/brainboard/engine/router.py

"""
Command routing.

Maps an inbound command envelope to a board operation (for mutating
tags) or to an external action (for tags the host executes itself), and
normalizes everything into one of four outcomes:

- BoardUpdated  : the operation succeeded, carries the new board
- Error         : a known command could not be applied, board unchanged
- ExternalAction: recognized, but handled outside the engine
- NoOp          : unknown command, ignored

The router keeps no state: the same (board, message) pair always gives
the same outcome.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping, Union

from .classify import EXTERNAL_ACTIONS, get_action_name
from .messages import MessageType
from .model import Board
from .operations import (
    OperationResult,
    add_task,
    delete_task,
    move_task,
    toggle_subtask,
    update_board_title,
    update_stats_config,
    update_task,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class StructuralValidationError(TypeError):
    """
    Raised when the router is handed something that is not a mapping.

    This is caller misuse, not a runtime condition: well-formed mappings
    with a bad or unknown `type` produce a NoOp instead.
    """


class _FieldError(Exception):
    """Internal: a field could not be coerced to its expected type."""


# ---------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoardUpdated:
    type: ClassVar[str] = "board-updated"

    board: Board

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "board": self.board.to_dict()}


@dataclass(frozen=True, slots=True)
class Error:
    type: ClassVar[str] = "error"

    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "message": self.message}


@dataclass(frozen=True, slots=True)
class NoOp:
    type: ClassVar[str] = "no-op"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True, slots=True)
class ExternalAction:
    type: ClassVar[str] = "external-action"

    action: str
    payload: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "action": self.action}
        if self.payload is not None:
            out["payload"] = dict(self.payload) if isinstance(self.payload, Mapping) else self.payload
        return out


Outcome = Union[BoardUpdated, Error, NoOp, ExternalAction]


# ---------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------

def _str(message: Mapping[str, Any], key: str) -> str:
    value = message.get(key)
    return "" if value is None else str(value)


def _index(message: Mapping[str, Any], key: str) -> int:
    value = message.get(key)
    # bool is an int subclass but never a meaningful position.
    if isinstance(value, bool):
        raise _FieldError(f"Invalid {key}: {value!r}")
    # JSON numbers arrive as floats; only whole, finite ones are positions.
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise _FieldError(f"Invalid {key}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise _FieldError(f"Invalid {key}: {value!r}") from e


def _str_list(message: Mapping[str, Any], key: str) -> list[str]:
    value = message.get(key)
    if not isinstance(value, (list, tuple)):
        raise _FieldError(f"Invalid {key}: expected a list of column ids")
    return [str(v) for v in value]


# ---------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------

Handler = Callable[[Board, Mapping[str, Any]], OperationResult]

_HANDLERS: dict[str, Handler] = {
    MessageType.UPDATE_TASK.value: lambda board, m: update_task(
        board,
        _str(m, "columnId"),
        _str(m, "taskId"),
        _str(m, "title"),
        _str(m, "description"),
    ),
    MessageType.DELETE_TASK.value: lambda board, m: delete_task(
        board,
        _str(m, "columnId"),
        _str(m, "taskId"),
    ),
    MessageType.MOVE_TASK.value: lambda board, m: move_task(
        board,
        _str(m, "taskId"),
        _str(m, "fromColumn"),
        _str(m, "toColumn"),
        _index(m, "toIndex"),
    ),
    MessageType.ADD_TASK_TO_COLUMN.value: lambda board, m: add_task(
        board,
        _str(m, "columnId"),
        _str(m, "title"),
        _str(m, "description"),
    ),
    MessageType.UPDATE_TITLE.value: lambda board, m: update_board_title(
        board,
        _str(m, "title"),
    ),
    MessageType.TOGGLE_SUBTASK.value: lambda board, m: toggle_subtask(
        board,
        _str(m, "taskId"),
        _str(m, "subtaskId"),
    ),
    MessageType.SAVE_STATS_CONFIG.value: lambda board, m: update_stats_config(
        board,
        _str_list(m, "columns"),
    ),
}


def _to_outcome(result: OperationResult) -> Outcome:
    if result.success and result.board is not None:
        return BoardUpdated(board=result.board)
    return Error(message=result.error or "Unknown error")


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def route_message(board: Board, message: Mapping[str, Any]) -> Outcome:
    """
    Route one command envelope and return its outcome.

    Extra fields in the envelope are ignored. The board passed in is
    never modified; an Error outcome carries no board.
    """
    if not isinstance(message, Mapping):
        raise StructuralValidationError(
            f"Command envelope must be a mapping, got {type(message).__name__}"
        )

    tag = message.get("type")
    if not isinstance(tag, str):
        logger.debug("Ignoring command without a string type")
        return NoOp()

    handler = _HANDLERS.get(tag)
    if handler is not None:
        logger.debug("Routing %s", get_action_name(tag))
        try:
            result = handler(board, message)
        except _FieldError as e:
            logger.info("%s rejected: %s", get_action_name(tag), e)
            return Error(message=str(e))

        if not result.success:
            logger.info("%s failed: %s", get_action_name(tag), result.error)
        return _to_outcome(result)

    action = EXTERNAL_ACTIONS.get(tag)
    if action is not None:
        logger.debug("Delegating %s to host", get_action_name(tag))
        return ExternalAction(action=action, payload=message)

    logger.debug("Ignoring unknown command type: %s", tag)
    return NoOp()


def process_message(board: Board, message: Mapping[str, Any]) -> tuple[Outcome, str]:
    """
    Route a message and also return its action label for logging.
    """
    outcome = route_message(board, message)
    tag = message.get("type")
    return outcome, get_action_name(tag if isinstance(tag, str) else "")
