# src/brainboard/engine/messages.py

"""
Inbound command catalogue.

Responsibilities:
- the fixed set of command tags a host may send,
- structural validation of a command envelope,
- advisory missing-field detection (pre-flight checks in the UI),
- constructors for messages the engine sends outward.

Dispatch itself lives in router.py.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Final, Mapping


# ---------------------------------------------------------------------
# Command tags
# ---------------------------------------------------------------------

class MessageType(str, Enum):
    """
    Every command tag the engine recognizes.
    """

    UPDATE_TASK = "updateTask"
    EDIT_TASK = "editTask"
    EDIT_PRIORITY = "editPriority"
    DELETE_TASK = "deleteTask"
    MOVE_TASK = "moveTask"
    UPDATE_TITLE = "updateTitle"
    OPEN_FILE = "openFile"
    CLEAR_CACHE = "clearCache"
    OPEN_SETTINGS = "openSettings"
    ARCHIVE_TASK = "archiveTask"
    COMPLETE_TASK = "completeTask"
    ADD_TASK_TO_COLUMN = "addTaskToColumn"
    ADD_RULE = "addRule"
    EDIT_RULE = "editRule"
    DELETE_RULE = "deleteRule"
    TOGGLE_SUBTASK = "toggleSubtask"
    SAVE_STATS_CONFIG = "saveStatsConfig"
    FIX_ISSUES = "fix-issues"
    REFRESH = "refresh"
    SEND_TO_AGENT = "sendToAgent"
    GET_AVAILABLE_AGENTS = "getAvailableAgents"

    @classmethod
    def parse(cls, raw: Any) -> "MessageType | None":
        """Return the tag for `raw`, or None if it is not recognized."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


MESSAGE_TYPES: Final[frozenset[str]] = frozenset(m.value for m in MessageType)

PARSE_WARNING: Final[str] = "parseWarning"


# ---------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------

def validate_message(data: Any) -> bool:
    """
    Return True if `data` is a mapping with a recognized string `type`.
    """
    if not isinstance(data, Mapping):
        return False
    return MessageType.parse(data.get("type")) is not None


# Identifier fields count as missing when absent or empty; value fields
# only when absent, so an empty title or a zero index is accepted.
_REQUIRED_FIELDS: Final[dict[MessageType, tuple[tuple[str, bool], ...]]] = {
    MessageType.UPDATE_TASK: (
        ("columnId", True),
        ("taskId", True),
        ("title", False),
        ("description", False),
    ),
    MessageType.DELETE_TASK: (("columnId", True), ("taskId", True)),
    MessageType.ARCHIVE_TASK: (("columnId", True), ("taskId", True)),
    MessageType.COMPLETE_TASK: (("columnId", True), ("taskId", True)),
    MessageType.MOVE_TASK: (
        ("taskId", True),
        ("fromColumn", True),
        ("toColumn", True),
        ("toIndex", False),
    ),
    MessageType.EDIT_TASK: (("taskId", True),),
    MessageType.EDIT_PRIORITY: (("taskId", True),),
    MessageType.SEND_TO_AGENT: (("taskId", True),),
    MessageType.TOGGLE_SUBTASK: (("taskId", True), ("subtaskId", True)),
    MessageType.ADD_TASK_TO_COLUMN: (("columnId", True),),
    MessageType.ADD_RULE: (("ruleType", True),),
    MessageType.EDIT_RULE: (("ruleId", False), ("ruleType", True)),
    MessageType.DELETE_RULE: (("ruleId", False), ("ruleType", True)),
    MessageType.UPDATE_TITLE: (("title", False),),
    MessageType.OPEN_FILE: (("filePath", True),),
    MessageType.SAVE_STATS_CONFIG: (("columns", False),),
}


def get_missing_fields(message: Mapping[str, Any]) -> list[str]:
    """
    List the required fields absent from a command envelope.

    Tags without requirements (refresh, clearCache, ...) and unknown tags
    yield an empty list. The order follows the declared field order.
    """
    tag = MessageType.parse(message.get("type"))
    if tag is None:
        return []

    missing: list[str] = []
    for name, is_identifier in _REQUIRED_FIELDS.get(tag, ()):
        value = message.get(name)
        if value is None or (is_identifier and not value):
            missing.append(name)
    return missing


# ---------------------------------------------------------------------
# Outbound messages
# ---------------------------------------------------------------------

def create_parse_warning_message(message: str) -> dict[str, str]:
    """
    Build the diagnostic sent upstream when a document failed to parse.
    """
    return {"type": PARSE_WARNING, "message": message}
