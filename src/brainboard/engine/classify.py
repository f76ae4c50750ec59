# src/brainboard/engine/classify.py

"""
Static command classification tables.

- which tags mutate the board,
- which tags are external actions and their canonical action names,
- human-readable action labels for logs.
"""

from __future__ import annotations

from typing import Final

from .messages import MessageType


MUTATING_MESSAGE_TYPES: Final[frozenset[str]] = frozenset(
    {
        MessageType.UPDATE_TASK.value,
        MessageType.DELETE_TASK.value,
        MessageType.MOVE_TASK.value,
        MessageType.ADD_TASK_TO_COLUMN.value,
        MessageType.UPDATE_TITLE.value,
        MessageType.TOGGLE_SUBTASK.value,
        MessageType.SAVE_STATS_CONFIG.value,
    }
)

# Tag -> action name handed to the host. Only "fix-issues" is renamed.
EXTERNAL_ACTIONS: Final[dict[str, str]] = {
    MessageType.EDIT_TASK.value: "editTask",
    MessageType.EDIT_PRIORITY.value: "editPriority",
    MessageType.OPEN_FILE.value: "openFile",
    MessageType.ARCHIVE_TASK.value: "archiveTask",
    MessageType.COMPLETE_TASK.value: "completeTask",
    MessageType.CLEAR_CACHE.value: "clearCache",
    MessageType.OPEN_SETTINGS.value: "openSettings",
    MessageType.REFRESH.value: "refresh",
    MessageType.FIX_ISSUES.value: "fixIssues",
    MessageType.SEND_TO_AGENT.value: "sendToAgent",
    MessageType.GET_AVAILABLE_AGENTS.value: "getAvailableAgents",
    MessageType.ADD_RULE.value: "addRule",
    MessageType.EDIT_RULE.value: "editRule",
    MessageType.DELETE_RULE.value: "deleteRule",
}

ACTION_NAMES: Final[dict[str, str]] = {
    MessageType.UPDATE_TASK.value: "Update Task",
    MessageType.DELETE_TASK.value: "Delete Task",
    MessageType.MOVE_TASK.value: "Move Task",
    MessageType.ADD_TASK_TO_COLUMN.value: "Add Task",
    MessageType.UPDATE_TITLE.value: "Update Board Title",
    MessageType.TOGGLE_SUBTASK.value: "Toggle Subtask",
    MessageType.SAVE_STATS_CONFIG.value: "Save Stats Config",
    MessageType.EDIT_TASK.value: "Edit Task",
    MessageType.EDIT_PRIORITY.value: "Edit Priority",
    MessageType.OPEN_FILE.value: "Open File",
    MessageType.ARCHIVE_TASK.value: "Archive Task",
    MessageType.COMPLETE_TASK.value: "Complete Task",
    MessageType.CLEAR_CACHE.value: "Clear Cache",
    MessageType.OPEN_SETTINGS.value: "Open Settings",
    MessageType.REFRESH.value: "Refresh",
    MessageType.FIX_ISSUES.value: "Fix Issues",
    MessageType.SEND_TO_AGENT.value: "Send to Agent",
    MessageType.GET_AVAILABLE_AGENTS.value: "Get Available Agents",
}


def is_board_mutating_message(tag: str) -> bool:
    return tag in MUTATING_MESSAGE_TYPES


def is_external_action(tag: str) -> bool:
    return tag in EXTERNAL_ACTIONS


def get_action_name(tag: str) -> str:
    """
    Label for logging; unregistered tags are returned unchanged.
    """
    return ACTION_NAMES.get(tag, tag)
