# src/brainboard/cli.py

"""
Command-line interface for brainboard.

This module:
- defines argument parsing and subcommands,
- delegates board logic to the engine and file handling to workflow/document,
- keeps printing and exit codes here.

It stands in for the editor host: each invocation handles one command.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from brainboard.config import Settings, load_settings
from brainboard.document import ParseError, read_board
from brainboard.engine.messages import get_missing_fields, validate_message
from brainboard.engine.query import compute_stats, get_next_task_id
from brainboard.engine.router import Error, ExternalAction, Outcome
from brainboard.workflow import execute_archive_workflow, execute_update_workflow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-C",
        "--cd",
        type=str,
        default=".",
        help="Work as if current directory is this path (default: .)",
    )
    p.add_argument(
        "-f",
        "--file",
        type=str,
        default="",
        help="Brainfile path (default: from .brainboard.yml, else brainfile.md)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brainboard")
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_show = sub.add_parser(
        "show",
        help="Show the board: columns, tasks and stats",
    )
    _add_common(p_show)
    p_show.set_defaults(func=cmd_show)

    p_next_id = sub.add_parser(
        "next-id",
        help="Print the id the next added task would get",
    )
    _add_common(p_next_id)
    p_next_id.set_defaults(func=cmd_next_id)

    p_check = sub.add_parser(
        "check",
        help="Check a JSON command for missing fields (no board needed)",
    )
    p_check.add_argument(
        "message",
        nargs="?",
        default="-",
        help="JSON command envelope, or '-' to read stdin (default)",
    )
    p_check.set_defaults(func=cmd_check)

    # ------------------------------------------------------------------
    # Write commands
    # ------------------------------------------------------------------

    p_apply = sub.add_parser(
        "apply",
        help="Apply a JSON command to the board and print the outcome",
    )
    p_apply.add_argument(
        "message",
        nargs="?",
        default="-",
        help="JSON command envelope, or '-' to read stdin (default)",
    )
    _add_common(p_apply)
    p_apply.set_defaults(func=cmd_apply)

    p_archive = sub.add_parser(
        "archive",
        help="Move a task into the archive file next to the board",
    )
    p_archive.add_argument("column", help="Column id holding the task")
    p_archive.add_argument("task", help="Task id, e.g. task-3")
    _add_common(p_archive)
    p_archive.set_defaults(func=cmd_archive)

    return parser


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _settings(args: argparse.Namespace) -> tuple[Path, Settings]:
    cwd = (Path.cwd() / (getattr(args, "cd", None) or ".")).resolve()
    return cwd, load_settings(cwd)


def _board_path(args: argparse.Namespace, cwd: Path, settings: Settings) -> Path:
    if getattr(args, "file", ""):
        return (cwd / args.file).resolve()
    return settings.board_path(cwd)


def _load_message(raw: str) -> object:
    text = sys.stdin.read() if raw == "-" else raw
    return json.loads(text)


def _print_outcome(outcome: Outcome) -> int:
    print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False, default=str))
    return 1 if isinstance(outcome, Error) else 0


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> int:
    settings: Settings = args.settings
    path = _board_path(args, args.cwd, settings)

    try:
        board = read_board(path)
    except ParseError as e:
        print(e)
        return 1

    print(board.title)
    for col in board.columns:
        print(f"\n{col.title} [{col.id}] ({len(col.tasks)})")
        for task in col.tasks:
            line = f"  {task.id}  {task.title}"
            if task.priority:
                line += f"  ({task.priority})"
            if task.subtasks:
                done = sum(1 for s in task.subtasks if s.completed)
                line += f"  [{done}/{len(task.subtasks)}]"
            print(line)

    stats = compute_stats(board, limit=settings.stats_column_limit)
    if stats:
        print("\n" + "  ".join(f"{s.label}: {s.value}" for s in stats))
    return 0


def cmd_next_id(args: argparse.Namespace) -> int:
    try:
        board = read_board(_board_path(args, args.cwd, args.settings))
    except ParseError as e:
        print(e)
        return 1

    print(get_next_task_id(board))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    try:
        message = _load_message(args.message)
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON: {e}")
        return 1

    if not validate_message(message):
        print("Error: not a recognized command envelope")
        return 1

    missing = get_missing_fields(message)
    if missing:
        print(f"Missing fields: {', '.join(missing)}")
        return 1

    print("OK")
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    path = _board_path(args, args.cwd, args.settings)

    try:
        message = _load_message(args.message)
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON: {e}")
        return 1

    if not isinstance(message, dict):
        print("Error: command envelope must be a JSON object")
        return 1

    logger.debug("Applying %s to %s", message.get("type"), path)
    outcome = execute_update_workflow(path, message)
    # archiveTask is the one host action this CLI carries out itself.
    if isinstance(outcome, ExternalAction) and outcome.action == "archiveTask":
        outcome = execute_archive_workflow(
            path, str(message.get("columnId") or ""), str(message.get("taskId") or "")
        )
    return _print_outcome(outcome)


def cmd_archive(args: argparse.Namespace) -> int:
    path = _board_path(args, args.cwd, args.settings)
    return _print_outcome(execute_archive_workflow(path, args.column, args.task))


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    # Settings are loaded once and handed to the command on args.
    args.cwd, args.settings = Path.cwd(), Settings()
    if hasattr(args, "cd"):
        try:
            args.cwd, args.settings = _settings(args)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    _configure_logging(args.settings.log_level, bool(getattr(args, "verbose", False)))

    return func(args)


if __name__ == "__main__":
    raise SystemExit(main())
