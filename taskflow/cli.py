#!/usr/bin/env python3
"""
TASKFLOW - CLI Interface
========================
Command-line front end for a single-user task list.

Usage:
    taskflow login Ada
    taskflow add "Write report" -d "Q3 numbers" --due 2026-01-28T17:00 -p high -c Work
    taskflow list --filter pending --sort priority
    taskflow toggle 3f9c2a1b7d4e
    taskflow stats
"""

import argparse
import json
import sys
from typing import Dict, Optional

from pydantic import ValidationError

from .config import Settings
from .errors import TaskValidationError
from .logging_setup import setup_logging
from .manager import TaskManager
from .schema import TASK_CATEGORIES, SortOrder, Task, TaskFilter, TaskPriority
from .stats import progress_bar
from .storage import FileStore, TaskStorage
from .views import is_overdue

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

PRIORITY_ICONS = {
    TaskPriority.HIGH: "🔴",
    TaskPriority.MEDIUM: "🟡",
    TaskPriority.LOW: "🟢",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskflow",
        description="TaskFlow - personal task tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  taskflow login Ada                          Remember display name
  taskflow add "Buy milk" -c Shopping         Create a task
  taskflow edit <id> --title "Buy oat milk"   Edit a task
  taskflow toggle <id>                        Complete / reopen a task
  taskflow delete <id>                        Remove a task
  taskflow list --filter overdue              Show overdue tasks
  taskflow stats                              Show statistics
        """
    )
    parser.add_argument("--dir", help="Data directory (default: $TASKFLOW_DIR or .taskflow)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="Log level (default: $TASKFLOW_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    login_parser = subparsers.add_parser("login", help="Set the display name")
    login_parser.add_argument("name", help="Display name")

    subparsers.add_parser("logout", help="Forget the display name")
    subparsers.add_parser("whoami", help="Show the display name")

    add_parser = subparsers.add_parser("add", help="Create a task")
    add_parser.add_argument("title", help="Task title")
    add_parser.add_argument("-d", "--description", default="", help="Task description")
    add_parser.add_argument("--due", help="Due date (ISO-8601)")
    add_parser.add_argument("-p", "--priority", choices=[p.value for p in TaskPriority],
                            default=TaskPriority.MEDIUM.value, help="Priority")
    add_parser.add_argument("-c", "--category", help=f"Category, e.g. {', '.join(TASK_CATEGORIES)}")

    edit_parser = subparsers.add_parser("edit", help="Edit a task")
    edit_parser.add_argument("task_id", help="Task ID")
    edit_parser.add_argument("--title", help="New title")
    edit_parser.add_argument("-d", "--description", help="New description")
    edit_parser.add_argument("--due", help="New due date (ISO-8601)")
    edit_parser.add_argument("--clear-due", action="store_true", help="Remove the due date")
    edit_parser.add_argument("-p", "--priority", choices=[p.value for p in TaskPriority], help="New priority")
    edit_parser.add_argument("-c", "--category", help="New category (empty string clears it)")

    toggle_parser = subparsers.add_parser("toggle", help="Complete or reopen a task")
    toggle_parser.add_argument("task_id", help="Task ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", help="Task ID")

    list_parser = subparsers.add_parser("list", help="List tasks")
    list_parser.add_argument("--filter", choices=[f.value for f in TaskFilter], default=TaskFilter.ALL.value)
    list_parser.add_argument("-s", "--search", default="", help="Search title and description")
    list_parser.add_argument("-c", "--category", default="all", help="Category or 'all'")
    list_parser.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.NEWEST.value)
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stats_parser = subparsers.add_parser("stats", help="Show statistics")
    stats_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("reset", help="Delete all stored tasks")

    return parser


def format_task(task: Task, now) -> str:
    check = "✅" if task.completed else "⬜"
    parts = [f"{check} [{task.id}] {PRIORITY_ICONS[task.priority]} {task.title}"]
    if task.category:
        parts.append(f"#{task.category}")
    if task.due_date:
        due = task.due_date.strftime("%b %d, %Y")
        parts.append(f"(overdue: {due})" if is_overdue(task, now) else f"(due {due})")
    line = " ".join(parts)
    if task.description:
        line += f"\n      {task.description}"
    return line


def _edit_fields(args: argparse.Namespace) -> Dict[str, Optional[str]]:
    fields: Dict[str, Optional[str]] = {}
    if args.title is not None:
        fields["title"] = args.title
    if args.description is not None:
        fields["description"] = args.description
    if args.clear_due:
        fields["due_date"] = None
    elif args.due is not None:
        fields["due_date"] = args.due
    if args.priority is not None:
        fields["priority"] = args.priority
    if args.category is not None:
        fields["category"] = args.category
    return fields


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = Settings.from_env()
    except ValidationError as e:
        print(f"❌ Invalid settings: {TaskValidationError.from_pydantic(e)}")
        return 1
    setup_logging(args.log_level or settings.log_level)

    data_dir = args.dir or str(settings.data_dir)
    manager = TaskManager(TaskStorage(FileStore(data_dir)))

    if args.command == "login":
        try:
            name = manager.login(args.name)
        except TaskValidationError as e:
            print(f"❌ {e}")
            return 1
        print(f"👋 Welcome, {name}!")
        return 0

    if args.command == "whoami":
        if not manager.user:
            print("Not logged in")
            return 1
        print(manager.user)
        return 0

    if not manager.user:
        print("❌ Not logged in. Run: taskflow login <name>")
        return 1

    if args.command == "logout":
        manager.logout()
        print("👋 Logged out")
        return 0

    manager.load()

    try:
        if args.command == "add":
            task = manager.add_task({
                "title": args.title,
                "description": args.description,
                "due_date": args.due,
                "priority": args.priority,
                "category": args.category,
            })
            print(f"✅ Created: {task.title}")
            print(f"   ID: {task.id}")

        elif args.command == "edit":
            task = manager.update_task(args.task_id, _edit_fields(args))
            if not task:
                print(f"❌ Task not found: {args.task_id}")
                return 1
            print(f"✏️ Updated: {task.title}")

        elif args.command == "toggle":
            completed = manager.toggle_task(args.task_id)
            if completed is None:
                print(f"❌ Task not found: {args.task_id}")
                return 1
            print("✅ Task completed" if completed else "↩️ Task reopened")

        elif args.command == "delete":
            if not manager.delete_task(args.task_id):
                print(f"❌ Task not found: {args.task_id}")
                return 1
            print(f"🗑️ Deleted: {args.task_id}")

        elif args.command == "list":
            manager.set_view(
                filter=args.filter,
                search_query=args.search,
                category=args.category,
                sort_by=args.sort,
            )
            tasks = manager.visible_tasks()
            if args.json:
                print(json.dumps([task.to_record() for task in tasks], indent=2, ensure_ascii=False))
            elif not tasks:
                print("No tasks found")
            else:
                now = manager.clock.now()
                counts = manager.task_counts()
                print(f"📋 {manager.user}'s tasks ({len(tasks)} shown)")
                print("   " + " | ".join(f"{key}: {value}" for key, value in counts.items()))
                print("-" * 60)
                for task in tasks:
                    print(f"  {format_task(task, now)}")
                print("-" * 60)

        elif args.command == "stats":
            stats = manager.stats()
            if args.json:
                print(json.dumps(stats.model_dump(), indent=2))
            else:
                print(f"📋 Total: {stats.total}")
                print(f"✅ Completed: {stats.completed}")
                print(f"⏳ Pending: {stats.pending}")
                print(f"🚨 Overdue: {stats.overdue}")
                if stats.total:
                    print(f"Progress: {progress_bar(stats.completion_rate)} {stats.completion_rate}%")
                if stats.high_priority_pending:
                    print(f"🔴 {stats.high_priority_pending} High Priority Pending")

        elif args.command == "reset":
            manager.reset()
            print("🧹 All tasks removed")

    except TaskValidationError as e:
        print(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
