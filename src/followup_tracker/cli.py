"""Command-line entry point for the follow-up tracker."""

from __future__ import annotations

import argparse
from pathlib import Path

from followup_tracker.core import AppSettings, configure_logging, load_app_settings
from followup_tracker.core.datetime_utils import days_ago_label
from followup_tracker.core.models import ActionKind, ActionOutcome, ViewFilter
from followup_tracker.ingestion import build_mailbox_source
from followup_tracker.intelligence import recommend_action
from followup_tracker.storage import SqliteSnapshotStore
from followup_tracker.tracker import FollowUpTracker


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Email follow-up tracker")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="info",
        choices=["info", "refresh", "list", "mark", "clear", "weights", "serve"],
        help="Operation to execute.",
    )
    parser.add_argument(
        "--filter",
        dest="filter_key",
        choices=[item.value for item in ViewFilter],
        default=ViewFilter.ALL.value,
        help="Filter for the list command (default: all).",
    )
    parser.add_argument(
        "--id",
        dest="message_id",
        default=None,
        help="Message id for the mark command.",
    )
    parser.add_argument(
        "--action",
        choices=[item.value for item in ActionKind],
        default=None,
        help="Action recorded by the mark command.",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the clear command without prompting.",
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="Bind address for the serve command."
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port for the serve command."
    )
    return parser


def execute(args: argparse.Namespace, settings: AppSettings) -> int:
    """Execute the requested CLI command and return an exit code."""
    command = args.command
    if command == "info":
        print("Follow-up tracker is ready.")
        print(f"Mailbox source: {settings.mailbox.source}")
        print(f"Database path: {settings.storage.db_path}")
        return 0
    if command == "serve":
        return _run_server(settings, host=args.host, port=args.port)
    if command == "mark" and (args.message_id is None or args.action is None):
        print("The mark command requires --id and --action.")
        return 2

    with SqliteSnapshotStore(settings.storage) as store:
        tracker = FollowUpTracker(
            store, build_mailbox_source(settings.mailbox), settings
        )
        if command == "refresh":
            outcome = tracker.refresh()
            print(outcome.message)
            if not outcome.success:
                return 1
            _print_view(tracker, ViewFilter.ALL)
        elif command == "list":
            _print_view(tracker, ViewFilter(args.filter_key))
        elif command == "mark":
            result = tracker.mark_action(args.message_id, ActionKind(args.action))
            if result is ActionOutcome.NOT_FOUND:
                print(f"No tracked message with id {args.message_id}.")
                return 1
            print(f"Recorded {args.action} for {args.message_id}.")
        elif command == "clear":
            confirmed = args.yes or _confirm_clear()
            print(tracker.clear_all(confirm=confirmed).message)
        elif command == "weights":
            _print_weights(tracker)
    return 0


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    settings = load_app_settings(env_file=args.env_file)
    configure_logging(settings.logging)
    raise SystemExit(execute(args, settings))


def _confirm_clear() -> bool:
    answer = input(
        "Are you sure? This will clear all tracked emails and learning data. [y/N] "
    )
    return answer.strip().lower() in {"y", "yes"}


def _print_view(tracker: FollowUpTracker, filter_key: ViewFilter) -> None:
    view = tracker.view(filter_key)
    now = tracker.now()
    print(
        f"Total tracked: {view.total_count}  Pending: {view.pending_count}  "
        f"High priority: {view.high_priority_count}"
    )
    if not view.messages:
        print("All caught up! No follow-ups needed.")
        return

    header = f"{'Priority':<8}  {'Age':>5}  {'Sender':<20}  {'ID':<24}  Subject"
    print(header)
    print("-" * len(header))
    for message in view.messages:
        age = days_ago_label(message.received_at, now)
        attachment = " [attachment]" if message.has_attachments else ""
        print(
            f"{message.priority.value:<8}  {age:>5}  {message.sender[:20]:<20}  "
            f"{message.id[:24]:<24}  {message.subject}{attachment}"
        )
        print(f"{'':<8}  -> {recommend_action(message)}")


def _print_weights(tracker: FollowUpTracker) -> None:
    weights = tracker.state.learning_weights
    if not weights.sender:
        print("No learned sender weights yet.")
        return
    for sender, weight in sorted(
        weights.sender.items(), key=lambda item: item[1], reverse=True
    ):
        print(f"{weight:>+7.1f}  {sender or '(unknown sender)'}")


def _run_server(settings: AppSettings, *, host: str, port: int) -> int:
    import uvicorn

    from followup_tracker.web import create_app

    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


if __name__ == "__main__":
    main()
