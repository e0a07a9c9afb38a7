"""Kommandozeile für den Redmine Zeiterfassungs-Client.

Nutzt denselben Ablauf wie die Desktop-Anwendung; Fehlermeldungen der
Validierung werden pro Feld ausgegeben.
"""

from __future__ import annotations

import argparse
import datetime as dt
import getpass
import logging
import sys
from typing import Optional, Sequence

from .activities import ACTIVITIES, DEFAULT_ACTIVITY_ID
from .api_client import ApiClient
from .config import AppConfig, configure_logging, load_config
from .models import AuthState, Notification, NotificationStyle, TimeEntryDraft
from .session import TimeLogSession
from .storage import CredentialStore, LocalStorage

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNAUTHENTICATED = 2


def _print_notification(notification: Notification) -> None:
    stream = sys.stdout if notification.style is NotificationStyle.SUCCESS else sys.stderr
    text = f"{notification.title}: {notification.message}" if notification.message else notification.title
    print(text, file=stream)


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redmine-timelog",
        description="Log time entries to Redmine.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="store the Redmine API key")
    login.add_argument("--key", help="API key (prompted when omitted)")

    commands.add_parser("logout", help="revoke the stored API key")
    commands.add_parser("projects", help="list active projects")
    commands.add_parser("activities", help="list activities")

    log = commands.add_parser("log", help="create a time entry")
    log.add_argument("--project", default="", help="project id")
    log.add_argument("--date", type=_parse_date, default=dt.date.today(), help="YYYY-MM-DD, default today")
    log.add_argument("--hours", default="", help="hours spent")
    log.add_argument("--activity", default=DEFAULT_ACTIVITY_ID, help="activity id, default %(default)s")
    log.add_argument("--comments", default="", help="optional comment")
    return parser


# ----------------------------------------------------------------------
# Befehle
# ----------------------------------------------------------------------
def _cmd_login(session: TimeLogSession, args: argparse.Namespace) -> int:
    key = args.key if args.key is not None else getpass.getpass("API Key: ")
    if session.authenticate(key) is not AuthState.AUTHENTICATED:
        print("Empty API key, nothing to authenticate with", file=sys.stderr)
        return EXIT_UNAUTHENTICATED
    print("API key stored")
    return EXIT_OK


def _cmd_logout(session: TimeLogSession, args: argparse.Namespace) -> int:
    session.revoke()
    print("API key revoked")
    return EXIT_OK


def _cmd_projects(session: TimeLogSession, args: argparse.Namespace) -> int:
    result = session.load_projects()
    if result is not None and not result.ok:
        return EXIT_FAILED
    for project in session.form.state.projects:
        print(f"{project.id}\t{project.identifier}\t{project.name}")
    return EXIT_OK


def _cmd_activities(session: TimeLogSession, args: argparse.Namespace) -> int:
    for activity in ACTIVITIES:
        print(f"{activity.id}\t{activity.label}")
    return EXIT_OK


def _cmd_log(session: TimeLogSession, args: argparse.Namespace) -> int:
    form = session.form
    draft = TimeEntryDraft(
        project_id=args.project,
        spent_on=args.date,
        hours=args.hours,
        comments=args.comments,
        activity_id=args.activity,
    )
    if form.submit(draft):
        return EXIT_OK
    for field_id, message in form.state.errors.items():
        print(f"{field_id}: {message}", file=sys.stderr)
    return EXIT_FAILED


COMMANDS = {
    "login": _cmd_login,
    "logout": _cmd_logout,
    "projects": _cmd_projects,
    "activities": _cmd_activities,
    "log": _cmd_log,
}

AUTHENTICATED_COMMANDS = {"projects", "log"}


def main(argv: Optional[Sequence[str]] = None, config: Optional[AppConfig] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config or load_config()
    configure_logging("DEBUG" if args.verbose else config.log_level)

    store = CredentialStore(LocalStorage(config.storage_path))
    session = TimeLogSession(
        store,
        lambda key: ApiClient(key, timeout=config.request_timeout),
        notify=_print_notification,
    )
    state = session.start()
    if args.command in AUTHENTICATED_COMMANDS and state is not AuthState.AUTHENTICATED:
        print("No API key stored, run 'redmine-timelog login' first", file=sys.stderr)
        return EXIT_UNAUTHENTICATED

    logger.debug("Befehl %s", args.command)
    return COMMANDS[args.command](session, args)


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    sys.exit(main())
