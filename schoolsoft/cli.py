"""
CLI (Command Line Interface).

Quick terminal commands for checking what the portal currently shows, e.g.:

    schoolsoft lunch
    schoolsoft lunch --week 37
    schoolsoft news
    schoolsoft assignments
    schoolsoft results
    schoolsoft planning

Credentials come from the environment / .env (see schoolsoft.config) and can
be overridden with --school / --username / --password.

Note:
- Output is a rich table with HTML stripped; use --json for the raw records
- Any SchoolSoftError is printed and turned into exit code 1
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Callable

from bs4 import BeautifulSoup
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from schoolsoft.client import SchoolSoft
from schoolsoft.config import Settings, load_settings
from schoolsoft.errors import SchoolSoftError
from schoolsoft.model import Assignments, LunchMenu, NewsCategory, Results, WeeklyPlanningSubject, to_dict

console = Console()


def _plain(html: str) -> str:
    """
    Strip tags from a field for table output (markup is escaped for rich).
    """
    text = BeautifulSoup(html or "", "html.parser").get_text(" ", strip=True)
    return escape(text)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _render_lunch(menu: LunchMenu) -> None:
    if not menu.menu:
        console.print("No lunch menu for this week.")
        return

    table = Table(title=_plain(menu.heading) or None)
    table.add_column("Day")
    table.add_column("Lunch")
    for day in menu.menu:
        table.add_row(_plain(day.title), _plain(day.lunch))
    console.print(table)


def _render_news(categories: list[NewsCategory]) -> None:
    if not categories:
        console.print("No news.")
        return

    for category in categories:
        table = Table(title=_plain(category.category))
        table.add_column("Date")
        table.add_column("Heading")
        table.add_column("From")
        table.add_column("To")
        for item in category.news:
            table.add_row(_plain(item.date), _plain(item.heading), _plain(item.from_), _plain(item.to))
        console.print(table)


def _render_assignments(assignments: Assignments) -> None:
    table = Table(title="Assignments")
    for name in ("", "Date", "Lesson", "Heading", "Type", "Teacher"):
        table.add_column(name)

    for label, items in (("upcoming", assignments.upcoming), ("old", assignments.old)):
        for a in items:
            table.add_row(label, _plain(a.date), _plain(a.lesson), _plain(a.heading), _plain(a.type), _plain(a.teacher))

    if not table.row_count:
        console.print("No assignments.")
        return
    console.print(table)


def _render_results(results: Results) -> None:
    table = Table(title="Results")
    for name in ("", "Date", "Lesson", "Heading", "Type", "Comment"):
        table.add_column(name)

    for label, items in (("new", results.new), ("old", results.old)):
        for r in items:
            table.add_row(label, _plain(r.date), _plain(r.lesson), _plain(r.heading), _plain(r.type), _plain(r.comment))

    if not table.row_count:
        console.print("No results.")
        return
    console.print(table)


def _render_planning(subjects: list[WeeklyPlanningSubject]) -> None:
    if not subjects:
        console.print("No weekly planning.")
        return

    for subject in subjects:
        table = Table(title=_plain(subject.subject))
        table.add_column("Week", justify="right")
        table.add_column("Duration")
        table.add_column("Planning")
        for entry in subject.planning:
            table.add_row(str(entry.week), _plain(entry.duration), _plain(entry.content))
        console.print(table)


# command -> (fetch from a logged-in client, render)
COMMANDS: dict[str, tuple[Callable[[SchoolSoft, argparse.Namespace], Any], Callable[[Any], None]]] = {
    "lunch": (lambda school, args: school.get_lunch_menu(args.week), _render_lunch),
    "news": (lambda school, args: school.get_news(), _render_news),
    "assignments": (lambda school, args: school.get_assignments(), _render_assignments),
    "results": (lambda school, args: school.get_results(), _render_results),
    "planning": (lambda school, args: school.get_weekly_planning(), _render_planning),
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _resolve_settings(args: argparse.Namespace) -> Settings:
    """
    Environment settings with command line values taking precedence.
    """
    settings = load_settings(args.env_file)
    if args.school:
        settings.school = args.school.strip()
    if args.username:
        settings.username = args.username.strip()
    if args.password:
        settings.password = args.password
    if args.chromium_path:
        settings.executable_path = args.chromium_path
    if args.host:
        settings.host = args.host.strip()
    if args.show_browser:
        settings.headless = False
    return settings


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _run(args: argparse.Namespace) -> int:
    settings = _resolve_settings(args)

    missing = [name for name in ("school", "username", "password") if not getattr(settings, name)]
    if missing:
        print(f"Please provide: {', '.join(missing)} (options or SCHOOLSOFT_* environment variables).")
        return 1

    fetch, render = COMMANDS[args.command]

    try:
        with SchoolSoft(
            settings.school,
            settings.executable_path,
            host=settings.host,
            headless=settings.headless,
        ) as school:
            school.login(settings.username, settings.password)
            data = fetch(school, args)
    except SchoolSoftError as exc:
        print(f"Error: {exc}")
        return 1

    if args.json:
        print(json.dumps(to_dict(data), ensure_ascii=False, indent=2))
    else:
        render(data)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="schoolsoft", description="SchoolSoft student portal scraper")
    parser.add_argument("--school", type=str, help="School identifier (SCHOOLSOFT_SCHOOL)")
    parser.add_argument("--username", "-u", type=str, help="Username (SCHOOLSOFT_USERNAME)")
    parser.add_argument("--password", "-p", type=str, help="Password (SCHOOLSOFT_PASSWORD)")
    parser.add_argument("--chromium-path", type=str, help="Local Chromium executable (CHROMIUM_PATH)")
    parser.add_argument("--host", type=str, help="Portal host (SCHOOLSOFT_HOST)")
    parser.add_argument("--env-file", type=str, default=None, help="Read settings from this .env file")
    parser.add_argument("--show-browser", action="store_true", help="Run the browser with a window")
    parser.add_argument("--json", action="store_true", help="Print the raw records as JSON")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="More logging (-vv for debug)")

    sub = parser.add_subparsers(dest="command", required=True)

    p_lunch = sub.add_parser("lunch", help="Show the lunch menu")
    p_lunch.add_argument("--week", "-w", type=int, default=None, help="Week number (e.g. 37)")

    sub.add_parser("news", help="Show the news")
    sub.add_parser("assignments", help="Show upcoming and old assignments")
    sub.add_parser("results", help="Show new and old results")
    sub.add_parser("planning", help="Show the weekly planning")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, runs the command,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    raise SystemExit(_run(args))
