"""
Parsing (portal HTML -> records).

Each public function takes the HTML of one loaded portal page and returns
the matching record from schoolsoft.model.

Important rules (DO NOT CHANGE):
- Missing containers return an empty record, never an error
  (the portal has weeks and terms without any data)
- Missing optional nodes become ""
- Unparseable numbers become 0
- Field values are the raw inner HTML of the node, not cleaned text
"""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.formatter import HTMLFormatter

from schoolsoft.model import (
    Assignment,
    Assignments,
    LunchDay,
    LunchMenu,
    NewsCategory,
    NewsItem,
    Result,
    Results,
    WeeklyPlanningEntry,
    WeeklyPlanningSubject,
)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

LUNCH_TABLE = "#lunchmenu_con_content > table"
LUNCH_HEADING = "#lunchmenu_con > div:nth-of-type(1) > div:nth-of-type(2)"
LUNCH_DATES = 'div[class="h3_bold"]'
LUNCH_MEALS = 'td[style="word-wrap: break-word"]'

NEWS_ROOT = "#news_con_content"
ASSIGNMENTS_ROOT = "#test_con_content"
RESULTS_ROOT = "#result_con_content"
PLANNING_ROOT = "#content > div > div:nth-of-type(2) > div:nth-of-type(2) > div > div"

# paragraphs and lists of the TinyMCE editor the portal uses for free text
RICH_TEXT = ".tinymce-p, ul"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _escape_text(text: str) -> str:
    # the same characters a browser escapes when serializing innerHTML
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\xa0", "&nbsp;")
    )


# serialize like the browser does: "<br>" not "<br/>", "&nbsp;" kept as entity
BROWSER_FORMATTER = HTMLFormatter(entity_substitution=_escape_text, void_element_close_prefix=None)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _inner(node: Optional[Tag]) -> str:
    """
    Inner HTML of a node, or "" if the node does not exist.
    """
    if node is None:
        return ""
    return node.decode_contents(formatter=BROWSER_FORMATTER)


def _find_inner(node: Optional[Tag], selector: str) -> str:
    """
    Inner HTML of the first descendant matching selector, or "".
    """
    if node is None:
        return ""
    return _inner(node.select_one(selector))


def _children(node: Optional[Tag]) -> List[Tag]:
    """
    Element children only (text and comments are skipped).
    """
    if node is None:
        return []
    return node.find_all(True, recursive=False)


def _rich_text(node: Optional[Tag]) -> str:
    """
    Rebuild a free-text field from its paragraphs and lists.

    The portal splits one text into many sibling nodes; every matched node
    contributes its inner HTML followed by a newline, in document order.
    """
    if node is None:
        return ""
    return "".join(f"{_inner(part)}\n" for part in node.select(RICH_TEXT))


def parse_int(text: Optional[str]) -> int:
    """
    Parse the leading integer of a string ("37", " 12abc").

    Returns 0 if the string does not start with a number.
    """
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    return int(match.group(1))


def parse_element_id(element_id: Optional[str]) -> int:
    """
    Extract the numeric id from a portal element id.

    The portal builds ids as "<prefix>-<5 letters><number>",
    e.g. "collapse-event12345" -> 12345.
    """
    if not element_id:
        return 0
    parts = element_id.split("-")
    if len(parts) < 2:
        return 0
    return parse_int(parts[1][5:])


def _accordion_id(inner_left: Optional[Tag]) -> int:
    # the id sits on the wrapper around the left inner column
    if inner_left is None or inner_left.parent is None:
        return 0
    return parse_element_id(inner_left.parent.get("id"))


def _is_empty(root: Tag) -> bool:
    return not _children(root)


# ---------------------------------------------------------------------------
# Lunch menu
# ---------------------------------------------------------------------------


def parse_lunch_menu(html: str) -> LunchMenu:
    """
    Parse the lunch menu page.

    Dates and meals are not wrapped together on the page, so both lists are
    read separately and paired by position. The page always emits them in
    the same order; a meal without a date gets an empty title.
    """
    soup = _soup(html)

    # no table means no lunch this week
    if soup.select_one(LUNCH_TABLE) is None:
        return LunchMenu(heading="", menu=[])

    heading = _inner(soup.select_one(LUNCH_HEADING))
    dates = [_inner(el) for el in soup.select(LUNCH_DATES)]
    meals = [_inner(el) for el in soup.select(LUNCH_MEALS)]

    menu = [
        LunchDay(title=dates[i] if i < len(dates) else "", lunch=meal)
        for i, meal in enumerate(meals)
    ]
    return LunchMenu(heading=heading, menu=menu)


# ---------------------------------------------------------------------------
# News
# ---------------------------------------------------------------------------


def _parse_news_item(el: Tag) -> NewsItem:
    heading_left = el.select_one(".accordion-heading-left")
    inner_left = el.select_one(".accordion_inner_left")
    right_info = el.select_one(".inner_right_info")

    return NewsItem(
        heading=_find_inner(heading_left, "div > span"),
        content=_rich_text(inner_left),
        date=_find_inner(el, ".accordion-heading-date-wide"),
        from_=_find_inner(right_info, "div:nth-child(2)"),
        to=_find_inner(right_info, "div:nth-child(4)"),
    )


def parse_news(html: str) -> List[NewsCategory]:
    """
    Parse the news page into categories.

    The container holds a flat list: a ".h3_bold" heading followed by the
    block with that category's news, repeated per category.
    """
    root = _soup(html).select_one(NEWS_ROOT)
    if root is None or _is_empty(root):
        return []

    children = _children(root)
    categories: List[NewsCategory] = []

    for i, child in enumerate(children):
        if "h3_bold" not in (child.get("class") or []):
            continue

        body = children[i + 1] if i + 1 < len(children) else None
        items = [_parse_news_item(el) for el in _children(body)]
        categories.append(NewsCategory(category=_inner(child), news=items))

    return categories


# ---------------------------------------------------------------------------
# Assignments ("tests" in the portal)
# ---------------------------------------------------------------------------


def _parse_assignment(el: Tag) -> Assignment:
    heading_left = el.select_one(".accordion-heading-left")
    heading_right = el.select_one(".accordion-heading-right")
    inner_left = el.select_one(".accordion_inner_left")
    inner_right = el.select_one(".accordion_inner_right")

    return Assignment(
        heading=_find_inner(heading_left, "div:nth-child(2)"),
        content=_rich_text(inner_left),
        date=_find_inner(heading_left, "div:nth-child(1)"),
        lesson=_find_inner(heading_right, "div:nth-child(2)"),
        teacher=_find_inner(inner_right, "div:nth-of-type(2)"),
        type=_find_inner(heading_right, "div:nth-child(1)"),
        id=_accordion_id(inner_left),
    )


def _accordion_lists(root: Tag) -> tuple[List[Tag], List[Tag]]:
    """
    Return the children of the first and second "#accordion" container.

    The portal reuses the id for both lists (current/new first, old second).
    """
    accordions = root.select("#accordion")
    first = _children(accordions[0]) if len(accordions) > 0 else []
    second = _children(accordions[1]) if len(accordions) > 1 else []
    return first, second


def parse_assignments(html: str) -> Assignments:
    root = _soup(html).select_one(ASSIGNMENTS_ROOT)
    if root is None or _is_empty(root):
        return Assignments(upcoming=[], old=[])

    upcoming, old = _accordion_lists(root)
    return Assignments(
        upcoming=[_parse_assignment(el) for el in upcoming],
        old=[_parse_assignment(el) for el in old],
    )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _parse_result(el: Tag) -> Result:
    heading_left = el.select_one(".accordion-heading-left")
    inner_left = el.select_one(".accordion_inner_left")
    inner_right = el.select_one(".accordion_inner_right")

    # "Lesson - Heading" shares one node
    lesson_and_heading = heading_left.select_one("div:nth-child(2)") if heading_left is not None else None
    parts = _inner(lesson_and_heading).split(" - ") if lesson_and_heading is not None else []

    description_node = inner_right.select_one("div:nth-child(1)") if inner_right is not None else None

    return Result(
        heading=parts[1] if len(parts) > 1 else "",
        comment=_find_inner(inner_left, "div:nth-of-type(3)"),
        description=_rich_text(description_node),
        date=_find_inner(heading_left, "div:nth-child(1)"),
        lesson=parts[0] if parts else "",
        teacher=_find_inner(inner_right, "div:nth-of-type(4)"),
        type=_find_inner(inner_left, "div:nth-of-type(1)"),
        id=_accordion_id(inner_left),
    )


def parse_results(html: str) -> Results:
    root = _soup(html).select_one(RESULTS_ROOT)
    if root is None or _is_empty(root):
        return Results(new=[], old=[])

    new, old = _accordion_lists(root)
    return Results(
        new=[_parse_result(el) for el in new],
        old=[_parse_result(el) for el in old],
    )


# ---------------------------------------------------------------------------
# Weekly planning
# ---------------------------------------------------------------------------


def _parse_planning_entry(el: Tag) -> WeeklyPlanningEntry:
    # heading reads like "Vecka 37"
    week_text = _find_inner(el.select_one(".accordion-heading-left"), "div:nth-child(1)")
    week_tokens = week_text.split(" ")

    return WeeklyPlanningEntry(
        week=parse_int(week_tokens[-1]),
        duration=_find_inner(el, ".accordion-heading-date-wide"),
        content=_rich_text(el.select_one(".accordion_text")),
    )


def parse_weekly_planning(html: str) -> List[WeeklyPlanningSubject]:
    """
    Parse the weekly planning overview (one block per subject).

    The page is a single-page app; the HTML must be taken after the network
    went idle, otherwise the container is still empty.
    """
    root = _soup(html).select_one(PLANNING_ROOT)
    if root is None or _is_empty(root):
        return []

    subjects: List[WeeklyPlanningSubject] = []
    for container in _children(root):
        # the app ships an inline <script> inside the container
        if container.name == "script":
            continue

        # subject header reads like "Planering - Matematik"
        subject_text = _find_inner(container, "div:nth-child(1) > div:nth-child(2)")
        subject = subject_text.split(" - ")[-1]

        entries = [_parse_planning_entry(el) for el in _children(container.select_one("#accordion"))]
        subjects.append(WeeklyPlanningSubject(subject=subject, planning=entries))

    return subjects
