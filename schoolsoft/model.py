"""
Central data model definitions used across the project.

Every portal page is returned as one of the records below so that:
- callers get the same field names no matter which page they fetched
- the CLI can turn any record into JSON with to_dict()

All string fields hold the raw inner HTML of the node they were read from.
The portal is not normalized in any way.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, List


@dataclass(frozen=True)
class LunchDay:
    title: str
    lunch: str


@dataclass(frozen=True)
class LunchMenu:
    """
    Lunch menu for one week. An empty menu means there is no school that week.
    """

    heading: str
    menu: List[LunchDay] = field(default_factory=list)


@dataclass(frozen=True)
class NewsItem:
    heading: str
    content: str
    date: str
    from_: str
    to: str


@dataclass(frozen=True)
class NewsCategory:
    """
    One category heading of the news page and the news listed below it.
    """

    category: str
    news: List[NewsItem] = field(default_factory=list)


@dataclass(frozen=True)
class Assignment:
    heading: str
    content: str
    date: str
    lesson: str
    teacher: str
    type: str
    id: int


@dataclass(frozen=True)
class Assignments:
    """
    Assignments as the portal splits them: upcoming first, old second.
    """

    upcoming: List[Assignment] = field(default_factory=list)
    old: List[Assignment] = field(default_factory=list)


@dataclass(frozen=True)
class Result:
    heading: str
    comment: str
    description: str
    date: str
    lesson: str
    teacher: str
    type: str
    id: int


@dataclass(frozen=True)
class Results:
    new: List[Result] = field(default_factory=list)
    old: List[Result] = field(default_factory=list)


@dataclass(frozen=True)
class WeeklyPlanningEntry:
    week: int
    duration: str
    content: str


@dataclass(frozen=True)
class WeeklyPlanningSubject:
    subject: str
    planning: List[WeeklyPlanningEntry] = field(default_factory=list)


def to_dict(record: Any) -> Any:
    """
    Convert a record (or a list of records) into plain dicts and lists.

    Field names ending in "_" lose the underscore, so NewsItem.from_ is
    exported as "from".
    """
    if isinstance(record, (list, tuple)):
        return [to_dict(x) for x in record]
    if is_dataclass(record) and not isinstance(record, type):
        return {f.name.rstrip("_"): to_dict(getattr(record, f.name)) for f in fields(record)}
    return record
