"""
SchoolSoft student portal scraper.

    from schoolsoft import SchoolSoft

    with SchoolSoft("engelska") as school:
        school.login("username", "password")
        print(school.get_lunch_menu())
"""

from schoolsoft.client import SchoolSoft
from schoolsoft.errors import (
    AuthError,
    InvalidCredentials,
    NavigationError,
    NotLoggedIn,
    ResourceError,
    SchoolSoftError,
    ValidationError,
)
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
    to_dict,
)

__all__ = [
    "SchoolSoft",
    "SchoolSoftError",
    "AuthError",
    "InvalidCredentials",
    "NotLoggedIn",
    "ValidationError",
    "NavigationError",
    "ResourceError",
    "Assignment",
    "Assignments",
    "LunchDay",
    "LunchMenu",
    "NewsCategory",
    "NewsItem",
    "Result",
    "Results",
    "WeeklyPlanningEntry",
    "WeeklyPlanningSubject",
    "to_dict",
]
