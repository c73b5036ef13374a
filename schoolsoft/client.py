"""
SchoolSoft client (public API).

Typical use:

    from schoolsoft import SchoolSoft

    with SchoolSoft("engelska") as school:
        school.login("username", "password")
        menu = school.get_lunch_menu()
        news = school.get_news()

Only student accounts are supported. Every get_* call navigates the single
browser page and parses what it finds there, so calls must not overlap.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from schoolsoft.config import DEFAULT_HOST
from schoolsoft.errors import InvalidCredentials, NotLoggedIn, ValidationError
from schoolsoft.model import Assignments, LunchMenu, NewsCategory, Results, WeeklyPlanningSubject
from schoolsoft.parse import (
    parse_assignments,
    parse_lunch_menu,
    parse_news,
    parse_results,
    parse_weekly_planning,
)
from schoolsoft.scrape import WAIT_LOAD, WAIT_NETWORK_IDLE, BrowserSession

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Portal pages (relative to base_url)
# ---------------------------------------------------------------------------

LOGIN_PATH = "/Login.jsp?usertype=1"
LANDING_PATH = "/student/right_student_startpage.jsp"
LUNCH_MENU_PATH = "/student/right_student_lunchmenu.jsp"
NEWS_PATH = "/student/right_student_news.jsp"
ASSIGNMENTS_PATH = "/student/right_student_test.jsp"
RESULTS_PATH = "/student/right_student_test_results.jsp"
WEEKLY_PLANNING_PATH = "/student/right_student_planning.jsp?objectpage=1#/overview/weeklyplanning"

USERNAME_INPUT = "input#ssusername"
PASSWORD_INPUT = "input#sspassword"
SUBMIT_BUTTON = 'input[type="submit"]'


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be of type str, got {type(value).__name__}")
    if not value:
        raise ValidationError(f"{name} must not be empty")
    return value


class SchoolSoft:
    """
    One logged-in student session against a school's SchoolSoft portal.

    Args:
        school: school identifier as it appears in the portal URL
        executable_path: local Chromium to use instead of Playwright's bundled one
        host: portal host
        headless: run the browser without a window
        session: BrowserSession to use (mainly for tests)
    """

    def __init__(
        self,
        school: str,
        executable_path: Optional[str] = None,
        *,
        host: str = DEFAULT_HOST,
        headless: bool = True,
        session: Optional[BrowserSession] = None,
    ) -> None:
        self.school = school
        self.base_url = f"https://{host}/{school}/jsp"
        self._session = session if session is not None else BrowserSession(executable_path, headless=headless)
        self._logged_in = False

    def __enter__(self) -> "SchoolSoft":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    @property
    def landing_url(self) -> str:
        return self.base_url + LANDING_PATH

    def _require_login(self) -> None:
        if not self._logged_in:
            raise NotLoggedIn()

    def _fetch(self, path: str, wait_until: str = WAIT_LOAD) -> str:
        """
        Load a portal page and return its HTML (caller must be logged in).
        """
        self._require_login()
        url = self.base_url + path
        logger.info("Fetching %s", url)
        self._session.goto(url, wait_until=wait_until)
        return self._session.content()

    # -----------------------------------------------------------------------
    # Session
    # -----------------------------------------------------------------------

    def login(self, username: str, password: str) -> str:
        """
        Log in as a student and return the start page URL.

        Raises ValidationError for non-string/empty credentials (before any
        browser work) and InvalidCredentials if the portal did not redirect
        to the student start page.
        """
        _require_text("username", username)
        _require_text("password", password)

        if not self._session.is_open:
            self._session.open()

        self._logged_in = False
        logger.info("Logging in to %s", self.base_url)

        self._session.goto(self.base_url + LOGIN_PATH)
        self._session.fill(USERNAME_INPUT, username)
        self._session.fill(PASSWORD_INPUT, password)
        self._session.click_and_wait(SUBMIT_BUTTON)

        # a failed login stays on (or returns to) the login page
        url = self._session.url
        if url != self.landing_url:
            logger.warning("Login failed, ended up on %s", url)
            raise InvalidCredentials()

        self._logged_in = True
        return url

    def close(self) -> None:
        """
        Close the browser. Safe to call again on a closed session.
        """
        self._logged_in = False
        self._session.close()

    # -----------------------------------------------------------------------
    # Pages
    # -----------------------------------------------------------------------

    def get_lunch_menu(self, week: Optional[int] = None) -> LunchMenu:
        """
        Lunch menu of the current week, or of the given week number.

        A week without school returns LunchMenu(heading="", menu=[]).
        """
        self._require_login()

        path = LUNCH_MENU_PATH
        if week is not None:
            # bool is an int subclass but never a week
            if isinstance(week, bool) or not isinstance(week, int):
                raise ValidationError("Week must be an integer")
            path = f"{path}?requestid={week}"

        menu = parse_lunch_menu(self._fetch(path))
        logger.debug("Lunch menu: %d days", len(menu.menu))
        return menu

    def get_news(self) -> List[NewsCategory]:
        news = parse_news(self._fetch(NEWS_PATH))
        logger.debug("News: %d categories", len(news))
        return news

    def get_assignments(self) -> Assignments:
        """
        Upcoming and old assignments (tests, hand-ins, ...).
        """
        assignments = parse_assignments(self._fetch(ASSIGNMENTS_PATH))
        logger.debug("Assignments: %d upcoming, %d old", len(assignments.upcoming), len(assignments.old))
        return assignments

    def get_results(self) -> Results:
        results = parse_results(self._fetch(RESULTS_PATH))
        logger.debug("Results: %d new, %d old", len(results.new), len(results.old))
        return results

    def get_weekly_planning(self) -> List[WeeklyPlanningSubject]:
        """
        Weekly planning for every subject that has one.

        The planning view is rendered client-side, so this waits for the
        network to go idle instead of the plain load event.
        """
        planning = parse_weekly_planning(self._fetch(WEEKLY_PLANNING_PATH, wait_until=WAIT_NETWORK_IDLE))
        logger.debug("Weekly planning: %d subjects", len(planning))
        return planning
