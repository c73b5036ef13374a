"""
Exceptions raised by the SchoolSoft client.

Everything derives from SchoolSoftError so callers (and the CLI) can catch
one type. Validation and login-state errors are raised before the browser
is touched; browser failures are wrapped and chained to the Playwright error.
"""

from __future__ import annotations


class SchoolSoftError(Exception):
    """Base class for all errors raised by this package."""


class AuthError(SchoolSoftError):
    """Login did not end on the student start page."""


class InvalidCredentials(AuthError):
    def __init__(self, message: str = "Invalid username or password, or an unknown error occurred") -> None:
        super().__init__(message)


class NotLoggedIn(SchoolSoftError):
    def __init__(self, message: str = "User is not logged in") -> None:
        super().__init__(message)


class ValidationError(SchoolSoftError, ValueError):
    """A caller passed an argument of the wrong type or an empty value."""


class NavigationError(SchoolSoftError):
    """The browser failed to load a page or interact with it."""

    def __init__(self, url: str, message: str = "") -> None:
        self.url = url
        super().__init__(message or f"Could not load {url}")


class ResourceError(SchoolSoftError):
    """The browser could not be launched, or is not open."""
