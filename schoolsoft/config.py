"""
Settings for the command line tool.

The library itself is configured through SchoolSoft(...) arguments only.
The CLI reads its defaults from the environment (or a .env file):

    SCHOOLSOFT_SCHOOL      school identifier, e.g. "engelska"
    SCHOOLSOFT_USERNAME    student username
    SCHOOLSOFT_PASSWORD    student password
    CHROMIUM_PATH          optional path to a local Chromium executable
    SCHOOLSOFT_HOST        portal host (default sms14.schoolsoft.se)
    SCHOOLSOFT_HEADLESS    "0"/"false" to show the browser window
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_HOST = "sms14.schoolsoft.se"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    school: str = ""
    username: str = ""
    password: str = ""
    executable_path: Optional[str] = None
    host: str = DEFAULT_HOST
    headless: bool = True


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Values from env_file (or a .env found by python-dotenv) never override
    variables that are already set in the environment.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return Settings(
        school=_env("SCHOOLSOFT_SCHOOL"),
        username=_env("SCHOOLSOFT_USERNAME"),
        password=os.environ.get("SCHOOLSOFT_PASSWORD", ""),
        executable_path=_env("CHROMIUM_PATH") or None,
        host=_env("SCHOOLSOFT_HOST") or DEFAULT_HOST,
        headless=_env("SCHOOLSOFT_HEADLESS", "1").lower() not in _FALSE_VALUES,
    )
