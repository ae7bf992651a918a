"""
Global fixtures for all unit tests.

No test launches a real browser or reaches the public geocoder:
- Browser sessions are replaced with fakes that record navigate/close calls.
- The browser session cap is fixed so importing the service layer does not
  size it from the host's CPU and memory.
"""

import os
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment BEFORE any imports so Settings picks these up
os.environ["MAX_BROWSER_SESSIONS"] = "2"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["GEOCODER_USER_AGENT"] = "LeadScraperTests/1.0"


class FakeBrowserSession:
    """Stands in for StealthBrowserSession; counts lifecycle calls."""

    def __init__(
        self,
        raw_blocks: Optional[list[dict[str, Any]]] = None,
        navigate_error: Optional[Exception] = None,
        has_container: bool = True,
    ):
        self.page = MagicMock()
        self.page.wait_for_selector = AsyncMock()
        self.page.title = AsyncMock(return_value="Search results")
        self.page.evaluate = AsyncMock(
            side_effect=[raw_blocks if raw_blocks is not None else [], has_container]
        )
        self.navigate_error = navigate_error
        self.navigated_to: list[str] = []
        self.close_calls = 0

    async def navigate(self, url: str) -> None:
        self.navigated_to.append(url)
        if self.navigate_error is not None:
            raise self.navigate_error

    async def close(self) -> None:
        self.close_calls += 1

    async def __aenter__(self) -> "FakeBrowserSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class SessionRecorder:
    """Session factory that hands out fakes and remembers them."""

    def __init__(self, **session_kwargs):
        self.session_kwargs = session_kwargs
        self.sessions: list[FakeBrowserSession] = []

    async def __call__(self) -> FakeBrowserSession:
        session = FakeBrowserSession(**self.session_kwargs)
        self.sessions.append(session)
        return session


@pytest.fixture
def raw_result_blocks():
    """Two well-formed result blocks and one without a link."""
    return [
        {
            "title": "Asha Rao - Senior Engineer - Infosys | LinkedIn",
            "link": "https://in.linkedin.com/in/asha-rao",
            "snippet": "Pune, Maharashtra. Senior Engineer at Infosys.",
        },
        {
            "title": "Vikram Joshi - Engineer - TCS | LinkedIn",
            "link": None,
            "snippet": "Pune. Engineer at TCS.",
        },
        {
            "title": "Neha Kulkarni - Software Engineer | LinkedIn",
            "link": "https://in.linkedin.com/in/neha-kulkarni",
            "snippet": None,
        },
    ]


@pytest.fixture
def fake_place_validator():
    """Place validator that accepts only the tokens listed in `valid_places`."""
    validator = MagicMock()
    validator.valid_places = {"mumbai", "pune"}

    async def is_valid_place(token: str) -> bool:
        return token in validator.valid_places

    validator.is_valid_place = AsyncMock(side_effect=is_valid_place)
    return validator


@pytest.fixture
def make_session():
    """Factory for FakeBrowserSession instances."""
    return FakeBrowserSession


@pytest.fixture
def make_session_recorder():
    """Factory for SessionRecorder instances."""
    return SessionRecorder
