"""Failures raised by the uicheck harness."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class UICheckError(Exception):
    """Base exception for all harness failures."""

    pass


class SessionLaunchFailure(UICheckError):
    """Browser could not be launched or could not reach the base URL. Never retried."""

    pass


class ElementWaitError(UICheckError, AssertionError):
    """A timed wait did not produce a usable element."""

    def __init__(self, locator, test_name: str, screenshot: Optional[Path]):
        self.locator = locator
        self.test_name = test_name
        self.screenshot = screenshot
        super().__init__(
            f"Element not found: {locator}\nTest: {test_name}\nScreenshot: {screenshot or '<not captured>'}"
        )


class WaitTimeout(ElementWaitError):
    """Deadline elapsed before the locator resolved to a visible, enabled element."""

    def __init__(self, locator, test_name: str, screenshot: Optional[Path], timeout: float):
        self.timeout = timeout
        super().__init__(locator, test_name, screenshot)


class DriverTransportError(ElementWaitError):
    """The driver or its session failed while polling."""

    pass


class ElementNotFoundAfterScan(UICheckError, AssertionError):
    """No candidate of a fallback-selector scan matched."""

    def __init__(self, candidates: Sequence, screenshot: Optional[Path]):
        self.candidates = list(candidates)
        self.screenshot = screenshot
        tried = ", ".join(str(c) for c in self.candidates)
        super().__init__(
            f"No candidate matched after scanning {len(self.candidates)} selector(s): {tried}. "
            f"Screenshot saved: {screenshot or '<not captured>'}"
        )
