"""
Element waits for UI tests.

`wait_for` polls until a locator resolves to an element that is both
displayed and enabled, and on failure saves a screenshot named after the
running test before raising. `scan_fallback_selectors` is the simpler,
non-waiting strategy: try candidate selectors in order and take the first
visible one with text.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from selenium.common.exceptions import (
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from common import ensure_dirs, error_screenshot_name, get_logger
from driver_session import DriverSession
from errors import DriverTransportError, ElementNotFoundAfterScan, WaitTimeout
from locators import Locator, LocatorLike, as_locator

log = get_logger("wait")

DEFAULT_TIMEOUT = 20
DEFAULT_POLL_FREQUENCY = 0.25
SCAN_SCREENSHOT_NAME = "selector_scan_error.png"


# ---------- Probe results ----------
@dataclass(frozen=True)
class Found:
    element: Any


class _NotYetReady:
    """Nothing usable yet; falsy so WebDriverWait keeps polling."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_YET_READY"


NOT_YET_READY = _NotYetReady()


# ---------- Wait outcomes ----------
@dataclass(frozen=True)
class Resolved:
    element: Any


@dataclass(frozen=True)
class TimedOut:
    locator: Locator
    timeout: float


@dataclass(frozen=True)
class DriverError:
    locator: Locator
    cause: WebDriverException


WaitOutcome = Union[Resolved, TimedOut, DriverError]


def resolve_timeout(session: DriverSession, timeout: Optional[float]) -> float:
    if timeout is not None:
        return float(timeout)
    return float(session.config.get("default_wait_timeout", DEFAULT_TIMEOUT))


def probe(driver, locator: Locator) -> Union[Found, _NotYetReady]:
    """One direct query. Only a displayed and enabled first match counts."""
    elements = driver.find_elements(*locator)
    if not elements:
        return NOT_YET_READY
    element = elements[0]
    try:
        if element.is_displayed() and element.is_enabled():
            return Found(element)
    except StaleElementReferenceException:
        pass
    return NOT_YET_READY


def wait_outcome(
    session: DriverSession,
    locator: LocatorLike,
    timeout: Optional[float] = None,
    poll_frequency: Optional[float] = None,
) -> WaitOutcome:
    """Poll until resolved, the deadline passes, or the driver breaks. Never raises for those."""
    locator = as_locator(locator)
    timeout = resolve_timeout(session, timeout)
    if poll_frequency is None:
        poll_frequency = float(session.config.get("poll_frequency", DEFAULT_POLL_FREQUENCY))
    wait = WebDriverWait(session.driver, timeout, poll_frequency=poll_frequency)
    try:
        with session.suspend_implicit_wait():
            found = wait.until(lambda d: probe(d, locator))
    except TimeoutException:
        return TimedOut(locator, timeout)
    except WebDriverException as e:
        return DriverError(locator, e)
    return Resolved(found.element)


def capture_screenshot(session: DriverSession, filename: str) -> Path:
    """Save a PNG of the current page into the screenshot dir and return its path."""
    path = ensure_dirs(session.config) / filename
    if not session.driver.save_screenshot(str(path)):
        raise OSError(f"Could not write screenshot {path}")
    log.info("Screenshot saved: %s", path)
    return path


def _try_screenshot(session: DriverSession, filename: str) -> Optional[Path]:
    try:
        return capture_screenshot(session, filename)
    except (WebDriverException, OSError) as e:
        log.warning("Screenshot %s not captured: %s", filename, e)
        return None


def wait_for(session: DriverSession, locator: LocatorLike, timeout: Optional[float] = None) -> WebElement:
    """Return the element once it is displayed and enabled.

    Raises WaitTimeout or DriverTransportError, both carrying the locator,
    the test name and the path of the screenshot taken at failure time.
    """
    timeout = resolve_timeout(session, timeout)
    outcome = wait_outcome(session, locator, timeout)
    if isinstance(outcome, Resolved):
        return outcome.element

    shot = _try_screenshot(session, error_screenshot_name(session.test_name))
    if isinstance(outcome, TimedOut):
        log.error("Timed out after %ss waiting for %s in %s", timeout, outcome.locator, session.test_name)
        raise WaitTimeout(outcome.locator, session.test_name, shot, timeout)
    log.error("Driver failed while waiting for %s in %s: %s", outcome.locator, session.test_name, outcome.cause)
    raise DriverTransportError(outcome.locator, session.test_name, shot) from outcome.cause


def scan_fallback_selectors(
    session: DriverSession,
    candidates: Sequence[LocatorLike],
    screenshot_name: str = SCAN_SCREENSHOT_NAME,
) -> WebElement:
    """First candidate that exists, is displayed and has text. No waiting between candidates."""
    locators = [as_locator(c) for c in candidates]
    with session.suspend_implicit_wait():
        for loc in locators:
            elements = session.driver.find_elements(*loc)
            if not elements:
                continue
            element = elements[0]
            try:
                if element.is_displayed() and element.text.strip():
                    log.debug("Scan matched %s", loc)
                    return element
            except StaleElementReferenceException:
                continue

    shot = _try_screenshot(session, screenshot_name)
    raise ElementNotFoundAfterScan(locators, shot)
