"""
One browser session per test: launch with the fixed configuration, land on
the base URL, clear an optional cookie/GDPR banner, and always quit.

Usage:
  with session_scope(cfg, test_name="test_title") as s:
      s.open("browse")
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional
from urllib.parse import urljoin
import time

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from common import base_url, get_chrome_driver, get_logger, load_config
from errors import SessionLaunchFailure

log = get_logger("session")

DEFAULT_PAGE_LOAD_TIMEOUT = 30
DEFAULT_IMPLICIT_WAIT = 2
COOKIE_BANNER_SELECTOR = ".cookie-banner, .gdpr-modal"
COOKIE_ACCEPT_SELECTOR = "button.accept, .btn-primary"


class DriverSession:
    """A live Chrome session owned by exactly one test."""

    def __init__(self, driver, test_name: str = "session", config: Optional[dict] = None):
        self.driver = driver
        self.test_name = test_name
        self.config = config if config is not None else {}
        self.base_url = base_url(self.config)
        self.page_load_timeout = float(self.config.get("page_load_timeout", DEFAULT_PAGE_LOAD_TIMEOUT))
        self.implicit_wait = float(self.config.get("implicit_wait", DEFAULT_IMPLICIT_WAIT))
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def title(self) -> str:
        return self.driver.title

    def apply_timeouts(self) -> None:
        self.driver.set_page_load_timeout(self.page_load_timeout)
        self.driver.implicitly_wait(self.implicit_wait)

    def open(self, path_or_url: str = "") -> None:
        """Navigate to a URL; relative paths resolve against the base URL."""
        url = urljoin(self.base_url, path_or_url)
        log.debug("GET %s", url)
        self.driver.get(url)

    @contextmanager
    def suspend_implicit_wait(self) -> Iterator[None]:
        """Direct queries only: implicit wait is 0 inside the block."""
        self.driver.implicitly_wait(0)
        try:
            yield
        finally:
            if not self._released:
                self.driver.implicitly_wait(self.implicit_wait)

    def release(self) -> None:
        """Quit the browser. Safe to call any number of times."""
        if self._released:
            return
        self._released = True
        try:
            self.driver.quit()
            log.info("Released session for %s", self.test_name)
        except WebDriverException as e:
            log.warning("Quit failed for %s (session already gone?): %s", self.test_name, e)

    def __enter__(self) -> "DriverSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"<DriverSession {self.test_name!r} {state}>"


def dismiss_cookie_banner(session: DriverSession) -> bool:
    """Click the banner's accept control if there is one. Absence is not an error."""
    cfg = session.config
    banners = session.driver.find_elements(
        By.CSS_SELECTOR, cfg.get("cookie_banner_selector", COOKIE_BANNER_SELECTOR)
    )
    if not banners:
        log.debug("No cookie banner")
        return False
    buttons = banners[0].find_elements(
        By.CSS_SELECTOR, cfg.get("cookie_accept_selector", COOKIE_ACCEPT_SELECTOR)
    )
    if not buttons:
        log.debug("Cookie banner without accept control, leaving it")
        return False
    buttons[0].click()
    # let the banner animate away
    time.sleep(float(cfg.get("banner_settle_seconds", 0.5)))
    log.info("Dismissed cookie banner")
    return True


def _quit_unconfigured(driver) -> None:
    try:
        driver.quit()
    except WebDriverException as e:
        log.warning("Quit failed for half-started session: %s", e)


def acquire(config: Optional[dict] = None, test_name: str = "session", driver_factory=None) -> DriverSession:
    """Launch, configure and land a new session. Launch failures are not retried."""
    cfg = config if config is not None else load_config()
    factory = driver_factory or get_chrome_driver
    try:
        driver = factory(cfg)
    except Exception as e:
        raise SessionLaunchFailure(f"Could not launch browser for {test_name}: {e}") from e

    session = None
    try:
        session = DriverSession(driver, test_name=test_name, config=cfg)
        session.apply_timeouts()
        log.info("Opening %s for %s", session.base_url, test_name)
        session.open()
    except Exception as e:
        if session is not None:
            session.release()
        else:
            _quit_unconfigured(driver)
        raise SessionLaunchFailure(f"Could not start session for {test_name}: {e}") from e

    try:
        dismiss_cookie_banner(session)
    except BaseException:
        session.release()
        raise
    return session


def release(session: Optional[DriverSession]) -> None:
    if session is not None:
        session.release()


@contextmanager
def session_scope(config: Optional[dict] = None, test_name: str = "session", driver_factory=None) -> Iterator[DriverSession]:
    """Hold a session for the duration of the block; released on every exit path."""
    session = acquire(config, test_name=test_name, driver_factory=driver_factory)
    try:
        yield session
    finally:
        session.release()
