# sanity.py
"""
Smoke check for the harness: open the configured site, wait for an element,
save a screenshot, quit.

Usage:
  python sanity.py
  python sanity.py --url https://neocities.org/browse --selector ".website-Gallery" --headless
"""
import argparse
import sys
from functools import partial

from selenium.common.exceptions import WebDriverException

from common import CONFIG_PATH, get_chrome_driver, get_logger, load_config
from driver_session import session_scope
from element_wait import capture_screenshot, wait_for
from errors import UICheckError

log = get_logger("sanity")


def run(cfg: dict, url: str = "", selector: str = "body", timeout: float = 20, headless: bool = False) -> int:
    # an explicit --headless beats the HEADLESS env var
    factory = partial(get_chrome_driver, headless=True) if headless else None
    try:
        with session_scope(cfg, test_name="sanity", driver_factory=factory) as s:
            if url:
                s.open(url)
            el = wait_for(s, selector, timeout)
            log.info("Found %s <%s> on %s", selector, el.tag_name, s.current_url)
            log.info("Title: %s", s.title)
            shot = capture_screenshot(s, "sanity.png")
            print("Screenshot:", shot)
    except UICheckError as e:
        log.error("%s", e)
        return 1
    except (WebDriverException, OSError) as e:
        log.error("Sanity check failed: %s", e)
        return 1
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Open the site and check one element is usable.")
    ap.add_argument("--url", default="", help="Page to open (relative to base_url or absolute)")
    ap.add_argument("--selector", default="body", help="CSS selector to wait for (default: body)")
    ap.add_argument("--timeout", type=float, default=20, help="Seconds to wait (default: 20)")
    ap.add_argument("--headless", action="store_true")
    ap.add_argument("--config", default=str(CONFIG_PATH), help="Path to config.yaml")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    return run(cfg, args.url, args.selector, args.timeout, headless=args.headless)


if __name__ == "__main__":
    sys.exit(main())
