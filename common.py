"""
Common utilities for the uicheck harness.

Centralizes:
- Config loading (config.yaml)
- Output/screenshot directories
- Logging setup
- Screenshot file naming
- Chrome WebDriver creation
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
import logging
import os
import re
from typing import Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager


REPO_ROOT = Path(__file__).resolve().parent
CONFIG_PATH = REPO_ROOT / "config.yaml"

DEFAULT_BASE_URL = "https://neocities.org/"

# Fixed browser configuration every session starts with.
BASE_CHROME_ARGS = [
    "--start-maximized",
    "--disable-notifications",
    "--lang=en",
    "--disable-popup-blocking",
]


def load_config(path: Path | str = CONFIG_PATH) -> dict:
    """Load YAML config with safe defaults. Returns {} if missing/invalid."""
    try:
        import yaml
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data
    except Exception:
        return {}


def base_url(cfg: dict | None = None) -> str:
    cfg = cfg if cfg is not None else load_config()
    return os.getenv("UICHECK_BASE_URL") or cfg.get("base_url", DEFAULT_BASE_URL)


def output_dir(cfg: dict | None = None) -> Path:
    cfg = cfg if cfg is not None else load_config()
    return (REPO_ROOT / Path(cfg.get("output_dir", "./output"))).resolve()


def screenshot_dir(cfg: dict | None = None) -> Path:
    cfg = cfg if cfg is not None else load_config()
    custom = cfg.get("screenshot_dir")
    if custom:
        return (REPO_ROOT / Path(custom)).resolve()
    return output_dir(cfg) / "screenshots"


def ensure_dirs(cfg: dict | None = None) -> Path:
    s = screenshot_dir(cfg)
    s.mkdir(parents=True, exist_ok=True)
    return s


def error_screenshot_name(test_name: str, when: Optional[datetime] = None) -> str:
    """`{test}_error_{YYYYmmddHHMMSS}.png`, with the test name made filesystem-safe."""
    when = when or datetime.now()
    safe = re.sub(r"[^\w.-]+", "_", test_name).strip("_") or "test"
    return f"{safe}_error_{when:%Y%m%d%H%M%S}.png"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Create a console logger. Level can be overridden by LOG_LEVEL env."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, lvl, logging.INFO))
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
    logger.addHandler(ch)
    return logger


def resolve_headless(default: bool = False) -> bool:
    val = os.getenv("HEADLESS", None)
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes")


def chrome_options(cfg: dict | None = None, headless: Optional[bool] = None) -> Options:
    """Build the fixed Chrome options, plus headless flags and config extras.

    Respects env:
      - HEADLESS: true/false (overrides `headless` in config)
      - CHROME_USER_DATA_DIR: path to user data dir
      - CHROME_PROFILE_DIR: profile directory name (e.g., "Default")
    """
    cfg = cfg if cfg is not None else load_config()
    if headless is None:
        headless = resolve_headless(bool(cfg.get("headless", False)))
    opts = Options()
    for arg in BASE_CHROME_ARGS:
        opts.add_argument(arg)
    if headless:
        # Modern headless; keep software renderer to avoid GL issues on CI
        opts.add_argument("--headless=new")
        opts.add_argument("--window-size=1920,1080")
        opts.add_argument("--disable-gpu")
        opts.add_argument("--disable-dev-shm-usage")
        opts.add_argument("--no-sandbox")
    for arg in cfg.get("chrome_args") or []:
        opts.add_argument(str(arg))

    user_data = os.getenv("CHROME_USER_DATA_DIR")
    profile_dir = os.getenv("CHROME_PROFILE_DIR")
    if user_data:
        opts.add_argument(f"--user-data-dir={user_data}")
    if profile_dir:
        opts.add_argument(f"--profile-directory={profile_dir}")
    return opts


def get_chrome_driver(cfg: dict | None = None, headless: Optional[bool] = None) -> webdriver.Chrome:
    """Return a Chrome WebDriver with the fixed options. Uses webdriver-manager."""
    opts = chrome_options(cfg, headless=headless)
    service = Service(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=opts)
