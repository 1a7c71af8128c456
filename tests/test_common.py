from datetime import datetime
from pathlib import Path

from common import (
    BASE_CHROME_ARGS,
    chrome_options,
    error_screenshot_name,
    load_config,
    resolve_headless,
    screenshot_dir,
)


def test_error_screenshot_name_is_deterministic():
    when = datetime(2024, 3, 9, 14, 5, 7)
    assert error_screenshot_name("Test2_CheckMainElementsVisibility", when) == (
        "Test2_CheckMainElementsVisibility_error_20240309140507.png"
    )


def test_error_screenshot_name_is_filesystem_safe():
    when = datetime(2024, 1, 1)
    assert error_screenshot_name("test_login[bad/user]", when) == "test_login_bad_user_error_20240101000000.png"


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == {}


def test_load_config_non_mapping(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config(p) == {}


def test_load_config_reads_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("base_url: https://example.org/\nimplicit_wait: 1\n", encoding="utf-8")
    assert load_config(p) == {"base_url": "https://example.org/", "implicit_wait": 1}


def test_screenshot_dir_default_and_custom(tmp_path):
    assert screenshot_dir({"output_dir": str(tmp_path)}) == tmp_path.resolve() / "screenshots"
    assert screenshot_dir({"screenshot_dir": str(tmp_path / "shots")}) == (tmp_path / "shots").resolve()


def test_resolve_headless(monkeypatch):
    monkeypatch.delenv("HEADLESS", raising=False)
    assert resolve_headless() is False
    assert resolve_headless(True) is True
    monkeypatch.setenv("HEADLESS", "yes")
    assert resolve_headless() is True
    monkeypatch.setenv("HEADLESS", "0")
    assert resolve_headless(True) is False


def test_chrome_options_fixed_args(monkeypatch):
    monkeypatch.delenv("HEADLESS", raising=False)
    monkeypatch.delenv("CHROME_USER_DATA_DIR", raising=False)
    monkeypatch.delenv("CHROME_PROFILE_DIR", raising=False)
    opts = chrome_options({})
    assert opts.arguments == BASE_CHROME_ARGS


def test_chrome_options_headless_and_extras(monkeypatch):
    monkeypatch.delenv("HEADLESS", raising=False)
    opts = chrome_options({"headless": True, "chrome_args": ["--mute-audio"]})
    assert "--headless=new" in opts.arguments
    assert "--mute-audio" in opts.arguments
    assert set(BASE_CHROME_ARGS) <= set(opts.arguments)


def test_explicit_headless_overrides_env(monkeypatch):
    monkeypatch.setenv("HEADLESS", "0")
    assert "--headless=new" in chrome_options({}, headless=True).arguments
