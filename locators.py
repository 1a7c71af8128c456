from __future__ import annotations

from typing import NamedTuple, Union

from selenium.webdriver.common.by import By


class Locator(NamedTuple):
    """Immutable (strategy, selector) query; unpacks straight into find_element(s)."""

    by: str
    value: str

    @classmethod
    def css(cls, selector: str) -> "Locator":
        return cls(By.CSS_SELECTOR, selector)

    @classmethod
    def xpath(cls, expr: str) -> "Locator":
        return cls(By.XPATH, expr)

    def __str__(self) -> str:
        name = self.by.upper().replace(" ", "_")
        return f"By.{name}: {self.value}"


LocatorLike = Union[Locator, str]


def as_locator(value: LocatorLike) -> Locator:
    """Plain strings are CSS selectors."""
    if isinstance(value, Locator):
        return value
    if isinstance(value, tuple):
        return Locator(*value)
    return Locator.css(value)
