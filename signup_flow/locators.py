"""Selector strategies and the YAML-backed selector catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Union

from signup_flow.config import DEFAULT_SELECTORS, load_yaml
from signup_flow.errors import ConfigurationError


@dataclass(frozen=True)
class ByCss:
    """Locate by CSS selector."""

    css: str


@dataclass(frozen=True)
class ByText:
    """Locate the element whose visible text contains ``text``."""

    text: str


@dataclass(frozen=True)
class ByXPath:
    """Locate by XPath expression."""

    xpath: str


SelectorStrategy = Union[ByCss, ByText, ByXPath]

_STRATEGIES = {
    "css": ByCss,
    "text": ByText,
    "xpath": ByXPath,
}


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


class SelectorCatalog:
    """UI selectors loaded from a YAML file, addressed by dot notation.

    Example:
        catalog = SelectorCatalog.load()
        catalog.get("step1.email_field")
        # -> ByCss(css="input[name='email']")
    """

    def __init__(self, selectors: Dict[str, Any]) -> None:
        self._selectors = selectors

    @classmethod
    def load(cls, path: Path = DEFAULT_SELECTORS) -> SelectorCatalog:
        return cls(load_yaml(path))

    def paths(self) -> Iterator[str]:
        """Yield the dot-notation path of every selector in the catalog."""
        for section, entries in self._selectors.items():
            for name in entries:
                yield f"{section}.{name}"

    def get(self, selector_path: str, **kwargs: str) -> SelectorStrategy:
        """Resolve ``selector_path`` to a selector strategy.

        Args:
            selector_path: Dot-notation path (e.g. "step3.country_dropdown")
            **kwargs: Values formatted into the selector string

        Raises:
            ConfigurationError: If the path or its strategy is unknown
        """
        value: Any = self._selectors
        for part in selector_path.split("."):
            if not isinstance(value, dict) or part not in value:
                raise ConfigurationError(f"Unknown selector '{selector_path}'")
            value = value[part]

        try:
            by = value["by"].lower()
            selector = value["selector"]
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(
                f"Selector '{selector_path}' needs 'by' and 'selector' keys"
            ) from e

        if kwargs:
            selector = selector.format(**kwargs)

        strategy = _STRATEGIES.get(by)
        if strategy is None:
            raise ConfigurationError(
                f"Selector '{selector_path}' uses unknown strategy '{by}'"
            )
        return strategy(selector)
