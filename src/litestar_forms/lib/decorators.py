# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from collections.abc import Callable
from typing import Any, TYPE_CHECKING

from .capabilities import HasError, HasValue

if TYPE_CHECKING:
    from .element import Element
    from .forminputs import Control


class Decorator:
    """
    Base class of element decorators.

    A decorator bundles hooks that are called while an element filters,
    validates and renders. Every hook returns its input unchanged here, so
    subclasses only override what they alter.

    A deep decorator is applied to all descendants of the element it is
    added to, including children that are added later.
    """

    deep: bool = False

    def is_deep(self) -> bool:
        return self.deep

    def apply(self, element: Element, deep: bool) -> None:
        """Modify the element when the decorator is added."""
        pass

    def validate(self, element: Element, valid: bool) -> bool:
        return valid

    def filter(self, element: Element, value: Any) -> Any:
        return value

    def render(self, element: Element, html: str) -> str:
        return html

    def render_content(self, element: Element, html: str | None) -> str | None:
        return html

    def apply_to_validation_script(
        self, control: Control, rules: dict[str, Any]
    ) -> dict[str, Any]:
        return rules

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(deep={self.deep})"


class SimpleFilter(Decorator):
    """Filter the value of a control through a callback."""

    def __init__(self, callback: Callable[[Any], Any], deep: bool = False) -> None:
        self.callback = callback
        self.deep = deep

    def filter(self, element: Element, value: Any) -> Any:
        return self.callback(value)


class SimpleValidation(Decorator):
    """
    Validate the value of a control through a callback.

    The callback gets the value and returns either a bool or a tuple of
    (bool, message). Without a message, the `error:validation` option is
    used.
    """

    def __init__(self, callback: Callable[[Any], bool | tuple[bool, str | None]]) -> None:
        self.callback = callback

    def validate(self, element: Element, valid: bool) -> bool:
        if not valid:
            return False

        value = element.get_value() if isinstance(element, HasValue) else None
        result = self.callback(value)

        message = None
        if isinstance(result, tuple):
            result, message = result

        if not result and isinstance(element, HasError):
            element.set_error(message or element.get_option("error:validation"))

        return bool(result)


# EOF
