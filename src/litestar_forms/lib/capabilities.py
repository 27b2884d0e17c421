# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

# Capabilities an element can declare. Code that needs one of these
# behaviours checks with isinstance() against the classes below.

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .element import Element
    from .group import Group


class HasValue(ABC):
    """Element bound to a (submitted) value."""

    @abstractmethod
    def get_value(self) -> Any: ...

    @abstractmethod
    def set_value(self, value: Any) -> Any: ...


class HasError(ABC):
    """Element that keeps the message of its last failed validation."""

    @abstractmethod
    def get_error(self) -> str | None: ...

    @abstractmethod
    def set_error(self, message: str | None) -> None: ...


class HasComponents(ABC):
    """Element rendered as a composition of named sub-elements."""

    @abstractmethod
    def new_component(
        self,
        name: str | None = None,
        type_name: str | None = None,
        options: dict[str, Any] | None = None,
        attr: dict[str, Any] | None = None,
    ) -> Element: ...

    @abstractmethod
    def get_component(self, name: str) -> Element | None: ...

    @abstractmethod
    def get_container(self) -> Group: ...

    @abstractmethod
    def render_element(self) -> str: ...


class HasValidationScript(ABC):
    """Element that can mirror its server-side rules in a client script."""

    @abstractmethod
    def get_validation_script(self) -> str: ...


# EOF
