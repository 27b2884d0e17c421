# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from collections.abc import Mapping
from typing import Any, Self

from .components import Components
from . import coretags as t
from .element import Element


class Action(Components, Element):
    """
    Base class for buttons and links.

    The `description` option is the text of the element; it is escaped
    unless the `escape` option is False.
    """

    default_options = {"label": False, "escape": True}

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(options, attr, **kwargs)
        self.init_components()

    def get_description(self) -> str:
        return self.get_option("description") or ""

    def render_content(self) -> str:
        content = self.get_description()
        if self.get_option("escape"):
            content = t.escape_text(content)
        return content

    def render_element(self) -> str:
        return t.paired_tag(self._tag, self.attr.render(), self.get_content())


class Button(Action):
    _tag = "button"


class Hyperlink(Action):
    """Link; the `url` option is used as href."""

    _tag = "a"

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        options = dict(options or {})
        attr = dict(attr or {})

        url = options.pop("url", None)
        if url is not None:
            attr["href"] = url

        super().__init__(options, attr, **kwargs)

    def set_url(self, url: str) -> Self:
        self.attr["href"] = url
        return self

    def get_url(self) -> str | None:
        return self.attr.get("href")


# EOF
