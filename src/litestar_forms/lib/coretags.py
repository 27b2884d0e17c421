# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import json
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Self

from markupsafe import Markup, escape

from .capabilities import HasValue
from .exceptions import StructureError

literal = Markup


def escape_text(value: Any) -> str:
    """Entity-encode value and return it as a plain str, not Markup."""
    if value is None:
        return ""
    return str(escape(value))


def open_tag(tag: str, attrs: str = "") -> str:
    return f"<{tag} {attrs}>" if attrs else f"<{tag}>"


def paired_tag(tag: str, attrs: str = "", content: str | None = None) -> str:
    return f"{open_tag(tag, attrs)}{content or ''}</{tag}>"


@dataclass(eq=False)
class Computed:
    """
    A deferred value, evaluated from its owner element on every read.

    The function receives the owner as its only argument, so the value can
    follow the element's current state (value, id, options).
    """

    func: Callable[[Any], Any]
    owner: Any = field(default=None, repr=False)

    def __call__(self) -> Any:
        return self.func(self.owner)

    def rebind(self, old: Any, new: Any) -> None:
        if self.owner is old:
            self.owner = new


def resolve(value: Any) -> Any:
    """Dereference a control or evaluate a deferred value."""
    if isinstance(value, HasValue):
        value = value.get_value()
    if isinstance(value, Computed):
        value = value()
    elif callable(value) and not isinstance(value, type):
        value = value()
    return value


def _split_class(value: Any) -> list[Any]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple, set)):
        return [token for token in value if token is not None and token != ""]
    return [value]


class Attr(MutableMapping):
    """
    HTML attributes of an element.

    Raw values are kept as given and only cast when read or rendered:
    deferred values are evaluated, controls are dereferenced to their value,
    dates become ISO-8601 strings and lists/dicts become compact JSON.
    True renders as a bare attribute, None and False are not rendered.

    The class attribute is always a list of tokens.
    """

    def __init__(self, attrs: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        for key, value in (attrs or {}).items():
            if value is not None:
                self[key] = value
        self._values.setdefault("class", [])

    # mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self.cast(key, self._values[key])

    def __setitem__(self, key: str, value: Any) -> None:
        if key == "class":
            value = _split_class(value)
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        if key == "class":
            self._values["class"] = []
            return
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Attr({self._values!r})"

    def clear(self) -> None:
        self._values = {"class": []}

    def append(self, value: Any) -> None:
        raise StructureError(
            f"Unable to add value `{value}`. You need to use associated keys."
        )

    # casting

    def cast(self, key: str, value: Any) -> Any:
        """Cast the value of an attribute to its string representation."""

        if key == "class" and isinstance(value, list):
            return self.cast_class(value)

        value = resolve(value)

        if value is None or isinstance(value, (bool, Markup)):
            return value
        if isinstance(value, str):
            return value
        if isinstance(value, datetime):
            return value.isoformat(timespec="seconds")
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, (list, tuple, dict)):
            return json.dumps(value, separators=(",", ":"), default=str)
        return str(value)

    def cast_class(self, tokens: Iterable[Any]) -> str | None:
        classes: list[str] = []
        for token in tokens:
            cls = self.cast("", token)
            if cls and cls not in classes:
                classes.append(cls)
        return " ".join(classes) if classes else None

    # accessors

    def set(self, attr: str | Mapping[str, Any], value: Any = None) -> Self:
        """Set one attribute or a mapping of attributes; None removes."""
        attrs = {attr: value} if isinstance(attr, str) else attr
        for key, val in attrs.items():
            if val is None:
                if key in self._values:
                    del self[key]
            else:
                self[key] = val
        return self

    def get(self, key: str | None = None, default: Any = None) -> Any:
        """Get one attribute or, without a key, all attributes cast."""
        if key is None:
            return {k: self.cast(k, v) for k, v in self._values.items()}
        if key not in self._values:
            return default
        return self.cast(key, self._values[key])

    def get_raw(self, key: str | None = None) -> Any:
        if key is None:
            raw = dict(self._values)
            raw["class"] = list(raw["class"])
            return raw
        return self._values.get(key)

    def raw_values(self) -> Iterator[Any]:
        """All raw values, class tokens included one by one."""
        for key, value in self._values.items():
            if key == "class":
                yield from value
            else:
                yield value

    # class manipulation

    def has_class(self, cls: str) -> bool:
        return any(self.cast("", token) == cls for token in self._values["class"])

    def add_class(self, cls: Any) -> Self:
        self._values["class"] = self._values["class"] + _split_class(cls)
        return self

    def remove_class(self, cls: Any) -> Self:
        remove = [self.cast("", token) for token in _split_class(cls)]
        self._values["class"] = [
            token
            for token in self._values["class"]
            if self.cast("", token) not in remove
        ]
        return self

    # rendering

    def render(self, overrides: Mapping[str, Any] | None = None) -> str:
        """Return serialized attribute string."""
        attrs = self.get()
        for key, value in (overrides or {}).items():
            attrs[key] = self.cast(key, value)

        return " ".join(
            pair for key, value in attrs.items() if (pair := self.pair(key, value))
        )

    def render_only(self, keys: str | Iterable[str]) -> str:
        if isinstance(keys, str):
            keys = [keys]
        return " ".join(
            pair for key in keys if (pair := self.pair(key, self.get(key)))
        )

    @staticmethod
    def pair(key: str, value: Any) -> str:
        if value is None or value is False:
            return ""
        safe_key = escape_text(key)
        if value is True:
            return safe_key
        return f'{safe_key}="{escape_text(value)}"'


# EOF
