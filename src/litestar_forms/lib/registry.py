# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, NamedTuple, TYPE_CHECKING

from litestar_forms.config.app import logger
from litestar_forms.config.defaults import DEFAULT_OPTIONS

from .exceptions import UnknownTypeError

if TYPE_CHECKING:
    from .decorators import Decorator
    from .element import Element


class ElementType(NamedTuple):
    cls: type[Element]
    options: Mapping[str, Any] = MappingProxyType({})
    attr: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class FormConfig:
    """
    Process-wide settings of the form builder: default options, element
    types and decorator types.

    A config is read-only once created. Use derive() at bootstrap time to get
    a config with additional or replaced entries, then hand it to the root of
    a form (Form(config=...)) or install it with set_default_config().
    """

    options: Mapping[str, Any]
    elements: Mapping[str, ElementType]
    decorators: Mapping[str, type[Decorator]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(
            self,
            "elements",
            MappingProxyType(
                {
                    name: entry if isinstance(entry, ElementType) else ElementType(*entry)
                    for name, entry in self.elements.items()
                }
            ),
        )
        object.__setattr__(self, "decorators", MappingProxyType(dict(self.decorators)))

    def derive(
        self,
        *,
        options: Mapping[str, Any] | None = None,
        elements: Mapping[str, ElementType | tuple] | None = None,
        decorators: Mapping[str, type[Decorator]] | None = None,
    ) -> FormConfig:
        for name in elements or {}:
            logger.info("Registered element type %s", name)
        for name in decorators or {}:
            logger.info("Registered decorator %s", name)

        return FormConfig(
            options={**self.options, **(options or {})},
            elements={**self.elements, **(elements or {})},
            decorators={**self.decorators, **(decorators or {})},
        )

    def get_element_type(self, type_name: str) -> ElementType:
        try:
            return self.elements[type_name]
        except KeyError:
            raise UnknownTypeError("element", type_name) from None

    def create(
        self,
        type_name: str,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
    ) -> Element:
        """Factory method: create an element of a registered type."""
        entry = self.get_element_type(type_name)
        return entry.cls(
            {**entry.options, **(options or {})},
            {**entry.attr, **(attr or {})},
            config=self,
        )

    def create_decorator(self, name: str, *args: Any, **kwargs: Any) -> Decorator:
        try:
            cls = self.decorators[name]
        except KeyError:
            raise UnknownTypeError("decorator", name) from None
        return cls(*args, **kwargs)


def default_elements() -> dict[str, ElementType]:
    from .compositetags import Button, Hyperlink
    from .element import Label, Legend, Span
    from .formbuilder import Form
    from .forminputs import ChoiceList, Input, Select, Textarea
    from .group import Div, Fieldset, Group

    return {
        "div": ElementType(Div),
        "form": ElementType(Form),
        "fieldset": ElementType(Fieldset),
        "group": ElementType(Group),
        "span": ElementType(Span),
        "label": ElementType(Label),
        "legend": ElementType(Legend),
        "button": ElementType(Button),
        "link": ElementType(Hyperlink),
        "choice": ElementType(ChoiceList),
        "multi": ElementType(ChoiceList, {"multiple": True}),
        "input": ElementType(Input),
        "select": ElementType(Select),
        "textarea": ElementType(Textarea),
        "boolean": ElementType(Input, {"type": "checkbox"}),
        "text": ElementType(Input, {"type": "text"}),
        "password": ElementType(Input, {"type": "password"}),
        "hidden": ElementType(Input, {"type": "hidden"}),
        "file": ElementType(Input, {"type": "file"}),
        "color": ElementType(Input, {"type": "color"}),
        "number": ElementType(Input, {"type": "number"}),
        "decimal": ElementType(Input, {"type": "text", "pattern": r"-?\d+(\.\d+)?"}),
        "range": ElementType(Input, {"type": "range"}),
        "date": ElementType(Input, {"type": "date"}),
        "datetime": ElementType(Input, {"type": "datetime-local"}),
        "time": ElementType(Input, {"type": "time"}),
        "month": ElementType(Input, {"type": "month"}),
        "week": ElementType(Input, {"type": "week"}),
        "url": ElementType(Input, {"type": "url"}),
        "email": ElementType(Input, {"type": "email"}),
    }


def default_decorators() -> dict[str, type[Decorator]]:
    from .decorators import SimpleFilter, SimpleValidation

    return {
        "filter": SimpleFilter,
        "validation": SimpleValidation,
    }


_default_config: FormConfig | None = None


def get_default_config() -> FormConfig:
    global _default_config
    if _default_config is None:
        _default_config = FormConfig(
            options=DEFAULT_OPTIONS,
            elements=default_elements(),
            decorators=default_decorators(),
        )
    return _default_config


def set_default_config(config: FormConfig | None) -> None:
    """Install config as process default; None restores the built-in one."""
    global _default_config
    _default_config = config


# EOF
