# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import re
from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

from .capabilities import HasError, HasValue
from .components import Components
from . import coretags as t
from .element import Element, TransferableState
from .validators import BasicValidation, is_empty


def is_checked(value: Any) -> bool:
    return value not in (None, "", "0", False, 0, [])


def is_selected(key: Any, value: Any) -> bool:
    if isinstance(value, (list, tuple, set)):
        return str(key) in {str(val) for val in value}
    return value is not None and str(key) == str(value)


class Control(BasicValidation, Components, Element, HasValue, HasError):
    """
    Base class for form controls: elements bound to a value.

    The `name`, `value` and `required` attributes follow the name, value and
    the `required` option of the control unless given explicitly.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        attr = dict(attr or {})
        if attr.get("name") is None:
            attr["name"] = self.computed(lambda el: el.get_field_name())
        if attr.get("value") is None:
            attr["value"] = self.computed(lambda el: el.get_value())
        if attr.get("required") is None:
            attr["required"] = self.computed(lambda el: bool(el.get_option("required")))

        super().__init__(options, attr, **kwargs)

        self.value: Any = None
        self.error: str | None = None
        self.init_components()

    def get_field_name(self) -> str | None:
        """Name as submitted by the browser."""
        name = self.get_name()
        if name and self.get_option("multiple"):
            return f"{name}[]"
        return name

    def get_description(self) -> str:
        description = self.get_option("description")
        if description:
            return description

        name = (self.get_name() or "").removesuffix("[]")
        name = re.sub(r"^.+[.\[]|\]", "", name)
        name = re.sub(r"[_-]", " ", name)
        return name[:1].upper() + name[1:]

    def set_value(self, value: Any) -> Any:
        for decorator in self.get_decorators():
            value = decorator.filter(self, value)
        self.value = value
        return value

    def get_value(self) -> Any:
        return self.value

    def set_error(self, message: str | None) -> None:
        self.error = None if message is None else self.parse(message).strip()

    def get_error(self) -> str | None:
        return self.error

    def resolve_placeholder(self, var: str) -> str:
        value = self.get_value()
        match var:
            case "value":
                return "" if value is None else str(value)
            case "length":
                return str(len("" if value is None else str(value)))
            case "desc":
                return self.get_description()
            case "other":
                other = self.get_match_control()
                if other is not None:
                    return other.get_description()
        return super().resolve_placeholder(var)

    @abstractmethod
    def render_element(self) -> str:
        pass

    def export_state(self) -> TransferableState:
        state = super().export_state()
        state.extra.update(value=self.value, error=self.error)
        return state

    def import_state(self, state: TransferableState) -> None:
        super().import_state(state)
        self.value = state.extra.get("value", self.value)
        self.error = state.extra.get("error", self.error)


class Input(Control):
    """
    The <input> control; the `type` option (default text) gives its type.

    Checkboxes and radios render their label around the input, hidden inputs
    render without label or container.
    """

    type_options: dict[str, dict[str, Any]] = {
        "hidden": {"label": False, "container": False},
        "checkbox": {"label": "inside"},
        "radio": {"label": "inside"},
        "button": {"label": False},
        "submit": {"label": False},
        "reset": {"label": False},
    }

    no_placeholder = {"hidden", "button", "submit", "reset", "checkbox", "radio", "file"}

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        options = dict(options or {})
        attr = dict(attr or {})

        input_type = options.get("type") or "text"
        options = {**self.type_options.get(input_type, {}), **options, "type": input_type}

        if attr.get("type") is None:
            attr["type"] = self.computed(lambda el: el.get_type())

        if input_type in ("checkbox", "radio"):
            if attr.get("value") is None:
                attr["value"] = 1
            if attr.get("checked") is None:
                attr["checked"] = self.computed(lambda el: is_checked(el.get_value()))

        if input_type in ("button", "submit", "reset") and attr.get("value") is None:
            attr["value"] = self.computed(lambda el: el.get_description())

        if input_type not in self.no_placeholder and attr.get("placeholder") is None:
            attr["placeholder"] = self.computed(lambda el: el.get_placeholder())

        for opt in ("min", "max", "maxlength", "pattern"):
            if attr.get(opt) is None:
                attr[opt] = self.computed(lambda el, opt=opt: el.get_option(opt))

        super().__init__(options, attr, **kwargs)

    def get_type(self) -> str:
        return self.get_option("type")

    def get_placeholder(self) -> str | None:
        """
        The `placeholder` option: a text, or True to use the description.
        Without the option, the description is used if there is no label.
        """
        use = self.get_option("placeholder")
        if use is None:
            use = not self.get_option("label")
        if not use:
            return None
        return use if isinstance(use, str) else self.get_description()

    def validate(self) -> bool:
        if not self.validate_required():
            return False

        # empty and not required, no further validation
        if is_empty(self.get_value()):
            return True

        if self.get_type() == "file":
            return self.validate_upload()

        return (
            self.validate_type()
            and self.validate_min_max()
            and self.validate_length()
            and self.validate_pattern()
            and self.validate_match()
        )

    def render_element(self) -> str:
        html = t.open_tag("input", self.attr.render())

        if self.get_attr("type") == "checkbox" and self.get_option("add-hidden"):
            hidden = " ".join(
                pair for pair in ('type="hidden"', 'value=""', self.attr.render_only("name")) if pair
            )
            html = f"{t.open_tag('input', hidden)}\n{html}"

        return html


class Textarea(Control):
    """The <textarea> control; the value is rendered as content."""

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        attr = dict(attr or {})
        if attr.get("placeholder") is None:
            attr["placeholder"] = self.computed(
                lambda el: None if el.get_option("label") else el.get_description()
            )
        super().__init__(options, attr, **kwargs)
        self.attr.set("value", None)

    def validate(self) -> bool:
        if not self.validate_required():
            return False
        if is_empty(self.get_value()):
            return True
        return self.validate_length()

    def render_element(self) -> str:
        return t.paired_tag("textarea", self.attr.render(), t.escape_text(self.get_value()))


class Choice(Control):
    """
    Base class for controls with a choice of items.

    The `items` option maps values to labels. A list of items is indexed by
    position, unless the `use-values` option is set.
    """

    def get_items(self) -> dict[Any, Any]:
        items = self.get_option("items") or {}
        if self.get_option("use-values"):
            return {item: item for item in items}
        if isinstance(items, Mapping):
            return dict(items)
        return dict(enumerate(items))

    def set_value(self, value: Any) -> Any:
        if self.get_option("multiple") and not isinstance(value, (list, tuple)):
            value = [] if value is None or str(value) == "" else [value]
        return super().set_value(value)

    def validate(self) -> bool:
        return self.validate_required()

    def order_selected(self, entries: list[tuple[bool, str]]) -> list[str]:
        """Move the selected entries first if the `selected-first` option is set."""
        if not self.get_option("selected-first"):
            return [html for _, html in entries]
        return [html for selected, html in entries if selected] + [
            html for selected, html in entries if not selected
        ]


class ChoiceList(Choice):
    """A list of radio buttons, or checkboxes if `multiple` is set."""

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(options, attr, **kwargs)
        self.add_class("choicelist")
        self.attr.set({"name": None, "multiple": None, "required": None, "value": None})

    def render_content(self) -> str:
        name = self.get_field_name()
        value = self.get_value()
        input_type = "checkbox" if self.get_option("multiple") else "radio"
        required = bool(self.get_option("required"))
        single_line = bool(self.get_option("single-line"))

        entries = []
        for key, label in self.get_items().items():
            selected = is_selected(key, value)
            attrs = " ".join(
                pair
                for pair in (
                    t.Attr.pair("type", input_type),
                    t.Attr.pair("name", name),
                    t.Attr.pair("value", str(key)),
                    t.Attr.pair("checked", selected),
                    t.Attr.pair("required", required),
                )
                if pair
            )
            html = f"<label>{t.open_tag('input', attrs)} {t.escape_text(label)}</label>"
            if not single_line:
                html = f"<div>{html}</div>"
            entries.append((selected, html))

        hidden = ""
        if input_type == "checkbox" and self.get_option("add-hidden"):
            hidden = f'<input type="hidden" {t.Attr.pair("name", name)} value="">\n'

        return hidden + "\n".join(self.order_selected(entries))

    def render_element(self) -> str:
        if self.get_option("single-line") and not self.has_class("choicelist-single-line"):
            self.add_class("choicelist-single-line")

        return f"{t.open_tag('div', self.attr.render())}\n{self.get_content()}\n</div>"


class Select(Choice):
    """
    The <select> control.

    A `placeholder` option adds a disabled first option, selected while the
    control has no value; True uses the description as text.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        attr = dict(attr or {})
        if attr.get("multiple") is None:
            attr["multiple"] = self.computed(lambda el: bool(el.get_option("multiple")))
        super().__init__(options, attr, **kwargs)
        self.attr.set("value", None)

    def render_content(self) -> str:
        value = self.get_value()
        html_options = []

        placeholder = self.get_option("placeholder")
        if placeholder is True:
            placeholder = self.get_description()
        if isinstance(placeholder, str):
            selected = " selected" if is_empty(value) else ""
            html_options.append(
                f'<option value=""{selected} disabled>{t.escape_text(placeholder)}</option>'
            )

        entries = []
        for key, label in self.get_items().items():
            selected = is_selected(key, value)
            entries.append(
                (
                    selected,
                    f'<option value="{t.escape_text(key)}"{" selected" if selected else ""}>'
                    f"{t.escape_text(label)}</option>",
                )
            )

        return "\n".join(html_options + self.order_selected(entries))

    def render_element(self) -> str:
        return f"{t.open_tag('select', self.attr.render())}\n{self.get_content()}\n</select>"


# EOF
