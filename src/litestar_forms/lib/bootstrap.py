# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import re

from markupsafe import Markup

from litestar_forms.config.app import logger

from .capabilities import HasComponents, HasError, HasValidationScript
from .compositetags import Button
from . import coretags as t
from .decorators import Decorator
from .element import Element, Label
from .exceptions import ConfigurationError
from .fileinput import FileInput, ImageInput
from .forminputs import Input, Select, Textarea
from .group import Group
from .registry import ElementType, FormConfig


BUTTON_TYPES = ("button", "submit", "reset")


def prefixed_classes(prefix: str, names: str) -> str:
    """prefixed_classes("btn", "primary lg") -> "btn btn-primary btn-lg"."""
    return prefix + re.sub(r"^|\s+", f" {prefix}-", names)


class Bootstrap(Decorator):
    """
    Render elements for Bootstrap (version 3 and later).

    The decorator is deep: added to a form, it styles all the elements of
    the form. Options used on the elements:

    - btn: button style(s), eg "primary" or "danger lg"
    - help: text of a help block below the control
    - grid: (label class, control class) for horizontal forms,
      eg ("col-sm-2", "col-sm-10")
    """

    deep = True
    default_fontset = "glyphicon"

    def __init__(self, version: int | str | None = None) -> None:
        if version is None:
            logger.warning("You should specify which version of Bootstrap is used.")
        elif int(version) < 3:
            raise ConfigurationError("Only Bootstrap version 3 and later is supported.")
        self.version = version

    @staticmethod
    def register(config: FormConfig) -> FormConfig:
        """Return config with the bootstrap decorator and the file inputs."""
        return config.derive(
            decorators={"bootstrap": Bootstrap},
            elements={
                "fileinput": ElementType(FileInput),
                "imageinput": ElementType(ImageInput),
            },
        )

    @classmethod
    def icon(cls, icon: str, fontset: str | None = None) -> Markup:
        fontset = fontset or cls.default_fontset
        return Markup(f'<i class="{t.escape_text(prefixed_classes(fontset, icon))}"></i>')

    @staticmethod
    def is_button(element: Element) -> bool:
        return (
            isinstance(element, Button)
            or (isinstance(element, Input) and element.get_attr("type") in BUTTON_TYPES)
            or element.has_class("btn")
            or bool(element.get_option("btn"))
        )

    # applying

    def apply(self, element: Element, deep: bool) -> None:
        self.apply_to_element(element)

        if isinstance(element, HasComponents):
            self.apply_to_addon("prepend", element)
            self.apply_to_addon("append", element)
            self.apply_to_label(element)
            self.apply_to_container(element)

    def apply_to_element(self, element: Element) -> None:
        if self.is_button(element):
            element.add_class(prefixed_classes("btn", element.get_option("btn") or "default"))
        elif (
            isinstance(element, Input) and element.get_type() not in ("checkbox", "radio")
        ) or isinstance(element, (Textarea, Select)):
            element.add_class("form-control")

        if isinstance(element, Input) and not self.is_button(element):
            element.new_component("input-group", "div", attr={"class": "input-group"})

        if isinstance(element, Label):
            element.add_class("div-label")

        if isinstance(element, HasComponents):
            element.new_component("help", "span", attr={"class": "help-block"}).set_content(
                element.computed(lambda el: el.get_option("help"))
            )

    def apply_to_addon(self, placement: str, element: Element) -> None:
        addon = element.get_component(placement)
        if addon is None:
            return

        if self.is_button(element):
            addon.add_class("btn-label btn-label-right" if placement == "append" else "btn-label")
        elif isinstance(element, Input):
            addon.add_class("input-group-addon")

    def apply_to_label(self, element: Element) -> None:
        label = element.get_component("label")
        if label is None or (isinstance(element, Input) and element.get_type() == "hidden"):
            return

        if element.get_option("label") != "inside":
            label.add_class("control-label")

        grid = element.get_option("grid")
        if grid:
            label.add_class(grid[0])

    def apply_to_container(self, element: Element) -> None:
        container = element.get_component("container")
        if container is None:
            return

        container.add_class("form-group")
        container.add_class(
            element.computed(
                lambda el: "has-error" if isinstance(el, HasError) and el.get_error() else None
            )
        )

    # rendering

    def render_content(self, element: Element, html: str | None) -> str | None:
        if not (self.is_button(element) and element.has_class("btn-labeled")):
            return html

        html = html or ""
        if element.get_option("prepend"):
            html = element.get_component("prepend").to_html() + html
        if element.get_option("append"):
            html = html + element.get_component("append").to_html()
        return html

    def render(self, element: Element, html: str) -> str:
        if not isinstance(element, HasComponents):
            return html

        container = element.get_container().set_content(None)

        label = element.get_option("label")
        if label and label != "inside":
            container.add(element.get_label())

        target = container
        grid = element.get_option("grid")
        if grid:
            target = element.new_component(None, "div", attr={"class": grid[1]})
            if not label or label == "inside":
                target.add_class(re.sub(r"-(\d+)\b", r"-offset-\1", grid[0]))
            container.add(target)

        self.render_control(element, target, container)

        if isinstance(element, HasValidationScript):
            container.add(Markup(element.get_validation_script()))

        return container.to_html()

    def render_control(self, element: Element, target: Group, container: Group) -> None:
        label = element.get_option("label")

        group = target
        input_group = element.get_component("input-group")
        if (
            input_group is not None
            and (element.get_option("prepend") or element.get_option("append"))
            and label != "inside"
        ):
            group = input_group.set_content(None)
            target.add(group)

        labeled_button = self.is_button(element) and element.has_class("btn-labeled")

        if not labeled_button and element.get_option("prepend"):
            group.add(element.get_component("prepend"))

        if label == "inside":
            group.add(element.get_label())
        else:
            group.add(Markup(element.render_element()))

        if not labeled_button and element.get_option("append"):
            group.add(element.get_component("append"))

        if element.get_component("help") is not None and element.get_option("help"):
            container.add(element.get_component("help"))

        if isinstance(element, HasError) and element.get_error():
            error = element.new_component(None, "span", attr={"class": "help-block error"})
            container.add(error.set_content(t.escape_text(element.get_error())))

    def __repr__(self) -> str:
        return f"Bootstrap(version={self.version!r})"


# EOF
