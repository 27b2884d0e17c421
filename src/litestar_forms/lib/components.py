# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from typing import Any, TYPE_CHECKING

from markupsafe import Markup

from .capabilities import HasComponents, HasError, HasValidationScript
from . import coretags as t

if TYPE_CHECKING:
    from .element import Element, TransferableState
    from .group import Group


class Components(HasComponents):
    """
    Mixin for elements rendered with named components.

    The components are a label, spans to prepend and append, a span for the
    error message and a container holding all of them. Components point to
    the element with `component_of`, but are not its children.

    Must come before Element in the bases of a class.
    """

    def init_components(self) -> None:
        self.components: dict[str, Element] = {}

        label = self.new_component("label", "label")
        label.set_attr(
            "for",
            self.computed(lambda el: el.get_id() if el.get_option("label") != "inside" else None),
        )
        label.set_content(self.computed(lambda el: el.render_label()))

        self.new_component("prepend", "span").set_content(
            self.computed(lambda el: el.get_option("prepend"))
        )
        self.new_component("append", "span").set_content(
            self.computed(lambda el: el.get_option("append"))
        )
        self.new_component("error", "span", attr={"class": "error"}).set_content(
            self.computed(
                lambda el: t.escape_text(el.get_error()) if isinstance(el, HasError) else ""
            )
        )

    def get_description(self) -> str:
        return self.get_option("description") or ""

    def render_label(self) -> str:
        """Content of the label component."""
        text = t.escape_text(self.get_description())
        if self.get_option("required"):
            text += t.escape_text(self.get_option("required-suffix"))
        if self.get_option("label") == "inside":
            return f"{self.render_element()} {text}"
        return text

    def new_component(
        self,
        name: str | None = None,
        type_name: str | None = None,
        options: dict[str, Any] | None = None,
        attr: dict[str, Any] | None = None,
    ) -> Element:
        """
        Create a component.

        :param name: store the component under this name, if given
        :param type_name: element type
        """
        options = {"id": False, "decorate": False, **(options or {})}
        component = self.build(type_name, options, attr).as_component_of(self)

        if name is not None:
            self.components[name] = component

        return component

    def get_component(self, name: str) -> Element | None:
        if name == "container":
            return self.get_container()
        return self.components.get(name)

    def get_label(self) -> Element:
        return self.get_component("label")

    def get_container(self) -> Group:
        """The container; its type follows the `container` option."""
        type_name = self.get_option("container") or "group"

        if "container" not in self.components:
            self.new_component("container", type_name)
        else:
            self.components["container"] = self.components["container"].convert_to(type_name)

        return self.components["container"]

    def render(self) -> str:
        container = self.get_container().set_content(None)
        label = self.get_option("label")

        if label:
            container.add(self.get_label())

        if self.get_option("prepend"):
            container.add(self.get_component("prepend"))

        if label != "inside":
            container.add(Markup(self.render_element()))

        if self.get_option("append"):
            container.add(self.get_component("append"))

        if isinstance(self, HasError) and self.get_error():
            container.add(self.get_component("error"))

        if isinstance(self, HasValidationScript):
            container.add(Markup(self.get_validation_script()))

        return container.to_html()

    # conversion

    def export_state(self) -> TransferableState:
        state = super().export_state()
        state.extra["components"] = self.components
        return state

    def import_state(self, state: TransferableState) -> None:
        super().import_state(state)
        if "components" in state.extra:
            self.components = state.extra["components"]

    def rebind(self, old: Element, new: Element | None = None) -> None:
        new = self if new is None else new
        super().rebind(old, new)

        for component in self.components.values():
            if component._component_of is old:
                component._component_of = new
            component.rebind(old, new)


# EOF
