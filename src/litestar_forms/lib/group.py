# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Self

from markupsafe import Markup

from .capabilities import HasValue
from . import coretags as t
from .decorators import Decorator
from .element import Element, Legend, TransferableState
from .exceptions import ElementRequiredError


def is_literal(child: Any) -> bool:
    """Markup, or a string starting with a tag, is added to a group as is."""
    return isinstance(child, Markup) or (isinstance(child, str) and child.startswith("<"))


class Group(Element):
    """
    Element holding an ordered list of children.

    Children are elements or literal HTML strings. Every element child has
    the group as its parent.

    A decorator added to a group only reaches the existing children when it
    is deep; other decorators apply to the group itself.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(options, attr, **kwargs)
        self.children: list[Element | str] = []

    def __getitem__(self, arg: Any) -> Self:
        if isinstance(arg, (tuple, list)):
            for child in arg:
                self.add(child)
        else:
            self.add(arg)
        return self

    def __iadd__(self, child: Any) -> Self:
        self.add(child)
        return self

    def __contains__(self, item: Element | str) -> bool:
        return self.deep_search(item) is not None

    # decorators

    def add_decorator(self, decorator: Decorator | str, *args: Any, **kwargs: Any) -> Self:
        super().add_decorator(decorator, *args, **kwargs)

        decorator = self.decorators[-1]
        if decorator.is_deep():
            for child in self.children:
                if isinstance(child, Element):
                    child.propagate_decorator(decorator)

        return self

    def propagate_decorator(self, decorator: Decorator) -> None:
        if self.get_option("decorate") is False:
            return

        super().propagate_decorator(decorator)
        for child in self.children:
            if isinstance(child, Element):
                child.propagate_decorator(decorator)

    # children

    def add(
        self,
        child: Element | str | None,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
    ) -> Self:
        """
        Add an element, a literal HTML string or an element built from a type
        name. Returns the group.
        """
        if child is None or child == "":
            return self

        if isinstance(child, str) and not is_literal(child):
            child = self.build(child, options, attr)

        if isinstance(child, Element):
            child.set_parent(self)
        self.children.append(child)

        if isinstance(child, Element):
            child.apply_deep_decorators(self)

        return self

    def begin(
        self,
        child: Element | str,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
    ) -> Element:
        """Add a child and return it, to chain calls on the child."""
        if isinstance(child, str) and not is_literal(child):
            child = self.build(child, options, attr)

        if not isinstance(child, Element):
            raise ElementRequiredError(
                f"To add a `{type(child).__name__}` use the add() method."
            )

        self.add(child)
        return child

    def get_children(self) -> list[Element | str]:
        return self.children

    def deep_search(self, element: Element | str, unlink: bool = False) -> Element | None:
        """
        Find a descendant by identity, by "#id" or by name.

        Children are checked in order, a nested group is searched right
        after it is checked itself, before its next sibling. With unlink,
        the element is removed from its parent's children.
        """
        match: Callable[[Element], bool]
        if isinstance(element, str):
            if element.startswith("#"):
                match = lambda child: child.get_id() == element[1:]
            else:
                match = lambda child: child.get_name() == element
        else:
            match = lambda child: child is element

        for i, child in enumerate(self.children):
            if not isinstance(child, Element):
                continue

            if match(child):
                if unlink:
                    del self.children[i]
                return child

            if isinstance(child, Group):
                found = child.deep_search(element, unlink)
                if found is not None:
                    return found

        return None

    def get(self, name: str) -> Element | None:
        return self.deep_search(name)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def remove(self, element: Element | str) -> Self:
        found = self.deep_search(element, True)
        if found is not None:
            found._parent = None
        return self

    # values

    def iter_controls(self) -> Iterator[Element]:
        for child in self.children:
            if isinstance(child, HasValue):
                yield child
            elif isinstance(child, Group):
                yield from child.iter_controls()

    def get_controls(self) -> dict[str | int, Element]:
        """Controls by name, in document order; unnamed ones get an index."""
        controls: dict[str | int, Element] = {}
        index = 0

        for control in self.iter_controls():
            name = control.get_name()
            if name:
                controls[name] = control
            else:
                controls[index] = control
                index += 1

        return controls

    def set_values(self, values: Mapping[str, Any]) -> Self:
        for control in self.get_controls().values():
            name = control.get_name()
            if name and values.get(name) is not None:
                control.set_value(values[name])
        return self

    def get_values(self) -> dict[str, Any]:
        return {
            control.get_name(): control.get_value()
            for control in self.get_controls().values()
            if control.get_name()
        }

    # validation

    def validate(self) -> bool:
        valid = True

        for child in self.children:
            if not isinstance(child, Element) or child.get_option("validate") is False:
                continue
            valid = child.is_valid() and valid

        return valid

    # rendering

    def set_content(self, content: Any) -> Self:
        """Replace all children by a single literal."""
        for child in self.children:
            if isinstance(child, Element):
                child._parent = None

        self.children = [content] if content else []
        return self

    def render_content(self) -> str:
        items = []

        for child in self.children:
            if isinstance(child, Element):
                if not child.get_option("render"):
                    continue
                items.append(child.to_html())
            elif child is not None:
                items.append(str(t.resolve(child)))

        return "\n".join(items)

    def open(self) -> str | None:
        if self.options.get("form-tag") is False:
            return ""
        if self._tag is None:
            return None
        return t.open_tag(self._tag, self.attr.render())

    def close(self) -> str | None:
        if self.options.get("form-tag") is False:
            return ""
        if self._tag is None:
            return None
        return f"</{self._tag}>"

    def render(self) -> str:
        content = self.get_content() or ""
        open_html = self.open()
        if open_html is None:
            return content
        return f"{open_html}\n{content}\n{self.close()}"

    # conversion

    def export_state(self) -> TransferableState:
        state = super().export_state()
        state.extra["children"] = self.children
        return state

    def import_state(self, state: TransferableState) -> None:
        super().import_state(state)
        if "children" in state.extra:
            self.children = state.extra["children"]
            for child in self.children:
                if isinstance(child, Element):
                    child._parent = self


class Div(Group):
    _tag = "div"


class Fieldset(Group):
    """Fieldset, with a legend from the `legend` option."""

    _tag = "fieldset"

    def __init__(self, options=None, attr=None, **kwargs) -> None:
        super().__init__(options, attr, **kwargs)
        self.legend = Legend({"id": False}).as_component_of(self)
        self.legend.set_content(self.computed(lambda el: t.escape_text(el.options.get("legend"))))

    def open(self) -> str | None:
        html = super().open()
        if not html or not self.options.get("legend"):
            return html
        return html + self.legend.to_html()


# EOF
