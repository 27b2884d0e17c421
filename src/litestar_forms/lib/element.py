# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import re
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Self, TYPE_CHECKING

from markupsafe import Markup

from litestar_forms.config.app import logger

from .capabilities import HasValue
from . import coretags as t
from .decorators import Decorator
from .exceptions import StructureError, UnknownTypeError
from .registry import FormConfig, get_default_config

if TYPE_CHECKING:
    from .formbuilder import Form
    from .group import Group


PLACEHOLDER = re.compile(r"{{\s*([^}\s]+)\s*}}")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def random_token() -> str:
    """Random base-36 token, used for ids of elements without a name."""
    number = uuid.uuid4().int >> 64
    token = ""
    while number:
        number, rem = divmod(number, 36)
        token = _BASE36[rem] + token
    return token or "0"


def sanitize_id(name: str) -> str:
    return re.sub(r"[^\w\-]", "", name.translate(str.maketrans("[.", "--")))


def rebind_values(values: Iterable[Any], old: Element, new: Element) -> None:
    for value in values:
        if isinstance(value, t.Computed):
            value.rebind(old, new)


@dataclass
class TransferableState:
    """State moved from one element to its replacement by convert_to()."""

    options: dict[str, Any]
    attr: t.Attr
    parent: Group | None
    component_of: Element | None
    builder: Element | None
    config: FormConfig | None
    decorators: list[Decorator]
    content: Any
    extra: dict[str, Any] = field(default_factory=dict)


class Element:
    """
    Base class for HTML elements.

    Options configure the behaviour of the element and bubble: an option
    that is not set on the element is looked up at its parent, and finally
    in the default options of the form config. Attributes are the HTML
    attributes of the rendered tag.

    Attribute, option and content values may be Computed instances; they are
    evaluated with the element as argument each time they are read.
    """

    _tag: str | None = None

    # options set for every instance of the class, below explicit options
    default_options: dict[str, Any] = {}

    # form specific type names: type -> (type, options, attr)
    custom_types: dict[str, tuple] = {}

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        *,
        config: FormConfig | None = None,
    ) -> None:
        attr = dict(attr or {})
        if attr.get("id") is None:
            attr["id"] = self.computed(lambda el: el.get_id())

        merged = {"decorate": True, **self.default_options, **(options or {})}
        self.options: dict[str, Any] = {
            key: val for key, val in merged.items() if val is not None
        }
        self.attr = t.Attr(attr)

        self.decorators: list[Decorator] = []
        self.content: Any = None

        self._parent: Group | None = None
        self._component_of: Element | None = None
        self._builder: Element | None = None
        self._config = config

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name='{self.get_name() or ''}', "
            f"id='{self.options.get('id') or ''}')"
        )

    def __str__(self) -> str:
        return self.to_html()

    def __html__(self) -> Markup:
        return Markup(self.to_html())

    def computed(self, func) -> t.Computed:
        """Create a deferred value owned by this element."""
        return t.Computed(func, self)

    # configuration and factory

    def get_config(self) -> FormConfig:
        if self._config is not None:
            return self._config
        for link in (self._parent, self._component_of, self._builder):
            if link is not None:
                return link.get_config()
        return get_default_config()

    def convert_custom_type(
        self,
        type_name: str,
        options: dict[str, Any] | None = None,
        attr: dict[str, Any] | None = None,
    ) -> tuple[str, dict[str, Any], dict[str, Any]]:
        """Convert a custom (form specific) type to a general factory type."""
        options = dict(options or {})
        attr = dict(attr or {})

        if self._builder is not None:
            return self._builder.convert_custom_type(type_name, options, attr)

        if type_name in self.custom_types:
            custom = self.custom_types[type_name]
            type_name = custom[0]
            if len(custom) > 1 and custom[1]:
                options = {**custom[1], **options}
            if len(custom) > 2 and custom[2]:
                attr = {**custom[2], **attr}

        return type_name, options, attr

    def build(
        self,
        type_name: str,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
    ) -> Element:
        """
        Factory method

        :param type_name: element type, or ":name" to call build_name() on the
            builder element
        :param options: element options
        :param attr: HTML attributes
        """
        if self._builder is not None:
            return self._builder.build(type_name, options, attr)

        type_name, options, attr = self.convert_custom_type(type_name, options, attr)

        if type_name.startswith(":"):
            method_name = "build_" + re.sub(r"[^a-zA-Z0-9]+", "_", type_name[1:]).strip("_").lower()
            method = getattr(self, method_name, None)
            if method is None:
                raise UnknownTypeError("field", type_name[1:])
            return method(options, attr)

        element = self.get_config().create(type_name, options, attr)
        element._builder = self
        return element

    # tree

    def get_parent(self) -> Group | None:
        return self._parent

    @property
    def parent(self) -> Group | None:
        return self._parent

    def set_parent(self, parent: Group) -> Self:
        ancestor = parent
        while ancestor is not None:
            if ancestor is self:
                raise StructureError(
                    f"Parent can't be element itself for `{self.get_name() or self!r}`."
                )
            ancestor = ancestor.get_parent()

        if self._parent is not None:
            self._parent.remove(self)

        self._parent = parent
        if self._builder is None:
            self._builder = parent._builder if parent._builder is not None else parent

        return self

    def as_component_of(self, element: Element) -> Self:
        self._component_of = element
        if self._builder is None:
            self._builder = element._builder if element._builder is not None else element
        return self

    def is_component(self) -> bool:
        return self._component_of is not None

    def end(self) -> Element | None:
        """Get parent or element of which this is a component."""
        return self._component_of or self._parent

    def get_form(self) -> Form | None:
        from .formbuilder import Form

        parent = self._component_of or self._parent
        while parent is not None and not isinstance(parent, Form):
            parent = parent.get_parent()
        return parent

    # identity

    def get_id(self) -> str | None:
        """
        Return the element id.

        Without an explicit id option, the id is derived from the id of the
        form and the element name, or random. The derived id is stored, so
        it is stable for this element. An id option of False means no id.
        """
        ident = self.options.get("id")
        if ident is False:
            return None

        if ident is None:
            form = self.get_form()
            form_id = form.get_id() if form is not None else None
            if form_id:
                name = self.get_name()
                ident = f"{form_id}-{sanitize_id(name) if name else random_token()}"
            else:
                ident = random_token()
            self.options["id"] = ident

        return str(ident)

    def get_name(self) -> str | None:
        return self.options.get("name")

    # attributes

    def set_attr(self, attr: str | Mapping[str, Any], value: Any = None) -> Self:
        self.attr.set(attr, value)
        return self

    def get_attr(self, attr: str | None = None) -> Any:
        return self.attr.get(attr)

    def has_class(self, cls: str) -> bool:
        return self.attr.has_class(cls)

    def add_class(self, cls: Any) -> Self:
        self.attr.add_class(cls)
        return self

    def remove_class(self, cls: Any) -> Self:
        self.attr.remove_class(cls)
        return self

    # options

    def set_option(self, option: str | Mapping[str, Any], value: Any = None) -> Self:
        """Set an option or a mapping of options; None removes the option."""
        options = {option: value} if isinstance(option, str) else option

        if "decorate" in options and self._parent is not None:
            name = self.get_name()
            logger.warning(
                "You should set the 'decorate' option before adding %s to a form or group.",
                f"element '{name}'" if name else "an element",
            )

        for key, val in options.items():
            if val is None:
                self.options.pop(key, None)
            else:
                self.options[key] = val
        return self

    def get_option(self, option: str) -> Any:
        if option in self.options:
            value = self.options[option]
        elif self._parent is not None:
            return self._parent.get_option(option)
        else:
            value = self.get_config().options.get(option)

        return value() if isinstance(value, t.Computed) else value

    def get_options(self) -> dict[str, Any]:
        """Get all options, combined with those of the ancestors."""
        if self._parent is not None:
            defaults = self._parent.get_options()
        else:
            defaults = dict(self.get_config().options)

        options = {**defaults, **self.options}
        return {
            key: val() if isinstance(val, t.Computed) else val
            for key, val in options.items()
        }

    # decorators

    def add_decorator(self, decorator: Decorator | str, *args: Any, **kwargs: Any) -> Self:
        """
        Add a decorator to the element.

        :param decorator: decorator object or registered decorator name
        :param args: passed to the constructor when a name is given
        """
        if not isinstance(decorator, Decorator):
            decorator = self.get_config().create_decorator(decorator, *args, **kwargs)

        decorator.apply(self, False)
        self.decorators.append(decorator)
        return self

    def apply_deep_decorators(self, parent: Group) -> None:
        """Apply the deep decorators of a new parent."""
        for decorator in parent.get_decorators():
            if decorator.is_deep():
                self.propagate_decorator(decorator)

    def propagate_decorator(self, decorator: Decorator) -> None:
        if self.get_option("decorate") is False:
            return
        decorator.apply(self, True)

    def get_decorators(self) -> list[Decorator]:
        """Own decorators, followed by the deep decorators of the ancestors."""
        decorators = list(self.decorators)

        if self._parent is not None and self.get_option("decorate") is not False:
            decorators.extend(
                decorator
                for decorator in self._parent.get_decorators()
                if decorator.is_deep()
            )

        return decorators

    # validation

    def is_valid(self) -> bool:
        if self.get_option("validate") is False:
            return True

        valid = self.validate()
        for decorator in self.get_decorators():
            valid = decorator.validate(self, valid)

        return valid

    def validate(self) -> bool:
        return True

    # rendering

    def set_content(self, content: Any) -> Self:
        self.content = content
        return self

    def get_content(self) -> str | None:
        content = self.render_content()
        for decorator in self.get_decorators():
            content = decorator.render_content(self, content)
        return content

    def render_content(self) -> str | None:
        if self.content is None:
            return None
        content = t.resolve(self.content)
        return "" if content is None else str(content)

    def render(self) -> str:
        if self._tag is None:
            return self.get_content() or ""
        return t.paired_tag(self._tag, self.attr.render(), self.get_content())

    def to_html(self) -> str:
        html = self.render()
        for decorator in self.get_decorators():
            html = decorator.render(self, html)
        return html

    # placeholders

    def parse(self, message: str | None) -> str:
        """Parse a message, inserting values for {{placeholders}}."""
        if message is None:
            return ""
        return PLACEHOLDER.sub(
            lambda match: self.resolve_placeholder(match.group(1)), str(message)
        )

    def resolve_placeholder(self, var: str) -> str:
        value = self.get_option(var)
        if value is None:
            value = self.attr.get(var)
        return placeholder_text(value)

    # conversion

    def export_state(self) -> TransferableState:
        return TransferableState(
            options=self.options,
            attr=self.attr,
            parent=self._parent,
            component_of=self._component_of,
            builder=self._builder,
            config=self._config,
            decorators=self.decorators,
            content=self.content,
        )

    def import_state(self, state: TransferableState) -> None:
        self.options = state.options
        self.attr = state.attr
        self._parent = state.parent
        self._component_of = state.component_of
        self._builder = state.builder
        self._config = state.config
        self.decorators = state.decorators
        self.content = state.content

    def rebind(self, old: Element, new: Element | None = None) -> None:
        """Point the deferred values owned by old at new (default self)."""
        new = self if new is None else new
        rebind_values(self.options.values(), old, new)
        rebind_values(self.attr.raw_values(), old, new)
        rebind_values([self.content], old, new)

    def convert_to(self, type_name: str) -> Element:
        """
        Replace this element by an element of another type.

        Returns self if the element already is of that type. Otherwise the
        state is moved to a new element which takes the place of this one in
        the parent's children; this element is detached.
        """
        type_name, options, attr = self.convert_custom_type(type_name)

        entry = self.get_config().elements.get(type_name)
        if entry is not None and isinstance(self, entry.cls):
            return self

        new = self.build(type_name)
        new.import_state(self.export_state())
        new.options.update(options)
        new.attr.set(attr)
        new.rebind(self)

        parent = self._parent
        if parent is not None:
            for i, child in enumerate(parent.children):
                if child is self:
                    parent.children[i] = new

        self._parent = None
        logger.debug("Converted %r to %s", self, type_name)

        return new


def placeholder_text(value: Any) -> str:
    if isinstance(value, HasValue):
        value = value.get_value()
    if isinstance(value, date):
        return value.strftime("%x")
    if value is None:
        return ""
    return str(value)


class Span(Element):
    _tag = "span"


class Label(Element):
    _tag = "label"


class Legend(Element):
    _tag = "legend"


# EOF
