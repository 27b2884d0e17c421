# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

"""Tests for decorators and their propagation."""

import pytest

from litestar_forms.lib.decorators import Decorator, SimpleFilter, SimpleValidation
from litestar_forms.lib.exceptions import UnknownTypeError
from litestar_forms.lib.forminputs import Input
from litestar_forms.lib.group import Div


class Marker(Decorator):
    """Records the elements it is applied to and wraps their HTML."""

    deep = True

    def __init__(self):
        self.applied = []

    def apply(self, element, deep):
        self.applied.append((element, deep))

    def render(self, element, html):
        return f"[{html}]"


class TestSimpleDecorators:
    """Tests for the filter and validation decorators."""

    def test_filter(self):
        """Test a filter changes the value on set_value()."""
        el = Input({"name": "a"}).add_decorator("filter", str.strip)
        el.set_value("  x ")
        assert el.get_value() == "x"

    def test_validation_with_message(self):
        """Test a validation callback returning a message."""
        el = Input({"name": "a"}).add_decorator("validation", lambda v: (v == "ok", "Not ok"))
        el.set_value("bad")
        assert not el.is_valid()
        assert el.get_error() == "Not ok"

        el.set_value("ok")
        assert el.is_valid()

    def test_validation_default_message(self):
        """Test a validation callback returning a bool."""
        el = Input({"name": "a"}).add_decorator(SimpleValidation(lambda v: False))
        el.set_value("x")
        assert not el.is_valid()
        assert el.get_error() == "Please enter a valid value"

    def test_validation_after_failed_rule(self):
        """Test the callback is skipped when a rule failed."""
        calls = []
        el = Input({"name": "a", "required": True})
        el.add_decorator(SimpleValidation(lambda v: calls.append(v) or True))
        assert not el.is_valid()
        assert calls == []
        assert el.get_error() == "Please fill out this field"

    def test_unknown_decorator(self):
        """Test adding an unregistered decorator name."""
        with pytest.raises(UnknownTypeError, match="Unknown decorator type `fancy`"):
            Input().add_decorator("fancy")

    def test_repr(self):
        """Test the repr of a decorator."""
        assert repr(SimpleFilter(str.strip, deep=True)) == "SimpleFilter(deep=True)"


class TestPropagation:
    """Tests for deep decorators."""

    def test_deep_filter_reaches_later_children(self):
        """Test a deep decorator applies to children added afterwards."""
        div = Div()
        div.add_decorator(SimpleFilter(str.upper, deep=True))
        el = div.begin("text", {"name": "a"})
        el.set_value("abc")
        assert el.get_value() == "ABC"

    def test_shallow_filter_does_not_propagate(self):
        """Test a decorator that is not deep stays on its element."""
        div = Div()
        div.add_decorator(SimpleFilter(str.upper))
        el = div.begin("text", {"name": "a"})
        el.set_value("abc")
        assert el.get_value() == "abc"

    def test_shallow_filter_skips_existing_children(self):
        """Test a decorator that is not deep is not given to existing children."""
        div = Div()
        el = div.begin("text", {"name": "a"})
        div.add_decorator(SimpleFilter(str.upper))
        el.set_value("abc")
        assert el.get_value() == "abc"
        assert el.get_decorators() == []

    def test_apply_to_existing_and_new_children(self):
        """Test apply() is called for existing and later descendants."""
        div = Div()
        existing = div.begin("span")
        nested = div.begin("div")
        inner = nested.begin("span")

        marker = Marker()
        div.add_decorator(marker)
        later = div.begin("span")

        applied = [element for element, _ in marker.applied]
        assert applied[0] is div
        for element in (existing, nested, inner, later):
            assert element in applied
        assert marker.applied[0][1] is False
        assert all(deep for _, deep in marker.applied[1:])

    def test_decorate_false(self):
        """Test elements with decorate False are skipped."""
        div = Div()
        marker = Marker()
        div.add_decorator(marker)
        span = div.begin("span", {"decorate": False})
        assert span not in [element for element, _ in marker.applied]
        assert span.get_decorators() == []

    def test_render_hook(self):
        """Test the render hook wraps the HTML of descendants."""
        div = Div({"id": False})
        div.add_decorator(Marker())
        div.add("span", {"id": False})
        assert str(div) == "[<div>\n[<span></span>]\n</div>]"

    def test_get_decorators_order(self):
        """Test own decorators come before inherited ones."""
        div = Div()
        inherited = Marker()
        div.add_decorator(inherited)
        span = div.begin("span")
        own = Marker()
        span.add_decorator(own)
        assert span.get_decorators() == [own, inherited]


# EOF
