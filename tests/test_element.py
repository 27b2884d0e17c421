# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

"""Tests for Element: ids, options, content and conversion."""

import logging

import pytest
from markupsafe import Markup

from litestar_forms.lib.element import Element, Span, random_token, sanitize_id
from litestar_forms.lib.exceptions import StructureError, UnknownTypeError
from litestar_forms.lib.group import Div, Fieldset, Group


class TestIdentity:
    """Tests for element ids and names."""

    def test_explicit_id(self):
        """Test the id option is used as id."""
        assert Span({"id": "x"}).get_id() == "x"

    def test_id_false_means_no_id(self):
        """Test an id option of False renders no id attribute."""
        span = Span({"id": False}).set_content("x")
        assert span.get_id() is None
        assert str(span) == "<span>x</span>"

    def test_random_id_is_stable(self):
        """Test an unnamed element keeps its random id."""
        span = Span()
        assert span.get_id() == span.get_id()
        assert span.get_id() != Span().get_id()

    def test_id_from_form_and_name(self, form):
        """Test a named element in a form gets form id and name as id."""
        form.add("text", {"name": "user[name]"})
        assert form.get("user[name]").get_id() == "form-user-name"

    def test_unnamed_id_in_form(self, form):
        """Test an unnamed element in a form gets the form id as prefix."""
        span = form.begin("span")
        assert span.get_id().startswith("form-")

    def test_id_attribute_follows_option(self):
        """Test the id attribute is computed from get_id()."""
        span = Span()
        span.set_option("id", "later")
        assert span.get_attr("id") == "later"

    def test_sanitize_id(self):
        """Test brackets and dots become dashes in ids."""
        assert sanitize_id("a.b[c]") == "a-b-c"

    def test_random_token(self):
        """Test random tokens are base-36."""
        token = random_token()
        assert token
        assert token.isalnum()
        assert token == token.lower()

    def test_repr(self):
        """Test repr shows class, name and id."""
        assert repr(Span({"name": "n", "id": "i"})) == "Span(name='n', id='i')"


class TestOptions:
    """Tests for option bubbling."""

    def test_own_option(self):
        """Test an option set on the element."""
        assert Span({"foo": "bar"}).get_option("foo") == "bar"

    def test_option_bubbles_from_parent(self, form):
        """Test an option set on an ancestor is seen by descendants."""
        form.set_option("foo", "bar")
        div = form.begin("div")
        span = div.begin("span")
        assert span.get_option("foo") == "bar"
        span.set_option("foo", "baz")
        assert span.get_option("foo") == "baz"

    def test_default_options(self):
        """Test options fall back to the config defaults."""
        span = Span()
        assert span.get_option("render") is True
        assert span.get_option("required-suffix") == " *"

    def test_none_removes_option(self):
        """Test setting an option to None removes it."""
        span = Span({"foo": "bar"})
        span.set_option("foo", None)
        assert span.get_option("foo") is None

    def test_none_options_are_dropped(self):
        """Test None values given to the constructor are not stored."""
        assert "foo" not in Span({"foo": None}).options

    def test_computed_option(self):
        """Test a computed option is evaluated with its owner."""
        span = Span({"name": "n"})
        span.set_option("title", span.computed(lambda el: el.get_name().upper()))
        assert span.get_option("title") == "N"

    def test_get_options_combines_ancestors(self, form):
        """Test get_options() merges options of the ancestors."""
        form.set_option("foo", "bar")
        span = form.begin("span", {"baz": 1})
        options = span.get_options()
        assert options["foo"] == "bar"
        assert options["baz"] == 1
        assert options["render"] is True

    def test_decorate_after_adding_warns(self, form, caplog):
        """Test changing decorate on an attached element logs a warning."""
        span = form.begin("span", {"name": "s"})
        with caplog.at_level(logging.WARNING):
            span.set_option("decorate", False)
        assert "decorate" in caplog.text


class TestContent:
    """Tests for element content and rendering."""

    def test_string_content(self):
        """Test content is rendered as given."""
        assert str(Span({"id": False}).set_content("<b>x</b>")) == "<span><b>x</b></span>"

    def test_callable_content(self):
        """Test callable content is evaluated at render time."""
        state = {"text": "a"}
        span = Span({"id": False}).set_content(lambda: state["text"])
        state["text"] = "b"
        assert str(span) == "<span>b</span>"

    def test_computed_content(self):
        """Test computed content gets the owner element."""
        span = Span({"id": False, "name": "n"})
        span.set_content(span.computed(lambda el: el.get_name()))
        assert str(span) == "<span>n</span>"

    def test_attributes_render(self):
        """Test attributes in the opening tag."""
        span = Span({"id": "s"}, {"class": "a", "title": "t"})
        assert str(span) == '<span id="s" class="a" title="t"></span>'

    def test_html_protocol(self):
        """Test elements can be embedded in Markup."""
        span = Span({"id": False}).set_content("x")
        assert Markup("<p>{}</p>").format(span) == "<p><span>x</span></p>"

    def test_parse_placeholders(self):
        """Test {{option}} placeholders in messages."""
        span = Span({"min": 3}, {"title": "T"})
        assert span.parse("at least {{ min }} for {{title}}") == "at least 3 for T"
        assert span.parse("{{unknown}}!") == "!"


class TestTree:
    """Tests for parents, components and builders."""

    def test_parent(self, form):
        """Test an added element has the group as parent."""
        span = form.begin("span")
        assert span.get_parent() is form
        assert span.parent is form
        assert span.end() is form

    def test_components(self, form):
        """Test components point to their element, not to a parent."""
        el = form.begin("text", {"name": "email"})
        label = el.get_component("label")
        assert label.is_component()
        assert label.end() is el
        assert label.get_form() is form
        assert not el.is_component()

    def test_get_form(self, form):
        """Test get_form() finds the form through nested groups."""
        span = form.begin("div").begin("fieldset").begin("span")
        assert span.get_form() is form

    def test_no_form(self):
        """Test get_form() without form."""
        assert Div().begin("span").get_form() is None

    def test_element_cannot_be_own_parent(self):
        """Test adding a group to itself fails."""
        group = Group()
        with pytest.raises(StructureError):
            group.add(group)

    def test_element_cannot_be_own_ancestor(self):
        """Test adding a group to its descendant fails."""
        outer = Group()
        inner = outer.begin("group")
        with pytest.raises(StructureError):
            inner.add(outer)

    def test_moving_detaches_from_old_parent(self):
        """Test adding an element to another group moves it."""
        first, second = Div(), Div()
        span = first.begin("span")
        second.add(span)
        assert span.get_parent() is second
        assert span not in first.get_children()

    def test_build_unknown_type(self):
        """Test building an unregistered type."""
        with pytest.raises(UnknownTypeError, match="Unknown element type `nope`"):
            Div().build("nope")

    def test_build_method_not_found(self):
        """Test building with a missing build method."""
        with pytest.raises(UnknownTypeError, match="Unknown field type `missing`"):
            Div().build(":missing")


class TestConversion:
    """Tests for convert_to()."""

    def test_same_type_returns_self(self, form):
        """Test converting to the current type is a no-op."""
        div = form.begin("div")
        assert div.convert_to("div") is div
        assert div.convert_to("group") is div

    def test_group_to_fieldset(self, form):
        """Test a group converted to a fieldset keeps place and children."""
        before = form.begin("span", {"name": "before"})
        group = form.begin("group", {"name": "details"})
        group.add("text", {"name": "street"})

        fieldset = group.convert_to("fieldset")

        assert isinstance(fieldset, Fieldset)
        assert form.get_children() == [before, fieldset]
        assert fieldset.get_parent() is form
        assert group.get_parent() is None
        assert fieldset.get("street").get_parent() is fieldset
        assert form.get("street") is fieldset.get("street")
        assert fieldset.get_name() == "details"

    def test_conversion_moves_computed_values(self, form):
        """Test computed attributes follow the new element."""
        group = form.begin("group", {"id": "g"})
        fieldset = group.convert_to("fieldset")
        fieldset.set_option("id", "new")
        assert fieldset.get_attr("id") == "new"

    def test_converted_fieldset_renders_legend(self, form):
        """Test the converted element renders as its new type."""
        group = form.begin("group", {"id": "g", "legend": "Address"})
        fieldset = group.convert_to("fieldset")
        assert str(fieldset) == '<fieldset id="g"><legend>Address</legend>\n\n</fieldset>'


class TestSimpleElements:
    """Tests for the simple element classes."""

    @pytest.mark.parametrize("cls, tag", [(Span, "span"), (Div, "div")])
    def test_tags(self, cls, tag):
        """Test the tag of simple elements."""
        html = str(cls({"id": False}))
        assert html.startswith(f"<{tag}>")
        assert html.endswith(f"</{tag}>")

    def test_element_without_tag(self):
        """Test an element without tag renders its content only."""
        assert str(Element().set_content("x")) == "x"


# EOF
