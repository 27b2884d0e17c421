# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

"""Tests for Attr, Computed and the tag helpers."""

from datetime import date, datetime

import pytest
from markupsafe import Markup

from litestar_forms.lib.coretags import Attr, Computed, escape_text, paired_tag, resolve
from litestar_forms.lib.exceptions import StructureError
from litestar_forms.lib.forminputs import Input


class TestAttrCasting:
    """Tests for casting attribute values."""

    def test_true_renders_bare(self):
        """Test a True value renders the attribute name only."""
        assert Attr({"disabled": True}).render() == "disabled"

    def test_none_and_false_are_omitted(self):
        """Test None and False values are not rendered."""
        attr = Attr({"a": None, "b": False, "c": "x"})
        assert attr.render() == 'c="x"'

    def test_list_becomes_json(self):
        """Test lists are rendered as compact JSON."""
        assert Attr({"data-range": [10, 52]}).render() == 'data-range="[10,52]"'

    def test_dict_becomes_json(self):
        """Test dicts are rendered as compact JSON, entity encoded."""
        assert Attr({"data-x": {"a": 1}}).render() == 'data-x="{&#34;a&#34;:1}"'

    def test_dates_become_iso(self):
        """Test dates and datetimes are cast to ISO-8601."""
        attr = Attr({"min": date(2024, 1, 31), "max": datetime(2024, 2, 1, 10, 30)})
        assert attr["min"] == "2024-01-31"
        assert attr["max"] == "2024-02-01T10:30:00"

    def test_numbers_become_strings(self):
        """Test numbers are cast to strings."""
        assert Attr({"maxlength": 10})["maxlength"] == "10"

    def test_values_are_escaped(self):
        """Test attribute values are entity encoded."""
        assert Attr({"title": '"<b>"'}).render() == 'title="&#34;&lt;b&gt;&#34;"'

    def test_computed_value(self):
        """Test a computed value is evaluated on every read."""
        state = {"value": "a"}
        attr = Attr({"value": Computed(lambda owner: state["value"])})
        assert attr["value"] == "a"
        state["value"] = "b"
        assert attr["value"] == "b"

    def test_control_is_dereferenced(self):
        """Test a control as attribute value renders its value."""
        control = Input({"name": "x"})
        control.set_value("hello")
        assert Attr({"data-copy": control})["data-copy"] == "hello"


class TestAttrAccess:
    """Tests for setting and reading attributes."""

    def test_class_is_always_present(self):
        """Test a new Attr has an empty class attribute."""
        attr = Attr()
        assert "class" in attr
        assert attr.get("class") is None

    def test_set_none_removes(self):
        """Test setting None removes an attribute."""
        attr = Attr({"title": "x"})
        attr.set("title", None)
        assert "title" not in attr

    def test_set_mapping(self):
        """Test setting several attributes at once."""
        attr = Attr().set({"a": "1", "b": "2"})
        assert attr.get() == {"class": None, "a": "1", "b": "2"}

    def test_get_missing_returns_default(self):
        """Test get() of a missing attribute."""
        assert Attr().get("missing", "x") == "x"

    def test_get_raw_keeps_computed(self):
        """Test get_raw() returns the value as given."""
        value = Computed(lambda owner: "x")
        assert Attr({"v": value}).get_raw("v") is value

    def test_append_raises(self):
        """Test adding a value without key is refused."""
        with pytest.raises(StructureError, match="associated keys"):
            Attr().append("x")

    def test_delete_class_empties_it(self):
        """Test deleting class keeps an empty class list."""
        attr = Attr({"class": "a b"})
        del attr["class"]
        assert "class" in attr
        assert attr.get("class") is None


class TestAttrClasses:
    """Tests for class manipulation."""

    def test_class_string_is_split(self):
        """Test a class string is stored as tokens."""
        attr = Attr({"class": "a  b"})
        assert attr.get_raw("class") == ["a", "b"]

    def test_add_and_has_class(self):
        """Test adding classes."""
        attr = Attr().add_class("a").add_class(["b", "c"])
        assert attr.has_class("b")
        assert attr["class"] == "a b c"

    def test_duplicate_classes_render_once(self):
        """Test duplicate class tokens are rendered once."""
        attr = Attr({"class": "a"}).add_class("a b")
        assert attr.render() == 'class="a b"'

    def test_remove_class(self):
        """Test removing classes."""
        attr = Attr({"class": "a b c"}).remove_class("a c")
        assert attr["class"] == "b"

    def test_computed_class(self):
        """Test a computed class token, dropped when it gives None."""
        state = {"error": False}
        attr = Attr({"class": "field"})
        attr.add_class(Computed(lambda owner: "has-error" if state["error"] else None))
        assert attr["class"] == "field"
        state["error"] = True
        assert attr["class"] == "field has-error"


class TestAttrRender:
    """Tests for rendering attributes."""

    def test_order_is_kept(self):
        """Test attributes render in insertion order, class after the initial ones."""
        attr = Attr({"id": "x", "name": "y"})
        attr["title"] = "z"
        attr.add_class("c")
        assert attr.render() == 'id="x" name="y" class="c" title="z"'

    def test_overrides(self):
        """Test overrides replace or remove values at render time only."""
        attr = Attr({"name": "n", "value": "v"})
        assert attr.render({"name": None, "value": "w"}) == 'value="w"'
        assert attr["name"] == "n"

    def test_render_only(self):
        """Test rendering selected attributes."""
        attr = Attr({"name": "n", "value": "v", "multiple": True})
        assert attr.render_only(["multiple", "name"]) == 'multiple name="n"'
        assert attr.render_only("value") == 'value="v"'


class TestTagHelpers:
    """Tests for escape_text, paired_tag and resolve."""

    def test_escape_text_returns_str(self):
        """Test escape_text gives a plain, escaped str."""
        text = escape_text("<b>")
        assert text == "&lt;b&gt;"
        assert not isinstance(text, Markup)

    def test_escape_text_none(self):
        """Test None escapes to an empty string."""
        assert escape_text(None) == ""

    def test_paired_tag(self):
        """Test paired tags with and without attributes."""
        assert paired_tag("span", "", "x") == "<span>x</span>"
        assert paired_tag("a", 'href="/"', None) == '<a href="/"></a>'

    def test_resolve_callable(self):
        """Test resolve() calls a plain callable."""
        assert resolve(lambda: "x") == "x"
        assert resolve("x") == "x"

    def test_resolve_keeps_classes(self):
        """Test resolve() does not instantiate classes."""
        assert resolve(int) is int


# EOF
