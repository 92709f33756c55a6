"""Tests for dotted path access."""

import pytest

from pyqt_formbind.core import PathNavigationError, PathResolver, strip_prefix


def test_get_single_and_nested():
    """Test reading direct and nested values."""
    model = {"name": "Ann", "customer": {"address": {"city": "Bonn"}}}
    assert PathResolver.get(model, "name") == "Ann"
    assert PathResolver.get(model, "customer.address.city") == "Bonn"


def test_get_missing_yields_empty_string():
    """Test that broken paths never raise."""
    model = {"customer": {"name": "Ann"}, "total": None}
    assert PathResolver.get(model, "customer.zip") == ""
    assert PathResolver.get(model, "nothing.at.all") == ""
    assert PathResolver.get(model, "total") == ""
    assert PathResolver.get(None, "name") == ""
    assert PathResolver.get({}, "name") == ""


def test_get_trims_strings():
    """Test that string results are trimmed."""
    assert PathResolver.get({"name": "  Ann "}, "name") == "Ann"


def test_get_prefers_literal_dotted_key():
    """Test that a key containing dots wins over navigation."""
    model = {"a.b": "literal", "a": {"b": "nested"}}
    assert PathResolver.get(model, "a.b") == "literal"


def test_get_list_index_and_callable():
    """Test list segments and callable paths."""
    model = {"items": [{"id": 1}, {"id": 2}]}
    assert PathResolver.get(model, "items.1.id") == 2
    assert PathResolver.get(model, lambda m: len(m["items"])) == 2


def test_get_keeps_non_string_values():
    """Test that numbers, booleans and lists are returned unchanged."""
    model = {"count": 3, "flag": False, "items": [1, 2]}
    assert PathResolver.get(model, "count") == 3
    assert PathResolver.get(model, "items") == [1, 2]


def test_resolve_is_strict():
    """Test that resolve raises on missing segments."""
    with pytest.raises(PathNavigationError):
        PathResolver.resolve({"a": {}}, "a.b")
    with pytest.raises(LookupError):
        PathResolver.resolve({"a": "text"}, "a.b")


def test_set_creates_first_level_container():
    """Test that two segment writes create the missing first level."""
    model = {}
    assert PathResolver.set(model, "name", "Ann")
    assert PathResolver.set(model, "address.city", "Bonn")
    assert model == {"name": "Ann", "address": {"city": "Bonn"}}


def test_set_replaces_falsy_first_level():
    """Test that a None first level is replaced by a container."""
    model = {"address": None}
    assert PathResolver.set(model, "address.city", "Bonn")
    assert model == {"address": {"city": "Bonn"}}


def test_set_deep_requires_existing_intermediates():
    """Test that 3 and 4 segment writes do not create deeper intermediates."""
    model = {}
    assert not PathResolver.set(model, "a.b.c", 1)
    assert model == {}

    model = {"a": {"x": 1}}
    assert not PathResolver.set(model, "a.b.c.d", 1)
    assert model == {"a": {"x": 1}}

    model = {"a": {"b": {"c": {}}}}
    assert PathResolver.set(model, "a.b.c", 1)
    assert model == {"a": {"b": {"c": 1}}}

    model = {"a": {"b": {"c": {}}}}
    assert PathResolver.set(model, "a.b.c.d", 2)
    assert model["a"]["b"]["c"] == {"d": 2}


def test_set_ignores_paths_beyond_four_segments():
    """Test that writes deeper than four segments are skipped."""
    model = {"a": {"b": {"c": {"d": {}}}}}
    assert not PathResolver.set(model, "a.b.c.d.e", 1)
    assert model == {"a": {"b": {"c": {"d": {}}}}}


def test_set_into_list_element():
    """Test writing through a list index."""
    model = {"items": [{"id": 1}, {"id": 2}]}
    assert PathResolver.set(model, "items.1.id", 5)
    assert model["items"][1]["id"] == 5


def test_assign_raises_where_set_swallows():
    """Test that assign surfaces what set swallows."""
    with pytest.raises(PathNavigationError):
        PathResolver.assign({}, "a.b.c", 1)
    with pytest.raises(PathNavigationError):
        PathResolver.assign("not a dict", "a", 1)


def test_strip_prefix():
    """Test prefix stripping rules."""
    assert strip_prefix("data.name", "data") == "name"
    assert strip_prefix("data.address.city", "data") == "address.city"
    assert strip_prefix("other.name", "data") == ""
    assert strip_prefix("data", "data") == ""
    assert strip_prefix("database.x", "data") == ""
    assert strip_prefix("name", "") == "name"
    assert strip_prefix("", "data") == ""
