# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging

import pytest

from jsoncompare import diff, DiffConfig
from jsoncompare.diff_format import ChangeKind, Path, UnkeyedIndex
from jsoncompare.diffing.keyed import (
    identity_of, has_identities, key_text, index_items)


def paths(changes):
    return [str(c.path) for c in changes]


@pytest.mark.parametrize('item, expected', [
    ({"id": 1}, ("id", 1)),
    ({"id": "a", "dataRef": "b"}, ("id", "a")),
    ({"dataRef": "b"}, ("dataRef", "b")),
    ({"id": 0, "dataRef": "b"}, ("dataRef", "b")),
    ({"id": 0}, None),
    ({"id": ""}, None),
    ({"id": False}, None),
    ({"id": None}, None),
    ({"id": []}, ("id", [])),
    ({"other": 1}, None),
    (5, None),
    ([{"id": 1}], None),
])
def test_identity_of(item, expected):
    assert identity_of(item, ("id", "dataRef")) == expected


def test_has_identities():
    fields = ("id", "dataRef")
    assert has_identities([1, {"id": 2}], fields)
    assert not has_identities([1, {"id": 0}, {}], fields)
    assert not has_identities([], fields)


@pytest.mark.parametrize('key, text', [
    ("abc", "abc"),
    (1, "1"),
    (2.0, "2"),
    (2.5, "2.5"),
    (True, "true"),
    ([1, 2], "[1, 2]"),
])
def test_key_text(key, text):
    assert key_text(key) == text


def test_reordered_items_are_unchanged():
    a = [{"id": 1, "v": 1}, {"id": 2, "v": 2}, {"id": 3, "v": 3}]
    b = [{"id": 3, "v": 3}, {"id": 1, "v": 1}, {"id": 2, "v": 2}]
    assert diff(a, b) == []


def test_matched_items_use_index_in_a():
    a = [{"id": 1, "v": 1}, {"id": 2, "v": 2}]
    b = [{"id": 2, "v": 3}, {"id": 1, "v": 1}]
    changes = diff(a, b)
    assert paths(changes) == ['[1].v']
    assert changes[0].description == 'Value changed from 2 to 3'


def test_record_order():
    a = [{"id": "m", "v": 1}, {"id": "r"}, 7]
    b = [8, {"id": "a"}, {"id": "m", "v": 2}]
    changes = diff(a, b)
    assert [c.kind for c in changes] == [
        ChangeKind.REMOVED, ChangeKind.ADDED, ChangeKind.CHANGED, ChangeKind.CHANGED]
    assert paths(changes) == ['[1]', '[1]', '[0].v', '[unkeyed:0]']


def test_data_ref_fallback():
    a = [{"dataRef": "r1", "x": 1}, {"dataRef": "r2"}]
    b = [{"dataRef": "r1", "x": 2}]
    changes = diff(a, b)
    assert paths(changes) == ['[1]', '[0].x']
    assert changes[0].description == 'Array item with dataRef="r2" was removed'


def test_falsy_identity_is_unkeyed():
    a = [{"id": 0, "v": 1}, {"id": 5, "v": 1}]
    b = [{"id": 5, "v": 1}, {"id": 0, "v": 2}]
    changes = diff(a, b)
    assert len(changes) == 1
    c = changes[0]
    assert c.path == Path((UnkeyedIndex(0), "v"))
    assert str(c.path) == '[unkeyed:0].v'
    assert isinstance(c.path[0], UnkeyedIndex)


def test_unkeyed_tails():
    changes = diff([{"id": 1}, 7, 8], [{"id": 1}, 7])
    assert paths(changes) == ['[unkeyed:1]']
    assert changes[0].kind == ChangeKind.REMOVED
    assert changes[0].before == 8
    assert changes[0].description == 'Unkeyed array item was removed'

    changes = diff([{"id": 1}], [{"id": 1}, "x"])
    assert changes[0].description == 'Unkeyed array item was added'


def test_keyed_needs_identities_on_both_sides():
    changes = diff([{"id": 1}], [{"name": "x"}])
    assert paths(changes) == ['[0].id', '[0].name']
    assert [c.kind for c in changes] == [ChangeKind.REMOVED, ChangeKind.ADDED]


def test_number_and_string_keys_differ():
    changes = diff([{"id": 1}], [{"id": "1"}])
    assert [c.kind for c in changes] == [ChangeKind.REMOVED, ChangeKind.ADDED]
    assert changes[0].description == 'Array item with id="1" was removed'


def test_integer_and_float_keys_match():
    assert diff([{"id": 1, "v": 1}], [{"id": 1.0, "v": 1}]) == []


def test_custom_identity_fields():
    config = DiffConfig(identity_fields=["key"])
    a = [{"key": "a", "v": 1}, {"key": "b", "v": 1}]
    b = [{"key": "b", "v": 1}, {"key": "a", "v": 1}]
    assert diff(a, b, config=config) == []
    # The default fields are no longer used
    changes = diff([{"id": 1}, {"id": 2}], [{"id": 2}, {"id": 1}], config=config)
    assert len(changes) == 2


def test_identity_fields_must_not_be_empty():
    with pytest.raises(ValueError):
        DiffConfig(identity_fields=[])


def test_duplicate_keys_last_wins(caplog):
    a = [{"id": 1, "v": 1}, {"id": 1, "v": 2}]
    b = [{"id": 1, "v": 2}]
    with caplog.at_level(logging.WARNING, logger='jsoncompare'):
        changes = diff(a, b)
    assert changes == []
    assert 'Duplicate identity id="1"' in caplog.text


def test_index_items():
    items = [{"id": "x"}, 3, {"id": 0}, {"dataRef": "y"}]
    keyed, unkeyed = index_items(items, ("id", "dataRef"), Path())
    assert [item.index for item in keyed.values()] == [0, 3]
    assert [item.field for item in keyed.values()] == ["id", "dataRef"]
    assert unkeyed == [3, {"id": 0}]
