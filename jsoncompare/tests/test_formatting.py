# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json

import pytest

from jsoncompare.diff_format import ChangeKind, Path, Missing
from jsoncompare.formatting import (
    classify, is_truthy, render, render_value, render_capped, describe,
    ABSENT_TEXT, DISPLAY_CAP)


@pytest.mark.parametrize('value, name', [
    (Missing, 'undefined'),
    (None, 'null'),
    (True, 'boolean'),
    (False, 'boolean'),
    (0, 'number'),
    (1.5, 'number'),
    ("", 'string'),
    ([], 'array'),
    ({}, 'object'),
])
def test_classify(value, name):
    assert classify(value) == name


def test_classify_rejects_other_types():
    with pytest.raises(TypeError):
        classify(object())


@pytest.mark.parametrize('value, truthy', [
    (None, False),
    (Missing, False),
    (False, False),
    (0, False),
    (0.0, False),
    (float('nan'), False),
    ("", False),
    (True, True),
    (-1, True),
    ("0", True),
    ([], True),
    ({}, True),
])
def test_is_truthy(value, truthy):
    assert is_truthy(value) == truthy


@pytest.mark.parametrize('value, text', [
    (Missing, ABSENT_TEXT),
    (None, 'null'),
    (True, 'true'),
    (False, 'false'),
    (3, '3'),
    (2.5, '2.5'),
    ("abc", '"abc"'),
    ('say "hi"', '"say \\"hi\\""'),
    ("æøå", '"æøå"'),
    ([], '[]'),
    ({}, '{}'),
    ([1], '[\n  1\n]'),
    ({"a": None}, '{\n  "a": null\n}'),
])
def test_render_value(value, text):
    assert render_value(value) == text


def test_render_short_value():
    r = render({"a": 1})
    assert r.display == r.full_value
    assert not r.is_truncated


def test_render_missing():
    r = render(Missing, 0)
    assert r == (ABSENT_TEXT, False, ABSENT_TEXT)


def test_render_truncates():
    value = "x" * 100
    r = render(value)
    assert r.is_truncated
    assert r.display == r.full_value[:DISPLAY_CAP] + '...'
    assert len(r.display) == DISPLAY_CAP + 3
    assert r.full_value == '"' + value + '"'


@pytest.mark.parametrize('value', [
    None, 17, -0.25, "a string with \"quotes\" and \n newlines",
    ["x" * 40, {"nested": [1, 2, 3]}],
    {"k%d" % i: list(range(i)) for i in range(10)},
])
@pytest.mark.parametrize('cap', [0, 5, 30, 80, None])
def test_render_full_value_parses_back(value, cap):
    r = render(value, cap)
    assert json.loads(r.full_value) == value
    if cap is None:
        assert not r.is_truncated
    else:
        assert r.is_truncated == (len(r.full_value) > cap)
        assert len(r.display) <= cap + 3


def test_render_capped():
    assert render_capped("x" * 10, 4) == '"xxx...'
    assert render_capped(Missing) == ABSENT_TEXT


def test_describe():
    p = Path(("items", 3, "label"))
    assert describe(ChangeKind.ADDED, p, after=1) == 'Property "label" was added'
    assert describe(ChangeKind.REMOVED, p, before=1) == 'Property "label" was removed'
    assert describe(ChangeKind.ADDED, Path(("items", 3))) == 'Property "items" was added'
    assert describe(ChangeKind.CHANGED, p, 1, "1") == 'Type changed from number to string'
    assert describe(ChangeKind.CHANGED, p, False, True) == 'Value changed from false to true'
    assert describe(ChangeKind.CHANGED, p, [1], [2]) == '"label" was modified'


def test_describe_caps_values():
    long = "y" * 50
    text = describe(ChangeKind.CHANGED, Path(("v",)), long, "z")
    assert text == 'Value changed from {}... to "z"'.format(('"' + long)[:30])


def test_describe_unknown_kind():
    with pytest.raises(ValueError):
        describe("moved", Path())
