# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import pytest

from jsoncompare import diff, DiffConfig
from jsoncompare.diff_format import Path
from jsoncompare.diffing.config import MAX_SUPPORTED_DEPTH
from jsoncompare.diffing.validation import validate_value
from jsoncompare.exceptions import (
    DiffError, MalformedInputError, DepthExceededError, SizeExceededError,
    DepthOrSizeExceededError)


def nested(depth, leaf=0):
    value = leaf
    for _ in range(depth):
        value = {"x": value}
    return value


def test_node_count():
    assert validate_value(1, 'a') == 1
    assert validate_value([], 'a') == 1
    assert validate_value({"a": [1, 2], "b": None}, 'a') == 5


def test_cycle_is_malformed():
    a = [1]
    a.append(a)
    with pytest.raises(MalformedInputError) as exc:
        diff(a, [1, []])
    assert exc.value.side == 'a'
    assert exc.value.path == Path((1,))


def test_shared_values_are_not_cycles():
    shared = {"k": [1, 2]}
    value = {"a": shared, "b": shared, "c": [shared, shared]}
    assert validate_value(value, 'b') == 1 + 4 * 4 + 1


@pytest.mark.parametrize('value', [
    float('nan'),
    float('inf'),
    [float('-inf')],
    {"a": {"b": float('nan')}},
])
def test_non_finite_numbers_are_malformed(value):
    with pytest.raises(MalformedInputError):
        validate_value(value, 'a')


@pytest.mark.parametrize('value', [
    {1: "a"},
    {"a": {None: 1}},
    (1, 2),
    {1, 2},
    b"bytes",
    object(),
])
def test_non_json_values_are_malformed(value):
    with pytest.raises(MalformedInputError):
        diff({}, value)


def test_error_names_side():
    with pytest.raises(MalformedInputError) as exc:
        diff({"a": 1}, {"a": {"b": float('nan')}})
    assert exc.value.side == 'b'
    assert str(exc.value.path) == 'a.b'
    assert 'side b' in str(exc.value)


def test_depth_limit():
    config = DiffConfig(max_depth=10)
    assert diff(nested(10), nested(10, 1), config=config)
    with pytest.raises(DepthExceededError) as exc:
        diff(nested(11), nested(1), config=config)
    assert exc.value.side == 'a'
    assert len(exc.value.path) == 11
    assert isinstance(exc.value, DepthOrSizeExceededError)
    assert isinstance(exc.value, DiffError)


def test_very_deep_input_fails_cleanly():
    # Deeper than the interpreter would allow for recursion
    with pytest.raises(DepthExceededError):
        diff(nested(5000), {})


def test_size_limit():
    config = DiffConfig(max_nodes=4)
    assert diff([1, 2, 3], [1, 2, 4], config=config)
    with pytest.raises(SizeExceededError) as exc:
        diff([1, 2, 3], [1, 2, 3, 4], config=config)
    assert exc.value.side == 'b'
    assert exc.value.limit == 4


def test_node_limit_can_be_disabled():
    config = DiffConfig(max_nodes=None)
    assert validate_value([0] * 2000, 'a', config) == 2001


def test_depth_limit_is_capped():
    assert DiffConfig(max_depth=None).max_depth == MAX_SUPPORTED_DEPTH
    config = DiffConfig(max_depth=5000)
    assert config.max_depth == MAX_SUPPORTED_DEPTH
    assert diff(nested(MAX_SUPPORTED_DEPTH), nested(MAX_SUPPORTED_DEPTH, 1), config=config)
    with pytest.raises(DepthExceededError) as exc:
        diff(nested(1000), nested(1000, 1), config=config)
    assert exc.value.limit == MAX_SUPPORTED_DEPTH
