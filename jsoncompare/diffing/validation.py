# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import math

from ..diff_format import Path
from ..exceptions import MalformedInputError, DepthExceededError, SizeExceededError
from .config import DiffConfig


# Marks the point where the walk leaves a container again
_Leave = object()


def validate_value(value, side, config=None):
    """Check that value is a tree a JSON parser could have produced.

    Walks the value with an explicit stack, so arbitrarily deep input
    is reported as DepthExceededError rather than a RecursionError.

    Raises MalformedInputError for cycles, non-JSON types, non-string
    object keys and non-finite numbers, DepthExceededError when nested
    deeper than config.max_depth and SizeExceededError when holding more
    than config.max_nodes values.

    Returns the number of values in the tree.
    """
    if config is None:
        config = DiffConfig()
    max_depth = config.max_depth
    max_nodes = config.max_nodes

    nodes = 0
    # Containers on the current path, by identity
    ancestors = set()
    stack = [(value, Path())]
    while stack:
        v, path = stack.pop()
        if v is _Leave:
            ancestors.discard(path)
            continue

        nodes += 1
        if max_nodes is not None and nodes > max_nodes:
            raise SizeExceededError(side, max_nodes)
        if max_depth is not None and len(path) > max_depth:
            raise DepthExceededError(side, path, max_depth)

        if isinstance(v, (list, dict)):
            if id(v) in ancestors:
                raise MalformedInputError(side, path, 'value contains itself')
            ancestors.add(id(v))
            stack.append((_Leave, id(v)))
            if isinstance(v, list):
                for i in reversed(range(len(v))):
                    stack.append((v[i], path.child(i)))
            else:
                for key in reversed(list(v)):
                    if not isinstance(key, str):
                        raise MalformedInputError(
                            side, path, 'object key %r is not a string' % (key,))
                    stack.append((v[key], path.child(key)))
        elif isinstance(v, float):
            if not math.isfinite(v):
                raise MalformedInputError(
                    side, path, 'number %r cannot be represented in JSON' % (v,))
        elif not (v is None or isinstance(v, (bool, int, str))):
            raise MalformedInputError(
                side, path, 'unsupported type %s' % type(v).__name__)
    return nodes
