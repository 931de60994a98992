# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import time

from ..diff_format import Path, ChangeKind, change_added, change_removed, change_changed
from ..exceptions import DiffTimeoutError
from ..formatting import classify, describe
from ..log import debug
from .config import DiffConfig
from .keyed import diff_keyed_lists, has_identities
from .sequences import diff_sequences
from .validation import validate_value

__all__ = ["diff", "iter_diff"]


def diff(a, b, path=None, config=None):
    """Compute the changes between two json-like values.

    Returns the complete list of change records in the order they are
    found by a depth-first walk. Both values are validated first, so an
    error is raised before any comparison starts.
    """
    changes = list(iter_diff(a, b, path=path, config=config))
    debug('Found %d changes', len(changes))
    return changes


def iter_diff(a, b, path=None, config=None):
    """Yield the changes between two json-like values as they are found.

    Validation of both values happens before the first change is yielded.
    """
    if config is None:
        config = DiffConfig()
    if path is None:
        path = Path()
    elif isinstance(path, str):
        path = Path((path,))
    elif not isinstance(path, Path):
        path = Path(path)

    size_a = validate_value(a, 'a', config)
    size_b = validate_value(b, 'b', config)
    debug('Comparing values with %d and %d nodes', size_a, size_b)

    yield from diff_values(a, b, path, config, config.deadline())


def diff_values(a, b, path, config, deadline=None):
    "Compare two values at the same position, dispatching on their types."
    if deadline is not None and time.monotonic() > deadline:
        raise DiffTimeoutError(path, config.timeout)

    type_a = classify(a)
    type_b = classify(b)

    def diffit(x, y, subpath):
        return diff_values(x, y, subpath, config, deadline)

    if type_a != type_b:
        # No partial diff of values with different shapes
        yield change_changed(path, a, b, describe(ChangeKind.CHANGED, path, a, b))
    elif type_a == 'array':
        fields = config.identity_fields
        if has_identities(a, fields) and has_identities(b, fields):
            yield from diff_keyed_lists(a, b, path, config, diffit)
        else:
            yield from diff_sequences(a, b, path, diffit)
    elif type_a == 'object':
        yield from diff_dicts(a, b, path, diffit)
    elif a != b:
        yield change_changed(path, a, b, describe(ChangeKind.CHANGED, path, a, b))


def diff_dicts(a, b, path, diffit):
    """Compare two dicts key by key.

    Keys are visited in the order they first appear: the keys of a,
    then the keys only found in b.
    """
    for key in a:
        subpath = path.child(key)
        if key in b:
            yield from diffit(a[key], b[key], subpath)
        else:
            yield change_removed(
                subpath, a[key], describe(ChangeKind.REMOVED, subpath, before=a[key]))

    for key in b:
        if key not in a:
            subpath = path.child(key)
            yield change_added(
                subpath, b[key], describe(ChangeKind.ADDED, subpath, after=b[key]))
