# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..diff_format import ChangeKind, change_added, change_removed
from ..formatting import describe


def diff_sequences(a, b, path, diffit, unkeyed=False):
    """Compare two lists item by item, position against position.

    Items past the end of the shorter list are reported as added or
    removed, overlapping items are compared with `diffit(x, y, path)`.

    With `unkeyed` the items are the leftovers of a keyed comparison,
    located by synthetic unkeyed indices.
    """
    na = len(a)
    nb = len(b)
    for i in range(max(na, nb)):
        subpath = path.unkeyed(i) if unkeyed else path.child(i)
        if i >= na:
            if unkeyed:
                description = 'Unkeyed array item was added'
            else:
                description = describe(ChangeKind.ADDED, subpath, after=b[i])
            yield change_added(subpath, b[i], description)
        elif i >= nb:
            if unkeyed:
                description = 'Unkeyed array item was removed'
            else:
                description = describe(ChangeKind.REMOVED, subpath, before=a[i])
            yield change_removed(subpath, a[i], description)
        else:
            yield from diffit(a[i], b[i], subpath)
