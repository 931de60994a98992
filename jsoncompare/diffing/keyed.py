# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Alignment of arrays whose items carry an identity key.

Items of two arrays are matched by the value of an identity field
(by default `id`, falling back to `dataRef`) instead of by position,
so that reordering or inserting identified records does not show up
as a cascade of positional changes.

An identity field only counts when its value is truthy: an item with
`"id": 0`, `"id": ""`, `"id": false` or `"id": null` has no identity
and is compared among the unkeyed items.
"""

from collections import namedtuple
import json

from ..diff_format import Missing, change_added, change_removed
from ..formatting import classify, is_truthy
from ..log import debug, warning
from .sequences import diff_sequences


KeyedItem = namedtuple('KeyedItem', ['field', 'key', 'value', 'index'])


def identity_of(item, fields):
    """Return (field, key) for the first truthy identity field of item.

    Returns None for items that are not objects or have no usable identity.
    """
    if not isinstance(item, dict):
        return None
    for field in fields:
        key = item.get(field, Missing)
        if is_truthy(key):
            return field, key
    return None


def has_identities(items, fields):
    "Whether at least one item of a list carries an identity."
    return any(identity_of(item, fields) is not None for item in items)


def _lookup_key(key):
    # Numbers match by value and strings by text, but the
    # number 1, the string "1" and true stay distinct.
    # Container identities only ever match themselves.
    kind = classify(key)
    if kind in ('array', 'object'):
        return kind, id(key)
    return kind, key


def key_text(key):
    "Text of an identity key as used in descriptions."
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return 'true' if key else 'false'
    if isinstance(key, float) and key.is_integer():
        return '%d' % key
    if isinstance(key, (list, dict)):
        return json.dumps(key, ensure_ascii=False)
    return str(key)


def index_items(items, fields, path):
    """Split items into a mapping of keyed items and a list of unkeyed ones.

    The mapping iterates in order of first appearance. If a key appears
    more than once, the last item with that key wins.
    """
    keyed = {}
    unkeyed = []
    for i, item in enumerate(items):
        ident = identity_of(item, fields)
        if ident is None:
            unkeyed.append(item)
            continue
        field, key = ident
        lookup = _lookup_key(key)
        if lookup in keyed:
            warning('Duplicate identity %s="%s" at %s, only the item at index %d is compared',
                    field, key_text(key), path.child(i), i)
        keyed[lookup] = KeyedItem(field, key, item, i)
    return keyed, unkeyed


def diff_keyed_lists(a, b, path, config, diffit):
    """Compare two lists by matching their items on identity keys.

    Produces, in this order: removals of keys only in a, additions of
    keys only in b, comparisons of items present on both sides (in the
    order of a), and finally a positional comparison of the unkeyed items.

    Matched items are located by their index in a, removed items by their
    index in a and added items by their index in b.
    """
    keyed_a, unkeyed_a = index_items(a, config.identity_fields, path)
    keyed_b, unkeyed_b = index_items(b, config.identity_fields, path)
    debug('Aligning %s by key: %d/%d keyed, %d/%d unkeyed items',
          path, len(keyed_a), len(keyed_b), len(unkeyed_a), len(unkeyed_b))

    for lookup, item in keyed_a.items():
        if lookup not in keyed_b:
            yield change_removed(
                path.child(item.index), item.value,
                'Array item with {}="{}" was removed'.format(item.field, key_text(item.key)))

    for lookup, item in keyed_b.items():
        if lookup not in keyed_a:
            yield change_added(
                path.child(item.index), item.value,
                'Array item with {}="{}" was added'.format(item.field, key_text(item.key)))

    for lookup, item in keyed_a.items():
        other = keyed_b.get(lookup)
        if other is not None:
            yield from diffit(item.value, other.value, path.child(item.index))

    yield from diff_sequences(unkeyed_a, unkeyed_b, path, diffit, unkeyed=True)
