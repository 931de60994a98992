# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Classification and text rendering of JSON values.

The same rendering is used for change descriptions, report table
cells and CSV export, only with different length caps.
"""

from collections import namedtuple
import json
import math

from .diff_format import ChangeKind, Missing


# Placeholder for a value absent on one side
ABSENT_TEXT = '—'

ELLIPSIS = '...'

# Length caps for the different renderings
DESCRIPTION_CAP = 30
DISPLAY_CAP = 80
EXPORT_CAP = 500

SCALAR_TYPES = ('string', 'number', 'boolean')


def classify(value):
    """Return the JSON type name of value.

    Absent values classify as 'undefined', which equals no other type.
    """
    if value is Missing:
        return 'undefined'
    if value is None:
        return 'null'
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    raise TypeError('Not a JSON value: %r' % (value,))


def is_truthy(value):
    "Truthiness the way a browser would judge a parsed JSON value."
    if value is None or value is Missing or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ''
    # Containers are truthy even when empty
    return True


def render_value(value):
    "Render the full text of a value, without any length cap."
    if value is Missing:
        return ABSENT_TEXT
    if value is None:
        return 'null'
    if isinstance(value, (list, dict)):
        if not value:
            return '[]' if isinstance(value, list) else '{}'
        return json.dumps(value, indent=2, ensure_ascii=False)
    return json.dumps(value, ensure_ascii=False)


def truncate(text, cap):
    if cap is not None and len(text) > cap:
        return text[:cap] + ELLIPSIS
    return text


RenderedValue = namedtuple('RenderedValue', ['display', 'is_truncated', 'full_value'])


def render(value, cap=DISPLAY_CAP):
    """Render a value for display, capping the length at `cap`.

    The full text is always kept in `full_value`, so a presenter
    can offer to expand a truncated display.
    """
    full = render_value(value)
    if value is Missing:
        return RenderedValue(full, False, full)
    is_truncated = cap is not None and len(full) > cap
    return RenderedValue(truncate(full, cap), is_truncated, full)


def render_capped(value, cap=EXPORT_CAP):
    "Shorthand for the capped display text of a value."
    return render(value, cap).display


def describe(kind, path, before=Missing, after=Missing):
    "Build the human-readable sentence for a change."
    name = path.name
    if kind == ChangeKind.ADDED:
        return 'Property "{}" was added'.format(name)
    if kind == ChangeKind.REMOVED:
        return 'Property "{}" was removed'.format(name)
    if kind == ChangeKind.CHANGED:
        type_a = classify(before)
        type_b = classify(after)
        if type_a != type_b:
            return 'Type changed from {} to {}'.format(type_a, type_b)
        if type_a in SCALAR_TYPES:
            return 'Value changed from {} to {}'.format(
                render_capped(before, DESCRIPTION_CAP),
                render_capped(after, DESCRIPTION_CAP))
        return '"{}" was modified'.format(name)
    raise ValueError('Unknown change kind %r' % (kind,))
