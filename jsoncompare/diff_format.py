# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple

from .log import ChangeFormatError


# Sentinel for a value that is absent on one side (never equal to None)
Missing = object()


class ChangeKind:
    "Collection of valid values for the kind field in change records."
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"

    ALL = (ADDED, REMOVED, CHANGED)


class UnkeyedIndex(int):
    """Synthetic index of an array item that has no identity key.

    Counts positions among the unkeyed items of a keyed array only,
    so it must never be confused with a real array index.
    """

    def __repr__(self):
        return 'UnkeyedIndex(%d)' % self

    def __str__(self):
        return 'unkeyed:%d' % self


class Path(tuple):
    """Location of a value inside a JSON tree.

    Segments are field names (str), array indices (int) or
    synthetic indices of unkeyed items (UnkeyedIndex).
    """

    def __new__(cls, segments=()):
        return super(Path, cls).__new__(cls, segments)

    def child(self, segment):
        return Path(self + (segment,))

    def unkeyed(self, i):
        return self.child(UnkeyedIndex(i))

    @property
    def name(self):
        "The last field name, skipping trailing array indices."
        for segment in reversed(self):
            if isinstance(segment, str):
                return segment
        return ''

    def __str__(self):
        if not self:
            return 'root'
        text = ''
        for segment in self:
            if isinstance(segment, int):
                text += '[%s]' % (segment,)
            elif text:
                text += '.' + segment
            else:
                text = segment
        return text

    def __repr__(self):
        return 'Path(%r)' % (tuple(self),)


_ChangeRecord = namedtuple(
    '_ChangeRecord', ['kind', 'path', 'before', 'after', 'description'])


class ChangeRecord(_ChangeRecord):
    """A single difference between two JSON values.

    `before` is Missing for added values and `after` is Missing
    for removed values.
    """
    __slots__ = ()

    @property
    def has_before(self):
        return self.before is not Missing

    @property
    def has_after(self):
        return self.after is not Missing


def change_added(path, value, description):
    "Create a change record for a value that only exists in b."
    return ChangeRecord(ChangeKind.ADDED, path, Missing, value, description)


def change_removed(path, value, description):
    "Create a change record for a value that only exists in a."
    return ChangeRecord(ChangeKind.REMOVED, path, value, Missing, description)


def change_changed(path, before, after, description):
    "Create a change record for a value that differs between a and b."
    return ChangeRecord(ChangeKind.CHANGED, path, before, after, description)


def validate_changes(changes):
    """Check that a sequence of change records is well formed.

    Raises a ChangeFormatError if not well formed.
    """
    if not isinstance(changes, (list, tuple)):
        raise ChangeFormatError("Changes must be a list.")
    for c in changes:
        validate_change(c)


def validate_change(c):
    """Check that c is a well formed change record.

    Raises a ChangeFormatError if not well formed.
    """
    if not isinstance(c, ChangeRecord):
        raise ChangeFormatError("Change '{}' is not a change record.".format(c))
    if not isinstance(c.path, Path):
        raise ChangeFormatError("Invalid path '{}' of type '{}'.".format(
            c.path, type(c.path)))
    if not isinstance(c.description, str):
        raise ChangeFormatError("Change at {} has no description.".format(c.path))

    if c.kind == ChangeKind.ADDED:
        expected = (False, True)
    elif c.kind == ChangeKind.REMOVED:
        expected = (True, False)
    elif c.kind == ChangeKind.CHANGED:
        expected = (True, True)
    else:
        raise ChangeFormatError("Unknown change kind '{}'.".format(c.kind))

    if (c.has_before, c.has_after) != expected:
        raise ChangeFormatError(
            "Change of kind '{}' at {} has before={} and after={}.".format(
                c.kind, c.path,
                'present' if c.has_before else 'absent',
                'present' if c.has_after else 'absent'))


def change_to_json(c):
    "Convert a change record to a json-serializable dict."
    d = {
        'kind': c.kind,
        'path': str(c.path),
        'segments': [
            str(s) if isinstance(s, UnkeyedIndex) else s for s in c.path],
        'description': c.description,
    }
    if c.has_before:
        d['before'] = c.before
    if c.has_after:
        d['after'] = c.after
    return d


def changes_to_json(changes):
    return [change_to_json(c) for c in changes]
