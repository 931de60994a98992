# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Filtering, sorting, summary and CSV export of change records.

Presenters never modify the records themselves, they only select
and reorder them.
"""

from collections import Counter
import csv
import io

from .diff_format import ChangeKind
from .formatting import DISPLAY_CAP, EXPORT_CAP, render, render_capped


SORT_COLUMNS = ('type', 'path', 'description')

NO_DIFFERENCES = 'No differences found - the files are identical!'
NO_MATCHES = 'No results match your filters'


def kind_label(kind):
    "Capitalized label of a change kind, e.g. 'Added'."
    return kind[:1].upper() + kind[1:]


def summarize(changes):
    "Count the changes of each kind."
    counts = Counter(c.kind for c in changes)
    return {kind: counts.get(kind, 0) for kind in ChangeKind.ALL}


def matches(change, kinds=None, search='', path_filter=''):
    if kinds is not None and change.kind not in kinds:
        return False
    path = str(change.path)
    if search:
        row_text = '{} {}'.format(path, change.description).lower()
        if search.lower() not in row_text:
            return False
    if path_filter and path_filter.lower() not in path.lower():
        return False
    return True


def filter_changes(changes, kinds=None, search='', path_filter=''):
    """Select the changes shown in a report.

    Parameters:
        kinds: collection of change kinds to keep, None keeps all
        search: case-insensitive text matched against path and description
        path_filter: case-insensitive text matched against the path only
    """
    return [c for c in changes if matches(c, kinds, search, path_filter)]


def _sort_text(change, column):
    if column == 'type':
        text = change.kind
    elif column == 'path':
        text = str(change.path)
    elif column == 'description':
        text = change.description
    else:
        raise ValueError('Cannot sort on column %r, valid columns are %r' % (
            column, SORT_COLUMNS))
    return text.casefold(), text


def sort_changes(changes, column, ascending=True):
    "Return the changes sorted on a report column (stable)."
    return sorted(changes, key=lambda c: _sort_text(c, column), reverse=not ascending)


class ReportView:
    """What a report currently shows: visible kinds, search and sort order.

    Holds the state of one report only, so several reports can be
    browsed side by side.
    """

    def __init__(self, kinds=None, search='', path_filter='', sort=None, ascending=True):
        self.kinds = set(ChangeKind.ALL if kinds is None else kinds)
        self.search = search or ''
        self.path_filter = path_filter or ''
        if sort is not None and sort not in SORT_COLUMNS:
            raise ValueError('Cannot sort on column %r, valid columns are %r' % (
                sort, SORT_COLUMNS))
        self.sort = sort
        self.ascending = ascending
        # Last direction chosen per column
        self._directions = {}
        if sort is not None:
            self._directions[sort] = ascending

    def next_direction(self, column):
        """Direction the next sort on column would use (True for ascending).

        The first sort on a column is ascending, later ones flip it.
        """
        if column not in SORT_COLUMNS:
            raise ValueError('Cannot sort on column %r, valid columns are %r' % (
                column, SORT_COLUMNS))
        return not self._directions.get(column, False)

    def toggle_sort(self, column):
        "Sort on column in its next direction. Returns the new direction."
        ascending = self.next_direction(column)
        self._directions[column] = ascending
        self.sort = column
        self.ascending = ascending
        return ascending

    def apply(self, changes):
        "Return the visible changes in display order."
        visible = filter_changes(changes, self.kinds, self.search, self.path_filter)
        if self.sort is not None:
            visible = sort_changes(visible, self.sort, self.ascending)
        return visible

    def empty_message(self, changes):
        "Message shown instead of an empty table."
        if not changes:
            return NO_DIFFERENCES
        return NO_MATCHES


def export_header(name_a, name_b):
    return ['Type', 'Path', 'Description',
            'Value in {}'.format(name_a), 'Value in {}'.format(name_b)]


def export_rows(changes, cap=EXPORT_CAP):
    for c in changes:
        yield [kind_label(c.kind), str(c.path), c.description,
               render_capped(c.before, cap), render_capped(c.after, cap)]


def export_csv(changes, name_a='A', name_b='B', out=None, cap=EXPORT_CAP):
    """Write changes as CSV, every field quoted and quotes doubled.

    Writes to the file-like `out`, or returns the text if `out` is None.
    """
    target = io.StringIO() if out is None else out
    writer = csv.writer(target, quoting=csv.QUOTE_ALL, doublequote=True,
                        lineterminator='\n')
    writer.writerow(export_header(name_a, name_b))
    writer.writerows(export_rows(changes, cap))
    if out is None:
        return target.getvalue()


def table_rows(changes, cap=DISPLAY_CAP):
    """Rows of a report table, with values rendered for display.

    Each value keeps its full text next to the capped display text,
    for presenters offering to expand truncated values.
    """
    return [
        dict(
            kind=c.kind,
            label=kind_label(c.kind),
            path=str(c.path),
            description=c.description,
            before=render(c.before, cap),
            after=render(c.after, cap),
        )
        for c in changes
    ]
