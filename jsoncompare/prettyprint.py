# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import datetime
import os
import pprint
import sys

import colorama
from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer

from .diff_format import ChangeKind
from .formatting import DISPLAY_CAP, render
from .report import NO_DIFFERENCES, NO_MATCHES, kind_label, summarize


# Indentation offset in pretty-print
IND = "  "

DIFF_ENTRY_END = '\n'

ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'CHANGE',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        CHANGE = '{color}~  '.format(color=colorama.Fore.YELLOW),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        CHANGE = '~  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(
            self,
            out=sys.stdout,
            use_color=True,
            display_cap=DISPLAY_CAP,
            ):
        self.out = out
        self.use_color = use_color
        self.display_cap = display_cap

    def marker(self, kind):
        "Line prefix for the header of a change of the given kind."
        if kind == ChangeKind.ADDED:
            return self.ADD
        if kind == ChangeKind.REMOVED:
            return self.REMOVE
        return self.CHANGE

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def CHANGE(self):
        return col_const[self.use_color].CHANGE

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


def colorize_json(text):
    return highlight(text, JsonLexer(), Terminal256Formatter())


def file_timestamp(filename):
    "Return modification time for filename as a string."
    if os.path.exists(filename):
        t = os.path.getmtime(filename)
        dt = datetime.datetime.fromtimestamp(t)
        return dt.isoformat(str(" "))
    else:
        return "(no timestamp)"


def pretty_print_key(k, prefix, config):
    config.out.write("%s%s:\n" % (prefix, k))


def pretty_print_key_value(k, v, prefix, config):
    config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict):
        pretty_print_key(k, prefix, config)
        pretty_print_dict(v, (), prefix+IND, config)
    else:
        vstr = v if isinstance(v, str) else pprint.pformat(v)
        if "\n" in vstr:
            # Multiline strings
            pretty_print_key(k, prefix, config)
            for line in vstr.splitlines(False):
                config.out.write("%s%s\n" % (prefix+IND, line))
        else:
            # Singleline strings
            pretty_print_key_value(k, vstr, prefix, config)


def pretty_print_multiline(text, prefix="", config=DefaultConfig):
    assert isinstance(text, str), 'expected string argument'

    # Preprend prefix to lines, letting lines keep their own newlines
    lines = text.splitlines(True)
    for line in lines:
        config.out.write(prefix + line)

    # If the final line doesn't have a newline,
    # make sure we still start a new line
    if not text.endswith("\n"):
        config.out.write("\n")


def pretty_print_dict(d, exclude_keys=(), prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          long
          value

    """
    for k in sorted(set(d) - set(exclude_keys)):
        v = d[k]
        pretty_print_item(k, v, prefix, config)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a value rendered as JSON text with all lines prefixed.

    Long values are cut at config.display_cap, with a note giving
    the full length.
    """
    rendered = render(value, config.display_cap)
    text = rendered.display
    if config.use_color and not rendered.is_truncated and isinstance(value, (list, dict)):
        text = colorize_json(text)
    pretty_print_multiline(text, prefix, config)
    if rendered.is_truncated:
        config.out.write("%s(%d characters, truncated)%s\n" % (
            config.KEEP, len(rendered.full_value), config.RESET))


def pretty_print_change(change, config=DefaultConfig):
    "Pretty-print a single change record."
    config.out.write("%s%s %s: %s%s\n" % (
        config.marker(change.kind), kind_label(change.kind).lower(),
        change.path, change.description, config.RESET))
    if change.has_before:
        pretty_print_value(change.before, config.REMOVE, config)
        config.out.write(config.RESET)
    if change.has_after:
        pretty_print_value(change.after, config.ADD, config)
        config.out.write(config.RESET)
    config.out.write(DIFF_ENTRY_END)


def pretty_print_summary(counts, config=DefaultConfig):
    total = sum(counts.values())
    config.out.write("%s%d %s: %s%s\n\n" % (
        config.INFO, total, "change" if total == 1 else "changes",
        ", ".join("%d %s" % (counts[kind], kind) for kind in ChangeKind.ALL),
        config.RESET))


json_diff_header = """\
jsondiff {afn} {bfn}
--- {afn}{atime}
+++ {bfn}{btime}
"""


def pretty_print_changes(afn, bfn, changes, config=DefaultConfig, shown=None):
    """Pretty-print the changes between two json files

    Parameters
    ----------

    afn: str
        Name of a, the base file
    bfn: str
        Name of b, the updated file
    changes: list of ChangeRecord
        All changes found between a and b
    config: PrettyPrintConfig
        Config object determining how and where things get printed
    shown: list of ChangeRecord
        The changes to print, after filtering and sorting.
        Defaults to all changes.
    """
    if shown is None:
        shown = changes
    atime = "  " + file_timestamp(afn)
    btime = "  " + file_timestamp(bfn)
    config.out.write(json_diff_header.format(
        afn=afn, bfn=bfn, atime=atime, btime=btime))
    pretty_print_summary(summarize(changes), config)
    if not shown:
        config.out.write("%s%s\n" % (
            config.KEEP, NO_DIFFERENCES if not changes else NO_MATCHES))
        return
    for change in shown:
        pretty_print_change(change, config)
