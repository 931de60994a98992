# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import sys

from .args import (
    add_generic_args, add_diff_args, add_filter_args, add_report_args,
    add_prettyprint_args, ConfigBackedParser,
    diff_config_from_args, prettyprint_config_from_args, report_view_from_args,
    )
from .diff_format import changes_to_json
from .diffing import diff
from .exceptions import LoadError, DiffError
from .prettyprint import pretty_print_changes
from .report import export_csv, summarize
from .utils import read_json, setup_std_streams, source_name


_description = "Compute the difference between two JSON documents."


def _build_diff(base, remote, config=None, on_null='empty'):
    """Read two sources and compute their changes.

    Raises LoadError naming the source that failed, or DiffError
    when the documents cannot be compared.
    """
    a = read_json(base, on_null=on_null)
    b = read_json(remote, on_null=on_null)
    return a, b, diff(a, b, config=config)


def main_diff(args):
    """Main handler of diff CLI"""
    view = report_view_from_args(args)
    base_name = source_name(args.base)
    remote_name = source_name(args.remote)

    try:
        _, _, changes = _build_diff(
            args.base, args.remote, config=diff_config_from_args(args))
    except LoadError as e:
        print(e, file=sys.stderr)
        return 1
    except DiffError as e:
        print(e, file=sys.stderr)
        return 2

    shown = view.apply(changes)

    if args.out:
        data = {
            'base': base_name,
            'remote': remote_name,
            'summary': summarize(changes),
            'changes': changes_to_json(shown),
        }
        with io.open(args.out, "w", encoding="utf8") as df:
            json.dump(data, df, indent=2, separators=(",", ": "), ensure_ascii=False)
    if args.csv:
        with io.open(args.csv, "w", encoding="utf8", newline="") as cf:
            export_csv(shown, base_name, remote_name, out=cf, cap=args.export_cap)

    if not (args.out or args.csv):
        # This printer is to keep the unit tests passing,
        # some tests capture output with capsys which doesn't
        # pick up on sys.stdout.write()
        class Printer:
            def write(self, text):
                print(text, end="")
        config = prettyprint_config_from_args(args, out=Printer())
        pretty_print_changes(base_name, remote_name, changes, config, shown=shown)

    return 0


def _build_arg_parser(prog='jsondiff'):
    """Creates an argument parser for the jsondiff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_filter_args(parser)
    add_report_args(parser)
    add_prettyprint_args(parser)

    parser.add_argument(
        "base", help="the base JSON filename or URL.",
    )
    parser.add_argument(
        "remote", help="the remote modified JSON filename or URL.",
    )

    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the changes are written to this file as JSON. "
             "Otherwise they are printed to the terminal.")
    parser.add_argument(
        '--csv',
        default=None,
        help="if supplied, the reported changes are exported to this CSV file.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
