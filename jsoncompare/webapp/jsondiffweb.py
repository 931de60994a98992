#!/usr/bin/env python
# -*- coding:utf-8 -*-

import sys

from .jsondiffserver import main_server as run_server
from .webutil import browse as browse_util
from ..args import (
    ConfigBackedParser,
    add_generic_args, add_web_args, add_diff_args, add_report_args,
    args_for_server, args_for_browse, diff_config_from_args)
from ..jsondiffapp import _build_diff
from ..exceptions import LoadError, DiffError
from ..utils import source_name


def build_arg_parser():
    """
    Creates an argument parser for the web diff, that also lets the
    user specify a port and displays a help message.
    """
    description = 'Compare two JSON documents and show the report in a browser.'
    parser = ConfigBackedParser(
        description=description,
        prog='jsondiff-web',
        add_help=True
        )
    add_generic_args(parser)
    add_web_args(parser, 0)
    add_diff_args(parser)
    add_report_args(parser)
    parser.add_argument(
        "base", help="the base JSON filename or URL.",
        nargs='?', default=None,
    )
    parser.add_argument(
        "remote", help="the remote modified JSON filename or URL.",
        nargs='?', default=None,
    )
    return parser


def main_diff(opts):
    initial_report = None
    if opts.base is not None or opts.remote is not None:
        if opts.base is None or opts.remote is None:
            print('Expecting either two documents to compare or none.', file=sys.stderr)
            return 1
        # Read and diff up front so bad input is reported on the terminal
        try:
            _, _, changes = _build_diff(
                opts.base, opts.remote, config=diff_config_from_args(opts))
        except LoadError as e:
            print(e, file=sys.stderr)
            return 1
        except DiffError as e:
            print(e, file=sys.stderr)
            return 2
        initial_report = (source_name(opts.base), source_name(opts.remote), changes)

    return run_server(
        initial_report=initial_report,
        on_port=lambda port: browse_util(
            port=port,
            **args_for_browse(opts)),
        **args_for_server(opts))


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    opts = build_arg_parser().parse_args(args)
    return main_diff(opts)


if __name__ == "__main__":
    sys.exit(main())
