# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import os
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .diff_format import ChangeKind
from .diffing.config import DiffConfig, MAX_SUPPORTED_DEPTH
from .log import init_logging, set_jsoncompare_log_level
from .report import SORT_COLUMNS, ReportView


class ConfigBackedParser(argparse.ArgumentParser):

    def parse_known_args(self, args=None, namespace=None):
        entrypoint = self.prog.split(' ')[0]
        try:
            defs = get_defaults_for_argparse(entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_jsoncompare_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_jsoncompare_log_level(level, True)


def modify_config_for_print(config):
    output = {}
    for k, v in config.items():
        if isinstance(v, dict):
            output[k] = modify_config_for_print(v)
            if not output[k]:
                output[k] = '{}'
        else:
            output[k] = json.dumps(v)
    return output


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        from .prettyprint import pretty_print_dict, PrettyPrintConfig

        header = entrypoint_configurables[parser.prog].__name__
        config = build_config(parser.prog, True)
        pretty_print_dict(
            {
                header: modify_config_for_print(config),
            },
            config=PrettyPrintConfig(out=sys.stderr)
        )
        sys.exit(1)


class KindAction(argparse.Action):
    """Adds the supplied positive options and negative/ignore version as well"""

    def __init__(self, option_strings, dest, default=None, required=False, help=None):
        opts = []
        for opt in option_strings:
            if len(opt) == 2 and opt[0] == '-':
                if not opt[1].islower():
                    raise ValueError('Single character flags should be lower-case for KindAction')
                opts.append(opt)
                opts.append(opt.upper())
            elif opt[:2] == '--':
                opts.append(opt)
                opts.append('--ignore-' + opt[2:])
            else:
                raise ValueError('Could not turn option "%s" into a KindAction option.' % opt)

        # Put positives first, negatives last:
        opts = opts[0::2] + opts[1::2]

        super(KindAction, self).__init__(
            opts, dest, nargs=0, const=None,
            default=default, required=required,
            help=help)

    def __call__(self, parser, ns, values, option_string=None):
        if len(option_string) == 2:
            setattr(ns, self.dest, option_string[1].islower())
        else:
            setattr(ns, self.dest, option_string[2 : 2 + len('ignore')] != 'ignore')


def process_exclusive_kinds(ns, arg_names=ChangeKind.ALL, default=True):
    """Parse a set of show/ignore flags.

    It checks that all specified options are either all positive or all negative.
    It then updates the namespace so every option is either True or False.

    Returns whether any values were specified or not.
    """
    # `toggle` tracks whether:
    #  - True: One or more positive options were defined
    #  - False: One or more negative options were defined
    #  - None: No options were defined
    toggle = getattr(ns, arg_names[0])
    for name in arg_names[1:]:
        opt = getattr(ns, name)
        if toggle is None:
            toggle = opt
        elif toggle != opt and opt is not None:
            message = 'Arguments must either all be negative or all positive: %r' % (arg_names,)
            raise argparse.ArgumentError(None, message)

    if toggle is not None:
        # One or more options were defined, set default to the opposite
        default = not toggle

    # Set all unset options to the default
    for name in arg_names:
        if getattr(ns, name) is None:
            setattr(ns, name, default)
    return toggle is not None


def identity_fields_type(value):
    fields = [f.strip() for f in value.split(',') if f.strip()]
    if not fields:
        raise argparse.ArgumentTypeError('expected a comma separated list of field names')
    return fields


def add_generic_args(parser):
    """Adds a set of arguments common to all jsoncompare commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_web_args(parser, default_port=8888):
    """Adds a set of arguments common to all commands that show a web gui.
    """
    port_help = (
        "specify the port you want the server to run on. Default is %d%s." % (
            default_port, " (random)" if default_port == 0 else ""
        ))
    parser.add_argument(
        '-p', '--port',
        default=default_port,
        type=int,
        help=port_help)
    parser.add_argument(
        '-b', '--browser',
        default=None,
        type=str,
        help="specify the browser to use, to override the system default.")
    parser.add_argument(
        '--ip',
        default='127.0.0.1',
        help="specify the interface to listen to for the web server. "
        "NOTE: Setting this to anything other than 127.0.0.1/localhost "
        "might comprimise the security of your computer. Use with care!")
    cwd = os.path.abspath(os.path.curdir)

    parser.add_argument(
        '-w', '--workdirectory',
        default=cwd,
        help="specify the working directory you want "
             "the server to run from. Default is the "
             "actual cwd at program start.")
    parser.add_argument(
        '--base-url',
        default='/',
        help="The base URL prefix under which to run the web app")


def add_diff_args(parser):
    """Adds a set of arguments for commands that perform diffs.
    """
    limits = parser.add_argument_group(
        title='comparison',
        description='Control how documents are compared.')
    limits.add_argument(
        '--identity-fields',
        type=identity_fields_type,
        default=list(DiffConfig().identity_fields),
        help="comma separated fields identifying array items, in order of "
             "preference. Default is 'id,dataRef'.")
    limits.add_argument(
        '--max-depth',
        type=int,
        default=DiffConfig().max_depth,
        help="refuse documents nested deeper than this, at most %d."
             % MAX_SUPPORTED_DEPTH)
    limits.add_argument(
        '--max-nodes',
        type=int,
        default=DiffConfig().max_nodes,
        help="refuse documents holding more values than this.")
    limits.add_argument(
        '--timeout',
        type=float,
        default=None,
        help="give up a comparison after this many seconds.")


def add_filter_args(parser):
    """Adds arguments selecting and ordering the changes that are reported.
    """
    kinds = parser.add_argument_group(
        title='change kinds',
        description='Set which kinds of changes (not) to report.')
    kinds.add_argument(
        '-a', '--added',
        action=KindAction,
        help="report/ignore added values.")
    kinds.add_argument(
        '-r', '--removed',
        action=KindAction,
        help="report/ignore removed values.")
    kinds.add_argument(
        '-c', '--changed',
        action=KindAction,
        help="report/ignore changed values.")

    parser.add_argument(
        '--search',
        default='',
        help="only report changes whose path or description contains this text.")
    parser.add_argument(
        '--path',
        dest='path_filter',
        default='',
        help="only report changes whose path contains this text.")
    parser.add_argument(
        '--sort',
        default=None,
        choices=SORT_COLUMNS,
        help="sort the reported changes on this column.")
    parser.add_argument(
        '--descending',
        dest='ascending',
        action='store_false',
        default=True,
        help="sort in descending order.")


def add_report_args(parser):
    """Adds arguments controlling how values are rendered in reports.
    """
    parser.add_argument(
        '--display-cap',
        type=int,
        default=80,
        help="number of characters of a value shown before it is truncated.")
    parser.add_argument(
        '--export-cap',
        type=int,
        default=500,
        help="number of characters of a value written to CSV exports.")


def add_prettyprint_args(parser):
    """Adds optional arguments for controlling pretty print behavior.
    """
    parser.add_argument(
        '--no-color',
        dest='use_color',
        action="store_false",
        default=True,
        help=("prevent use of ANSI color code escapes for text output")
    )


def diff_config_from_args(arguments):
    return DiffConfig(
        identity_fields=getattr(arguments, 'identity_fields', None),
        max_depth=getattr(arguments, 'max_depth', DiffConfig().max_depth),
        max_nodes=getattr(arguments, 'max_nodes', DiffConfig().max_nodes),
        timeout=getattr(arguments, 'timeout', None),
    )


def report_view_from_args(arguments):
    process_exclusive_kinds(arguments)
    return ReportView(
        kinds=[k for k in ChangeKind.ALL if getattr(arguments, k)],
        search=getattr(arguments, 'search', ''),
        path_filter=getattr(arguments, 'path_filter', ''),
        sort=getattr(arguments, 'sort', None),
        ascending=getattr(arguments, 'ascending', True),
    )


def prettyprint_config_from_args(arguments, **kwargs):
    from .prettyprint import PrettyPrintConfig
    return PrettyPrintConfig(
        use_color=getattr(arguments, 'use_color', True),
        display_cap=getattr(arguments, 'display_cap', 80),
        **kwargs
    )


def args_for_server(arguments):
    """Translate standard arguments into kwargs for running webapp.jsondiffserver.main"""
    # Map format: <arguments.name>='<kwargs[key]>'
    kmap = dict(ip='ip',
                port='port',
                workdirectory='cwd',
                base_url='base_url',
                display_cap='display_cap',
                export_cap='export_cap',
                )
    ret = {kmap[k]: v for k, v in vars(arguments).items() if k in kmap}
    ret['diff_config'] = diff_config_from_args(arguments)
    return ret


def args_for_browse(arguments):
    """Translate standard arguments into kwargs for webapp.webutil.browse()"""
    # Map format: <arguments.name>='<kwargs[key]>'
    kmap = dict(ip='ip',
                browser='browsername',
                base_url='base_url',
                )
    return {kmap[k]: v for k, v in vars(arguments).items() if k in kmap}
