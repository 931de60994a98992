import sys
import os

from jinja2 import FileSystemLoader, Environment

from ..args import (
    ConfigBackedParser,
    add_generic_args,
    add_diff_args,
    add_report_args,
    diff_config_from_args)
from ..diff_format import ChangeKind
from ..exceptions import LoadError, DiffError
from ..jsondiffapp import _build_diff
from ..report import (
    SORT_COLUMNS, ReportView, export_header, export_rows, summarize, table_rows)
from ..utils import source_name


here = os.path.abspath(os.path.dirname(__file__))
static_path = os.path.join(here, 'static')
template_path = os.path.join(here, 'templates')


def build_arg_parser():
    """
    Creates an argument parser for the web diff exporter.
    """
    description = 'Export a JSON comparison as a standalone HTML page.'
    parser = ConfigBackedParser(
        description=description,
        prog='jsondiff-export',
        add_help=True
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_report_args(parser)
    parser.add_argument(
        "base", help="the base JSON filename or URL.",
    )
    parser.add_argument(
        "remote", help="the remote modified JSON filename or URL.",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="path to output directory."
    )
    parser.add_argument(
        "--output-name",
        default="jsondiff.html",
        help="file name of the exported page."
    )
    return parser


def _read_static(name):
    with open(os.path.join(static_path, name), "r", encoding='utf8') as f:
        return f.read()


def render_report(name_a, name_b, changes, display_cap=None, export_cap=None):
    """Render a complete report page with its styles and script inlined.

    Each row carries its CSV fields, so the page can export the visible
    rows without a server.
    """
    env = Environment(loader=FileSystemLoader([template_path]), autoescape=True)
    template = env.get_template("report.html")
    kwargs = {} if display_cap is None else {'cap': display_cap}
    csv_kwargs = {} if export_cap is None else {'cap': export_cap}
    rows = table_rows(changes, **kwargs)
    for row, fields in zip(rows, export_rows(changes, **csv_kwargs)):
        row['csv'] = fields
    view = ReportView()
    return template.render(
        standalone=True,
        inline_css=_read_static('jsoncompare.css'),
        inline_js=_read_static('jsoncompare.js'),
        base_url='',
        name_a=name_a,
        name_b=name_b,
        summary=summarize(changes),
        rows=rows,
        csv_header=export_header(name_a, name_b),
        empty_message=view.empty_message(changes),
        view=view,
        kinds=ChangeKind.ALL,
        sort_links={column: '#' for column in SORT_COLUMNS},
        report_url='',
    )


def main_export(opts):
    outputdir = opts.output_dir
    os.makedirs(outputdir, exist_ok=True)

    try:
        _, _, changes = _build_diff(
            opts.base, opts.remote, config=diff_config_from_args(opts))
    except LoadError as e:
        print(e, file=sys.stderr)
        return 1
    except DiffError as e:
        print(e, file=sys.stderr)
        return 2

    rendered = render_report(
        source_name(opts.base), source_name(opts.remote), changes,
        display_cap=opts.display_cap, export_cap=opts.export_cap)
    outputfilename = os.path.join(outputdir, opts.output_name)
    with open(outputfilename, "w", encoding="utf8") as f:
        f.write(rendered)
    print('Wrote %d changes to %s' % (len(changes), outputfilename))
    return 0


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    opts = build_arg_parser().parse_args(args)
    return main_export(opts)


if __name__ == "__main__":
    sys.exit(main())
