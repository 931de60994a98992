#!/usr/bin/env python
# -*- coding:utf-8 -*-

from collections import OrderedDict, namedtuple
import io
import json
import logging
import os
import sys
import uuid

from jinja2 import FileSystemLoader, Environment
from tornado import ioloop, web, escape, netutil, httpserver
from tornado.httputil import url_concat
from tornado.log import access_log

from .. import __file__ as jsoncompare_root
from ..args import (
    ConfigBackedParser, add_generic_args, add_web_args, add_diff_args,
    add_report_args, args_for_server)
from ..diff_format import ChangeKind, changes_to_json
from ..diffing import diff
from ..diffing.config import DiffConfig
from ..exceptions import LoadError, DiffError
from ..formatting import DISPLAY_CAP, EXPORT_CAP
from ..log import logger
from ..report import (
    SORT_COLUMNS, ReportView, export_csv, summarize, table_rows)
from ..utils import read_json, is_in_repo, is_url


# Separate logger for server entrypoint
_logger = logging.getLogger(__name__)


here = os.path.abspath(os.path.dirname(__file__))
static_path = os.path.join(here, 'static')
template_path = os.path.join(here, 'templates')


StoredReport = namedtuple('StoredReport', ['name_a', 'name_b', 'changes'])


class ReportStore:
    """Reports computed by one server, by id.

    Only the most recent `max_reports` reports are kept.
    """

    def __init__(self, max_reports=100):
        self.max_reports = max_reports
        self._reports = OrderedDict()

    def add(self, name_a, name_b, changes):
        report_id = uuid.uuid4().hex
        self._reports[report_id] = StoredReport(name_a, name_b, changes)
        while len(self._reports) > self.max_reports:
            dropped, _ = self._reports.popitem(last=False)
            _logger.debug('Dropping report %s', dropped)
        return report_id

    def get(self, report_id):
        return self._reports[report_id]

    def __len__(self):
        return len(self._reports)


def log_request(handler):
    """Log a request at a level depending on its status."""
    status = handler.get_status()
    if status < 400:
        log_method = access_log.debug
    elif status < 500:
        log_method = access_log.warning
    else:
        log_method = access_log.error
    request_time = 1000.0 * handler.request.request_time()
    log_method('%d %s %.2fms', status, handler._request_summary(), request_time)


class JsonCompareHandler(web.RequestHandler):
    def initialize(self, **params):
        self.params = params

    def write_error(self, status_code, **kwargs):
        # Write error message for HTTPErrors if serve_traceback is off:
        exc_info = kwargs.get('exc_info', None)
        if exc_info and not self.settings.get('serve_traceback'):
            (etype, value, traceback) = exc_info
            if etype == web.HTTPError:
                self.set_header('Content-Type', 'text/plain')
                if value.log_message:
                    return self.finish(value.log_message % value.args)
                return self.finish(str(value))
        return super(JsonCompareHandler, self).write_error(status_code, **kwargs)

    def render_template(self, name, **ns):
        template = self.settings['jinja2_env'].get_template(name)
        ns.setdefault('base_url', self.base_url)
        ns.setdefault('static_url', self.static_url)
        ns.setdefault('standalone', False)
        return template.render(**ns)

    def read_source(self, arg):
        # Currently assuming arg is a filename relative to
        # where the server was started from, or a URL.
        if not isinstance(arg, str):
            raise web.HTTPError(400, 'Expecting a filename or a URL.')
        if is_url(arg):
            source = arg
        else:
            source = os.path.join(self.curdir, arg)
            if not os.path.exists(source):
                raise web.HTTPError(422, 'Supplied argument cannot be read: %r', arg)
        try:
            return read_json(source, name=arg)
        except LoadError as e:
            self.log.warning('%s', e)
            raise web.HTTPError(422, '%s', e)

    def compare(self, a, b):
        try:
            return diff(a, b, config=self.diff_config)
        except DiffError as e:
            self.log.warning('%s', e)
            raise web.HTTPError(422, '%s', e)

    @property
    def log(self):
        return logger

    @property
    def base_url(self):
        return self.settings.get('base_url', '/')

    @property
    def curdir(self):
        return self.params.get('cwd', os.curdir)

    @property
    def diff_config(self):
        return self.params.get('diff_config') or DiffConfig()

    @property
    def reports(self):
        return self.application.reports

    def report_url(self, report_id, suffix=''):
        return '%sreport/%s%s' % (self.base_url, report_id, suffix)


class MainHandler(JsonCompareHandler):
    def get(self):
        initial = getattr(self.application, 'initial_report_id', None)
        if initial is not None:
            self.redirect(self.report_url(initial))
            return
        self.write(self.render_template('index.html', error=None))


class CompareHandler(JsonCompareHandler):
    def post(self):
        sources = []
        for argname in ('base', 'remote'):
            files = self.request.files.get(argname)
            if not files:
                self.set_status(400)
                self.write(self.render_template(
                    'index.html', error='Select two files to compare.'))
                return
            sources.append(files[0])

        values = []
        for f in sources:
            try:
                values.append(read_json(io.BytesIO(f['body']), name=f['filename']))
            except LoadError as e:
                self.log.warning('%s', e)
                self.set_status(400)
                self.write(self.render_template('index.html', error=str(e)))
                return

        changes = self.compare(*values)
        report_id = self.reports.add(
            sources[0]['filename'], sources[1]['filename'], changes)
        self.log.info('Created report %s with %d changes', report_id, len(changes))
        self.redirect(self.report_url(report_id), status=303)


class ReportHandler(JsonCompareHandler):
    def get_report(self, report_id):
        try:
            return self.reports.get(report_id)
        except KeyError:
            raise web.HTTPError(404, 'No report with id %r', report_id)

    def get_view(self):
        if self.get_argument('filtered', None):
            kinds = [k for k in self.get_arguments('kinds') if k in ChangeKind.ALL]
        else:
            kinds = None
        sort = self.get_argument('sort', None)
        if sort is not None and sort not in SORT_COLUMNS:
            raise web.HTTPError(400, 'Cannot sort on column %r', sort)
        return ReportView(
            kinds=kinds,
            search=self.get_argument('search', ''),
            path_filter=self.get_argument('path', ''),
            sort=sort,
            ascending=self.get_argument('order', 'asc') != 'desc',
        )

    def query_pairs(self, exclude=()):
        return [
            (name, escape.to_unicode(value))
            for name, values in self.request.query_arguments.items()
            if name not in exclude
            for value in values
        ]

    def sort_links(self, report_id, view):
        "Header links sorting on each column, in the direction a click would choose."
        kept = self.query_pairs(exclude=('sort', 'order'))
        links = {}
        for column in SORT_COLUMNS:
            order = 'asc' if view.next_direction(column) else 'desc'
            links[column] = url_concat(
                self.report_url(report_id), kept + [('sort', column), ('order', order)])
        return links

    def get(self, report_id):
        report = self.get_report(report_id)
        view = self.get_view()
        shown = view.apply(report.changes)
        self.write(self.render_template(
            'report.html',
            report_id=report_id,
            name_a=report.name_a,
            name_b=report.name_b,
            summary=summarize(report.changes),
            rows=table_rows(shown, self.params.get('display_cap', DISPLAY_CAP)),
            empty_message=view.empty_message(report.changes),
            view=view,
            kinds=ChangeKind.ALL,
            sort_links=self.sort_links(report_id, view),
            report_url=self.report_url(report_id),
            csv_url=url_concat(self.report_url(report_id, '.csv'), self.query_pairs()),
        ))


class ReportCsvHandler(ReportHandler):
    def get(self, report_id):
        report = self.get_report(report_id)
        shown = self.get_view().apply(report.changes)
        text = export_csv(shown, report.name_a, report.name_b,
                          cap=self.params.get('export_cap', EXPORT_CAP))
        self.set_header('Content-Type', 'text/csv; charset=utf-8')
        self.set_header('Content-Disposition',
                        'attachment; filename="json_comparison.csv"')
        self.finish(text)


class ApiDiffHandler(JsonCompareHandler):
    def post(self):
        try:
            body = json.loads(escape.to_unicode(self.request.body))
            base = body['base']
            remote = body['remote']
        except (ValueError, KeyError, TypeError):
            raise web.HTTPError(400, 'Expecting a JSON body with "base" and "remote".')

        a = self.read_source(base)
        b = self.read_source(remote)
        changes = self.compare(a, b)

        data = {
            'summary': summarize(changes),
            'changes': changes_to_json(changes),
            }
        self.finish(data)


def make_app(**params):
    base_url = params.pop('base_url', '/')
    if not base_url.endswith('/'):
        base_url += '/'
    initial_report = params.pop('initial_report', None)
    handlers = [
        (r'/', MainHandler, params),
        (r'/compare', CompareHandler, params),
        (r'/report/([0-9a-f]+)', ReportHandler, params),
        (r'/report/([0-9a-f]+)\.csv', ReportCsvHandler, params),
        (r'/api/diff', ApiDiffHandler, params),
        # Static handler will be added automatically
    ]
    if base_url != '/':
        prefix = base_url.rstrip('/')
        handlers = [
            (prefix + path, cls, params)
            for (path, cls, params) in handlers
        ]
    else:
        prefix = ''

    env = Environment(loader=FileSystemLoader([template_path]), autoescape=True)
    settings = {
        'log_function': log_request,
        'static_path': static_path,
        'static_url_prefix': prefix + '/static/',
        'base_url': base_url,
        'jinja2_env': env,
    }

    if is_in_repo(jsoncompare_root):
        # don't cache when working from repo
        settings.update({
            'compiled_template_cache': False,
            'static_hash_cache': False,
            })

    app = web.Application(handlers, **settings)
    app.reports = ReportStore()
    app.initial_report_id = None
    if initial_report is not None:
        app.initial_report_id = app.reports.add(*initial_report)
    return app


def init_app(on_port=None, **params):
    _logger.debug('Using params: %s', params)
    port = params.pop('port', 0)
    ip = params.pop('ip', '127.0.0.1')
    app = make_app(**params)
    if port != 0:
        server = app.listen(port, address=ip)
        _logger.info('Listening on %s, port %d', ip, port)
    else:
        sockets = netutil.bind_sockets(0, ip)
        server = httpserver.HTTPServer(app)
        server.add_sockets(sockets)
        for s in sockets:
            _logger.info('Listening on %s, port %d', *s.getsockname()[:2])
            port = s.getsockname()[1]
    if on_port is not None:
        on_port(port)
    return app, server


def main_server(on_port=None, **params):
    app, server = init_app(on_port, **params)
    io_loop = ioloop.IOLoop.current()
    if sys.platform.startswith('win'):
        # workaround for tornado on Windows:
        # add no-op to wake every 5s
        # to handle signals that may be ignored by the inner loop
        pc = ioloop.PeriodicCallback(lambda : None, 5000)
        pc.start()
    io_loop.start()
    # Clean up after server:
    server.stop()
    return 0


def _build_arg_parser(prog='server'):
    """
    Creates an argument parser that lets the user specify a port
    and displays a help message.
    """
    description = 'Web interface for comparing JSON documents.'
    parser = ConfigBackedParser(description=description, prog=prog)
    add_generic_args(parser)
    add_web_args(parser)
    add_diff_args(parser)
    add_report_args(parser)
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    arguments = _build_arg_parser().parse_args(args)
    return main_server(**args_for_server(arguments))


if __name__ == '__main__':
    sys.exit(main())
