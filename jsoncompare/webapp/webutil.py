#!/usr/bin/env python
# -*- coding:utf-8 -*-

import logging
import threading
import webbrowser

from tornado.httputil import url_concat

_logger = logging.getLogger(__name__)


def local_host(ip):
    """Address a browser on this machine should use to reach a server bound to ip."""
    if ip == '0.0.0.0':
        return '127.0.0.1'
    if ip in ('::', '0:0:0:0:0:0:0:0'):
        return '::1'
    return ip


def browse(port, browsername=None, base_url='/', rel_url='', ip='127.0.0.1', **url_args):
    try:
        browser = webbrowser.get(browsername)
    except webbrowser.Error as e:
        _logger.warning('No web browser found: %s.', e)
        browser = None

    host = local_host(ip)
    if ':' in host:
        host = '[%s]' % host
    base_url = base_url.rstrip('/')

    url = url_concat("http://%s:%s%s/%s" % (host, port, base_url, rel_url), url_args)
    _logger.info("URL: %s", url)
    if browser:
        def launch_browser():
            browser.open(url, new=2)
        threading.Thread(target=launch_browser).start()
    return url
