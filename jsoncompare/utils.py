# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import json
import locale
import os
import sys

import requests

from .exceptions import InvalidJSONError, SourceReadError
from .log import debug

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def is_url(arg):
    return isinstance(arg, str) and arg.split('://', 1)[0] in ('http', 'https')


def source_name(f):
    "A name for a source, for use in messages and report headers."
    if isinstance(f, str):
        return f
    return getattr(f, 'name', None) or '<stream>'


def _reject_constant(name):
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ValueError('%s is not valid JSON' % name)


def parse_json(text, name):
    """Parse JSON text strictly, naming the source on failure."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidJSONError(name, str(e)) from e
    except RecursionError as e:
        raise InvalidJSONError(name, 'nested too deeply to parse') from e


def read_json(f, on_null=None, name=None):
    """Read and return a json value from filename, URL or file-like object

    Parameters:
        f:  The filename or http(s) URL to read from, or the null filename
            ("/dev/null" on *nix, "nul" on Windows).
            Alternatively a file-like object can be passed.
        on_null: What to return when filename is null
            None: Read it like any other file (and fail, it is empty)
            "empty": return empty dict
        name: Name of the source in error messages, defaults to the
            filename, URL or name of the file-like object.

    Raises SourceReadError when the source cannot be read and
    InvalidJSONError when it does not hold valid JSON.
    """
    if name is None:
        name = source_name(f)

    if f == EXPLICIT_MISSING_FILE and on_null is not None:
        if on_null == 'empty':
            return {}
        raise ValueError(
            'Not valid value for `on_null`: %r. Valid values '
            'are None or "empty"' % (on_null,))

    if is_url(f):
        debug('Fetching %s', f)
        try:
            r = requests.get(f)
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceReadError(name, str(e)) from e
        text = r.text
    elif isinstance(f, str):
        try:
            with open(f, encoding='utf-8-sig') as fo:
                text = fo.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(name, str(e)) from e
    else:
        try:
            text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(name, str(e)) from e
        if isinstance(text, bytes):
            try:
                text = text.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise SourceReadError(name, str(e)) from e

    return parse_json(text, name)


def is_in_repo(pkg_path):
    """Get whether `pkg_path` is a repository, or is part of one

    Parameters
    ----------
    pkg_path : str
       directory containing package

    Returns
    -------
    is_in_repo : bool
       Whether directory is a part of a repository
    """

    # maybe we are in a repository, check for a .git folder
    p = os.path
    cur_path = None
    par_path = pkg_path
    while cur_path != par_path:
        cur_path = par_path
        if p.exists(p.join(cur_path, '.git')):
            return True
        par_path = p.dirname(par_path)

    return False


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        raw_stream = getattr(sys, '__%s__' % name)
        if stream is not raw_stream:
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        # if error-handler is strict, switch to replace
        if errors == 'strict' or errors.startswith('surrogate'):
            bin_stream = stream.buffer
            new_stream = codecs.getwriter(enc)(bin_stream, errors='backslashreplace')
            setattr(sys, name, new_stream)


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """

    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
