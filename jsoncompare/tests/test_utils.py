# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import shutil
import tempfile

import pytest
import requests

from jsoncompare import utils
from jsoncompare.exceptions import (
    LoadError, InvalidJSONError, SourceReadError, DiffError)
from jsoncompare.utils import (
    read_json, parse_json, is_url, source_name, is_in_repo, EXPLICIT_MISSING_FILE)


def test_read_json_file(filespath):
    value = read_json(os.path.join(filespath, 'base.json'))
    assert value['name'] == 'X'
    assert list(value) == ['name', 'version', 'tags', 'settings', 'notes']


def test_read_json_with_bom(filespath):
    assert read_json(os.path.join(filespath, 'bom.json')) == {"bom": True}


def test_read_json_stream():
    assert read_json(io.StringIO('[1, 2]')) == [1, 2]
    assert read_json(io.BytesIO('{"å": "ø"}'.encode('utf8'))) == {"å": "ø"}


def test_read_json_names_source(filespath):
    with pytest.raises(InvalidJSONError) as exc:
        read_json(io.BytesIO(b'{"a": }'), name='upload.json')
    assert exc.value.source == 'upload.json'
    assert str(exc.value) == 'Invalid JSON in upload.json'
    assert exc.value.reason

    path = os.path.join(filespath, 'invalid.json')
    with pytest.raises(InvalidJSONError) as exc:
        read_json(path)
    assert exc.value.source == path


@pytest.mark.parametrize('text', ['NaN', '[Infinity]', '{"a": -Infinity}', '', '{"a": 1} x'])
def test_parse_json_is_strict(text):
    with pytest.raises(InvalidJSONError):
        parse_json(text, 'text')


def test_parse_json_too_deep():
    text = '{"x": ' * 100000 + '0' + '}' * 100000
    with pytest.raises(InvalidJSONError) as exc:
        parse_json(text, 'deep.json')
    assert exc.value.source == 'deep.json'
    assert 'too deeply' in exc.value.reason


def test_missing_file(tmpdir):
    path = str(tmpdir.join('nope.json'))
    with pytest.raises(SourceReadError) as exc:
        read_json(path)
    assert str(exc.value) == 'Failed to read %s' % path


def test_undecodable_file(tmpdir):
    path = tmpdir.join('latin1.json')
    path.write_binary(b'"\xe6\xf8\xe5"')
    with pytest.raises(SourceReadError):
        read_json(str(path))


def test_load_errors_are_not_diff_errors():
    assert issubclass(InvalidJSONError, LoadError)
    assert issubclass(SourceReadError, LoadError)
    assert not issubclass(LoadError, DiffError)


def test_null_file():
    assert read_json(EXPLICIT_MISSING_FILE, on_null='empty') == {}
    with pytest.raises(ValueError):
        read_json(EXPLICIT_MISSING_FILE, on_null='minimal')


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.exceptions.HTTPError('%d error' % self.status)


def test_read_json_url(monkeypatch):
    urls = []

    def fake_get(url):
        urls.append(url)
        return FakeResponse('{"remote": true}')

    monkeypatch.setattr(utils.requests, 'get', fake_get)
    assert read_json('https://example.com/a.json') == {"remote": True}
    assert urls == ['https://example.com/a.json']


def test_read_json_url_errors(monkeypatch):
    monkeypatch.setattr(utils.requests, 'get', lambda url: FakeResponse('', 404))
    with pytest.raises(SourceReadError) as exc:
        read_json('http://example.com/missing.json')
    assert exc.value.source == 'http://example.com/missing.json'

    monkeypatch.setattr(utils.requests, 'get', lambda url: FakeResponse('<html>'))
    with pytest.raises(InvalidJSONError):
        read_json('http://example.com/page')


def test_is_url():
    assert is_url('http://a/b.json')
    assert is_url('https://a/b.json')
    assert not is_url('file.json')
    assert not is_url('ftp://a/b.json')
    assert not is_url(io.StringIO())


def test_source_name():
    assert source_name('a.json') == 'a.json'
    f = io.StringIO()
    assert source_name(f) == '<stream>'
    f.name = 'named.json'
    assert source_name(f) == 'named.json'


def test_is_repo():
    try:
        tmpdir = tempfile.mkdtemp(prefix='jsoncompare-test')
        subdir = tempfile.mkdtemp(dir=tmpdir)
        subfile = tempfile.NamedTemporaryFile(dir=tmpdir)
        subsubfile = tempfile.NamedTemporaryFile(dir=subdir)
        with subfile, subsubfile:
            assert is_in_repo(tmpdir) is False
            assert is_in_repo(subsubfile.name) is False
            os.makedirs(os.path.join(subdir, '.git'))
            assert is_in_repo(tmpdir) is False
            assert is_in_repo(subdir) is True
            assert is_in_repo(subfile.name) is False
            assert is_in_repo(subsubfile.name) is True
    finally:
        shutil.rmtree(tmpdir)
