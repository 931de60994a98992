# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Errors raised by the loader and the differ.

Loader errors (`LoadError` and subclasses) always name the source that
failed, while differ errors (`DiffError` and subclasses) name the side
and, where it applies, the path of the offending value.
"""


class JsonCompareError(Exception):
    pass


class LoadError(JsonCompareError):
    "A source could not be turned into a JSON value."

    def __init__(self, source, message):
        self.source = source
        super(LoadError, self).__init__(message)


class InvalidJSONError(LoadError):
    def __init__(self, source, reason=None):
        self.reason = reason
        super(InvalidJSONError, self).__init__(
            source, 'Invalid JSON in {}'.format(source))


class SourceReadError(LoadError):
    def __init__(self, source, reason=None):
        self.reason = reason
        super(SourceReadError, self).__init__(
            source, 'Failed to read {}'.format(source))


class DiffError(JsonCompareError):
    pass


class MalformedInputError(DiffError):
    "A value on one side is not something a JSON document can produce."

    def __init__(self, side, path, reason):
        self.side = side
        self.path = path
        self.reason = reason
        super(MalformedInputError, self).__init__(
            'Malformed input on side {} at {}: {}'.format(side, path, reason))


class DepthOrSizeExceededError(DiffError):
    pass


class DepthExceededError(DepthOrSizeExceededError):
    def __init__(self, side, path, limit):
        self.side = side
        self.path = path
        self.limit = limit
        super(DepthExceededError, self).__init__(
            'Input {} is nested deeper than {} levels at {}'.format(side, limit, path))


class SizeExceededError(DepthOrSizeExceededError):
    def __init__(self, side, limit):
        self.side = side
        self.limit = limit
        super(SizeExceededError, self).__init__(
            'Input {} has more than {} nodes'.format(side, limit))


class DiffTimeoutError(DiffError):
    def __init__(self, path, timeout):
        self.path = path
        self.timeout = timeout
        super(DiffTimeoutError, self).__init__(
            'Comparison did not finish within {}s (reached {})'.format(timeout, path))
