# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__, version_info

from .diff_format import ChangeKind, ChangeRecord, Path, Missing
from .diffing import diff, iter_diff, compare, DiffConfig
from .formatting import render, render_value
from .utils import read_json


__all__ = [
    "__version__", "version_info",
    "diff", "iter_diff", "compare", "DiffConfig",
    "ChangeKind", "ChangeRecord", "Path", "Missing",
    "render", "render_value",
    "read_json",
    ]
