# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .config import DiffConfig
from .generic import diff, iter_diff

# The name used throughout the report tooling
compare = diff

__all__ = ["diff", "iter_diff", "compare", "DiffConfig"]
