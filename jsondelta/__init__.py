# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diff_format import DiffFlags, CompatibilityFlags, Diffs
from .diffing import diff, diff_document
from .differences import Differences, Differentiator
from .patching import apply, apply_in_place, validate
from .pointer import JsonPointer


__all__ = [
    "__version__",
    "diff", "diff_document",
    "apply", "apply_in_place", "validate",
    "JsonPointer", "DiffFlags", "CompatibilityFlags", "Diffs",
    "Differences", "Differentiator",
    ]
