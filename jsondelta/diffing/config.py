# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..diff_format import DiffFlags
from ..pointer import JsonPointer


class DiffConfig:
    """Flags and composite paths to pass around during a diff.

    Also records the composite paths actually met while diffing,
    in the order they were first seen.
    """

    def __init__(self, *, flags=None, composite_paths=None):
        if flags is None:
            flags = DiffFlags.defaults()
        self.flags = flags
        self._composite_paths = frozenset(
            p if isinstance(p, JsonPointer) else JsonPointer.parse(p)
            for p in (composite_paths or ()))
        self._effective = {}

    def has(self, flag):
        return flag in self.flags

    def is_composite(self, a, b, path):
        "Return True if the subtree at path should be diffed as a single value."
        composite = path in self._composite_paths or (
            isinstance(a, list) and isinstance(b, list) and
            DiffFlags.OMIT_COMPOSITE_ARRAY in self.flags)
        if composite:
            self._effective.setdefault(path, None)
        return composite

    @property
    def effective_composite_paths(self):
        return [str(p) for p in self._effective]
