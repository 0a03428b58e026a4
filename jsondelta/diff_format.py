# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import enum

from .errors import DiffFormatError
from .pointer import JsonPointer


# Field names of entries in an operation document
OP = "op"
PATH = "path"
FROM = "from"
VALUE = "value"
FROM_VALUE = "fromValue"


class DiffEntry(dict):
    """For internal usage in jsondelta library.

    Minimal class providing attribute access to diff entry keys.
    Pointers are kept as JsonPointer objects until the entry is
    serialized with `to_document`.
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


class DiffOp:
    "Collection of valid values for the op field in diff entries."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    OPS = (ADD, REMOVE, REPLACE, MOVE, COPY, TEST)

    @classmethod
    def from_name(cls, name):
        "Look up an operation by its RFC 6902 name, ignoring case."
        if isinstance(name, str):
            op = name.lower()
            if op in cls.OPS:
                return op
        return None


def op_add(path, value):
    "Create a diff entry to add value at path."
    return DiffEntry(op=DiffOp.ADD, path=path, value=value)

def op_remove(path, value):
    "Create a diff entry to remove value at path, remembering what was removed."
    return DiffEntry(op=DiffOp.REMOVE, path=path, value=value)

def op_replace(path, from_value, value):
    "Create a diff entry to replace from_value at path with value."
    return DiffEntry(op=DiffOp.REPLACE, path=path, from_value=from_value, value=value)

def op_move(from_path, path):
    "Create a diff entry to move the value at from_path to path."
    return DiffEntry(op=DiffOp.MOVE, from_path=from_path, path=path)

def op_copy(from_path, path):
    "Create a diff entry to copy the value at from_path to path."
    return DiffEntry(op=DiffOp.COPY, from_path=from_path, path=path)

def op_test(path, value):
    "Create a diff entry asserting that path holds value."
    return DiffEntry(op=DiffOp.TEST, path=path, value=value)


class DiffFlags(enum.Flag):
    "Options controlling what the diff engine emits."
    OMIT_VALUE_ON_REMOVE = enum.auto()
    OMIT_MOVE_OPERATION = enum.auto()
    OMIT_COPY_OPERATION = enum.auto()
    OMIT_COMPOSITE_ARRAY = enum.auto()
    ADD_ORIGINAL_VALUE_ON_REPLACE = enum.auto()
    EMIT_TEST_OPERATIONS = enum.auto()

    @classmethod
    def defaults(cls):
        return cls.OMIT_VALUE_ON_REMOVE

    @classmethod
    def dont_normalize_op_into_move_and_copy(cls):
        return cls.OMIT_MOVE_OPERATION | cls.OMIT_COPY_OPERATION


class CompatibilityFlags(enum.Flag):
    "Relaxations of RFC 6902 applied when patching."
    MISSING_VALUES_AS_NULLS = enum.auto()
    REMOVE_NONEXISTENT_ARRAY_ELEMENT = enum.auto()
    ALLOW_MISSING_TARGET_OBJECT_ON_REPLACE = enum.auto()

    @classmethod
    def defaults(cls):
        return cls(0)


def validate_diff_entry(e):
    """Check that e is a well formed diff entry.

    Raises a DiffFormatError if not well formed.
    """
    if not isinstance(e, DiffEntry):
        raise DiffFormatError("Diff entry '{}' is not a diff type.".format(e))
    op = e.get("op")
    if op not in DiffOp.OPS:
        raise DiffFormatError("Unknown diff op '{}'.".format(op))
    if not isinstance(e.get("path"), JsonPointer):
        raise DiffFormatError("Diff entry path must be a JsonPointer, not '{}'.".format(e.get("path")))
    if op in (DiffOp.MOVE, DiffOp.COPY):
        if not isinstance(e.get("from_path"), JsonPointer):
            raise DiffFormatError("{} entries need a 'from_path' pointer.".format(op))
    elif "value" not in e:
        raise DiffFormatError("{} entries need a 'value'.".format(op))


def validate_diff(diff):
    """Check whether a diff (list of diff entries) is well formed.

    Raises a DiffFormatError if not well formed.
    """
    if not isinstance(diff, list):
        raise DiffFormatError("Diff must be a list.")
    for e in diff:
        validate_diff_entry(e)


def to_document_entry(e, flags):
    "Serialize a single diff entry to its operation document form."
    op = e.op
    d = {OP: op}
    if op in (DiffOp.MOVE, DiffOp.COPY):
        d[FROM] = str(e.from_path)
        d[PATH] = str(e.path)
    elif op == DiffOp.REMOVE:
        d[PATH] = str(e.path)
        if DiffFlags.OMIT_VALUE_ON_REMOVE not in flags:
            d[VALUE] = e.value
    elif op == DiffOp.REPLACE:
        d[PATH] = str(e.path)
        d[VALUE] = e.value
        if DiffFlags.ADD_ORIGINAL_VALUE_ON_REPLACE in flags:
            d[FROM_VALUE] = e.from_value
    elif op in (DiffOp.ADD, DiffOp.TEST):
        d[PATH] = str(e.path)
        d[VALUE] = e.value
    else:
        raise DiffFormatError("Unknown diff op '{}'.".format(op))
    return d


def to_document(diff, flags=None):
    "Serialize a list of diff entries into an RFC 6902 operation document."
    if flags is None:
        flags = DiffFlags.defaults()
    return [to_document_entry(e, flags) for e in diff]


class Diffs(object):
    """Result of a diff: the entries, the flags used to compute them,
    and the composite paths that were in effect.
    """

    def __init__(self, entries, flags, composite_paths=()):
        self.entries = entries
        self.flags = flags
        self.composite_paths = list(composite_paths)

    def to_document(self):
        return to_document(self.entries, self.flags)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, i):
        return self.entries[i]

    def __eq__(self, other):
        if isinstance(other, Diffs):
            return self.entries == other.entries and self.flags == other.flags
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "Diffs(%r, flags=%r)" % (self.entries, self.flags)
