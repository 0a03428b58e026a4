# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Validation and application of RFC 6902 operation documents.

One algorithm walks the operation document and hands each operation to
a processor. `ApplyProcessor` mutates the document it owns, while
`NoopProcessor` only lets the payload be parsed. Whether the caller's
document is copied first is decided by `apply` vs `apply_in_place`.
"""

import copy

import jsondelta.log

from .diff_format import CompatibilityFlags, DiffOp, Diffs, OP, PATH, FROM, VALUE
from .errors import (
    CannotRemoveRootError, IndexOutOfBoundsError, InvalidPatchError, MissingFieldError,
    PatchApplicationError, PointerEvaluationError, ReferencePastScalarError, TestFailedError,
)
from .pointer import APPEND_TOKEN, JsonPointer, is_array_index
from .values import equivalent, is_number, show, structurally_equal

__all__ = ["apply", "apply_in_place", "validate", "ApplyProcessor", "NoopProcessor"]


class NoopProcessor(object):
    "Processor accepting every operation without touching any document."

    def add(self, path, value):
        pass

    def remove(self, path):
        pass

    def replace(self, path, value):
        pass

    def move(self, from_path, path):
        pass

    def copy(self, from_path, path):
        pass

    def test(self, path, value):
        pass


class ApplyProcessor(object):
    """Processor mutating the document it was given.

    The document may be replaced wholesale by operations on the root
    pointer, so always read the outcome from `result()`.
    """

    def __init__(self, document, flags=None):
        self.document = document
        self.flags = CompatibilityFlags.defaults() if flags is None else flags

    def result(self):
        return self.document

    def _array_index(self, token, op, parent_path):
        if token == APPEND_TOKEN:
            return None
        if not is_array_index(token):
            raise PatchApplicationError(
                "Can't reference field \"%s\" on array" % token, op, parent_path)
        return int(token)

    def _set(self, path, value, op):
        if path.is_root():
            self.document = value
            return
        parent_path = path.parent()
        parent = parent_path.evaluate(self.document)
        token = path.last()
        if isinstance(parent, dict):
            parent[token] = value
        elif isinstance(parent, list):
            index = self._array_index(token, op, parent_path)
            if index is None:
                parent.append(value)
            elif index > len(parent):
                raise IndexOutOfBoundsError(
                    "Array index %d out of bounds" % index, op, parent_path)
            else:
                parent.insert(index, value)
        else:
            raise ReferencePastScalarError(
                "Cannot reference past scalar value", op, parent_path)

    def _remove(self, path, op):
        if path.is_root():
            raise CannotRemoveRootError("Cannot remove document root", op, path)
        parent_path = path.parent()
        parent = parent_path.evaluate(self.document)
        token = path.last()
        if isinstance(parent, dict):
            parent.pop(token, None)
        elif isinstance(parent, list):
            index = self._array_index(token, op, parent_path)
            if index is None or index >= len(parent):
                if CompatibilityFlags.REMOVE_NONEXISTENT_ARRAY_ELEMENT in self.flags:
                    return
                raise IndexOutOfBoundsError(
                    "Array index %s out of bounds" % token, op, parent_path)
            del parent[index]
        else:
            raise ReferencePastScalarError(
                "Cannot reference past scalar value", op, parent_path)

    def add(self, path, value):
        self._set(path, value, DiffOp.ADD)

    def remove(self, path):
        self._remove(path, DiffOp.REMOVE)

    def replace(self, path, value):
        op = DiffOp.REPLACE
        if path.is_root():
            self.document = value
            return
        parent_path = path.parent()
        parent = parent_path.evaluate(self.document)
        token = path.last()
        if isinstance(parent, dict):
            if (token not in parent and
                    CompatibilityFlags.ALLOW_MISSING_TARGET_OBJECT_ON_REPLACE not in self.flags):
                raise MissingFieldError("Missing field \"%s\"" % token, op, parent_path)
            parent[token] = value
        elif isinstance(parent, list):
            index = self._array_index(token, op, parent_path)
            if index is None or index >= len(parent):
                raise IndexOutOfBoundsError(
                    "Array index %s out of bounds" % token, op, parent_path)
            parent[index] = value
        else:
            raise ReferencePastScalarError(
                "Can't reference past scalar value", op, parent_path)

    def move(self, from_path, path):
        # Evaluate before removing: path may only resolve once from_path is gone
        value = from_path.evaluate(self.document)
        self._remove(from_path, DiffOp.MOVE)
        self._set(path, value, DiffOp.MOVE)

    def copy(self, from_path, path):
        value = copy.deepcopy(from_path.evaluate(self.document))
        self._set(path, value, DiffOp.COPY)

    def test(self, path, value):
        found = path.evaluate(self.document)
        if is_number(found) and is_number(value):
            same = equivalent(found, value)
        else:
            same = structurally_equal(found, value)
        if not same:
            raise TestFailedError(
                "Expected %s but found %s" % (show(value), show(found)),
                DiffOp.TEST, path, value, found)


def _get_field(entry, name):
    try:
        return entry[name]
    except KeyError:
        raise InvalidPatchError(
            "Invalid JSON Patch payload (missing '%s' field)" % name)


def _get_pointer(entry, name):
    text = _get_field(entry, name)
    if not isinstance(text, str):
        raise InvalidPatchError(
            "Invalid JSON Patch payload ('%s' field is not a string)" % name)
    return JsonPointer.parse(text)


def _process(document, processor, flags):
    if flags is None:
        flags = CompatibilityFlags.defaults()
    if isinstance(document, Diffs):
        document = document.to_document()
    if not isinstance(document, list):
        raise InvalidPatchError("Invalid JSON Patch payload (not an array)")

    for entry in document:
        if not isinstance(entry, dict):
            raise InvalidPatchError("Invalid JSON Patch payload (not an object)")
        name = _get_field(entry, OP)
        op = DiffOp.from_name(name)
        if op is None:
            raise InvalidPatchError("unknown / unsupported operation %s" % (name,))
        path = _get_pointer(entry, PATH)

        try:
            if op == DiffOp.REMOVE:
                processor.remove(path)
            elif op in (DiffOp.ADD, DiffOp.REPLACE, DiffOp.TEST):
                if CompatibilityFlags.MISSING_VALUES_AS_NULLS in flags:
                    value = entry.get(VALUE)
                else:
                    value = _get_field(entry, VALUE)
                getattr(processor, op)(path, copy.deepcopy(value))
            else:
                from_path = _get_pointer(entry, FROM)
                getattr(processor, op)(from_path, path)
        except PointerEvaluationError as e:
            raise PatchApplicationError(e.message, op, e.path) from e

    jsondelta.log.debug("Processed %d operations with %s", len(document), type(processor).__name__)


def validate(document, flags=None):
    """Check that document is a well formed operation document.

    Raises InvalidPatchError (or MalformedPointerError) on the first
    problem found. No document is read or modified.
    """
    _process(document, NoopProcessor(), flags)


def apply(document, target, flags=None):
    """Apply the operation document to a deep copy of target.

    Returns the patched copy; target itself is left untouched.
    """
    processor = ApplyProcessor(copy.deepcopy(target), flags)
    _process(document, processor, flags)
    return processor.result()


def apply_in_place(document, target, flags=None):
    """Apply the operation document directly to target.

    Containers inside target are mutated. The result is returned as well,
    since operations on the root pointer replace the document as a whole.
    """
    processor = ApplyProcessor(target, flags)
    _process(document, processor, flags)
    return processor.result()
