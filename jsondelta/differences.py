# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Differences between arbitrary Python objects.

Objects are first converted to JSON trees. Fields can be silenced
(removed from both trees before diffing) and subtrees can be marked
composite, in which case any change inside them is reported as a
single replace of the whole subtree.
"""

from collections import namedtuple
from collections.abc import Mapping
import dataclasses
import datetime
from decimal import Decimal
import enum
import json

import jsondelta.log

from .diff_format import DiffFlags, OP, PATH, FROM, VALUE, FROM_VALUE
from .diffing import diff_document
from .patching import apply, validate
from .pointer import JsonPointer

__all__ = ["Differences", "Differentiator", "Difference", "to_tree", "remove_field"]


# Token matching any depth in silent field specifications
WILDCARD = "**"

BETWEEN_FLAGS = (
    DiffFlags.ADD_ORIGINAL_VALUE_ON_REPLACE |
    DiffFlags.OMIT_MOVE_OPERATION |
    DiffFlags.OMIT_COPY_OPERATION |
    DiffFlags.OMIT_COMPOSITE_ARRAY
)


Difference = namedtuple("Difference", ["op", "path", "value", "from_value", "from_path"])


def to_tree(obj):
    """Convert an object into a JSON-like tree of dicts, lists and scalars.

    Supports dataclasses, mappings, sequences and sets, enums (by name),
    dates and times (ISO format) and plain objects (their public
    attributes).
    """
    if obj is None or isinstance(obj, (bool, int, float, str, Decimal)):
        return obj
    if isinstance(obj, enum.Enum):
        return obj.name
    if isinstance(obj, (datetime.date, datetime.time)):
        # datetime.datetime is a subclass of datetime.date
        return obj.isoformat()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_tree(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): to_tree(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_tree(v) for v in obj]
    if hasattr(obj, "__dict__"):
        return {k: to_tree(v) for k, v in vars(obj).items() if not k.startswith("_")}
    raise TypeError("Cannot convert %r to a JSON tree" % (obj,))


def field_tokens(field):
    "Split a field specification, either '/a/b' or 'a.b', into tokens."
    if field.startswith("/"):
        return list(JsonPointer.parse(field).tokens)
    return field.split(".")


def normalize_field(field):
    "Turn a dotted field specification into a pointer string."
    return field if field.startswith("/") else "/" + field.replace(".", "/")


def remove_field(tokens, node, wildcard=False):
    """Remove the field addressed by tokens from node, in place.

    A '**' token makes the remaining tokens match at any depth below
    that point. Arrays are only descended in wildcard mode.
    """
    if not tokens or not isinstance(node, (dict, list)):
        return
    name = tokens[0]
    if name == WILDCARD:
        remove_field(tokens[1:], node, True)
        return

    if len(tokens) == 1 and isinstance(node, dict) and name in node:
        jsondelta.log.debug("Removing silent field %r", name)
        del node[name]

    if isinstance(node, list):
        if wildcard:
            for element in node:
                remove_field(tokens, element, wildcard)
    else:
        for key, child in list(node.items()):
            if not isinstance(child, (dict, list)):
                continue
            if key == name:
                remove_field(tokens[1:], child, wildcard)
            elif wildcard:
                remove_field(tokens, child, wildcard)


def remove_silent_fields(field, *nodes):
    tokens = field_tokens(field)
    for node in nodes:
        if isinstance(node, dict):
            remove_field(tokens, node)


def _to_difference(entry):
    return Difference(
        op=entry[OP],
        path=entry[PATH],
        value=entry.get(VALUE),
        from_value=entry.get(FROM_VALUE),
        from_path=entry.get(FROM),
    )


class Differences(object):
    """A validated operation document with some conveniences.

    Iterating yields Difference tuples; `to_document()` returns the
    plain operation document.
    """

    def __init__(self, document):
        validate(document)
        self._document = list(document)

    @classmethod
    def parse(cls, text):
        "Create from the JSON text of an operation document."
        return cls(json.loads(text))

    @classmethod
    def between(cls, obj1, obj2, silent_fields=None, composite_fields=None):
        jsondelta.log.debug("Computing differences, silent fields %r, composite fields %r",
                            silent_fields, composite_fields)
        tree1 = to_tree(obj1)
        tree2 = to_tree(obj2)
        for field in silent_fields or ():
            remove_silent_fields(field, tree1, tree2)
        composite_paths = [normalize_field(f) for f in composite_fields or ()]
        return cls(diff_document(tree1, tree2, flags=BETWEEN_FLAGS,
                                 composite_paths=composite_paths))

    def to_document(self):
        return list(self._document)

    def is_empty(self):
        return not self._document

    def apply_to(self, obj, factory=None):
        """Apply these differences to the tree of obj.

        Returns the patched tree, or factory(tree) if a factory is given.
        obj itself is not modified.
        """
        if obj is None:
            raise ValueError("Target object cannot be None")
        result = apply(self._document, to_tree(obj))
        if factory is not None:
            return factory(result)
        return result

    def __iter__(self):
        return (_to_difference(e) for e in self._document)

    def __len__(self):
        return len(self._document)

    def __bool__(self):
        return bool(self._document)

    def __eq__(self, other):
        if isinstance(other, Differences):
            return self._document == other._document
        return NotImplemented

    __hash__ = None

    def __str__(self):
        return json.dumps(self._document, separators=(",", ":"))

    def __repr__(self):
        return "Differences(%s)" % self


class Differentiator(object):
    """Reusable settings for `Differences.between`.

    Immutable: the `with_*` methods return new instances.
    """

    def __init__(self, silent_fields=None, composite_fields=None):
        self._silent_fields = tuple(silent_fields or ())
        self._composite_fields = tuple(composite_fields or ())

    @property
    def silent_fields(self):
        return list(self._silent_fields)

    @property
    def composite_fields(self):
        return list(self._composite_fields)

    def with_silent_fields(self, silent_fields):
        return Differentiator(silent_fields, self._composite_fields)

    def with_composite_fields(self, composite_fields):
        return Differentiator(self._silent_fields, composite_fields)

    def between(self, obj1, obj2):
        return Differences.between(
            obj1, obj2, self.silent_fields, self.composite_fields)
