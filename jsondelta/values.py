# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Comparison of JSON-like values.

Two relations are defined here. `equivalent` is the one the diff
engine relies on: numbers are compared by decimal value so that 5 and
5.0 are the same. `structurally_equal` is the strict one used by the
test operation for non-numeric values: 5 and 5.0 differ when nested in
a container. Booleans are never numbers under either relation.
"""

from decimal import Decimal
import json
import math

__all__ = [
    "NodeType", "node_type", "is_number", "is_container",
    "equivalent", "equivalence_hash", "EquivalenceKey",
    "structurally_equal", "show",
    ]


class NodeType:
    "Collection of the kinds of node a JSON value can be."
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def is_number(value):
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_container(value):
    return isinstance(value, (list, dict))


def node_type(value):
    "Return the NodeType of a JSON-like value."
    if value is None:
        return NodeType.NULL
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if is_number(value):
        return NodeType.NUMBER
    if isinstance(value, str):
        return NodeType.STRING
    if isinstance(value, list):
        return NodeType.ARRAY
    if isinstance(value, dict):
        return NodeType.OBJECT
    raise TypeError("Not a JSON value: %r" % (value,))


def _decimal(number):
    if isinstance(number, Decimal):
        return number
    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        # repr gives the shortest round-tripping form, so 0.1 == Decimal("0.1")
        return Decimal(repr(number))
    return Decimal(number)


def _numbers_equivalent(a, b):
    da, db = _decimal(a), _decimal(b)
    if da is None or db is None:
        return float(a) == float(b)
    return da == db


def equivalent(a, b):
    """Numeric-aware equality of two JSON-like values.

    Containers must have the same kind and size, with equivalent
    children. Object key sets must match exactly.
    """
    if a is b:
        return True
    if is_number(a) and is_number(b):
        return _numbers_equivalent(a, b)
    if isinstance(a, list):
        if not isinstance(b, list) or len(a) != len(b):
            return False
        return all(equivalent(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        if not isinstance(b, dict) or len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not equivalent(value, b[key]):
                return False
        return True
    if node_type(a) != node_type(b):
        return False
    return a == b


def equivalence_hash(value):
    "Hash consistent with `equivalent`."
    if is_number(value):
        d = _decimal(value)
        # Python guarantees hash(Decimal("5.0")) == hash(5)
        return hash(float(value)) if d is None else hash(d)
    if isinstance(value, list):
        return hash((NodeType.ARRAY, tuple(equivalence_hash(v) for v in value)))
    if isinstance(value, dict):
        return hash((NodeType.OBJECT, frozenset(
            (k, equivalence_hash(v)) for k, v in value.items())))
    return hash((node_type(value), value))


class EquivalenceKey(object):
    """Wraps a JSON-like value so it can be used as a dict key.

    Keys compare with `equivalent` and hash with `equivalence_hash`.
    The wrapped value must not be mutated while the key is in use.
    """

    __slots__ = ("value", "_hash")

    def __init__(self, value):
        self.value = value
        self._hash = equivalence_hash(value)

    def __eq__(self, other):
        if not isinstance(other, EquivalenceKey):
            return NotImplemented
        return self._hash == other._hash and equivalent(self.value, other.value)

    def __hash__(self):
        return self._hash

    def __repr__(self):
        return "EquivalenceKey(%r)" % (self.value,)


def _number_kind(value):
    if isinstance(value, int):
        return int
    return type(value)


def structurally_equal(a, b):
    """Strict equality: numbers of different representation differ.

    `5 == 5.0` is False here, and so is `True == 1`.
    """
    ta, tb = node_type(a), node_type(b)
    if ta != tb:
        return False
    if ta == NodeType.NUMBER:
        return _number_kind(a) is _number_kind(b) and a == b
    if ta == NodeType.ARRAY:
        return len(a) == len(b) and all(structurally_equal(x, y) for x, y in zip(a, b))
    if ta == NodeType.OBJECT:
        if a.keys() != b.keys():
            return False
        return all(structurally_equal(v, b[k]) for k, v in a.items())
    return a == b


def json_default(obj):
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError("Object of type %s is not JSON serializable" % type(obj).__name__)


def show(value):
    "Short, type aware description of a value for error messages."
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, Decimal):
        return "value " + str(value)
    return "value " + json.dumps(value, default=json_default)
