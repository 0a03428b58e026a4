# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""RFC 6901 JSON Pointers.

A pointer is an immutable sequence of reference tokens. Tokens are
always kept as strings; whether a token addresses an array element is
decided from its spelling (see `is_array_index`) and from the container
it is applied to.
"""

import re

from .errors import MalformedPointerError, NoParentError, PointerEvaluationError

__all__ = ["JsonPointer", "ROOT", "APPEND_TOKEN", "is_array_index", "is_numeric_token"]


# Token addressing the (nonexistent) element after the last array element
APPEND_TOKEN = "-"

_array_index_re = re.compile(r"^(0|[1-9][0-9]*)$")
_numeric_re = re.compile(r"^[0-9]+$")


def is_array_index(token):
    "True for tokens spelled as canonical non-negative decimals."
    return bool(_array_index_re.match(token))


def is_numeric_token(token):
    "True for tokens made only of decimal digits, leading zeros allowed."
    return bool(_numeric_re.match(token))


def escape_token(token):
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token):
    # Order matters: "~01" must decode to "~1", not "/"
    return token.replace("~1", "/").replace("~0", "~")


def _as_token(token):
    if isinstance(token, bool):
        raise TypeError("Pointer tokens must be str or int, not bool")
    if isinstance(token, int):
        if token < 0:
            raise ValueError("Array index tokens must be non-negative, got %d" % token)
        return str(token)
    if not isinstance(token, str):
        raise TypeError("Pointer tokens must be str or int, not %r" % type(token))
    return token


class JsonPointer(object):
    """An immutable, hashable JSON Pointer.

    Construct from a sequence of tokens, or use `JsonPointer.parse` for
    the string form. Integer tokens are rendered canonically.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens=()):
        object.__setattr__(self, "_tokens", tuple(_as_token(t) for t in tokens))

    def __setattr__(self, name, value):
        raise AttributeError("JsonPointer is immutable")

    @classmethod
    def parse(cls, text):
        "Parse the string form of a pointer, e.g. '/a~1b/0'."
        if not isinstance(text, str):
            raise MalformedPointerError("JSON Pointer must be a string, got %r" % (text,))
        if text == "":
            return ROOT
        if not text.startswith("/"):
            raise MalformedPointerError(
                "Invalid JSON Pointer %r: must be empty or start with '/'" % (text,))
        return cls(unescape_token(t) for t in text[1:].split("/"))

    @property
    def tokens(self):
        return self._tokens

    def is_root(self):
        return not self._tokens

    def append(self, token):
        "Return a new pointer with one more trailing token."
        return JsonPointer(self._tokens + (_as_token(token),))

    def parent(self):
        if not self._tokens:
            raise NoParentError("Root pointer has no parent")
        return JsonPointer(self._tokens[:-1])

    def last(self):
        if not self._tokens:
            raise NoParentError("Root pointer has no last token")
        return self._tokens[-1]

    def with_token(self, depth, token):
        "Return a copy of this pointer with the token at `depth` replaced."
        tokens = list(self._tokens)
        tokens[depth] = _as_token(token)
        return JsonPointer(tokens)

    def is_prefix_of(self, other):
        n = len(self._tokens)
        return n <= len(other._tokens) and other._tokens[:n] == self._tokens

    def evaluate(self, document):
        """Return the value this pointer addresses inside `document`.

        Raises PointerEvaluationError if a token cannot be resolved.
        """
        current = document
        for i, token in enumerate(self._tokens):
            if isinstance(current, list):
                if not is_array_index(token):
                    if token == APPEND_TOKEN:
                        self._fail(i, "Array index %s is out of bounds" % token, current)
                    self._fail(i, "Can't reference field \"%s\" on array" % token, current)
                index = int(token)
                if index >= len(current):
                    self._fail(i, "Array index %s is out of bounds" % token, current)
                current = current[index]
            elif isinstance(current, dict):
                if token not in current:
                    self._fail(i, "Missing field \"%s\"" % token, current)
                current = current[token]
            else:
                self._fail(i, "Can't reference past scalar value", current)
        return current

    def _fail(self, depth, message, target):
        raise PointerEvaluationError(message, JsonPointer(self._tokens[:depth]), target)

    def __len__(self):
        return len(self._tokens)

    def __iter__(self):
        return iter(self._tokens)

    def __getitem__(self, i):
        return self._tokens[i]

    def __eq__(self, other):
        if not isinstance(other, JsonPointer):
            return NotImplemented
        return self._tokens == other._tokens

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._tokens)

    def __str__(self):
        return "".join("/" + escape_token(t) for t in self._tokens)

    def __repr__(self):
        return "JsonPointer(%r)" % str(self)

    def __reduce__(self):
        return (JsonPointer, (self._tokens,))


ROOT = JsonPointer()
