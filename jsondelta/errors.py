# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Exceptions raised by the pointer, diff and patch machinery.

Every fault derives from JsonDeltaError so that callers (and the
command line apps) can catch the whole family with one clause.
"""


class JsonDeltaError(Exception):
    pass


class MalformedPointerError(JsonDeltaError, ValueError):
    "Raised when a JSON Pointer string does not follow RFC 6901 syntax."
    pass


class NoParentError(JsonDeltaError, ValueError):
    "Raised when asking the root pointer for its parent or last token."
    pass


class PointerEvaluationError(JsonDeltaError):
    """A pointer could not be resolved against a document.

    `path` is the pointer up to (not including) the token that failed,
    `target` is the value reached at that point.
    """

    def __init__(self, message, path, target):
        super(PointerEvaluationError, self).__init__(message)
        self.message = message
        self.path = path
        self.target = target


class PatchApplicationError(JsonDeltaError):
    """An operation of a patch document could not be applied.

    Carries the operation name and the pointer where the fault was
    detected, either of which may be None for payload level problems.
    """

    def __init__(self, message, operation=None, path=None):
        super(PatchApplicationError, self).__init__(message)
        self.message = message
        self.operation = operation
        self.path = path

    def __str__(self):
        if self.operation is None:
            return self.message
        if self.path is None or self.path.is_root():
            location = "root"
        else:
            location = str(self.path)
        return "[{} Operation] {} at {}".format(
            self.operation.upper(), self.message, location)


class InvalidPatchError(PatchApplicationError):
    "The operation document itself is malformed."
    pass


class IndexOutOfBoundsError(PatchApplicationError):
    pass


class CannotRemoveRootError(PatchApplicationError):
    pass


class MissingFieldError(PatchApplicationError):
    pass


class ReferencePastScalarError(PatchApplicationError):
    pass


class TestFailedError(PatchApplicationError):
    "A test operation found a value different from the expected one."

    # Keep pytest from trying to collect this as a test class
    __test__ = False

    def __init__(self, message, operation, path, expected, found):
        super(TestFailedError, self).__init__(message, operation, path)
        self.expected = expected
        self.found = found


class DiffFormatError(JsonDeltaError, ValueError):
    "Raised for internally inconsistent diff entries."
    pass
