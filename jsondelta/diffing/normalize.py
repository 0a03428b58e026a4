# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Post-processing of primitive diff entries into move and copy operations.

Both passes rewrite the entry list in place. Entries are replayed in
list order when patching, so whenever an entry is moved earlier in the
list its pointers are rebased over the add/remove entries it now
precedes. Copy sources go the other way: they are followed over the
entries that come before the copy.
"""

import copy

import jsondelta.log

from ..diff_format import DiffFlags, DiffOp, op_copy, op_move, op_test
from ..errors import PointerEvaluationError
from ..patching import ApplyProcessor
from ..pointer import ROOT, is_array_index, is_numeric_token
from ..values import EquivalenceKey, equivalent

__all__ = [
    "introduce_moves", "introduce_copies", "is_copy_allowed", "unchanged_values",
    "advance_path", "follow_path",
    ]


def _shift_counters(path, entry, counters):
    "Account for an add/remove entry that shifts array positions along path."
    other = entry.path
    n = len(other)
    if n == 0 or n > len(path):
        return
    if other.tokens[:n-1] != path.tokens[:n-1]:
        return
    if not is_array_index(other.last()):
        return
    if entry.op == DiffOp.ADD:
        counters[n-1] -= 1
    elif entry.op == DiffOp.REMOVE:
        counters[n-1] += 1


def rebase_path(path, diffs, start, stop):
    """Rebase path over the add/remove entries diffs[start:stop].

    The result addresses, before those entries are applied, the
    same location path addresses after them.
    """
    counters = [0] * len(path)
    for entry in diffs[start:stop]:
        if entry.op in (DiffOp.ADD, DiffOp.REMOVE):
            _shift_counters(path, entry, counters)
    for depth, delta in enumerate(counters):
        if delta and is_array_index(path[depth]):
            path = path.with_token(depth, int(path[depth]) + delta)
    return path


def _is_removal_test(entry, removal):
    return (entry.op == DiffOp.TEST and entry.path == removal.path and
            equivalent(entry.value, removal.value))


def introduce_moves(diffs, flags=None):
    """Replace matching remove/add pairs with move entries.

    For each add or remove entry, the first later entry of the opposite
    kind carrying an equivalent value is folded into a single move at
    the position of the earlier entry.
    """
    emit_tests = flags is not None and DiffFlags.EMIT_TEST_OPERATIONS in flags
    moves = 0
    i = 0
    while i < len(diffs):
        first = diffs[i]
        if first.op not in (DiffOp.ADD, DiffOp.REMOVE):
            i += 1
            continue
        for j in range(i + 1, len(diffs)):
            second = diffs[j]
            if second.op not in (DiffOp.ADD, DiffOp.REMOVE) or second.op == first.op:
                continue
            if not equivalent(first.value, second.value):
                continue
            if first.op == DiffOp.REMOVE:
                to_path = rebase_path(second.path, diffs, i + 1, j)
                move = op_move(first.path, to_path)
                del diffs[j]
                diffs[i] = move
            else:
                from_path = rebase_path(second.path, diffs, i, j)
                move = op_move(from_path, first.path)
                del diffs[j]
                # The removal's own test now has to run before the move
                if emit_tests and _is_removal_test(diffs[j-1], second):
                    del diffs[j-1]
                    diffs[i] = move
                    diffs.insert(i, op_test(from_path, second.value))
                    i += 1
                else:
                    diffs[i] = move
            jsondelta.log.debug("Folded %s %s and %s %s into a move",
                                first.op, first.path, second.op, second.path)
            moves += 1
            break
        i += 1
    if moves:
        jsondelta.log.debug("Introduced %d move operations", moves)
    return diffs


def is_copy_allowed(source, destination):
    """Whether a copy from source to destination may replace an add.

    Refused when both pointers are equal, or when at any shared depth
    both tokens are numeric and the source index is the larger one.
    """
    for src, dst in zip(source, destination):
        if is_numeric_token(src) and is_numeric_token(dst) and int(src) > int(dst):
            return False
    return source != destination


def unchanged_values(source, target):
    """Map every value that is unchanged between source and target to
    the first pointer where it occurs unchanged.

    Keys are EquivalenceKey instances.
    """
    unchanged = {}
    _compute_unchanged(unchanged, ROOT, source, target)
    return unchanged


def _compute_unchanged(unchanged, path, source, target):
    if equivalent(source, target):
        unchanged.setdefault(EquivalenceKey(target), path)
        return
    if isinstance(source, dict) and isinstance(target, dict):
        for key, value in source.items():
            if key in target:
                _compute_unchanged(unchanged, path.append(key), value, target[key])
    elif isinstance(source, list) and isinstance(target, list):
        for i, (a, b) in enumerate(zip(source, target)):
            _compute_unchanged(unchanged, path.append(i), a, b)


def _after_removal(path, removed):
    if removed.is_prefix_of(path) or path.is_prefix_of(removed):
        return None
    n = len(removed)
    if n > len(path) or removed.tokens[:n-1] != path.tokens[:n-1]:
        return path
    index, token = removed.last(), path[n-1]
    if is_array_index(index) and is_array_index(token) and int(index) < int(token):
        return path.with_token(n-1, int(token) - 1)
    return path


def _after_addition(path, added):
    n = len(added)
    if n == 0 or (n > len(path) and path.is_prefix_of(added)):
        return None
    if n > len(path) or added.tokens[:n-1] != path.tokens[:n-1]:
        return path
    index, token = added.last(), path[n-1]
    if is_array_index(index) and is_array_index(token):
        if int(index) <= int(token):
            return path.with_token(n-1, int(token) + 1)
        return path
    if index == token:
        return None
    return path


def advance_path(path, entry):
    """Follow the node at path over one diff entry.

    Returns where the node is once entry has been applied, or None if
    entry may have replaced, dropped or modified it.
    """
    op = entry.op
    if op == DiffOp.TEST:
        return path
    if op == DiffOp.REPLACE:
        if entry.path.is_prefix_of(path) or path.is_prefix_of(entry.path):
            return None
        return path
    if op == DiffOp.REMOVE:
        return _after_removal(path, entry.path)
    if op == DiffOp.MOVE:
        path = _after_removal(path, entry.from_path)
        if path is None:
            return None
    return _after_addition(path, entry.path)


def _replay(processor, entry):
    "Apply a single diff entry with a patch processor."
    op = entry.op
    if op in (DiffOp.ADD, DiffOp.REPLACE):
        getattr(processor, op)(entry.path, copy.deepcopy(entry.value))
    elif op == DiffOp.REMOVE:
        processor.remove(entry.path)
    elif op in (DiffOp.MOVE, DiffOp.COPY):
        getattr(processor, op)(entry.from_path, entry.path)


def follow_path(path, diffs, start, stop):
    """Follow path over the entries diffs[start:stop].

    The counterpart of `rebase_path`: path addresses a node before the
    entries are applied, the result addresses it after them. Returns
    None if any of the entries may have changed the node.
    """
    for entry in diffs[start:stop]:
        path = advance_path(path, entry)
        if path is None:
            return None
    return path


def _holds_value(matched, document, value):
    try:
        found = matched.evaluate(document)
    except PointerEvaluationError:
        return False
    return equivalent(found, value)


def introduce_copies(source, target, diffs, flags=None):
    """Replace add entries by copies of values left unchanged elsewhere.

    Candidates come from the original source and target. A candidate
    pointer is followed over the entries preceding the add, which are
    replayed on a copy of source, and a copy is only emitted where the
    followed pointer still holds an equivalent value.
    """
    emit_tests = flags is not None and DiffFlags.EMIT_TEST_OPERATIONS in flags
    unchanged = unchanged_values(source, target)
    processor = ApplyProcessor(copy.deepcopy(source))
    copies = 0
    i = 0
    while i < len(diffs):
        entry = diffs[i]
        matched = None
        if entry.op == DiffOp.ADD:
            matched = unchanged.get(EquivalenceKey(entry.value))
        if matched is not None:
            matched = follow_path(matched, diffs, 0, i)
        if matched is not None and is_copy_allowed(matched, entry.path):
            document = processor.result()
            if _holds_value(matched, document, entry.value):
                if emit_tests:
                    found = copy.deepcopy(matched.evaluate(document))
                    diffs.insert(i, op_test(matched, found))
                    i += 1
                entry = diffs[i] = op_copy(matched, entry.path)
                copies += 1
        _replay(processor, entry)
        i += 1
    if copies:
        jsondelta.log.debug("Introduced %d copy operations", copies)
    return diffs
