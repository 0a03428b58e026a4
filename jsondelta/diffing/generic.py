# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import jsondelta.log

from ..diff_format import DiffFlags, Diffs, op_add, op_remove, op_replace, op_test
from ..pointer import ROOT
from ..values import equivalent

from .config import DiffConfig
from .lcs import longest_common_subsequence
from .normalize import introduce_moves, introduce_copies

__all__ = ["diff", "diff_document"]


def diff(source, target, flags=None, composite_paths=None):
    """Compute the diff of two json-like values.

    Returns a Diffs object; use `Diffs.to_document()` (or
    `diff_document`) for the RFC 6902 operation document.

    Values held by the entries are not copied: they are the nodes of
    source and target themselves. Patching copies them on use.
    """
    config = DiffConfig(flags=flags, composite_paths=composite_paths)
    entries = generate_diffs(ROOT, source, target, config)
    jsondelta.log.debug("Generated %d primitive diff entries", len(entries))

    if not config.has(DiffFlags.OMIT_MOVE_OPERATION):
        introduce_moves(entries, config.flags)

    if not config.has(DiffFlags.OMIT_COPY_OPERATION):
        introduce_copies(source, target, entries, config.flags)

    return Diffs(entries, config.flags, config.effective_composite_paths)


def diff_document(source, target, flags=None, composite_paths=None):
    "Compute the RFC 6902 operation document transforming source into target."
    return diff(source, target, flags=flags, composite_paths=composite_paths).to_document()


def generate_diffs(path, source, target, config):
    "Recursively compare source and target at path, returning a list of diff entries."
    composite = config.is_composite(source, target, path)
    diffs = []

    if not equivalent(source, target):
        if isinstance(source, list) and isinstance(target, list):
            diff_lists(path, source, target, diffs, config, composite)
        elif isinstance(source, dict) and isinstance(target, dict):
            diff_dicts(path, source, target, diffs, config, composite)
        else:
            if config.has(DiffFlags.EMIT_TEST_OPERATIONS):
                diffs.append(op_test(path, source))
            diffs.append(op_replace(path, source, target))

    if diffs and composite:
        return [op_replace(path, source, target)]
    return diffs


def _removal(path, value, diffs, config):
    if config.has(DiffFlags.EMIT_TEST_OPERATIONS):
        diffs.append(op_test(path, value))
    diffs.append(op_remove(path, value))


def diff_lists(path, source, target, diffs, config, composite=False):
    """Align two arrays on their longest common subsequence.

    Emitted pointers use a running insertion position rather than an
    index into either array, so the entries replay in emission order.
    A composite array stops as soon as anything has been emitted.
    """
    def collapsed():
        return composite and bool(diffs)

    lcs = longest_common_subsequence(source, target)
    n_src, n_tgt = len(source), len(target)
    i = j = k = 0
    pos = 0

    while k < len(lcs) and not collapsed():
        anchor = lcs[k]
        src_match = i < n_src and equivalent(anchor, source[i])
        tgt_match = j < n_tgt and equivalent(anchor, target[j])
        if src_match and tgt_match:
            i += 1
            j += 1
            k += 1
            pos += 1
        elif src_match:
            diffs.append(op_add(path.append(pos), target[j]))
            pos += 1
            j += 1
        elif tgt_match:
            _removal(path.append(pos), source[i], diffs, config)
            i += 1
        else:
            diffs.extend(generate_diffs(path.append(pos), source[i], target[j], config))
            i += 1
            j += 1
            pos += 1

    while i < n_src and j < n_tgt and not collapsed():
        diffs.extend(generate_diffs(path.append(pos), source[i], target[j], config))
        i += 1
        j += 1
        pos += 1

    if not collapsed():
        while j < n_tgt:
            diffs.append(op_add(path.append(pos), target[j]))
            pos += 1
            j += 1

    if not collapsed():
        while i < n_src:
            _removal(path.append(pos), source[i], diffs, config)
            i += 1


def diff_dicts(path, source, target, diffs, config, composite=False):
    """Compare two objects key by key.

    Source keys are visited first in their order, then keys only
    present in target.
    """
    for key, value in source.items():
        if composite and diffs:
            return
        if key not in target:
            _removal(path.append(key), value, diffs, config)
        else:
            diffs.extend(generate_diffs(path.append(key), value, target[key], config))

    for key, value in target.items():
        if composite and diffs:
            return
        if key not in source:
            diffs.append(op_add(path.append(key), value))
