# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from jsondelta import DiffFlags, diff, diff_document
from jsondelta.diff_format import DiffOp, op_add, op_move, op_remove, op_replace, op_test
from jsondelta.diffing.normalize import (
    follow_path, introduce_moves, introduce_copies, is_copy_allowed, rebase_path,
    unchanged_values,
)
from jsondelta.pointer import JsonPointer, ROOT
from jsondelta.values import EquivalenceKey

from .utils import check_diff_and_patch, check_entries_replay


def p(text):
    return JsonPointer.parse(text)


def test_rebase_path_same_array():
    diffs = [
        op_remove(p("/a/0"), 1),
        op_add(p("/a/1"), 2),
        op_add(p("/a/2"), 3),
    ]
    assert rebase_path(p("/a/5"), diffs, 0, 1) == p("/a/6")
    assert rebase_path(p("/a/5"), diffs, 1, 3) == p("/a/3")
    assert rebase_path(p("/a/5"), diffs, 0, 3) == p("/a/4")
    # Nothing to rebase over
    assert rebase_path(p("/a/5"), diffs, 2, 2) == p("/a/5")


def test_rebase_path_ignores_unrelated_entries():
    diffs = [
        op_add(p("/b/0"), 1),
        op_add(p("/a/0/x"), 1),
        op_replace(p("/a/0"), 1, 2),
        op_test(p("/a/0"), 2),
        op_add(p("/a/key"), 2),
    ]
    assert rebase_path(p("/a/3"), diffs, 0, len(diffs)) == p("/a/3")
    # Only index tokens of the rebased path are adjusted
    diffs = [op_remove(p("/a/0"), 1)]
    assert rebase_path(p("/a"), diffs, 0, 1) == p("/a")


def test_rebase_path_independent_depths():
    diffs = [
        op_remove(p("/0/1"), "q"),
        op_add(p("/1"), "n"),
        op_remove(p("/2/0"), "r"),
        op_add(p("/2/1"), "q"),
    ]
    assert rebase_path(p("/2/1"), diffs, 1, 3) == p("/1/2")


def test_move_over_two_array_levels():
    document = [["p", "q"], ["r", "s"]]
    diffs = [
        op_remove(p("/0/1"), "q"),
        op_add(p("/1"), "n"),
        op_remove(p("/2/0"), "r"),
        op_add(p("/2/1"), "q"),
    ]
    expected = check_entries_replay(diffs, document)
    assert expected == [["p"], "n", ["s", "q"]]

    introduce_moves(diffs)
    assert [e.op for e in diffs] == [DiffOp.MOVE, DiffOp.ADD, DiffOp.REMOVE]
    assert diffs[0].from_path == p("/0/1")
    assert diffs[0].path == p("/1/2")
    assert check_entries_replay(diffs, document) == expected


def test_move_pairs_first_match_only():
    diffs = [
        op_remove(p("/a"), 1),
        op_add(p("/b"), 1),
        op_add(p("/c"), 1),
    ]
    introduce_moves(diffs)
    assert [e.op for e in diffs] == [DiffOp.MOVE, DiffOp.ADD]
    assert diffs[0].from_path == p("/a")
    assert diffs[0].path == p("/b")
    assert diffs[1].path == p("/c")


def test_move_uses_equivalence():
    diffs = [op_remove(p("/a"), 5), op_add(p("/b"), 5.0)]
    introduce_moves(diffs)
    assert len(diffs) == 1
    assert diffs[0].op == DiffOp.MOVE

    diffs = [op_remove(p("/a"), True), op_add(p("/b"), 1)]
    introduce_moves(diffs)
    assert [e.op for e in diffs] == [DiffOp.REMOVE, DiffOp.ADD]


def test_move_keeps_removal_test_first():
    document = {"a": {}, "b": {"x": 1}}
    diffs = [
        op_add(p("/a/y"), 1),
        op_test(p("/b/x"), 1),
        op_remove(p("/b/x"), 1),
    ]
    expected = check_entries_replay(diffs, document)
    introduce_moves(diffs, DiffFlags.EMIT_TEST_OPERATIONS)
    assert [e.op for e in diffs] == [DiffOp.TEST, DiffOp.MOVE]
    assert diffs[0].path == p("/b/x")
    assert check_entries_replay(diffs, document) == expected


def test_is_copy_allowed():
    assert is_copy_allowed(p("/a"), p("/b"))
    assert is_copy_allowed(p("/0"), p("/2"))
    assert is_copy_allowed(p("/a/0"), p("/a/0/x"))
    assert not is_copy_allowed(p("/a"), p("/a"))
    assert not is_copy_allowed(p("/2"), p("/0"))
    assert not is_copy_allowed(p("/x/3/a"), p("/x/1/b"))
    # Indices compare as numbers, not as strings
    assert not is_copy_allowed(p("/10"), p("/9"))
    assert is_copy_allowed(p("/9"), p("/10"))


def test_unchanged_values():
    source = {"a": [1, {"k": "v"}], "b": {"c": 2, "d": 3}, "e": "gone"}
    target = {"a": [1, {"k": "w"}, 4], "b": {"c": 2, "d": 4}, "f": "new"}
    unchanged = unchanged_values(source, target)
    assert unchanged == {
        EquivalenceKey(1): p("/a/0"),
        EquivalenceKey(2): p("/b/c"),
    }
    assert unchanged_values([1], [1.0]) == {EquivalenceKey([1]): ROOT}


def test_unchanged_values_first_path_wins():
    unchanged = unchanged_values({"a": "x", "b": "x"}, {"a": "x", "b": "x", "c": 1})
    assert unchanged[EquivalenceKey("x")] == p("/a")


def test_introduce_copies():
    source = {"a": {"deep": [1, 2]}}
    target = {"a": {"deep": [1, 2]}, "b": {"deep": [1, 2]}}
    diffs = [op_add(p("/b"), {"deep": [1, 2]})]
    introduce_copies(source, target, diffs)
    assert [e.op for e in diffs] == [DiffOp.COPY]
    assert diffs[0].from_path == p("/a")

    diffs = [op_add(p("/b"), {"deep": [1, 2]})]
    introduce_copies(source, target, diffs, DiffFlags.EMIT_TEST_OPERATIONS)
    assert [e.op for e in diffs] == [DiffOp.TEST, DiffOp.COPY]
    assert diffs[0].path == p("/a")
    assert diffs[0].value == {"deep": [1, 2]}


def test_copies_never_point_backwards():
    examples = [
        ([1, 2, 3], [1, 2, 3, 1, 2]),
        (["a", "b", "c"], ["c", "a", "b", "c"]),
        ({"x": [0, 1], "y": [1, 0]}, {"x": [0, 1, 1], "y": [1, 0, 0]}),
    ]
    for a, b in examples:
        for e in diff(a, b):
            if e.op == DiffOp.COPY:
                assert is_copy_allowed(e.from_path, e.path)


def test_follow_path():
    diffs = [
        op_remove(p("/m/0"), 3),
        op_add(p("/m/0"), 7),
        op_add(p("/m/5"), 7),
        op_add(p("/k/1/0"), 3),
    ]
    assert follow_path(p("/m/2"), diffs, 0, 1) == p("/m/1")
    assert follow_path(p("/m/2"), diffs, 0, 4) == p("/m/2")
    assert follow_path(p("/k/1"), diffs, 0, 3) == p("/k/1")
    # Removed nodes and their children are lost
    assert follow_path(p("/m/0"), diffs, 0, 1) is None
    assert follow_path(p("/m/0/x"), diffs, 0, 1) is None
    # So are nodes changed from inside
    assert follow_path(p("/k/1"), diffs, 3, 4) is None


def test_follow_path_over_moves_and_keys():
    assert follow_path(p("/m/2"), [op_move(p("/m/0"), p("/m/3"))], 0, 1) == p("/m/1")
    assert follow_path(p("/m/2"), [op_move(p("/m/3"), p("/m/0"))], 0, 1) == p("/m/3")
    assert follow_path(p("/o/x"), [op_add(p("/o/y"), 1)], 0, 1) == p("/o/x")
    assert follow_path(p("/o/x"), [op_add(p("/o/x"), 1)], 0, 1) is None
    assert follow_path(p("/o/x"), [op_replace(p("/o"), {}, {})], 0, 1) is None
    assert follow_path(p("/o/x"), [op_replace(ROOT, {}, {})], 0, 1) is None
    assert follow_path(p("/o/x"), [op_test(p("/o"), {})], 0, 1) == p("/o/x")


def test_copy_source_follows_earlier_moves():
    a = {"k": [[4, 1], [], [], [1]], "m": [3, 0, 3]}
    b = {"k": [[4, 1], [3], [3], [1]], "m": [0, 3, 3]}
    assert diff_document(a, b) == [
        {"op": "move", "from": "/m/0", "path": "/k/1/0"},
        {"op": "copy", "from": "/m/1", "path": "/k/2/0"},
        {"op": "copy", "from": "/m/1", "path": "/m/2"},
    ]
    check_diff_and_patch(a, b)
    document = check_diff_and_patch(a, b, flags=DiffFlags.defaults() | DiffFlags.EMIT_TEST_OPERATIONS)
    for e in document:
        if e["op"] == "copy":
            assert is_copy_allowed(p(e["from"]), p(e["path"]))


def test_copy_falls_back_to_add():
    source = {"a": 1}
    target = {"a": 1, "c": 1}
    # The unchanged node is replaced before the add is reached
    diffs = [op_replace(p("/a"), 1, 2), op_add(p("/c"), 1)]
    introduce_copies(source, target, diffs)
    assert [e.op for e in diffs] == [DiffOp.REPLACE, DiffOp.ADD]


def test_copy_tests_hold_the_copied_value():
    source = {"a": [5]}
    target = {"a": [5], "b": [5.0]}
    diffs = [op_add(p("/b"), [5.0])]
    introduce_copies(source, target, diffs, DiffFlags.EMIT_TEST_OPERATIONS)
    assert [e.op for e in diffs] == [DiffOp.TEST, DiffOp.COPY]
    assert diffs[0].path == p("/a")
    assert diffs[0].value == [5]
    assert isinstance(diffs[0].value[0], int)
    assert check_entries_replay(diffs, source) == {"a": [5], "b": [5]}
