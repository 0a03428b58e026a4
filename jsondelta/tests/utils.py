# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import json

from jsondelta import diff, apply
from jsondelta.diff_format import to_document
from jsondelta.values import equivalent


def assert_json_equivalent(a, b):
    assert equivalent(a, b), "%s != %s" % (json.dumps(a), json.dumps(b))


def check_diff_and_patch(a, b, flags=None, composite_paths=None):
    "Check that patching a with the diff of a and b yields b."
    a_before = copy.deepcopy(a)
    b_before = copy.deepcopy(b)
    d = diff(a, b, flags=flags, composite_paths=composite_paths)
    document = d.to_document()
    # The operation document must survive a JSON round trip
    document = json.loads(json.dumps(document))
    assert_json_equivalent(apply(document, a), b)
    # Neither input may be touched
    assert a == a_before
    assert b == b_before
    return document


def check_symmetric_diff_and_patch(a, b, flags=None, composite_paths=None):
    check_diff_and_patch(a, b, flags, composite_paths)
    check_diff_and_patch(b, a, flags, composite_paths)


def check_entries_replay(entries, document):
    "Check that a list of diff entries replays on document like its plain form."
    return apply(to_document(entries), copy.deepcopy(document))
