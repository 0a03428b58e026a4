# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from io import StringIO

import colorama
import pytest

from jsondelta import prettyprint as pp
from jsondelta import diff_document, DiffFlags


def TestConfig(use_color=True):
    return pp.PrettyPrintConfig(out=StringIO(), use_color=use_color)


def test_pretty_print_dict_complex():
    d = {
        'a': 5,
        'b': [1, 2, 3],
        'c': {
            'x': 'y',
        },
    }
    prefix = '-'
    config = TestConfig()
    pp.pretty_print_dict(d, prefix, config)
    text = config.out.getvalue()
    assert text == (
        "-a: 5\n"
        "-b: [1, 2, 3]\n"
        "-c:\n"
        "-  x: y\n"
    )


def test_pretty_print_value():
    config = TestConfig(use_color=False)
    pp.pretty_print_value({"a": [1]}, "+  ", config)
    assert config.out.getvalue() == (
        '+  {\n'
        '+    "a": [\n'
        '+      1\n'
        '+    ]\n'
        '+  }\n'
    )


def test_pretty_print_diff_no_color():
    a = {"keep": 1, "gone": "x", "arr": [1, 2], "old": 1, "from": {"v": 1}}
    b = {"keep": 1, "arr": [1, 2, 3], "old": 2, "to": {"v": 1}}
    flags = DiffFlags.ADD_ORIGINAL_VALUE_ON_REPLACE | DiffFlags.EMIT_TEST_OPERATIONS
    document = diff_document(a, b, flags=flags)
    config = TestConfig(use_color=False)
    pp.pretty_print_diff(document, config)
    text = config.out.getvalue()
    assert text == (
        '## test /gone:\n'
        '   "x"\n'
        '## remove /gone:\n'
        '-  "x"\n'
        '## add /arr/2:\n'
        '+  3\n'
        '## test /old:\n'
        '   1\n'
        '## replace /old:\n'
        '-  1\n'
        '+  2\n'
        '## test /from:\n'
        '   {\n'
        '     "v": 1\n'
        '   }\n'
        '## move /from -> /to\n'
    )


def test_pretty_print_root_paths():
    config = TestConfig(use_color=False)
    pp.pretty_print_diff([{"op": "replace", "path": "", "value": None}], config)
    assert config.out.getvalue() == "## replace <root>:\n+  null\n"


def test_pretty_print_color():
    config = TestConfig(use_color=True)
    pp.pretty_print_diff([{"op": "add", "path": "/a", "value": 1}], config)
    text = config.out.getvalue()
    assert colorama.Fore.GREEN in text
    assert colorama.Style.RESET_ALL in text


def test_pretty_print_unknown_op():
    with pytest.raises(ValueError):
        pp.pretty_print_diff([{"op": "frob", "path": "/a"}], TestConfig())
