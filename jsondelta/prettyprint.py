# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import sys

import colorama

from .diff_format import DiffOp, OP, PATH, FROM, VALUE, FROM_VALUE
from .utils import dumps_json


# Indentation offset in pretty-print
IND = "  "


ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(self, out=sys.stdout, use_color=True):
        self.out = out
        self.use_color = use_color

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET


DefaultConfig = PrettyPrintConfig()


def pretty_print_value(value, prefix="", config=DefaultConfig):
    "Print a value as indented JSON with all lines prefixed."
    for line in dumps_json(value).splitlines():
        config.out.write("%s%s%s\n" % (prefix, line, config.RESET))


def pretty_print_diff_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path or "<root>", config.RESET))


def pretty_print_diff_entry(e, config=DefaultConfig):
    """Print one entry of an operation document.

    Values being added are prefixed with ADD, values going away with
    REMOVE and values being tested with KEEP.
    """
    op = e[OP]
    path = e.get(PATH)
    if op in (DiffOp.MOVE, DiffOp.COPY):
        config.out.write("%s%s %s -> %s%s\n" % (
            config.INFO, op, e.get(FROM) or "<root>", path or "<root>", config.RESET))
    elif op == DiffOp.ADD:
        pretty_print_diff_action("add", path, config)
        pretty_print_value(e.get(VALUE), config.ADD, config)
    elif op == DiffOp.REMOVE:
        pretty_print_diff_action("remove", path, config)
        if VALUE in e:
            pretty_print_value(e[VALUE], config.REMOVE, config)
    elif op == DiffOp.REPLACE:
        pretty_print_diff_action("replace", path, config)
        if FROM_VALUE in e:
            pretty_print_value(e[FROM_VALUE], config.REMOVE, config)
        pretty_print_value(e.get(VALUE), config.ADD, config)
    elif op == DiffOp.TEST:
        pretty_print_diff_action("test", path, config)
        pretty_print_value(e.get(VALUE), config.KEEP, config)
    else:
        raise ValueError("Unknown op %r" % (op,))


def pretty_print_diff(document, config=DefaultConfig):
    "Pretty-print an operation document."
    for e in document:
        pretty_print_diff_entry(e, config)


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict):
        config.out.write("%s%s:\n" % (prefix, k))
        pretty_print_dict(v, prefix+IND, config)
    else:
        config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_dict(d, prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          nested: value

    """
    for k in sorted(d):
        pretty_print_item(k, d[k], prefix, config)
