# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

import jsondelta.log

from .args import (
    add_generic_args, add_diff_args, add_filename_args, add_prettyprint_args,
    ConfigBackedParser, prettyprint_config_from_args,
    )
from .config import diff_flags_from_settings
from .diffing import diff
from .errors import JsonDeltaError
from .prettyprint import pretty_print_diff
from .utils import EXPLICIT_MISSING_FILE, read_json, write_json, setup_std_streams


_description = "Compute the JSON Patch transforming one JSON document into another."


def main_diff(args):
    """Main handler of diff CLI"""
    base = args.base
    remote = args.remote
    output = getattr(args, 'out', None)

    for fn in (base, remote):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    try:
        a = read_json(base)
        b = read_json(remote)
    except ValueError as e:
        jsondelta.log.error("Could not read JSON input: %s", e)
        return 1

    try:
        d = diff(a, b, flags=diff_flags_from_settings(args),
                 composite_paths=args.composite_paths)
    except JsonDeltaError as e:
        jsondelta.log.error("%s", e)
        return 1
    document = d.to_document()

    # Output as JSON to file, or print to stdout:
    if output:
        write_json(document, output)
    elif args.json:
        print(json.dumps(document, indent=2, separators=(",", ": ")))
    else:
        # This printer is to keep the unit tests passing,
        # some tests capture output with capsys which doesn't
        # pick up on sys.stdout.write()
        class Printer:
            def write(self, text):
                print(text, end="")
        config = prettyprint_config_from_args(args, out=Printer())
        pretty_print_diff(document, config)

    return 0


def _build_arg_parser(prog='jsondelta-diff'):
    """Creates an argument parser for the jsondelta-diff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["base", "remote"])

    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the diff is written to this file. "
             "Otherwise it is printed to the terminal.")
    parser.add_argument(
        '--json',
        action='store_true',
        default=False,
        help="print the diff as a JSON Patch document instead of "
             "a human readable listing.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
