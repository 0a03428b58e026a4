# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

import jsondelta.log

from .args import (
    ConfigBackedParser, add_generic_args, add_filename_args, add_compatibility_args,
    )
from .config import compatibility_flags_from_settings
from .errors import JsonDeltaError
from .patching import apply
from .utils import EXPLICIT_MISSING_FILE, read_json, write_json, setup_std_streams


_description = "Apply a JSON Patch document, e.g. from jsondelta-diff, to a JSON document."


def main_patch(args):
    base_filename = args.base
    patch_filename = args.patch
    output_filename = args.output

    for fn in (base_filename, patch_filename):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    try:
        before = read_json(base_filename)
        document = read_json(patch_filename)
    except ValueError as e:
        jsondelta.log.error("Could not read JSON input: %s", e)
        return 1
    if patch_filename == EXPLICIT_MISSING_FILE:
        document = []

    try:
        after = apply(document, before, flags=compatibility_flags_from_settings(args))
    except JsonDeltaError as e:
        jsondelta.log.error("Patch failed: %s", e)
        return 1

    if output_filename:
        write_json(after, output_filename)
    else:
        print(json.dumps(after, indent=2, separators=(",", ": ")))

    return 0


def _build_arg_parser(prog='jsondelta-patch'):
    """Creates an argument parser for the jsondelta-patch command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_compatibility_args(parser)
    add_filename_args(parser, ["base", "patch"])
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="if supplied, the patched document is written "
             "to this file. Otherwise it is printed to the "
             "terminal.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_patch(arguments)


if __name__ == "__main__":
    sys.exit(main())
