# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os
import sys

import jsondelta.log

from .args import ConfigBackedParser, add_generic_args, add_filename_args, add_compatibility_args
from .config import compatibility_flags_from_settings
from .errors import JsonDeltaError
from .patching import validate
from .utils import read_json, setup_std_streams


_description = "Check that a file holds a well formed JSON Patch document."


def main_validate(args):
    patch_filename = args.patch
    if not os.path.exists(patch_filename):
        print("Missing file {}".format(patch_filename))
        return 1

    try:
        document = read_json(patch_filename)
    except ValueError as e:
        jsondelta.log.error("Could not read JSON input: %s", e)
        return 1

    try:
        validate(document, flags=compatibility_flags_from_settings(args))
    except JsonDeltaError as e:
        print("Invalid patch {}: {}".format(patch_filename, e))
        return 1

    print("Valid patch {} ({} operations)".format(patch_filename, len(document)))
    return 0


def _build_arg_parser(prog='jsondelta-validate'):
    """Creates an argument parser for the jsondelta-validate command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_compatibility_args(parser, value_only=True)
    add_filename_args(parser, ["patch"])
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_validate(arguments)


if __name__ == "__main__":
    sys.exit(main())
