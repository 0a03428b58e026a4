# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .log import init_logging, set_jsondelta_log_level


class ConfigBackedParser(argparse.ArgumentParser):

    def parse_known_args(self, args=None, namespace=None):
        entrypoint = self.prog.split(' ')[0]
        try:
            defs = get_defaults_for_argparse(entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_jsondelta_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_jsondelta_log_level(level, True)


def modify_config_for_print(config):
    output = {}
    for k, v in config.items():
        if isinstance(v, dict):
            output[k] = modify_config_for_print(v)
            if not output[k]:
                output[k] = '{}'
        else:
            output[k] = json.dumps(v)
    return output


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        from .prettyprint import pretty_print_dict, PrettyPrintConfig

        header = entrypoint_configurables[parser.prog].__name__
        config = build_config(parser.prog, True)
        pretty_print_dict(
            {
                header: modify_config_for_print(config),
            },
            config=PrettyPrintConfig(out=sys.stderr)
        )
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all jsondelta commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_diff_args(parser):
    """Adds a set of arguments for commands that compute diffs.
    """
    flags = parser.add_argument_group(
        title='diff options',
        description='Control which operations the diff contains.')
    flags.add_argument(
        '--keep-remove-values',
        dest='omit_value_on_remove',
        action='store_false',
        default=True,
        help="include the removed value in remove operations.")
    flags.add_argument(
        '--no-moves',
        dest='omit_move_operation',
        action='store_true',
        default=False,
        help="never fold remove/add pairs into move operations.")
    flags.add_argument(
        '--no-copies',
        dest='omit_copy_operation',
        action='store_true',
        default=False,
        help="never turn additions of unchanged values into copy operations.")
    flags.add_argument(
        '--atomic-arrays',
        dest='omit_composite_array',
        action='store_true',
        default=False,
        help="report any change inside an array as a replace of the whole array.")
    flags.add_argument(
        '--original-values',
        dest='add_original_value_on_replace',
        action='store_true',
        default=False,
        help="include the replaced value as 'fromValue' in replace operations.")
    flags.add_argument(
        '--emit-tests',
        dest='emit_test_operations',
        action='store_true',
        default=False,
        help="precede removals and replacements with a test of the old value.")
    flags.add_argument(
        '-c', '--composite',
        dest='composite_paths',
        action='append',
        default=[],
        metavar='POINTER',
        help="a JSON pointer to a subtree that is replaced as a whole when "
             "changed. Can be given multiple times.")


def add_compatibility_args(parser, value_only=False):
    """Adds a set of arguments relaxing how patches are interpreted.
    """
    compat = parser.add_argument_group(
        title='compatibility options',
        description='Relax how operations are interpreted.')
    compat.add_argument(
        '--missing-as-null',
        dest='missing_values_as_nulls',
        action='store_true',
        default=False,
        help="treat a missing 'value' field of add/replace/test as null.")
    if value_only:
        return
    compat.add_argument(
        '--ignore-missing-array-elements',
        dest='remove_nonexistent_array_element',
        action='store_true',
        default=False,
        help="ignore removals of array indices past the end of the array.")
    compat.add_argument(
        '--replace-adds-missing',
        dest='allow_missing_target_object_on_replace',
        action='store_true',
        default=False,
        help="let replace create object fields that do not exist yet.")


filename_help = {
    "base":   "The base JSON filename.",
    "remote": "The remote modified JSON filename.",
    "patch":  "The patch filename, output from jsondelta-diff.",
    }


def add_filename_args(parser, names):
    """Add the base, remote and patch positional arguments.

    Helps getting consistent doc strings.
    """
    for name in names:
        parser.add_argument(name, help=filename_help[name])


def add_prettyprint_args(parser):
    """Adds optional arguments for controlling pretty print behavior.
    """
    parser.add_argument(
        '--no-color',
        dest='use_color',
        action="store_false",
        default=True,
        help=("prevent use of ANSI color code escapes for text output")
    )


def prettyprint_config_from_args(arguments, **kwargs):
    from .prettyprint import PrettyPrintConfig
    return PrettyPrintConfig(
        use_color=getattr(arguments, 'use_color', True),
        **kwargs
    )
