# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import sys

from .values import json_default

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def read_json(f, on_null=None):
    """Read and return a JSON document from filename

    Parameters:
        f:  The filename to read from or null filename
            ("/dev/null" on *nix, "nul" on Windows).
            Alternatively a file-like object can be passed.
        on_null: What to return when filename null
            None: return None (a JSON null document)
            "empty": return empty dict
    """
    if f == EXPLICIT_MISSING_FILE:
        if on_null is None:
            return None
        elif on_null == 'empty':
            return {}
        raise ValueError(
            'Not valid value for `on_null`: %r. Valid values '
            'are None or "empty"' % (on_null,))
    if isinstance(f, str):
        with io.open(f, encoding='utf-8') as fo:
            return json.load(fo)
    return json.load(f)


def write_json(obj, f, indent=2):
    "Write obj as JSON to a filename or file-like object."
    if isinstance(f, str):
        with io.open(f, 'w', encoding='utf-8') as fo:
            return write_json(obj, fo, indent=indent)
    json.dump(obj, f, indent=indent, separators=(",", ": "), default=json_default)
    f.write('\n')


def dumps_json(obj, indent=2):
    return json.dumps(obj, indent=indent, separators=(",", ": "), default=json_default)


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        if stream is not getattr(sys, '__%s__' % name):
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        if errors == 'strict' or errors.startswith('surrogate'):
            setattr(sys, name, codecs.getwriter(enc)(stream.buffer, errors='backslashreplace'))


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """
    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
