# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple

VersionInfo = namedtuple("VersionInfo", ["major", "minor", "micro"])

version_info = VersionInfo(0, 3, 0)

__version__ = ".".join(str(part) for part in version_info)
