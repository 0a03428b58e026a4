#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib

HERE = pathlib.Path(__file__).parent.absolute()

JSONDELTA_PATH = HERE / "jsondelta"


def get_version(path):
    "Get the version string of the package from its _version.py"
    version_ns = {}
    with open(path) as f:
        exec(f.read(), version_ns)
    return version_ns['__version__']


VERSION = get_version(JSONDELTA_PATH / '_version.py')

with open(HERE / 'README.md') as f:
    LONG_DESCRIPTION = f.read()


if __name__ == '__main__':
    setup(
      name='jsondelta',
      version=VERSION,
      description='Compute and apply RFC 6902 JSON Patch documents',
      long_description=LONG_DESCRIPTION,
      long_description_content_type='text/markdown',
      author='Jupyter Development Team',
      license='BSD',
      packages=find_packages(include=['jsondelta', 'jsondelta.*']),
      package_data={
          'jsondelta.tests': ['files/*.json'],
      },
      python_requires='>=3.7',
      install_requires=[
          'colorama',
          'jupyter_core',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'pytest>=6.0',
          ],
      },
      entry_points={
          'console_scripts': [
              'jsondelta = jsondelta.__main__:main_dispatch',
              'jsondelta-diff = jsondelta.diffapp:main',
              'jsondelta-patch = jsondelta.patchapp:main',
              'jsondelta-validate = jsondelta.validateapp:main',
          ],
      },
      classifiers=[
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
      ],
    )
