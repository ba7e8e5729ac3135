#!/usr/bin/env python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""
Setuptools entrypoint

Project metadata lives in ``pyproject.toml``.  This file should not be run
directly. To install, use:

    pip install .

To build a package for distribution, use:

    pip install --upgrade build
    python -m build

"""

from setuptools import setup

setup()
