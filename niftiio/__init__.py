# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##

from .info import __version__, long_description as __doc__

__doc__ += """
Quickstart
==========

::

   import numpy as np
   import niftiio as nio

   vol = nio.load('my_file.nii')

   data = vol.get_scaled_data()
   affine = vol.affine

   print(vol)

   nio.save(vol, 'my_file_copy.nii')

   new_vol = nio.Nifti1Volume.from_array(np.zeros((4, 4, 3), np.int16),
                                        voxel_size=(2, 2, 3))
   nio.save(new_vol, 'new_volume.hdr')
"""

# module imports
from . import geometry, imageglobals, units

# object imports
from .errors import (ImageFileError, NotANiftiFile, HeaderDataError,
                     ByteSwapUnsupported, UnsupportedDatatype,
                     InvalidAxisIndex, ConflictingGeometryEncoding,
                     InvalidAffineShape, MalformedSrow)
from .nifti1 import Nifti1Header, Nifti1Extension, Nifti1Extensions
from .volume import Nifti1Volume, reconcile, reconcile_header
from .loadsave import load, save


def test(verbose=1, extra_argv=None, doctests=False):
    """
    Run tests for niftiio using pytest

    Parameters
    ----------
    verbose: int, optional
        Verbosity value for test outputs. Positive values increase verbosity, and
        negative values decrease it. Default is 1.
    extra_argv : list, optional
        List with any extra arguments to pass to pytest.
    doctests: bool, optional
        If True, run doctests in module. Default is False.

    Returns
    -------
    code : ExitCode
        Returns the result of running the tests as a ``pytest.ExitCode`` enum
    """
    import pytest

    args = []

    verbose = int(verbose)
    if verbose > 0:
        args.append("-" + "v" * verbose)
    elif verbose < 0:
        args.append("-" + "q" * -verbose)

    if extra_argv:
        args.extend(extra_argv)
    if doctests:
        args.append("--doctest-modules")

    args.extend(["--pyargs", "niftiio"])

    return pytest.main(args=args)
