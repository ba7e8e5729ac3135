"""Define static niftiio metadata

The long description is used in the niftiio top-level docstring.  This file
cannot import niftiio or use relative imports.
"""

__version__ = '1.0.0'

long_description = """
Read and write access to NIfTI1_ volumes: the 348 byte header, header
extensions and the voxel data, in single files (``.nii``) or header / image
pairs (``.hdr`` / ``.img``).

Voxel data are NumPy arrays, read into memory or memory mapped.  Voxel sizes,
the voxel to world affine (qform or sform), timing and intensity scaling come
from the header.

.. _NIfTI1: http://nifti.nimh.nih.gov/nifti-1/

License
=======

niftiio is licensed under the terms of the MIT license; see the COPYING
file.
"""
