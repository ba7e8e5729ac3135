# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Utilities to load and save NIfTI-1 volumes"""
from __future__ import annotations

import os
import typing as ty

import numpy as np

from .errors import ImageFileError
from .filename_parser import _stringify_path, types_filenames, is_pair_filename
from .nifti1 import Nifti1Extensions
from .openers import Opener
from .volume import Nifti1Volume, reconcile
from .volumeutils import array_from_file, array_to_file

if ty.TYPE_CHECKING:  # pragma: no cover
    from .filename_parser import FileSpec


def load(filename: FileSpec, mmap: bool | str = False) -> Nifti1Volume:
    """Load NIfTI-1 volume from `filename`

    Parameters
    ----------
    filename : str or os.PathLike
       single file (``.nii``), or either file of a ``.hdr`` / ``.img`` pair
    mmap : {False, True, 'c', 'r', 'r+'}, optional
       False reads the voxel data into memory.  Otherwise memory map the
       voxel data with this mode; True means 'c' (copy on write).

    Returns
    -------
    vol : Nifti1Volume

    Raises
    ------
    NotANiftiFile
        if the header does not have ``sizeof_hdr`` 348
    ByteSwapUnsupported
        if the header looks to be of the other byte order
    UnsupportedDatatype
        if the header ``datatype`` has no numpy dtype; nothing past the
        extensions is read
    ImageFileError
        if a fully read single file has bytes after the voxel data
    """
    filename = _stringify_path(filename)
    if mmap not in (True, False, 'c', 'r', 'r+'):
        raise ValueError("mmap should be one of {True, False, 'c', 'r', 'r+'}")
    hdr_fname = types_filenames(filename)['header']
    if not os.path.exists(hdr_fname):
        raise FileNotFoundError(f"No such file or no access: '{hdr_fname}'")
    with Opener(hdr_fname) as fileobj:
        hdr = Nifti1Volume.header_class.from_fileobj(fileobj)
        extensions = Nifti1Extensions.from_fileobj(fileobj, hdr)
        dtype = hdr.get_data_dtype()
        shape = hdr.get_data_shape()
        if hdr.is_single:
            dataobj = array_from_file(shape, dtype, fileobj,
                                      offset=hdr.get_data_offset(), mmap=mmap)
            if not isinstance(dataobj, np.memmap) and fileobj.read(1):
                raise ImageFileError(f'Data continue past the end of the '
                                     f'volume in "{hdr_fname}"')
            return Nifti1Volume(dataobj, hdr, extensions)
    img_fname = types_filenames(hdr_fname)['image']
    with Opener(img_fname) as fileobj:
        dataobj = array_from_file(shape, dtype, fileobj, offset=0, mmap=mmap)
    return Nifti1Volume(dataobj, hdr, extensions)


def save(vol: Nifti1Volume, filename: FileSpec) -> None:
    """Save `vol` to `filename`

    The header is reconciled with the voxel data and extensions before
    writing.  A filename ending in ``.hdr`` or ``.img`` writes a header /
    image pair, with magic ``ni1``; header and extensions go to the ``.hdr``
    file and the voxel data to the ``.img`` file.  Any other filename writes
    a single file with magic ``n+1``.

    Parameters
    ----------
    vol : Nifti1Volume
       volume to save
    filename : str or os.PathLike
       filename, implying single file or pair
    """
    filename = _stringify_path(filename)
    vol = reconcile(vol)
    if not is_pair_filename(filename):
        with Opener(filename, 'wb') as fileobj:
            vol.to_fileobj(fileobj)
        return
    fnames = types_filenames(filename)
    hdr = vol.header.copy()
    hdr['magic'] = hdr.pair_magic
    with Opener(fnames['header'], 'wb') as fileobj:
        hdr.write_to(fileobj)
        vol.extensions.write_to(fileobj)
    with Opener(fnames['image'], 'wb') as fileobj:
        array_to_file(vol.dataobj, fileobj, offset=0)
