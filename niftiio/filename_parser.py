# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Header and image filenames for single files and header / image pairs"""
from __future__ import annotations

import os
import pathlib
import typing as ty

if ty.TYPE_CHECKING:  # pragma: no cover
    FileSpec = str | os.PathLike[str]
    ExtensionSpec = tuple[str, str]

#: (type, extension) of the two files of a header / image pair
pair_types_exts = (('header', '.hdr'), ('image', '.img'))


def _stringify_path(filepath: FileSpec) -> str:
    """Return `filepath`, which may be path-like, as a string"""
    return pathlib.Path(filepath).expanduser().as_posix()


def types_filenames(
    template_fname: FileSpec,
    types_exts: ty.Sequence[ExtensionSpec] = pair_types_exts,
) -> dict[str, str]:
    """Return filenames with standard extensions from template name

    The trailing extension of `template_fname` is replaced by the extension
    of each type.  If `template_fname` has an extension not in `types_exts`,
    it is kept as the filename of the first type.  The case of a matched
    extension carries over: ``.IMG`` gives ``.HDR``.

    Parameters
    ----------
    template_fname : str or os.PathLike
       template filename
    types_exts : sequence of sequences
       sequence of (name, extension) str sequences defining type to
       extension mapping.  Default is header / image pair.

    Returns
    -------
    types_fnames : dict
       dict with types as keys, and generated filenames as values.

    Examples
    --------
    >>> tfns = types_filenames('/path/test.img')
    >>> tfns == {'header': '/path/test.hdr', 'image': '/path/test.img'}
    True
    >>> tfns = types_filenames('/path/TEST.HDR')
    >>> tfns == {'header': '/path/TEST.HDR', 'image': '/path/TEST.IMG'}
    True

    A header with some other extension keeps its name

    >>> tfns = types_filenames('/path/test.nii')
    >>> tfns == {'header': '/path/test.nii', 'image': '/path/test.img'}
    True
    """
    template_fname = _stringify_path(template_fname).rstrip('.')
    froot, found_ext, guessed_name = parse_filename(template_fname,
                                                    types_exts)
    if found_ext.isupper():
        proc_ext = str.upper
    elif found_ext.islower():
        proc_ext = str.lower
    else:
        proc_ext = str
    tfns = {name: froot + proc_ext(ext) for name, ext in types_exts}
    # An extension we do not know names the file of the first type
    if guessed_name is None and found_ext:
        tfns[types_exts[0][0]] = template_fname
    return tfns


def parse_filename(
    filename: FileSpec,
    types_exts: ty.Sequence[ExtensionSpec] = pair_types_exts,
) -> tuple[str, str, str | None]:
    """Split filename into fileroot and extension; guess type

    Extensions match without regard to case.

    Returns
    -------
    pth : str
       path with any extension removed
    ext : str
       matching extension from `types_exts`, otherwise extension from
       ``os.path.splitext``
    guessed_type : str or None
       type for a matching extension in `types_exts`, else None

    Examples
    --------
    >>> parse_filename('/path/fname.funny')
    ('/path/fname', '.funny', None)
    >>> parse_filename('/path/fname.IMG')
    ('/path/fname', '.IMG', 'image')
    """
    filename = _stringify_path(filename)
    for name, type_ext in types_exts:
        if _iendswith(filename, type_ext):
            extpos = -len(type_ext)
            return filename[:extpos], filename[extpos:], name
    froot, found_ext = os.path.splitext(filename)
    return froot, found_ext, None


def is_pair_filename(filename: FileSpec) -> bool:
    """True if `filename` ends in a header / image pair extension

    >>> is_pair_filename('brain.hdr'), is_pair_filename('brain.nii')
    (True, False)
    """
    return parse_filename(filename)[2] is not None


def _iendswith(whole: str, end: str) -> bool:
    return whole.lower().endswith(end.lower())
