# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Voxel to world affines from NIfTI-1 header fields

A NIfTI-1 header can carry its geometry in three ways:

Method 1
    Neither ``qform_code`` nor ``sform_code`` is set.  The affine only scales
    by the voxel sizes ``pixdim[1:4]``.
Method 2 (qform)
    ``qform_code > 0``.  A rotation stored as the ``b, c, d`` entries of a
    unit quaternion, voxel sizes from ``pixdim[1:4]``, a handedness factor
    ``qfac`` in ``pixdim[0]`` and a translation in ``qoffset_x, y, z``.
Method 3 (sform)
    ``sform_code > 0``.  The first three rows of the affine, stored verbatim
    in ``srow_x``, ``srow_y`` and ``srow_z``.

:func:`affine_of` picks the sform over the qform over Method 1.

The functions here take any mapping with the NIfTI-1 field names, such as a
:class:`niftiio.nifti1.Nifti1Header`.  Encodings to write into a header are
the tagged variants :class:`Unset`, :class:`Quaternion` and
:class:`DirectionCosine`; see :func:`make_geometry` and
:func:`apply_geometry`.
"""
from dataclasses import dataclass, field

import numpy as np

from .errors import ConflictingGeometryEncoding, InvalidAffineShape
from .quaternions import fillpositive, quat2mat
from .volumeutils import Recoder

# Transform (qform, sform) codes
xform_codes = Recoder((  # code, label, niistring
    (0, 'unknown', "NIFTI_XFORM_UNKNOWN"),
    (1, 'scanner', "NIFTI_XFORM_SCANNER_ANAT"),
    (2, 'aligned', "NIFTI_XFORM_ALIGNED_ANAT"),
    (3, 'talairach', "NIFTI_XFORM_TALAIRACH"),
    (4, 'mni', "NIFTI_XFORM_MNI_152")), fields=('code', 'label', 'niistring'))

# Quaternion threshold near 0, based on float32 precision
quaternion_threshold = -np.finfo(np.float32).eps * 3


@dataclass(frozen=True)
class Unset:
    """No qform or sform; the affine comes from voxel sizes only"""


@dataclass(frozen=True)
class Quaternion:
    """Method 2 geometry: quaternion ``b, c, d``, translation, qfac and code"""
    b: float = 0.
    c: float = 0.
    d: float = 0.
    offset: tuple = (0., 0., 0.)
    qfac: float = 1.
    code: int = 1

    def __post_init__(self):
        if len(self.offset) != 3:
            raise ValueError('Quaternion offset needs 3 values')
        if self.qfac not in (-1, 0, 1):
            raise ValueError('qfac should be one of -1, 0, 1')
        object.__setattr__(self, 'code', xform_codes.code[self.code])


@dataclass(frozen=True)
class DirectionCosine:
    """Method 3 geometry: first three rows of the affine, and code"""
    matrix: np.ndarray = field(compare=False)
    code: int = 1

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=np.float64)
        if matrix.shape == (4, 4):
            if not np.all(matrix[3] == [0, 0, 0, 1]):
                raise InvalidAffineShape('Last row of affine should be '
                                         '[0, 0, 0, 1]')
            matrix = matrix[:3]
        elif matrix.shape != (3, 4):
            raise InvalidAffineShape('Orientation matrix should be shape '
                                     f'(3, 4) or (4, 4), not {matrix.shape}')
        object.__setattr__(self, 'matrix', matrix)
        object.__setattr__(self, 'code', xform_codes.code[self.code])

    def __eq__(self, other):
        if not isinstance(other, DirectionCosine):
            return NotImplemented
        return (self.code == other.code and
                np.array_equal(self.matrix, other.matrix))


def make_geometry(quaternion=None, orientation=None):
    """Return geometry variant for quaternion or orientation parameters

    Parameters
    ----------
    quaternion : None or Quaternion or sequence, optional
        A :class:`Quaternion`, or the sequence of arguments to make one,
        ``(b, c, d[, offset[, qfac[, code]]])``.
    orientation : None or DirectionCosine or array-like, optional
        A :class:`DirectionCosine`, or a (3, 4) or (4, 4) array giving the
        affine rows.

    Returns
    -------
    geometry : Unset or Quaternion or DirectionCosine

    Raises
    ------
    ConflictingGeometryEncoding
        if both `quaternion` and `orientation` are given

    Examples
    --------
    >>> make_geometry()
    Unset()
    >>> make_geometry(quaternion=(0, 0, 1))
    Quaternion(b=0, c=0, d=1, offset=(0.0, 0.0, 0.0), qfac=1.0, code=1)
    >>> make_geometry((0, 0, 1), np.eye(4))
    Traceback (most recent call last):
       ...
    niftiio.errors.ConflictingGeometryEncoding: quaternion and orientation parameters are mutually exclusive
    """
    if quaternion is not None and orientation is not None:
        raise ConflictingGeometryEncoding(
            'quaternion and orientation parameters are mutually exclusive')
    if quaternion is not None:
        if isinstance(quaternion, Quaternion):
            return quaternion
        return Quaternion(*quaternion)
    if orientation is not None:
        if isinstance(orientation, DirectionCosine):
            return orientation
        return DirectionCosine(orientation)
    return Unset()


def apply_geometry(header, geometry):
    """Write `geometry` variant into `header` in place

    Writing one encoding clears the other, so the header holds exactly the
    geometry given.  ``pixdim[1:4]`` (voxel sizes) are left alone.
    """
    header['quatern_b'] = 0
    header['quatern_c'] = 0
    header['quatern_d'] = 0
    header['qoffset_x'] = 0
    header['qoffset_y'] = 0
    header['qoffset_z'] = 0
    header['srow_x'] = 0
    header['srow_y'] = 0
    header['srow_z'] = 0
    header['qform_code'] = 0
    header['sform_code'] = 0
    header['pixdim'][0] = 0
    if isinstance(geometry, Quaternion):
        header['quatern_b'] = geometry.b
        header['quatern_c'] = geometry.c
        header['quatern_d'] = geometry.d
        (header['qoffset_x'],
         header['qoffset_y'],
         header['qoffset_z']) = geometry.offset
        header['pixdim'][0] = geometry.qfac
        header['qform_code'] = geometry.code
    elif isinstance(geometry, DirectionCosine):
        header['srow_x'] = geometry.matrix[0]
        header['srow_y'] = geometry.matrix[1]
        header['srow_z'] = geometry.matrix[2]
        header['sform_code'] = geometry.code
    elif not isinstance(geometry, Unset):
        raise TypeError(f'Unknown geometry {geometry!r}')


def geometry_of(header):
    """Return geometry variant stored in `header`, sform first"""
    if header['sform_code'] > 0:
        return DirectionCosine(get_sform(header), int(header['sform_code']))
    if header['qform_code'] > 0:
        offset = tuple(float(header[f'qoffset_{ax}']) for ax in 'xyz')
        return Quaternion(float(header['quatern_b']),
                          float(header['quatern_c']),
                          float(header['quatern_d']),
                          offset,
                          float(header['pixdim'][0]),
                          int(header['qform_code']))
    return Unset()


def get_qform_quaternion(header):
    """Compute unit quaternion from ``quatern_b, c, d`` of `header`

    ``w`` is taken as positive.  Where ``b**2 + c**2 + d**2`` is at or past 1
    from float32 rounding, ``w`` is 0.
    """
    bcd = [header['quatern_b'], header['quatern_c'], header['quatern_d']]
    try:
        return fillpositive(bcd, quaternion_threshold)
    except ValueError:
        # w squared negative beyond rounding error; clamp it to 0
        return np.r_[0., np.asarray(bcd, dtype=np.float64)]


def get_qform(header):
    """Return 4x4 affine from qform (Method 2) fields of `header`

    A qfac (``pixdim[0]``) of 0 is read as 1.

    Examples
    --------
    >>> from niftiio.nifti1 import Nifti1Header
    >>> hdr = Nifti1Header()
    >>> hdr['pixdim'][1:4] = [2, 3, 4]
    >>> hdr['quatern_d'] = 1  # 180 degrees about z
    >>> hdr['qoffset_x'] = 10
    >>> get_qform(hdr)
    array([[-2.,  0.,  0., 10.],
           [ 0., -3.,  0.,  0.],
           [ 0.,  0.,  4.,  0.],
           [ 0.,  0.,  0.,  1.]])
    """
    R = quat2mat(get_qform_quaternion(header))
    vox = np.array(header['pixdim'][1:4], dtype=np.float64)
    qfac = float(header['pixdim'][0])
    if qfac == 0:
        qfac = 1.
    vox[-1] *= qfac
    out = np.eye(4)
    out[0:3, 0:3] = R * vox
    out[0:3, 3] = [header['qoffset_x'], header['qoffset_y'],
                   header['qoffset_z']]
    return out


def get_sform(header):
    """Return 4x4 affine from sform (Method 3) rows of `header`"""
    out = np.eye(4)
    out[0, :] = header['srow_x'][:]
    out[1, :] = header['srow_y'][:]
    out[2, :] = header['srow_z'][:]
    return out


def get_base_affine(header):
    """Return Method 1 affine: voxel sizes on the diagonal, no translation"""
    return np.diag(np.r_[np.asarray(header['pixdim'][1:4], dtype=np.float64),
                         1.])


def affine_of(header):
    """Select best of available transforms in `header`

    Sform if ``sform_code > 0``, else qform if ``qform_code > 0``, else the
    base affine.
    """
    if header['sform_code'] > 0:
        return get_sform(header)
    if header['qform_code'] > 0:
        return get_qform(header)
    return get_base_affine(header)


def set_affine(header, affine):
    """Return copy of `header` with `affine` stored as an sform

    The result has ``sform_code`` 1 and ``qform_code`` 0, with the quaternion,
    qoffset and qfac fields zeroed.

    Parameters
    ----------
    header : header
        header with a ``copy`` method
    affine : (4, 4) array-like
        affine with last row ``[0, 0, 0, 1]``

    Returns
    -------
    new_header : header
        modified copy of `header`

    Raises
    ------
    InvalidAffineShape
        if `affine` is not (4, 4) or its last row is not ``[0, 0, 0, 1]``
    """
    geometry = DirectionCosine(_check_affine(affine), 'scanner')
    new_header = header.copy()
    apply_geometry(new_header, geometry)
    return new_header


def _check_affine(affine):
    affine = np.asarray(affine)
    if affine.shape != (4, 4):
        raise InvalidAffineShape(f'Need 4x4 affine, not shape {affine.shape}')
    if not np.all(affine[3] == [0, 0, 0, 1]):
        raise InvalidAffineShape('Last row of affine should be [0, 0, 0, 1]')
    return affine
