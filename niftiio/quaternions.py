# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Quaternion calculations for the NIfTI-1 qform

Quaternions ``w + ix + jy + kz`` are represented as ``[w, x, y, z]``.  The
header stores only ``x, y, z`` (``quatern_b, quatern_c, quatern_d``) of a
unit quaternion; :func:`fillpositive` recovers ``w``.
"""
import numpy as np

FLOAT_EPS = np.finfo(np.float64).eps


def fillpositive(xyz, w2_thresh=None):
    """Compute unit quaternion from last 3 values

    Parameters
    ----------
    xyz : iterable
       iterable containing 3 values, corresponding to quaternion x, y, z
    w2_thresh : None or float, optional
       threshold to determine if w squared is non-zero.
       If None (default) then w2_thresh set equal to
       3 * ``np.finfo(xyz.dtype).eps``, if possible, otherwise
       3 * ``np.finfo(np.float64).eps``.  Values of w squared below
       ``-w2_thresh`` raise ``ValueError``; values between ``-w2_thresh``
       and 0 are rounding error and give ``w = 0``.

    Returns
    -------
    wxyz : array shape (4,)
         Full 4 values of quaternion

    Notes
    -----
    If w, x, y, z are the values in the full quaternion, assumes w is
    positive.

    Gives error if w*w is estimated to be negative beyond the threshold.

    w = 0 corresponds to a 180 degree rotation

    The unit quaternion specifies that np.dot(wxyz, wxyz) == 1.

    Examples
    --------
    >>> wxyz = fillpositive([0, 0, 0])
    >>> np.all(wxyz == [1, 0, 0, 0])
    True
    >>> wxyz = fillpositive([1, 0, 0]) # Corner case; w is 0
    >>> np.all(wxyz == [0, 1, 0, 0])
    True
    >>> float(np.dot(wxyz, wxyz))
    1.0
    """
    # Check inputs (force error if < 3 values)
    if len(xyz) != 3:
        raise ValueError('xyz should have length 3')
    # If necessary, guess precision of input
    if w2_thresh is None:
        try:  # trap errors for non-array, integer array
            w2_thresh = np.finfo(xyz.dtype).eps * 3
        except (AttributeError, ValueError):
            w2_thresh = FLOAT_EPS * 3
    # Use maximum precision
    xyz = np.asarray(xyz, dtype=np.float64)
    # Calculate w
    w2 = 1.0 - xyz @ xyz
    if np.abs(w2) < np.abs(w2_thresh):
        w = 0
    elif w2 < 0:
        raise ValueError(f'w2 should be positive, but is {w2:e}')
    else:
        w = np.sqrt(w2)
    return np.r_[w, xyz]


def quat2mat(q):
    """Calculate rotation matrix corresponding to quaternion

    Parameters
    ----------
    q : 4 element array-like

    Returns
    -------
    M : (3,3) array
      Rotation matrix corresponding to input quaternion *q*

    Notes
    -----
    Rotation matrix applies to column vectors, and is applied to the
    left of coordinate vectors.  The algorithm here allows non-unit
    quaternions; the quaternion is normalized before use.

    Examples
    --------
    >>> import numpy as np
    >>> M = quat2mat([1, 0, 0, 0]) # Identity quaternion
    >>> np.allclose(M, np.eye(3))
    True
    >>> M = quat2mat([0, 1, 0, 0]) # 180 degree rotn around axis 0
    >>> np.allclose(M, np.diag([1, -1, -1]))
    True
    """
    w, x, y, z = q
    Nq = w * w + x * x + y * y + z * z
    if Nq < FLOAT_EPS:
        return np.eye(3)
    s = 2.0 / Nq
    X = x * s
    Y = y * s
    Z = z * s
    wX = w * X
    wY = w * Y
    wZ = w * Z
    xX = x * X
    xY = x * Y
    xZ = x * Z
    yY = y * Y
    yZ = y * Z
    zZ = z * Z
    return np.array([[1.0 - (yY + zZ), xY - wZ, xZ + wY],
                     [xY + wZ, 1.0 - (xX + zZ), yZ - wX],
                     [xZ - wY, yZ + wX, 1.0 - (xX + yY)]])


def norm(q):
    """Return norm of quaternion

    Parameters
    ----------
    q : 4 element sequence
       w, i, j, k of quaternion

    Returns
    -------
    n : scalar
       quaternion norm
    """
    return np.dot(q, q)


def isunit(q):
    """Return True is this is very nearly a unit quaternion"""
    return np.allclose(norm(q), 1)
