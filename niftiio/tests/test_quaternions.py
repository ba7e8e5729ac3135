# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Test quaternion calculations"""

import numpy as np
import pytest
from numpy.testing import assert_array_almost_equal, assert_array_equal

from .. import quaternions as nq


@pytest.mark.parametrize('xyz', (np.zeros((3,)), [0, 0, 0], (0.0, 0.0, 0.0)))
def test_fillpositive_identity(xyz):
    assert_array_equal(nq.fillpositive(xyz), [1, 0, 0, 0])


@pytest.mark.parametrize('xyz', ([0, 0], [0] * 4, [1.0] * 3, [0.8, 0.8, 0]))
def test_fillpositive_errors(xyz):
    # Wrong length, or |(x, y, z)| clearly above 1
    with pytest.raises(ValueError):
        nq.fillpositive(xyz)


@pytest.mark.parametrize('dtype', ('f4', 'f8'))
def test_fillpositive_near_unit(dtype):
    eps = np.finfo(dtype).eps
    axis = np.array([0, 1, 0], dtype=dtype)
    # Length off 1 by one eps is rounding error; w is 0
    for scale in (1 + eps, 1 - eps):
        wxyz = nq.fillpositive(axis * np.dtype(dtype).type(scale))
        assert wxyz[0] == 0.0
    # Two eps over 1 is beyond the default threshold
    with pytest.raises(ValueError):
        nq.fillpositive(axis * np.dtype(dtype).type(1 + 2 * eps))
    # Two eps under gives a small positive w
    assert nq.fillpositive(axis * np.dtype(dtype).type(1 - 2 * eps))[0] > 0


@pytest.mark.parametrize('dtype', ('f4', 'f8'))
def test_fillpositive_rounded_unit_vectors(dtype):
    rng = np.random.default_rng(42)
    for _ in range(50):
        xyz = rng.uniform(-1, 1, size=(3,)).astype(dtype)
        xyz = xyz / np.sqrt(xyz @ xyz)
        assert nq.fillpositive(xyz, 3 * np.finfo(dtype).eps)[0] == 0.0


def test_quat2mat():
    M = nq.quat2mat([1, 0, 0, 0])
    assert_array_almost_equal(M, np.eye(3))
    # Non-unit quaternions are normalized
    M = nq.quat2mat([3, 0, 0, 0])
    assert_array_almost_equal(M, np.eye(3))
    M = nq.quat2mat([0, 1, 0, 0])
    assert_array_almost_equal(M, np.diag([1, -1, -1]))
    M = nq.quat2mat([0, 2, 0, 0])
    assert_array_almost_equal(M, np.diag([1, -1, -1]))
    M = nq.quat2mat([0, 0, 0, 1])
    assert_array_almost_equal(M, np.diag([-1, -1, 1]))
    # Zero quaternion gives identity
    M = nq.quat2mat([0, 0, 0, 0])
    assert_array_almost_equal(M, np.eye(3))
    # 90 degrees about z
    c = np.cos(np.pi / 4)
    M = nq.quat2mat([c, 0, 0, c])
    assert_array_almost_equal(M, [[0, -1, 0], [1, 0, 0], [0, 0, 1]])


@pytest.mark.parametrize('xyz', ([0.1, 0.2, 0.3], [0, 0, 0], [0.5, -0.5, 0.5],
                                 [1, 0, 0]))
def test_fillpositive_rotations(xyz):
    # Filled quaternions are unit, and give rotation matrices
    q = nq.fillpositive(xyz)
    assert nq.isunit(q)
    M = nq.quat2mat(q)
    assert_array_almost_equal(M @ M.T, np.eye(3))
    assert np.allclose(np.linalg.det(M), 1)


def test_norm():
    qi = np.array([1., 0, 0, 0])
    assert nq.norm(qi) == 1
    assert nq.isunit(qi)
    qi[1] = 0.2
    assert not nq.isunit(qi)
