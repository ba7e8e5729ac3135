# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for unit codes and conversions"""
import pytest

from ..errors import HeaderDataError
from ..nifti1 import Nifti1Header
from ..units import (unit_codes, SPATIAL_MASK, TEMPORAL_MASK,
                     spatial_multiplier, temporal_multiplier, voxel_size_mm,
                     time_step_ms)


def test_masks():
    for code in unit_codes.value_set():
        assert (code & SPATIAL_MASK) + (code & TEMPORAL_MASK) == code
    assert SPATIAL_MASK & TEMPORAL_MASK == 0


@pytest.mark.parametrize('label, mult', (('meter', 1000.),
                                         ('mm', 1.),
                                         ('micron', 0.001)))
def test_spatial_multiplier(label, mult):
    assert spatial_multiplier(unit_codes[label]) == mult


@pytest.mark.parametrize('label, mult', (('sec', 1000.),
                                         ('msec', 1.),
                                         ('usec', 0.001),
                                         ('hz', 1.),
                                         ('ppm', 1.),
                                         ('rads', 1.)))
def test_temporal_multiplier(label, mult):
    assert temporal_multiplier(unit_codes[label] >> 3) == mult


def test_unknown_units():
    with pytest.raises(HeaderDataError):
        spatial_multiplier(0)
    with pytest.raises(HeaderDataError):
        temporal_multiplier(0)
    with pytest.raises(HeaderDataError):
        temporal_multiplier(7)


def _header(shape, pixdim, xyzt_units):
    hdr = Nifti1Header()
    hdr.set_data_shape(shape)
    hdr['pixdim'][1:len(pixdim) + 1] = pixdim
    hdr['xyzt_units'] = xyzt_units
    return hdr


@pytest.mark.parametrize('xyz, mult', (('meter', 1000.),
                                       ('mm', 1.),
                                       ('micron', 0.001)))
def test_voxel_size_mm(xyz, mult):
    units = unit_codes[xyz] | unit_codes['sec']
    hdr = _header((4, 5, 6, 7), (2, 3, 4, 0.5), units)
    assert voxel_size_mm(hdr) == pytest.approx((2 * mult, 3 * mult, 4 * mult))
    # Only as many sizes as axes, up to 3
    hdr.set_data_shape((4, 5))
    assert voxel_size_mm(hdr) == pytest.approx((2 * mult, 3 * mult))
    hdr['xyzt_units'] = unit_codes['msec']
    with pytest.raises(HeaderDataError):
        voxel_size_mm(hdr)


@pytest.mark.parametrize('t, mult', (('sec', 1000.),
                                     ('msec', 1.),
                                     ('usec', 0.001),
                                     ('hz', 1.),
                                     ('ppm', 1.),
                                     ('rads', 1.)))
def test_time_step_ms(t, mult):
    units = unit_codes['mm'] | unit_codes[t]
    hdr = _header((4, 5, 6, 7), (2, 3, 4, 2.5), units)
    assert time_step_ms(hdr) == pytest.approx(2.5 * mult)


def test_xyzt_units_header():
    hdr = Nifti1Header()
    assert hdr.get_xyzt_units() == ('unknown', 'unknown')
    hdr.set_xyzt_units('mm', 'msec')
    assert hdr['xyzt_units'] == 18
    assert hdr.get_xyzt_units() == ('mm', 'msec')
    hdr.set_xyzt_units(3, 8)
    assert hdr.get_xyzt_units() == ('micron', 'sec')
    assert hdr.get_value_label('xyzt_units') == 'micron, sec'
    hdr.set_xyzt_units()
    assert hdr['xyzt_units'] == 0
    # Temporal unit as spatial and the reverse
    with pytest.raises(HeaderDataError):
        hdr.set_xyzt_units('sec', 'mm')
    with pytest.raises(KeyError):
        hdr.set_xyzt_units('furlong')
