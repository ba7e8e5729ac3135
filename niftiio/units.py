# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit codes of the ``xyzt_units`` header field, and conversions to mm / ms

The low 3 bits of ``xyzt_units`` code the spatial unit, bits 3 to 5 the
temporal unit.  Spatial values convert to millimeters and temporal values to
milliseconds.  Frequency-like temporal units (hz, ppm, rads) have no time
scale and convert with a factor of 1.
"""
from .volumeutils import Recoder
from .errors import HeaderDataError

unit_codes = Recoder((  # code, label
    (0, 'unknown'),
    (1, 'meter'),
    (2, 'mm'),
    (3, 'micron'),
    (8, 'sec'),
    (16, 'msec'),
    (24, 'usec'),
    (32, 'hz'),
    (40, 'ppm'),
    (48, 'rads')), fields=('code', 'label'))

# Indexed by spatial unit bits, and by temporal unit bits (xyzt_units >> 3)
_SPATIAL_MULTIPLIERS = {1: 1000., 2: 1., 3: 0.001}
_TEMPORAL_MULTIPLIERS = {1: 1000., 2: 1., 3: 0.001, 4: 1., 5: 1., 6: 1.}

SPATIAL_MASK = 0x07
TEMPORAL_MASK = 0x38


def spatial_multiplier(unit_bits):
    """Factor converting spatial unit code `unit_bits` to millimeters

    >>> spatial_multiplier(unit_codes['meter'])
    1000.0
    """
    try:
        return _SPATIAL_MULTIPLIERS[int(unit_bits)]
    except KeyError:
        raise HeaderDataError(f'Unknown spatial unit code {unit_bits}')


def temporal_multiplier(unit_bits):
    """Factor converting shifted temporal unit code to milliseconds

    `unit_bits` is ``xyzt_units >> 3``, so 1 is seconds and 2 milliseconds.

    >>> temporal_multiplier(unit_codes['usec'] >> 3)
    0.001
    """
    try:
        return _TEMPORAL_MULTIPLIERS[int(unit_bits)]
    except KeyError:
        raise HeaderDataError(f'Unknown temporal unit code {unit_bits}')


def voxel_size_mm(header):
    """Voxel sizes in mm along the first ``min(rank, 3)`` axes of `header`"""
    rank = int(header['dim'][0])
    mult = spatial_multiplier(int(header['xyzt_units']) & 0x3)
    return tuple(float(p) * mult for p in header['pixdim'][1:min(rank, 3) + 1])


def time_step_ms(header):
    """Time between volumes in ms, from ``pixdim[4]``"""
    mult = temporal_multiplier(int(header['xyzt_units']) >> 3)
    return float(header['pixdim'][4]) * mult
