# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for NIfTI-1 datatype codes"""
import numpy as np
import pytest

from ..datatypes import data_type_codes, kind_for, code_for, bitwidth_of
from ..errors import UnsupportedDatatype
from ..testing import assert_dt_equal

# code, numpy type, bits per element
KNOWN_TYPES = (
    (2, np.uint8, 8),
    (4, np.int16, 16),
    (8, np.int32, 32),
    (16, np.float32, 32),
    (32, np.complex64, 64),
    (64, np.float64, 64),
    (256, np.int8, 8),
    (512, np.uint16, 16),
    (768, np.uint32, 32),
    (1024, np.int64, 64),
    (1280, np.uint64, 64),
    (1792, np.complex128, 128),
)


@pytest.mark.parametrize('code, np_type, bits', KNOWN_TYPES)
def test_kind_code_round_trip(code, np_type, bits):
    assert_dt_equal(kind_for(code), np_type)
    assert code_for(kind_for(code)) == code
    assert code_for(np_type) == code
    assert code_for(np.dtype(np_type)) == code
    assert code_for(data_type_codes.label[code]) == code
    assert bitwidth_of(np_type) == bits
    assert bitwidth_of(code) == bits
    assert kind_for(np.int16(code)) == np.dtype(np_type)


def test_code_aliases():
    assert code_for('i2') == 4
    assert code_for('NIFTI_TYPE_FLOAT64') == 64
    assert code_for('=f4') == 16
    assert data_type_codes.niistring[16] == 'NIFTI_TYPE_FLOAT32'
    assert len(data_type_codes.value_set()) == len(KNOWN_TYPES)


@pytest.mark.parametrize('code', (0, 1, 128, 1536, 2304, 9999, -4))
def test_unknown_codes(code):
    with pytest.raises(UnsupportedDatatype):
        kind_for(code)


@pytest.mark.parametrize('kind', (np.bool_, np.float16, 'S10', 'rgb',
                                  np.dtype([('f1', 'i2')]), object))
def test_unsupported_kinds(kind):
    with pytest.raises(UnsupportedDatatype):
        code_for(kind)
    with pytest.raises(UnsupportedDatatype):
        bitwidth_of(kind)


def test_swapped_kinds():
    swapped = np.dtype(np.int16).newbyteorder('S')
    with pytest.raises(UnsupportedDatatype):
        code_for(swapped)
    with pytest.raises(UnsupportedDatatype):
        bitwidth_of(swapped)
    # Single byte types have no byte order
    assert code_for(np.dtype(np.uint8).newbyteorder('S')) == 2
