# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""NIfTI-1 datatype codes and the numpy element kinds they stand for

>>> from niftiio.datatypes import data_type_codes, kind_for, code_for
>>> data_type_codes.label[4]
'int16'
>>> kind_for(16)
dtype('float32')
>>> code_for(np.uint8)
2
>>> bitwidth_of('complex128')
128
"""
import numpy as np

from .volumeutils import make_dt_codes
from .errors import UnsupportedDatatype

_dtdefs = (  # code, label, numpy type, niistring
    (2, 'uint8', np.uint8, "NIFTI_TYPE_UINT8"),
    (4, 'int16', np.int16, "NIFTI_TYPE_INT16"),
    (8, 'int32', np.int32, "NIFTI_TYPE_INT32"),
    (16, 'float32', np.float32, "NIFTI_TYPE_FLOAT32"),
    (32, 'complex64', np.complex64, "NIFTI_TYPE_COMPLEX64"),
    (64, 'float64', np.float64, "NIFTI_TYPE_FLOAT64"),
    (256, 'int8', np.int8, "NIFTI_TYPE_INT8"),
    (512, 'uint16', np.uint16, "NIFTI_TYPE_UINT16"),
    (768, 'uint32', np.uint32, "NIFTI_TYPE_UINT32"),
    (1024, 'int64', np.int64, "NIFTI_TYPE_INT64"),
    (1280, 'uint64', np.uint64, "NIFTI_TYPE_UINT64"),
    (1792, 'complex128', np.complex128, "NIFTI_TYPE_COMPLEX128"),
)

# Full code alias bank, including dtype column
data_type_codes = make_dt_codes(_dtdefs)


def _lookup(column, key):
    # Swapped byte order dtypes are not element kinds we can write
    if hasattr(key, 'byteorder') and not key.isnative:
        raise UnsupportedDatatype(f'Non-native byte order for {key}')
    try:
        return column[key]
    except (KeyError, TypeError):
        pass
    # Strings such as 'i2' and numpy scalar types resolve via dtype
    try:
        dt = np.dtype(key)
    except TypeError:
        raise UnsupportedDatatype(f'Data type {key!r} not supported')
    if not dt.isnative:
        raise UnsupportedDatatype(f'Non-native byte order for {dt}')
    try:
        return column[dt]
    except KeyError:
        raise UnsupportedDatatype(f'Data type {dt} not supported')


def kind_for(code):
    """Return native numpy dtype for NIfTI datatype `code`

    Raises
    ------
    UnsupportedDatatype
        if `code` is not a supported NIfTI datatype code
    """
    try:
        return data_type_codes.dtype[int(code)]
    except (KeyError, TypeError, ValueError):
        raise UnsupportedDatatype(f'data code {code} not supported')


def code_for(kind):
    """Return NIfTI datatype code for numpy type, dtype or label `kind`

    Raises
    ------
    UnsupportedDatatype
        if `kind` has no NIfTI code (e.g. bool, float16, structured dtypes)
    """
    return _lookup(data_type_codes.code, kind)


def bitwidth_of(kind):
    """Return bits per element for `kind`, as stored in ``bitpix``"""
    return _lookup(data_type_codes.dtype, kind).itemsize * 8
