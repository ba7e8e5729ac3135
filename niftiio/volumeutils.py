# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Code tables, pretty printing and raw array I/O for NIfTI-1 volumes"""

import sys
from functools import reduce
from operator import mul

import numpy as np

sys_is_le = sys.byteorder == 'little'
native_code = '<' if sys_is_le else '>'
swapped_code = '>' if sys_is_le else '<'

_mmap_modes = (True, False, 'c', 'r', 'r+')


class Recoder:
    """Table of equivalent values, looked up from any of them

    Each row of `codes` lists values that mean the same thing.  ``fields``
    names the columns.  Each column is an attribute: a mapping from every
    value in a row to the entry of that row in the column.  Indexing the
    recoder itself uses the first column.

    >>> codes = ((0, 'unknown', 'NIFTI_XFORM_UNKNOWN'),
    ...          (1, 'scanner', 'NIFTI_XFORM_SCANNER_ANAT'))
    >>> xforms = Recoder(codes, fields=('code', 'label', 'niistring'))
    >>> xforms.code['scanner']
    1
    >>> xforms.label[1]
    'scanner'
    >>> xforms.niistring['unknown']
    'NIFTI_XFORM_UNKNOWN'
    >>> xforms['NIFTI_XFORM_SCANNER_ANAT']  # first column
    1
    """

    def __init__(self, codes, fields=('code',), map_maker=dict):
        """
        Parameters
        ----------
        codes : sequence of sequences
            rows of equivalent values
        fields : sequence of str, optional
            column names.  Rows can be longer than `fields`; the extra values
            are aliases only.
        map_maker : callable, optional
            makes the empty mapping for each column.  The mapping needs
            ``__getitem__``, ``__setitem__``, ``keys`` and ``values``.
        """
        self.fields = tuple(fields)
        self._columns = {}
        for name in self.fields:
            if name in ('fields', 'field1') or hasattr(self, name):
                raise KeyError(f'Field name {name} clashes with recoder '
                               'attribute')
            self._columns[name] = self.__dict__[name] = map_maker()
        self.field1 = self._columns[self.fields[0]]
        self.add_codes(codes)

    def add_codes(self, code_syn_seqs):
        """Add rows of equivalent values

        >>> rc = Recoder(((2, 'two'), (1, 'one')))
        >>> rc.add_codes(((3, 'three'), (1, 'first')))
        >>> sorted(rc.value_set())
        [1, 2, 3]
        >>> rc.code['first']
        1
        """
        for row in code_syn_seqs:
            for ind, column in enumerate(self._columns.values()):
                for alias in row:
                    column[alias] = row[ind]

    def __getitem__(self, key):
        return self.field1[key]

    def __contains__(self, key):
        try:
            self.field1[key]
        except KeyError:
            return False
        return True

    def keys(self):
        """All values that can be looked up"""
        return self.field1.keys()

    def value_set(self, name=None):
        """Set of entries in column `name`; None for the first column"""
        column = self.field1 if name is None else self._columns[name]
        return set(column.values())


class DtypeMapper:
    """Mapping that also finds numpy dtype keys by equality

    Equal dtypes can hash differently, so a missed hash lookup with a dtype
    key falls back to comparing with each stored dtype key.
    """

    def __init__(self):
        self._dict = {}
        self._dtype_keys = []

    def keys(self):
        return self._dict.keys()

    def values(self):
        return self._dict.values()

    def __setitem__(self, key, value):
        self._dict[key] = value
        if isinstance(key, np.dtype):
            self._dtype_keys.append(key)

    def __getitem__(self, key):
        try:
            return self._dict[key]
        except (KeyError, TypeError):
            pass
        if isinstance(key, np.dtype):
            for dt in self._dtype_keys:
                if key == dt:
                    return self._dict[dt]
        raise KeyError(key)


def pretty_mapping(mapping, getterfunc=None):
    """Return text with one ``name : value`` line per key of `mapping`

    Names are left justified to the longest.  ``getterfunc(obj, key)``, if
    given, fetches the value to print for ``key``; default is ``obj[key]``.

    >>> print(pretty_mapping({'descrip': b'', 'bitpix': 16}))
    descrip  : b''
    bitpix   : 16
    """
    if getterfunc is None:
        getterfunc = lambda obj, key: obj[key]
    names = list(mapping)
    width = max(len(str(name)) for name in names)
    return '\n'.join(f'{str(name):<{width}}  : {getterfunc(mapping, name)}'
                     for name in names)


def make_dt_codes(codes_seqs):
    """Return datatype ``Recoder`` from rows of datatype codes

    Parameters
    ----------
    codes_seqs : sequence of sequences
       rows of (NIfTI code, label, numpy type, NIfTI string name), e.g.
       ``(16, 'float32', np.float32, 'NIFTI_TYPE_FLOAT32')``.

    Returns
    -------
    rec : Recoder
       columns ``code``, ``label``, ``type``, ``niistring`` and ``dtype``,
       the last being the native order dtype.  Any value of a row, or the
       dtype, looks up the row.
    """
    rows = []
    for seq in codes_seqs:
        if len(seq) != 4:
            raise ValueError('Datatype rows need code, label, type and '
                             'NIfTI name')
        rows.append(tuple(seq) + (np.dtype(seq[2]).newbyteorder('='),))
    return Recoder(rows, ('code', 'label', 'type', 'niistring', 'dtype'),
                   DtypeMapper)


def array_from_file(shape, in_dtype, infile, offset=0, order='F', mmap=True):
    """Read or memory map array of `shape` and `in_dtype` from `infile`

    Parameters
    ----------
    shape : sequence
        array shape
    in_dtype : dtype specifier
        element type, native byte order
    infile : file-like
        implementing ``seek`` and ``readinto``; an :class:`Opener` is
        unwrapped to the file it holds
    offset : int, optional
        byte position of the first element in `infile`
    order : {'F', 'C'}, optional
        element order in the file.  Default is 'F' (NIfTI order, first axis
        fastest).
    mmap : {True, False, 'c', 'r', 'r+'}, optional
        False reads the array into memory.  Otherwise return ``np.memmap``
        with this mode, True meaning 'c' (copy on write).  Files that cannot
        be memory mapped, such as ``BytesIO``, are read into memory.

    Returns
    -------
    arr : np.ndarray or np.memmap

    Raises
    ------
    OSError
        if `infile` ends before the array does

    Examples
    --------
    >>> from io import BytesIO
    >>> arr = np.arange(6, dtype=np.int16).reshape(1, 2, 3)
    >>> bio = BytesIO(b' ' * 10 + arr.tobytes('F'))
    >>> arr2 = array_from_file((1, 2, 3), arr.dtype, bio, 10)
    >>> np.all(arr == arr2)
    True
    """
    if mmap not in _mmap_modes:
        raise ValueError("mmap should be one of True, False, 'c', 'r', 'r+'")
    in_dtype = np.dtype(in_dtype)
    infile = getattr(infile, 'fobj', infile)
    shape = tuple(shape)
    n_bytes = reduce(mul, shape, 1) * in_dtype.itemsize
    if n_bytes == 0:
        return np.zeros(shape, in_dtype)
    if mmap:
        mode = 'c' if mmap is True else mmap
        try:
            return np.memmap(infile, in_dtype, mode=mode, shape=shape,
                             order=order, offset=offset)
        # no fileno, or a file numpy cannot map
        except (AttributeError, TypeError, ValueError, OSError):
            pass
    infile.seek(offset)
    buf = bytearray(n_bytes)
    n_read = infile.readinto(buf)
    if n_read != n_bytes:
        name = getattr(infile, 'name', 'file object')
        raise OSError(f'Expected {n_bytes} bytes, got {n_read} bytes from '
                      f'{name}; is the file truncated?')
    return np.ndarray(shape, in_dtype, buffer=buf, order=order)


def array_to_file(data, fileobj, offset=None, order='F'):
    """Write array `data` to `fileobj` in native byte order

    Parameters
    ----------
    data : array-like
    fileobj : file-like
        implementing ``write``, and ``seek`` if `offset` is given
    offset : None or int, optional
        position to write from.  None writes at the current position.
    order : {'F', 'C'}, optional
        element order on disk.  Default is NIfTI order 'F'.
    """
    data = np.asanyarray(data)
    if data.dtype.byteorder == swapped_code:
        data = data.astype(data.dtype.newbyteorder('='))
    if offset is not None:
        fileobj.seek(offset)
    fileobj.write(data.tobytes(order=order))
