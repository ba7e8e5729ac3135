# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Fixed layout binary headers as numpy structured scalars

A :class:`WrapStruct` subclass names its layout in ``template_dtype``, a
numpy structured dtype with one entry per field in file order.  An instance
holds one record of that dtype.  Fields read and write through mapping
access, and ``binaryblock`` gives the record as bytes, exactly
``template_dtype.itemsize`` long.  Records are always in native byte order.

Subclasses supply defaults by overriding ``default_structarr`` and checks by
overriding ``_get_checks``; checks run through a
:class:`~niftiio.batteryrunners.BatteryRunner` when a record is built from
bytes, and on request with :meth:`WrapStruct.check_fix`.  Check reports go to
``imageglobals.logger`` and raise at ``imageglobals.error_level``, unless
other values are passed.

:class:`LabeledWrapStruct` knows the labels of coded fields, for
``get_value_label`` and for printing.
"""
import numpy as np

from .volumeutils import pretty_mapping, native_code
from . import imageglobals
from .batteryrunners import BatteryRunner


class WrapStructError(Exception):
    pass


class WrapStruct:
    # Layout of the record; subclasses override
    template_dtype = np.dtype([('integer', 'i2')])

    def __init__(self, binaryblock=None, check=True):
        """Make record from `binaryblock`, or defaults if None

        Parameters
        ----------
        binaryblock : None or bytes, optional
            exactly ``template_dtype.itemsize`` bytes.  None gives the
            default record.
        check : bool, optional
            whether to run the checks, with fixes, on a record made from
            `binaryblock`

        Examples
        --------
        >>> wstr = WrapStruct()
        >>> wstr['integer']
        array(0, dtype=int16)
        >>> wstr['integer'] = 1
        >>> WrapStruct(wstr.binaryblock)['integer']
        array(1, dtype=int16)
        """
        if binaryblock is None:
            self._structarr = self.default_structarr()
            return
        n_bytes = self.template_dtype.itemsize
        if len(binaryblock) != n_bytes:
            raise WrapStructError(f'Need binary block of {n_bytes} bytes; '
                                  f'got {len(binaryblock)}')
        record = np.ndarray(shape=(), dtype=self.template_dtype,
                            buffer=binaryblock)
        self._structarr = record.copy()
        if check:
            self.check_fix()

    @classmethod
    def from_fileobj(klass, fileobj, check=True):
        """Read record from the current position of `fileobj`"""
        return klass(fileobj.read(klass.template_dtype.itemsize), check)

    @classmethod
    def default_structarr(klass):
        """Return record with default values; all zero here"""
        return np.zeros((), dtype=klass.template_dtype)

    @property
    def structarr(self):
        """The numpy structured scalar holding the fields"""
        return self._structarr

    @property
    def binaryblock(self):
        """Record as bytes

        >>> len(WrapStruct().binaryblock)
        2
        """
        return self._structarr.tobytes()

    @property
    def endianness(self):
        """Byte order code of the record, the native code"""
        return native_code

    def write_to(self, fileobj):
        """Write record to `fileobj` at its current position"""
        fileobj.write(self.binaryblock)

    def copy(self):
        """Return unchecked copy of record"""
        return self.__class__(self.binaryblock, check=False)

    def __eq__(self, other):
        other_block = getattr(other, 'binaryblock', None)
        return other_block is not None and self.binaryblock == other_block

    def __ne__(self, other):
        return not self == other

    def __getitem__(self, item):
        return self._structarr[item]

    def __setitem__(self, item, value):
        self._structarr[item] = value

    def keys(self):
        """Field names in file order"""
        return list(self.template_dtype.names)

    def __iter__(self):
        return iter(self.keys())

    def values(self):
        """Field values in file order"""
        return [self._structarr[key] for key in self.keys()]

    def items(self):
        """(name, value) pairs in file order"""
        return zip(self.keys(), self.values())

    def get(self, k, d=None):
        """Value of field `k`, or `d` if there is no such field"""
        return self._structarr[k] if k in self.template_dtype.names else d

    @classmethod
    def _get_checks(klass):
        """Return sequence of check functions for this class"""
        return ()

    def check_fix(self, logger=None, error_level=None):
        """Run checks with fixes, logging reports

        Parameters
        ----------
        logger : None or logging.Logger, optional
            default is ``imageglobals.logger``
        error_level : None or int, optional
            problem level at which to raise the error of a report; default
            is ``imageglobals.error_level``
        """
        BatteryRunner(self._get_checks()).check_raise(self, logger,
                                                      error_level)

    @classmethod
    def diagnose_binaryblock(klass, binaryblock):
        """Return problems found in `binaryblock` as text, one per line"""
        wstr = klass(binaryblock, check=False)
        return '\n'.join(BatteryRunner(klass._get_checks()).problems(wstr))

    def _summary(self):
        return f"{self.__class__} object, endian='{self.endianness}'"

    def __str__(self):
        return '\n'.join((self._summary(), pretty_mapping(self)))


class LabeledWrapStruct(WrapStruct):
    """WrapStruct with labels for the values of coded fields"""
    # field name: Recoder with 'code' and 'label' fields
    _field_recoders = {}

    def get_value_label(self, fieldname):
        """Return label for the code in field `fieldname`

        Codes without a label give ``'<unknown code N>'``.

        Raises
        ------
        ValueError
            if `fieldname` is not a coded field

        Examples
        --------
        >>> from niftiio.volumeutils import Recoder
        >>> recoder = Recoder(((0, 'unknown'), (1, 'scanner')),
        ...                   ('code', 'label'))
        >>> class C(LabeledWrapStruct):
        ...     template_dtype = np.dtype([('qform_code', 'i2')])
        ...     _field_recoders = dict(qform_code=recoder)
        >>> hdr = C()
        >>> hdr.get_value_label('qform_code')
        'unknown'
        >>> hdr['qform_code'] = 7
        >>> hdr.get_value_label('qform_code')
        '<unknown code 7>'
        """
        try:
            recoder = self._field_recoders[fieldname]
        except KeyError:
            raise ValueError(f'{fieldname} not a coded field')
        code = int(self._structarr[fieldname])
        try:
            return recoder.label[code]
        except KeyError:
            return f'<unknown code {code}>'

    def _value_or_label(self, key):
        try:
            return self.get_value_label(key)
        except ValueError:
            return self[key]

    def __str__(self):
        getter = LabeledWrapStruct._value_or_label
        return '\n'.join((self._summary(), pretty_mapping(self, getter)))
