# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Read / write access to the NIfTI-1 header and header extensions

NIfTI-1 format defined at http://nifti.nimh.nih.gov/nifti-1/
"""
import warnings

import numpy as np

from .volumeutils import Recoder
from .errors import (HeaderDataError, NotANiftiFile, ByteSwapUnsupported,
                     UnsupportedDatatype, InvalidAxisIndex)
from .batteryrunners import Report
from .wrapstruct import LabeledWrapStruct
from .datatypes import data_type_codes, kind_for, code_for
from .units import unit_codes, SPATIAL_MASK, TEMPORAL_MASK
from . import geometry

xform_codes = geometry.xform_codes

# The 348 header bytes, field by field in file order.  Comments give the
# byte offset of each field and what it holds.
header_dtd = [
    ('sizeof_hdr', 'i4'),      # 0: header size, 348
    ('data_type', 'S10'),      # 4: Analyze leftover, ignored
    ('db_name', 'S18'),        # 14: Analyze leftover, ignored
    ('extents', 'i4'),         # 32: Analyze leftover, ignored
    ('session_error', 'i2'),   # 36: Analyze leftover, ignored
    ('regular', 'S1'),         # 38: Analyze leftover, ignored
    ('dim_info', 'u1'),        # 39: frequency, phase, slice axes
    ('dim', 'i2', (8,)),       # 40: rank, then axis lengths
    ('intent_p1', 'f4'),       # 56: intent parameters
    ('intent_p2', 'f4'),       # 60
    ('intent_p3', 'f4'),       # 64
    ('intent_code', 'i2'),     # 68: meaning of the voxel values
    ('datatype', 'i2'),        # 70: voxel type code
    ('bitpix', 'i2'),          # 72: bits per voxel
    ('slice_start', 'i2'),     # 74: first acquired slice
    ('pixdim', 'f4', (8,)),    # 76: qfac, then voxel sizes and time step
    ('vox_offset', 'f4'),      # 108: byte offset of voxel data
    ('scl_slope', 'f4'),       # 112: intensity scaling
    ('scl_inter', 'f4'),       # 116
    ('slice_end', 'i2'),       # 120: last acquired slice
    ('slice_code', 'u1'),      # 122: slice acquisition order
    ('xyzt_units', 'u1'),      # 123: space and time unit codes
    ('cal_max', 'f4'),         # 124: display range
    ('cal_min', 'f4'),         # 128
    ('slice_duration', 'f4'),  # 132: time to acquire one slice
    ('toffset', 'f4'),         # 136: time of first volume
    ('glmax', 'i4'),           # 140: Analyze leftover, ignored
    ('glmin', 'i4'),           # 144: Analyze leftover, ignored
    ('descrip', 'S80'),        # 148: free text
    ('aux_file', 'S24'),       # 228: name of a related file
    ('qform_code', 'i2'),      # 252: space of the quaternion affine
    ('sform_code', 'i2'),      # 254: space of the srow affine
    ('quatern_b', 'f4'),       # 256: quaternion rotation
    ('quatern_c', 'f4'),       # 260
    ('quatern_d', 'f4'),       # 264
    ('qoffset_x', 'f4'),       # 268: quaternion affine translation
    ('qoffset_y', 'f4'),       # 272
    ('qoffset_z', 'f4'),       # 276
    ('srow_x', 'f4', (4,)),    # 280: rows of the srow affine
    ('srow_y', 'f4', (4,)),    # 296
    ('srow_z', 'f4', (4,)),    # 312
    ('intent_name', 'S16'),    # 328: name for the intent
    ('magic', 'S4'),           # 344: b'n+1' single file, b'ni1' pair
]
header_dtype = np.dtype(header_dtd)

slice_order_codes = Recoder((  # code, label
    (0, 'unknown'),
    (1, 'sequential increasing', 'seq inc'),
    (2, 'sequential decreasing', 'seq dec'),
    (3, 'alternating increasing', 'alt inc'),
    (4, 'alternating decreasing', 'alt dec'),
    (5, 'alternating increasing 2', 'alt inc 2'),
    (6, 'alternating decreasing 2', 'alt dec 2')), fields=('code', 'label'))

intent_codes = Recoder((
    # code, label, parameters description tuple
    (0, 'none', (), "NIFTI_INTENT_NONE"),
    (2, 'correlation', ('p1 = DOF',), "NIFTI_INTENT_CORREL"),
    (3, 't test', ('p1 = DOF',), "NIFTI_INTENT_TTEST"),
    (4, 'f test', ('p1 = numerator DOF', 'p2 = denominator DOF'),
     "NIFTI_INTENT_FTEST"),
    (5, 'z score', (), "NIFTI_INTENT_ZSCORE"),
    (6, 'chi2', ('p1 = DOF',), "NIFTI_INTENT_CHISQ"),
    (7, 'beta', ('p1 = a', 'p2 = b'), "NIFTI_INTENT_BETA"),
    (8, 'binomial', ('p1 = number of trials', 'p2 = probability per trial'),
     "NIFTI_INTENT_BINOM"),
    (9, 'gamma', ('p1 = shape', 'p2 = scale'), "NIFTI_INTENT_GAMMA"),
    (10, 'poisson', ('p1 = mean',), "NIFTI_INTENT_POISSON"),
    (11, 'normal', ('p1 = mean', 'p2 = standard deviation'),
     "NIFTI_INTENT_NORMAL"),
    (12, 'non central f test',
     ('p1 = numerator DOF', 'p2 = denominator DOF',
      'p3 = numerator noncentrality parameter'),
     "NIFTI_INTENT_FTEST_NONC"),
    (13, 'non central chi2', ('p1 = DOF', 'p2 = noncentrality parameter'),
     "NIFTI_INTENT_CHISQ_NONC"),
    (14, 'logistic', ('p1 = location', 'p2 = scale'),
     "NIFTI_INTENT_LOGISTIC"),
    (15, 'laplace', ('p1 = location', 'p2 = scale'), "NIFTI_INTENT_LAPLACE"),
    (16, 'uniform', ('p1 = lower end', 'p2 = upper end'),
     "NIFTI_INTENT_UNIFORM"),
    (17, 'non central t test', ('p1 = DOF', 'p2 = noncentrality parameter'),
     "NIFTI_INTENT_TTEST_NONC"),
    (18, 'weibull', ('p1 = location', 'p2 = scale', 'p3 = power'),
     "NIFTI_INTENT_WEIBULL"),
    (19, 'chi', ('p1 = DOF',), "NIFTI_INTENT_CHI"),
    (20, 'inverse gaussian', ('p1 = mu', 'p2 = lambda'),
     "NIFTI_INTENT_INVGAUSS"),
    (21, 'extreme value 1', ('p1 = location', 'p2 = scale'),
     "NIFTI_INTENT_EXTVAL"),
    (22, 'p value', (), "NIFTI_INTENT_PVAL"),
    (23, 'log p value', (), "NIFTI_INTENT_LOGPVAL"),
    (24, 'log10 p value', (), "NIFTI_INTENT_LOG10PVAL"),
    (1001, 'estimate', (), "NIFTI_INTENT_ESTIMATE"),
    (1002, 'label', (), "NIFTI_INTENT_LABEL"),
    (1003, 'neuroname', (), "NIFTI_INTENT_NEURONAME"),
    (1004, 'general matrix', ('p1 = M', 'p2 = N'), "NIFTI_INTENT_GENMATRIX"),
    (1005, 'symmetric matrix', ('p1 = M',), "NIFTI_INTENT_SYMMATRIX"),
    (1006, 'displacement vector', (), "NIFTI_INTENT_DISPVECT"),
    (1007, 'vector', (), "NIFTI_INTENT_VECTOR"),
    (1008, 'pointset', (), "NIFTI_INTENT_POINTSET"),
    (1009, 'triangle', (), "NIFTI_INTENT_TRIANGLE"),
    (1010, 'quaternion', (), "NIFTI_INTENT_QUATERNION"),
    (1011, 'dimensionless', (), "NIFTI_INTENT_DIMLESS"),
    (2001, 'time series', (), "NIFTI_INTENT_TIME_SERIES",
     "NIFTI_INTENT_TIMESERIES"),
    (2002, 'node index', (), "NIFTI_INTENT_NODE_INDEX"),
    (2003, 'rgb vector', (), "NIFTI_INTENT_RGB_VECTOR"),
    (2004, 'rgba vector', (), "NIFTI_INTENT_RGBA_VECTOR"),
    (2005, 'shape', (), "NIFTI_INTENT_SHAPE"),
), fields=('code', 'label', 'parameters', 'niistring'))

# NIfTI header extension type codes (ECODE)
# see nifti1_io.h for a complete list of all known extensions
extension_codes = Recoder((
    (0, "ignore"),
    (2, "dicom"),
    (4, "afni"),
    (6, "comment"),
    (8, "xcede"),
    (10, "jimdiminfo"),
    (12, "workflow_fwds"),
    (14, "freesurfer"),
    (16, "pypickle"),
), fields=('code', 'label'))

# Size of the header, and offset of the first voxel when there are no
# extensions (header plus 4 byte extension flag)
sizeof_hdr = 348
min_vox_offset = 352


def ext_size_on_disk(content_len):
    """Bytes on disk for extension with `content_len` bytes of content

    The 8 bytes of esize and ecode plus the content, rounded up to a multiple
    of 16.

    >>> ext_size_on_disk(0), ext_size_on_disk(8), ext_size_on_disk(9)
    (16, 16, 32)
    """
    return -(-(8 + content_len) // 16) * 16


class Nifti1Extension:
    """One NIfTI-1 header extension: an integer code and a byte string"""

    def __init__(self, code, content):
        """
        Parameters
        ----------
        code : int or str
          extension code, or its label in :data:`extension_codes`.  Integer
          codes missing from the table are accepted.
        content : bytes or str
          extension content; str is stored UTF-8 encoded.  Kept as given,
          so padding read from a file becomes part of the content.
        """
        try:
            self._code = extension_codes.code[code]
        except KeyError:
            if not isinstance(code, (int, np.integer)):
                raise HeaderDataError(f'Unknown extension code {code!r}')
            self._code = int(code)
        if isinstance(content, str):
            content = content.encode('utf-8')
        self._content = bytes(content)

    def get_code(self):
        return self._code

    def get_content(self):
        return self._content

    def get_sizeondisk(self):
        """Bytes taken on disk: esize, ecode, content and padding"""
        return ext_size_on_disk(len(self._content))

    def __repr__(self):
        label = extension_codes.label.get(self._code, self._code)
        return f"Nifti1Extension('{label}', {self._content!r})"

    def __eq__(self, other):
        if not isinstance(other, Nifti1Extension):
            return False
        return (self._code, self._content) == (other._code, other._content)

    def __ne__(self, other):
        return not self == other

    def write_to(self, fileobj):
        """Write esize, ecode, content and zero padding to `fileobj`"""
        esize = self.get_sizeondisk()
        fileobj.write(np.array((esize, self._code), dtype=np.int32).tobytes())
        fileobj.write(self._content)
        fileobj.write(b'\x00' * (esize - 8 - len(self._content)))


class Nifti1Extensions(list):
    """List of :class:`Nifti1Extension`, in file order"""

    def count(self, ecode):
        """Number of extensions with code `ecode` (integer or label)"""
        code = extension_codes.code.get(ecode, ecode)
        return self.get_codes().count(code)

    def get_codes(self):
        """Extension codes, in order"""
        return [ext.get_code() for ext in self]

    def get_sizeondisk(self):
        """Bytes taken by the extensions on disk, without the flag"""
        return sum(ext.get_sizeondisk() for ext in self)

    def __repr__(self):
        return f"Nifti1Extensions({', '.join(repr(ext) for ext in self)})"

    def write_to(self, fileobj):
        """Write extension flag, then the extensions, to `fileobj`

        With no extensions the flag is ``int32(0)`` and nothing follows.
        Otherwise the flag is ``01 00 00 00``.
        """
        if not self:
            fileobj.write(np.int32(0).tobytes())
            return
        fileobj.write(b'\x01\x00\x00\x00')
        for ext in self:
            ext.write_to(fileobj)

    @classmethod
    def from_fileobj(klass, fileobj, header):
        """Read extension flag and extensions from `fileobj`

        Parameters
        ----------
        fileobj : file-like
            positioned at the extension flag, just after the header
        header : Nifti1Header
            header for these extensions.  For a single file (magic ``n+1``)
            records are read up to ``vox_offset``; for a pair header (magic
            ``ni1``) up to the end of `fileobj`.

        Returns
        -------
        extensions : Nifti1Extensions
            empty if `fileobj` has no flag, or the flag does not start with 1

        Raises
        ------
        HeaderDataError
            for a truncated record, or a record size below 8
        """
        extensions = klass()
        flag = fileobj.read(4)
        if len(flag) < 4 or flag[0] != 1:
            return extensions
        single = header.is_single
        vox_offset = header.get_data_offset()
        while not single or fileobj.tell() < vox_offset:
            ext_def = fileobj.read(8)
            if not ext_def and not single:
                break
            if len(ext_def) != 8:
                raise HeaderDataError('Extension record truncated in size and '
                                      'code')
            esize, ecode = np.frombuffer(ext_def, dtype=np.int32).tolist()
            if esize < 8:
                raise HeaderDataError(f'Extension size {esize} is below 8')
            if esize % 16:
                warnings.warn(f'Extension size {esize} is not a multiple of '
                              '16; reading it as given', UserWarning)
            content = fileobj.read(esize - 8)
            if len(content) != esize - 8:
                raise HeaderDataError('Extension record truncated in content')
            extensions.append(Nifti1Extension(ecode, content))
        return extensions


def pack_dim_info(freq=0, phase=0, slice=0):
    """Pack frequency, phase and slice axis codes into ``dim_info`` byte

    Codes are 0 for "not specified" or 1 to 3 for the first to third axis.

    >>> pack_dim_info(1, 2, 3)
    57
    >>> pack_dim_info(slice=4)
    Traceback (most recent call last):
       ...
    niftiio.errors.InvalidAxisIndex: Invalid slice dimension 4
    """
    for name, value in (('frequency', freq), ('phase', phase),
                        ('slice', slice)):
        if value not in (0, 1, 2, 3):
            raise InvalidAxisIndex(f'Invalid {name} dimension {value}')
    return int(freq) | (int(phase) << 2) | (int(slice) << 4)


def unpack_dim_info(dim_info):
    """Return ``(freq, phase, slice)`` axis codes from ``dim_info`` byte

    >>> unpack_dim_info(57)
    (1, 2, 3)
    """
    info = int(dim_info)
    return info & 3, (info >> 2) & 3, (info >> 4) & 3


class Nifti1Header(LabeledWrapStruct):
    """Class for NIfTI-1 header

    The header can precede the data in a single file (magic ``n+1``), or be
    a separate file of a header / image pair (magic ``ni1``).  Extensions are
    not part of the header object; see :class:`Nifti1Extensions`.
    """
    template_dtype = header_dtype
    _data_type_codes = data_type_codes

    # fields with recoders for their values
    _field_recoders = {'datatype': data_type_codes,
                       'qform_code': xform_codes,
                       'sform_code': xform_codes,
                       'intent_code': intent_codes,
                       'slice_code': slice_order_codes}

    sizeof_hdr = sizeof_hdr
    single_vox_offset = min_vox_offset

    # Magics for single and pair
    pair_magic = b'ni1'
    single_magic = b'n+1'

    def __init__(self, binaryblock=None, check=True):
        """Initialize header from binary data block

        Raises
        ------
        NotANiftiFile
            if `check` is True and `binaryblock` is shorter than 348 bytes
            or does not start with ``sizeof_hdr == 348``
        ByteSwapUnsupported
            if `check` is True and ``dim[0]`` is outside [1, 7]; the block
            is probably from a file of the other byte order
        """
        if binaryblock is not None and check:
            self._check_binaryblock(binaryblock)
        super().__init__(binaryblock, check)

    @classmethod
    def _check_binaryblock(klass, binaryblock):
        if len(binaryblock) < klass.sizeof_hdr:
            raise NotANiftiFile(f'Need {klass.sizeof_hdr} header bytes, '
                                f'got {len(binaryblock)}')
        hdr = np.ndarray(shape=(), dtype=header_dtype,
                         buffer=binaryblock[:klass.sizeof_hdr])
        if hdr['sizeof_hdr'] != klass.sizeof_hdr:
            raise NotANiftiFile(f"sizeof_hdr is {int(hdr['sizeof_hdr'])}, "
                                f'should be {klass.sizeof_hdr}')
        if not 1 <= hdr['dim'][0] <= 7:
            raise ByteSwapUnsupported(
                f"dim[0] is {int(hdr['dim'][0])}; byte swapped files are "
                'not supported')

    @classmethod
    def from_fileobj(klass, fileobj, check=True):
        """Read header from current position of `fileobj`

        Reads exactly 348 bytes; extensions are read separately with
        :meth:`Nifti1Extensions.from_fileobj`.  The size and byte order
        tests run whatever the value of `check`.
        """
        raw_str = fileobj.read(klass.sizeof_hdr)
        klass._check_binaryblock(raw_str)
        return klass(raw_str, check)

    @classmethod
    def default_structarr(klass):
        """Create empty header binary block"""
        hdr_data = super().default_structarr()
        hdr_data['sizeof_hdr'] = klass.sizeof_hdr
        hdr_data['dim'] = [1, 0, 1, 1, 1, 1, 1, 1]
        hdr_data['datatype'] = code_for(np.int16)
        hdr_data['bitpix'] = 16
        hdr_data['pixdim'][1:4] = 1
        hdr_data['vox_offset'] = klass.single_vox_offset
        hdr_data['scl_slope'] = 1
        hdr_data['magic'] = klass.single_magic
        return hdr_data

    @property
    def is_single(self):
        """True unless magic says this is the header of a header / image pair"""
        return self._structarr['magic'].item() != self.pair_magic

    def get_value_label(self, fieldname):
        """Returns label for coded field

        ``xyzt_units`` gives the spatial and temporal unit labels joined by
        a comma.

        >>> hdr = Nifti1Header()
        >>> hdr.get_value_label('datatype')
        'int16'
        >>> hdr['xyzt_units'] = 10
        >>> hdr.get_value_label('xyzt_units')
        'mm, sec'
        """
        if fieldname == 'xyzt_units':
            return ', '.join(self.get_xyzt_units())
        return super().get_value_label(fieldname)

    def get_data_shape(self):
        """Get shape of data

        Examples
        --------
        >>> hdr = Nifti1Header()
        >>> hdr.get_data_shape()
        (0,)
        >>> hdr.set_data_shape((1,2,3))
        >>> hdr.get_data_shape()
        (1, 2, 3)
        """
        dims = self._structarr['dim']
        ndims = int(dims[0])
        return tuple(int(d) for d in dims[1:ndims + 1])

    def set_data_shape(self, shape):
        """Set ``dim`` from data `shape`

        Voxel sizes (``pixdim``) are not changed.

        Parameters
        ----------
        shape : sequence
           sequence of 1 to 7 integers specifying data array shape
        """
        shape = tuple(shape)
        ndims = len(shape)
        if not 1 <= ndims <= 7:
            raise HeaderDataError(f'NIfTI-1 needs 1 to 7 dimensions, not {ndims}')
        dims = self._structarr['dim']
        info = np.iinfo(dims.dtype)
        if any(not info.min <= d <= info.max for d in shape):
            raise HeaderDataError(f'shape {shape} does not fit in dim datatype')
        dims[:] = 1
        dims[0] = ndims
        dims[1:ndims + 1] = shape

    def get_data_dtype(self):
        """Get numpy dtype for data

        >>> Nifti1Header().get_data_dtype()
        dtype('int16')
        """
        return kind_for(self._structarr['datatype'])

    def set_data_dtype(self, datatype):
        """Set ``datatype`` and ``bitpix`` from code, label, dtype or type

        >>> hdr = Nifti1Header()
        >>> hdr.set_data_dtype(np.float32)
        >>> int(hdr['datatype']), int(hdr['bitpix'])
        (16, 32)
        """
        code = code_for(datatype)
        self._structarr['datatype'] = code
        self._structarr['bitpix'] = kind_for(code).itemsize * 8

    def get_zooms(self):
        """Get voxel sizes along each data axis from ``pixdim``

        >>> hdr = Nifti1Header()
        >>> hdr.set_data_shape((1, 2))
        >>> hdr.set_zooms((3, 4))
        >>> hdr.get_zooms()
        (3.0, 4.0)
        """
        hdr = self._structarr
        ndim = int(hdr['dim'][0])
        return tuple(float(p) for p in hdr['pixdim'][1:ndim + 1])

    def set_zooms(self, zooms):
        """Set zooms into ``pixdim``; one value per data axis"""
        hdr = self._structarr
        ndim = int(hdr['dim'][0])
        zooms = np.asarray(zooms)
        if len(zooms) != ndim:
            raise HeaderDataError('Expecting %d zoom values for ndim %d'
                                  % (ndim, ndim))
        if np.any(zooms < 0):
            raise HeaderDataError('zooms must be positive')
        hdr['pixdim'][1:ndim + 1] = zooms[:]

    def get_data_offset(self):
        """Return offset into data file to read data

        >>> Nifti1Header().get_data_offset()
        352
        """
        return int(self._structarr['vox_offset'])

    def set_data_offset(self, offset):
        """Set offset into data file to read data"""
        self._structarr['vox_offset'] = offset

    def get_slope_inter(self):
        """Return ``(scl_slope, scl_inter)`` as floats

        Values are as stored; a slope of 0 is not replaced.
        """
        return (float(self._structarr['scl_slope']),
                float(self._structarr['scl_inter']))

    def set_slope_inter(self, slope, inter=0.):
        """Set ``scl_slope`` and ``scl_inter``"""
        if np.isinf(slope) or np.isinf(inter):
            raise HeaderDataError('Slope and intercept must be finite')
        self._structarr['scl_slope'] = slope
        self._structarr['scl_inter'] = inter

    def get_dim_info(self):
        """Gets NIfTI MRI frequency, phase and slice axis codes

        Returns
        -------
        freq, phase, slice : int
           Axis codes, 0 for "not specified", 1 to 3 for the first to third
           data axis.

        Examples
        --------
        >>> hdr = Nifti1Header()
        >>> hdr.set_dim_info(1, 2, 3)
        >>> hdr.get_dim_info()
        (1, 2, 3)
        >>> hdr.set_dim_info(slice=3)
        >>> hdr.get_dim_info()
        (0, 0, 3)
        """
        return unpack_dim_info(self._structarr['dim_info'])

    def set_dim_info(self, freq=0, phase=0, slice=0):
        """Sets NIfTI MRI frequency, phase and slice axis codes

        Raises ``InvalidAxisIndex`` for codes outside [0, 3].
        """
        self._structarr['dim_info'] = pack_dim_info(freq, phase, slice)

    def get_intent(self, code_repr='label'):
        """Return intent code, parameters and name

        Parameters
        ----------
        code_repr : {'label', 'code'}, optional
           return the intent as its label or its integer code

        Returns
        -------
        code : str or int
        parameters : tuple
            as many floats as the intent takes
        name : str
            ``intent_name``

        Examples
        --------
        >>> hdr = Nifti1Header()
        >>> hdr.set_intent('t test', (10,), name='some score')
        >>> hdr.get_intent()
        ('t test', (10.0,), 'some score')
        >>> hdr.get_intent('code')
        (3, (10.0,), 'some score')
        """
        if code_repr not in ('label', 'code'):
            raise TypeError('code_repr should be "label" or "code"')
        hdr = self._structarr
        code = int(hdr['intent_code'])
        known = code in intent_codes.value_set()
        n_params = len(intent_codes.parameters[code]) if known else 0
        params = tuple(float(hdr[f'intent_p{i}']) for i in range(1, n_params + 1))
        name = hdr['intent_name'].item().decode('latin-1')
        if code_repr == 'label':
            label = intent_codes.label[code] if known else f'unknown code {code}'
            return label, params, name
        return code, params, name

    def set_intent(self, code, params=(), name=''):
        """Set intent code, parameters and name

        `params` is empty, for all zero parameters, or has one value per
        parameter of the intent (2 for 'f test').

        >>> hdr = Nifti1Header()
        >>> hdr.set_intent('f test', (2, 10), name='another score')
        >>> hdr.get_intent()
        ('f test', (2.0, 10.0), 'another score')
        >>> hdr.set_intent('f test')
        >>> hdr.get_intent()
        ('f test', (0.0, 0.0), '')
        """
        try:
            icode = intent_codes.code[code]
        except KeyError:
            raise HeaderDataError(f'Unknown intent code {code!r}')
        p_descr = intent_codes.parameters[icode]
        if params and len(params) != len(p_descr):
            raise HeaderDataError(f'Intent {code!r} takes parameters '
                                  f'{p_descr}, or none')
        hdr = self._structarr
        padded = list(params) + [0] * (3 - len(params))
        for i, param in enumerate(padded, 1):
            hdr[f'intent_p{i}'] = param
        hdr['intent_code'] = icode
        hdr['intent_name'] = name

    def get_xyzt_units(self):
        """Return spatial and temporal unit labels

        >>> hdr = Nifti1Header()
        >>> hdr.set_xyzt_units('mm', 'msec')
        >>> hdr.get_xyzt_units()
        ('mm', 'msec')
        """
        units = int(self._structarr['xyzt_units'])
        return (unit_codes.label.get(units & SPATIAL_MASK, 'unknown'),
                unit_codes.label.get(units & TEMPORAL_MASK, 'unknown'))

    def set_xyzt_units(self, xyz=None, t=None):
        """Set ``xyzt_units`` from spatial and temporal unit labels or codes"""
        if xyz is None:
            xyz = 0
        if t is None:
            t = 0
        xyz_code = unit_codes[xyz]
        t_code = unit_codes[t]
        if xyz_code & ~SPATIAL_MASK or t_code & ~TEMPORAL_MASK:
            raise HeaderDataError(f'Units {xyz!r}, {t!r} should be spatial, '
                                  'temporal')
        self._structarr['xyzt_units'] = xyz_code + t_code

    def get_n_slices(self):
        """Return number of slices along the slice axis of ``dim_info``"""
        slice_dim = self.get_dim_info()[2]
        if slice_dim == 0:
            raise HeaderDataError('No slice axis in dim_info')
        shape = self.get_data_shape()
        if slice_dim > len(shape):
            raise HeaderDataError(f'Slice axis {slice_dim} beyond data shape '
                                  f'{shape}')
        return shape[slice_dim - 1]

    def get_qform(self):
        """Return 4x4 affine from qform quaternion fields"""
        return geometry.get_qform(self)

    def get_sform(self):
        """Return 4x4 affine from sform rows"""
        return geometry.get_sform(self)

    def get_base_affine(self):
        return geometry.get_base_affine(self)

    def get_best_affine(self):
        """Select best of available transforms"""
        return geometry.affine_of(self)

    # Checks; each returns (header, report) and fixes in place when asked

    @classmethod
    def _get_checks(klass):
        return (klass._chk_sizeof_hdr,
                klass._chk_datatype,
                klass._chk_bitpix,
                klass._chk_pixdims,
                klass._chk_qfac,
                klass._chk_magic,
                klass._chk_offset,
                klass._chk_qform_code,
                klass._chk_sform_code)

    @classmethod
    def _chk_sizeof_hdr(klass, hdr, fix=False):
        size = int(hdr['sizeof_hdr'])
        if size == klass.sizeof_hdr:
            return hdr, Report(HeaderDataError)
        if fix:
            hdr['sizeof_hdr'] = klass.sizeof_hdr
        return hdr, _problem(30, f'sizeof_hdr is {size}, should be '
                             f'{klass.sizeof_hdr}',
                             fix, f'set sizeof_hdr to {klass.sizeof_hdr}')

    @classmethod
    def _chk_datatype(klass, hdr, fix=False):
        code = int(hdr['datatype'])
        if code in klass._data_type_codes.value_set():
            return hdr, Report(UnsupportedDatatype)
        return hdr, _problem(40, f'datatype {code} has no numpy type', fix,
                             'cannot fix datatype', UnsupportedDatatype)

    @classmethod
    def _chk_bitpix(klass, hdr, fix=False):
        code = int(hdr['datatype'])
        try:
            dtype = klass._data_type_codes.dtype[code]
        except KeyError:
            return hdr, _problem(10, f'cannot check bitpix for datatype '
                                 f'{code}', fix, 'bitpix left as is')
        bitpix = dtype.itemsize * 8
        if bitpix == hdr['bitpix']:
            return hdr, Report(HeaderDataError)
        msg = f"bitpix {int(hdr['bitpix'])} does not match datatype {dtype}"
        if fix:
            hdr['bitpix'] = bitpix
        return hdr, _problem(10, msg, fix, f'set bitpix to {bitpix}')

    @staticmethod
    def _chk_pixdims(hdr, fix=False):
        sizes = hdr['pixdim'][1:4]
        zero = sizes == 0
        negative = sizes < 0
        if not (zero.any() or negative.any()):
            return hdr, Report(HeaderDataError)
        level, msgs, fix_msgs = 0, [], []
        if zero.any():
            level = 30
            msgs.append('pixdim[1:4] has zero voxel sizes')
            fix_msgs.append('set zero sizes to 1')
        if negative.any():
            level = 35
            msgs.append('pixdim[1:4] has negative voxel sizes')
            fix_msgs.append('set sizes to absolute values')
        if fix:
            hdr['pixdim'][1:4] = np.where(zero, 1, np.abs(sizes))
        return hdr, _problem(level, ' and '.join(msgs), fix,
                             ' and '.join(fix_msgs))

    @staticmethod
    def _chk_qfac(hdr, fix=False):
        # 0 is allowed and read as 1
        qfac = hdr['pixdim'][0]
        if qfac in (-1, 0, 1):
            return hdr, Report(HeaderDataError)
        if fix:
            hdr['pixdim'][0] = 1
        return hdr, _problem(20, f'qfac (pixdim[0]) is {qfac:g}, should be '
                             '-1, 0 or 1', fix, 'set qfac to 1')

    @staticmethod
    def _chk_magic(hdr, fix=False):
        magic = hdr['magic'].item()
        if magic in (hdr.pair_magic, hdr.single_magic):
            return hdr, Report(HeaderDataError)
        return hdr, _problem(45, f"magic {magic.decode('latin-1')!r} should "
                             "be 'n+1' or 'ni1'", fix, 'left as is')

    @staticmethod
    def _chk_offset(hdr, fix=False):
        offset = hdr['vox_offset'].item()
        minimum = hdr.single_vox_offset
        if hdr['magic'].item() == hdr.single_magic and offset < minimum:
            if fix:
                hdr['vox_offset'] = minimum
            return hdr, _problem(40, f'vox_offset {offset:g} below {minimum} '
                                 'for single file', fix,
                                 f'set vox_offset to {minimum}')
        if offset % 16 == 0:
            return hdr, Report(HeaderDataError)
        return hdr, _problem(30, f'vox_offset {offset:g} not a multiple of '
                             '16', fix, 'left as is')

    @classmethod
    def _chk_qform_code(klass, hdr, fix=False):
        return klass._chk_xform_code('qform_code', hdr, fix)

    @classmethod
    def _chk_sform_code(klass, hdr, fix=False):
        return klass._chk_xform_code('sform_code', hdr, fix)

    @classmethod
    def _chk_xform_code(klass, field, hdr, fix):
        code = int(hdr[field])
        if code in klass._field_recoders[field].value_set():
            return hdr, Report(HeaderDataError)
        if fix:
            hdr[field] = 0
        return hdr, _problem(30, f'{field} {code} is not an xform code', fix,
                             f'set {field} to 0')


def _problem(level, msg, fix, fix_msg, error=HeaderDataError):
    """Report of problem at `level`; `fix_msg` only if `fix` is True"""
    return Report(error, level, msg, fix_msg if fix else '')


def diagnose_binaryblock(binaryblock):
    """Return problems found by header checks in `binaryblock`, as text

    Checks run without fixes; an empty string means no problems.
    """
    return Nifti1Header.diagnose_binaryblock(binaryblock[:sizeof_hdr])
