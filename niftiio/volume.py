# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""NIfTI-1 volume: a header, its extensions and a voxel array

The volume trusts its voxel array over its header.  Every volume holds a
header whose ``sizeof_hdr``, ``dim``, ``datatype``, ``bitpix`` and
``vox_offset`` have been recomputed from the array and the extension list,
by :func:`reconcile_header`.

The voxel array can be any numpy array, including a ``np.memmap`` onto the
payload of a file (see :func:`niftiio.loadsave.load`).

Examples
--------
>>> import numpy as np
>>> vol = Nifti1Volume.from_array(np.zeros((4, 4, 3), dtype=np.int16))
>>> vol.header['dim']
array([3, 4, 4, 3, 1, 1, 1, 1], dtype=int16)
>>> int(vol.header['vox_offset'])
352
>>> vol.shape
(4, 4, 3)
"""
import numpy as np

from .errors import HeaderDataError, MalformedSrow, ImageFileError
from .nifti1 import Nifti1Header, Nifti1Extensions, min_vox_offset
from .volumeutils import array_from_file, array_to_file
from . import geometry as geo
from .units import voxel_size_mm, time_step_ms

# Fields from_array fills from its own arguments, or that reconcile
# recomputes; they cannot be passed as header fields
_reserved_fields = {
    'sizeof_hdr', 'dim', 'datatype', 'bitpix', 'vox_offset', 'pixdim',
    'dim_info', 'xyzt_units', 'qform_code', 'sform_code', 'quatern_b',
    'quatern_c', 'quatern_d', 'qoffset_x', 'qoffset_y', 'qoffset_z',
    'srow_x', 'srow_y', 'srow_z'}


def _empty_payload():
    return np.zeros((0,), dtype=np.int16)


def reconcile_header(header, dataobj, extensions=()):
    """Return new header with fields recomputed from `dataobj`, `extensions`

    Parameters
    ----------
    header : Nifti1Header or mapping
        starting header, or mapping of header field names to values, to
        set into a default header.  Not modified.
    dataobj : array-like
        voxel array, 1 to 7 dimensions, of a dtype with a NIfTI-1 code
    extensions : sequence of Nifti1Extension, optional

    Returns
    -------
    new_header : Nifti1Header
        with ``sizeof_hdr``, ``dim``, ``datatype``, ``bitpix`` and
        ``vox_offset`` from the inputs.  A magic string that is neither
        ``n+1`` nor ``ni1`` becomes ``n+1``.

    Raises
    ------
    MalformedSrow
        if `header` gives an ``srow_x``, ``srow_y`` or ``srow_z`` that does
        not have 4 values
    UnsupportedDatatype
        if the dtype of `dataobj` has no NIfTI-1 code
    HeaderDataError
        for unknown field names or arrays that do not fit in ``dim``
    """
    if isinstance(header, Nifti1Header):
        hdr = header.copy()
    else:
        hdr = Nifti1Header()
        names = hdr.keys()
        for key, value in dict(header).items():
            if key not in names:
                raise HeaderDataError(f'{key} is not a NIfTI-1 header field')
            if key.startswith('srow_') and np.size(value) != 4:
                raise MalformedSrow(f'{key} must have 4 values; '
                                    f'{np.size(value)} encountered')
            hdr[key] = value
    dataobj = np.asanyarray(dataobj)
    hdr['sizeof_hdr'] = hdr.sizeof_hdr
    hdr.set_data_shape(dataobj.shape)
    hdr.set_data_dtype(dataobj.dtype)
    if hdr['magic'].item() not in (hdr.single_magic, hdr.pair_magic):
        hdr['magic'] = hdr.single_magic
    hdr.set_data_offset(min_vox_offset +
                        Nifti1Extensions(extensions).get_sizeondisk())
    return hdr


def reconcile(volume):
    """Return new volume with header recomputed from data and extensions"""
    return volume.__class__(volume.dataobj, volume.header, volume.extensions)


class Nifti1Volume:
    """NIfTI-1 header, extensions and voxel array

    Indexing returns scaled values, ``raw * scl_slope + scl_inter``.  A
    ``scl_slope`` of 0 gives ``scl_inter`` for every voxel.
    """
    header_class = Nifti1Header

    def __init__(self, dataobj, header=None, extensions=None):
        """Initialize volume, reconciling `header` with the other inputs

        Parameters
        ----------
        dataobj : None or array-like
            voxel array.  None means an empty int16 vector.
        header : None or Nifti1Header or mapping, optional
            header or header field values.  Copied, not modified.
        extensions : None or sequence of Nifti1Extension, optional
        """
        if dataobj is None:
            dataobj = _empty_payload()
        self._dataobj = np.asanyarray(dataobj)
        self._extensions = Nifti1Extensions(extensions or ())
        if header is None:
            header = self.header_class()
        self._header = reconcile_header(header, self._dataobj,
                                        self._extensions)

    @classmethod
    def from_array(klass, dataobj=None, extensions=None, *,
                   voxel_size=(1, 1, 1), time_step=0, xyzt_units=18,
                   dim_info=(0, 0, 0), quaternion=None, orientation=None,
                   **fields):
        r"""Make volume from array and header parameters

        Parameters
        ----------
        dataobj : None or array-like, optional
            voxel array.  None or an empty array gives an empty int16
            vector.
        extensions : None or sequence of Nifti1Extension, optional
        voxel_size : sequence of 3 floats, optional
            voxel sizes, into ``pixdim[1:4]``
        time_step : float, optional
            time between volumes, into ``pixdim[4]``
        xyzt_units : int, optional
            unit codes; the default of 18 is mm and msec
        dim_info : tuple of 3 ints, optional
            frequency, phase and slice axis codes (0 for unset, 1 to 3)
        quaternion : None or Quaternion or sequence, optional
            qform geometry; see :func:`niftiio.geometry.make_geometry`
        orientation : None or DirectionCosine or array-like, optional
            sform geometry, (3, 4) or (4, 4).  Exclusive with `quaternion`.
        \*\*fields : keyword arguments
            values for other header fields, such as ``descrip``,
            ``intent_code`` or ``scl_slope``

        Raises
        ------
        ConflictingGeometryEncoding
            if both `quaternion` and `orientation` are given
        HeaderDataError
            for unknown field names, or fields set by other parameters

        Examples
        --------
        >>> vol = Nifti1Volume.from_array(np.arange(24).reshape((2, 3, 4)),
        ...                               voxel_size=(2, 2, 3),
        ...                               descrip='test volume')
        >>> vol.voxel_size
        (2.0, 2.0, 3.0)
        >>> vol.header['descrip']
        array(b'test volume', dtype='|S80')
        """
        geometry = geo.make_geometry(quaternion, orientation)
        if dataobj is None or np.size(dataobj) == 0:
            dataobj = _empty_payload()
        dataobj = np.asanyarray(dataobj)
        hdr = klass.header_class()
        names = hdr.keys()
        for name, value in fields.items():
            if name not in names:
                raise HeaderDataError(f'{name} is not a NIfTI-1 header field')
            if name in _reserved_fields:
                raise HeaderDataError(f'{name} is set from the data or other '
                                      'parameters')
            hdr[name] = value
        if len(voxel_size) != 3:
            raise HeaderDataError('voxel_size needs 3 values')
        hdr['pixdim'][1:4] = voxel_size
        hdr['pixdim'][4] = time_step
        hdr['xyzt_units'] = xyzt_units
        hdr.set_dim_info(*dim_info)
        geo.apply_geometry(hdr, geometry)
        slice_dim = dim_info[2]
        if slice_dim and hdr['slice_start'] == 0 and hdr['slice_end'] == 0:
            shape = dataobj.shape
            n_slices = shape[slice_dim - 1] if slice_dim <= len(shape) else 1
            hdr['slice_end'] = n_slices - 1
        return klass(dataobj, hdr, extensions)

    @property
    def dataobj(self):
        """Raw voxel array, ``np.ndarray`` or ``np.memmap``"""
        return self._dataobj

    @property
    def header(self):
        return self._header

    @property
    def extensions(self):
        return self._extensions

    @property
    def shape(self):
        return self._dataobj.shape

    @property
    def ndim(self):
        return self._dataobj.ndim

    @property
    def dtype(self):
        """dtype of the raw voxel array"""
        return self._dataobj.dtype

    def __len__(self):
        return self.shape[0]

    @property
    def in_memory(self):
        """False if the voxel array is memory mapped from a file"""
        return not isinstance(self._dataobj, np.memmap)

    @property
    def affine(self):
        """4x4 voxel to world affine; sform, else qform, else voxel sizes"""
        return geo.affine_of(self._header)

    def set_affine(self, affine):
        """Store `affine` as the sform of the header; clears the qform"""
        self._header = geo.set_affine(self._header, affine)

    @property
    def voxel_size(self):
        """Voxel sizes in mm"""
        return voxel_size_mm(self._header)

    @property
    def time_step(self):
        """Time between volumes in ms"""
        return time_step_ms(self._header)

    def __getitem__(self, idx):
        raw = self._dataobj[idx]
        slope, inter = self._header.get_slope_inter()
        if slope == 0:
            return np.full(np.shape(raw), inter)[()]
        return raw * slope + inter

    def vox(self, *indices):
        """Scaled values at 0-based `indices`, one per axis

        None or ``slice(None)`` for an axis selects the whole axis.  Missing
        trailing axes are selected whole.

        >>> vol = Nifti1Volume.from_array(np.arange(6).reshape((2, 3)),
        ...                               scl_slope=2)
        >>> vol.vox(1, None)
        array([ 6.,  8., 10.])
        """
        if len(indices) > self.ndim:
            raise IndexError(f'{len(indices)} indices for {self.ndim} '
                             'dimensional volume')
        idx = []
        for index in indices:
            if index is None or (isinstance(index, slice) and
                                 index == slice(None)):
                idx.append(slice(None))
            else:
                idx.append(int(index))
        return self[tuple(idx)]

    def get_scaled_data(self):
        """Return array of all scaled values"""
        return self[...]

    def to_fileobj(self, fileobj):
        """Write volume as single file (magic ``n+1``) to `fileobj`

        Writes header, extensions and voxel data, starting at the current
        position of `fileobj`.
        """
        hdr = self._header.copy()
        hdr['magic'] = hdr.single_magic
        hdr.write_to(fileobj)
        self._extensions.write_to(fileobj)
        array_to_file(self._dataobj, fileobj)

    @classmethod
    def from_fileobj(klass, fileobj, mmap=False):
        """Read single file volume (magic ``n+1``) from `fileobj`

        Parameters
        ----------
        fileobj : file-like
            positioned at the start of the header
        mmap : {False, True, 'c', 'r', 'r+'}, optional
            memory map the voxel data where `fileobj` allows.  See
            :func:`niftiio.volumeutils.array_from_file`.

        Raises
        ------
        ImageFileError
            if the data are fully read and bytes are left after them
        """
        hdr = klass.header_class.from_fileobj(fileobj)
        extensions = Nifti1Extensions.from_fileobj(fileobj, hdr)
        dtype = hdr.get_data_dtype()
        dataobj = array_from_file(hdr.get_data_shape(), dtype, fileobj,
                                  offset=hdr.get_data_offset(), mmap=mmap)
        if not isinstance(dataobj, np.memmap) and fileobj.read(1):
            raise ImageFileError('Data continue past the end of the volume')
        return klass(dataobj, hdr, extensions)

    def __str__(self):
        return '\n'.join((f'{self.__class__.__name__} {self.shape} '
                          f'{self.dtype}',
                          f'affine:\n{self.affine}',
                          f'header:\n{self._header}'))
