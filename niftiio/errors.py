# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Exceptions raised while reading, checking and writing NIfTI-1 volumes

Two families:

* :class:`ImageFileError` - the bytes are not something we can read as a
  NIfTI-1 file at all.
* :class:`HeaderDataError` - the header was read, but its contents are
  inconsistent, unsupported or were given inconsistent values.
"""


class ImageFileError(Exception):
    pass


class NotANiftiFile(ImageFileError):
    """First 4 bytes do not hold ``sizeof_hdr == 348``"""


class HeaderDataError(Exception):
    pass


class ByteSwapUnsupported(HeaderDataError):
    """``dim[0]`` outside [1, 7]; the file is probably opposite endian"""


class UnsupportedDatatype(HeaderDataError):
    pass


class InvalidAxisIndex(HeaderDataError, ValueError):
    pass


class ConflictingGeometryEncoding(HeaderDataError, ValueError):
    pass


class InvalidAffineShape(HeaderDataError, ValueError):
    pass


class MalformedSrow(HeaderDataError):
    pass
