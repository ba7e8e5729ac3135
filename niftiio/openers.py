# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Open filenames, or pass through open files, as context managers

:func:`niftiio.loadsave.load` and :func:`niftiio.loadsave.save` get their
files through :class:`Opener`, so every file they open is closed on leaving
the ``with`` block, whether or not an error was raised.
"""
from __future__ import annotations

import io
import os
import typing as ty

if ty.TYPE_CHECKING:
    from types import TracebackType


@ty.runtime_checkable
class Fileish(ty.Protocol):
    def read(self, size: int = -1, /) -> bytes: ...
    def write(self, b: bytes, /) -> int | None: ...


class Opener:
    r"""File wrapper that closes the file only if it opened it

    Parameters
    ----------
    fileish : str, os.PathLike or file-like
        filename to open with builtin ``open``, or an object with ``read``
        and ``write`` methods, used as is and never closed here
    \*args : positional arguments
        for ``open``, when `fileish` is a filename.  The mode defaults to
        'rb'.
    \*\*kwargs : keyword arguments
        for ``open``, when `fileish` is a filename
    """

    fobj: io.IOBase

    def __init__(self, fileish: str | os.PathLike | io.IOBase, *args, **kwargs):
        self.me_opened = not isinstance(fileish, (io.IOBase, Fileish))
        if not self.me_opened:
            self.fobj = fileish
            self._name = getattr(fileish, 'name', None)
            return
        if not args:
            kwargs.setdefault('mode', 'rb')
        self._name = os.fspath(fileish)
        self.fobj = open(self._name, *args, **kwargs)

    @property
    def name(self) -> str | None:
        """Filename, or ``name`` of the file-like; None if it has none"""
        return self._name

    @property
    def mode(self) -> str:
        try:
            return self.fobj.mode
        except AttributeError:
            raise AttributeError(f'{type(self.fobj).__name__} has no mode')

    @property
    def closed(self) -> bool:
        return self.fobj.closed

    def fileno(self) -> int:
        return self.fobj.fileno()

    def read(self, size: int = -1, /) -> bytes:
        return self.fobj.read(size)

    def readinto(self, buffer, /) -> int | None:
        return self.fobj.readinto(buffer)

    def write(self, b: bytes, /) -> int | None:
        return self.fobj.write(b)

    def seek(self, pos: int, whence: int = 0, /) -> int:
        return self.fobj.seek(pos, whence)

    def tell(self, /) -> int:
        return self.fobj.tell()

    def close(self, /) -> None:
        self.fobj.close()

    def close_if_mine(self) -> None:
        """Close the file if this object opened it"""
        if self.me_opened:
            self.fobj.close()

    def __enter__(self) -> Opener:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close_if_mine()
