# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Defaults for header checks and volume reading

error_level is the problem level (see :mod:`niftiio.batteryrunners`) at which
a header check raises its error, via the ``Report.log_raise`` method.  A level
of 0 raises for any problem at all; a level of 50 raises for nothing.  The
default of 40 raises for problems that make the file unreadable (for example
an unknown datatype code) and only logs the rest.

``logger`` is the package logger that check reports go to.

To see every report, including fixes of minor problems, use e.g.::

    import niftiio
    niftiio.imageglobals.logger.setLevel(1)

As for most loggers, if ``logger.level == 0`` then the effective level is
inherited from the root logger - use ``logger.getEffectiveLevel()``.
"""
import logging

error_level = 40
logger = logging.getLogger('niftiio.global')
logger.addHandler(logging.StreamHandler())


class ErrorLevel:
    """Context manager to set the check error level temporarily"""

    def __init__(self, level):
        self.level = level

    def __enter__(self):
        global error_level
        self._original_level = error_level
        error_level = self.level

    def __exit__(self, exc, value, tb):
        global error_level
        error_level = self._original_level
        return False


class LoggingOutputSuppressor:
    """Context manager to stop the package logger printing anything"""

    def __enter__(self):
        self.orig_handlers = logger.handlers[:]
        for handler in self.orig_handlers:
            logger.removeHandler(handler)

    def __exit__(self, exc, value, tb):
        for handler in self.orig_handlers:
            logger.addHandler(handler)
