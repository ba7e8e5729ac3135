# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Graded problem reports, and runners for batteries of header checks

A check is a callable ``check(obj, fix=False) -> (obj, report)``.  It looks
at one aspect of `obj` (usually a header) and returns a :class:`Report`.
When `fix` is True it may repair `obj`, in place or by returning a new
object, and record what it did in ``report.fix_msg``.

>>> from niftiio.batteryrunners import BatteryRunner, Report
>>> def chk_sizeof(hdr, fix=False):
...     rep = Report(ValueError)
...     if hdr['sizeof_hdr'] == 348:
...         return hdr, rep
...     rep.problem_level = 30
...     rep.problem_msg = 'sizeof_hdr should be 348'
...     if fix:
...         hdr['sizeof_hdr'] = 348
...         rep.fix_msg = 'set sizeof_hdr to 348'
...     return hdr, rep
>>> btrun = BatteryRunner((chk_sizeof,))
>>> btrun.problems({'sizeof_hdr': 340})
['sizeof_hdr should be 348']
>>> hdr, reports = btrun.check_fix({'sizeof_hdr': 340})
>>> hdr
{'sizeof_hdr': 348}
>>> reports[0].message
'sizeof_hdr should be 348; set sizeof_hdr to 348'

Problem levels follow the ``logging`` scale: 0 is no problem, 10 debug, 20
info, 30 warning, 40 error, 50 critical.  A report raises its ``error`` class
once its level reaches the error level in use, 40 unless configured in
:mod:`niftiio.imageglobals`.
"""
from . import imageglobals


class BatteryRunner:
    """Ordered sequence of checks, run with or without fixes"""

    def __init__(self, checks):
        """
        Parameters
        ----------
        checks : sequence
           callables ``obj, rep = chk(obj, fix=False)``, run in order.  A
           fixing check passes its possibly new `obj` to the next check.
        """
        self._checks = tuple(checks)

    def __len__(self):
        return len(self._checks)

    def _run(self, obj, fix):
        reports = []
        for check in self._checks:
            obj, report = check(obj, fix)
            reports.append(report)
        return obj, reports

    def check_only(self, obj):
        """Return list of reports from checks of `obj`, without fixes"""
        return self._run(obj, False)[1]

    def check_fix(self, obj):
        """Run checks with fixes on `obj`

        Returns
        -------
        obj : object
           `obj` after the fixes; may be a different object
        reports : list
           one report per check
        """
        return self._run(obj, True)

    def check_raise(self, obj, logger=None, error_level=None):
        """Fix `obj`, log every report, raise for serious problems

        Parameters
        ----------
        obj : object
           object to check and fix
        logger : None or logging.Logger, optional
           logger for reports; default is ``imageglobals.logger``
        error_level : None or int, optional
           problem level at which to raise; default is
           ``imageglobals.error_level``

        Returns
        -------
        obj : object
           `obj` after fixes
        """
        if logger is None:
            logger = imageglobals.logger
        if error_level is None:
            error_level = imageglobals.error_level
        obj, reports = self.check_fix(obj)
        for report in reports:
            report.log_raise(logger, error_level)
        return obj

    def problems(self, obj):
        """Return messages for problems found in `obj`, without fixes"""
        return [report.message for report in self.check_only(obj)
                if report.message]


class Report:
    """Outcome of one check: a graded problem and any fix applied"""

    def __init__(self, error=Exception, problem_level=0, problem_msg='',
                 fix_msg=''):
        """
        Parameters
        ----------
        error : None or Exception class, optional
           exception class to raise for this problem.  None means the problem
           never raises.
        problem_level : int, optional
           0 for no problem, up to 50 for a severe problem.  After a fix, the
           level of the problem that remains.
        problem_msg : str, optional
           what is wrong
        fix_msg : str, optional
           what the fix did

        >>> Report(TypeError, 10).problem_level
        10
        """
        self.error = error
        self.problem_level = problem_level
        self.problem_msg = problem_msg
        self.fix_msg = fix_msg

    def _key(self):
        return self.error, self.problem_level, self.problem_msg, self.fix_msg

    def __eq__(self, other):
        try:
            return self._key() == other._key()
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return (f'Report({getattr(self.error, "__name__", None)}, '
                f'{self.problem_level}, {self.problem_msg!r}, '
                f'{self.fix_msg!r})')

    __str__ = __repr__

    @property
    def message(self):
        """Problem message, followed by fix message if there is one"""
        return '; '.join(msg for msg in (self.problem_msg, self.fix_msg)
                         if msg)

    def _maybe_raise(self, error_level):
        level = self.problem_level
        if self.error and level and level >= error_level:
            raise self.error(self.problem_msg)

    def log_raise(self, logger, error_level=40):
        """Log report at its problem level; raise if level >= `error_level`

        A report with problem level 0 never raises.
        """
        logger.log(self.problem_level, self.message)
        self._maybe_raise(error_level)

    def write_raise(self, stream, error_level=40, log_level=30):
        """Write report to `stream` if problem level >= `log_level`

        Raises as for :meth:`log_raise`.
        """
        if self.problem_level >= log_level:
            stream.write(f'Level {self.problem_level}: {self.message}\n')
        self._maybe_raise(error_level)
