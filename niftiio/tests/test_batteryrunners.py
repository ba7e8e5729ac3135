# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for BatteryRunner and Report objects"""

import logging
from io import StringIO

import pytest

from ..batteryrunners import BatteryRunner, Report


# checks over plain dicts of header fields
def chk_sizeof(obj, fix=False):
    rep = Report(KeyError)
    if 'sizeof_hdr' in obj:
        return obj, rep
    rep.problem_level = 20
    rep.problem_msg = 'no "sizeof_hdr"'
    if fix:
        obj['sizeof_hdr'] = 0
        rep.fix_msg = 'added "sizeof_hdr"'
    return obj, rep


def chk_sizeof_value(obj, fix=False):
    # Different errors from the same check
    rep = Report()
    try:
        ok = obj['sizeof_hdr'] == 348
    except KeyError:
        rep.problem_level = 20
        rep.problem_msg = 'no "sizeof_hdr"'
        rep.error = KeyError
        if fix:
            obj['sizeof_hdr'] = 0
            rep.fix_msg = 'added "sizeof_hdr"'
        return obj, rep
    if ok:
        return obj, rep
    rep.problem_level = 10
    rep.problem_msg = '"sizeof_hdr" != 348'
    rep.error = ValueError
    if fix:
        rep.fix_msg = 'set "sizeof_hdr" to 348'
        obj['sizeof_hdr'] = 348
    return obj, rep


def chk_magic(obj, fix=False):
    rep = Report(KeyError)
    if 'magic' not in obj:
        rep.problem_level = 45
        rep.problem_msg = 'no "magic"'
        if fix:
            rep.fix_msg = 'leaving as is'
    return obj, rep


def test_init_basic():
    # With no args, raise
    with pytest.raises(TypeError):
        BatteryRunner()
    battrun = BatteryRunner((chk_sizeof,))
    assert len(battrun) == 1
    battrun = BatteryRunner((chk_sizeof, chk_sizeof_value, chk_magic))
    assert len(battrun) == 3


def test_init_report():
    rep = Report()
    assert rep == Report(Exception, 0, '', '')
    assert rep != Report(ValueError, 0, '', '')


def test_report_strings():
    rep = Report()
    assert str(rep) != ''
    assert rep.message == ''
    str_io = StringIO()
    rep.write_raise(str_io)
    assert str_io.getvalue() == ''
    rep = Report(ValueError, 20, 'bad field', 'fixed field')
    rep.write_raise(str_io)
    assert str_io.getvalue() == ''
    rep.problem_level = 30
    rep.write_raise(str_io)
    assert str_io.getvalue() == 'Level 30: bad field; fixed field\n'
    str_io.truncate(0)
    str_io.seek(0)
    rep.fix_msg = ''
    rep.write_raise(str_io)
    assert str_io.getvalue() == 'Level 30: bad field\n'
    str_io.truncate(0)
    str_io.seek(0)
    rep.problem_level = 20
    rep.write_raise(str_io, log_level=20)
    assert str_io.getvalue() == 'Level 20: bad field\n'
    str_io.truncate(0)
    str_io.seek(0)
    with pytest.raises(ValueError):
        rep.write_raise(str_io, 20)
    assert str_io.getvalue() == ''
    # No error class, no raise
    rep.error = None
    rep.write_raise(str_io, 20)


def test_logging():
    rep = Report(ValueError, 20, 'bad field', 'fixed field')
    str_io = StringIO()
    logger = logging.getLogger('test.batteryrunners')
    logger.setLevel(30)
    handler = logging.StreamHandler(str_io)
    logger.addHandler(handler)
    rep.log_raise(logger)
    assert str_io.getvalue() == ''
    rep.problem_level = 30
    rep.log_raise(logger)
    assert str_io.getvalue() == 'bad field; fixed field\n'
    with pytest.raises(ValueError):
        rep.log_raise(logger, error_level=30)
    # Level 0 never raises
    rep.problem_level = 0
    rep.log_raise(logger, error_level=0)
    logger.removeHandler(handler)


def test_checks():
    battrun = BatteryRunner((chk_sizeof,))
    reports = battrun.check_only({})
    assert reports[0] == Report(KeyError, 20, 'no "sizeof_hdr"', '')
    obj, reports = battrun.check_fix({})
    assert reports[0] == Report(KeyError, 20, 'no "sizeof_hdr"',
                                'added "sizeof_hdr"')
    assert obj == {'sizeof_hdr': 0}
    battrun = BatteryRunner((chk_sizeof, chk_sizeof_value))
    reports = battrun.check_only({})
    assert reports[0] == Report(KeyError, 20, 'no "sizeof_hdr"', '')
    assert reports[1] == Report(KeyError, 20, 'no "sizeof_hdr"', '')
    obj, reports = battrun.check_fix({})
    # The first fix exposes a different problem for the second check
    assert reports[0] == Report(KeyError, 20, 'no "sizeof_hdr"',
                                'added "sizeof_hdr"')
    assert reports[1] == Report(ValueError, 10, '"sizeof_hdr" != 348',
                                'set "sizeof_hdr" to 348')
    assert obj == {'sizeof_hdr': 348}


def test_unfixable():
    battrun = BatteryRunner((chk_magic,))
    obj, reports = battrun.check_fix({'sizeof_hdr': 348})
    assert obj == {'sizeof_hdr': 348}
    assert reports[0].problem_level == 45
    assert reports[0].message == 'no "magic"; leaving as is'
    assert battrun.check_only({'magic': b'n+1'})[0] == Report(KeyError)


def test_check_raise():
    battrun = BatteryRunner((chk_sizeof, chk_sizeof_value))
    str_io = StringIO()
    logger = logging.getLogger('test.batteryrunners.raise')
    logger.setLevel(10)
    handler = logging.StreamHandler(str_io)
    logger.addHandler(handler)
    obj = battrun.check_raise({}, logger=logger)
    assert obj == {'sizeof_hdr': 348}
    assert str_io.getvalue() == ('no "sizeof_hdr"; added "sizeof_hdr"\n'
                                 '"sizeof_hdr" != 348; '
                                 'set "sizeof_hdr" to 348\n')
    with pytest.raises(KeyError):
        battrun.check_raise({}, logger=logger, error_level=20)
    # Remaining problem after the fix raises at its own level
    battrun = BatteryRunner((chk_magic,))
    with pytest.raises(KeyError):
        battrun.check_raise({}, logger=logger)
    assert battrun.check_raise({}, logger=logger, error_level=50) == {}
    logger.removeHandler(handler)


def test_problems():
    battrun = BatteryRunner((chk_sizeof, chk_sizeof_value, chk_magic))
    assert battrun.problems({'sizeof_hdr': 348, 'magic': b'n+1'}) == []
    assert battrun.problems({'sizeof_hdr': 340}) == ['"sizeof_hdr" != 348',
                                                     'no "magic"']
    # Checks without fixes do not change the object
    obj = {}
    assert battrun.problems(obj) == ['no "sizeof_hdr"', 'no "sizeof_hdr"',
                                     'no "magic"']
    assert obj == {}
