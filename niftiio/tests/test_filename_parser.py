# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftiio package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for filename handling"""
import pathlib

from ..filename_parser import (
    _stringify_path,
    is_pair_filename,
    parse_filename,
    types_filenames,
)


def test_filenames():
    for t_fname in ('test.img', 'test.hdr', 'test', 'test.'):
        tfns = types_filenames(t_fname)
        assert tfns == {'image': 'test.img', 'header': 'test.hdr'}
    # Unknown extensions name the header
    tfns = types_filenames('test.nii')
    assert tfns == {'header': 'test.nii', 'image': 'test.img'}
    # Case of the extension carries over
    tfns = types_filenames('test.IMG')
    assert tfns == {'header': 'test.HDR', 'image': 'test.IMG'}
    tfns = types_filenames('test.NII')
    assert tfns == {'header': 'test.NII', 'image': 'test.IMG'}
    # Mixed case falls back to the extensions as given
    tfns = types_filenames('test.Hdr')
    assert tfns == {'header': 'test.hdr', 'image': 'test.img'}
    # Other type lists
    types_exts = (('image', '.img'), ('header', '.hdr'))
    tfns = types_filenames('test.funny', types_exts)
    assert tfns == {'header': 'test.hdr', 'image': 'test.funny'}
    # Paths
    tfns = types_filenames(pathlib.Path('dir') / 'test.hdr')
    assert tfns == {'header': 'dir/test.hdr', 'image': 'dir/test.img'}


def test_parse_filename():
    types_exts = (('t1', 'ext1'), ('t2', 'ext2'))
    exp_in_outs = (
        ('/path/fname.funny', ('/path/fname', '.funny', None)),
        ('/path/fnameext2', ('/path/fname', 'ext2', 't2')),
        ('/path/fnameext2.gz', ('/path/fnameext2', '.gz', None)),
        ('/path/fnameEXT1', ('/path/fname', 'EXT1', 't1')),
    )
    for inps, exps in exp_in_outs:
        assert parse_filename(inps, types_exts) == exps
    assert parse_filename('/path/brain.hdr') == ('/path/brain', '.hdr',
                                                 'header')
    assert parse_filename('/path/brain') == ('/path/brain', '', None)


def test_is_pair_filename():
    for fname in ('brain.hdr', 'brain.img', 'brain.HDR', 'a/b.Img'):
        assert is_pair_filename(fname)
    for fname in ('brain.nii', 'brain', 'brain.hdr.gz', 'brain.img.nii'):
        assert not is_pair_filename(fname)
    assert is_pair_filename(pathlib.Path('brain.img'))


def test_stringify_path():
    assert _stringify_path('fname.nii') == 'fname.nii'
    assert _stringify_path(pathlib.Path('a') / 'fname.nii') == 'a/fname.nii'
    home = pathlib.Path.home().as_posix()
    assert _stringify_path('~/fname.nii') == f'{home}/fname.nii'
