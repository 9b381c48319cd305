# -*- coding: utf-8 -*-

# Copyright (c) 2019 Stephen Wasilewski
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""configuration and functions for reading and writing"""
import os

import numpy as np


_reals = ('float32', 'float64')


def get_nproc(nproc=None):
    if nproc is not None:
        return nproc
    env_nproc = os.getenv('IMPSAMPLE_PROC_CAP')
    try:
        return int(env_nproc)
    except (ValueError, TypeError):
        return os.cpu_count()


def set_nproc(nproc):
    if nproc is None:
        return None
    if type(nproc) != int:
        raise ValueError('nproc must be an int')
    if nproc < 1:
        unset_nproc()
    else:
        os.environ['IMPSAMPLE_PROC_CAP'] = str(nproc)


def unset_nproc():
    try:
        os.environ.pop('IMPSAMPLE_PROC_CAP')
    except KeyError:
        pass


def get_real(real=None):
    """floating point type used when a distribution buffer is allocated

    Parameters
    ----------
    real: Union[str, np.dtype], optional
        if given, returned as np.dtype (after validation), else read from
        the environment variable IMPSAMPLE_REAL (default float64)

    Returns
    -------
    np.dtype
    """
    if real is None:
        real = os.getenv('IMPSAMPLE_REAL', 'float64')
    dt = np.dtype(real)
    if dt.name not in _reals:
        raise ValueError(f"real must be one of {_reals} not {dt.name}")
    return dt


def set_real(real):
    if real is None:
        return None
    dt = get_real(real)
    os.environ['IMPSAMPLE_REAL'] = dt.name


def unset_real():
    try:
        os.environ.pop('IMPSAMPLE_REAL')
    except KeyError:
        pass


def table2file(buffer, width, height, outf):
    """save a two dimensional distribution buffer with its shape

    Parameters
    ----------
    buffer: np.array
        flat buffer as filled by
        impsample.sampling.distribution2d.build_distribution2d
    width: int
    height: int
    outf: str
        destination file (.npz is appended by numpy if missing)
    """
    buffer = np.asarray(buffer)
    expected = height + 1 + height*(width + 1)
    if buffer.size != expected:
        raise ValueError(f"buffer size {buffer.size} does not match shape "
                         f"({height}, {width}), expected {expected}")
    np.savez(outf, buffer=buffer, shape=np.array((height, width)))


def file2table(f):
    """load a buffer written by table2file

    Returns
    -------
    buffer: np.array
    width: int
    height: int
    """
    with np.load(f) as data:
        buffer = data['buffer']
        height, width = (int(i) for i in data['shape'])
    return buffer, width, height


def rgb2lum(rgb):
    """relative luminance of linear rgb values (last axis)"""
    return np.einsum('...j,j', np.asarray(rgb, dtype=float),
                     [0.212671, 0.715160, 0.072169])
