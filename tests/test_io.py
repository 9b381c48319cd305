#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.io"""
import os

import pytest
import numpy as np

from impsample import io
from impsample.sampling import Distribution2D


def test_nproc():
    io.set_nproc(3)
    try:
        assert io.get_nproc() == 3
        assert io.get_nproc(5) == 5
    finally:
        io.unset_nproc()
    assert io.get_nproc() == os.cpu_count()
    io.set_nproc(2)
    io.set_nproc(0)
    assert 'IMPSAMPLE_PROC_CAP' not in os.environ
    with pytest.raises(ValueError):
        io.set_nproc(2.5)


def test_real():
    assert io.get_real() == np.float64
    io.set_real('float32')
    try:
        assert io.get_real() == np.float32
        assert Distribution2D(np.ones((2, 2))).buffer.dtype == np.float32
    finally:
        io.unset_real()
    assert io.get_real('float32') == np.float32
    with pytest.raises(ValueError):
        io.set_real('int64')
    with pytest.raises(ValueError):
        io.get_real('float16')


def test_table_file(tmp_path):
    dist = Distribution2D(np.arange(6.0).reshape(2, 3))
    f = str(tmp_path/"table.npz")
    io.table2file(dist.buffer, dist.width, dist.height, f)
    buffer, width, height = io.file2table(f)
    assert (width, height) == (3, 2)
    assert np.array_equal(buffer, dist.buffer)
    with pytest.raises(ValueError):
        io.table2file(dist.buffer[:-1], 3, 2, f)


def test_rgb2lum():
    assert np.isclose(io.rgb2lum([1, 1, 1]), 1)
    lum = io.rgb2lum(np.ones((4, 2, 3)))
    assert lum.shape == (4, 2)
    assert np.isclose(io.rgb2lum([0, 1, 0]), 0.715160)
