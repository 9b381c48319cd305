#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.sampling.patterns"""
import numpy as np

from impsample.rng import RandomStream
from impsample.sample import Measure
from impsample.sampling import patterns


def test_jittered1d():
    x = patterns.jittered_distribution1d(4, 0.5)
    assert np.allclose(x, [.125, .375, .625, .875])
    assert np.isclose(patterns.jittered_distribution1d(4, 0.5, i=2), .625)
    x = patterns.generate_jittered1d(10, RandomStream(3))
    assert x.shape == (10,)
    assert np.array_equal(np.floor(x*10).astype(int), np.arange(10))


def test_jittered2d():
    x = patterns.jittered_distribution2d(4, 2, np.full(2, 0.5))
    assert x.shape == (8, 2)
    assert np.allclose(x[1], [.375, .25])
    assert np.allclose(x[4], [.125, .75])
    assert np.allclose(patterns.jittered_distribution2d(4, 2, [0, 0], i=5),
                       [.25, .5])
    stream = RandomStream(3)
    x = patterns.generate_jittered2d(5, 3, stream)
    assert stream.call_count == 30
    cells = np.floor(x*np.array((5, 3))).astype(int)
    assert np.array_equal(cells[:, 0] + 5*cells[:, 1], np.arange(15))


def test_uniform_discrete():
    s = patterns.uniform_discrete_sample(np.array([0.0, 0.49, 0.5, 0.999]), 2)
    assert s.measure == Measure.DISCRETE
    assert np.all(s.value == [0, 0, 1, 1])
    assert np.allclose(s.density, 0.5)
    # every element is reachable, the last included
    s = patterns.uniform_discrete_sample(RandomStream(1).get_float(6000), 3)
    assert np.allclose(np.bincount(s.value)/6000, 1/3, atol=0.03)
    assert patterns.uniform_discrete_pdf(4) == 0.25
    assert patterns.uniform_discrete_pdf(0) == 0
    empty = patterns.uniform_discrete_sample(0.3, 0)
    assert empty.value == 0
    assert not empty.valid
