#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.rng"""
import pytest
import numpy as np

from impsample import io
from impsample.rng import RandomStream, tile_seed, thread_seed, spawn_streams


def test_range_and_determinism():
    a = RandomStream(7)
    b = RandomStream(7)
    x = a.get_float(10000)
    assert np.all(x >= 0) and np.all(x < 1)
    assert np.array_equal(x, b.get_float(10000))
    assert not np.array_equal(x, RandomStream(8).get_float(10000))


def test_call_count():
    r = RandomStream(3)
    r.get_float()
    assert r.call_count == 1
    r.get_float2()
    assert r.call_count == 3
    r.get_float3(5)
    assert r.call_count == 18
    r.get_uint()
    assert r.call_count == 19
    r.set_seed(3)
    assert r.call_count == 0


def test_discard():
    fresh = RandomStream(11).get_float(6)
    r = RandomStream(11)
    r.discard(5)
    assert r.call_count == 5
    assert r.get_float() == fresh[5]
    with pytest.raises(ValueError):
        r.discard(-1)


def test_shapes():
    r = RandomStream()
    assert np.isscalar(r.get_float())
    assert r.get_float2().shape == (2,)
    assert r.get_float3().shape == (3,)
    assert r.get_float2(4).shape == (4, 2)
    assert r.get_float2((3, 4)).shape == (3, 4, 2)
    assert r().shape == ()


def test_vector_equals_sequence():
    a = RandomStream(5)
    b = RandomStream(5)
    pairs = a.get_float2(3)
    for p in pairs:
        assert np.array_equal(p, b.get_float2())


def test_precision():
    r = RandomStream(2, real='float32')
    x = r.get_float(100)
    assert x.dtype == np.float32
    assert np.all(x < 1)
    assert RandomStream(2).get_float(10).dtype == np.float64
    with pytest.raises(ValueError):
        RandomStream(2, real='int32')


def test_env_precision():
    io.set_real('float32')
    try:
        assert RandomStream().real == np.float32
    finally:
        io.unset_real()
    assert RandomStream().real == np.float64


def test_seed_reduction():
    assert RandomStream(2**32 + 5).seed == 5
    a = RandomStream(2**32 + 5).get_float(4)
    assert np.array_equal(a, RandomStream(5).get_float(4))


def test_seeding_helpers():
    assert tile_seed(0, (0, 0, 8, 8), (64, 32)) == 0
    assert tile_seed(0, (8, 16, 8, 8), (64, 32)) == 8 + 16*64
    assert tile_seed(2, (8, 0, 8, 8), (64, 32)) == 8 + 2*64*32
    assert thread_seed(3, 4, 1) == 13
    streams = spawn_streams(4, seed=3)
    assert len(streams) == 4
    assert [s.seed for s in streams] == [12, 13, 14, 15]
    firsts = {s.get_float() for s in streams}
    assert len(firsts) == 4
