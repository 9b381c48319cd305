#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.sample"""
import pytest
import numpy as np

from impsample.sample import (Sample, DirectionSample, PointSample,
                              PlaneSample, DiscreteSample, Measure,
                              MeasureError, require_measure)


def test_sample_density():
    s = Sample(np.array([1.0, 2.0]), 4.0)
    assert s.rcp_density == 0.25
    assert s.density == 4.0
    assert s.valid
    z = Sample(np.zeros(3), 0.0)
    assert z.rcp_density == 0
    assert z.density == 0
    assert not z.valid


def test_vectorized_density():
    s = DirectionSample(np.zeros((4, 3)), np.array([1.0, 0.0, 2.0, 0.5]))
    assert np.allclose(s.rcp_density, [1.0, 0.0, 0.5, 2.0])
    assert np.all(s.valid == [True, False, True, True])
    assert len(s) == 4


def test_from_rcp():
    s = PointSample.from_rcp(np.zeros(3), 3.0)
    assert s.rcp_density == 3.0
    assert np.isclose(s.density, 1/3)
    assert s.measure == Measure.AREA
    assert not PointSample.from_rcp(np.zeros(3), 0.0).valid


def test_immutable():
    v = np.array([1.0, 2.0])
    s = Sample(v, 1.0)
    with pytest.raises(ValueError):
        s.value[0] = 3.0
    # the caller keeps ownership of its array
    v[0] = 5.0
    assert v[0] == 5.0


def test_repr():
    s = Sample(np.array([1.0]), 2.0)
    assert repr(s).startswith("[ ")
    assert "pdf = 2.0" in repr(s)


def test_measures():
    assert DirectionSample(0, 1).measure == Measure.SOLID_ANGLE
    assert PlaneSample(0, 1).measure == Measure.PLANE
    assert DiscreteSample(0, 1).measure == Measure.DISCRETE
    s = PlaneSample(np.zeros(2), 1.0)
    assert require_measure(s, Measure.PLANE, Measure.AREA) is s
    with pytest.raises(MeasureError):
        require_measure(s, Measure.SOLID_ANGLE)
    with pytest.raises(TypeError):
        require_measure(s, Measure.LINE)
