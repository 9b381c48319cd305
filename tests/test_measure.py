#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.sampling.measure"""
import pytest
import numpy as np

from impsample import translate
from impsample.mapper import SphericalMapper, DualParaboloidMapper
from impsample.rng import RandomStream
from impsample.sample import (PlaneSample, PointSample, DirectionSample,
                              MeasureError)
from impsample.sampling import measure, shapes


def test_pdf_conversions():
    assert np.isclose(measure.uv_to_spherical_angles_pdf(1.0),
                      1/(2*np.pi*np.pi))
    assert measure.spherical_angles_to_solid_angle_pdf(3.0, 0.0) == 0
    assert measure.spherical_angles_to_solid_angle_pdf(3.0, 0.5) == 6
    assert measure.solid_angle_to_area_pdf(2.0, 4.0, 0.5) == 0.25
    assert measure.solid_angle_to_area_pdf(2.0, 4.0, -0.5) == 0
    assert measure.solid_angle_to_area_pdf(2.0, 0.0, 0.5) == 0
    assert measure.area_to_solid_angle_pdf(2.0, 4.0, 0.5) == 16
    assert measure.area_to_solid_angle_pdf(2.0, 4.0, 0.0) == 0
    assert np.all(measure.area_to_solid_angle_pdf(1.0, 1.0, [-1, 0, 2]) ==
                  [0, 0, 0.5])
    assert measure.uv_to_solid_angle_pdf(1.0, 0.0) == 0
    assert measure.uv_to_solid_angle_pdf(1.0, 4.0) == 0.25


def test_area_solid_angle_roundtrip():
    pdf = np.array([0.3, 1.2, 5.0])
    sqrdist = np.array([1.0, 2.5, 9.0])
    ndot = np.array([0.2, 0.7, 1.0])
    sa = measure.area_to_solid_angle_pdf(pdf, sqrdist, ndot)
    assert np.allclose(measure.solid_angle_to_area_pdf(sa, sqrdist, ndot),
                       pdf)


def test_spherical_chain():
    # uniform uv density (1) through the angles matches the jacobian
    uv = translate.uv_grid(16, 8)
    m = SphericalMapper()
    _, sintheta = m.uv2xyz_sintheta(uv)
    pdf = measure.spherical_angles_to_solid_angle_pdf(
        measure.uv_to_spherical_angles_pdf(1.0), sintheta)
    assert np.allclose(pdf, measure.uv_to_solid_angle_pdf(1.0,
                                                          m.jacobian(uv)))


def test_dual_paraboloid_pdf():
    assert np.isclose(measure.dual_paraboloid_to_solid_angle_pdf(32.0,
                                                                 [.25, .5]),
                      1)
    assert measure.dual_paraboloid_to_solid_angle_pdf(1.0, [0.01, 0.01]) == 0
    uv = translate.uv_grid(64, 32)
    jac = DualParaboloidMapper().jacobian(uv)
    assert np.allclose(measure.dual_paraboloid_to_solid_angle_pdf(jac, uv),
                       (jac > 0).astype(float))


def test_plane_to_direction():
    s2d = RandomStream(8).get_float2(20000)
    m = SphericalMapper()
    s = measure.plane_to_direction(PlaneSample(s2d, 1.0), m)
    assert isinstance(s, DirectionSample)
    assert np.allclose(s.value, m.uv2xyz(s2d))
    assert np.allclose(s.density, 1/m.jacobian(s2d))
    # importance weights estimate the covered solid angle
    assert np.isclose(np.mean(s.rcp_density), 4*np.pi, atol=0.2)
    with pytest.raises(MeasureError):
        measure.plane_to_direction(s, m)


def test_plane_to_direction_outside():
    m = DualParaboloidMapper()
    s = measure.plane_to_direction(PlaneSample(np.array([0.01, 0.01]), 1.0), m)
    assert not s.valid


def test_point_to_direction():
    s = measure.point_to_direction(PointSample(np.array([0, 0, 2.0]), 1.0),
                                   np.zeros(3), np.array([0, 0, -1.0]))
    assert np.allclose(s.value, [0, 0, 1])
    assert np.isclose(s.density, 4)
    back = measure.point_to_direction(PointSample(np.array([0, 0, 2.0]), 1.0),
                                      np.zeros(3), np.array([0, 0, 1.0]))
    assert not back.valid
    same = measure.point_to_direction(PointSample(np.zeros(3), 1.0),
                                      np.zeros(3), np.array([0, 0, -1.0]))
    assert not same.valid
    with pytest.raises(MeasureError):
        measure.point_to_direction(PlaneSample(np.zeros(3), 1.0), np.zeros(3),
                                   np.array([0, 0, 1.0]))


def test_triangle_solid_angle():
    a = np.array([0, 0, 1.0])
    b = np.array([1, 0, 1.0])
    c = np.array([0, 1, 1.0])
    s2d = RandomStream(12).get_float2(20000)
    ps = shapes.uniform_sample_triangle(s2d[:, 0], s2d[:, 1], a, b, c)
    ds = measure.point_to_direction(ps, np.zeros(3), np.array([0, 0, -1.0]))
    omega = shapes.spherical_triangle_area(translate.norm1(a),
                                           translate.norm1(b),
                                           translate.norm1(c))
    assert np.isclose(np.mean(ds.rcp_density), omega, rtol=0.02)
