#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.sampling.shapes"""
import pytest
import numpy as np

from impsample import translate
from impsample.rng import RandomStream
from impsample.sample import Measure
from impsample.sampling import shapes


@pytest.fixture
def uv():
    s = RandomStream(17).get_float2(20000)
    # keep away from the seam of the azimuth
    return 0.01 + 0.98*s[:, 0], s[:, 1]


@pytest.fixture
def tri():
    a = np.array([1.0, 0, 0])
    b = np.array([0, 1.0, 0])
    c = translate.norm1(np.array([0, -1.0, 1]))
    return a, b, c


def unit(x):
    return np.allclose(np.linalg.norm(x, axis=-1), 1)


def test_uniform_sphere(uv):
    u, v = uv
    s = shapes.uniform_sample_sphere(u, v)
    assert s.measure == Measure.SOLID_ANGLE
    assert unit(s.value)
    assert np.allclose(s.density, shapes.uniform_sample_sphere_pdf())
    assert np.allclose(s.density, 1/(4*np.pi))
    assert np.isclose(np.mean(s.value[:, 2]), 0, atol=0.02)
    ruv = shapes.rcp_uniform_sample_sphere(s.value)
    assert np.allclose(ruv, np.stack((u, v), -1), atol=1e-7)


def test_uniform_sphere_scalar():
    s = shapes.uniform_sample_sphere(0.25, 0.5)
    assert np.allclose(s.value, [0, 1, 0])
    assert np.isclose(s.density, 1/(4*np.pi))


def test_cosine_sphere(uv):
    u, v = uv
    n = translate.norm1(np.array([1.0, 1, 0]))
    s = shapes.cosine_sample_sphere(u, v, n)
    assert unit(s.value)
    assert np.allclose(s.density, shapes.cosine_sample_sphere_pdf(s.value, n))
    # both sides are sampled equally
    assert np.isclose(np.mean(translate.dot(s.value, n) > 0), 0.5, atol=0.02)
    # the density integrates to one
    w = shapes.uniform_sample_sphere(u, v).value
    est = np.mean(shapes.cosine_sample_sphere_pdf(w, n))*4*np.pi
    assert np.isclose(est, 1, atol=0.02)


def test_uniform_hemisphere(uv):
    u, v = uv
    n = translate.norm1(np.array([0, -1.0, 1]))
    s = shapes.uniform_sample_hemisphere(u, v, n)
    assert unit(s.value)
    assert np.all(translate.dot(s.value, n) >= -1e-12)
    assert np.allclose(s.density, 1/(2*np.pi))
    assert np.allclose(shapes.uniform_sample_hemisphere_pdf(s.value, n),
                       s.density)
    assert shapes.uniform_sample_hemisphere_pdf(-n, n) == 0


def test_cosine_hemisphere(uv):
    u, v = uv
    s = shapes.cosine_sample_hemisphere(u, v)
    assert unit(s.value)
    assert np.allclose(s.density, s.value[:, 2]/np.pi)
    assert np.allclose(shapes.cosine_sample_hemisphere_pdf(s.value),
                       s.density)
    assert shapes.cosine_sample_hemisphere_pdf([0, 0, -1]) == 0
    # E[cos] = 2/3 for a cosine distribution
    assert np.isclose(np.mean(s.value[:, 2]), 2/3, atol=0.01)
    zero = shapes.cosine_sample_hemisphere(0.3, 0.0)
    assert not zero.valid


def test_rcp_cosine_hemisphere(uv):
    u, v = uv
    n = translate.norm1(np.array([0.2, -0.5, 0.7]))
    s = shapes.cosine_sample_hemisphere(u, v, n)
    ruv = shapes.rcp_cosine_sample_hemisphere(s.value, n)
    assert np.allclose(ruv, np.stack((u, v), -1), atol=1e-7)
    assert np.all(translate.dot(s.value, n) >= -1e-12)


def test_power_cosine(uv):
    u, v = uv
    n = np.array([0, 0, 1.0])
    s = shapes.power_cosine_sample_hemisphere(u, v, 4, n)
    assert unit(s.value)
    assert np.allclose(s.density,
                       shapes.power_cosine_sample_hemisphere_pdf(s.value, 4,
                                                                 n))
    # E[cos] = (e + 1)/(e + 2)
    assert np.isclose(np.mean(s.value[:, 2]), 5/6, atol=0.01)
    s0 = shapes.power_cosine_sample_hemisphere(u, v, 0)
    assert np.allclose(s0.density, 1/(2*np.pi))
    assert shapes.power_cosine_sample_hemisphere_pdf([0, 0, -1], 4) == 0


def test_cone(uv):
    u, v = uv
    n = translate.norm1(np.array([1.0, 2, 3]))
    angle = np.pi/6
    s = shapes.uniform_sample_cone(u, v, angle, n)
    assert unit(s.value)
    assert np.all(translate.dot(s.value, n) >= np.cos(angle) - 1e-9)
    omega = 2*np.pi*(1 - np.cos(angle))
    assert np.allclose(s.density, 1/omega)
    assert np.allclose(shapes.uniform_sample_cone_pdf(s.value, angle, n),
                       1/omega)
    assert shapes.uniform_sample_cone_pdf(-n, angle, n) == 0


def test_cone_zero_angle():
    s = shapes.uniform_sample_cone(np.array([.2, .7]), np.array([.1, .5]), 0)
    assert not np.any(s.valid)
    assert np.all(np.isfinite(s.value))
    assert np.allclose(s.value, [0, 0, 1])


def test_triangle(uv):
    u, v = uv
    a = np.array([0, 0, 0.0])
    b = np.array([2, 0, 0.0])
    c = np.array([0, 1, 0.0])
    s = shapes.uniform_sample_triangle(u, v, a, b, c)
    assert s.measure == Measure.AREA
    assert shapes.triangle_area(a, b, c) == 1
    assert np.allclose(s.density, 1)
    p = s.value
    assert np.all(p[:, 0] >= 0) and np.all(p[:, 1] >= 0)
    assert np.all(p[:, 0]/2 + p[:, 1] <= 1 + 1e-12)
    bary = shapes.uniform_sample_triangle_uvs(u, v)
    q = (bary[:, 0:1]*a + bary[:, 1:2]*b +
         (1 - bary[:, 0:1] - bary[:, 1:2])*c)
    assert np.allclose(p, q)
    # uniform: half the samples lie left of x = 2 - 2*sqrt(1/2)
    assert np.isclose(np.mean(p[:, 0] < 2 - np.sqrt(2)), 0.5, atol=0.02)
    assert shapes.uniform_sample_triangle_pdf(a, b, c) == 1


def test_degenerate_triangle():
    a = np.array([0, 0, 0.0])
    s = shapes.uniform_sample_triangle(0.5, 0.5, a, a, [1, 0, 0])
    assert not s.valid
    assert shapes.uniform_sample_triangle_pdf(a, a, [1, 0, 0]) == 0


def test_spherical_triangle_area(tri):
    x, y, z = np.eye(3)
    assert np.isclose(shapes.spherical_triangle_area(x, y, z), np.pi/2)
    assert np.isclose(shapes.spherical_triangle_area(*tri), 3*np.pi/4)


def test_spherical_triangle(uv, tri):
    e1, e2 = uv
    a, b, c = tri
    s = shapes.uniform_sample_spherical_triangle(e1, e2, a, b, c)
    assert unit(s.value)
    assert np.all(s.density == 1/shapes.spherical_triangle_area(a, b, c))
    assert np.all(s.density ==
                  shapes.uniform_sample_spherical_triangle_pdf(a, b, c))
    # inside all three great circles
    for p, q in ((a, b), (b, c), (c, a)):
        assert np.all(translate.dot(s.value, np.cross(p, q)) >= -1e-9)
    # the octant part holds 2/3 of the area
    assert np.isclose(np.mean(s.value[:, 1] > 0), 2/3, atol=0.02)


def test_spherical_triangle_corners(tri):
    a, b, c = tri
    s = shapes.uniform_sample_spherical_triangle(0.0, 0.0, a, b, c)
    assert np.allclose(s.value, b)
    s = shapes.uniform_sample_spherical_triangle(0.0, 1.0, a, b, c)
    assert np.allclose(s.value, a)
    s = shapes.uniform_sample_spherical_triangle(1.0, 1.0, a, b, c)
    assert np.allclose(s.value, c)


def test_degenerate_spherical_triangle(tri):
    a, b, c = tri
    s = shapes.uniform_sample_spherical_triangle(np.array([.2, .6]),
                                                 np.array([.4, .1]), a, a, c)
    assert not np.any(s.valid)
    assert np.all(np.isfinite(s.value))
    assert shapes.spherical_triangle_area(a, a, c) == 0
    assert shapes.uniform_sample_spherical_triangle_pdf(a, a, c) == 0


def test_disk(uv):
    s2d = np.stack(uv, -1)
    for sampler in (shapes.uniform_sample_disk,
                    shapes.concentric_sample_disk):
        s = sampler(s2d, 2.0)
        assert s.measure == Measure.AREA
        r = np.linalg.norm(s.value, axis=-1)
        assert np.all(r <= 2 + 1e-12)
        assert np.allclose(s.density, 1/(4*np.pi))
        assert np.isclose(np.mean(r < np.sqrt(2)), 0.5, atol=0.02)
    assert np.isclose(shapes.uniform_sample_disk_pdf(2.0), 1/(4*np.pi))
    assert shapes.uniform_sample_disk_pdf(0) == 0
