# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""closed form samplers for canonical shapes and their densities.

every sampler is vectorized over its uniform variates. samplers taking an
optional up direction n sample around +z and rotate the result with
impsample.translate.frame_z(n)."""
import numpy as np

from impsample import translate
from impsample.translate import dot, rcp, cos2sin
from impsample.sample import DirectionSample, PointSample


def _direction(phi, costheta, sintheta):
    return np.stack((np.cos(phi)*sintheta, np.sin(phi)*sintheta,
                     costheta), -1)


def _rotate(s, n):
    if n is None:
        return s
    return translate.to_frame(translate.frame_z(n), s)


def _cos(s, n):
    """cos(theta) of s w.r.t. n (or +z)"""
    s = np.asarray(s, dtype=float)
    if n is None:
        return s[..., 2]
    return dot(s, n)


def _full(shape, x):
    return np.full(shape, x)[()]


def _uv2phi(xyz):
    return np.mod(np.arctan2(xyz[..., 1], xyz[..., 0])/(2*np.pi), 1.0)


####################
# Sampling of Sphere
####################

def uniform_sample_sphere(u, v):
    """uniform sphere sampling"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    costheta = 1.0 - 2.0*v
    sintheta = 2.0*np.sqrt(v*(1.0 - v))
    return DirectionSample(_direction(phi, costheta, sintheta),
                           _full(phi.shape, 1/(4*np.pi)))


def uniform_sample_sphere_pdf():
    return 1/(4*np.pi)


def rcp_uniform_sample_sphere(wi):
    """variates (u, v) that uniform_sample_sphere maps to wi"""
    wi = np.asarray(wi, dtype=float)
    v = 0.5*(1.0 - wi[..., 2])
    return np.stack((_uv2phi(wi), v), -1)


def cosine_sample_sphere(u, v, n=None):
    """cosine weighted sphere sampling (both sides of the plane normal to
    n, or to +z)"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    vv = 2.0*(np.asarray(v, dtype=float) - 0.5)
    costheta = np.sign(vv)*np.sqrt(np.abs(vv))
    s = _direction(phi, costheta, cos2sin(costheta))
    return DirectionSample(_rotate(s, n), np.abs(costheta)/(2*np.pi))


def cosine_sample_sphere_pdf(s, n=None):
    return np.abs(_cos(s, n))/(2*np.pi)


########################
# Sampling of Hemisphere
########################

def uniform_sample_hemisphere(u, v, n=None):
    """uniform hemisphere sampling around n (or +z)"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    costheta = np.asarray(v, dtype=float)
    s = _direction(phi, costheta, cos2sin(costheta))
    return DirectionSample(_rotate(s, n), _full(phi.shape, 1/(2*np.pi)))


def uniform_sample_hemisphere_pdf(s, n=None):
    return np.where(_cos(s, n) < 0, 0.0, 1/(2*np.pi))[()]


def cosine_sample_hemisphere(u, v, n=None):
    """cosine weighted hemisphere sampling around n (or +z), the density
    is 0 where v is 0"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    costheta = np.sqrt(v)
    s = _direction(phi, costheta, np.sqrt(1.0 - v))
    return DirectionSample(_rotate(s, n), costheta/np.pi)


def rcp_cosine_sample_hemisphere(d, n=None):
    """variates (u, v) that cosine_sample_hemisphere maps to d"""
    d = np.asarray(d, dtype=float)
    if n is not None:
        d = translate.from_frame(translate.frame_z(n), d)
    return np.stack((_uv2phi(d), np.square(d[..., 2])), -1)


def cosine_sample_hemisphere_pdf(s, n=None):
    return np.maximum(0.0, _cos(s, n)/np.pi)[()]


def power_cosine_sample_hemisphere(u, v, exp, n=None):
    """hemisphere sampling proportional to cos(theta)^exp"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    costheta = np.power(np.asarray(v, dtype=float), 1.0/(exp + 1))
    s = _direction(phi, costheta, cos2sin(costheta))
    return DirectionSample(_rotate(s, n),
                           (exp + 1.0)*np.power(costheta, exp)/(2*np.pi))


def power_cosine_sample_hemisphere_pdf(s, exp, n=None):
    z = _cos(s, n)
    with np.errstate(invalid="ignore"):
        pdf = (exp + 1.0)*np.power(np.maximum(z, 0.0), exp)/(2*np.pi)
    return np.where(z < 0, 0.0, pdf)[()]


###########################
# Sampling of Spherical Cone
###########################

def _cone_rcp_pdf(angle):
    return 4*np.pi*np.square(np.sin(0.5*angle))


def uniform_sample_cone(u, v, angle, n=None):
    """uniform sampling of the cone of half angle angle around n (or +z),
    a zero angle cone gives zero density samples"""
    phi = 2*np.pi*np.asarray(u, dtype=float)
    costheta = 1.0 - np.asarray(v, dtype=float)*(1.0 - np.cos(angle))
    s = _direction(phi, costheta, cos2sin(costheta))
    return DirectionSample.from_rcp(_rotate(s, n),
                                    _full(phi.shape, _cone_rcp_pdf(angle)))


def uniform_sample_cone_pdf(s, angle, n=None):
    return np.where(_cos(s, n) < np.cos(angle), 0.0,
                    rcp(_cone_rcp_pdf(angle)))[()]


######################
# Sampling of Triangle
######################

def triangle_area(a, b, c):
    a = np.asarray(a, dtype=float)
    return 0.5*np.linalg.norm(np.cross(np.asarray(b) - a,
                                       np.asarray(c) - a), axis=-1)


def uniform_sample_triangle(u, v, a, b, c):
    """uniform point on the triangle abc (density w.r.t. area)"""
    a, b, c = (np.asarray(i, dtype=float) for i in (a, b, c))
    su = np.sqrt(np.asarray(u, dtype=float))[..., None]
    v = np.asarray(v, dtype=float)[..., None]
    p = c + (1.0 - su)*(a - c) + (v*su)*(b - c)
    area = np.broadcast_to(triangle_area(a, b, c), p.shape[:-1])
    return PointSample.from_rcp(p, area)


def uniform_sample_triangle_uvs(u, v):
    """barycentric coordinates (of a and b) of uniform_sample_triangle"""
    su = np.sqrt(np.asarray(u, dtype=float))
    return np.stack((1.0 - su, np.asarray(v)*su), -1)


def uniform_sample_triangle_pdf(a, b, c):
    return rcp(triangle_area(a, b, c))


################################
# Sampling of Spherical Triangle
################################

def _orthonormal_component(x, y):
    """normalized component of x orthogonal to unit vector y"""
    return translate.norm(x - dot(x, y)[..., None]*y)


def _spherical_triangle_angles(a, b, c):
    with np.errstate(all="ignore"):
        nab = translate.norm(np.cross(a, b))
        nbc = translate.norm(np.cross(b, c))
        nca = translate.norm(np.cross(c, a))
    cosalpha = np.clip(-dot(nab, nca), -1, 1)
    cosbeta = np.clip(-dot(nbc, nab), -1, 1)
    cosgamma = np.clip(-dot(nbc, nca), -1, 1)
    alpha = np.arccos(cosalpha)
    area = alpha + np.arccos(cosbeta) + np.arccos(cosgamma) - np.pi
    # coincident vertices give nan normals
    area = np.where(np.isfinite(area), np.maximum(area, 0.0), 0.0)
    return area, alpha, cosalpha


def spherical_triangle_area(a, b, c):
    """area (spherical excess) of the triangle of unit vectors a, b, c"""
    a, b, c = (np.asarray(i, dtype=float) for i in (a, b, c))
    return _spherical_triangle_angles(a, b, c)[0][()]


def uniform_sample_spherical_triangle(e1, e2, a, b, c):
    """uniform direction in the spherical triangle of unit vectors a, b, c

    Arvo, James. Stratified Sampling of Spherical Triangles. SIGGRAPH 95,
    pp. 437-438. doi:10.1145/218380.218500

    Parameters
    ----------
    e1: Union[float, np.array]
        selects the sub-triangle by area fraction
    e2: Union[float, np.array]
        selects the point along the arc from b to the new vertex
    a: np.array
    b: np.array
    c: np.array
        vertices (normalized)

    Returns
    -------
    DirectionSample
        density 1/area, a zero area triangle gives zero vectors with zero
        density
    """
    a, b, c = (np.asarray(i, dtype=float) for i in (a, b, c))
    e1 = np.asarray(e1, dtype=float)
    e2 = np.asarray(e2, dtype=float)
    area, alpha, cosalpha = _spherical_triangle_angles(a, b, c)
    cosc = dot(a, b)
    with np.errstate(all="ignore"):
        newarea = e1*area
        s = np.sin(newarea - alpha)
        t = np.cos(newarea - alpha)
        sinalpha = np.sin(alpha)
        u = t - cosalpha
        v = s + sinalpha*cosc
        q = ((v*t - u*s)*cosalpha - v)/((v*s + u*t)*sinalpha)
        q = np.clip(q, -1, 1)[..., None]
        newc = q*a + np.sqrt(1 - q*q)*_orthonormal_component(c, a)
        z = np.clip(1 - e2*(1 - dot(newc, b)), -1, 1)[..., None]
        p = z*b + np.sqrt(1 - z*z)*_orthonormal_component(newc, b)
    shape = p.shape[:-1]
    area = np.broadcast_to(area, shape)
    p = np.where((area > 0)[..., None], p, 0.0)
    return DirectionSample.from_rcp(p, area)


def uniform_sample_spherical_triangle_pdf(a, b, c):
    return rcp(spherical_triangle_area(a, b, c))


##################
# Sampling of Disk
##################

def uniform_sample_disk(s2d, radius=1.0):
    """uniform point on the disk of radius around the origin (polar map)"""
    s2d = np.asarray(s2d, dtype=float)
    r = np.sqrt(s2d[..., 0])
    theta = 2*np.pi*s2d[..., 1]
    p = radius*r[..., None]*np.stack((np.cos(theta), np.sin(theta)), -1)
    return PointSample.from_rcp(p, _full(r.shape, np.pi*radius*radius))


def concentric_sample_disk(s2d, radius=1.0):
    """uniform point on the disk with the low distortion Shirley-Chiu map"""
    p = radius*translate.uv2xy(s2d)
    return PointSample.from_rcp(p, _full(p.shape[:-1], np.pi*radius*radius))


def uniform_sample_disk_pdf(radius=1.0):
    return rcp(np.pi*radius*radius)
