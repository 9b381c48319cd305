# -*- coding: utf-8 -*-

# Copyright (c) 2019 Stephen Wasilewski
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""vector helpers and functions for translating between image spaces"""

import numpy as np
from scipy.ndimage import gaussian_filter, uniform_filter


def norm(v):
    """normalize array of vectors along last dimension"""
    v = np.asarray(v, dtype=float)
    return v/np.linalg.norm(v, axis=-1)[..., None]


def norm1(v):
    """normalize flat vector"""
    n = np.sqrt(np.sum(np.square(v)))
    if n == 0:
        n = 1
    return np.asarray(v)/n


def dot(a, b):
    """dot product along last axis (broadcasting)"""
    return np.sum(np.asarray(a)*np.asarray(b), axis=-1)


def sqr(x):
    return x*x


def rcp(x):
    """reciprocal with rcp(0) == 0"""
    x = np.asarray(x, dtype=float)
    out = np.zeros_like(x)
    np.divide(1.0, x, out=out, where=x != 0)
    return out[()]


def cos2sin(x):
    """sin from cos (or cos from sin), clamped against rounding"""
    return np.sqrt(np.maximum(0.0, 1.0 - np.square(x)))


#####################
# orthonormal frames #
#####################

def frame_z(n):
    """orthonormal frame with n as the z axis

    The x axis is built from the two components of n that exclude its
    dominant horizontal component: (n.y, -n.x, 0) when abs(n.y) > abs(n.x)
    else (n.z, 0, -n.x). y = cross(n, x).

    Parameters
    ----------
    n: array-like of size (..., 3)
        normalized z axis

    Returns
    -------
    np.array
        shape (..., 3, 3), columns are the x, y, z axes, so that
        ``to_frame(m, v)`` rotates canonical (z-up) vectors onto n
    """
    z = np.asarray(n, dtype=float)
    zero = np.zeros(z.shape[:-1])
    xa = np.stack((z[..., 1], -z[..., 0], zero), -1)
    xb = np.stack((z[..., 2], zero, -z[..., 0]), -1)
    cond = np.abs(z[..., 1]) > np.abs(z[..., 0])
    x = norm(np.where(cond[..., None], xa, xb))
    y = np.cross(z, x)
    return np.stack((x, y, z), -1)


def to_frame(m, v):
    """rotate canonical vectors v into frame m (m @ v)"""
    return np.einsum('...ij,...j->...i', m, v)


def from_frame(m, v):
    """rotate vectors v from frame m back to canonical (m.T @ v)"""
    return np.einsum('...ji,...j->...i', m, v)


###############################################
# Shirley=Chiu Disk to Square Transformations #
###############################################

def uv2xy(uv):
    """translate from unit square (0,1),(0,1) to unit disk (x,y)
    http://psgraphics.blogspot.com/2011/01/improved-code-for-concentric
    -map.html.
    """
    uv = np.asarray(uv, dtype=float)
    a = 2. * uv[..., 0] - 1
    b = 2. * uv[..., 1] - 1
    cond = a*a > b*b
    with np.errstate(all="ignore"):
        r = np.where(cond, a, np.where(b == 0, 0, b))
        phi = np.where(cond, b/(2*a),
                       np.where(b == 0, 0, 1 - a/(2*b)))*np.pi/2
    return np.stack((np.cos(phi)*r, np.sin(phi)*r), -1)


def xy2uv(xy):
    """translate from unit disk (x,y) to unit square (0,1),(0,1), inverse
    of uv2xy.
    Shirley, Peter, and Kenneth Chiu. A Low Distortion Map Between Disk and
    Square. Journal of Graphics Tools, vol. 2, no. 3, Jan. 1997, pp. 45-52.
    """
    xy = np.asarray(xy, dtype=float)
    x = xy[..., 0]
    y = xy[..., 1]
    r = np.sqrt(np.square(x) + np.square(y))
    phi = np.arctan2(y, x)
    pi4 = np.pi/4
    phi = phi + np.where(phi < -pi4, 2*np.pi, 0)
    a = np.where(phi < pi4, r,
                 np.where(phi < 3*pi4, -(phi - np.pi/2)*r/pi4,
                          np.where(phi < 5*pi4, -r, (phi - 3*np.pi/2)*r/pi4)))
    b = np.where(phi < pi4, phi*r/pi4,
                 np.where(phi < 3*pi4, r,
                          np.where(phi < 5*pi4, -(phi - np.pi)*r/pi4, -r)))
    return np.stack(((a + 1)/2, (b + 1)/2), -1)


#################################
# pixel, raster, uv, ndc spaces #
#################################

def pixel_index(pixel, width):
    """flat (row major) index of integer pixel coordinates (x, y)"""
    pixel = np.asarray(pixel)
    return pixel[..., 0] + pixel[..., 1]*width


def index2pixel(idx, width):
    """integer pixel coordinates (x, y) of a flat (row major) index"""
    idx = np.asarray(idx)
    return np.stack((idx % width, idx // width), -1)


def uv2pixel(uv, size):
    """pixel containing uv, clamped to the image

    Parameters
    ----------
    uv: np.array
        (..., 2) coordinates in [0, 1)
    size: tuple
        (width, height)
    """
    size = np.asarray(size)
    ij = np.floor(np.asarray(uv)*size).astype(int)
    return np.clip(ij, 0, size - 1)


def raster2pixel(raster, size):
    """pixel containing a raster position, clamped to the image"""
    size = np.asarray(size)
    return np.clip(np.floor(raster).astype(int), 0, size - 1)


def raster2uv(raster, size):
    return np.asarray(raster, dtype=float)/np.asarray(size)


def pixel2uv(pixel, size):
    """uv at the center of pixel"""
    return (np.asarray(pixel) + 0.5)/np.asarray(size)


def uv2ndc(uv):
    return 2.0*np.asarray(uv) - 1


def ndc2uv(ndc):
    return 0.5*(np.asarray(ndc) + 1)


def raster2ndc(raster, size):
    return -1 + 2.0*np.asarray(raster)/np.asarray(size)


def uv_grid(width, height):
    """uv coordinates of pixel centers, row major (width varies fastest)

    Returns
    -------
    np.array
        shape (height*width, 2)
    """
    ij = np.stack(np.mgrid[0:height, 0:width][::-1], -1).reshape(-1, 2)
    return pixel2uv(ij, (width, height))


#########################
# image like resampling #
#########################

def resample(samps, ts=None, gauss=True, radius=None):
    """simple array resampling. requires whole number multiple scaling.

    Parameters
    ----------
    samps: np.array
        array to resample along each axis
    ts: tuple, optional
        shape of output array, should be multiple of samps.shape
    gauss: bool, optional
        apply gaussian filter to upsampling
    radius: float, optional
        when gauss is True, filter radius, default is the scale ratio - 1

    Returns
    -------
    np.array
        to resampled array

    """
    if ts is None:
        ts = samps.shape
    rs = np.array(ts)/np.array(samps.shape)
    if np.prod(rs) > 1:
        for i in range(len(rs)):
            samps = np.repeat(samps, int(rs[i]), i)
        if gauss:
            if radius is None:
                radius = tuple(rs - 1)
            samps = gaussian_filter(samps, radius)
    elif np.prod(rs) < 1:
        rs = np.round(1/rs).astype(int)
        og = (-rs/2).astype(int)
        samps = uniform_filter(samps, rs, origin=og)
        for i, j in enumerate(rs):
            samps = np.take(samps, np.arange(0, samps.shape[i], j), i)
    elif radius is not None:
        if gauss:
            samps = gaussian_filter(samps, radius)
        else:
            samps = uniform_filter(samps, int(radius))
    return samps
