# -*- coding: utf-8 -*-

# Copyright (c) 2019 Stephen Wasilewski
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample import translate


class Mapper(object):
    """translate between normalized UV space [0,1)x[0,1) and directions on
    the unit sphere. do not use directly, instead use an inheriting class.

    inheriting classes implement the canonical (z-up) mapping in
    _uv2xyz, _xyz2uv, _jacobian and _rcp_jacobian, the public methods
    apply the rotation onto dxyz.

    Parameters
    ----------
    dxyz: tuple, optional
        world direction of the canonical +z axis of the mapping
    name: str, optional
        used for output naming
    """

    #: aspect ratio (width/height) of images parameterized by the mapper
    aspect = 1
    #: solid angle covered by the image of the unit square
    solid_angle = 4*np.pi

    def __init__(self, dxyz=(0.0, 0.0, 1.0), name='mapper'):
        self.name = name
        self.dxyz = dxyz

    @property
    def dxyz(self):
        """(float, float, float) canonical z axis in world space"""
        return self._dxyz

    @dxyz.setter
    def dxyz(self, xyz):
        self._dxyz = translate.norm1(np.asarray(xyz, dtype=float).ravel()[0:3])
        if np.allclose(self._dxyz, (0, 0, 1)):
            self._frame = None
        else:
            self._frame = translate.frame_z(self._dxyz)

    def view2world(self, xyz):
        """rotate vectors from canonical mapping space to world"""
        if self._frame is None:
            return np.asarray(xyz)
        return translate.to_frame(self._frame, xyz)

    def world2view(self, xyz):
        """rotate vectors from world to canonical mapping space"""
        if self._frame is None:
            return np.asarray(xyz)
        return translate.from_frame(self._frame, xyz)

    def uv2xyz(self, uv):
        """transform from mapper UV space to world xyz"""
        return self.uv2xyz_sintheta(uv)[0]

    def uv2xyz_sintheta(self, uv):
        """transform from mapper UV space to world xyz, also returns
        sin(theta) w.r.t. the mapping axis as computed by the forward map"""
        with np.errstate(all="ignore"):
            xyz, sintheta = self._uv2xyz(np.asarray(uv, dtype=float))
        return self.view2world(xyz), sintheta

    def xyz2uv(self, xyz):
        """transform from world xyz space to mapper UV space"""
        return self.xyz2uv_sintheta(xyz)[0]

    def xyz2uv_sintheta(self, xyz):
        """transform from world xyz space to mapper UV space, also returns
        sin(theta) w.r.t. the mapping axis as computed by the inverse map"""
        rxyz = self.world2view(np.asarray(xyz, dtype=float))
        with np.errstate(all="ignore"):
            return self._xyz2uv(rxyz)

    def jacobian(self, uv):
        """differential solid angle per unit of uv area, a density w.r.t.
        uv divided by the jacobian is a density w.r.t. solid angle"""
        with np.errstate(all="ignore"):
            return self._jacobian(np.asarray(uv, dtype=float))[()]

    def rcp_jacobian(self, xyz):
        """reciprocal jacobian at world direction xyz, 0 where the jacobian
        is 0"""
        rxyz = self.world2view(np.asarray(xyz, dtype=float))
        with np.errstate(all="ignore"):
            return self._rcp_jacobian(rxyz)[()]

    def _uv2xyz(self, uv):
        raise NotImplementedError

    def _xyz2uv(self, xyz):
        raise NotImplementedError

    def _jacobian(self, uv):
        raise NotImplementedError

    def _rcp_jacobian(self, xyz):
        raise NotImplementedError

    def framesize(self, res):
        """(xres, yres) of an image with res along its longer side"""
        if self.aspect < 1:
            yres = res
            xres = int(round(res*self.aspect))
        else:
            xres = res
            yres = int(round(res/self.aspect))
        return xres, yres

    def pixels(self, res):
        """raster coordinates of pixel centers, shape (yres, xres, 2)
        holding (x, y)"""
        xres, yres = self.framesize(res)
        return np.stack(np.mgrid[0:yres, 0:xres][::-1], 2) + .5

    def pixelrays(self, res):
        """world xyz coordinates for pixel centers, shape (yres, xres, 3)"""
        return self.pixel2ray(self.pixels(res), res)

    def pixel2ray(self, pxy, res):
        """raster coordinate to world xyz vector"""
        return self.uv2xyz(translate.raster2uv(pxy, self.framesize(res)))

    def ray2pixel(self, xyz, res):
        """world xyz to integer pixel (x, y)"""
        return translate.uv2pixel(self.xyz2uv(xyz), self.framesize(res))

    def pixel2omega(self, pxy, res):
        """solid angle of pixels at raster coordinates pxy"""
        xres, yres = self.framesize(res)
        uv = translate.raster2uv(pxy, (xres, yres))
        return self.jacobian(uv)/(xres*yres)

    def idx2uv(self, idx, res, stream=None):
        """uv coordinates of flattened (row major) pixel indices

        Parameters
        ----------
        idx: np.array
            flattened index
        res: int
            image resolution (see framesize)
        stream: impsample.rng.RandomStream, optional
            if given, jitter coordinates within the pixel with variates
            drawn from stream, else return pixel centers

        Returns
        -------
        uv: np.array
            uv coordinates
        """
        size = self.framesize(res)
        pxy = translate.index2pixel(idx, size[0])
        if stream is None:
            offset = 0.5
        else:
            offset = stream.get_float2(np.shape(idx))
        return (pxy + offset)/np.asarray(size)

    def uv2idx(self, uv, res):
        """flattened (row major) pixel index of uv"""
        size = self.framesize(res)
        return translate.pixel_index(translate.uv2pixel(uv, size), size[0])

    def __repr__(self):
        return f"{type(self).__name__}(dxyz={tuple(self.dxyz)})"
