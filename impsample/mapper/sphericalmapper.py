# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample.mapper.mapper import Mapper


class SphericalMapper(Mapper):
    """latitude/longitude mapping of the whole sphere

    phi = 2 pi u (azimuth from +x towards +y), theta = pi v (from +z).

    Parameters
    ----------
    dxyz: tuple, optional
        world direction of theta = 0
    name: str, optional
    """

    aspect = 2
    solid_angle = 4*np.pi
    #: theta range of the v axis
    _thetamax = np.pi

    def __init__(self, dxyz=(0.0, 0.0, 1.0), name='spherical'):
        super().__init__(dxyz=dxyz, name=name)

    def angles(self, uv):
        """(phi, theta) of uv"""
        return np.asarray(uv)*np.array((2*np.pi, self._thetamax))

    def _uv2xyz(self, uv):
        phitheta = self.angles(uv)
        phi = phitheta[..., 0]
        theta = phitheta[..., 1]
        sintheta = np.sin(theta)
        xyz = np.stack((np.cos(phi)*sintheta, np.sin(phi)*sintheta,
                        np.cos(theta)), -1)
        return xyz, sintheta

    def _xyz2uv(self, xyz):
        sintheta = np.sqrt(np.square(xyz[..., 0]) + np.square(xyz[..., 1]))
        phi = np.arctan2(xyz[..., 1], xyz[..., 0])
        phi = np.where(phi < 0, phi + 2*np.pi, phi)
        theta = np.arctan2(sintheta, xyz[..., 2])
        uv = np.stack((phi/(2*np.pi), theta/self._thetamax), -1)
        return uv, sintheta

    def _jacobian(self, uv):
        sintheta = np.sin(self.angles(uv)[..., 1])
        return np.abs(2*np.pi*self._thetamax*sintheta)

    def _rcp_jacobian(self, xyz):
        sintheta = np.sqrt(np.square(xyz[..., 0]) + np.square(xyz[..., 1]))
        rj = np.zeros(sintheta.shape)
        np.divide(1, 2*np.pi*self._thetamax*sintheta, out=rj,
                  where=sintheta != 0)
        return rj
