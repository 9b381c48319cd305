# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample.mapper.mapper import Mapper
from impsample.mapper.paraboloidmapper import _reflect


class DualParaboloidMapper(Mapper):
    """two paraboloid mappings side by side

    u < 0.5 holds the front lobe (z > 0), u >= 0.5 the back lobe (z <= 0)
    with x mirrored. each lobe covers its hemisphere with the disk
    inscribed in its half of the square, the jacobian is 0 outside the
    disks. the directions of uv outside the disks are also reached from
    inside the other lobe, so rcp_jacobian(uv2xyz(uv)) is not 0 there.
    """

    aspect = 2
    solid_angle = 4*np.pi

    def __init__(self, dxyz=(0.0, 0.0, 1.0), name='dualparaboloid'):
        super().__init__(dxyz=dxyz, name=name)

    @staticmethod
    def normal(uv):
        """paraboloid normal of the lobe owning uv, (x, y, 1) for the front
        lobe and (-x, y, -1) for the back lobe"""
        uv = np.asarray(uv, dtype=float)
        front = uv[..., 0] < 0.5
        x = np.where(front, 4*uv[..., 0] - 1, 3 - 4*uv[..., 0])
        y = 2*uv[..., 1] - 1
        z = np.where(front, 1.0, -1.0)
        return np.stack((x, y, z), -1)

    def _uv2xyz(self, uv):
        n = self.normal(uv)
        xyz, d = _reflect(n)
        r = np.sqrt(np.square(n[..., 0]) + np.square(n[..., 1]))
        return xyz, 2*r/d

    def _xyz2uv(self, xyz):
        sintheta = np.sqrt(np.square(xyz[..., 0]) + np.square(xyz[..., 1]))
        front = xyz[..., 2] > 0
        zp = 1 + np.abs(xyz[..., 2])
        x = xyz[..., 0]/zp
        y = xyz[..., 1]/zp
        u = np.where(front, 0.25*(x + 1), 0.5 + 0.25*(1 - x))
        v = 0.5*(y + 1)
        return np.stack((u, v), -1), sintheta

    def _jacobian(self, uv):
        n = self.normal(uv)
        r2 = np.square(n[..., 0]) + np.square(n[..., 1])
        d = r2 + 1
        return np.where(r2 > 1, 0.0, 32/(d*d))

    def _rcp_jacobian(self, xyz):
        zp = 1 + np.abs(xyz[..., 2])
        return 1/(8*zp*zp)
