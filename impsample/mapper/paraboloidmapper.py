# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample import translate
from impsample.mapper.mapper import Mapper


def _reflect(normal):
    """direction reflected by the paraboloid with surface normal (x, y, nz)
    towards nz: 2 N/|N|^2 - (0, 0, nz)"""
    d = np.sum(np.square(normal), -1)
    xyz = 2*normal/d[..., None]
    xyz[..., 2] -= normal[..., 2]
    return xyz, d


class ParaboloidMapper(Mapper):
    """paraboloid mapping, the unit disk inscribed in the uv square covers
    the upper hemisphere, the corners of the square reach below the horizon.
    """

    aspect = 1
    #: 8 sqrt(2) atan(1/sqrt(2)), stereographic image of the square
    solid_angle = 8*np.sqrt(2)*np.arctan(1/np.sqrt(2))

    def __init__(self, dxyz=(0.0, 0.0, 1.0), name='paraboloid'):
        super().__init__(dxyz=dxyz, name=name)

    @staticmethod
    def normal(uv):
        """paraboloid normal (ndc.x, ndc.y, 1) at uv"""
        ndc = translate.uv2ndc(uv)
        return np.concatenate((ndc, np.ones(ndc.shape[:-1] + (1,))), -1)

    def _uv2xyz(self, uv):
        n = self.normal(uv)
        xyz, d = _reflect(n)
        r = np.sqrt(np.square(n[..., 0]) + np.square(n[..., 1]))
        return xyz, 2*r/d

    def _xyz2uv(self, xyz):
        sintheta = np.sqrt(np.square(xyz[..., 0]) + np.square(xyz[..., 1]))
        scaled = xyz[..., 0:2]/(xyz[..., 2:3] + 1)
        return translate.ndc2uv(scaled), sintheta

    def _jacobian(self, uv):
        d = np.sum(np.square(self.normal(uv)), -1)
        return 16/(d*d)

    def _rcp_jacobian(self, xyz):
        zp = 1 + xyz[..., 2]
        # directions mapping outside the uv square are never produced
        ndc = np.abs(xyz[..., 0:2]/zp[..., None])
        inside = (zp > 0) & np.all(ndc <= 1, -1)
        rj = np.zeros(zp.shape)
        np.divide(1, 4*zp*zp, out=rj, where=inside)
        return rj
