# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample.mapper.sphericalmapper import SphericalMapper


class HemisphericalMapper(SphericalMapper):
    """latitude/longitude mapping of the upper hemisphere

    phi = 2 pi u, theta = pi/2 v, directions below the horizon have v > 1
    and a reciprocal jacobian of 0.
    """

    aspect = 4
    solid_angle = 2*np.pi
    _thetamax = np.pi/2

    def __init__(self, dxyz=(0.0, 0.0, 1.0), name='hemispherical'):
        super().__init__(dxyz=dxyz, name=name)

    def _rcp_jacobian(self, xyz):
        rj = super()._rcp_jacobian(xyz)
        return np.where(xyz[..., 2] < 0, 0.0, rj)
