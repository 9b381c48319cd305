# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import numpy as np

from impsample import io, translate
from impsample.mapper import SphericalMapper
from impsample.sample import PlaneSample
from impsample.sampling.distribution2d import Distribution2D
from impsample.sampling.measure import plane_to_direction


class EnvironmentMap(object):
    """importance sampling of directions proportional to an image mapped
    onto the sphere

    the table stores weight * jacobian per pixel, so that directions are
    drawn proportional to the image values w.r.t. solid angle.

    Parameters
    ----------
    weights: np.array
        (height, width) image or (height, width, 3) linear rgb (converted to
        luminance), values must not be negative
    mapper: impsample.mapper.Mapper, optional
        the parameterization of weights, defaults to SphericalMapper()
    res: int, optional
        resample weights to mapper.framesize(res) (scale factors must be
        whole numbers, see impsample.translate.resample)
    """

    def __init__(self, weights, mapper=None, res=None):
        if mapper is None:
            mapper = SphericalMapper()
        #: impsample.mapper.Mapper
        self.mapper = mapper
        weights = np.asarray(weights, dtype=float)
        if weights.ndim == 3 and weights.shape[-1] == 3:
            weights = io.rgb2lum(weights)
        if weights.ndim != 2:
            raise ValueError("weights must be a (height, width) or "
                             f"(height, width, 3) array, not {weights.shape}")
        if np.any(weights < 0):
            raise ValueError("weights must not be negative")
        if res is not None:
            xres, yres = mapper.framesize(res)
            weights = translate.resample(weights, (yres, xres))
        height, width = weights.shape
        uv = translate.uv_grid(width, height).reshape(height, width, 2)
        self.distribution = Distribution2D(weights*mapper.jacobian(uv))

    @classmethod
    def from_table(cls, buffer, width, height, mapper=None):
        """wrap a table built by a previous EnvironmentMap (see buffer)"""
        if mapper is None:
            mapper = SphericalMapper()
        e = cls.__new__(cls)
        e.mapper = mapper
        e.distribution = Distribution2D.from_buffer(buffer, width, height)
        return e

    @property
    def buffer(self):
        """flat table, reusable with from_table"""
        return self.distribution.buffer

    @property
    def width(self):
        return self.distribution.width

    @property
    def height(self):
        return self.distribution.height

    @property
    def degenerate(self):
        return self.distribution.degenerate

    def sample_uv(self, s2d):
        """draw uv coordinates

        Parameters
        ----------
        s2d: np.array
            (..., 2) uniform variates

        Returns
        -------
        PlaneSample
            uv in the unit square, density w.r.t. uv
        """
        size = np.array((self.width, self.height))
        s = self.distribution.sample_continuous(s2d)
        return PlaneSample.from_rcp(s.value/size, s.rcp_density)

    def sample(self, s2d):
        """draw directions

        Returns
        -------
        impsample.sample.DirectionSample
            world directions, density w.r.t. solid angle (zero density for
            a table without mass)
        """
        return plane_to_direction(self.sample_uv(s2d), self.mapper)

    def pdf_uv(self, uv):
        """density w.r.t. uv, 0 outside the unit square"""
        size = np.array((self.width, self.height))
        uv = np.asarray(uv, dtype=float)
        inside = np.all((uv >= 0) & (uv <= 1), -1)
        pdf = self.distribution.pdf_continuous(uv*size)
        return np.where(inside, pdf, 0.0)[()]

    def pdf(self, xyz):
        """density w.r.t. solid angle of world directions xyz"""
        uv = self.mapper.xyz2uv(xyz)
        return (self.pdf_uv(uv)*self.mapper.rcp_jacobian(xyz))[()]

    def __repr__(self):
        return (f"{type(self).__name__}({self.mapper}, "
                f"width={self.width}, height={self.height})")
