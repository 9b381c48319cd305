# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""value/density pairs returned by every sampling function"""
from enum import Enum

import numpy as np

from impsample.translate import rcp


class Measure(Enum):
    """the measure a density is expressed in"""
    UNKNOWN = 'unknown'
    SOLID_ANGLE = 'solid_angle'
    AREA = 'area'
    PLANE = 'plane'
    LINE = 'line'
    DISCRETE = 'discrete'


class MeasureError(TypeError):
    """a density in one measure was used where another was expected"""
    pass


class Sample(object):
    """an immutable value and density pair (vectorized)

    the reciprocal of the density is stored, so that an invalid sample is
    exactly ``rcp_density == 0``

    Parameters
    ----------
    value: np.array
        sampled values, shape (..., k) or (...)
    density: Union[float, np.array]
        density of each value, shape (...)
    """

    #: the measure of the density, fixed per subclass
    measure = Measure.UNKNOWN

    def __init__(self, value, density):
        self._value = np.asarray(value).view()
        self._rcp_density = rcp(density)
        self._value.flags.writeable = False

    @classmethod
    def from_rcp(cls, value, rcp_density):
        """initialize from an already computed reciprocal density"""
        s = cls.__new__(cls)
        s._value = np.asarray(value).view()
        s._rcp_density = np.asarray(rcp_density, dtype=float)[()]
        s._value.flags.writeable = False
        return s

    @property
    def value(self):
        """sampled value(s)"""
        return self._value

    @property
    def rcp_density(self):
        """reciprocal density, 0 for an invalid sample"""
        return self._rcp_density

    @property
    def density(self):
        """density (0 for an invalid sample)"""
        return rcp(self._rcp_density)

    @property
    def valid(self):
        """boolean (mask) true where the sample carries a nonzero density"""
        return np.asarray(self._rcp_density > 0)[()]

    def __len__(self):
        return np.size(self._rcp_density)

    def __repr__(self):
        return f"[ {self.value}, pdf = {self.density} ] "


class DirectionSample(Sample):
    """direction on the unit sphere, density w.r.t. solid angle"""
    measure = Measure.SOLID_ANGLE


class PointSample(Sample):
    """point on a surface, density w.r.t. area"""
    measure = Measure.AREA


class PlaneSample(Sample):
    """point in a 2d parameter plane (uv), density w.r.t. plane area"""
    measure = Measure.PLANE


class LineSample(Sample):
    """real value on a line, density w.r.t. length"""
    measure = Measure.LINE


class DiscreteSample(Sample):
    """index (or index pair), probability mass"""
    measure = Measure.DISCRETE


def require_measure(sample, *measures):
    """raise MeasureError if sample is not in one of measures"""
    if sample.measure not in measures:
        expected = ", ".join(m.value for m in measures)
        raise MeasureError(f"{type(sample).__name__} has density w.r.t. "
                           f"{sample.measure.value}, expected {expected}")
    return sample
