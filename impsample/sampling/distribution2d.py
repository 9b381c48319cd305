# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""two dimensional piecewise constant distributions as a marginal
distribution over rows and one conditional distribution per row.

buffer layout (height + 1 + height * (width + 1) reals)::

    [marginal cdf (height + 1)][row 0 cdf (width + 1)]...[row h-1 cdf]
"""
import numpy as np

from impsample import io
from impsample.sample import PlaneSample, DiscreteSample
from impsample.sampling.distribution1d import (
    _prefix_normalize, build_distribution1d, sample_continuous_distribution1d,
    sample_discrete_distribution1d, pdf_continuous_distribution1d)


def distribution2d_buffer_size(width, height):
    return height + 1 + height*(width + 1)


def _split(buffer, width, height):
    """views of the marginal cdf and the (height, width + 1) row cdfs"""
    marginal = buffer[:height + 1]
    rows = buffer[height + 1:distribution2d_buffer_size(width, height)]
    return marginal, rows.reshape(height, width + 1)


def build_distribution2d(function, buffer, width, height):
    """fill buffer with the distribution of the weights given by function

    each row is built first (its sum written to the matching marginal
    slot), then the row sums are normalized in place into the marginal cdf.

    Parameters
    ----------
    function: Union[callable, np.array]
        either function(x, y) called with integer index grids of shape
        (height, width) (results are broadcast) or an array of weights of
        shape (height, width)
    buffer: np.array
        flat destination, at least distribution2d_buffer_size(width, height)
    width: int
    height: int

    Returns
    -------
    float
        sum of all weights
    """
    marginal, rows = _split(buffer, width, height)
    if callable(function):
        y, x = np.mgrid[0:height, 0:width]
        w = function(x, y)
    else:
        w = function
    weights = np.array(np.broadcast_to(np.asarray(w, dtype=buffer.dtype),
                                       (height, width)))
    marginal[:height] = _prefix_normalize(weights, rows)
    return build_distribution1d(lambda idx: marginal[idx], marginal, height)


def _by_row(rows, width, idx, s1d, sampler):
    """draw from the conditional distribution of row idx for each sample"""
    value = np.zeros(idx.shape, dtype=float)
    density = np.zeros(idx.shape, dtype=float)
    for r in np.unique(idx):
        m = idx == r
        s = sampler(rows[r], width, s1d[m])
        value[m] = s.value
        density[m] = s.density
    return value, density


def sample_continuous_distribution2d(buffer, width, height, s2d):
    """sample a point in [0, width) x [0, height)

    Parameters
    ----------
    buffer: np.array
        built buffer
    width: int
    height: int
    s2d: np.array
        (..., 2) uniform variates, s2d[..., 0] selects the column and
        s2d[..., 1] the row

    Returns
    -------
    PlaneSample
        value (..., 2) as (x, y), density is the product of the marginal
        and conditional densities
    """
    s2d = np.asarray(s2d, dtype=buffer.dtype)
    shape = s2d.shape[:-1]
    s2d = s2d.reshape(-1, 2)
    marginal, rows = _split(buffer, width, height)
    sy = sample_continuous_distribution1d(marginal, height, s2d[:, 1])
    idx = np.clip(np.floor(sy.value).astype(int), 0, height - 1)
    x, px = _by_row(rows, width, idx, s2d[:, 0],
                    sample_continuous_distribution1d)
    value = np.stack((x, sy.value), -1).reshape(*shape, 2)
    density = (px*sy.density).reshape(shape)[()]
    return PlaneSample(value, density)


def sample_discrete_distribution2d(buffer, width, height, s2d):
    """sample a pixel

    Returns
    -------
    DiscreteSample
        value (..., 2) integer (x, y), probability of the pixel
    """
    s2d = np.asarray(s2d, dtype=buffer.dtype)
    shape = s2d.shape[:-1]
    s2d = s2d.reshape(-1, 2)
    marginal, rows = _split(buffer, width, height)
    sy = sample_discrete_distribution1d(marginal, height, s2d[:, 1])
    idx = np.broadcast_to(sy.value, s2d[:, 1].shape)
    x, px = _by_row(rows, width, idx, s2d[:, 0],
                    sample_discrete_distribution1d)
    value = np.stack((x.astype(int), idx), -1).reshape(*shape, 2)
    density = (px*sy.density).reshape(shape)[()]
    return DiscreteSample(value, density)


def pdf_continuous_distribution2d(buffer, width, height, point):
    """density at (..., 2) point (x, y) in [0, width) x [0, height)"""
    point = np.asarray(point, dtype=float)
    marginal, rows = _split(buffer, width, height)
    y = np.clip(np.floor(point[..., 1]).astype(int), 0, height - 1)
    x = np.clip(np.floor(point[..., 0]).astype(int), 0, width - 1)
    px = (rows[y, x + 1] - rows[y, x])*width
    return (px*pdf_continuous_distribution1d(marginal, height,
                                             point[..., 1]))[()]


def pdf_discrete_distribution2d(buffer, width, height, pixel):
    """probability of (..., 2) integer pixel (x, y)"""
    pixel = np.asarray(pixel, dtype=int)
    marginal, rows = _split(buffer, width, height)
    x = pixel[..., 0]
    y = pixel[..., 1]
    return ((rows[y, x + 1] - rows[y, x])*(marginal[y + 1] - marginal[y]))[()]


class Distribution2D(object):
    """two dimensional piecewise constant distribution bound to a buffer

    Parameters
    ----------
    function: Union[callable, np.array]
        weights (see build_distribution2d), an array must have shape
        (height, width)
    width: int, optional
        required when function is a callable
    height: int, optional
        required when function is a callable
    buffer: np.array, optional
        flat storage, allocated with impsample.io.get_real() when not given
    """

    def __init__(self, function, width=None, height=None, buffer=None):
        if width is None or height is None:
            if callable(function):
                raise ValueError("width and height are required with a "
                                 "weight function")
            height, width = np.asarray(function).shape[-2:]
        self.width = int(width)
        self.height = int(height)
        bsize = distribution2d_buffer_size(self.width, self.height)
        if buffer is None:
            buffer = np.zeros(bsize, dtype=io.get_real())
        elif buffer.size < bsize:
            raise ValueError(f"buffer too small for shape {self.shape}")
        self.buffer = buffer
        #: float: sum of the weights
        self.sum = build_distribution2d(function, self.buffer, self.width,
                                        self.height)

    @classmethod
    def from_buffer(cls, buffer, width, height):
        """wrap an already built buffer without rebuilding it"""
        d = cls.__new__(cls)
        d.width = int(width)
        d.height = int(height)
        d.buffer = buffer
        d.sum = None
        return d

    @property
    def shape(self):
        """(height, width)"""
        return self.height, self.width

    @property
    def marginal(self):
        return _split(self.buffer, self.width, self.height)[0]

    @property
    def rows(self):
        return _split(self.buffer, self.width, self.height)[1]

    @property
    def degenerate(self):
        """True if every weight was zero"""
        return not self.buffer[self.height] > 0

    def sample_continuous(self, s2d):
        return sample_continuous_distribution2d(self.buffer, self.width,
                                                self.height, s2d)

    def sample_discrete(self, s2d):
        return sample_discrete_distribution2d(self.buffer, self.width,
                                              self.height, s2d)

    def pdf_continuous(self, point):
        return pdf_continuous_distribution2d(self.buffer, self.width,
                                             self.height, point)

    def pdf_discrete(self, pixel):
        return pdf_discrete_distribution2d(self.buffer, self.width,
                                           self.height, pixel)
