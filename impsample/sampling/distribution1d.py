# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""piecewise constant distributions over N cells stored in caller provided
CDF buffers of N + 1 reals.

A buffer holds cdf[0] = 0 and is normalized so cdf[N] is 1, or every entry
is 0 when the weights sum to zero (degenerate distribution). Sampling never
writes to the buffer, so a built buffer can be shared by any number of
readers."""
import numpy as np

from impsample import io
from impsample.sample import LineSample, DiscreteSample


def distribution1d_buffer_size(size):
    return size + 1


def _evaluate(function, idx, dtype):
    if callable(function):
        w = function(idx)
    else:
        w = function
    # copy, so the buffer is not read after it starts being written
    return np.array(np.broadcast_to(np.asarray(w, dtype=dtype), idx.shape))


def _prefix_normalize(weights, cdf):
    """write the normalized running sum of weights (last axis) into cdf,
    returns sum along the last axis"""
    cdf[..., 0] = 0
    np.cumsum(weights, axis=-1, out=cdf[..., 1:])
    total = cdf[..., -1].copy()
    mass = total > 0
    if np.ndim(total) == 0:
        if mass:
            cdf /= total
        else:
            cdf[:] = 0
    else:
        cdf[mass] /= total[mass, None]
        cdf[~mass] = 0
    return total


def build_distribution1d(function, cdf, size=None):
    """fill cdf with the distribution of the weights given by function

    All weights are evaluated before cdf is written, so function may read
    any entry of cdf (the buffer can hold precomputed weights).

    Parameters
    ----------
    function: Union[callable, np.array]
        weights, either a callable returning the weight of each index in
        an index array (results are broadcast, scalars are allowed) or an
        array of size weights
    cdf: np.array
        destination buffer, at least size + 1 long
    size: int, optional
        number of cells, defaults to len(cdf) - 1

    Returns
    -------
    float
        sum of the weights (before normalization)
    """
    if size is None:
        size = cdf.shape[0] - 1
    weights = _evaluate(function, np.arange(size), cdf.dtype)
    return _prefix_normalize(weights, cdf[:size + 1])[()]


def _search(cdf, size, s1d):
    """largest i in [0, size-1] with cdf[i] <= s1d"""
    i = np.searchsorted(cdf[:size], s1d, side='right') - 1
    return np.clip(i, 0, size - 1)


def sample_continuous_distribution1d(cdf, size, s1d):
    """sample a real value in [0, size) with the piecewise constant density

    Parameters
    ----------
    cdf: np.array
        built buffer
    size: int
        number of cells
    s1d: Union[float, np.array]
        uniform variate(s)

    Returns
    -------
    LineSample
        value i + fraction, density (cdf[i+1] - cdf[i]) * size,
        (0, 0) for a degenerate buffer
    """
    s1d = np.asarray(s1d, dtype=cdf.dtype)
    if cdf[size] == 0:
        zero = np.zeros(np.shape(s1d), dtype=cdf.dtype)[()]
        return LineSample(zero, zero)
    i = _search(cdf, size, s1d)
    p = cdf[i + 1] - cdf[i]
    fraction = np.zeros(np.shape(p), dtype=cdf.dtype)
    np.divide(s1d - cdf[i], p, out=fraction, where=p > 0)
    return LineSample(i + fraction, p * size)


def sample_discrete_distribution1d(cdf, size, s1d):
    """sample a cell index

    Returns
    -------
    DiscreteSample
        value i, density cdf[i+1] - cdf[i], (0, 0) for a degenerate buffer
    """
    s1d = np.asarray(s1d, dtype=cdf.dtype)
    if cdf[size] == 0:
        shape = np.shape(s1d)
        return DiscreteSample(np.zeros(shape, dtype=int)[()],
                              np.zeros(shape)[()])
    i = _search(cdf, size, s1d)
    return DiscreteSample(i, cdf[i + 1] - cdf[i])


def pdf_continuous_distribution1d(cdf, size, x):
    """density at real value x in [0, size)"""
    i = np.clip(np.floor(x).astype(int), 0, size - 1)
    return ((cdf[i + 1] - cdf[i]) * size)[()]


def pdf_discrete_distribution1d(cdf, i):
    """probability of cell i"""
    i = np.asarray(i, dtype=int)
    return (cdf[i + 1] - cdf[i])[()]


def cdf_discrete_distribution1d(cdf, i):
    """probability of a cell index lower than i"""
    return cdf[np.asarray(i, dtype=int)][()]


def is_discrete_cdf(cdf, size):
    """True if the buffer holds a distribution with mass"""
    return bool(cdf[size] > 0)


def _combine(cdfs, size):
    cdfs = np.asarray(cdfs)
    return np.mean(cdfs[:, :size + 1], axis=0)


def sample_combined_discrete_distribution1d(cdfs, size, s1d):
    """sample a cell index from the average of several distributions over
    the same cells

    Parameters
    ----------
    cdfs: Sequence[np.array]
        built buffers, each at least size + 1 long
    size: int
    s1d: Union[float, np.array]

    Returns
    -------
    DiscreteSample
        (0, 0) when every buffer is degenerate
    """
    return sample_discrete_distribution1d(_combine(cdfs, size), size, s1d)


def pdf_combined_discrete_distribution1d(cdfs, i):
    """probability of cell i under the average of cdfs"""
    cdfs = np.asarray(cdfs)
    i = np.asarray(i, dtype=int)
    return np.mean(cdfs[:, i + 1] - cdfs[:, i], axis=0)[()]


class Distribution1D(object):
    """piecewise constant distribution bound to a buffer

    Parameters
    ----------
    function: Union[callable, np.array]
        weights (see build_distribution1d)
    size: int, optional
        number of cells, required when function is a callable
    buffer: np.array, optional
        storage of at least size + 1 reals, allocated with
        impsample.io.get_real() when not given
    """

    def __init__(self, function, size=None, buffer=None):
        if size is None:
            if callable(function):
                raise ValueError("size is required with a weight function")
            size = np.asarray(function).shape[-1]
        self.size = int(size)
        if buffer is None:
            buffer = np.zeros(distribution1d_buffer_size(self.size),
                              dtype=io.get_real())
        elif buffer.shape[0] < distribution1d_buffer_size(self.size):
            raise ValueError(f"buffer too small for {self.size} cells")
        self.cdf = buffer
        #: float: sum of the weights
        self.sum = build_distribution1d(function, self.cdf, self.size)

    @property
    def degenerate(self):
        """True if every weight was zero"""
        return not is_discrete_cdf(self.cdf, self.size)

    def sample_continuous(self, s1d):
        return sample_continuous_distribution1d(self.cdf, self.size, s1d)

    def sample_discrete(self, s1d):
        return sample_discrete_distribution1d(self.cdf, self.size, s1d)

    def pdf_continuous(self, x):
        return pdf_continuous_distribution1d(self.cdf, self.size, x)

    def pdf_discrete(self, i):
        return pdf_discrete_distribution1d(self.cdf, i)
