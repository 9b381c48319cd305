# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""stratified sample patterns and uniform discrete sampling"""
import numpy as np

from impsample.sample import DiscreteSample


def jittered_distribution1d(count, s1d, i=None):
    """one jittered sample per stratum of [0, 1)

    Parameters
    ----------
    count: int
        number of strata
    s1d: Union[float, np.array]
        offsets within the strata
    i: Union[int, np.array], optional
        strata, defaults to arange(count) (s1d then has count entries)

    Returns
    -------
    np.array
        (i + s1d) / count
    """
    if i is None:
        i = np.arange(count)
    return (np.asarray(i) + np.asarray(s1d))/count


def jittered_distribution2d(width, height, s2d, i=None):
    """one jittered sample per cell of a width x height grid over the unit
    square, cell i is (i % width, i // width)

    Returns
    -------
    np.array
        (..., 2) samples ((x, y) + s2d) / (width, height)
    """
    if i is None:
        i = np.arange(width*height)
    i = np.asarray(i)
    xy = np.stack((i % width, i // width), -1)
    return (xy + np.asarray(s2d))/np.array((width, height))


def generate_jittered1d(count, stream):
    """count stratified samples drawing offsets from a RandomStream"""
    return jittered_distribution1d(count, stream.get_float(count))


def generate_jittered2d(width, height, stream):
    """width*height stratified samples in row major order drawing offsets
    from a RandomStream"""
    return jittered_distribution2d(width, height,
                                   stream.get_float2(width*height))


def uniform_discrete_sample(s1d, count):
    """uniformly select one of count elements

    Returns
    -------
    DiscreteSample
        index floor(s1d * count) in [0, count - 1] with probability
        1/count, (0, 0) for an empty set
    """
    shape = np.shape(s1d)
    if count == 0:
        return DiscreteSample(np.zeros(shape, dtype=int)[()],
                              np.zeros(shape)[()])
    i = np.clip(np.floor(np.asarray(s1d)*count).astype(int), 0, count - 1)
    return DiscreteSample(i[()], np.full(shape, 1/count)[()])


def uniform_discrete_pdf(count):
    return 1/count if count else 0.0
