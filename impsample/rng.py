# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""deterministic uniform variate streams"""
import numpy as np

from impsample import io


class RandomStream(object):
    """reproducible stream of uniform variates in [0, 1)

    every scalar consumes exactly one 64 bit draw of a PCG64 engine, so the
    stream position is always ``call_count`` and a stream can be moved to any
    position with discard() without generating the skipped values.

    Parameters
    ----------
    seed: int, optional
        reduced to an unsigned 32 bit value
    real: Union[str, np.dtype], optional
        float32 or float64, defaults to impsample.io.get_real()
    """

    def __init__(self, seed=0, real=None):
        self._real = io.get_real(real)
        self.set_seed(seed)

    @property
    def seed(self):
        """uint32 seed of the stream"""
        return self._seed

    @property
    def call_count(self):
        """number of draws since the stream was (re)seeded"""
        return self._call_count

    @property
    def real(self):
        """dtype of generated floats"""
        return self._real

    def set_seed(self, seed):
        """reseed the engine and reset call_count"""
        self._seed = int(seed) & 0xFFFFFFFF
        self._bitgen = np.random.PCG64(self._seed)
        self._call_count = 0

    def discard(self, n):
        """advance the engine by n draws without producing values"""
        n = int(n)
        if n < 0:
            raise ValueError("cannot discard a negative number of draws")
        self._bitgen.advance(n)
        self._call_count += n

    def _draw(self, n):
        raw = self._bitgen.random_raw(n)
        self._call_count += n
        return raw

    def _uniform(self, shape):
        n = int(np.prod(shape, dtype=int))
        raw = self._draw(n)
        if self._real == np.float32:
            f = ((raw >> np.uint64(40)).astype(np.float32) *
                 np.float32(2.0**-24))
        else:
            f = (raw >> np.uint64(11)).astype(np.float64) * 2.0**-53
        return f.reshape(shape)

    @staticmethod
    def _shape(size, k):
        if size is None:
            return (k,)
        return (*np.atleast_1d(size).astype(int), k)

    def get_float(self, size=None):
        """uniform variate(s)

        Parameters
        ----------
        size: Union[int, tuple], optional
            if None returns a single float, else an array of shape size

        Returns
        -------
        Union[float, np.array]
        """
        f = self._uniform(self._shape(size, 1))
        if size is None:
            return f[0]
        return f[..., 0]

    def get_float2(self, size=None):
        """pair(s) of variates, shape (2,) or (\\*size, 2)"""
        return self._uniform(self._shape(size, 2))

    def get_float3(self, size=None):
        """triple(s) of variates, shape (3,) or (\\*size, 3)"""
        return self._uniform(self._shape(size, 3))

    def get_uint(self):
        """raw 32 bit value (high bits of one draw)"""
        return int(self._draw(1)[0] >> np.uint64(32))

    def __call__(self, size=None):
        return self.get_float(size)

    def __repr__(self):
        return (f"{type(self).__name__}(seed={self.seed}, "
                f"call_count={self.call_count})")


def tile_seed(frame_id, viewport, image_size):
    """seed for the stream of an image tile

    Parameters
    ----------
    frame_id: int
    viewport: tuple
        (x, y, width, height) of the tile, only the origin is used
    image_size: tuple
        (width, height)

    Returns
    -------
    int
        uint32 seed
    """
    x, y = int(viewport[0]), int(viewport[1])
    w, h = int(image_size[0]), int(image_size[1])
    return (x + y*w + frame_id*w*h) & 0xFFFFFFFF


def thread_seed(seed, count, index):
    """seed of the index-th of count streams derived from a global seed"""
    return (seed*count + index) & 0xFFFFFFFF


def spawn_streams(count, seed=0, real=None):
    """independently owned streams for count workers, each worker should
    be handed its own stream

    Returns
    -------
    list
        count RandomStream instances
    """
    return [RandomStream(thread_seed(seed, count, i), real=real)
            for i in range(count)]
