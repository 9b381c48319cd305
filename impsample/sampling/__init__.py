# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""distributions, shape samplers and change of measure"""

__all__ = ['Distribution1D', 'Distribution2D', 'distribution1d',
           'distribution2d', 'measure', 'patterns', 'shapes']

from impsample.sampling.distribution1d import Distribution1D
from impsample.sampling.distribution2d import Distribution2D
from impsample.sampling import distribution1d, distribution2d
from impsample.sampling import measure, patterns, shapes
