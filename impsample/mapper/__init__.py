# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""mapper objects"""

__all__ = ['Mapper', 'SphericalMapper', 'HemisphericalMapper',
           'ParaboloidMapper', 'DualParaboloidMapper', 'mappers']

from impsample.mapper.mapper import Mapper
from impsample.mapper.sphericalmapper import SphericalMapper
from impsample.mapper.hemisphericalmapper import HemisphericalMapper
from impsample.mapper.paraboloidmapper import ParaboloidMapper
from impsample.mapper.dualparaboloidmapper import DualParaboloidMapper

#: mapper classes by name
mappers = {'spherical': SphericalMapper,
           'hemispherical': HemisphericalMapper,
           'paraboloid': ParaboloidMapper,
           'dualparaboloid': DualParaboloidMapper}
