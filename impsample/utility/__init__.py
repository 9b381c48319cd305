# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""utilities"""
__all__ = ['pool_call', 'Log', 'TStqdm']

from impsample.utility.tstqdm import TStqdm
from impsample.utility.log import Log
from impsample.utility.utility import pool_call
