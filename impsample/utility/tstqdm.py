# -*- coding: utf-8 -*-

# Copyright (c) 2019 Stephen Wasilewski
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""progress bar"""
import shutil
from datetime import datetime

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from tqdm import tqdm
from impsample import io


class TStqdm(tqdm):
    """tqdm progress bar with messages tagged by the calling class and
    indented by level, optionally owning an executor

    Parameters
    ----------
    instance: Any, optional
        the class name of instance prefixes every message
    tz: datetime.tzinfo, optional
    workers: Union[bool, str], optional
        'thread' for a ThreadPoolExecutor, True for a ProcessPoolExecutor,
        both capped by impsample.io.get_nproc(cap)
    position: int, optional
        nesting level (also the tqdm position)
    desc: str, optional
    ncols: int, optional
        limited to the terminal width
    cap: int, optional
        worker cap
    """

    def __init__(self, instance=None, tz=None, workers=False, position=0,
                 desc=None, ncols=100, cap=None, **kwargs):
        nproc = io.get_nproc(cap)
        if str(workers).lower() in ('thread', 't', 'threads'):
            pool = ThreadPoolExecutor(nproc)
        elif workers:
            pool = ProcessPoolExecutor(nproc)
        else:
            pool = None
        self._instance = instance
        self.loglevel = position
        self.ts = datetime.now(tz=tz).strftime("%H:%M:%S")
        self.pool = pool
        if pool is None:
            self.nworkers = 0
        else:
            self.nworkers = pool._max_workers
        ncols = min(ncols, shutil.get_terminal_size().columns)
        super().__init__(desc=self.ts_message(desc), position=position,
                         ncols=ncols, **kwargs)

    def ts_message(self, s):
        if self._instance is not None:
            p = type(self._instance).__name__
        else:
            p = ""
        if s is None:
            s = f"{p}"
        else:
            s = f"{p} {s}"
        return f"{' | ' * self.loglevel}{self.ts} {s}"

    def write(self, s, file=None, end="\n", nolock=False):
        super().write(self.ts_message(s), file, end, nolock)

    def set_description(self, desc=None, refresh=True):
        super().set_description(desc=self.ts_message(desc), refresh=refresh)

    def close(self):
        super().close()
        if self.pool is not None:
            self.pool.shutdown()
