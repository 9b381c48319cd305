# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
import sys
from datetime import datetime, timezone

from impsample.utility.tstqdm import TStqdm


class Log(object):
    """timestamped messages and progress bars tagged with the class of the
    caller

    Parameters
    ----------
    logf: str, optional
        log file, messages go to stderr when None
    log: bool, optional
        if False, log() is silent
    loglevel: int, optional
        maximum level to log
    utc: bool, optional
        timestamps in UTC instead of local time
    """

    def __init__(self, logf=None, log=True, loglevel=10, utc=False):
        self._logf = logf
        self._dolog = log
        self._loglevel = loglevel
        if utc:
            self._tz = timezone.utc
        else:
            self._tz = None

    def log(self, instance, message, err=False, level=0):
        """print a message to the log file or stderr

        Parameters
        ----------
        instance: Any
            the class name of instance tags the message
        message: str, optional
            the message contents
        err: bool, optional
            print to stderr instead of the log file
        level: int, optional
            the nested level of the message, negative levels print without
            timestamp
        """
        if self._dolog and level <= self._loglevel:
            if level < 0:
                message = f"{type(instance).__name__}\t{message}"
            else:
                if level == 0:
                    tf = "%d-%b-%Y %H:%M:%S"
                else:
                    tf = "%H:%M:%S"
                ts = datetime.now(tz=self._tz).strftime(tf)
                indent = " | " * level
                message = f"{indent}{ts}\t{type(instance).__name__}\t{message}"
            if err or self._logf is None:
                print(message.replace("\t", "  "), file=sys.stderr)
            else:
                with open(self._logf, 'a') as f:
                    print(message, file=f)

    def progress_bar(self, instance, iterable=None, message=None,
                     total=None, level=0, workers=False):
        """generate a tqdm progress bar and concurrent.futures Executor class

        Parameters
        ----------
        instance: Any
            the class name of instance prefixes the bar
        iterable: Sequence, optional
            passed to tqdm
        message: str, optional
            description of the bar
        total: int, optional
            passed to tqdm
        level: int, optional
            nested level (bar position)
        workers: Union[bool, str], optional
            see TStqdm

        Returns
        -------
        TStqdm
            bars above loglevel (or with logging off) are disabled
        """
        disable = not self._dolog or level > self._loglevel
        return TStqdm(instance=instance, tz=self._tz, workers=workers,
                      position=level, desc=message, iterable=iterable,
                      total=total, leave=False, disable=disable)
