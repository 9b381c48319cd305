# -*- coding: utf-8 -*-

# Copyright (c) 2019 Stephen Wasilewski
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================
from impsample import io
from impsample.utility.tstqdm import TStqdm


def pool_call(func, args, *fixed_args, cap=None, expandarg=True,
              desc="processing", workers="thread", instance=None,
              disable=False, **kwargs):
    """map func over a sequence of arguments on an executor while updating
    a progress bar. result is equivalent to::

         return [func(*arg, *fixed_args, **kwargs) for arg in args]

    with workers=False (or a worker cap of 1) calls run in the calling
    thread, in order.

    Parameters
    ----------
    func: callable
        called once per item of args
    args: Sequence
        per call arguments, each item is expanded with '*' unless expandarg
        is False
    fixed_args: Sequence
        arguments shared by all calls (passed after the per call arguments)
    cap: int, optional
        worker cap (see impsample.io.get_nproc)
    expandarg: bool, optional
    desc: str, optional
        label for progress bar
    workers: Union[bool, str], optional
        'thread' (default), True for a ProcessPool or False
    instance: Any, optional
        tags the progress bar
    disable: bool, optional
        hide the progress bar
    kwargs:
        passed to every call of func

    Returns
    -------
    list
        results in the order of args
    """
    if io.get_nproc(cap) < 2:
        workers = False
    if expandarg:
        calls = [(*arg, *fixed_args) for arg in args]
    else:
        calls = [(arg, *fixed_args) for arg in args]
    results = []
    with TStqdm(instance=instance, workers=workers, total=len(calls),
                cap=cap, desc=desc, disable=disable) as pbar:
        if pbar.pool is None:
            for call in calls:
                results.append(func(*call, **kwargs))
                pbar.update(1)
        else:
            futures = [pbar.pool.submit(func, *call, **kwargs)
                       for call in calls]
            for future in futures:
                results.append(future.result())
                pbar.update(1)
    return results
