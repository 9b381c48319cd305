#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for impsample.utility"""
import numpy as np

from impsample import io
from impsample.rng import spawn_streams
from impsample.utility import Log, TStqdm, pool_call


class Sampler(object):
    pass


def test_log_file(tmp_path):
    logf = str(tmp_path/"log.txt")
    log = Log(logf)
    log.log(Sampler(), "start")
    log.log(Sampler(), "nested", level=2)
    log.log(Sampler(), "hidden", level=20)
    with open(logf) as f:
        lines = f.read().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("\tSampler\tstart")
    assert lines[1].startswith(" |  | ")
    assert lines[1].endswith("\tSampler\tnested")


def test_log_stderr(capsys):
    Log().log(Sampler(), "message", level=-1)
    Log(log=False).log(Sampler(), "silent")
    err = capsys.readouterr().err
    assert err == "Sampler  message\n"


def test_tstqdm():
    with TStqdm(instance=Sampler(), total=3, desc="work",
                disable=True) as pbar:
        assert pbar.pool is None
        assert pbar.nworkers == 0
        assert "Sampler work" in pbar.ts_message("work")
        for i in range(3):
            pbar.update(1)


def test_tstqdm_threads():
    io.set_nproc(2)
    try:
        with TStqdm(workers='thread', total=1, disable=True) as pbar:
            assert pbar.nworkers == 2
            assert pbar.pool.submit(sum, (1, 2)).result() == 3
    finally:
        io.unset_nproc()


def draw(stream, n):
    return stream.get_float(n)


def test_pool_call():
    streams = spawn_streams(4, seed=2)
    results = pool_call(draw, streams, 10, expandarg=False, disable=True)
    expected = [s.get_float(10) for s in spawn_streams(4, seed=2)]
    assert len(results) == 4
    for a, b in zip(results, expected):
        assert np.array_equal(a, b)
    squares = pool_call(pow, [(i, 2) for i in range(5)], disable=True)
    assert squares == [0, 1, 4, 9, 16]
    serial = pool_call(pow, [(i, 2) for i in range(5)], workers=False,
                       disable=True)
    assert serial == squares
    assert pool_call(pow, [(3, 2)], cap=1, disable=True) == [9]


def test_progress_bar():
    log = Log(loglevel=1)
    with log.progress_bar(Sampler(), total=2, level=2) as pbar:
        assert pbar.disable
    bar = log.progress_bar(Sampler(), iterable=[1, 2, 3], message="m")
    assert list(bar) == [1, 2, 3]
