# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""Console script for impsample."""
import os

import numpy as np

from clasp import click
import clasp.click_ext as clk

import impsample
from impsample import io, translate
from impsample.envmap import EnvironmentMap
from impsample.mapper import mappers
from impsample.rng import RandomStream, tile_seed
from impsample.sampling.measure import plane_to_direction
from impsample.utility import Log, pool_call


@clk.pretty_name("NPY, TSV, FLOATS,FLOATS")
def np_load(ctx, param, s):
    """read np array from command line

    trys np.load (numpy binary), then np.loadtxt (space seperated txt file)
    then split row by spaces and columns by commas.
    """
    if s is None:
        return s
    if s == '-':
        s = clk.tmp_stdin(ctx)
    if os.path.exists(s):
        try:
            ar = np.load(s)
        except ValueError:
            ar = np.loadtxt(s)
        if len(ar.shape) == 1:
            ar = ar.reshape(1, -1)
        return ar
    else:
        return np.array([[float(i) for i in j.split(',')] for j in s.split()])


def _get_mapper(mapper, dxyz):
    if dxyz is None:
        dxyz = (0, 0, 1)
    return mappers[mapper](dxyz=dxyz)


mapper_decs = [
    click.option("-mapper", default='spherical',
                 type=click.Choice(list(mappers.keys())),
                 help="parameterization of the sphere by the unit square"),
    click.option("-dxyz", default="0 0 1", callback=clk.split_float,
                 help="world direction of the mapping axis (+z)"),
    ]


@click.group(chain=True, invoke_without_command=True)
@click.option('-config', '-c', type=click.Path(exists=True),
              help="path of config file to load")
@click.option('--template/--no-template', is_eager=True,
              callback=clk.printconfigs,
              help="write default options to std out as config")
@click.option('-n', default=None, type=int,
              help='sets the environment variable IMPSAMPLE_PROC_CAP set to'
                   ' 0 to clear (parallel threads will use cpu_limit)')
@click.option('-real', default=None,
              type=click.Choice(['float32', 'float64']),
              help='sets the environment variable IMPSAMPLE_REAL, the '
                   'precision of tables and random streams')
@click.option('--opts', '-opts', is_flag=True,
              help="check parsed options")
@click.option('--debug', is_flag=True,
              help="show traceback on exceptions")
@click.version_option(version=impsample.__version__)
@click.pass_context
def main(ctx, config=None, n=None, real=None, **kwargs):
    """the impsample executable is a command line interface to the mappings
    and importance sampling tables of the impsample python package.

    commands are chained, so a table built by 'table' is used by a
    following 'draw'::

        impsample table -img sky.npy -outf sky.npz draw -width 64 -height 32

    to make a config file template::

        impsample --template > run.cfg
    """
    io.set_nproc(n)
    io.set_real(real)
    ctx.info_name = 'impsample'
    clk.get_config_chained(ctx, config, None, None, None)
    ctx.obj = {}


@main.command()
@click.option("-d", callback=np_load,
              help="a .npy file, a whitespace "
                   "seperated text file (can be - for stdin) or "
                   "entered as a string with commas  between components of a "
                   "point and spaces between rows.")
@click.option("-op", default='uv2xyz',
              type=click.Choice(['uv2xyz', 'xyz2uv', 'jacobian',
                                 'rcp_jacobian']),
              help="transformation: "
                   "'uv2xyz': mapper uv to world direction. "
                   "'xyz2uv': world direction to mapper uv. "
                   "'jacobian': solid angle per uv area at uv. "
                   "'rcp_jacobian': uv area per solid angle at direction.")
@click.option("-outf", default=None,
              help="if none, return to stdout, else save as text file")
@clk.shared_decs(mapper_decs)
@clk.shared_decs(clk.command_decs(impsample.__version__, wrap=True))
def transform(ctx, d=None, op='uv2xyz', outf=None, mapper='spherical',
              dxyz=None, **kwargs):
    """coordinate transformations through a mapper"""
    if d is None:
        click.echo("-d is required", err=True)
        raise click.Abort()
    m = _get_mapper(mapper, dxyz)
    if op in ('xyz2uv', 'rcp_jacobian'):
        if d.shape[1] != 3:
            click.echo(f"for {op} input must have 3 elem not "
                       f"{d.shape[1]}", err=True)
            raise click.Abort()
        d = translate.norm(d)
    elif d.shape[1] != 2:
        click.echo(f"for {op} input must have 2 elem not "
                   f"{d.shape[1]}", err=True)
        raise click.Abort()
    opfunc = {'uv2xyz': m.uv2xyz, 'xyz2uv': m.xyz2uv,
              'jacobian': m.jacobian, 'rcp_jacobian': m.rcp_jacobian}
    out = opfunc[op](d)
    if out.ndim == 1:
        out = out[:, None]
    if outf is None:
        for o in out:
            print(*o)
    else:
        np.savetxt(outf, out)


@main.command()
@click.option("-img", callback=np_load,
              help="weight image, (height, width) or (height, width, 3) as "
                   ".npy, or (height, width) as whitespace seperated text file"
                   " or string. rows are v, columns are u")
@click.option("-res", default=None, type=int,
              help="resample the image to the mapper frame size with this "
                   "width (must be a whole number multiple or fraction)")
@click.option("-outf", default="table.npz",
              help="destination of the table (.npz)")
@clk.shared_decs(mapper_decs)
@clk.shared_decs(clk.command_decs(impsample.__version__, wrap=True))
def table(ctx, img=None, res=None, outf="table.npz", mapper='spherical',
          dxyz=None, **kwargs):
    """build an importance sampling table from an image"""
    if img is None:
        click.echo("-img is required", err=True)
        raise click.Abort()
    m = _get_mapper(mapper, dxyz)
    try:
        envmap = EnvironmentMap(img, mapper=m, res=res)
    except ValueError as ex:
        click.echo(f"bad image: {ex}", err=True)
        raise click.Abort()
    if envmap.degenerate:
        click.echo("warning: image has no positive weights, every sample "
                   "will have zero density", err=True)
    io.table2file(envmap.buffer, envmap.width, envmap.height, outf)
    ctx.obj['envmap'] = envmap


def _draw_tile(viewport, envmap, size, frame):
    """samples for one tile with its own stream"""
    w, h = viewport[2:]
    stream = RandomStream(tile_seed(frame, viewport, size))
    uv = envmap.sample_uv(stream.get_float2((h, w)))
    s = plane_to_direction(uv, envmap.mapper)
    return np.hstack((uv.value.reshape(-1, 2), s.value.reshape(-1, 3),
                      np.reshape(s.density, (-1, 1))))


@main.command()
@click.option("-table", callback=clk.is_file,
              help=".npz table written by 'table', overrides the table from "
                   "a chained 'table' command (required if not chained)")
@click.option("-width", default=16,
              help="width of the sample raster")
@click.option("-height", default=8,
              help="height of the sample raster")
@click.option("-tile", default=8,
              help="side length of the square tiles of the sample raster, "
                   "each tile draws from its own stream")
@click.option("-frame", default=0,
              help="frame id, seeds differ between frames")
@click.option("-outf", default=None,
              help="if none, return to stdout, else save as text file")
@clk.shared_decs(mapper_decs)
@clk.shared_decs(clk.command_decs(impsample.__version__, wrap=True))
def draw(ctx, table=None, width=16, height=8, tile=8, frame=0, outf=None,
         mapper='spherical', dxyz=None, **kwargs):
    """draw directions from a table, one sample per raster pixel

    output rows (u, v, dx, dy, dz, density) are ordered by tile (row major)
    then by pixel within the tile and do not depend on the number of
    threads.
    """
    if table is not None:
        buffer, w, h = io.file2table(table)
        envmap = EnvironmentMap.from_table(buffer, w, h,
                                           _get_mapper(mapper, dxyz))
    elif 'envmap' in ctx.obj:
        envmap = ctx.obj['envmap']
    else:
        click.echo("-table is required when not chained with 'table'",
                   err=True)
        raise click.Abort()
    if tile < 1:
        click.echo("-tile must be positive", err=True)
        raise click.Abort()
    viewports = [(x, y, min(tile, width - x), min(tile, height - y))
                 for y in range(0, height, tile)
                 for x in range(0, width, tile)]
    results = pool_call(_draw_tile, viewports, envmap, (width, height),
                        frame, expandarg=False, desc="drawing tiles",
                        instance=envmap, disable=True)
    out = np.concatenate(results)
    if outf is None:
        for o in out:
            print(*o)
    else:
        np.savetxt(outf, out)


def check_mapper(mapper, res, atol=1e-6, itol=0.1):
    """mapping properties on a grid of pixel centers

    Parameters
    ----------
    mapper: impsample.mapper.Mapper
    res: int
        grid size (see Mapper.framesize)
    atol: float, optional
        tolerance of the pointwise checks
    itol: float, optional
        tolerance of the integral of the jacobian (midpoint rule) against
        mapper.solid_angle

    Returns
    -------
    dict
        check name: (worst value, passed)
    """
    xres, yres = mapper.framesize(res)
    uv = translate.uv_grid(xres, yres)
    xyz, sintheta = mapper.uv2xyz_sintheta(uv)
    jac = mapper.jacobian(uv)
    mask = jac > 0
    ruv, rsintheta = mapper.xyz2uv_sintheta(xyz[mask])
    length = np.max(np.abs(np.linalg.norm(xyz, axis=-1) - 1))
    recip = np.max(np.abs(ruv - uv[mask]))
    sinerr = np.max(np.abs(rsintheta - sintheta[mask]))
    consistency = np.max(np.abs(jac[mask]*mapper.rcp_jacobian(xyz[mask]) - 1))
    integral = np.sum(jac)/(xres*yres)
    return dict(unit_length=(length, length < atol),
                reciprocity=(recip, recip < atol),
                sintheta=(sinerr, sinerr < atol),
                jacobian_consistency=(consistency, consistency < atol),
                integral=(integral,
                          abs(integral - mapper.solid_angle) < itol))


@main.command()
@click.option("-mappers", "names", default=" ".join(mappers.keys()),
              callback=clk.split_str,
              help="mappers to check")
@click.option("-res", default=256,
              help="grid size along the longer side")
@click.option("-dxyz", default="0 0 1", callback=clk.split_float,
              help="world direction of the mapping axis (+z)")
@click.option("-atol", default=1e-6,
              help="tolerance for pointwise checks")
@click.option("--strict/--no-strict", default=False,
              help="abort if any check fails")
@clk.shared_decs(clk.command_decs(impsample.__version__, wrap=True))
def check(ctx, names=None, res=256, dxyz=None, atol=1e-6, strict=False,
          **kwargs):
    """run the mapping property checks (unit length, reciprocity, sin(theta)
    agreement, jacobian consistency, integration identity) and print a
    report"""
    log = Log()
    try:
        ms = [_get_mapper(m, dxyz) for m in names]
    except KeyError as ex:
        click.echo(f"unknown mapper: {ex}", err=True)
        raise click.Abort()
    failed = 0
    for m in log.progress_bar(None, ms, message="checking mappers"):
        log.log(m, f"checking with res={res}", err=True, level=1)
        for k, (v, ok) in check_mapper(m, res, atol).items():
            failed += not ok
            print(f"{m.name:<16}{k:<22}{v: .6e}\t{'PASS' if ok else 'FAIL'}")
    if strict and failed > 0:
        click.echo(f"{failed} checks failed", err=True)
        raise click.Abort()


@main.result_callback()
@click.pass_context
def printconfig(ctx, returnvalue, **kwargs):
    """callback to cleanup any temp files"""
    try:
        clk.tmp_clean(ctx)
    except Exception:
        pass


if __name__ == '__main__':
    main()
