# -*- coding: utf-8 -*-
# Copyright (c) 2020 Stephen Wasilewski, HSLU and EPFL
# =======================================================================
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
# =======================================================================

"""change of measure for densities and samples"""
import numpy as np

from impsample.translate import rcp, dot
from impsample.mapper import DualParaboloidMapper
from impsample.sample import (Measure, DirectionSample, require_measure)


def uv_to_spherical_angles_pdf(pdf):
    """density w.r.t. uv to density w.r.t. (phi, theta) of the spherical
    parameterization (phi = 2 pi u, theta = pi v)"""
    return np.asarray(pdf)/(2*np.pi*np.pi)


def spherical_angles_to_solid_angle_pdf(pdf, sintheta):
    """density w.r.t. (phi, theta) to density w.r.t. solid angle, 0 at the
    poles"""
    return (np.asarray(pdf)*rcp(sintheta))[()]


def solid_angle_to_area_pdf(pdf, sqrdist, ndot):
    """density w.r.t. solid angle to density w.r.t. area of a surface at
    squared distance sqrdist with cosine ndot between its normal and the
    direction (back facing surfaces have density 0)"""
    return (np.asarray(pdf)*np.maximum(0.0, ndot)*rcp(sqrdist))[()]


def area_to_solid_angle_pdf(pdf, sqrdist, ndot):
    """density w.r.t. area to density w.r.t. solid angle (0 if the surface
    faces away)"""
    ndot = np.asarray(ndot, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        pdf = np.asarray(pdf)*sqrdist/ndot
    return np.where(ndot <= 0, 0.0, pdf)[()]


def uv_to_solid_angle_pdf(pdf, jacobian):
    """density w.r.t. uv to density w.r.t. solid angle given the mapping
    jacobian at the sample (0 where the jacobian is 0)"""
    return (np.asarray(pdf)*rcp(jacobian))[()]


def dual_paraboloid_to_solid_angle_pdf(pdf, uv):
    """density w.r.t. the dual paraboloid uv square to density w.r.t. solid
    angle, 0 for uv outside both lobes"""
    return uv_to_solid_angle_pdf(pdf, DualParaboloidMapper().jacobian(uv))


def plane_to_direction(sample, mapper):
    """map a uv sample through mapper

    Parameters
    ----------
    sample: impsample.sample.PlaneSample
        uv values with density w.r.t. the unit square
    mapper: impsample.mapper.Mapper

    Returns
    -------
    DirectionSample
        invalid where the jacobian vanishes
    """
    require_measure(sample, Measure.PLANE)
    uv = sample.value
    xyz = mapper.uv2xyz(uv)
    jac = mapper.jacobian(uv)
    return DirectionSample.from_rcp(xyz, sample.rcp_density*jac)


def point_to_direction(sample, origin, normal):
    """direction from origin to a sampled surface point

    Parameters
    ----------
    sample: impsample.sample.PointSample
        (..., 3) points with density w.r.t. area
    origin: np.array
        (3,) or (..., 3) position seen from
    normal: np.array
        surface normal at the sampled points

    Returns
    -------
    DirectionSample
        invalid where the surface faces away from origin or the point
        coincides with origin
    """
    require_measure(sample, Measure.AREA)
    d = sample.value - np.asarray(origin, dtype=float)
    sqrdist = dot(d, d)
    with np.errstate(divide="ignore", invalid="ignore"):
        wi = d/np.sqrt(sqrdist)[..., None]
    wi = np.where((sqrdist > 0)[..., None], wi, 0.0)
    ndot = -dot(wi, normal)
    rcp_density = solid_angle_to_area_pdf(sample.rcp_density, sqrdist, ndot)
    return DirectionSample.from_rcp(wi, rcp_density)
