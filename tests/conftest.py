# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides the reference ellipsoids and the reference
latitudes (one per aspect mode) shared by the projection tests.
"""

from __future__ import annotations

import math

import pytest

from laea_lib.models import Ellipsoid

# =============================================================================
# Constants
# =============================================================================

GRS80_A = 6_378_137.0
GRS80_RF = 298.257222101

#: Reference latitude (radians) of each aspect mode, plus a southern oblique
MODE_LATITUDES = [
    pytest.param(math.radians(90.0), id="north_polar"),
    pytest.param(math.radians(-90.0), id="south_polar"),
    pytest.param(0.0, id="equatorial"),
    pytest.param(math.radians(45.0), id="oblique_north"),
    pytest.param(math.radians(-30.0), id="oblique_south"),
]


# =============================================================================
# Ellipsoid Fixtures
# =============================================================================


@pytest.fixture
def sphere() -> Ellipsoid:
    """Unit sphere."""
    return Ellipsoid.sphere()


@pytest.fixture
def grs80() -> Ellipsoid:
    """GRS80 ellipsoid in meters."""
    return Ellipsoid.from_flattening(GRS80_A, GRS80_RF)


@pytest.fixture
def unit_grs80(grs80: Ellipsoid) -> Ellipsoid:
    """GRS80 shape scaled to a unit semi-major axis."""
    return Ellipsoid(a=1.0, es=grs80.es)


@pytest.fixture(params=["sphere", "ellipsoid"])
def earth_model(request, sphere: Ellipsoid, unit_grs80: Ellipsoid) -> Ellipsoid:
    """Both earth models, on a unit semi-major axis."""
    return sphere if request.param == "sphere" else unit_grs80


# =============================================================================
# Helpers
# =============================================================================


def angular_distance(lam1: float, phi1: float, lam2: float, phi2: float) -> float:
    """Great-circle distance on the unit sphere (radians)."""
    cos_d = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(
        phi2
    ) * math.cos(lam1 - lam2)
    return math.acos(max(-1.0, min(1.0, cos_d)))


def wrapped_difference(a: float, b: float) -> float:
    """Difference of two longitudes folded into [-pi, pi]."""
    return math.remainder(a - b, 2.0 * math.pi)
