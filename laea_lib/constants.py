# -*- coding: utf-8 -*-
"""Constants used throughout the laea_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers scattered across the codebase.
"""

import math

# -----------------------------------------------------------------------------
# Angles
# -----------------------------------------------------------------------------

#: pi / 2
HALF_PI: float = 0.5 * math.pi

#: pi / 4
QUARTER_PI: float = 0.25 * math.pi

# -----------------------------------------------------------------------------
# Tolerances
# -----------------------------------------------------------------------------

#: Shared tolerance for aspect classification, singularities and the antipode
EPS10: float = 1.0e-10

#: Below this value the polar ellipsoidal radius collapses to the pole itself
POLE_Q_EPS: float = 1.0e-15

#: Eccentricity below which the ellipsoid is treated as a sphere in q(phi)
SPHERE_ECCENTRICITY_EPS: float = 1.0e-7

# -----------------------------------------------------------------------------
# Authalic Latitude Series
# -----------------------------------------------------------------------------

#: Number of sine terms kept in each authalic latitude series
AUTHALIC_SERIES_ORDER: int = 6

#: Largest |n| for which the truncated series alone is accurate enough
AUTHALIC_SERIES_MAX_N: float = 0.01

#: Midpoint samples per period used to fit the series coefficients
AUTHALIC_FIT_SAMPLES: int = 64

#: Convergence tolerance (radians) of the bracketed Newton latitude solve
AUTHALIC_NEWTON_TOL: float = 1.0e-14

#: Iteration cap of the latitude solve (enough for pure bisection over [-pi/2, pi/2])
AUTHALIC_NEWTON_MAX_ITER: int = 100

# -----------------------------------------------------------------------------
# Batch Output
# -----------------------------------------------------------------------------

#: Value written to batch outputs for points outside the projection domain
HUGE_VAL: float = math.inf
