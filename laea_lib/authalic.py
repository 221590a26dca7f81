# -*- coding: utf-8 -*-
"""Authalic latitude conversions.

The authalic latitude ``xi`` of a geographic latitude ``phi`` is the
latitude on a sphere of equal surface area that encloses the same area
between it and the equator:

    q(phi)  = (1 - es) * (sin(phi) / (1 - es sin^2(phi)) + atanh(e sin(phi)) / e)
    sin(xi) = q(phi) / q(pi/2)

Both directions are evaluated as sine series in the third flattening
``n``:

    xi  = phi + sum_k C_k sin(2 k phi)
    phi = xi  + sum_k D_k sin(2 k xi)

summed with Clenshaw's recurrence. The coefficients are fitted once per
ellipsoid by a discrete sine transform of the exact relations. Truncated
to six terms the series are accurate to far below 1e-12 rad when
``|n| <= 0.01`` (every terrestrial ellipsoid). Flatter ellipsoids use the
closed form going forward; going back the series only seeds a Newton
solve of q(phi) = qp sin(xi), kept inside [-pi/2, pi/2] by bisection.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from laea_lib.constants import AUTHALIC_FIT_SAMPLES
from laea_lib.constants import AUTHALIC_NEWTON_MAX_ITER
from laea_lib.constants import AUTHALIC_NEWTON_TOL
from laea_lib.constants import AUTHALIC_SERIES_MAX_N
from laea_lib.constants import AUTHALIC_SERIES_ORDER
from laea_lib.constants import HALF_PI
from laea_lib.constants import SPHERE_ECCENTRICITY_EPS
from laea_lib.errors import InvalidParameterError
from laea_lib.errors import ProjectionReleasedError
from laea_lib.models import Ellipsoid

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Coefficient buffer
# ---------------------------------------------------------------------------


class AuthalicCoefficients:
    """Owned buffer of authalic series coefficients.

    Row 0 holds the geographic -> authalic coefficients, row 1 the
    authalic -> geographic ones. The buffer is released at most once;
    later ``release()`` calls are no-ops.
    """

    def __init__(self, table: NDArray[np.float64]):
        self._table: NDArray[np.float64] | None = table
        self._table.flags.writeable = False

    @property
    def released(self) -> bool:
        return self._table is None

    @property
    def order(self) -> int:
        return self._require().shape[1]

    @property
    def forward(self) -> NDArray[np.float64]:
        """Coefficients of xi - phi as a series in phi."""
        return self._require()[0]

    @property
    def inverse(self) -> NDArray[np.float64]:
        """Coefficients of phi - xi as a series in xi."""
        return self._require()[1]

    def release(self) -> None:
        if self._table is not None:
            logger.debug("Releasing authalic coefficient buffer")
            self._table = None

    def _require(self) -> NDArray[np.float64]:
        if self._table is None:
            raise ProjectionReleasedError(
                "Authalic coefficient buffer has already been released"
            )
        return self._table

    def __repr__(self) -> str:
        if self._table is None:
            return "AuthalicCoefficients(released)"
        return f"AuthalicCoefficients(order={self._table.shape[1]})"


# ---------------------------------------------------------------------------
# Exact relations
# ---------------------------------------------------------------------------


def _q(
    sinphi: float | NDArray[np.float64],
    e: float,
    one_es: float,
) -> float | NDArray[np.float64]:
    """q(phi) for scalars or arrays."""
    if e < SPHERE_ECCENTRICITY_EPS:
        return 2.0 * sinphi
    e_sinphi = e * sinphi
    return one_es * (sinphi / (1.0 - e_sinphi * e_sinphi) + np.arctanh(e_sinphi) / e)


def _newton_latitude(
    xi: float | NDArray[np.float64],
    phi: float | NDArray[np.float64],
    e: float,
    one_es: float,
    qp: float,
) -> NDArray[np.float64]:
    """Solve q(phi) = qp sin(xi) for ``phi``, starting from ``phi``.

    q is increasing on [-pi/2, pi/2], so every root stays bracketed there.
    Newton steps that leave the current bracket (or hit the flat slope at
    the poles) are replaced by a bisection step. Works on scalars or
    arrays.
    """
    target = qp * np.sin(xi)
    lo = np.full(np.shape(target), -HALF_PI)
    hi = np.full(np.shape(target), HALF_PI)
    phi = np.clip(np.array(phi, dtype=np.float64, copy=True), lo, hi)

    for _ in range(AUTHALIC_NEWTON_MAX_ITER):
        sinphi = np.sin(phi)
        e_sinphi = e * sinphi
        com = 1.0 - e_sinphi * e_sinphi
        residual = target - _q(sinphi, e, one_es)
        lo = np.where(residual > 0.0, phi, lo)
        hi = np.where(residual < 0.0, phi, hi)

        slope = 2.0 * one_es * np.cos(phi) / (com * com)
        with np.errstate(divide="ignore", invalid="ignore"):
            candidate = phi + residual / slope
        inside = np.isfinite(candidate) & (candidate > lo) & (candidate < hi)
        new_phi = np.where(inside, candidate, 0.5 * (lo + hi))
        settled = (residual == 0.0) | (candidate == phi)
        new_phi = np.where(settled, phi, new_phi)

        # Bisection steps only converge once the bracket itself is small.
        error = np.where(inside, np.abs(new_phi - phi), hi - lo)
        error = np.where(settled, 0.0, error)
        phi = new_phi
        if np.all(error <= AUTHALIC_NEWTON_TOL):
            break
    else:
        logger.debug(
            "Authalic latitude solver stopped after %d iterations",
            AUTHALIC_NEWTON_MAX_ITER,
        )
    return phi


def _clenshaw_sin2(coeffs: NDArray[np.float64], sinx: float, cosx: float) -> float:
    """Sum c_k sin(2 k x) for k = 1..len(coeffs)."""
    ar = 2.0 * (cosx - sinx) * (cosx + sinx)
    u0 = 0.0
    u1 = 0.0
    for c in coeffs[::-1]:
        u0, u1 = ar * u0 - u1 + c, u0
    return 2.0 * sinx * cosx * u0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_coefficients(
    n: float,
    order: int = AUTHALIC_SERIES_ORDER,
) -> AuthalicCoefficients:
    """Fit the authalic latitude series for third flattening ``n``.

    Args:
        n: Third flattening, in [0, 1)
        order: Number of sine terms per direction

    Returns:
        A freshly allocated coefficient buffer

    Raises:
        InvalidParameterError: If ``n`` or ``order`` is out of range
        MemoryError: If the buffer cannot be allocated
    """
    if not (0.0 <= n < 1.0):
        raise InvalidParameterError(f"Third flattening must be in [0, 1), got {n}")
    if not (0 < order < AUTHALIC_FIT_SAMPLES // 2):
        raise InvalidParameterError(
            f"Series order must be in [1, {AUTHALIC_FIT_SAMPLES // 2 - 1}], "
            f"got {order}"
        )

    es = 4.0 * n / ((1.0 + n) * (1.0 + n))
    e = math.sqrt(es)
    one_es = 1.0 - es
    qp = float(_q(1.0, e, one_es))

    # Midpoints of one period of the odd, pi-periodic residuals.
    m = AUTHALIC_FIT_SAMPLES
    theta = -0.5 * np.pi + (np.arange(m) + 0.5) * np.pi / m
    basis = np.sin(2.0 * np.outer(np.arange(1, order + 1), theta))

    xi = np.arcsin(np.clip(_q(np.sin(theta), e, one_es) / qp, -1.0, 1.0))
    phi = _newton_latitude(theta, theta, e, one_es, qp)

    table = np.empty((2, order), dtype=np.float64)
    table[0] = (2.0 / m) * (basis @ (xi - theta))
    table[1] = (2.0 / m) * (basis @ (phi - theta))

    logger.debug("Fitted %d-term authalic series for n=%.12g", order, n)
    return AuthalicCoefficients(table)


def authalic_lat_q(sinphi: float, ellipsoid: Ellipsoid) -> float:
    """q(phi) of the ellipsoid; ``authalic_lat_q(1.0, ell)`` is qp."""
    return float(_q(sinphi, ellipsoid.e, ellipsoid.one_es))


def authalic_lat(
    phi: float,
    sinphi: float,
    cosphi: float,
    coeffs: AuthalicCoefficients,
    ellipsoid: Ellipsoid,
    qp: float,
) -> float:
    """Geographic latitude -> authalic latitude (radians)."""
    if ellipsoid.n <= AUTHALIC_SERIES_MAX_N:
        return phi + _clenshaw_sin2(coeffs.forward, sinphi, cosphi)

    ratio = authalic_lat_q(sinphi, ellipsoid) / qp
    return math.asin(max(-1.0, min(1.0, ratio)))


def authalic_lat_inverse(
    xi: float,
    coeffs: AuthalicCoefficients,
    ellipsoid: Ellipsoid,
    qp: float,
) -> float:
    """Authalic latitude -> geographic latitude (radians)."""
    phi = xi + _clenshaw_sin2(coeffs.inverse, math.sin(xi), math.cos(xi))
    if ellipsoid.n <= AUTHALIC_SERIES_MAX_N:
        return phi
    return float(_newton_latitude(xi, phi, ellipsoid.e, ellipsoid.one_es, qp))
