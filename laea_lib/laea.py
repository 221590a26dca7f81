# -*- coding: utf-8 -*-
"""Lambert Azimuthal Equal-Area projection.

The projection is set up once per reference latitude ``phi0`` and
ellipsoid:

1. The aspect mode (north polar, south polar, equatorial, oblique) is
   chosen from ``phi0``.
2. Every mode- and model-dependent constant is computed and frozen into
   a :class:`LaeaState`.
3. The spherical or ellipsoidal forward / inverse pair is selected for
   the lifetime of the instance.

Forward and inverse calls only read that state, so a single instance can
be shared between threads. Inputs that land on a singularity (the point
antipodal to the center, or outside the projected disk) come back as an
:class:`~laea_lib.errors.OutsideDomain` record.

The ellipsoidal path reduces the ellipsoid to a sphere of equal area
through the authalic latitude; see :mod:`laea_lib.authalic`.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual.
  USGS Prof. Paper 1395, pp. 182-190.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import assert_never

from laea_lib.authalic import AuthalicCoefficients
from laea_lib.authalic import authalic_lat
from laea_lib.authalic import authalic_lat_inverse
from laea_lib.authalic import authalic_lat_q
from laea_lib.authalic import compute_coefficients
from laea_lib.constants import EPS10
from laea_lib.constants import HALF_PI
from laea_lib.constants import POLE_Q_EPS
from laea_lib.constants import QUARTER_PI
from laea_lib.enums import AspectMode
from laea_lib.errors import InvalidParameterError
from laea_lib.errors import OutsideDomain
from laea_lib.errors import ProjectionReleasedError
from laea_lib.errors import ResourceExhaustedError
from laea_lib.models import LP
from laea_lib.models import XY
from laea_lib.models import Ellipsoid
from laea_lib.models import ProjectionContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Instance state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LaeaState:
    """Constants of one projection instance.

    Fields that do not apply to the selected model / mode stay at 0.0
    and are never read. ``apa`` is only set on the ellipsoidal path.

    Attributes:
        mode: Aspect mode
        sinb1: sin of the (authalic) reference latitude, oblique only
        cosb1: cos of the (authalic) reference latitude, oblique only
        xmf: x scale factor (ellipsoidal equatorial / oblique)
        ymf: y scale factor (ellipsoidal equatorial / oblique)
        mmf: 0.5 / (1 - es) (ellipsoidal)
        qp: q at the pole (ellipsoidal)
        dd: x / y distortion correction (ellipsoidal)
        rq: sqrt(qp / 2), radius of the authalic sphere (ellipsoidal)
        apa: Authalic series coefficients (ellipsoidal)
    """

    mode: AspectMode
    sinb1: float = 0.0
    cosb1: float = 0.0
    xmf: float = 0.0
    ymf: float = 0.0
    mmf: float = 0.0
    qp: float = 0.0
    dd: float = 0.0
    rq: float = 0.0
    apa: AuthalicCoefficients | None = None

    @property
    def is_ellipsoidal(self) -> bool:
        return self.apa is not None


# ---------------------------------------------------------------------------
# Aspect & constant resolver
# ---------------------------------------------------------------------------


def resolve_state(phi0: float, ellipsoid: Ellipsoid) -> LaeaState:
    """Validate ``phi0``, pick the aspect mode and precompute constants.

    Args:
        phi0: Reference latitude in radians
        ellipsoid: Reference ellipsoid (``es == 0`` for a sphere)

    Returns:
        The fully populated instance state

    Raises:
        InvalidParameterError: If |phi0| exceeds 90 deg (beyond tolerance)
        ResourceExhaustedError: If the authalic buffer cannot be allocated
    """
    if not math.isfinite(phi0) or abs(phi0) > HALF_PI + EPS10:
        logger.error("Invalid value for lat_0: |lat_0| should be <= 90°, got %r", phi0)
        raise InvalidParameterError(
            f"Invalid value for lat_0: |lat_0| should be <= 90°, got {phi0!r} rad"
        )

    mode = AspectMode.from_latitude(phi0)

    if ellipsoid.is_sphere:
        if mode is AspectMode.OBLIQUE:
            return LaeaState(mode=mode, sinb1=math.sin(phi0), cosb1=math.cos(phi0))
        return LaeaState(mode=mode)

    qp = authalic_lat_q(1.0, ellipsoid)
    mmf = 0.5 / ellipsoid.one_es
    try:
        apa = compute_coefficients(ellipsoid.n)
    except MemoryError as exc:
        logger.error("Unable to allocate the authalic coefficient buffer")
        raise ResourceExhaustedError(
            "Unable to allocate the authalic coefficient buffer"
        ) from exc

    try:
        return _resolve_ellipsoidal(mode, phi0, ellipsoid, qp, mmf, apa)
    except Exception:
        apa.release()
        raise


def _resolve_ellipsoidal(
    mode: AspectMode,
    phi0: float,
    ellipsoid: Ellipsoid,
    qp: float,
    mmf: float,
    apa: AuthalicCoefficients,
) -> LaeaState:
    match mode:
        case AspectMode.NORTH_POLAR | AspectMode.SOUTH_POLAR:
            return LaeaState(mode=mode, mmf=mmf, qp=qp, dd=1.0, apa=apa)

        case AspectMode.EQUATORIAL:
            rq = math.sqrt(0.5 * qp)
            return LaeaState(
                mode=mode,
                xmf=1.0,
                ymf=0.5 * qp,
                mmf=mmf,
                qp=qp,
                dd=1.0 / rq,
                rq=rq,
                apa=apa,
            )

        case AspectMode.OBLIQUE:
            rq = math.sqrt(0.5 * qp)
            sinphi = math.sin(phi0)
            cosphi = math.cos(phi0)
            b1 = authalic_lat(phi0, sinphi, cosphi, apa, ellipsoid, qp)
            sinb1 = math.sin(b1)
            cosb1 = math.cos(b1)
            dd = cosphi / (math.sqrt(1.0 - ellipsoid.es * sinphi * sinphi) * rq * cosb1)
            return LaeaState(
                mode=mode,
                sinb1=sinb1,
                cosb1=cosb1,
                xmf=rq * dd,
                ymf=rq / dd,
                mmf=mmf,
                qp=qp,
                dd=dd,
                rq=rq,
                apa=apa,
            )

        case _:
            assert_never(mode)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _outside_domain(reason: str) -> OutsideDomain:
    logger.debug("Coordinate outside projection domain: %s", reason)
    return OutsideDomain(reason)


def _polar_sign(mode: AspectMode) -> float:
    """+1 for the south polar aspect, -1 for the north polar one."""
    return 1.0 if mode is AspectMode.SOUTH_POLAR else -1.0


def _polar_xy(k: float, lam: float, sign: float) -> XY:
    return XY(k * math.sin(lam), sign * k * math.cos(lam))


def _azimuthal_xy(denom: float, x_term: float, y_term: float) -> XY | OutsideDomain:
    """Spherical equatorial / oblique tail: scale both terms by sqrt(2/denom)."""
    if denom <= EPS10:
        return _outside_domain("point is antipodal to the projection center")
    k = math.sqrt(2.0 / denom)
    return XY(k * x_term, k * y_term)


def _asin_clamped(value: float) -> float:
    return math.asin(max(-1.0, min(1.0, value)))


# ---------------------------------------------------------------------------
# Projection instance
# ---------------------------------------------------------------------------


class LambertAzimuthalEqualArea:
    """Lambert Azimuthal Equal-Area projection on the unit sphere/ellipsoid.

    Coordinates are in radians on the geographic side and in units of
    the semi-major axis on the projected side; the central meridian is
    at longitude 0. See :class:`laea_lib.interface.LaeaProjection` for a
    facade that applies ``a``, ``lon_0`` and false origins.

    The instance owns the authalic coefficient buffer of the ellipsoidal
    path and releases it on :meth:`close` (or on leaving a ``with``
    block).

    Example:
        >>> proj = LambertAzimuthalEqualArea(phi0=0.0)
        >>> proj.forward(LP(0.0, 0.0))
        XY(x=0.0, y=0.0)
    """

    def __init__(self, phi0: float, ellipsoid: Ellipsoid | None = None):
        self._ellipsoid = ellipsoid if ellipsoid is not None else Ellipsoid.sphere()
        self._state = resolve_state(phi0, self._ellipsoid)
        self._phi0 = phi0
        self._closed = False

        if self._state.is_ellipsoidal:
            self._fwd = self._e_forward
            self._inv = self._e_inverse
        else:
            self._fwd = self._s_forward
            self._inv = self._s_inverse

        logger.debug(
            "LAEA set up: mode=%s, model=%s, phi0=%.12g",
            self._state.mode.value,
            "ellipsoidal" if self._state.is_ellipsoidal else "spherical",
            phi0,
        )

    # -- properties --------------------------------------------------------

    @property
    def phi0(self) -> float:
        return self._phi0

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def mode(self) -> AspectMode:
        return self._state.mode

    @property
    def state(self) -> LaeaState:
        return self._state

    @property
    def is_ellipsoidal(self) -> bool:
        return self._state.is_ellipsoidal

    @property
    def closed(self) -> bool:
        return self._closed

    # -- public API --------------------------------------------------------

    def forward(self, lp: LP | tuple[float, float]) -> XY | OutsideDomain:
        """Project a geographic coordinate.

        Args:
            lp: (longitude, latitude) in radians, relative to the
                central meridian

        Returns:
            The projected coordinate, or OutsideDomain when the point
            has no image (the antipode of the center)
        """
        self._check_open()
        lam, phi = lp
        return self._fwd(lam, phi)

    def inverse(self, xy: XY | tuple[float, float]) -> LP | OutsideDomain:
        """Unproject a planar coordinate.

        Args:
            xy: (x, y) in units of the semi-major axis

        Returns:
            The geographic coordinate in radians, or OutsideDomain when
            the point lies outside the projected disk
        """
        self._check_open()
        x, y = xy
        return self._inv(x, y)

    def close(self) -> None:
        """Release the coefficient buffer. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._state.apa is not None:
            self._state.apa.release()
        logger.debug("LAEA torn down (mode=%s)", self._state.mode.value)

    def __enter__(self) -> LambertAzimuthalEqualArea:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(phi0={self._phi0!r}, "
            f"mode={self._state.mode.value}, "
            f"ellipsoidal={self._state.is_ellipsoidal})"
        )

    def _check_open(self) -> None:
        if self._closed:
            raise ProjectionReleasedError("Projection has already been torn down")

    # -- spherical ---------------------------------------------------------

    def _s_forward(self, lam: float, phi: float) -> XY | OutsideDomain:
        st = self._state
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        coslam = math.cos(lam)

        match st.mode:
            case AspectMode.EQUATORIAL:
                return _azimuthal_xy(
                    1.0 + cosphi * coslam,
                    cosphi * math.sin(lam),
                    sinphi,
                )

            case AspectMode.OBLIQUE:
                return _azimuthal_xy(
                    1.0 + st.sinb1 * sinphi + st.cosb1 * cosphi * coslam,
                    cosphi * math.sin(lam),
                    st.cosb1 * sinphi - st.sinb1 * cosphi * coslam,
                )

            case AspectMode.NORTH_POLAR | AspectMode.SOUTH_POLAR:
                if abs(phi + self._phi0) < EPS10:
                    return _outside_domain("point is antipodal to the pole")
                sign = _polar_sign(st.mode)
                z = QUARTER_PI - 0.5 * phi
                k = 2.0 * (math.cos(z) if sign > 0.0 else math.sin(z))
                return _polar_xy(k, lam, sign)

            case _:
                assert_never(st.mode)

    def _s_inverse(self, x: float, y: float) -> LP | OutsideDomain:
        st = self._state
        rh = math.hypot(x, y)
        if rh * 0.5 > 1.0:
            return _outside_domain("point lies outside the projected disk")
        z = 2.0 * math.asin(rh * 0.5)

        match st.mode:
            case AspectMode.EQUATORIAL:
                sinz = math.sin(z)
                cosz = math.cos(z)
                phi = 0.0 if abs(rh) <= EPS10 else _asin_clamped(y * sinz / rh)
                x *= sinz
                y = cosz * rh

            case AspectMode.OBLIQUE:
                sinz = math.sin(z)
                cosz = math.cos(z)
                if abs(rh) <= EPS10:
                    phi = self._phi0
                else:
                    phi = _asin_clamped(cosz * st.sinb1 + y * sinz * st.cosb1 / rh)
                x *= sinz * st.cosb1
                y = (cosz - math.sin(phi) * st.sinb1) * rh

            case AspectMode.NORTH_POLAR:
                y = -y
                phi = HALF_PI - z

            case AspectMode.SOUTH_POLAR:
                phi = z - HALF_PI

            case _:
                assert_never(st.mode)

        if y == 0.0 and not st.mode.is_polar:
            return LP(0.0, phi)
        return LP(math.atan2(x, y), phi)

    # -- ellipsoidal -------------------------------------------------------

    def _e_forward(self, lam: float, phi: float) -> XY | OutsideDomain:
        st = self._state
        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        xi = authalic_lat(phi, sinphi, cosphi, st.apa, self._ellipsoid, st.qp)
        sinb = math.sin(xi)
        cosb = math.cos(xi)
        q = sinb * st.qp

        match st.mode:
            case AspectMode.OBLIQUE:
                b = 1.0 + st.sinb1 * sinb + st.cosb1 * cosb * coslam
                y_term = st.cosb1 * sinb - st.sinb1 * cosb * coslam
            case AspectMode.EQUATORIAL:
                b = 1.0 + cosb * coslam
                y_term = sinb
            case AspectMode.NORTH_POLAR:
                b = HALF_PI + phi
                q = st.qp - q
            case AspectMode.SOUTH_POLAR:
                b = phi - HALF_PI
                q = st.qp + q
            case _:
                assert_never(st.mode)

        if abs(b) < EPS10:
            return _outside_domain("point is antipodal to the projection center")

        if st.mode.is_polar:
            if q < POLE_Q_EPS:
                return XY(0.0, 0.0)
            return _polar_xy(math.sqrt(q), lam, _polar_sign(st.mode))

        k = math.sqrt(2.0 / b)
        return XY(st.xmf * k * cosb * sinlam, st.ymf * k * y_term)

    def _e_inverse(self, x: float, y: float) -> LP | OutsideDomain:
        st = self._state

        match st.mode:
            case AspectMode.EQUATORIAL | AspectMode.OBLIQUE:
                x /= st.dd
                y *= st.dd
                rho = math.hypot(x, y)
                if rho < EPS10:
                    return LP(0.0, self._phi0)
                asin_argument = 0.5 * rho / st.rq
                if asin_argument > 1.0:
                    return _outside_domain("point lies outside the projected disk")
                c = 2.0 * math.asin(asin_argument)
                cos_c = math.cos(c)
                sin_c = math.sin(c)
                x *= sin_c
                if st.mode is AspectMode.OBLIQUE:
                    ab = cos_c * st.sinb1 + y * sin_c * st.cosb1 / rho
                    y = rho * st.cosb1 * cos_c - y * st.sinb1 * sin_c
                else:
                    ab = y * sin_c / rho
                    y = rho * cos_c

            case AspectMode.NORTH_POLAR | AspectMode.SOUTH_POLAR:
                if st.mode is AspectMode.NORTH_POLAR:
                    y = -y
                q = x * x + y * y
                if q == 0.0:
                    return LP(0.0, self._phi0)
                ab = 1.0 - q / st.qp
                if st.mode is AspectMode.SOUTH_POLAR:
                    ab = -ab
                if abs(ab) > 1.0 + EPS10:
                    return _outside_domain("point lies outside the projected disk")

            case _:
                assert_never(st.mode)

        lam = math.atan2(x, y)
        phi = authalic_lat_inverse(_asin_clamped(ab), st.apa, self._ellipsoid, st.qp)
        return LP(lam, phi)


# ---------------------------------------------------------------------------
# Context wiring
# ---------------------------------------------------------------------------


def setup_laea(ctx: ProjectionContext) -> LambertAzimuthalEqualArea:
    """Build a projection from a context and wire its dispatch slots.

    On failure the exception propagates and ``ctx`` is left untouched.

    Args:
        ctx: Context providing ``phi0`` and the ellipsoid

    Returns:
        The projection instance now referenced by ``ctx.opaque``
    """
    projection = LambertAzimuthalEqualArea(ctx.phi0, ctx.ellipsoid)
    ctx.fwd = projection.forward
    ctx.inv = projection.inverse
    ctx.destructor = projection.close
    ctx.opaque = projection
    return projection
