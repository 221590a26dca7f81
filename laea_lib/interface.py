# -*- coding: utf-8 -*-
"""Unified interface for Lambert Azimuthal Equal-Area transforms.

This module provides the primary entry point of the library. It follows
the usual projection pipeline:

1. Parameters are validated by a Pydantic model (`LaeaParameters`)
2. A `ProjectionContext` is wired by `setup_laea()`
3. Every call is prepared (central meridian, latitude range), dispatched
   through the context, and finalized (scaling, false origin)

The core transform in `laea_lib.laea` works on the unit ellipsoid with
the central meridian at zero; everything else happens here.
"""

from __future__ import annotations

import logging
import math
from typing import Annotated
from typing import Any

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from laea_lib.constants import EPS10
from laea_lib.constants import HALF_PI
from laea_lib.constants import HUGE_VAL
from laea_lib.enums import AspectMode
from laea_lib.errors import OutsideDomain
from laea_lib.errors import ProjectionReleasedError
from laea_lib.laea import LambertAzimuthalEqualArea
from laea_lib.laea import setup_laea
from laea_lib.models import LP
from laea_lib.models import XY
from laea_lib.models import Ellipsoid
from laea_lib.models import ProjectionContext

logger = logging.getLogger(__name__)


def adjlon(lam: float) -> float:
    """Wrap a longitude (radians) into [-pi, pi]."""
    if abs(lam) <= math.pi + 1e-12:
        return lam
    return math.remainder(lam, 2.0 * math.pi)


class LaeaParameters(BaseModel):
    """Parameters of a Lambert Azimuthal Equal-Area projection.

    Angles are in radians, offsets in the linear unit of the ellipsoid's
    semi-major axis. ``lat_0`` is range-checked when the projection is
    built, so that an out of range value raises InvalidParameterError.

    Attributes:
        lat_0: Latitude of the projection center
        lon_0: Central meridian
        x_0: False easting
        y_0: False northing
        k_0: Scale factor
        ellipsoid: Reference ellipsoid (or the name of one)
    """

    model_config = ConfigDict(frozen=True)

    lat_0: Annotated[float, Field(default=0.0, description="Center latitude (rad)")]
    lon_0: Annotated[float, Field(default=0.0, description="Central meridian (rad)")]
    x_0: Annotated[float, Field(default=0.0, description="False easting")]
    y_0: Annotated[float, Field(default=0.0, description="False northing")]
    k_0: Annotated[float, Field(default=1.0, gt=0.0, description="Scale factor")]
    ellipsoid: Annotated[
        Ellipsoid,
        Field(default_factory=Ellipsoid.sphere, description="Reference ellipsoid"),
    ]

    @field_validator("lat_0", "lon_0", "x_0", "y_0", "k_0")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Reject NaN and infinite values.

        Raises:
            ValueError: If the value is not finite
        """
        if not math.isfinite(v):
            raise ValueError(f"Projection parameters must be finite, got {v}")
        return v

    @field_validator("ellipsoid", mode="before")
    @classmethod
    def normalize_ellipsoid(cls, value: Any) -> Any:
        """Accept an ellipsoid name in place of an Ellipsoid."""
        if isinstance(value, str):
            return Ellipsoid.from_name(value)
        return value


class LaeaProjection:
    """Lambert Azimuthal Equal-Area projection with scaling and false origin.

    Example:
        >>> params = LaeaParameters(
        ...     lat_0=math.radians(52.0),
        ...     lon_0=math.radians(10.0),
        ...     x_0=4_321_000.0,
        ...     y_0=3_210_000.0,
        ...     ellipsoid="GRS80",
        ... )
        >>> with LaeaProjection(params) as proj:
        ...     xy = proj.forward(LP(math.radians(10.0), math.radians(52.0)))
        >>> xy
        XY(x=4321000.0, y=3210000.0)
    """

    def __init__(self, params: LaeaParameters | None = None, **kwargs: Any):
        if params is None:
            params = LaeaParameters(**kwargs)
        elif kwargs:
            params = LaeaParameters.model_validate({**params.model_dump(), **kwargs})
        self._params = params
        self._scale = params.ellipsoid.a * params.k_0
        self._ctx = ProjectionContext(ellipsoid=params.ellipsoid, phi0=params.lat_0)
        self._core: LambertAzimuthalEqualArea = setup_laea(self._ctx)

    @property
    def params(self) -> LaeaParameters:
        return self._params

    @property
    def context(self) -> ProjectionContext:
        return self._ctx

    @property
    def mode(self) -> AspectMode:
        return self._core.mode

    @property
    def is_ellipsoidal(self) -> bool:
        return self._core.is_ellipsoidal

    @property
    def closed(self) -> bool:
        return not self._ctx.is_ready

    # -------------------------------------------------------------------------
    # Single coordinates
    # -------------------------------------------------------------------------

    def forward(self, lp: LP | tuple[float, float]) -> XY | OutsideDomain:
        """Project a (longitude, latitude) pair in radians.

        Returns:
            (x, y) in linear units, or OutsideDomain
        """
        fwd = self._require(self._ctx.fwd)
        lam, phi = lp
        if abs(phi) > HALF_PI + EPS10:
            return OutsideDomain(f"latitude {phi!r} rad exceeds 90°")

        result = fwd(LP(adjlon(lam - self._params.lon_0), phi))
        if isinstance(result, OutsideDomain):
            return result
        return XY(
            self._scale * result.x + self._params.x_0,
            self._scale * result.y + self._params.y_0,
        )

    def inverse(self, xy: XY | tuple[float, float]) -> LP | OutsideDomain:
        """Unproject an (x, y) pair in linear units.

        Returns:
            (longitude, latitude) in radians, or OutsideDomain
        """
        inv = self._require(self._ctx.inv)
        x, y = xy
        result = inv(
            XY(
                (x - self._params.x_0) / self._scale,
                (y - self._params.y_0) / self._scale,
            )
        )
        if isinstance(result, OutsideDomain):
            return result
        return LP(adjlon(result.lam + self._params.lon_0), result.phi)

    # -------------------------------------------------------------------------
    # Arrays
    # -------------------------------------------------------------------------

    def forward_array(
        self,
        lam: ArrayLike,
        phi: ArrayLike,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Project broadcastable arrays of longitudes / latitudes (radians).

        Points outside the projection domain are set to ``inf``.
        """
        return self._transform_array(self.forward, lam, phi)

    def inverse_array(
        self,
        x: ArrayLike,
        y: ArrayLike,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Unproject broadcastable arrays of x / y.

        Points outside the projection domain are set to ``inf``.
        """
        return self._transform_array(self.inverse, x, y)

    def _transform_array(self, func, u: ArrayLike, v: ArrayLike):
        u_arr, v_arr = np.broadcast_arrays(
            np.asarray(u, dtype=np.float64),
            np.asarray(v, dtype=np.float64),
        )
        out_u = np.empty(u_arr.shape, dtype=np.float64)
        out_v = np.empty(v_arr.shape, dtype=np.float64)

        failures = 0
        for idx in np.ndindex(u_arr.shape):
            result = func((float(u_arr[idx]), float(v_arr[idx])))
            if isinstance(result, OutsideDomain):
                out_u[idx] = out_v[idx] = HUGE_VAL
                failures += 1
            else:
                out_u[idx], out_v[idx] = result

        if failures:
            logger.warning(
                "%d of %d points are outside the projection domain",
                failures,
                u_arr.size,
            )
        return out_u, out_v

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Tear down the projection. Safe to call more than once."""
        self._ctx.destroy()

    def __enter__(self) -> LaeaProjection:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LaeaProjection(mode={self.mode.value}, params={self._params!r})"

    @staticmethod
    def _require(slot):
        if slot is None:
            raise ProjectionReleasedError("Projection has already been torn down")
        return slot
