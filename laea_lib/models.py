# -*- coding: utf-8 -*-
"""Core data models for the projection.

This module contains the coordinate value pairs, the reference
ellipsoid, and the projection context that carries the ellipsoid and
the forward / inverse / teardown slots wired by a projection setup.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated
from typing import Any
from typing import NamedTuple

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pyproj import Geod

from laea_lib.enums import EllipsoidName

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


class LP(NamedTuple):
    """A geographic coordinate (longitude, latitude) in radians."""

    lam: float
    phi: float


class XY(NamedTuple):
    """A projected coordinate (easting, northing) in linear units."""

    x: float
    y: float


# ---------------------------------------------------------------------------
# Ellipsoid
# ---------------------------------------------------------------------------


class Ellipsoid(BaseModel):
    """Reference ellipsoid of revolution.

    A squared eccentricity of zero describes a sphere of radius ``a``.

    Attributes:
        a: Semi-major axis (linear units)
        es: Squared eccentricity, in [0, 1)
    """

    model_config = ConfigDict(frozen=True)

    a: Annotated[float, Field(default=1.0, gt=0.0, description="Semi-major axis")]
    es: Annotated[
        float,
        Field(default=0.0, ge=0.0, lt=1.0, description="Squared eccentricity"),
    ]

    @field_validator("a", "es")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Reject NaN and infinite values.

        Raises:
            ValueError: If the value is not finite
        """
        if not math.isfinite(v):
            raise ValueError(f"Ellipsoid parameters must be finite, got {v}")
        return v

    # -----------------------------
    # Constructors
    # -----------------------------

    @classmethod
    def sphere(cls, radius: float = 1.0) -> Ellipsoid:
        """Sphere of the given radius."""
        return cls(a=radius, es=0.0)

    @classmethod
    def from_flattening(cls, a: float, inverse_flattening: float) -> Ellipsoid:
        """Build an ellipsoid from its semi-major axis and 1/f.

        An inverse flattening of zero means a sphere, as in EPSG usage.
        """
        if inverse_flattening == 0.0:
            return cls.sphere(a)
        f = 1.0 / inverse_flattening
        return cls(a=a, es=f * (2.0 - f))

    @classmethod
    def from_name(cls, name: str | EllipsoidName) -> Ellipsoid:
        """Look up a named ellipsoid in the PROJ catalogue.

        Args:
            name: EllipsoidName or any identifier it can normalize

        Returns:
            The matching Ellipsoid

        Raises:
            ValueError: If the name is not recognized
        """
        geod = Geod(ellps=EllipsoidName.normalize(name).value)
        return cls(a=geod.a, es=geod.es)

    # -----------------------------
    # Derived parameters
    # -----------------------------

    @property
    def is_sphere(self) -> bool:
        return self.es == 0.0

    @property
    def e(self) -> float:
        """Eccentricity."""
        return math.sqrt(self.es)

    @property
    def one_es(self) -> float:
        """1 - es."""
        return 1.0 - self.es

    @property
    def n(self) -> float:
        """Third flattening (a - b) / (a + b)."""
        b_over_a = math.sqrt(self.one_es)
        return (1.0 - b_over_a) / (1.0 + b_over_a)


# ---------------------------------------------------------------------------
# Projection context
# ---------------------------------------------------------------------------


@dataclass
class ProjectionContext:
    """Generic projection context.

    Holds what a projection setup reads (reference latitude, ellipsoid)
    and the slots it writes: ``fwd`` maps an ``LP`` to an ``XY``,
    ``inv`` maps an ``XY`` to an ``LP`` (both may return an
    ``OutsideDomain`` record instead), and ``destructor`` releases the
    projection's resources. ``opaque`` keeps the projection instance.
    """

    ellipsoid: Ellipsoid
    phi0: float = 0.0
    fwd: Callable[[LP], Any] | None = None
    inv: Callable[[XY], Any] | None = None
    destructor: Callable[[], None] | None = None
    opaque: Any = None

    @property
    def is_ready(self) -> bool:
        """True once a setup has wired the dispatch slots."""
        return self.fwd is not None and self.inv is not None

    def destroy(self) -> None:
        """Run the destructor once and clear every slot.

        Calling this on an already destroyed (or never wired) context
        does nothing.
        """
        destructor = self.destructor
        self.fwd = None
        self.inv = None
        self.destructor = None
        self.opaque = None
        if destructor is not None:
            destructor()
