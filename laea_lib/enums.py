# -*- coding: utf-8 -*-
"""Enumerations for the Lambert Azimuthal Equal-Area projection.

This module contains the aspect modes of the projection, the error codes
attached to failures, and the catalogue of named reference ellipsoids.
"""

from enum import Enum

from laea_lib.constants import EPS10
from laea_lib.constants import HALF_PI


class AspectMode(str, Enum):
    """Point of the earth the projection is centered on.

    Attributes:
        NORTH_POLAR: Centered on the north pole
        SOUTH_POLAR: Centered on the south pole
        EQUATORIAL: Centered on a point of the equator
        OBLIQUE: Centered on any other latitude
    """

    NORTH_POLAR = "north_polar"
    SOUTH_POLAR = "south_polar"
    EQUATORIAL = "equatorial"
    OBLIQUE = "oblique"

    @property
    def is_polar(self) -> bool:
        """True for the two pole-centered aspects."""
        return self in (AspectMode.NORTH_POLAR, AspectMode.SOUTH_POLAR)

    @classmethod
    def from_latitude(cls, phi0: float) -> "AspectMode":
        """Classify a reference latitude (radians) into an aspect mode.

        The latitude is assumed to be already validated (|phi0| <= 90 deg
        within tolerance).

        Args:
            phi0: Reference latitude in radians

        Returns:
            The matching AspectMode
        """
        t = abs(phi0)
        if abs(t - HALF_PI) < EPS10:
            return cls.SOUTH_POLAR if phi0 < 0.0 else cls.NORTH_POLAR
        if t < EPS10:
            return cls.EQUATORIAL
        return cls.OBLIQUE


class ErrorCode(str, Enum):
    """Failure categories reported by the library.

    Attributes:
        INVALID_PARAMETER: A construction parameter is out of range
        RESOURCE_EXHAUSTED: The authalic coefficient buffer could not be built
        OUTSIDE_DOMAIN: A coordinate has no counterpart in the projection
        RELEASED: The projection (or its buffer) was already torn down
    """

    INVALID_PARAMETER = "invalid_parameter"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    OUTSIDE_DOMAIN = "outside_domain"
    RELEASED = "released"


class EllipsoidName(str, Enum):
    """Named reference ellipsoids.

    The enum values are the identifiers understood by ``pyproj.Geod``.

    Attributes:
        WGS_1984: World Geodetic System 1984
        GRS_1980: Geodetic Reference System 1980
        WGS_1972: World Geodetic System 1972
        INTERNATIONAL_1924: International (Hayford) 1924
        CLARKE_1866: Clarke 1866
        CLARKE_1880: Clarke 1880 (modified)
        BESSEL_1841: Bessel 1841
        AIRY_1830: Airy 1830
        KRASSOVSKY_1940: Krassovsky 1940
        SPHERE: Normal sphere (r = 6370997 m)
    """

    WGS_1984 = "WGS84"
    GRS_1980 = "GRS80"
    WGS_1972 = "WGS72"
    INTERNATIONAL_1924 = "intl"
    CLARKE_1866 = "clrk66"
    CLARKE_1880 = "clrk80"
    BESSEL_1841 = "bessel"
    AIRY_1830 = "airy"
    KRASSOVSKY_1940 = "krass"
    SPHERE = "sphere"

    @classmethod
    def normalize(cls, value: "str | EllipsoidName") -> "EllipsoidName":
        """Normalize an ellipsoid identifier to an EllipsoidName.

        Matches either the enum value (``"GRS80"``) or the member name
        (``"grs_1980"``), case-insensitively.

        Args:
            value: The ellipsoid identifier

        Returns:
            The corresponding EllipsoidName

        Raises:
            ValueError: If the identifier is not recognized
        """
        if isinstance(value, EllipsoidName):
            return value

        normalized = value.strip().lower()
        for ellipsoid in cls:
            if normalized in (ellipsoid.value.lower(), ellipsoid.name.lower()):
                return ellipsoid

        raise ValueError(f"Unknown ellipsoid: {value!r}")
