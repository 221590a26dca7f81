# -*- coding: utf-8 -*-
"""Tests for enums module."""

import math

import pytest

from laea_lib.constants import EPS10
from laea_lib.enums import AspectMode
from laea_lib.enums import EllipsoidName
from laea_lib.enums import ErrorCode


class TestAspectMode:
    """Tests for AspectMode enum."""

    def test_values(self):
        """Test enum values."""
        assert AspectMode.NORTH_POLAR.value == "north_polar"
        assert AspectMode.SOUTH_POLAR.value == "south_polar"
        assert AspectMode.EQUATORIAL.value == "equatorial"
        assert AspectMode.OBLIQUE.value == "oblique"

    @pytest.mark.parametrize(
        ("lat_deg", "expected"),
        [
            (90.0, AspectMode.NORTH_POLAR),
            (-90.0, AspectMode.SOUTH_POLAR),
            (0.0, AspectMode.EQUATORIAL),
            (45.0, AspectMode.OBLIQUE),
            (-45.0, AspectMode.OBLIQUE),
            (89.9, AspectMode.OBLIQUE),
            (0.1, AspectMode.OBLIQUE),
        ],
    )
    def test_from_latitude(self, lat_deg, expected):
        """Test classification of reference latitudes."""
        assert AspectMode.from_latitude(math.radians(lat_deg)) is expected

    def test_from_latitude_within_tolerance(self):
        """Latitudes within the shared tolerance snap to the special aspects."""
        assert AspectMode.from_latitude(math.pi / 2 - EPS10 / 2) is AspectMode.NORTH_POLAR
        assert AspectMode.from_latitude(-math.pi / 2 + EPS10 / 2) is AspectMode.SOUTH_POLAR
        assert AspectMode.from_latitude(EPS10 / 2) is AspectMode.EQUATORIAL
        assert AspectMode.from_latitude(-EPS10 / 2) is AspectMode.EQUATORIAL

    def test_from_latitude_outside_tolerance(self):
        """Latitudes just beyond the tolerance are oblique."""
        assert AspectMode.from_latitude(math.pi / 2 - 1e-9) is AspectMode.OBLIQUE
        assert AspectMode.from_latitude(1e-9) is AspectMode.OBLIQUE

    def test_is_polar(self):
        """Test the polar property."""
        assert AspectMode.NORTH_POLAR.is_polar
        assert AspectMode.SOUTH_POLAR.is_polar
        assert not AspectMode.EQUATORIAL.is_polar
        assert not AspectMode.OBLIQUE.is_polar


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_values(self):
        """Test enum values."""
        assert ErrorCode.INVALID_PARAMETER.value == "invalid_parameter"
        assert ErrorCode.RESOURCE_EXHAUSTED.value == "resource_exhausted"
        assert ErrorCode.OUTSIDE_DOMAIN.value == "outside_domain"
        assert ErrorCode.RELEASED.value == "released"


class TestEllipsoidName:
    """Tests for EllipsoidName enum."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("WGS84", EllipsoidName.WGS_1984),
            ("wgs84", EllipsoidName.WGS_1984),
            ("  GRS80 ", EllipsoidName.GRS_1980),
            ("grs_1980", EllipsoidName.GRS_1980),
            ("clrk66", EllipsoidName.CLARKE_1866),
            ("SPHERE", EllipsoidName.SPHERE),
            (EllipsoidName.BESSEL_1841, EllipsoidName.BESSEL_1841),
        ],
    )
    def test_normalize(self, value, expected):
        """Test case-insensitive normalization by value or member name."""
        assert EllipsoidName.normalize(value) is expected

    def test_normalize_unknown(self):
        """Test that unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown ellipsoid"):
            EllipsoidName.normalize("Mars2000")
