# -*- coding: utf-8 -*-
"""Forward / inverse round-trip tests over every aspect mode."""

import itertools
import math

import pytest

from laea_lib.errors import OutsideDomain
from laea_lib.laea import LambertAzimuthalEqualArea
from laea_lib.models import LP
from laea_lib.models import XY
from laea_lib.models import Ellipsoid
from tests.conftest import MODE_LATITUDES
from tests.conftest import angular_distance
from tests.conftest import wrapped_difference

MAX_CENTER_DISTANCE = 2.6
MAX_LATITUDE = math.radians(80.0)
TOLERANCE = 1e-9

_LONGITUDES = [math.radians(d) for d in range(-175, 180, 25)]
_LATITUDES = [math.radians(d) for d in range(-80, 81, 20)]


def sample_points(phi0: float) -> list[LP]:
    """Grid points within a safe distance of the projection center."""
    return [
        LP(lam, phi)
        for lam, phi in itertools.product(_LONGITUDES, _LATITUDES)
        if abs(phi) <= MAX_LATITUDE
        and angular_distance(0.0, phi0, lam, phi) <= MAX_CENTER_DISTANCE
    ]


@pytest.mark.parametrize("phi0", MODE_LATITUDES)
class TestRoundTrip:
    """inverse(forward(p)) recovers p."""

    def test_geographic(self, earth_model, phi0):
        """Geographic -> projected -> geographic."""
        points = sample_points(phi0)
        assert points

        with LambertAzimuthalEqualArea(phi0, earth_model) as proj:
            for lp in points:
                xy = proj.forward(lp)
                assert not isinstance(xy, OutsideDomain), lp

                back = proj.inverse(xy)
                assert not isinstance(back, OutsideDomain), lp
                assert back.phi == pytest.approx(lp.phi, abs=TOLERANCE)
                assert wrapped_difference(back.lam, lp.lam) == pytest.approx(
                    0.0, abs=TOLERANCE
                )

    def test_projected(self, earth_model, phi0):
        """Projected -> geographic -> projected, inside the disk."""
        with LambertAzimuthalEqualArea(phi0, earth_model) as proj:
            for x, y in itertools.product([-1.2, -0.4, 0.3, 1.1], repeat=2):
                lp = proj.inverse(XY(x, y))
                assert not isinstance(lp, OutsideDomain), (x, y)

                xy = proj.forward(lp)
                assert xy.x == pytest.approx(x, abs=TOLERANCE)
                assert xy.y == pytest.approx(y, abs=TOLERANCE)

    def test_center(self, earth_model, phi0):
        """The center maps to the origin and back."""
        with LambertAzimuthalEqualArea(phi0, earth_model) as proj:
            xy = proj.forward(LP(0.0, phi0))
            assert xy.x == pytest.approx(0.0, abs=1e-12)
            assert xy.y == pytest.approx(0.0, abs=1e-12)
            assert proj.inverse(xy).phi == pytest.approx(phi0, abs=TOLERANCE)


@pytest.mark.parametrize("phi0", MODE_LATITUDES)
@pytest.mark.parametrize("es", [0.5, 0.9, 0.99])
class TestFlattenedRoundTrip:
    """Round trips on ellipsoids far flatter than any terrestrial one."""

    def test_geographic(self, es, phi0):
        """Recovered latitudes stay within +/-90 deg and match the input."""
        ellipsoid = Ellipsoid(a=1.0, es=es)

        with LambertAzimuthalEqualArea(phi0, ellipsoid) as proj:
            for lp in sample_points(phi0):
                xy = proj.forward(lp)
                assert not isinstance(xy, OutsideDomain), lp

                back = proj.inverse(xy)
                assert not isinstance(back, OutsideDomain), lp
                assert -math.pi / 2 <= back.phi <= math.pi / 2
                assert back.phi == pytest.approx(lp.phi, abs=TOLERANCE)
                assert wrapped_difference(back.lam, lp.lam) == pytest.approx(
                    0.0, abs=TOLERANCE
                )
