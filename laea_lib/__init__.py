# -*- coding: utf-8 -*-
"""Lambert Azimuthal Equal-Area projection library.

A Python library implementing the Lambert Azimuthal Equal-Area map
projection on the sphere and on the ellipsoid, in its north polar,
south polar, equatorial and oblique aspects.

Usage:
    import math
    from laea_lib import LP, LaeaProjection, is_outside_domain

    with LaeaProjection(
        lat_0=math.radians(52.0),
        lon_0=math.radians(10.0),
        ellipsoid="GRS80",
    ) as proj:
        xy = proj.forward(LP(math.radians(2.35), math.radians(48.85)))
        if not is_outside_domain(xy):
            print(xy.x, xy.y)

    # Or the core transform on the unit sphere / ellipsoid
    from laea_lib import Ellipsoid, LambertAzimuthalEqualArea
    core = LambertAzimuthalEqualArea(phi0=0.0, ellipsoid=Ellipsoid.sphere())
    core.forward(LP(0.5, 0.25))
"""

__version__ = "0.1.0"

# Constants
from laea_lib.constants import EPS10

# Enums
from laea_lib.enums import AspectMode
from laea_lib.enums import EllipsoidName
from laea_lib.enums import ErrorCode

# Errors
from laea_lib.errors import InvalidParameterError
from laea_lib.errors import LaeaError
from laea_lib.errors import OutsideDomain
from laea_lib.errors import ProjectionReleasedError
from laea_lib.errors import ResourceExhaustedError
from laea_lib.errors import is_outside_domain

# Core
from laea_lib.authalic import AuthalicCoefficients
from laea_lib.interface import LaeaParameters
from laea_lib.interface import LaeaProjection
from laea_lib.laea import LaeaState
from laea_lib.laea import LambertAzimuthalEqualArea
from laea_lib.laea import resolve_state
from laea_lib.laea import setup_laea
from laea_lib.models import LP
from laea_lib.models import XY
from laea_lib.models import Ellipsoid
from laea_lib.models import ProjectionContext

__all__ = [
    # Constants
    "EPS10",
    "LP",
    "XY",
    # Enums
    "AspectMode",
    "AuthalicCoefficients",
    # Models
    "Ellipsoid",
    "EllipsoidName",
    "ErrorCode",
    # Errors
    "InvalidParameterError",
    "LaeaError",
    # Projection
    "LaeaParameters",
    "LaeaProjection",
    "LaeaState",
    "LambertAzimuthalEqualArea",
    "OutsideDomain",
    "ProjectionContext",
    "ProjectionReleasedError",
    "ResourceExhaustedError",
    "is_outside_domain",
    "resolve_state",
    "setup_laea",
]
