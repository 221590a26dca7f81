# -*- coding: utf-8 -*-
"""Tests for error handling module."""

import pytest

from laea_lib.enums import ErrorCode
from laea_lib.errors import InvalidParameterError
from laea_lib.errors import LaeaError
from laea_lib.errors import OutsideDomain
from laea_lib.errors import ProjectionReleasedError
from laea_lib.errors import ResourceExhaustedError
from laea_lib.errors import is_outside_domain
from laea_lib.models import XY


class TestLaeaError:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        ("exc_type", "code", "builtin"),
        [
            (InvalidParameterError, ErrorCode.INVALID_PARAMETER, ValueError),
            (ResourceExhaustedError, ErrorCode.RESOURCE_EXHAUSTED, MemoryError),
            (ProjectionReleasedError, ErrorCode.RELEASED, RuntimeError),
        ],
    )
    def test_codes_and_bases(self, exc_type, code, builtin):
        """Each exception carries its code and a matching builtin base."""
        exc = exc_type("boom")
        assert exc.code is code
        assert isinstance(exc, LaeaError)
        assert isinstance(exc, builtin)
        assert exc.message == "boom"

    def test_str(self):
        """Test string representation."""
        exc = InvalidParameterError("lat_0 out of range")
        assert str(exc) == "[invalid_parameter] lat_0 out of range"

    def test_raise_and_catch(self):
        """Test raising and catching as the base class."""
        with pytest.raises(LaeaError, match="lat_0"):
            raise InvalidParameterError("lat_0 out of range")


class TestOutsideDomain:
    """Tests for the OutsideDomain result record."""

    def test_creation(self):
        """Test creating a record."""
        failure = OutsideDomain("antipodal point")
        assert failure.reason == "antipodal point"
        assert failure.code is ErrorCode.OUTSIDE_DOMAIN

    def test_is_falsy(self):
        """Failures are falsy so they can be filtered out."""
        assert not OutsideDomain("x")
        assert XY(0.0, 0.0)

    def test_str(self):
        """Test string representation."""
        assert str(OutsideDomain("antipodal point")) == "outside_domain: antipodal point"

    def test_frozen(self):
        """Test that records are immutable."""
        failure = OutsideDomain("x")
        with pytest.raises(AttributeError):
            failure.reason = "y"  # type: ignore[misc]

    def test_is_outside_domain(self):
        """Test the helper predicate."""
        assert is_outside_domain(OutsideDomain("x"))
        assert not is_outside_domain(XY(0.0, 0.0))
        assert not is_outside_domain(None)
