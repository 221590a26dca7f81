# -*- coding: utf-8 -*-
"""Error handling for the Lambert Azimuthal Equal-Area projection.

Construction problems are raised as exceptions. Coordinates that fall
outside the projection domain are not raised: forward and inverse calls
return an :class:`OutsideDomain` record instead of a coordinate pair.
"""

from __future__ import annotations

from dataclasses import dataclass

from laea_lib.enums import ErrorCode


class LaeaError(Exception):
    """Base exception of the library.

    Attributes:
        message: Error message
        code: Failure category
    """

    code: ErrorCode = ErrorCode.INVALID_PARAMETER

    def __init__(self, message: str):
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        return f"[{self.code.value}] {self.message}"


class InvalidParameterError(LaeaError, ValueError):
    """A projection parameter is out of its valid range."""

    code = ErrorCode.INVALID_PARAMETER


class ResourceExhaustedError(LaeaError, MemoryError):
    """The authalic coefficient buffer could not be allocated."""

    code = ErrorCode.RESOURCE_EXHAUSTED


class ProjectionReleasedError(LaeaError, RuntimeError):
    """The projection was used after it had been torn down."""

    code = ErrorCode.RELEASED


@dataclass(frozen=True)
class OutsideDomain:
    """Result of a transform whose input has no valid counterpart.

    This is a data record returned in place of a coordinate, not an
    exception. It is falsy so that ``if result:`` skips failed points.

    Attributes:
        reason: Human-readable description of the singularity hit
        code: Always ``ErrorCode.OUTSIDE_DOMAIN``
    """

    reason: str
    code: ErrorCode = ErrorCode.OUTSIDE_DOMAIN

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.code.value}: {self.reason}"


def is_outside_domain(result: object) -> bool:
    """Return True if a transform result is a domain failure."""
    return isinstance(result, OutsideDomain)
