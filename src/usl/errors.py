"""Exceptions raised while building measurements and fitting models."""

from __future__ import annotations


class USLError(ValueError):
    """Base class for every error raised by the package."""


class InvalidArgumentError(USLError):
    """A measurement pair did not hold exactly two values."""


class InsufficientDataError(USLError):
    """Too few measurements were supplied to fit a model."""


class FitDidNotConvergeError(USLError):
    """The least-squares solver stopped without meeting its tolerance."""
