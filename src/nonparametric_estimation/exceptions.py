"""Exceptions raised by the nonparametric estimators."""

import numpy as np


class NonparametricError(Exception):
    """Base class for all errors raised by this package."""


class DomainError(NonparametricError, ValueError):
    """
    An input lies outside the estimator's domain.

    Raised for empty samples, non-finite data, non-positive bandwidths,
    invalid polynomial degrees and degenerate spline knots.
    """


class DimensionError(NonparametricError, ValueError):
    """Paired sequences have different lengths, or input is not one-dimensional."""


class LinearAlgebraError(NonparametricError, np.linalg.LinAlgError):
    """
    A linear system is singular or numerically degenerate.

    Local polynomial fits raise it per query point; grid evaluation
    catches it and marks that point as undefined.
    """
