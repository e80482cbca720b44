"""
Input validation shared by the estimators.

Every helper returns a private float64 copy so estimators can sort or
reshape without touching caller data.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from sklearn.utils import check_array

from nonparametric_estimation.exceptions import DimensionError, DomainError


def check_sample(data: ArrayLike, name: str = "data") -> NDArray[np.floating]:
    """
    Validate a one-dimensional, non-empty, finite sample.

    A column vector of shape (n, 1) is accepted and flattened.

    Args:
        data: Observations.
        name: Argument name used in error messages.

    Returns:
        Private float64 copy of shape (n,).

    Raises:
        DimensionError: If the input is not one-dimensional.
        DomainError: If the sample is empty or contains NaN/inf.
    """
    try:
        array = check_array(
            data,
            ensure_2d=False,
            dtype=np.float64,
            ensure_all_finite=True,
            ensure_min_samples=0,
            copy=True,
            input_name=name,
        )
    except ValueError as exc:
        raise DomainError(f"Invalid {name}: {exc}") from exc

    if array.ndim == 2 and array.shape[1] == 1:
        array = array[:, 0]
    if array.ndim != 1:
        raise DimensionError(
            f"{name} must be one-dimensional, got shape {array.shape}"
        )
    if array.size == 0:
        raise DomainError(f"{name} must contain at least one observation")
    return array


def check_paired(
    X: ArrayLike,
    Y: ArrayLike,
    names: tuple[str, str] = ("X", "Y"),
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Validate two parallel samples of equal length."""
    X = check_sample(X, names[0])
    Y = check_sample(Y, names[1])
    if X.shape[0] != Y.shape[0]:
        raise DimensionError(
            f"{names[0]} and {names[1]} must have the same length, "
            f"got {X.shape[0]} and {Y.shape[0]}"
        )
    return X, Y


def check_events(events: ArrayLike, n_samples: int) -> NDArray[np.bool_]:
    """
    Validate event indicators of a censored sample.

    Booleans or 0/1 values are accepted; True (1) marks an observed event.
    """
    events = np.asarray(events)
    if events.ndim == 2 and events.shape[1] == 1:
        events = events[:, 0]
    if events.ndim != 1:
        raise DimensionError(
            f"events must be one-dimensional, got shape {events.shape}"
        )
    if events.shape[0] != n_samples:
        raise DimensionError(
            f"times and events must have the same length, "
            f"got {n_samples} and {events.shape[0]}"
        )
    if events.dtype != np.bool_:
        if not np.all(np.isin(events, (0, 1))):
            raise DomainError("events must be boolean or 0/1 indicators")
        events = events.astype(bool)
    return events.copy()


def check_bandwidth(bandwidth: float) -> float:
    """Validate a strictly positive, finite scalar bandwidth."""
    h = float(bandwidth)
    if not np.isfinite(h) or h <= 0:
        raise DomainError(f"bandwidth must be positive and finite, got {bandwidth}")
    return h


def check_degree(degree: int) -> int:
    """Validate a non-negative integer polynomial degree."""
    if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)):
        raise DomainError(f"degree must be a non-negative integer, got {degree!r}")
    if degree < 0:
        raise DomainError(f"degree must be a non-negative integer, got {degree}")
    return int(degree)
