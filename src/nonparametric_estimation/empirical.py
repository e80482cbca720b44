"""Empirical cumulative distribution function."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from nonparametric_estimation.validation import check_sample


def estimate_cdf(data: ArrayLike, x: ArrayLike) -> float | NDArray[np.floating]:
    """
    Empirical CDF of a sample.

    F_n(x) = #{i : x_i <= x} / n

    Parameters
    ----------
    data : array-like of shape (n,)
        Observations
    x : float or array-like
        Evaluation point(s)

    Returns
    -------
    float or ndarray
        Fraction of observations less than or equal to x, with the
        shape of x. NaN where x is NaN.

    Raises
    ------
    DomainError
        If data is empty or contains non-finite values
    """
    data = np.sort(check_sample(data))
    x = np.asarray(x, dtype=np.float64)

    counts = np.searchsorted(data, x, side="right")
    result = np.where(np.isnan(x), np.nan, counts / data.shape[0])

    if result.ndim == 0:
        return float(result)
    return result
