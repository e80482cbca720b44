"""
Kernel regression of a conditional mean E[Y | X = x].

Includes the Nadaraya-Watson (local constant) estimator and local
polynomial regression solved through the weighted normal equations
with scipy.linalg.solve.
"""

import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import linalg

from nonparametric_estimation.exceptions import LinearAlgebraError
from nonparametric_estimation.kernels import KernelFunction, get_kernel, kernel_weights
from nonparametric_estimation.validation import (
    check_bandwidth,
    check_degree,
    check_paired,
)


def nadaraya_watson(
    X: ArrayLike,
    Y: ArrayLike,
    x: ArrayLike,
    bandwidth: float,
    kernel: str | KernelFunction = "gaussian",
) -> float | NDArray[np.floating]:
    """
    Nadaraya-Watson estimate of the regression function at x.

        y(x) = sum_i K((x - X_i) / h) * Y_i / sum_i K((x - X_i) / h)

    Parameters
    ----------
    X : array-like of shape (n,)
        Predictors
    Y : array-like of shape (n,)
        Responses
    x : float or array-like of shape (n_query,)
        Evaluation point(s)
    bandwidth : float
        Bandwidth h > 0
    kernel : str or callable, default="gaussian"
        Kernel function. Options: "gaussian", "epanechnikov", "uniform",
        "triangular", or a callable.

    Returns
    -------
    float or ndarray of shape (n_query,)
        Estimated conditional mean. NaN where every kernel weight
        vanishes, so a grid sweep can flag those points and continue.

    Raises
    ------
    DimensionError
        If X and Y differ in length
    DomainError
        If the sample is empty or the bandwidth is not positive
    """
    X, Y = check_paired(X, Y)
    h = check_bandwidth(bandwidth)
    kernel_func = get_kernel(kernel)

    weights = kernel_weights(x, X, h, kernel_func)
    weight_sums = np.sum(weights, axis=-1)
    supported = weight_sums > 0

    # Avoid division by zero
    safe_sums = np.where(supported, weight_sums, 1.0)
    y_pred = np.where(supported, np.sum(weights * Y, axis=-1) / safe_sums, np.nan)

    if y_pred.ndim == 0:
        return float(y_pred)
    return y_pred


def local_polynomial(
    X: ArrayLike,
    Y: ArrayLike,
    x: float,
    bandwidth: float,
    degree: int = 1,
    kernel: str | KernelFunction = "gaussian",
    return_coefficients: bool = False,
) -> float | NDArray[np.floating]:
    """
    Local polynomial estimate of the regression function at x.

    Solves the weighted normal equations (Z' W Z) beta = Z' W Y where
    W = diag(K((x - X_i) / h)) and Z[i, j] = (X_i - x)^j for j = 0..degree.
    The polynomial is centered at x, so beta[0] is the fitted value at x
    and beta[j] * j! estimates the j-th derivative there. Degree 0 is the
    Nadaraya-Watson estimator.

    Args:
        X: Predictors of shape (n,).
        Y: Responses of shape (n,).
        x: Scalar evaluation point.
        bandwidth: Bandwidth h > 0.
        degree: Polynomial degree (0 = local constant, 1 = local linear, ...).
        kernel: Kernel name or callable.
        return_coefficients: If True, return the whole beta vector
            instead of beta[0].

    Returns:
        Fitted value at x, or beta of shape (degree + 1,), the
        coefficients of powers of (X_i - x), not of X_i.

    Raises:
        LinearAlgebraError: If fewer than degree + 1 distinct points carry
            positive weight, or the normal matrix is singular or
            ill-conditioned at this x.
        DimensionError: If X and Y differ in length.
        DomainError: If the sample is empty, the bandwidth is not positive,
            or the degree is invalid.
    """
    X, Y = check_paired(X, Y)
    h = check_bandwidth(bandwidth)
    degree = check_degree(degree)
    kernel_func = get_kernel(kernel)
    x = float(x)

    weights = kernel_weights(x, X, h, kernel_func)

    n_support = np.unique(X[weights > 0]).shape[0]
    if n_support < degree + 1:
        raise LinearAlgebraError(
            f"Only {n_support} distinct point(s) with positive weight at x={x}; "
            f"degree {degree} needs at least {degree + 1}"
        )

    design = np.vander(X - x, degree + 1, increasing=True)
    ZtW = design.T * weights
    ZtWZ = ZtW @ design
    ZtWy = ZtW @ Y

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", linalg.LinAlgWarning)
            beta = linalg.solve(ZtWZ, ZtWy, assume_a="pos")
    except (linalg.LinAlgError, linalg.LinAlgWarning) as exc:
        raise LinearAlgebraError(
            f"Weighted normal equations are degenerate at x={x}: {exc}"
        ) from exc

    if not np.all(np.isfinite(beta)):
        raise LinearAlgebraError(f"Non-finite local polynomial fit at x={x}")

    if return_coefficients:
        return beta
    return float(beta[0])
