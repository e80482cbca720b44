"""
Kernel density estimation.

The classical Parzen-Rosenblatt estimator:

    f(x) = (1 / (n h)) * sum_i K((x - x_i) / h)
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from nonparametric_estimation.kernels import KernelFunction, get_kernel, kernel_weights
from nonparametric_estimation.validation import check_bandwidth, check_sample


def kernel_density(
    data: ArrayLike,
    x: ArrayLike,
    bandwidth: float,
    kernel: str | KernelFunction = "uniform",
) -> float | NDArray[np.floating]:
    """
    Kernel density estimate at x.

    Parameters
    ----------
    data : array-like of shape (n,)
        Observations
    x : float or array-like of shape (n_query,)
        Evaluation point(s)
    bandwidth : float
        Bandwidth h > 0
    kernel : str or callable, default="uniform"
        Kernel function. Options: "gaussian", "epanechnikov", "uniform",
        "triangular", or a callable.

    Returns
    -------
    float or ndarray of shape (n_query,)
        Estimated density

    Raises
    ------
    DomainError
        If data is empty or the bandwidth is not positive
    """
    data = check_sample(data)
    h = check_bandwidth(bandwidth)
    kernel_func = get_kernel(kernel)

    weights = kernel_weights(x, data, h, kernel_func)
    density = np.sum(weights, axis=-1) / (data.shape[0] * h)

    if np.ndim(density) == 0:
        return float(density)
    return density
