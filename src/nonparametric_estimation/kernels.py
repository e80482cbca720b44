"""
Kernel functions for nonparametric estimation.

All kernels are normalized, symmetric about zero, and support
vectorized operations (scalars work too). User kernels may be written
for scalars only; get_kernel applies them elementwise when needed.
"""

import functools
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

KernelFunction = Callable[[NDArray[np.floating]], NDArray[np.floating]]


def gaussian_kernel(u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Gaussian (normal) kernel.

    K(u) = (1/sqrt(2*pi)) * exp(-0.5 * u^2)

    Parameters
    ----------
    u : ndarray
        Scaled distances (x - x_i) / h

    Returns
    -------
    ndarray
        Kernel weights, strictly positive everywhere
    """
    return np.exp(-0.5 * np.square(u)) / np.sqrt(2 * np.pi)


def epanechnikov_kernel(u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Epanechnikov kernel.

    K(u) = 0.75 * (1 - u^2) for |u| <= 1, else 0

    Parameters
    ----------
    u : ndarray
        Scaled distances (x - x_i) / h

    Returns
    -------
    ndarray
        Kernel weights
    """
    u = np.asarray(u, dtype=np.float64)
    return np.where(np.abs(u) <= 1, 0.75 * (1 - u**2), 0.0)


def uniform_kernel(u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Uniform (rectangular) kernel.

    K(u) = 0.5 for |u| <= 1, else 0
    """
    return np.where(np.abs(u) <= 1, 0.5, 0.0)


def triangular_kernel(u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Triangular kernel.

    K(u) = 1 - |u| for |u| <= 1, else 0
    """
    abs_u = np.abs(np.asarray(u, dtype=np.float64))
    return np.where(abs_u <= 1, 1 - abs_u, 0.0)


KERNEL_FUNCTIONS: dict[str, KernelFunction] = {
    "gaussian": gaussian_kernel,
    "epanechnikov": epanechnikov_kernel,
    "uniform": uniform_kernel,
    "triangular": triangular_kernel,
}


def _elementwise(kernel: Callable) -> KernelFunction:
    """Wrap a user kernel so it also accepts arrays when written for scalars."""
    vectorized = np.vectorize(kernel, otypes=[np.float64])

    @functools.wraps(kernel)
    def wrapped(u):
        try:
            weights = np.asarray(kernel(u), dtype=np.float64)
        except (TypeError, ValueError):
            return vectorized(u)
        return np.broadcast_to(weights, np.shape(u))

    return wrapped


def get_kernel(kernel: str | KernelFunction) -> KernelFunction:
    """
    Get kernel function by name, or adapt a custom callable.

    Built-in kernels and numpy ufuncs are returned unchanged. Any other
    callable is tried on the whole array first; if it only works on
    scalars (raising TypeError or ValueError on an array), it is applied
    element by element through np.vectorize.

    Parameters
    ----------
    kernel : str or callable
        Kernel name or custom kernel function u -> weight

    Returns
    -------
    callable
        Kernel function accepting scalars and arrays
    """
    if callable(kernel):
        if isinstance(kernel, np.ufunc) or kernel in KERNEL_FUNCTIONS.values():
            return kernel
        return _elementwise(kernel)
    if kernel not in KERNEL_FUNCTIONS:
        valid = ", ".join(KERNEL_FUNCTIONS.keys())
        raise ValueError(f"Unknown kernel '{kernel}'. Valid options: {valid}")
    return KERNEL_FUNCTIONS[kernel]


def kernel_weights(
    x: ArrayLike,
    sample: NDArray[np.floating],
    bandwidth: float,
    kernel_func: KernelFunction,
) -> NDArray[np.floating]:
    """
    Compute kernel weights K((x - x_i) / h) of every sample point.

    Unlike a density, the weights are not divided by the bandwidth;
    callers that need 1/h scaling apply it themselves.

    Parameters
    ----------
    x : float or ndarray of shape (n_query,)
        Evaluation point(s)
    sample : ndarray of shape (n,)
        Sample points
    bandwidth : float
        Kernel bandwidth h > 0
    kernel_func : callable
        Univariate kernel function accepting arrays (see get_kernel)

    Returns
    -------
    ndarray of shape (n,) for scalar x, or (n_query, n)
        Kernel weight of each sample point for each query point
    """
    x = np.asarray(x, dtype=np.float64)
    scaled = (x[..., np.newaxis] - sample) / bandwidth
    return np.asarray(kernel_func(scaled), dtype=np.float64)
