"""
Sklearn-compatible kernel regression estimators.

Thin fit/predict wrappers around the Nadaraya-Watson and local
polynomial estimators for one-dimensional predictors. Prediction
returns NaN at query points where the estimate is undefined.
"""

from functools import partial

import numpy as np
from numpy.typing import NDArray
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_is_fitted, validate_data

from nonparametric_estimation.exceptions import DimensionError, LinearAlgebraError
from nonparametric_estimation.grid import evaluate_on_grid
from nonparametric_estimation.kernels import KernelFunction, get_kernel, kernel_weights
from nonparametric_estimation.regression import local_polynomial, nadaraya_watson
from nonparametric_estimation.validation import check_bandwidth, check_degree


def _as_column(X: NDArray) -> NDArray:
    X = np.asarray(X)
    if X.ndim == 1:
        return X.reshape(-1, 1)
    return X


class KernelRegression(RegressorMixin, BaseEstimator):
    """
    Base class for kernel regression estimators.

    Parameters
    ----------
    kernel : str or callable, default="gaussian"
        Kernel function. Options: "gaussian", "epanechnikov", "uniform",
        "triangular", or a callable.

    bandwidth : float, default=1.0
        Bandwidth h > 0

    Attributes
    ----------
    X_ : ndarray of shape (n_samples,)
        Training predictors

    y_ : ndarray of shape (n_samples,)
        Training targets

    bandwidth_ : float
        Validated bandwidth

    n_features_in_ : int
        Number of features seen during fit (always 1)
    """

    def __init__(
        self,
        kernel: str | KernelFunction = "gaussian",
        bandwidth: float = 1.0,
    ):
        self.kernel = kernel
        self.bandwidth = bandwidth

    def _validate_data_fit(
        self, X: NDArray, y: NDArray
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Validate and convert input data for fitting."""
        X, y = validate_data(self, _as_column(X), y, y_numeric=True, dtype=np.float64)
        if X.shape[1] != 1:
            raise DimensionError(
                f"Only one-dimensional predictors are supported, got {X.shape[1]} features"
            )
        return X[:, 0], y.astype(np.float64)

    def _validate_data_predict(self, X: NDArray) -> NDArray[np.floating]:
        """Validate and convert input data for prediction."""
        check_is_fitted(self)
        X = validate_data(self, _as_column(X), dtype=np.float64, reset=False)
        return X[:, 0]

    def fit(self, X: NDArray, y: NDArray) -> "KernelRegression":
        """
        Fit the kernel regression model.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, 1)
            Training data
        y : array-like of shape (n_samples,)
            Target values

        Returns
        -------
        self
            Fitted estimator
        """
        X, y = self._validate_data_fit(X, y)

        self.X_ = X
        self.y_ = y
        self.bandwidth_ = check_bandwidth(self.bandwidth)
        self.kernel_func_ = get_kernel(self.kernel)

        return self

    def predict(self, X: NDArray) -> NDArray[np.floating]:
        """
        Predict using the kernel regression model.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, 1)
            Samples to predict

        Returns
        -------
        y_pred : ndarray of shape (n_samples,)
            Predicted values
        """
        raise NotImplementedError("Subclasses must implement predict()")


class NadarayaWatson(KernelRegression):
    """
    Nadaraya-Watson kernel regression estimator.

        y(x) = sum K((x - x_i) / h) * y_i / sum K((x - x_i) / h)

    Examples
    --------
    >>> import numpy as np
    >>> from nonparametric_estimation import NadarayaWatson
    >>> X = np.random.uniform(-3, 3, 100)
    >>> y = np.sin(X) + 0.1 * np.random.randn(100)
    >>> model = NadarayaWatson(kernel="epanechnikov", bandwidth=0.5).fit(X, y)
    >>> predictions = model.predict(np.linspace(-3, 3, 50))
    """

    def predict(self, X: NDArray) -> NDArray[np.floating]:
        """
        Predict using Nadaraya-Watson estimator.

        Points where every kernel weight is zero are predicted as NaN.
        """
        X = self._validate_data_predict(X)
        return nadaraya_watson(self.X_, self.y_, X, self.bandwidth_, self.kernel_func_)

    def get_weights(self, X: NDArray) -> NDArray[np.floating]:
        """
        Get kernel weights for prediction points.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, 1)
            Points to get weights for

        Returns
        -------
        weights : ndarray of shape (n_samples, n_train)
            Normalized kernel weights (all zero rows stay zero)
        """
        X = self._validate_data_predict(X)

        weights = kernel_weights(X, self.X_, self.bandwidth_, self.kernel_func_)

        # Normalize
        weight_sums = np.sum(weights, axis=1, keepdims=True)
        weight_sums = np.where(weight_sums > 0, weight_sums, 1.0)
        return weights / weight_sums


class LocalPolynomialRegression(KernelRegression):
    """
    Local polynomial kernel regression estimator.

    Fits a weighted polynomial locally at each prediction point.
    Order 0 is equivalent to Nadaraya-Watson; order 1 is local linear.

    Parameters
    ----------
    kernel : str or callable, default="gaussian"
        Kernel function.

    bandwidth : float, default=1.0
        Bandwidth h > 0

    order : int, default=1
        Polynomial order (0=constant, 1=linear, 2=quadratic, ...)

    n_jobs : int or None, default=None
        Number of parallel workers used across prediction points

    Examples
    --------
    >>> import numpy as np
    >>> from nonparametric_estimation import LocalPolynomialRegression
    >>> X = np.random.uniform(-2, 2, 100)
    >>> y = X**2 + 0.1 * np.random.randn(100)
    >>> model = LocalPolynomialRegression(order=2, bandwidth=0.5).fit(X, y)
    >>> predictions = model.predict(X[:5])
    """

    def __init__(
        self,
        kernel: str | KernelFunction = "gaussian",
        bandwidth: float = 1.0,
        order: int = 1,
        n_jobs: int | None = None,
    ):
        super().__init__(kernel=kernel, bandwidth=bandwidth)
        self.order = order
        self.n_jobs = n_jobs

    def fit(self, X: NDArray, y: NDArray) -> "LocalPolynomialRegression":
        """
        Fit the local polynomial regression model.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, 1)
            Training data
        y : array-like of shape (n_samples,)
            Target values

        Returns
        -------
        self
            Fitted estimator
        """
        super().fit(X, y)
        self.order_ = check_degree(self.order)
        return self

    def _point_estimator(self, return_coefficients: bool = False):
        return partial(
            local_polynomial,
            self.X_,
            self.y_,
            bandwidth=self.bandwidth_,
            degree=self.order_,
            kernel=self.kernel_func_,
            return_coefficients=return_coefficients,
        )

    def predict(self, X: NDArray) -> NDArray[np.floating]:
        """
        Predict using local polynomial regression.

        Points where the local fit is degenerate are predicted as NaN.
        """
        X = self._validate_data_predict(X)
        return evaluate_on_grid(self._point_estimator(), X, n_jobs=self.n_jobs)

    def predict_with_derivatives(
        self, X: NDArray
    ) -> tuple[NDArray[np.floating], NDArray[np.floating] | None]:
        """
        Predict with slope estimates.

        Only available when order >= 1.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, 1)
            Samples to predict

        Returns
        -------
        y_pred : ndarray of shape (n_samples,)
            Predicted values
        slopes : ndarray of shape (n_samples,) or None
            Estimated first derivatives (None if order=0)
        """
        X = self._validate_data_predict(X)

        if self.order_ == 0:
            return evaluate_on_grid(self._point_estimator(), X, n_jobs=self.n_jobs), None

        estimator = self._point_estimator(return_coefficients=True)
        y_pred = np.full(X.shape[0], np.nan)
        slopes = np.full(X.shape[0], np.nan)

        for i, x in enumerate(X):
            try:
                beta = estimator(x)
            except LinearAlgebraError:
                continue
            y_pred[i] = beta[0]
            slopes[i] = beta[1]

        return y_pred, slopes
