"""
Natural cubic spline interpolation.

On segment [X_i, X_{i+1}] the interpolant is

    S_i(x) = Y_i + b_i dx + c_i dx^2 + d_i dx^3,   dx = x - X_i

with second-derivative coefficients c obtained from a tridiagonal
system under natural boundary conditions c_0 = c_{n-1} = 0.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import linalg

from nonparametric_estimation.exceptions import DomainError, LinearAlgebraError
from nonparametric_estimation.validation import check_paired


class NaturalCubicSpline:
    """
    Natural cubic spline through (X, Y) pairs.

    Coefficients are computed once at construction and never change,
    so one model can be evaluated concurrently from several threads.
    Outside [X_0, X_{n-1}] the boundary segment's cubic is extrapolated.

    Parameters
    ----------
    X : array-like of shape (n,)
        Knots, distinct. Sorted on a private copy if needed.
    Y : array-like of shape (n,)
        Values at the knots

    Attributes
    ----------
    knots : ndarray of shape (n,)
        Sorted knots
    values : ndarray of shape (n,)
        Values at the sorted knots
    b, c, d : ndarray of shape (n - 1,)
        Linear, quadratic and cubic coefficients of each segment

    Raises
    ------
    DomainError
        If fewer than 3 points are given or knots are duplicated
    DimensionError
        If X and Y differ in length

    Examples
    --------
    >>> spline = NaturalCubicSpline([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0])
    >>> value = spline(1.5)
    """

    def __init__(self, X: ArrayLike, Y: ArrayLike):
        X, Y = check_paired(X, Y)
        n = X.shape[0]
        if n < 3:
            raise DomainError(f"A natural cubic spline needs at least 3 points, got {n}")

        order = np.argsort(X, kind="stable")
        X, Y = X[order], Y[order]

        h = np.diff(X)
        if np.any(h <= 0):
            duplicates = np.unique(X[1:][h <= 0])
            raise DomainError(f"Spline knots must be distinct, duplicated: {duplicates}")

        c = np.zeros(n)
        c[1:-1] = self._solve_second_derivatives(h, Y)

        slopes = np.diff(Y) / h
        self.knots = X
        self.values = Y
        self.b = slopes - h * (2 * c[:-1] + c[1:]) / 3
        self.c = c[:-1]
        self.d = (c[1:] - c[:-1]) / (3 * h)

        for array in (self.knots, self.values, self.b, self.c, self.d):
            array.setflags(write=False)

    @staticmethod
    def _solve_second_derivatives(
        h: NDArray[np.floating], Y: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """Solve the interior rows of the tridiagonal system for c_1..c_{n-2}."""
        m = h.shape[0] - 1
        slopes = np.diff(Y) / h
        rhs = 3 * (slopes[1:] - slopes[:-1])

        # Banded storage: upper diagonal, main diagonal, lower diagonal
        ab = np.zeros((3, m))
        ab[0, 1:] = h[1:m]
        ab[1] = 2 * (h[:-1] + h[1:])
        ab[2, :-1] = h[1:m]

        try:
            c_interior = linalg.solve_banded((1, 1), ab, rhs)
        except linalg.LinAlgError as exc:
            raise LinearAlgebraError(f"Spline system is singular: {exc}") from exc
        return c_interior

    def segment_index(self, x: ArrayLike) -> NDArray[np.intp]:
        """Largest i with X_i <= x, clamped to a valid segment."""
        idx = np.searchsorted(self.knots, x, side="right") - 1
        return np.clip(idx, 0, self.knots.shape[0] - 2)

    def evaluate(self, x: ArrayLike) -> float | NDArray[np.floating]:
        """
        Evaluate the spline at x.

        Parameters
        ----------
        x : float or array-like
            Evaluation point(s)

        Returns
        -------
        float or ndarray
            Interpolated values with the shape of x
        """
        x = np.asarray(x, dtype=np.float64)
        i = self.segment_index(x)
        dx = x - self.knots[i]
        y = self.values[i] + dx * (self.b[i] + dx * (self.c[i] + dx * self.d[i]))
        if y.ndim == 0:
            return float(y)
        return y

    __call__ = evaluate

    def __repr__(self) -> str:
        return (
            f"NaturalCubicSpline(n_knots={self.knots.shape[0]}, "
            f"domain=[{self.knots[0]:g}, {self.knots[-1]:g}])"
        )


def cubic_spline(X: ArrayLike, Y: ArrayLike, x: ArrayLike) -> float | NDArray[np.floating]:
    """Build a natural cubic spline through (X, Y) and evaluate it at x."""
    return NaturalCubicSpline(X, Y).evaluate(x)
