"""
Evaluation of single-point estimators over a grid of query points.

Each grid point is independent, so a degenerate point (for example a
local polynomial fit with too few neighbors) is marked NaN instead of
aborting the sweep.
"""

import logging
from typing import Callable

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import ArrayLike, NDArray

from nonparametric_estimation.exceptions import LinearAlgebraError

logger = logging.getLogger(__name__)


def _evaluate_point(func: Callable[[float], float], x: float) -> float:
    try:
        return float(func(x))
    except LinearAlgebraError as exc:
        logger.debug("Skipping grid point x=%g: %s", x, exc)
        return np.nan


def evaluate_on_grid(
    func: Callable[[float], float],
    grid: ArrayLike,
    n_jobs: int | None = None,
) -> NDArray[np.floating]:
    """
    Evaluate a scalar estimator at every grid point.

    Args:
        func: Callable taking one query point and returning an estimate,
            e.g. ``lambda x: local_polynomial(X, Y, x, 0.3, degree=2)``.
        grid: Query points.
        n_jobs: Number of parallel workers. None or 1 evaluates
            sequentially; -1 uses all processors.

    Returns:
        Estimates aligned with the flattened grid, NaN where the
        estimator raised LinearAlgebraError or returned NaN.
    """
    grid = np.asarray(grid, dtype=np.float64).ravel()

    if n_jobs is None or n_jobs == 1:
        values = [_evaluate_point(func, x) for x in grid]
    else:
        values = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(_evaluate_point)(func, x) for x in grid
        )

    result = np.asarray(values, dtype=np.float64)

    n_undefined = int(np.sum(np.isnan(result)))
    if n_undefined:
        logger.warning(
            "%d of %d grid points have no defined estimate", n_undefined, grid.shape[0]
        )
    return result
