"""
Nonparametric Estimation Package

One-dimensional nonparametric estimators of distributions and
regression functions.

Features:
- Empirical CDF
- Kernel density estimation
- Kaplan-Meier survival curves for right-censored data
- Nadaraya-Watson and local polynomial regression
- Natural cubic spline interpolation
- Gaussian, Epanechnikov, uniform and triangular kernels
- Per-point grid evaluation with optional parallelism
- sklearn-compatible regression estimators
"""

from nonparametric_estimation.density import kernel_density
from nonparametric_estimation.empirical import estimate_cdf
from nonparametric_estimation.estimators import (
    KernelRegression,
    LocalPolynomialRegression,
    NadarayaWatson,
)
from nonparametric_estimation.exceptions import (
    DimensionError,
    DomainError,
    LinearAlgebraError,
    NonparametricError,
)
from nonparametric_estimation.grid import evaluate_on_grid
from nonparametric_estimation.kernels import (
    KERNEL_FUNCTIONS,
    epanechnikov_kernel,
    gaussian_kernel,
    get_kernel,
    triangular_kernel,
    uniform_kernel,
)
from nonparametric_estimation.regression import local_polynomial, nadaraya_watson
from nonparametric_estimation.spline import NaturalCubicSpline, cubic_spline
from nonparametric_estimation.survival import SurvivalCurve, kaplan_meier

__version__ = "0.1.0"

__all__ = [
    # Distribution estimators
    "estimate_cdf",
    "kernel_density",
    # Survival
    "kaplan_meier",
    "SurvivalCurve",
    # Regression
    "nadaraya_watson",
    "local_polynomial",
    "KernelRegression",
    "NadarayaWatson",
    "LocalPolynomialRegression",
    # Interpolation
    "NaturalCubicSpline",
    "cubic_spline",
    # Kernels
    "gaussian_kernel",
    "epanechnikov_kernel",
    "uniform_kernel",
    "triangular_kernel",
    "get_kernel",
    "KERNEL_FUNCTIONS",
    # Grid evaluation
    "evaluate_on_grid",
    # Errors
    "NonparametricError",
    "DomainError",
    "DimensionError",
    "LinearAlgebraError",
]
