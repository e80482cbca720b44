"""
Kaplan-Meier survival estimation for right-censored samples.

    S(t_j) = prod_{l <= j} (1 - d_l / n_l)

where n_l is the number of subjects at risk just before t_l and d_l the
number of observed events at t_l. Coincident times form a single step.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from nonparametric_estimation.validation import check_events, check_sample


@dataclass(frozen=True)
class SurvivalCurve:
    """
    Kaplan-Meier survival curve.

    Iterating yields ``(times, survival)``, so the curve unpacks as a pair.
    """

    times: NDArray[np.floating]
    survival: NDArray[np.floating]
    n_at_risk: NDArray[np.intp]
    n_events: NDArray[np.intp]
    n_censored: NDArray[np.intp]

    def __iter__(self):
        yield self.times
        yield self.survival

    def __len__(self) -> int:
        return self.times.shape[0]

    def evaluate(self, t: ArrayLike) -> float | NDArray[np.floating]:
        """
        Evaluate the right-continuous step function S(t).

        S(t) = 1 before the first time, and S(t_j) on [t_j, t_{j+1}).
        A NaN time gives NaN.
        """
        t = np.asarray(t, dtype=np.float64)
        idx = np.searchsorted(self.times, t, side="right") - 1
        values = np.where(idx >= 0, self.survival[np.clip(idx, 0, None)], 1.0)
        values = np.where(np.isnan(t), np.nan, values)
        if values.ndim == 0:
            return float(values)
        return values

    @property
    def median_survival_time(self) -> float | None:
        """First time at which S(t) <= 0.5, or None if never reached."""
        below = np.flatnonzero(self.survival <= 0.5)
        if below.size == 0:
            return None
        return float(self.times[below[0]])

    def __str__(self) -> str:
        median = self.median_survival_time
        median_str = "not reached" if median is None else f"{median:.4f}"
        return (
            f"Kaplan-Meier Survival Curve\n"
            f"  Observations: {int(self.n_at_risk[0])}\n"
            f"  Events: {int(np.sum(self.n_events))}\n"
            f"  Censored: {int(np.sum(self.n_censored))}\n"
            f"  Unique times: {len(self)}\n"
            f"  Final survival: {self.survival[-1]:.4f}\n"
            f"  Median survival time: {median_str}"
        )


def kaplan_meier(times: ArrayLike, events: ArrayLike) -> SurvivalCurve:
    """
    Kaplan-Meier estimate of the survival function.

    Parameters
    ----------
    times : array-like of shape (n,)
        Observation times (event or censoring)
    events : array-like of shape (n,)
        True where the event was observed, False where censored

    Returns
    -------
    SurvivalCurve
        Unique sorted times with the survival probability at each one

    Raises
    ------
    DomainError
        If the sample is empty or times are not finite
    DimensionError
        If times and events differ in length
    """
    times = check_sample(times, "times")
    events = check_events(events, times.shape[0])

    order = np.argsort(times, kind="stable")
    times = times[order]
    events = events[order]

    unique_times, inverse, n_total = np.unique(
        times, return_inverse=True, return_counts=True
    )
    n_events = np.bincount(
        inverse, weights=events.astype(np.float64), minlength=unique_times.shape[0]
    )
    n_events = n_events.astype(np.intp)

    # Subjects leave the risk set after their time, whether event or censored
    n_at_risk = times.shape[0] - np.concatenate(([0], np.cumsum(n_total)[:-1]))

    survival = np.cumprod(1.0 - n_events / n_at_risk)

    return SurvivalCurve(
        times=unique_times,
        survival=survival,
        n_at_risk=n_at_risk.astype(np.intp),
        n_events=n_events,
        n_censored=(n_total - n_events).astype(np.intp),
    )
