"""Pytest fixtures for nonparametric estimation tests."""

import numpy as np
import pytest


@pytest.fixture
def random_state():
    """Fixed random state for reproducibility."""
    return np.random.RandomState(42)


@pytest.fixture
def simple_1d_data(random_state):
    """Simple 1D regression data."""
    n = 100
    X = random_state.uniform(-3, 3, n)
    y = np.sin(X) + 0.1 * random_state.randn(n)
    return X, y


@pytest.fixture
def exponential_sample(random_state):
    """Sample from a unit exponential distribution."""
    return random_state.exponential(1.0, 1000)


@pytest.fixture
def censored_sample(random_state):
    """Exponential survival times with random censoring."""
    n = 100
    times = random_state.exponential(1.0, n)
    events = random_state.rand(n) < 0.6
    return times, events
