"""Tests for sklearn-compatible kernel regression estimators."""

import numpy as np
import pytest

from nonparametric_estimation import DimensionError, DomainError
from nonparametric_estimation.estimators import (
    LocalPolynomialRegression,
    NadarayaWatson,
)
from nonparametric_estimation.regression import local_polynomial, nadaraya_watson


class TestNadarayaWatson:
    """Tests for Nadaraya-Watson estimator."""

    def test_fit_returns_self(self, simple_1d_data):
        """Fit returns self for method chaining."""
        X, y = simple_1d_data
        model = NadarayaWatson(bandwidth=0.5)
        assert model.fit(X, y) is model

    def test_fit_stores_data(self, simple_1d_data):
        """Fit stores training data as 1D arrays."""
        X, y = simple_1d_data
        model = NadarayaWatson(bandwidth=0.5).fit(X, y)
        np.testing.assert_array_equal(model.X_, X)
        np.testing.assert_array_equal(model.y_, y)
        assert model.n_features_in_ == 1
        assert model.bandwidth_ == 0.5

    def test_column_vector_input(self, simple_1d_data):
        """(n, 1) and (n,) inputs give the same predictions."""
        X, y = simple_1d_data
        flat = NadarayaWatson(bandwidth=0.5).fit(X, y).predict(X[:10])
        column = NadarayaWatson(bandwidth=0.5).fit(X.reshape(-1, 1), y).predict(
            X[:10].reshape(-1, 1)
        )
        np.testing.assert_array_equal(flat, column)

    def test_predict_matches_function(self, simple_1d_data):
        """Predict delegates to nadaraya_watson."""
        X, y = simple_1d_data
        grid = np.linspace(-2, 2, 9)
        model = NadarayaWatson(kernel="triangular", bandwidth=0.4).fit(X, y)
        np.testing.assert_allclose(
            model.predict(grid), nadaraya_watson(X, y, grid, 0.4, "triangular")
        )

    def test_predict_interpolates(self, simple_1d_data):
        """Predictions at training points are close to targets."""
        X, y = simple_1d_data
        y_pred = NadarayaWatson(bandwidth=0.3).fit(X, y).predict(X)
        assert np.corrcoef(y, y_pred)[0, 1] > 0.8

    def test_unsupported_points_are_nan(self):
        """Compact kernels give NaN far from the data."""
        model = NadarayaWatson(kernel="uniform", bandwidth=0.5).fit([0.0, 1.0], [1.0, 2.0])
        assert np.isnan(model.predict([10.0])[0])

    def test_scalar_only_kernel(self, simple_1d_data):
        """A kernel written for scalars works through fit and predict."""
        X, y = simple_1d_data
        scalar_triangular = lambda u: 1 - abs(u) if abs(u) <= 1 else 0.0
        model = NadarayaWatson(kernel=scalar_triangular, bandwidth=0.4).fit(X, y)
        np.testing.assert_allclose(
            model.predict(X[:5]), nadaraya_watson(X, y, X[:5], 0.4, "triangular")
        )

    def test_get_weights(self, simple_1d_data):
        """Get weights returns normalized weights."""
        X, y = simple_1d_data
        weights = NadarayaWatson(bandwidth=0.5).fit(X, y).get_weights(X[:5])
        assert weights.shape == (5, len(X))
        np.testing.assert_array_almost_equal(np.sum(weights, axis=1), 1.0)

    def test_unfitted_error(self, simple_1d_data):
        """Raises error when predicting on unfitted model."""
        X, _ = simple_1d_data
        with pytest.raises(Exception):  # NotFittedError
            NadarayaWatson(bandwidth=0.5).predict(X)

    def test_multivariate_rejected(self, random_state):
        """Only one predictor is supported."""
        X = random_state.randn(20, 2)
        y = random_state.randn(20)
        with pytest.raises(DimensionError):
            NadarayaWatson(bandwidth=0.5).fit(X, y)

    def test_invalid_bandwidth(self, simple_1d_data):
        """Bandwidth is validated at fit time."""
        X, y = simple_1d_data
        with pytest.raises(DomainError):
            NadarayaWatson(bandwidth=-1.0).fit(X, y)


class TestLocalPolynomialRegression:
    """Tests for Local Polynomial Regression estimator."""

    def test_fit_returns_self(self, simple_1d_data):
        """Fit returns self for method chaining."""
        X, y = simple_1d_data
        model = LocalPolynomialRegression(order=1, bandwidth=0.5)
        assert model.fit(X, y) is model
        assert model.order_ == 1

    def test_order_0_like_nw(self, simple_1d_data):
        """Order 0 is equivalent to Nadaraya-Watson."""
        X, y = simple_1d_data
        nw = NadarayaWatson(bandwidth=0.5).fit(X, y)
        lp = LocalPolynomialRegression(order=0, bandwidth=0.5).fit(X, y)
        np.testing.assert_allclose(lp.predict(X[:10]), nw.predict(X[:10]), rtol=1e-9)

    def test_predict_matches_function(self, simple_1d_data):
        """Predict delegates to local_polynomial point by point."""
        X, y = simple_1d_data
        model = LocalPolynomialRegression(order=2, bandwidth=0.6).fit(X, y)
        expected = [local_polynomial(X, y, x, 0.6, degree=2) for x in X[:5]]
        np.testing.assert_allclose(model.predict(X[:5]), expected)

    def test_order_1_local_linear(self, simple_1d_data):
        """Order 1 (local linear) works."""
        X, y = simple_1d_data
        y_pred = LocalPolynomialRegression(order=1, bandwidth=0.5).fit(X, y).predict(X)
        assert y_pred.shape == (len(y),)
        assert np.corrcoef(y, y_pred)[0, 1] > 0.8

    def test_degenerate_points_are_nan(self):
        """A singular local fit yields NaN for that point only."""
        X = np.array([0.0, 0.1, 0.2, 5.0, 5.1, 5.2])
        model = LocalPolynomialRegression(
            kernel="epanechnikov", bandwidth=0.5, order=1
        ).fit(X, X)
        y_pred = model.predict([0.1, 2.5, 5.1])
        np.testing.assert_array_equal(np.isnan(y_pred), [False, True, False])

    def test_parallel_predict(self, simple_1d_data):
        """n_jobs does not change predictions."""
        X, y = simple_1d_data
        serial = LocalPolynomialRegression(order=1, bandwidth=0.5).fit(X, y)
        threaded = LocalPolynomialRegression(order=1, bandwidth=0.5, n_jobs=2).fit(X, y)
        np.testing.assert_allclose(threaded.predict(X[:20]), serial.predict(X[:20]))

    def test_predict_with_derivatives(self):
        """Slopes of a quadratic are recovered."""
        X = np.linspace(-2, 2, 60)
        model = LocalPolynomialRegression(order=2, bandwidth=0.5).fit(X, X**2)
        y_pred, slopes = model.predict_with_derivatives([-1.0, 0.0, 1.0])
        np.testing.assert_allclose(y_pred, [1.0, 0.0, 1.0], atol=1e-8)
        np.testing.assert_allclose(slopes, [-2.0, 0.0, 2.0], atol=1e-8)

    def test_predict_with_derivatives_order_0(self, simple_1d_data):
        """Predict with derivatives returns None for order 0."""
        X, y = simple_1d_data
        model = LocalPolynomialRegression(order=0, bandwidth=0.5).fit(X, y)
        y_pred, slopes = model.predict_with_derivatives(X[:10])
        assert y_pred.shape == (10,)
        np.testing.assert_array_equal(y_pred, model.predict(X[:10]))
        assert slopes is None

    def test_invalid_order(self, simple_1d_data):
        """Order must be a non-negative integer."""
        X, y = simple_1d_data
        with pytest.raises(DomainError):
            LocalPolynomialRegression(order=-1, bandwidth=0.5).fit(X, y)


class TestSklearnCompatibility:
    """Tests for sklearn compatibility."""

    def test_lp_clone(self):
        """LocalPolynomialRegression can be cloned."""
        from sklearn.base import clone

        model = LocalPolynomialRegression(order=2, bandwidth=0.5)
        cloned = clone(model)
        assert cloned.order == model.order
        assert cloned.bandwidth == model.bandwidth

    def test_nw_get_params(self):
        """NadarayaWatson implements get_params."""
        params = NadarayaWatson(kernel="epanechnikov", bandwidth=0.3).get_params()
        assert params["kernel"] == "epanechnikov"
        assert params["bandwidth"] == 0.3

    def test_nw_set_params(self):
        """NadarayaWatson implements set_params."""
        model = NadarayaWatson()
        model.set_params(kernel="triangular", bandwidth=0.7)
        assert model.kernel == "triangular"
        assert model.bandwidth == 0.7

    def test_lp_score(self, simple_1d_data):
        """LocalPolynomialRegression has score method (R^2)."""
        X, y = simple_1d_data
        score = LocalPolynomialRegression(order=1, bandwidth=0.5).fit(X, y).score(X, y)
        assert 0 <= score <= 1

    def test_cross_val_score(self, simple_1d_data):
        """Can be used with cross_val_score on column input."""
        from sklearn.model_selection import cross_val_score

        X, y = simple_1d_data
        scores = cross_val_score(NadarayaWatson(bandwidth=0.5), X.reshape(-1, 1), y, cv=3)
        assert len(scores) == 3
        assert all(np.isfinite(scores))
