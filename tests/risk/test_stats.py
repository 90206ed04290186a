# tests/risk/test_stats.py
import numpy as np
import pytest

from portfolio_analytics.errors import EmptyInputError, LengthMismatchError
from portfolio_analytics.risk.stats import (
    covariance,
    mean,
    pearson_correlation,
    quantile,
    quantile_index,
    sample_variance,
    stddev,
)


def test_mean_basic_and_empty():
    assert np.isclose(mean([0.01, 0.02, 0.03]), 0.02, atol=1e-15)

    with pytest.raises(EmptyInputError):
        mean([])


def test_sample_variance_uses_bessel_correction():
    xs = [1.0, 2.0, 3.0, 4.0]
    # sum of squared deviations = 5.0, n - 1 = 3
    assert np.isclose(sample_variance(xs), 5.0 / 3.0, atol=1e-12)
    assert np.isclose(stddev(xs), np.sqrt(5.0 / 3.0), atol=1e-12)
    assert np.isclose(sample_variance(xs), np.var(xs, ddof=1), atol=1e-12)


def test_sample_variance_degenerate_inputs():
    assert sample_variance([]) == 0.0
    assert sample_variance([0.05]) == 0.0
    assert sample_variance([0.001] * 10) == 0.0
    assert stddev([0.001] * 10) == 0.0


def test_covariance_matches_numpy_and_variance():
    rng = np.random.default_rng(11)
    x = rng.normal(size=50)
    y = 0.5 * x + rng.normal(scale=0.1, size=50)

    assert np.isclose(covariance(x, y), np.cov(x, y, ddof=1)[0, 1], atol=1e-12)
    assert covariance(x, x) == sample_variance(x)


def test_covariance_length_mismatch_and_short_series():
    with pytest.raises(LengthMismatchError):
        covariance([0.1, 0.2], [0.1, 0.2, 0.3])

    assert covariance([0.1], [0.2]) == 0.0


def test_quantile_index_clamps_to_bounds():
    assert quantile_index(3, 0.99) == 0
    assert quantile_index(100, 0.95) == 5
    assert quantile_index(1, 0.5) == 0

    with pytest.raises(ValueError):
        quantile_index(10, 1.0)
    with pytest.raises(EmptyInputError):
        quantile_index(0, 0.95)


def test_quantile_does_not_reorder_input():
    xs = [0.02, -0.05, 0.01]
    assert quantile(xs, 0.99) == -0.05
    assert xs == [0.02, -0.05, 0.01]


def test_pearson_correlation_identical_and_opposite():
    x = [0.01, -0.02, 0.015, 0.003, -0.007]
    assert pearson_correlation(x, x) == 1.0
    assert np.isclose(pearson_correlation(x, [-v for v in x]), -1.0, atol=1e-12)


def test_pearson_correlation_zero_variance():
    assert pearson_correlation([0.01] * 5, [0.01, 0.02, 0.03, 0.04, 0.05]) == 0.0


def test_rejects_two_dimensional_input():
    with pytest.raises(ValueError):
        mean(np.zeros((2, 2)))


def test_pearson_tiny_variances_do_not_underflow():
    x = [0.0, 1.0, 0.0, 1.0]
    y = [0.0, 1.0, 1.0, 1.0]
    tiny_x = [v * 1e-85 for v in x]
    tiny_y = [v * 1e-85 for v in y]

    rho = pearson_correlation(tiny_x, tiny_y)

    assert np.isfinite(rho)
    assert np.isclose(rho, pearson_correlation(x, y), atol=1e-9)
    assert pearson_correlation([0, 1e-85, 0, 1e-85], [1e-85, 0, 0, 1e-85]) == 0.0
