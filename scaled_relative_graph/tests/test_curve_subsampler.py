"""
Tests for positional curve decimation.
"""

import pytest
import numpy as np

from scaled_relative_graph.core.frequency_response import (
    CurveContractError,
    FrequencyResponseCurve,
)
from scaled_relative_graph.core.srg.curve_subsampler import (
    subsample_curve,
    subsample_indices,
)


class TestSubsampleIndices:

    def test_length_and_endpoints(self):
        idx = subsample_indices(1000, 100)

        assert idx.size == 100
        assert idx[0] == 0
        assert idx[-1] == 999

    def test_strictly_increasing_for_every_limit(self):
        n = 50
        for n_max in range(2, n):
            idx = subsample_indices(n, n_max)
            assert idx.size == n_max
            assert np.all(np.diff(idx) > 0), n_max
            assert idx[0] == 0 and idx[-1] == n - 1

    def test_roughly_uniform_spacing(self):
        idx = subsample_indices(1001, 11)
        np.testing.assert_array_equal(idx, np.arange(0, 1001, 100))

    def test_short_input_keeps_everything(self):
        np.testing.assert_array_equal(subsample_indices(7, 10), np.arange(7))
        np.testing.assert_array_equal(subsample_indices(10, 10), np.arange(10))

    def test_integer_dtype(self):
        assert np.issubdtype(subsample_indices(500, 40).dtype, np.integer)

    @pytest.mark.parametrize("n_max", [1, 0, -5])
    def test_limit_below_two_rejected(self, n_max):
        with pytest.raises(ValueError, match="n_max"):
            subsample_indices(100, n_max)


class TestSubsampleCurve:

    @pytest.fixture
    def curve(self):
        omega = np.logspace(-2, 2, 1000)
        return FrequencyResponseCurve(1.0 / (1.0 + 1j * omega), omega)

    def test_curve_returns_curve(self, curve):
        thinned = subsample_curve(curve, 100)

        assert isinstance(thinned, FrequencyResponseCurve)
        assert len(thinned) == 100

    def test_frequencies_thinned_alongside(self, curve):
        thinned = subsample_curve(curve, 64)
        idx = subsample_indices(len(curve), 64)

        np.testing.assert_array_equal(thinned.frequencies, curve.frequencies[idx])
        np.testing.assert_array_equal(thinned.response, curve.response[idx])

    def test_endpoints_preserved(self, curve):
        thinned = subsample_curve(curve, 10)

        assert thinned.response[0] == curve.response[0]
        assert thinned.response[-1] == curve.response[-1]

    def test_small_curve_returned_unchanged(self, curve):
        assert subsample_curve(curve, 5000) is curve
        assert subsample_curve(curve, 1000) is curve

    def test_idempotent(self, curve):
        once = subsample_curve(curve, 50)
        twice = subsample_curve(once, 50)

        assert twice is once

    def test_curve_without_frequencies(self):
        curve = FrequencyResponseCurve(np.exp(1j * np.linspace(0, np.pi, 300)))
        thinned = subsample_curve(curve, 30)

        assert thinned.frequencies is None
        assert len(thinned) == 30

    def test_bare_array(self):
        samples = np.arange(200) + 0.5j
        thinned = subsample_curve(samples, 20)

        assert isinstance(thinned, np.ndarray)
        assert thinned.size == 20
        assert thinned[0] == samples[0]
        assert thinned[-1] == samples[-1]

    def test_frequency_response_pair_thinned(self):
        omega = np.logspace(-1, 1, 10)
        response = 1.0 / (1.0 + 1j * omega)
        thinned = subsample_curve((omega, response), 4)

        assert isinstance(thinned, FrequencyResponseCurve)
        assert len(thinned) == 4
        idx = subsample_indices(10, 4)
        np.testing.assert_array_equal(thinned.frequencies, omega[idx])
        np.testing.assert_array_equal(thinned.response, response[idx])

    def test_complex_pair_rejected(self):
        pair = (np.arange(10) + 1j, np.arange(10) - 1j)
        with pytest.raises(CurveContractError):
            subsample_curve(pair, 4)

    def test_two_dimensional_array_rejected(self):
        with pytest.raises(ValueError, match="1-D"):
            subsample_curve(np.ones((2, 10), dtype=complex), 4)

    def test_bare_array_within_limit_returned(self):
        samples = np.arange(10) + 0j
        assert subsample_curve(samples, 10) is samples
