"""
Tests for the benchmark loop transfer functions.

Responses are checked against the closed-form expressions at a few
frequencies rather than against transfer-function coefficients.
"""

import pytest
import numpy as np

from scaled_relative_graph.control_design import (
    BENCHMARK_FACTORIES,
    CASE_SWEEPS,
    BenchmarkSystem,
    DCMotorParams,
    MassSpringDamperParams,
    OpAmpParams,
    all_benchmarks,
    create_dc_motor_pi,
    create_mass_spring_damper,
    create_saturated_opamp,
    create_tank_level,
    get_benchmark,
    mass_spring_damper_cases,
    saturate,
    sector_slope_bound,
    tank_level_gain_cases,
)
from scaled_relative_graph.core.frequency_response import FrequencyResponseSampler


@pytest.fixture
def sampler():
    return FrequencyResponseSampler(verbose=False)


class TestBenchmarkResponses:

    def test_mass_spring_damper(self, sampler):
        bench = create_mass_spring_damper()
        omega = np.array([0.5, 2.0, 5.0])
        s = 1j * omega
        # c = 2ζ√(mk) = 0.8
        expected = 2.0 / (s ** 2 + 0.8 * s + 4.0)

        np.testing.assert_allclose(sampler.evaluate(bench.transfer_function, omega), expected,
                                   rtol=1e-10)

    def test_mass_spring_damper_resonance(self, sampler):
        response = sampler.evaluate(create_mass_spring_damper().transfer_function, [2.0])
        assert response[0] == pytest.approx(-1.25j)

    def test_damping_coefficient(self):
        p = MassSpringDamperParams(mass=2.0, stiffness=8.0, damping_ratio=0.5)
        assert p.damping == pytest.approx(4.0)

    def test_dc_motor_pi(self, sampler):
        p = DCMotorParams()
        omega = np.array([3.0, 30.0, 300.0])
        s = 1j * omega
        G = p.Kt / (s * (p.J * p.La * s ** 2 + (p.J * p.Ra + p.b * p.La) * s
                         + (p.b * p.Ra + p.Kt * p.Kb)))
        C = (p.kp * s + p.ki) / s

        np.testing.assert_allclose(
            sampler.evaluate(create_dc_motor_pi().transfer_function, omega), G * C, rtol=1e-9
        )

    def test_tank_level_allpass_delay(self, sampler):
        omega = np.logspace(0, 1.5, 20)
        response = sampler.evaluate(create_tank_level().transfer_function, omega)

        # Padé(1,1) is all-pass: |L| = Kp·K/ω
        np.testing.assert_allclose(np.abs(response), 2.0 / omega, rtol=1e-10)

    def test_saturated_opamp(self, sampler):
        omega = np.array([0.1, 2.0, 50.0])
        s = 1j * omega
        response = sampler.evaluate(create_saturated_opamp().transfer_function, omega)

        np.testing.assert_allclose(response, 10.0 / (s ** 2 + s + 4.0), rtol=1e-10)

    def test_opamp_sector_metadata(self):
        assert create_saturated_opamp().metadata['sector'] == (0.0, 1.0)


class TestBenchmarkGrids:

    @pytest.mark.parametrize("name,n_points,w_min", [
        ('mass_spring_damper', 126, 0.1),
        ('dc_motor_pi', 351, 10 ** 0.5),
        ('tank_level', 76, 1.0),
        ('saturated_opamp', 151, 0.1),
    ])
    def test_srg_grid(self, name, n_points, w_min):
        w = get_benchmark(name).srg_grid.get_frequency_vector()

        assert w.size == n_points
        assert w[0] == pytest.approx(w_min)

    def test_all_grids_sample_cleanly(self, sampler):
        for bench in all_benchmarks():
            for grid in (bench.srg_grid, bench.nyquist_grid):
                curve = sampler.sample(bench.transfer_function, grid, name=bench.name)
                assert np.all(np.isfinite(curve.response))

    def test_nyquist_grid_denser(self):
        for bench in all_benchmarks():
            n_srg = bench.srg_grid.get_frequency_vector().size
            n_nyq = bench.nyquist_grid.get_frequency_vector().size
            assert n_nyq > n_srg


class TestRegistry:

    def test_all_benchmarks_order(self):
        names = [bench.name for bench in all_benchmarks()]
        assert names == list(BENCHMARK_FACTORIES)
        assert names == ['mass_spring_damper', 'dc_motor_pi', 'tank_level', 'saturated_opamp']

    def test_get_benchmark(self):
        bench = get_benchmark('tank_level')
        assert isinstance(bench, BenchmarkSystem)
        assert bench.metadata['params']['kp'] == 2.0

    def test_get_benchmark_overrides(self, sampler):
        bench = get_benchmark('tank_level', kp=6.0)

        assert bench.metadata['params']['kp'] == 6.0
        response = sampler.evaluate(bench.transfer_function, [3.0])
        assert abs(response[0]) == pytest.approx(2.0)

    def test_unknown_benchmark(self):
        with pytest.raises(ValueError, match="Unknown benchmark"):
            get_benchmark('inverted_pendulum')

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            get_benchmark('saturated_opamp', bogus=1.0)


class TestCaseStudies:

    def test_damping_cases(self):
        cases = mass_spring_damper_cases()

        assert [c.metadata['params']['damping_ratio'] for c in cases] == [0.2, 1.0, 2.0]
        assert len({c.name for c in cases}) == 3
        assert cases[0].label.startswith('Underdamped')
        assert cases[2].label.startswith('Overdamped')

    def test_tank_gain_cases(self):
        cases = tank_level_gain_cases()

        assert [c.metadata['params']['kp'] for c in cases] == [1.0, 3.0, 6.0]
        assert [c.metadata['regime'] for c in cases] == ['stable', 'marginal', 'unstable']
        assert cases[1].name == 'tank_level_kp_3'


class TestSaturation:

    def test_clips_symmetrically(self):
        x = np.array([-3.0, -1.0, -0.2, 0.0, 0.7, 1.0, 2.5])
        np.testing.assert_array_equal(saturate(x), [-1.0, -1.0, -0.2, 0.0, 0.7, 1.0, 1.0])

    def test_custom_limit(self):
        assert saturate(5.0, limit=2.0) == 2.0
        assert saturate(-5.0, limit=2.0) == -2.0

    def test_sector_zero_one(self):
        x = np.linspace(-5.0, 5.0, 101)
        x = x[x != 0.0]
        ratio = saturate(x) / x
        assert np.all(ratio >= 0.0)
        assert np.all(ratio <= 1.0 + 1e-12)

    def test_sector_slope_bound_of_saturation(self):
        assert sector_slope_bound(saturate, x_max=10.0) == pytest.approx(1.0)

    def test_sector_slope_bound_of_scaled_saturation(self):
        beta = sector_slope_bound(lambda x: 2.0 * saturate(x, 0.5), x_max=5.0)
        assert beta == pytest.approx(2.0)

    def test_sector_slope_bound_rejects_empty_range(self):
        with pytest.raises(ValueError, match="x_max"):
            sector_slope_bound(saturate, x_max=0.0)

    @pytest.mark.parametrize("limit", [0.5, 1.0, 2.5])
    def test_opamp_critical_point_from_saturation(self, limit):
        bench = create_saturated_opamp(OpAmpParams(saturation_limit=limit))

        assert bench.metadata['sector'] == (0.0, pytest.approx(1.0))
        assert bench.metadata['critical_point'] == pytest.approx(-1.0 + 0j)


class TestCaseSweeps:

    def test_registry(self):
        assert set(CASE_SWEEPS) == {'damping', 'tank_gain'}
        assert CASE_SWEEPS['damping'] is mass_spring_damper_cases
        assert CASE_SWEEPS['tank_gain'] is tank_level_gain_cases

    def test_case_grids_sample_cleanly(self, sampler):
        for sweep in CASE_SWEEPS.values():
            for bench in sweep():
                curve = sampler.sample(bench.transfer_function, bench.srg_grid, name=bench.name)
                assert np.all(np.isfinite(curve.response))
