"""
Control Design Module for SRG Analysis

Benchmark loop transfer functions (python-control models) with per-system
frequency grids tuned for SRG boundary construction and Nyquist tracing.
"""

from .benchmark_systems import (
    BenchmarkSystem,
    MassSpringDamperParams,
    DCMotorParams,
    TankLevelParams,
    OpAmpParams,
    create_mass_spring_damper,
    create_dc_motor_pi,
    create_tank_level,
    create_saturated_opamp,
    mass_spring_damper_cases,
    tank_level_gain_cases,
    saturate,
    sector_slope_bound,
    CASE_SWEEPS,
    get_benchmark,
    all_benchmarks,
    BENCHMARK_FACTORIES,
)

__version__ = "1.0.0"
__all__ = [
    "BenchmarkSystem",
    "MassSpringDamperParams",
    "DCMotorParams",
    "TankLevelParams",
    "OpAmpParams",
    "create_mass_spring_damper",
    "create_dc_motor_pi",
    "create_tank_level",
    "create_saturated_opamp",
    "mass_spring_damper_cases",
    "tank_level_gain_cases",
    "saturate",
    "sector_slope_bound",
    "CASE_SWEEPS",
    "get_benchmark",
    "all_benchmarks",
    "BENCHMARK_FACTORIES",
]
