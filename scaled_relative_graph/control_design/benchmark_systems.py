"""
Benchmark Loop Transfer Functions for SRG Analysis

Four industrial SISO benchmarks used to compare Nyquist loci and soft SRGs:

1. **Mass-Spring-Damper** under proportional control, L(s) = Kp/(ms² + cs + k)
2. **DC Motor + PI**, third-order motor with integrator and PI controller
3. **Tank Level + Delay**, integrating tank with a Padé(1,1) transport delay
4. **Op-Amp with Saturation**, linear block G(s) of a Lur'e loop whose
   nonlinearity is a unit saturation in the sector [0, 1]

Each benchmark carries two frequency grids: a coarse SRG grid, tuned per
system so that integrators do not swamp the region around the critical point
-1, and a fine grid for smooth Nyquist traces.
"""

import numpy as np
import control as ctrl
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from scaled_relative_graph.core.frequency_response.frequency_response_sampler import (
    FrequencyGridConfig,
)


@dataclass
class MassSpringDamperParams:
    """Mass-spring-damper plant with proportional gain."""
    mass: float = 1.0            # [kg]
    stiffness: float = 4.0       # [N/m]
    damping_ratio: float = 0.2   # ζ [-]
    kp: float = 2.0              # Proportional gain

    @property
    def damping(self) -> float:
        """Damping coefficient c = 2ζ√(mk) [N·s/m]."""
        return 2.0 * self.damping_ratio * np.sqrt(self.mass * self.stiffness)


@dataclass
class DCMotorParams:
    """Small hobby DC motor (SI units) with PI speed/position loop."""
    La: float = 0.01     # Armature inductance [H]
    Ra: float = 2.0      # Armature resistance [Ω]
    Kt: float = 0.05     # Torque constant [N·m/A]
    Kb: float = 0.05     # Back-EMF constant [V·s/rad]
    J: float = 0.001     # Rotor + load inertia [kg·m²]
    b: float = 0.001     # Viscous friction [N·m·s/rad]
    kp: float = 10.0     # PI proportional gain
    ki: float = 5.0      # PI integral gain


@dataclass
class TankLevelParams:
    """Integrating tank with transport delay under P control."""
    K_tank: float = 1.0  # Process gain [m/s per m³/s]
    tau: float = 0.5     # Transport delay [s]
    kp: float = 2.0      # Proportional gain


@dataclass
class OpAmpParams:
    """Second-order op-amp stage, linear part of a saturated Lur'e loop."""
    gain: float = 10.0
    den: tuple = (1.0, 1.0, 4.0)
    saturation_limit: float = 1.0


@dataclass
class BenchmarkSystem:
    """
    A benchmark loop transfer function with its analysis grids.

    Attributes
    ----------
    name : str
        Registry key
    label : str
        Human-readable description
    transfer_function : ctrl.TransferFunction
        Loop transfer function L(s)
    srg_grid : FrequencyGridConfig
        Frequency grid for SRG boundary construction
    nyquist_grid : FrequencyGridConfig
        Fine grid for Nyquist traces
    metadata : Dict
        Physical parameters and notes
    """
    name: str
    label: str
    transfer_function: ctrl.TransferFunction
    srg_grid: FrequencyGridConfig
    nyquist_grid: FrequencyGridConfig
    metadata: Dict[str, Any] = field(default_factory=dict)


def create_mass_spring_damper(
    params: Optional[MassSpringDamperParams] = None
) -> BenchmarkSystem:
    """L(s) = Kp / (m s² + c s + k)."""
    p = params or MassSpringDamperParams()
    L = ctrl.tf([p.kp], [p.mass, p.damping, p.stiffness])
    return BenchmarkSystem(
        name='mass_spring_damper',
        label=f'Mass-Spring-Damper (ζ={p.damping_ratio:g})',
        transfer_function=L,
        srg_grid=FrequencyGridConfig.from_decades(-1.0, 1.5, 0.02),
        nyquist_grid=FrequencyGridConfig(10 ** -1.5, 10 ** 1.5, 2000),
        metadata={'params': asdict(p)},
    )


def create_dc_motor_pi(params: Optional[DCMotorParams] = None) -> BenchmarkSystem:
    """
    DC motor with PI controller.

    G(s) = Kt / [s (J La s² + (J Ra + b La) s + (b Ra + Kt Kb))]
    C(s) = (Kp s + Ki) / s

    The double integrator makes |L| explode below ~1 rad/s, so the SRG grid
    starts at about 3 rad/s.
    """
    p = params or DCMotorParams()
    G_motor = ctrl.tf(
        [p.Kt],
        [p.J * p.La, p.J * p.Ra + p.b * p.La, p.b * p.Ra + p.Kt * p.Kb, 0.0]
    )
    C_pi = ctrl.tf([p.kp, p.ki], [1.0, 0.0])
    return BenchmarkSystem(
        name='dc_motor_pi',
        label='DC Motor + PI',
        transfer_function=G_motor * C_pi,
        srg_grid=FrequencyGridConfig.from_decades(0.5, 4.0, 0.01),
        nyquist_grid=FrequencyGridConfig(1.0, 1e4, 3000),
        metadata={'params': asdict(p)},
    )


def create_tank_level(params: Optional[TankLevelParams] = None) -> BenchmarkSystem:
    """
    Tank level with delay, L(s) = Kp · K/s · (1 - τs/2)/(1 + τs/2).

    The delay e^{-τs} is replaced by its Padé(1,1) approximation.
    """
    p = params or TankLevelParams()
    G_tank = ctrl.tf([p.K_tank], [1.0, 0.0])
    pade = ctrl.tf([-p.tau / 2.0, 1.0], [p.tau / 2.0, 1.0])
    return BenchmarkSystem(
        name='tank_level',
        label=f'Tank + Delay (Kp={p.kp:g})',
        transfer_function=p.kp * G_tank * pade,
        srg_grid=FrequencyGridConfig.from_decades(0.0, 1.5, 0.02),
        nyquist_grid=FrequencyGridConfig(10 ** -0.5, 10 ** 1.5, 2000),
        metadata={'params': asdict(p)},
    )


def saturate(x, limit: float = 1.0):
    """Unit saturation nonlinearity of the op-amp Lur'e loop."""
    return np.clip(x, -limit, limit)


def sector_slope_bound(
    nonlinearity: Callable[[np.ndarray], np.ndarray],
    x_max: float,
    n_points: int = 4001
) -> float:
    """
    Upper sector slope β = max φ(x)/x of a static nonlinearity on [-x_max, x_max].

    For φ in the sector [0, β] the circle criterion places the critical
    point of the linear block at -1/β.

    Parameters
    ----------
    nonlinearity : Callable
        Vectorised static map φ(x)
    x_max : float
        Half-width of the sampled input range
    n_points : int
        Number of input samples (x = 0 is skipped)

    Returns
    -------
    float
        Largest observed slope φ(x)/x
    """
    if x_max <= 0:
        raise ValueError(f"x_max must be positive, got {x_max}")
    x = np.linspace(-x_max, x_max, n_points)
    x = x[x != 0.0]
    return float(np.max(np.asarray(nonlinearity(x), dtype=float) / x))


def create_saturated_opamp(params: Optional[OpAmpParams] = None) -> BenchmarkSystem:
    """
    Linear block G(s) = 10 / (s² + s + 4) of the saturated op-amp loop.

    The Nyquist/SRG analysis uses G alone. The saturation enters through its
    sector [0, β]: β is measured from ``saturate`` at the configured limit and
    fixes the critical point -1/β checked against the SRG.
    """
    p = params or OpAmpParams()
    beta = sector_slope_bound(
        lambda x: saturate(x, p.saturation_limit), x_max=10.0 * p.saturation_limit
    )
    return BenchmarkSystem(
        name='saturated_opamp',
        label='Op-Amp (G only)',
        transfer_function=ctrl.tf([p.gain], list(p.den)),
        srg_grid=FrequencyGridConfig.from_decades(-1.0, 2.0, 0.02),
        nyquist_grid=FrequencyGridConfig(0.1, 100.0, 2000),
        metadata={
            'params': asdict(p),
            # Bounded output: the lower slope tends to 0 for large |x|
            'sector': (0.0, beta),
            'critical_point': complex(-1.0 / beta, 0.0),
        },
    )


def mass_spring_damper_cases() -> List[BenchmarkSystem]:
    """Underdamped, critically damped and overdamped variants (ζ = 0.2, 1, 2)."""
    cases = []
    for zeta, regime in [(0.2, 'Underdamped'), (1.0, 'Critical'), (2.0, 'Overdamped')]:
        system = create_mass_spring_damper(MassSpringDamperParams(damping_ratio=zeta))
        system.name = f'mass_spring_damper_zeta_{zeta:g}'
        system.label = f'{regime} (ζ={zeta:g})'
        cases.append(system)
    return cases


def tank_level_gain_cases() -> List[BenchmarkSystem]:
    """Tank loop at Kp = 1 (stable), 3 (marginal) and 6 (unstable)."""
    cases = []
    for kp, regime in [(1.0, 'stable'), (3.0, 'marginal'), (6.0, 'unstable')]:
        system = create_tank_level(TankLevelParams(kp=kp))
        system.name = f'tank_level_kp_{kp:g}'
        system.label = f'Kp={kp:g} ({regime})'
        system.metadata['regime'] = regime
        cases.append(system)
    return cases


CASE_SWEEPS: Dict[str, Callable[[], List[BenchmarkSystem]]] = {
    'damping': mass_spring_damper_cases,
    'tank_gain': tank_level_gain_cases,
}


BENCHMARK_FACTORIES: Dict[str, Callable[..., BenchmarkSystem]] = {
    'mass_spring_damper': create_mass_spring_damper,
    'dc_motor_pi': create_dc_motor_pi,
    'tank_level': create_tank_level,
    'saturated_opamp': create_saturated_opamp,
}

_PARAM_TYPES = {
    'mass_spring_damper': MassSpringDamperParams,
    'dc_motor_pi': DCMotorParams,
    'tank_level': TankLevelParams,
    'saturated_opamp': OpAmpParams,
}


def get_benchmark(name: str, **overrides) -> BenchmarkSystem:
    """
    Build a benchmark by name.

    Parameters
    ----------
    name : str
        One of BENCHMARK_FACTORIES
    **overrides
        Parameter overrides, e.g. get_benchmark('tank_level', kp=6.0)

    Returns
    -------
    BenchmarkSystem
    """
    if name not in BENCHMARK_FACTORIES:
        raise ValueError(
            f"Unknown benchmark '{name}'. Available: {list(BENCHMARK_FACTORIES)}"
        )
    params = _PARAM_TYPES[name](**overrides) if overrides else None
    return BENCHMARK_FACTORIES[name](params)


def all_benchmarks() -> List[BenchmarkSystem]:
    """The four nominal benchmarks in registry order."""
    return [factory() for factory in BENCHMARK_FACTORIES.values()]
