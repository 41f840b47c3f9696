"""
SRG Analyzer for Comparative Benchmark Studies

High-level orchestration of the SRG workflow across several loop transfer
functions:

1. Sample each registered system on its frequency grid
2. Thin long curves to ``max_points`` samples (positional decimation)
3. Build the closed soft-SRG boundary
4. Locate the critical point relative to the boundary

Graphical Stability Reading
---------------------------
For a Lur'e loop with a static nonlinearity φ in the sector [0, 1], the set
-SRG(φ)^{-1} is the half-plane Re ≤ -1. The loop is stable with margin when
the SRG of the linear block stays clear of it. The critical point -1 is the
nearest point of that region, so two numbers are reported per system:

- ``contains_critical_point``: whether -1 lies inside the SRG boundary
- ``critical_point_distance``: Euclidean distance from -1 to the boundary

A nonlinearity in the wider sector [0, β] moves the critical point to -1/β.
Each registered system may carry its own critical point; otherwise the
configured default is used.

Systems are independent, so the batch maps cleanly onto a thread pool when
``parallel=True``.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import numpy as np
import pandas as pd
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from scaled_relative_graph.core.frequency_response.frequency_response_curve import (
    FrequencyResponseCurve,
)
from scaled_relative_graph.core.frequency_response.frequency_response_sampler import (
    FrequencyGridConfig,
    FrequencyResponseSampler,
)
from .boundary_builder import BoundaryPolygon, build_srg_boundary, DEFAULT_TESSELLATION_COUNT
from .curve_subsampler import subsample_curve


@dataclass
class AnalyzerConfig:
    """
    Configuration for the SRG analyzer.

    Attributes
    ----------
    tessellation_count : int
        Points per boundary arc
    max_points : int, optional
        Subsampling limit applied before boundary construction (None = off)
    critical_point : complex
        Point checked against each boundary (-1 for negative feedback)
    parallel : bool
        Map systems onto a thread pool
    max_workers : int, optional
        Thread pool size (None = executor default)
    verbose : bool
        Enable progress output
    """
    tessellation_count: int = DEFAULT_TESSELLATION_COUNT
    max_points: Optional[int] = 400
    critical_point: complex = -1.0 + 0.0j
    parallel: bool = False
    max_workers: Optional[int] = None
    verbose: bool = True


@dataclass
class SRGResult:
    """
    SRG analysis result for one system.

    Attributes
    ----------
    name : str
        System identifier
    curve : FrequencyResponseCurve
        Sampled Nyquist locus (full resolution)
    srg_curve : FrequencyResponseCurve
        Curve actually used for the boundary (after subsampling)
    boundary : BoundaryPolygon
        Closed soft-SRG boundary
    contains_critical_point : bool
        Critical point lies inside the boundary
    critical_point_distance : float
        Distance from the critical point to the boundary ring
    extent : Tuple[float, float, float, float]
        Boundary extent (x_min, x_max, y_min, y_max)
    metadata : Dict
        Additional analysis metadata
    """
    name: str
    curve: FrequencyResponseCurve
    srg_curve: FrequencyResponseCurve
    boundary: BoundaryPolygon
    contains_critical_point: bool = False
    critical_point_distance: float = np.inf
    extent: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    metadata: Dict[str, Any] = field(default_factory=dict)


def _point_to_ring_distance(ring: np.ndarray, point: complex) -> float:
    """Minimum distance from point to the closed polyline ring (N, 2)."""
    a = ring[:-1]
    b = ring[1:]
    p = np.array([point.real, point.imag])

    ab = b - a
    length_sq = np.einsum('ij,ij->i', ab, ab)
    # Zero-length edges (repeated vertices) project onto their start point
    t = np.zeros_like(length_sq)
    nonzero = length_sq > 0.0
    t[nonzero] = np.einsum('ij,ij->i', p - a[nonzero], ab[nonzero]) / length_sq[nonzero]
    t = np.clip(t, 0.0, 1.0)

    closest = a + t[:, None] * ab
    return float(np.min(np.hypot(closest[:, 0] - p[0], closest[:, 1] - p[1])))


def critical_point_margin(
    boundary: BoundaryPolygon,
    point: complex = -1.0 + 0.0j
) -> Tuple[bool, float]:
    """
    Locate a point relative to an SRG boundary.

    Parameters
    ----------
    boundary : BoundaryPolygon
        Closed SRG boundary
    point : complex
        Query point, -1 by default

    Returns
    -------
    Tuple[bool, float]
        (inside, distance to boundary)
    """
    point = complex(point)
    inside = bool(boundary.as_path().contains_point((point.real, point.imag)))
    distance = _point_to_ring_distance(np.asarray(boundary.points), point)
    return inside, distance


class SRGAnalyzer:
    """
    Comparative SRG analyzer for a set of SISO loop transfer functions.

    Example Usage
    -------------
    >>> from scaled_relative_graph.control_design import all_benchmarks
    >>>
    >>> analyzer = SRGAnalyzer(AnalyzerConfig(tessellation_count=20))
    >>> for bench in all_benchmarks():
    ...     analyzer.register_system(bench.name, bench.transfer_function, bench.srg_grid)
    >>> results = analyzer.run_comparative_analysis()
    >>> analyzer.to_dataframe()

    Parameters
    ----------
    config : AnalyzerConfig, optional
        Analyzer configuration
    sampler : FrequencyResponseSampler, optional
        Frequency response evaluator (default: quiet sampler)
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        sampler: Optional[FrequencyResponseSampler] = None
    ):
        self.config = config or AnalyzerConfig()
        self.sampler = sampler or FrequencyResponseSampler(verbose=False)
        self._systems: Dict[str, Tuple[Any, Any, Optional[complex]]] = {}
        self._results: Dict[str, SRGResult] = {}

    def register_system(
        self,
        name: str,
        system: Any,
        grid: Union[FrequencyGridConfig, np.ndarray],
        critical_point: Optional[complex] = None
    ) -> None:
        """
        Register a system for analysis.

        Parameters
        ----------
        name : str
            Identifier used in results and summaries
        system : LTI model or callable
            Anything FrequencyResponseSampler.evaluate accepts
        grid : FrequencyGridConfig or np.ndarray
            Frequency grid [rad/s]
        critical_point : complex, optional
            Per-system critical point (default: config.critical_point)
        """
        if isinstance(grid, FrequencyGridConfig):
            grid.validate()
        self._systems[name] = (system, grid, critical_point)

    def unregister_system(self, name: str) -> None:
        self._systems.pop(name, None)
        self._results.pop(name, None)

    @property
    def registered_systems(self) -> List[str]:
        return list(self._systems)

    def analyze_curve(
        self,
        name: str,
        curve: FrequencyResponseCurve,
        critical_point: Optional[complex] = None
    ) -> SRGResult:
        """
        Build the SRG boundary of an already-sampled curve and score it.

        Parameters
        ----------
        name : str
            System identifier
        curve : FrequencyResponseCurve
            Sampled Nyquist locus
        critical_point : complex, optional
            Point to locate (default: config.critical_point)

        Returns
        -------
        SRGResult
        """
        curve = FrequencyResponseCurve.from_samples(curve)

        srg_curve = curve
        if self.config.max_points is not None:
            srg_curve = subsample_curve(curve, self.config.max_points)

        boundary = build_srg_boundary(srg_curve, self.config.tessellation_count)
        if critical_point is None:
            critical_point = self.config.critical_point
        inside, distance = critical_point_margin(boundary, critical_point)

        metadata = {
            'n_samples': len(curve),
            'n_srg_samples': len(srg_curve),
            'n_boundary_points': len(boundary),
            'tessellation_count': self.config.tessellation_count,
            'critical_point': complex(critical_point),
        }
        if curve.frequencies is not None:
            metadata['w_min'] = float(curve.frequencies[0])
            metadata['w_max'] = float(curve.frequencies[-1])

        return SRGResult(
            name=name,
            curve=curve,
            srg_curve=srg_curve,
            boundary=boundary,
            contains_critical_point=inside,
            critical_point_distance=distance,
            extent=boundary.bounds(),
            metadata=metadata,
        )

    def run_single_system_analysis(self, name: str) -> SRGResult:
        """
        Sample and analyze one registered system.

        Raises
        ------
        ValueError
            If the system is not registered
        """
        if name not in self._systems:
            raise ValueError(f"System '{name}' not registered")

        system, grid, critical_point = self._systems[name]
        curve = self.sampler.sample(system, grid, name=name)
        result = self.analyze_curve(name, curve, critical_point)

        if self.config.verbose:
            status = 'INSIDE' if result.contains_critical_point else 'clear'
            point = result.metadata['critical_point']
            print(f"  [SRG] {name}: {len(result.srg_curve)} samples -> "
                  f"{len(result.boundary)} boundary points, "
                  f"{point.real:g} {status} (distance {result.critical_point_distance:.3f})")

        return result

    def run_comparative_analysis(self) -> Dict[str, SRGResult]:
        """
        Analyze all registered systems.

        Returns
        -------
        Dict[str, SRGResult]
            Results in registration order
        """
        names = self.registered_systems

        if self.config.verbose:
            print(f"\n{'='*70}")
            print(f"SRG BOUNDARY ANALYSIS - {len(names)} system(s)")
            print(f"{'='*70}")
            print(f"Tessellation: {self.config.tessellation_count} points/arc")
            print(f"Max samples:  {self.config.max_points}")
            print(f"Parallel:     {self.config.parallel}")
            print(f"{'='*70}")

        if self.config.parallel and len(names) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                results = list(pool.map(self.run_single_system_analysis, names))
        else:
            results = [self.run_single_system_analysis(name) for name in names]

        self._results = dict(zip(names, results))
        return self._results

    @property
    def results(self) -> Dict[str, SRGResult]:
        """Get analysis results."""
        return self._results

    def get_comparative_summary(self) -> Dict[str, Dict[str, Any]]:
        """
        Summary metrics for every analyzed system.

        Returns
        -------
        Dict
            Per-system metrics keyed by system name
        """
        summary = {}
        for name, result in self._results.items():
            x_min, x_max, y_min, y_max = result.extent
            summary[name] = {
                'n_samples': result.metadata['n_samples'],
                'n_srg_samples': result.metadata['n_srg_samples'],
                'n_boundary_points': result.metadata['n_boundary_points'],
                'critical_point': result.metadata['critical_point'],
                'contains_critical_point': result.contains_critical_point,
                'critical_point_distance': result.critical_point_distance,
                'x_min': x_min,
                'x_max': x_max,
                'y_min': y_min,
                'y_max': y_max,
            }
        return summary

    def to_dataframe(self) -> pd.DataFrame:
        """
        Summary as a pandas DataFrame, one row per system.

        Returns
        -------
        pd.DataFrame
            Indexed by system name
        """
        summary = self.get_comparative_summary()
        df = pd.DataFrame.from_dict(summary, orient='index')
        df.index.name = 'system'
        return df
