"""
Scaled Relative Graph (SRG) Boundary Construction for SISO LTI Systems

The soft SRG of a stable real SISO LTI system is the hyperbolic convex hull
of its Nyquist locus and the locus' mirror image. This package builds that
region as a closed polygon from a sampled frequency response.

Pipeline
--------
1. ``curve_subsampler``: optional positional thinning of long curves
2. ``arc_resolver``: per-segment arc of a real-axis-centred circle
   (straight segment when the real parts coincide), short way round
3. ``boundary_builder``: upper path, mirrored lower path, closure
4. ``srg_analyzer``: batch orchestration and critical-point scoring
5. ``data_logger``: JSON/CSV persistence with checksums

All construction functions are pure; nothing here keeps module-level state.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

from .arc_resolver import (
    Arc,
    ArcKind,
    resolve_arc,
    tessellate_arc,
    DEGENERATE_RE_TOL,
)

from .boundary_builder import (
    BoundaryPolygon,
    BuilderConfig,
    SRGBoundaryBuilder,
    build_srg_boundary,
    build_upper_path,
    DEFAULT_TESSELLATION_COUNT,
)

from .curve_subsampler import (
    subsample_curve,
    subsample_indices,
)

from .srg_analyzer import (
    SRGAnalyzer,
    AnalyzerConfig,
    SRGResult,
    critical_point_margin,
)

from .data_logger import (
    SRGDataLogger,
    LoggerConfig,
    NumpyEncoder,
    boundary_checksum,
)

__all__ = [
    # Arc resolver
    'Arc',
    'ArcKind',
    'resolve_arc',
    'tessellate_arc',
    'DEGENERATE_RE_TOL',
    # Boundary builder
    'BoundaryPolygon',
    'BuilderConfig',
    'SRGBoundaryBuilder',
    'build_srg_boundary',
    'build_upper_path',
    'DEFAULT_TESSELLATION_COUNT',
    # Subsampler
    'subsample_curve',
    'subsample_indices',
    # Analyzer
    'SRGAnalyzer',
    'AnalyzerConfig',
    'SRGResult',
    'critical_point_margin',
    # Logger
    'SRGDataLogger',
    'LoggerConfig',
    'NumpyEncoder',
    'boundary_checksum',
]
