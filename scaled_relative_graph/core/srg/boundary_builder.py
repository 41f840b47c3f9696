"""
SRG Boundary Builder

Assembles the closed soft-SRG boundary of a SISO LTI system from its sampled
Nyquist locus.

Construction
------------
1. For each consecutive pair (H[i], H[i+1]) resolve the hull arc and
   tessellate it into ``tessellation_count`` points. Concatenated in order
   these form the *upper* path (positive frequencies).
2. Reflect the upper path across the real axis and reverse it to obtain the
   *lower* path (negative frequencies, H(-jω) = conj H(jω) for real systems).
3. Concatenate upper ++ lower and repeat the first point to close the ring.

Point count: ``2·(n-1)·tessellation_count + 1``.

The returned polygon is ready for a polygon-fill routine: no deduplication or
reordering is required.

Tessellation Density
--------------------
``tessellation_count`` trades accuracy for cost. Where the Nyquist curve bends
sharply between samples (resonances, integrator roll-in) either refine the
frequency grid or raise the count. The short-arc rule of the resolver also
assumes consecutive samples are close; very coarse grids across a rapid phase
change can select the wrong lobe and give a self-intersecting outline.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple, Union, Sequence

import matplotlib.path as mpath
import matplotlib.patches as mpatches

from scaled_relative_graph.core.frequency_response.frequency_response_curve import (
    FrequencyResponseCurve,
)
from .arc_resolver import resolve_arc, _check_tessellation_count


DEFAULT_TESSELLATION_COUNT = 20


@dataclass(frozen=True)
class BoundaryPolygon:
    """
    Closed SRG boundary ring.

    Attributes
    ----------
    points : np.ndarray
        (N, 2) vertex coordinates, upper path then lower path, with
        points[-1] == points[0]
    upper : np.ndarray
        Complex upper path (positive frequencies)
    lower : np.ndarray
        Complex lower path (mirrored, reversed upper path)
    tessellation_count : int
        Points per resolved arc
    """
    points: np.ndarray
    upper: np.ndarray
    lower: np.ndarray
    tessellation_count: int

    def __post_init__(self):
        for name in ('points', 'upper', 'lower'):
            getattr(self, name).setflags(write=False)

    def __len__(self) -> int:
        return self.points.shape[0]

    @property
    def x(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.points[:, 1]

    @property
    def is_closed(self) -> bool:
        return len(self) > 0 and bool(np.array_equal(self.points[0], self.points[-1]))

    def as_complex(self) -> np.ndarray:
        """Vertices as complex numbers x + jy."""
        return self.points[:, 0] + 1j * self.points[:, 1]

    def bounds(self) -> Tuple[float, float, float, float]:
        """Axis-aligned extent (x_min, x_max, y_min, y_max)."""
        return (
            float(self.x.min()), float(self.x.max()),
            float(self.y.min()), float(self.y.max()),
        )

    def as_path(self) -> mpath.Path:
        """Closed matplotlib Path for containment queries and rendering."""
        return mpath.Path(np.asarray(self.points), closed=True)

    def to_patch(self, **kwargs) -> mpatches.Polygon:
        """
        Filled polygon patch for a plotting layer.

        Keyword arguments are forwarded to matplotlib.patches.Polygon
        (facecolor, alpha, edgecolor, label, ...).
        """
        return mpatches.Polygon(np.asarray(self.points), closed=True, **kwargs)


@dataclass
class BuilderConfig:
    """
    Configuration for SRG boundary construction.

    Attributes
    ----------
    tessellation_count : int
        Points per resolved arc (15-30 is usually enough)
    """
    tessellation_count: int = DEFAULT_TESSELLATION_COUNT

    def validate(self) -> None:
        _check_tessellation_count(self.tessellation_count)


def build_upper_path(response: np.ndarray, tessellation_count: int) -> np.ndarray:
    """Tessellated hull arcs over all consecutive pairs, in frequency order."""
    segments = [
        resolve_arc(z1, z2).tessellate(tessellation_count)
        for z1, z2 in zip(response[:-1], response[1:])
    ]
    return np.concatenate(segments)


def build_srg_boundary(
    curve: Union[FrequencyResponseCurve, Sequence[complex], np.ndarray],
    tessellation_count: int = DEFAULT_TESSELLATION_COUNT
) -> BoundaryPolygon:
    """
    Build the closed soft-SRG boundary of a sampled Nyquist locus.

    Parameters
    ----------
    curve : FrequencyResponseCurve or array-like of complex
        H(jω) at strictly increasing ω > 0, at least two samples
    tessellation_count : int
        Points per arc between consecutive samples

    Returns
    -------
    BoundaryPolygon
        Closed ring of 2·(n-1)·tessellation_count + 1 points

    Raises
    ------
    CurveContractError
        Fewer than two samples, non-finite samples or bad frequency ordering
    ValueError
        tessellation_count is not a positive integer
    """
    curve = FrequencyResponseCurve.from_samples(curve)
    _check_tessellation_count(tessellation_count)

    upper = build_upper_path(curve.response, tessellation_count)
    lower = np.conj(upper[::-1])

    ring = np.concatenate([upper, lower])
    points = np.column_stack([ring.real, ring.imag])
    points = np.vstack([points, points[:1]])

    return BoundaryPolygon(
        points=points,
        upper=upper,
        lower=lower,
        tessellation_count=int(tessellation_count),
    )


class SRGBoundaryBuilder:
    """
    Configured front end to build_srg_boundary.

    Holds only its configuration; every build call is independent, so one
    instance may be shared between threads.

    Example Usage
    -------------
    >>> builder = SRGBoundaryBuilder(BuilderConfig(tessellation_count=25))
    >>> boundary = builder.build(curve)
    >>> boundary.is_closed
    True

    Parameters
    ----------
    config : BuilderConfig, optional
        Builder configuration
    """

    def __init__(self, config: BuilderConfig = None):
        self.config = config or BuilderConfig()
        self.config.validate()

    def build(
        self,
        curve: Union[FrequencyResponseCurve, Sequence[complex], np.ndarray]
    ) -> BoundaryPolygon:
        return build_srg_boundary(curve, self.config.tessellation_count)
