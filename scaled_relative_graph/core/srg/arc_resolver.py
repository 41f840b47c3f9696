"""
Arc Segment Resolver for the Soft SRG Boundary

The soft SRG of a SISO LTI system is the hyperbolic convex hull of its
Nyquist locus. In the Poincaré half-plane picture used by SRG theory the
geodesics are circles centred on the real axis, so the
boundary between two consecutive samples z1, z2 is the arc of the unique such
circle passing through both points.

Mathematical Foundation
-----------------------
For a circle centred at (c, 0) with |z1 - c| = |z2 - c|:

$$c = \\frac{|z_2|^2 - |z_1|^2}{2(\\Re z_2 - \\Re z_1)}, \\qquad R = |z_1 - c|$$

The endpoint angles are θ_k = atan2(Im z_k, Re z_k - c). The sweep
Δθ = θ2 - θ1 is wrapped once into [-π, π], so the arc always runs the short
way round. Taking the reflex arc instead produces a self-intersecting
boundary.

When Re z1 ≈ Re z2 the centre runs off to infinity and the arc degenerates
into the vertical segment joining the points.

References
----------
[1] Chaffey, T., Forni, F., Sepulchre, R., "Graphical Nonlinear System
    Analysis", IEEE TAC, 2023.
[2] Krebbekx, J.P.J., Toth, R., Das, A., "Graphical Analysis of Nonlinear
    Multivariable Feedback Systems", arXiv:2507.16513, 2025.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum, auto


# Absolute threshold on |Re z2 - Re z1| below which the centre formula blows up
DEGENERATE_RE_TOL = 1e-14


class ArcKind(Enum):
    """Geometric type of a resolved boundary segment."""
    LINE = auto()       # Equal real parts: straight segment
    CIRCULAR = auto()   # Arc of a circle centred on the real axis


@dataclass(frozen=True)
class Arc:
    """
    Boundary segment between two consecutive Nyquist samples.

    Attributes
    ----------
    kind : ArcKind
        LINE or CIRCULAR
    start : complex
        First endpoint z1
    end : complex
        Second endpoint z2
    center : float
        Real-axis centre c (NaN for LINE)
    radius : float
        Circle radius R (NaN for LINE)
    theta_start : float
        Angle of z1 about the centre [rad] (NaN for LINE)
    sweep : float
        Signed angular sweep Δθ ∈ [-π, π] [rad] (NaN for LINE)
    """
    kind: ArcKind
    start: complex
    end: complex
    center: float = np.nan
    radius: float = np.nan
    theta_start: float = np.nan
    sweep: float = np.nan

    @property
    def theta_end(self) -> float:
        return self.theta_start + self.sweep

    def tessellate(self, tessellation_count: int) -> np.ndarray:
        """
        Discretize the segment into equally spaced points.

        Parameters
        ----------
        tessellation_count : int
            Number of points, endpoints included

        Returns
        -------
        np.ndarray
            Complex points from start to end, length tessellation_count
        """
        _check_tessellation_count(tessellation_count)

        if self.kind is ArcKind.LINE:
            return np.linspace(self.start, self.end, tessellation_count)

        theta = self.theta_start + np.linspace(0.0, 1.0, tessellation_count) * self.sweep
        return (self.center + self.radius * np.cos(theta)) + 1j * (self.radius * np.sin(theta))


def _check_tessellation_count(tessellation_count: int) -> None:
    if isinstance(tessellation_count, bool) or not isinstance(tessellation_count, (int, np.integer)):
        raise ValueError(
            f"tessellation_count must be an integer, got {type(tessellation_count).__name__}"
        )
    if tessellation_count < 1:
        raise ValueError(f"tessellation_count must be >= 1, got {tessellation_count}")


def resolve_arc(z1: complex, z2: complex) -> Arc:
    """
    Resolve the hull boundary segment joining z1 and z2.

    Parameters
    ----------
    z1, z2 : complex
        Consecutive samples of the Nyquist locus

    Returns
    -------
    Arc
        LINE when the real parts coincide, otherwise the short arc of the
        real-axis-centred circle through both points
    """
    z1 = complex(z1)
    z2 = complex(z2)
    dre = z2.real - z1.real

    if abs(dre) < DEGENERATE_RE_TOL:
        return Arc(kind=ArcKind.LINE, start=z1, end=z2)

    c = (abs(z2) ** 2 - abs(z1) ** 2) / (2.0 * dre)
    radius = abs(z1 - c)

    theta1 = np.arctan2(z1.imag, z1.real - c)
    theta2 = np.arctan2(z2.imag, z2.real - c)

    sweep = theta2 - theta1
    if sweep > np.pi:
        sweep -= 2.0 * np.pi
    elif sweep < -np.pi:
        sweep += 2.0 * np.pi

    return Arc(
        kind=ArcKind.CIRCULAR,
        start=z1,
        end=z2,
        center=float(c),
        radius=float(radius),
        theta_start=float(theta1),
        sweep=float(sweep),
    )


def tessellate_arc(z1: complex, z2: complex, tessellation_count: int) -> np.ndarray:
    """Resolve and discretize the segment z1 -> z2 in one call."""
    return resolve_arc(z1, z2).tessellate(tessellation_count)
